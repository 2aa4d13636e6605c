#!/usr/bin/env python3
"""Datadog RUM CLI - Run the RUM tools from the command line.

This CLI provides:
- rum: Query Real User Monitoring data (applications, events, grouped
  session counts, page performance, session waterfall)
- tools: Print the RUM tool definitions as JSON
"""

import argparse
import json
import sys
import logging
from pathlib import Path

import yaml

# Setup logging
handler = logging.StreamHandler(sys.stdout)
logging.basicConfig(
    format='%(asctime)s - %(levelname)s - %(message)s',
    level=logging.INFO,
    handlers=[handler],
    force=True
)

logger = logging.getLogger(__name__)


class _Dumper(yaml.SafeDumper):
    pass


def _str_representer(dumper, data):
    if '\n' in data:
        return dumper.represent_scalar('tag:yaml.org,2002:str', data, style='|')
    return dumper.represent_scalar('tag:yaml.org,2002:str', data)


_Dumper.add_representer(str, _str_representer)


def write_result(data, output_file: str, working_folder=None) -> Path:
    """Write a structured result to the data directory as YAML or JSON."""
    from rum_tools.common.config import get_output_path

    output_path = get_output_path(output_file, working_folder)
    with open(output_path, 'w') as f:
        if output_path.suffix in ('.yaml', '.yml'):
            # Round-trip through JSON so dates and enums become plain strings
            plain = json.loads(json.dumps(data, default=str))
            yaml.dump(plain, f, Dumper=_Dumper, default_flow_style=False,
                      sort_keys=False, allow_unicode=True)
        else:
            json.dump(data, f, indent=2, default=str)

    logger.info(f"✓ Results saved to: {output_path}")
    return output_path


def _run(args, label: str, fetch):
    """Open the API, fetch a result, print it and optionally save it."""
    from datadog_api_client.v2.api.rum_api import RUMApi
    from rum_tools.datadog.query import open_rum_api
    from rum_tools.datadog.tools import to_json

    with open_rum_api() as api_client:
        result = fetch(RUMApi(api_client))

    print(f"{label}: {to_json(result)}")

    if args.output:
        write_result(result, args.output, args.working_folder)


def _time_window(args):
    from datetime import datetime, timezone
    from rum_tools.datadog.query import parse_time

    from_ts = parse_time(args.from_time)
    to_ts = parse_time(args.to_time) if args.to_time else int(datetime.now(timezone.utc).timestamp())
    return from_ts, to_ts


def cmd_rum_applications(args):
    """List RUM applications."""
    from rum_tools.datadog.query import list_applications

    _run(args, "RUM applications", list_applications)


def cmd_rum_events(args):
    """Search raw RUM events."""
    from rum_tools.datadog.query import search_events

    if args.limit > 1000:
        logger.warning(f"Limit {args.limit} exceeds maximum of 1000. Setting to 1000.")
        args.limit = 1000

    from_ts, to_ts = _time_window(args)
    _run(args, "RUM events data",
         lambda api: search_events(api, args.query, from_ts, to_ts, args.limit))


def cmd_rum_count(args):
    """Count distinct sessions grouped by an attribute."""
    from rum_tools.datadog.query import grouped_session_counts

    from_ts, to_ts = _time_window(args)
    _run(args, f"Session counts (grouped by {args.group_by})",
         lambda api: grouped_session_counts(api, args.query, from_ts, to_ts, args.group_by))


def cmd_rum_performance(args):
    """Summarize page performance metrics."""
    from rum_tools.datadog.query import page_performance
    from rum_tools.datadog.schema import DEFAULT_METRIC_NAMES

    metric_names = args.metric or list(DEFAULT_METRIC_NAMES)
    from_ts, to_ts = _time_window(args)
    _run(args, "Page performance metrics",
         lambda api: page_performance(api, args.query, from_ts, to_ts, metric_names))


def cmd_rum_waterfall(args):
    """Fetch every event of a session."""
    from rum_tools.datadog.query import page_waterfall

    _run(args, "Waterfall data",
         lambda api: page_waterfall(api, args.application, args.session_id))


def cmd_tools(args):
    """Print the RUM tool definitions."""
    from rum_tools.datadog.tools import RUM_TOOLS

    print(json.dumps(RUM_TOOLS, indent=2))


def _add_time_args(parser):
    parser.add_argument(
        '--from-time',
        required=True,
        help='Start time (relative: "30m"/"1h"/"7d", ISO: "2025-01-01T00:00:00Z", or Unix timestamp)'
    )
    parser.add_argument(
        '--to-time',
        help='End time (default: now). Same formats as --from-time'
    )


def _add_output_args(parser):
    parser.add_argument(
        '--working-folder',
        metavar='FOLDER',
        help='Working folder name (e.g., "2026-02-03_analysis"). Saves to data/{folder}/datadog/{output}'
    )
    parser.add_argument(
        '--output', '-o',
        metavar='FILENAME',
        help='Also save the result (e.g., "results.json" or "results.yaml")'
    )


def build_parser():
    """Build the argument parser (returns the top-level and rum parsers)."""
    parser = argparse.ArgumentParser(
        prog='rum-tools',
        description='Datadog RUM CLI - Query Real User Monitoring data',
        epilog='For detailed help: rum-tools rum --help'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ===== RUM COMMANDS =====
    rum_parser = subparsers.add_parser(
        'rum',
        help='RUM (Real User Monitoring) commands',
        description='''Query Real User Monitoring data from Datadog.

ENVIRONMENT VARIABLES REQUIRED:
  DD_API_KEY         Datadog API key
  DD_APP_KEY         Datadog Application key
  DD_SITE            Datadog site (default: datadoghq.com)

EXAMPLES:
  rum-tools rum applications
  rum-tools rum events "@type:error" --from-time 24h --limit 50
  rum-tools rum count "*" --from-time 7d --group-by geo.country
  rum-tools rum performance "@view.name:*checkout*" --from-time 1d \\
    --metric view.load_time --metric view.first_contentful_paint
  rum-tools rum waterfall my-app 0f1e2d3c-... -o session.yaml
''',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    rum_subparsers = rum_parser.add_subparsers(dest='rum_command', help='RUM subcommands')

    apps_parser = rum_subparsers.add_parser('applications', help='List RUM applications')
    _add_output_args(apps_parser)
    apps_parser.set_defaults(func=cmd_rum_applications)

    events_parser = rum_subparsers.add_parser('events', help='Search raw RUM events')
    events_parser.add_argument('query', help='RUM query string (Datadog query syntax)')
    _add_time_args(events_parser)
    events_parser.add_argument(
        '--limit',
        type=int,
        default=100,
        help='Maximum number of events to return (default: 100, max: 1000)'
    )
    _add_output_args(events_parser)
    events_parser.set_defaults(func=cmd_rum_events)

    count_parser = rum_subparsers.add_parser('count', help='Count distinct sessions grouped by an attribute')
    count_parser.add_argument('query', nargs='?', default='*', help='RUM query string (default: "*", no filter)')
    _add_time_args(count_parser)
    count_parser.add_argument(
        '--group-by',
        default='application.name',
        help='Attribute path to group by (default: application.name)'
    )
    _add_output_args(count_parser)
    count_parser.set_defaults(func=cmd_rum_count)

    perf_parser = rum_subparsers.add_parser('performance', help='Summarize page (view) performance metrics')
    perf_parser.add_argument('query', nargs='?', default='*', help='Additional view filter (default: "*")')
    _add_time_args(perf_parser)
    perf_parser.add_argument(
        '--metric',
        action='append',
        metavar='PATH',
        help='Metric attribute path, repeatable (default: view.load_time, '
             'view.first_contentful_paint, view.largest_contentful_paint)'
    )
    _add_output_args(perf_parser)
    perf_parser.set_defaults(func=cmd_rum_performance)

    waterfall_parser = rum_subparsers.add_parser('waterfall', help='Fetch all events of a session')
    waterfall_parser.add_argument('application', help='Application name')
    waterfall_parser.add_argument('session_id', help='Session ID')
    _add_output_args(waterfall_parser)
    waterfall_parser.set_defaults(func=cmd_rum_waterfall)

    # ===== TOOL DEFINITIONS =====
    tools_parser = subparsers.add_parser('tools', help='Print the RUM tool definitions as JSON')
    tools_parser.set_defaults(func=cmd_tools)

    return parser, rum_parser


def main(argv=None):
    """Main CLI entry point."""
    parser, rum_parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'rum' and not hasattr(args, 'func'):
        rum_parser.print_help()
        sys.exit(1)

    # Execute command
    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
