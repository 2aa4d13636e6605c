"""RUM tools for an external agent.

RUM_TOOLS describes the tools (name, description, JSON Schema of the
arguments) and create_rum_tool_handlers binds them to a RUMApi. Every
handler validates its arguments, runs one query and answers with a single
text block: a label followed by the JSON-serialized result.
"""

import json
import logging
from typing import Any, Callable, Dict, List

from datadog_api_client.v2.api.rum_api import RUMApi

from rum_tools.datadog import query
from rum_tools.datadog.schema import (
    GetRumApplications,
    GetRumEvents,
    GetRumGroupedEventCount,
    GetRumPagePerformance,
    GetRumPageWaterfall,
    parse_arguments,
    to_input_schema,
)

logger = logging.getLogger(__name__)

ToolResponse = Dict[str, List[Dict[str, str]]]
ToolHandler = Callable[[Dict[str, Any]], ToolResponse]


class UnknownToolError(KeyError):
    """No handler is registered under the requested tool name."""


def _tool(schema, name: str, description: str) -> Dict[str, Any]:
    return {"name": name, "description": description, "inputSchema": to_input_schema(schema)}


RUM_TOOLS: List[Dict[str, Any]] = [
    _tool(
        GetRumApplications,
        'get_rum_applications',
        'Get all RUM applications in the organization',
    ),
    _tool(
        GetRumEvents,
        'get_rum_events',
        'Search and retrieve RUM events from Datadog',
    ),
    _tool(
        GetRumGroupedEventCount,
        'get_rum_grouped_event_count',
        'Search, group and count RUM events by a specified dimension',
    ),
    _tool(
        GetRumPagePerformance,
        'get_rum_page_performance',
        'Get page (view) performance metrics from RUM data',
    ),
    _tool(
        GetRumPageWaterfall,
        'get_rum_page_waterfall',
        'Retrieve RUM page (view) waterfall data filtered by application name and session ID',
    ),
]


def to_json(data: Any) -> str:
    """Compact JSON; dates and enums fall back to str()."""
    return json.dumps(data, default=str, ensure_ascii=False, separators=(',', ':'))


def _text(text: str) -> ToolResponse:
    return {"content": [{"type": "text", "text": text}]}


def _arguments(request: Dict[str, Any]) -> Any:
    return (request.get("params") or {}).get("arguments")


def create_rum_tool_handlers(api: RUMApi) -> Dict[str, ToolHandler]:
    """Bind the RUM tools to an API instance."""

    def get_rum_applications(request):
        parse_arguments(GetRumApplications, _arguments(request))
        applications = query.list_applications(api)
        return _text(f"RUM applications: {to_json(applications)}")

    def get_rum_events(request):
        args = parse_arguments(GetRumEvents, _arguments(request))
        events = query.search_events(api, args.query, args.from_, args.to, args.limit)
        return _text(f"RUM events data: {to_json(events)}")

    def get_rum_grouped_event_count(request):
        args = parse_arguments(GetRumGroupedEventCount, _arguments(request))
        counts = query.grouped_session_counts(api, args.query, args.from_, args.to, args.groupBy)
        return _text(f"Session counts (grouped by {args.groupBy}): {to_json(counts)}")

    def get_rum_page_performance(request):
        args = parse_arguments(GetRumPagePerformance, _arguments(request))
        metrics = query.page_performance(api, args.query, args.from_, args.to, args.metricNames)
        return _text(f"Page performance metrics: {to_json(metrics)}")

    def get_rum_page_waterfall(request):
        args = parse_arguments(GetRumPageWaterfall, _arguments(request))
        events = query.page_waterfall(api, args.applicationName, args.sessionId)
        return _text(f"Waterfall data: {to_json(events)}")

    return {
        'get_rum_applications': get_rum_applications,
        'get_rum_events': get_rum_events,
        'get_rum_grouped_event_count': get_rum_grouped_event_count,
        'get_rum_page_performance': get_rum_page_performance,
        'get_rum_page_waterfall': get_rum_page_waterfall,
    }


def call_tool(handlers: Dict[str, ToolHandler], name: str, arguments: Dict[str, Any]) -> ToolResponse:
    """Dispatch a tool call by name."""
    handler = handlers.get(name)
    if handler is None:
        raise UnknownToolError(f"Unknown tool: {name}")
    logger.info(f"Calling tool {name}")
    return handler({"params": {"name": name, "arguments": arguments}})
