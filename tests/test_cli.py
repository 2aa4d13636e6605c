"""Tests for the command line entry point."""

import json
from datetime import datetime, timezone

import pytest
import yaml

from rum_tools.common import config
from rum_tools.datadog import __main__ as cli
from rum_tools.datadog.query import parse_time

NOW = datetime(2025, 1, 2, tzinfo=timezone.utc)


def test_parse_relative_time():
    assert parse_time("1h", now=NOW) == int(NOW.timestamp()) - 3600
    assert parse_time("30m", now=NOW) == int(NOW.timestamp()) - 1800
    assert parse_time("1d", now=NOW) == int(NOW.timestamp()) - 86400


def test_parse_iso_time():
    assert parse_time("2024-01-01T00:00:00Z") == 1704067200
    assert parse_time("2024-01-01T00:00:00") == 1704067200


def test_parse_unix_time():
    assert parse_time("1704067200") == 1704067200
    assert parse_time("1704067200000") == 1704067200


def test_parse_invalid_time():
    with pytest.raises(ValueError, match="Invalid time format"):
        parse_time("yesterday")


def test_parser():
    parser, _ = cli.build_parser()
    args = parser.parse_args(["rum", "count", "--from-time", "7d", "--group-by", "geo.country"])
    assert args.func is cli.cmd_rum_count
    assert args.query == "*"
    assert args.group_by == "geo.country"

    args = parser.parse_args([
        "rum", "performance", "@view.name:home", "--from-time", "1h",
        "--metric", "view.load_time", "--metric", "view.cls",
    ])
    assert args.metric == ["view.load_time", "view.cls"]


def test_no_command_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 1


def test_errors_exit_with_message(monkeypatch, capsys):
    def fail(args):
        raise ValueError("Missing Datadog credentials")

    monkeypatch.setattr(cli, "cmd_rum_applications", fail)
    with pytest.raises(SystemExit) as exc:
        cli.main(["rum", "applications"])
    assert exc.value.code == 1
    assert "Error: Missing Datadog credentials" in capsys.readouterr().err


def test_tools_command(capsys):
    cli.main(["tools"])
    tools = json.loads(capsys.readouterr().out)
    assert [t["name"] for t in tools][0] == "get_rum_applications"


def test_write_result_yaml(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DATA_DIR", tmp_path)
    data = {"US": 3, "note": "line one\nline two", "at": NOW}

    path = cli.write_result(data, "counts.yaml", "analysis")

    assert path == tmp_path / "analysis" / "datadog" / "counts.yaml"
    assert yaml.safe_load(path.read_text()) == {
        "US": 3,
        "note": "line one\nline two",
        "at": "2025-01-02 00:00:00+00:00",
    }


def test_write_result_json(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DATA_DIR", tmp_path)
    path = cli.write_result([{"id": "app-1"}], "apps.json")
    assert json.loads(path.read_text()) == [{"id": "app-1"}]


def test_package_versions_match():
    import rum_tools
    import rum_tools.datadog

    assert rum_tools.datadog.__version__ == rum_tools.__version__
