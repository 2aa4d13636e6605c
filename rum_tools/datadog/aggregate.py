"""Client-side aggregation over RUM events.

- count_sessions_by_group: distinct sessions per value of an attribute
- summarize_metrics: count/avg/min/max of numeric attributes
"""

import json
import logging
from typing import Any, Dict, Iterable, List, Set

from rum_tools.datadog.attributes import get_attrs, lookup, resolve_path, split_path

logger = logging.getLogger(__name__)

UNKNOWN_GROUP = "unknown"
SESSION_ID_PATH = ("session", "id")


def _group_key(value: Any) -> str:
    """Stringify a resolved attribute value.

    Scalars use their plain text; null, booleans and containers are written
    as JSON.
    """
    if value is None or isinstance(value, (bool, dict, list)):
        return json.dumps(value, default=str, ensure_ascii=False, separators=(',', ':'))
    return str(value)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a metric sample
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def count_sessions_by_group(events: Iterable[Any], group_by: str) -> Dict[str, int]:
    """Count distinct session ids per value of the ``group_by`` attribute path.

    Events without attributes are skipped. Events where the path cannot be
    resolved fall under "unknown". A group whose events carry no session id
    is still reported, with a count of 0.
    """
    group_path = split_path(group_by)
    sessions: Dict[str, Set[str]] = {}

    for event in events:
        attrs = get_attrs(event)
        if attrs is None:
            continue

        result = resolve_path(attrs, group_path)
        group_value = _group_key(result.value) if result.found else UNKNOWN_GROUP
        group_sessions = sessions.setdefault(group_value, set())

        session_id = lookup(attrs, SESSION_ID_PATH)
        # ids that are not scalars cannot be counted
        if session_id and isinstance(session_id, (str, int, float)):
            group_sessions.add(session_id)

    logger.debug(f"Grouped events by {group_by} into {len(sessions)} groups")
    return {key: len(ids) for key, ids in sessions.items()}


def summarize(values: List[float]) -> Dict[str, float]:
    """Compute avg/min/max/count of a series; an empty series is all zeros."""
    if not values:
        return {"avg": 0, "min": 0, "max": 0, "count": 0}
    return {
        "avg": sum(values) / len(values),
        "min": min(values),
        "max": max(values),
        "count": len(values),
    }


def summarize_metrics(events: Iterable[Any], metric_names: List[str]) -> Dict[str, Dict[str, float]]:
    """Summarize numeric attributes across events, one entry per metric name.

    Only values that are numbers at the resolved path are collected; strings
    (even numeric-looking ones), booleans and missing values are skipped.
    """
    metric_paths = {name: split_path(name) for name in metric_names}
    series: Dict[str, List[float]] = {name: [] for name in metric_names}

    for event in events:
        attrs = get_attrs(event)
        if attrs is None:
            continue

        for name, path in metric_paths.items():
            value = lookup(attrs, path)
            if _is_number(value):
                series[name].append(value)

    return {name: summarize(values) for name, values in series.items()}
