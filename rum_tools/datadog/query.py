"""RUM queries using the Datadog API.

Each function takes a RUMApi (or anything exposing the same two methods),
issues a single request and returns plain dicts.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from datadog_api_client import ApiClient
from datadog_api_client.v2.api.rum_api import RUMApi
from datadog_api_client.v2.model.rum_sort import RUMSort

from rum_tools.common.config import get_api_config
from rum_tools.datadog.aggregate import count_sessions_by_group, summarize_metrics
from rum_tools.datadog.attributes import to_plain

logger = logging.getLogger(__name__)

WILDCARD = "*"
VIEW_FILTER = "@type:view"
PAGE_LIMIT = 2000


class NoDataError(RuntimeError):
    """The RUM API answered without a data field."""


def open_rum_api() -> ApiClient:
    """Open an API client configured from the environment.

    Use as a context manager and wrap with RUMApi.
    """
    return ApiClient(get_api_config())


def epoch_to_datetime(seconds: int) -> datetime:
    """Convert Unix epoch seconds to the UTC datetime the API client expects."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def parse_time(time_str: str, now: Optional[datetime] = None) -> int:
    """Parse a time string to Unix epoch seconds.

    Supports:
    - Relative times: "30m", "1h", "24h", "7d"
    - ISO format: "2025-01-01T00:00:00Z"
    - Unix timestamp: "1704067200" (milliseconds are accepted too)
    """
    now = now or datetime.now(timezone.utc)

    # Try relative time
    units = {'m': timedelta(minutes=1), 'h': timedelta(hours=1), 'd': timedelta(days=1)}
    if time_str[-1:] in units and time_str[:-1].isdigit():
        dt = now - int(time_str[:-1]) * units[time_str[-1]]
        return int(dt.timestamp())

    # Try Unix timestamp
    if time_str.isdigit():
        timestamp = int(time_str)
        # 13 digits means milliseconds
        if len(time_str) >= 13:
            return timestamp // 1000
        return timestamp

    # Try ISO format
    try:
        dt = datetime.fromisoformat(time_str.replace('Z', '+00:00'))
    except ValueError:
        raise ValueError(
            f"Invalid time format: {time_str}. Use relative (30m, 1h, 7d), ISO (2025-01-01T00:00:00Z), or Unix timestamp"
        ) from None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


def _list_events(
    api: RUMApi,
    page_limit: int,
    query: Optional[str] = None,
    from_ts: Optional[int] = None,
    to_ts: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Run one list_rum_events call, oldest events first."""
    kwargs: Dict[str, Any] = {"sort": RUMSort.TIMESTAMP_ASCENDING, "page_limit": page_limit}
    if query is not None:
        kwargs["filter_query"] = query
    if from_ts is not None:
        kwargs["filter_from"] = epoch_to_datetime(from_ts)
    if to_ts is not None:
        kwargs["filter_to"] = epoch_to_datetime(to_ts)

    logger.info(f"Querying RUM events...")
    logger.info(f"  Query: {query if query is not None else '(none)'}")
    if from_ts is not None and to_ts is not None:
        logger.info(f"  From: {kwargs['filter_from'].isoformat()}")
        logger.info(f"  To: {kwargs['filter_to'].isoformat()}")
    logger.info(f"  Limit: {page_limit}")

    try:
        response = api.list_rum_events(**kwargs)
    except Exception as e:
        logger.error(f"Failed to query RUM events: {e}")
        raise

    data = getattr(response, 'data', None)
    if data is None:
        raise NoDataError("No RUM events data returned")

    events = [to_plain(event) for event in data]
    logger.info(f"✓ Retrieved {len(events)} RUM events")
    return events


def list_applications(api: RUMApi) -> List[Dict[str, Any]]:
    """List all RUM applications in the organization."""
    logger.info("Listing RUM applications...")
    try:
        response = api.get_rum_applications()
    except Exception as e:
        logger.error(f"Failed to list RUM applications: {e}")
        raise

    data = getattr(response, 'data', None)
    if data is None:
        raise NoDataError("No RUM applications data returned")

    applications = [to_plain(app) for app in data]
    logger.info(f"✓ Retrieved {len(applications)} RUM applications")
    return applications


def search_events(api: RUMApi, query: str, from_ts: int, to_ts: int, limit: int) -> List[Dict[str, Any]]:
    """Search raw RUM events; the query is sent as-is."""
    return _list_events(api, limit, query=query, from_ts=from_ts, to_ts=to_ts)


def grouped_session_counts(api: RUMApi, query: str, from_ts: int, to_ts: int, group_by: str) -> Dict[str, int]:
    """Count distinct sessions per value of ``group_by``.

    A wildcard query sends no filter at all.
    """
    events = _list_events(
        api,
        PAGE_LIMIT,
        query=query if query != WILDCARD else None,
        from_ts=from_ts,
        to_ts=to_ts,
    )
    return count_sessions_by_group(events, group_by)


def view_filter(query: str) -> str:
    """Restrict a query to view events."""
    return f"{VIEW_FILTER} {query}" if query != WILDCARD else VIEW_FILTER


def page_performance(
    api: RUMApi, query: str, from_ts: int, to_ts: int, metric_names: List[str]
) -> Dict[str, Dict[str, float]]:
    """Summarize view performance metrics (count/avg/min/max per metric)."""
    events = _list_events(api, PAGE_LIMIT, query=view_filter(query), from_ts=from_ts, to_ts=to_ts)
    return summarize_metrics(events, metric_names)


def waterfall_filter(application_name: str, session_id: str) -> str:
    return f"@application.name:{application_name} @session.id:{session_id}"


def page_waterfall(api: RUMApi, application_name: str, session_id: str) -> List[Dict[str, Any]]:
    """Fetch every event of one session, oldest first, with no time bound."""
    return _list_events(api, PAGE_LIMIT, query=waterfall_filter(application_name, session_id))
