"""Datadog RUM tools - Query Real User Monitoring data for an external agent.

This module provides:
- tools: RUM tool definitions and their handlers
- query: Single-request RUM queries using the Datadog API
- aggregate: Grouped session counts and metric summaries
- attributes: Nested attribute path resolution

Usage as CLI:
    python -m rum_tools.datadog rum events "@type:view" --from-time 1h

Usage programmatically:
    from rum_tools.datadog import RUM_TOOLS, create_rum_tool_handlers
"""

from .tools import RUM_TOOLS, UnknownToolError, call_tool, create_rum_tool_handlers
from .query import NoDataError

__version__ = "1.0.0"
__all__ = [
    'RUM_TOOLS',
    'NoDataError',
    'UnknownToolError',
    'call_tool',
    'create_rum_tool_handlers',
]
