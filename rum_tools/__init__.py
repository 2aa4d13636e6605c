"""
RUM Tools

Tools for querying Datadog Real User Monitoring data:
- datadog: RUM tool definitions and handlers, queries, client-side aggregation
- common: Shared configuration (credentials, output paths)
"""

__version__ = '1.0.0'
