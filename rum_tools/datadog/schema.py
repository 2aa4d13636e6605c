"""Argument schemas for the RUM tools."""

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_METRIC_NAMES = [
    "view.load_time",
    "view.first_contentful_paint",
    "view.largest_contentful_paint",
]

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class _ToolArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True, strict=True)


class _TimeRangeArgs(_ToolArgs):
    """Start/end of the search window, in Unix epoch seconds."""

    from_: int = Field(alias="from", description="Start time in epoch seconds")
    to: int = Field(description="End time in epoch seconds")


class GetRumApplications(_ToolArgs):
    pass


class GetRumEvents(_TimeRangeArgs):
    query: str = Field(default="", description="Datadog RUM query string")
    limit: int = Field(default=100, description="Maximum number of events to return. Default is 100.")


class GetRumGroupedEventCount(_TimeRangeArgs):
    query: str = Field(default="*", description="Additional query filter for RUM search. Defaults to '*' (all events)")
    groupBy: str = Field(
        default="application.name",
        description="Dimension to group results by. Default is application.name",
    )


class GetRumPagePerformance(_TimeRangeArgs):
    query: str = Field(default="*", description="Additional query filter for RUM search. Defaults to '*' (all events)")
    metricNames: List[str] = Field(
        default=list(DEFAULT_METRIC_NAMES),
        description="Array of metric names to retrieve (e.g., 'view.load_time', 'view.first_contentful_paint')",
    )


class GetRumPageWaterfall(_ToolArgs):
    applicationName: str = Field(description="Application name to filter events")
    sessionId: str = Field(description="Session ID to filter events")


def parse_arguments(schema: Type[SchemaT], arguments: Optional[Dict[str, Any]]) -> SchemaT:
    """Validate tool arguments against a schema.

    Raises pydantic.ValidationError when the arguments don't conform.
    """
    return schema.model_validate(arguments if arguments is not None else {})


def to_input_schema(schema: Type[BaseModel]) -> Dict[str, Any]:
    """JSON Schema of a tool's arguments, using wire names ('from')."""
    json_schema = schema.model_json_schema(by_alias=True)
    json_schema.pop("title", None)
    json_schema.setdefault("properties", {})
    json_schema["type"] = "object"
    return json_schema
