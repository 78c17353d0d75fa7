"""History listing tools."""

from collections.abc import Mapping
from typing import Any

from knows.models import HistoryRequest
from knows.tools.base import KnowsTool, ToolContext, object_schema
from knows.utils.validators import get_optional_int

HISTORY_SCHEMA = object_schema(
    {
        "from_time": {"type": "integer", "description": "Start of the time range."},
        "to_time": {"type": "integer", "description": "End of the time range."},
        "page": {"type": "integer"},
        "page_size": {"type": "integer"},
    }
)


def parse_history_request(args: Mapping[str, Any]) -> HistoryRequest:
    return HistoryRequest(
        from_time=get_optional_int(args, "from_time"),
        to_time=get_optional_int(args, "to_time"),
        page=get_optional_int(args, "page"),
        page_size=get_optional_int(args, "page_size"),
    )


def list_question_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        return await ctx.client.list_question(parse_history_request(args))

    return KnowsTool(
        name="knows_list_question",
        description="List historical question records.",
        parameters=HISTORY_SCHEMA,
        handler=handler,
    )


def list_interpretation_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        return await ctx.client.list_interpretation(parse_history_request(args))

    return KnowsTool(
        name="knows_list_interpretation",
        description="List historical interpretation records.",
        parameters=HISTORY_SCHEMA,
        handler=handler,
    )
