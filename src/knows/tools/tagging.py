"""Auto-tagging tool."""

from collections.abc import Mapping
from typing import Any

from knows.models import AutoTaggingRequest
from knows.tools.base import KnowsTool, ToolContext, object_schema, string_property
from knows.utils.validators import get_optional_string, get_required_string


def parse_auto_tagging_request(args: Mapping[str, Any]) -> AutoTaggingRequest:
    return AutoTaggingRequest(
        tagging_type=get_required_string(args, "tagging_type"),
        content=get_optional_string(args, "content"),
        evidence_id=get_optional_string(args, "evidence_id"),
    )


def auto_tagging_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        return await ctx.client.auto_tagging(parse_auto_tagging_request(args))

    return KnowsTool(
        name="knows_auto_tagging",
        description="Automatically extract tags and structured elements from text or evidence.",
        parameters=object_schema(
            {
                "content": string_property("Free text to tag."),
                "evidence_id": string_property("Evidence item to tag."),
                "tagging_type": string_property("Kind of tagging to perform."),
            },
            required=["tagging_type"],
        ),
        handler=handler,
    )
