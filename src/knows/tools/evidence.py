"""Evidence detail tools.

Detail lookups (papers, guidelines, meeting abstracts) go through the client's
detail cache; summaries and highlights are always fetched.
"""

from collections.abc import Mapping
from typing import Any

from knows.models import ALL_DATA_SCOPES, DataScope, EvidenceDetailRequest, EvidenceRequest
from knows.tools.base import TRANSLATE_PROPERTY, KnowsTool, ToolContext, object_schema, string_property
from knows.utils.batch import run_batch
from knows.utils.validators import (
    get_optional_bool,
    get_required_string,
    indexed,
    iter_required_objects,
)

DATA_SCOPES = [member.value for member in ALL_DATA_SCOPES]


def parse_evidence_request(args: Mapping[str, Any]) -> EvidenceRequest:
    evidence_id = get_required_string(args, "evidence_id")
    translate = get_optional_bool(args, "translate_to_chinese")
    return EvidenceRequest(evidence_id=evidence_id, translate_to_chinese=translate)


def parse_detail_request(
    args: Mapping[str, Any],
    translate: bool | None = None,
) -> EvidenceDetailRequest:
    """Validate an evidence id and its type.

    Unknown types fail here, before any network call, with the list of
    supported types.
    """
    evidence_id = get_required_string(args, "evidence_id")
    kind = DataScope.parse(get_required_string(args, "type"))
    return EvidenceDetailRequest(evidence_id=evidence_id, type=kind, translate_to_chinese=translate)


def parse_batch_evidence_requests(args: Mapping[str, Any]) -> list[EvidenceDetailRequest]:
    translate = get_optional_bool(args, "translate_to_chinese")
    requests = []
    for index, item in iter_required_objects(args, "evidences"):
        with indexed("evidences", index):
            requests.append(parse_detail_request(item, translate))
    return requests


def _evidence_id_schema(translatable: bool = False) -> dict[str, Any]:
    properties: dict[str, Any] = {"evidence_id": string_property()}
    if translatable:
        properties["translate_to_chinese"] = TRANSLATE_PROPERTY
    return object_schema(properties, required=["evidence_id"])


def evidence_summary_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        return await ctx.client.evidence_summary(get_required_string(args, "evidence_id"))

    return KnowsTool(
        name="knows_evidence_summary",
        description="Get AI-generated summary for one evidence item.",
        parameters=_evidence_id_schema(),
        handler=handler,
    )


def evidence_highlight_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        return await ctx.client.evidence_highlight(get_required_string(args, "evidence_id"))

    return KnowsTool(
        name="knows_evidence_highlight",
        description="Get highlighted original evidence snippets for citation and traceability.",
        parameters=_evidence_id_schema(),
        handler=handler,
    )


def get_paper_en_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        return await ctx.client.get_paper_en(parse_evidence_request(args))

    return KnowsTool(
        name="knows_get_paper_en",
        description="Get structured details of an English paper.",
        parameters=_evidence_id_schema(translatable=True),
        handler=handler,
    )


def get_paper_cn_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        return await ctx.client.get_paper_cn(get_required_string(args, "evidence_id"))

    return KnowsTool(
        name="knows_get_paper_cn",
        description="Get structured details of a Chinese paper.",
        parameters=_evidence_id_schema(),
        handler=handler,
    )


def get_guide_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        return await ctx.client.get_guide(parse_evidence_request(args))

    return KnowsTool(
        name="knows_get_guide",
        description="Get detailed content of a clinical guideline.",
        parameters=_evidence_id_schema(translatable=True),
        handler=handler,
    )


def get_meeting_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        return await ctx.client.get_meeting(parse_evidence_request(args))

    return KnowsTool(
        name="knows_get_meeting",
        description="Get detailed content of a medical meeting abstract.",
        parameters=_evidence_id_schema(translatable=True),
        handler=handler,
    )


def get_evidence_detail_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        translate = get_optional_bool(args, "translate_to_chinese")
        return await ctx.client.fetch_evidence_detail(parse_detail_request(args, translate))

    return KnowsTool(
        name="knows_get_evidence_detail",
        description=f"Get details of one evidence item of any type: {DataScope.allowed()}.",
        parameters=object_schema(
            {
                "evidence_id": string_property(),
                "type": string_property("Evidence type.", enum=DATA_SCOPES),
                "translate_to_chinese": TRANSLATE_PROPERTY,
            },
            required=["evidence_id", "type"],
        ),
        handler=handler,
    )


def batch_get_evidence_details_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        requests = parse_batch_evidence_requests(args)
        outcomes = await run_batch(requests, ctx.client.fetch_evidence_detail, ctx.batch_concurrency)
        return [
            {"evidence_id": request.evidence_id, "type": request.type.value, **outcome.to_dict()}
            for request, outcome in zip(requests, outcomes)
        ]

    return KnowsTool(
        name="knows_batch_get_evidence_details",
        description=f"Batch get evidence details for {DataScope.allowed()}.",
        parameters=object_schema(
            {
                "evidences": {
                    "type": "array",
                    "items": object_schema(
                        {
                            "evidence_id": string_property(),
                            "type": string_property(enum=DATA_SCOPES),
                        },
                        required=["evidence_id", "type"],
                    ),
                },
                "translate_to_chinese": TRANSLATE_PROPERTY,
            },
            required=["evidences"],
        ),
        handler=handler,
    )
