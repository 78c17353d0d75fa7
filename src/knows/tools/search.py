"""Evidence search and answer tools."""

from collections.abc import Mapping
from typing import Any

from knows.models import ALL_DATA_SCOPES, AnswerRequest, AnswerType, DataScope, SearchRequest
from knows.tools.base import KnowsTool, ToolContext, object_schema, string_property
from knows.utils.batch import run_batch
from knows.utils.validators import (
    get_optional_string_array,
    get_required_string,
    indexed,
    iter_required_objects,
)

ANSWER_TYPES = [member.value for member in AnswerType]
DATA_SCOPES = [member.value for member in ALL_DATA_SCOPES]


def parse_search_request(
    args: Mapping[str, Any],
    default_scope: tuple[DataScope, ...],
) -> SearchRequest:
    """Validate search arguments, falling back to the default data scope."""
    question = get_required_string(args, "question")
    scope = DataScope.parse_many(get_optional_string_array(args, "data_scope"))
    return SearchRequest(question=question, data_scope=tuple(scope) or default_scope)


def parse_answer_request(args: Mapping[str, Any]) -> AnswerRequest:
    question_id = get_required_string(args, "question_id")
    answer_type = AnswerType.parse(get_required_string(args, "answer_type"))
    return AnswerRequest(question_id=question_id, answer_type=answer_type)


def parse_batch_answer_requests(args: Mapping[str, Any]) -> list[AnswerRequest]:
    """Validate every element of ``requests``; any bad element fails the call."""
    requests = []
    for index, item in iter_required_objects(args, "requests"):
        with indexed("requests", index):
            requests.append(parse_answer_request(item))
    return requests


def ai_search_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        request = parse_search_request(args, ctx.default_data_scope)
        return await ctx.client.ai_search(request)

    return KnowsTool(
        name="knows_ai_search",
        description=(
            "Search clinical evidence and return a question_id plus evidence list. "
            "This should be used before answer generation."
        ),
        parameters=object_schema(
            {
                "question": string_property("Question text to search evidence for."),
                "data_scope": {
                    "type": "array",
                    "description": f"Optional evidence types. Allowed: {DataScope.allowed()}.",
                    "items": string_property(enum=DATA_SCOPES),
                },
            },
            required=["question"],
        ),
        handler=handler,
    )


def answer_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        return await ctx.client.answer(parse_answer_request(args))

    return KnowsTool(
        name="knows_answer",
        description="Generate one scenario-based answer from a question_id returned by knows_ai_search.",
        parameters=object_schema(
            {
                "question_id": string_property("question_id returned from knows_ai_search."),
                "answer_type": string_property("Answer style.", enum=ANSWER_TYPES),
            },
            required=["question_id", "answer_type"],
        ),
        handler=handler,
    )


def batch_answer_tool(ctx: ToolContext) -> KnowsTool:
    async def handler(args: Mapping[str, Any]) -> Any:
        requests = parse_batch_answer_requests(args)
        outcomes = await run_batch(requests, ctx.client.answer, ctx.batch_concurrency)
        return [
            {"question_id": request.question_id, **outcome.to_dict()}
            for request, outcome in zip(requests, outcomes)
        ]

    return KnowsTool(
        name="knows_batch_answer",
        description="Batch generate answers for multiple question_id values concurrently.",
        parameters=object_schema(
            {
                "requests": {
                    "type": "array",
                    "items": object_schema(
                        {
                            "question_id": string_property(),
                            "answer_type": string_property(enum=ANSWER_TYPES),
                        },
                        required=["question_id", "answer_type"],
                    ),
                },
            },
            required=["requests"],
        ),
        handler=handler,
    )
