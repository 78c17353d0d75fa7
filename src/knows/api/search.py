"""KnowS search, answer and tagging functionality."""

from typing import TYPE_CHECKING, Any

import structlog

from knows.config.constants import AI_SEARCH_PATH, ANSWER_PATH, AUTO_TAGGING_PATH
from knows.models import AnswerRequest, AutoTaggingRequest, SearchRequest

if TYPE_CHECKING:
    from knows.api.client import KnowsClient

logger = structlog.get_logger(__name__)


async def search_evidence(client: "KnowsClient", request: SearchRequest) -> Any:
    """Search clinical evidence for a question.

    Args:
        client: KnowS client instance
        request: Question and data scopes to search

    Returns:
        Search result including the question_id and evidence list
    """
    logger.info(
        "Searching evidence",
        question=request.question[:100],
        data_scope=[scope.value for scope in request.data_scope],
    )

    result = await client.post_json(AI_SEARCH_PATH, request.to_payload())

    if isinstance(result, dict):
        logger.info(
            "Search completed",
            question_id=result.get("question_id"),
            evidence_count=len(result.get("evidences") or []),
        )

    return result


async def generate_answer(client: "KnowsClient", request: AnswerRequest) -> Any:
    """Generate a scenario-based answer for a searched question."""
    logger.info(
        "Generating answer",
        question_id=request.question_id,
        answer_type=request.answer_type.value,
    )
    return await client.post_json(ANSWER_PATH, request.to_payload())


async def auto_tag(client: "KnowsClient", request: AutoTaggingRequest) -> Any:
    """Extract tags and structured elements from text or an evidence item."""
    logger.info(
        "Auto tagging",
        tagging_type=request.tagging_type,
        has_content=bool(request.content),
        evidence_id=request.evidence_id or None,
    )
    return await client.post_json(AUTO_TAGGING_PATH, request.to_payload())
