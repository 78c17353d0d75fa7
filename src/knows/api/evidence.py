"""KnowS evidence lookups."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import structlog

from knows.config.constants import (
    EVIDENCE_HIGHLIGHT_PATH,
    EVIDENCE_SUMMARY_PATH,
    GET_GUIDE_PATH,
    GET_MEETING_PATH,
    GET_PAPER_CN_PATH,
    GET_PAPER_EN_PATH,
)
from knows.models import DataScope, EvidenceDetailRequest, EvidenceRequest
from knows.utils.cache import DetailCache

if TYPE_CHECKING:
    from knows.api.client import KnowsClient

logger = structlog.get_logger(__name__)

DETAIL_PATHS: dict[DataScope, str] = {
    DataScope.PAPER: GET_PAPER_EN_PATH,
    DataScope.PAPER_CN: GET_PAPER_CN_PATH,
    DataScope.GUIDE: GET_GUIDE_PATH,
    DataScope.MEETING: GET_MEETING_PATH,
}


async def get_evidence_summary(client: "KnowsClient", evidence_id: str) -> Any:
    """Get the AI-generated summary of one evidence item."""
    return await client.post_json(EVIDENCE_SUMMARY_PATH, {"evidence_id": evidence_id})


async def get_evidence_highlight(client: "KnowsClient", evidence_id: str) -> Any:
    """Get highlighted source snippets of one evidence item."""
    return await client.post_json(EVIDENCE_HIGHLIGHT_PATH, {"evidence_id": evidence_id})


async def fetch_detail(
    client: "KnowsClient",
    kind: DataScope,
    request: EvidenceRequest,
) -> Any:
    """Fetch structured details of one evidence item, using the detail cache.

    Args:
        client: KnowS client instance
        kind: Evidence type, selecting the endpoint
        request: Evidence identifier and optional translation flag

    Returns:
        Evidence details, from cache when a fresh entry exists
    """
    translate = request.translate_key if kind.supports_translation else False
    cache_key = DetailCache.make_key(kind.value, request.evidence_id, translate)

    cached, found = client.cache.get(cache_key)
    if found:
        logger.info("Evidence detail served from cache", kind=kind.value, evidence_id=request.evidence_id)
        return cached

    payload = request.to_payload()
    if not kind.supports_translation:
        payload.pop("translate_to_chinese", None)

    logger.info("Fetching evidence detail", kind=kind.value, evidence_id=request.evidence_id)

    data = await client.post_json(DETAIL_PATHS[kind], payload)
    client.cache.set(cache_key, data)

    return data


async def fetch_evidence_detail(client: "KnowsClient", request: EvidenceDetailRequest) -> Any:
    """Fetch evidence details, dispatching on ``request.type``.

    Args:
        client: KnowS client instance
        request: Evidence identifier, type and optional translation flag

    Returns:
        Evidence details from the type-specific lookup
    """
    handlers: dict[DataScope, Callable[[EvidenceRequest], Awaitable[Any]]] = {
        DataScope.PAPER: client.get_paper_en,
        DataScope.PAPER_CN: lambda lookup: client.get_paper_cn(lookup.evidence_id),
        DataScope.GUIDE: client.get_guide,
        DataScope.MEETING: client.get_meeting,
    }

    return await handlers[request.type](request.for_kind())
