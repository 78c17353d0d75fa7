"""KnowS history listings."""

from typing import TYPE_CHECKING, Any

from knows.config.constants import LIST_INTERPRETATION_PATH, LIST_QUESTION_PATH
from knows.models import HistoryRequest

if TYPE_CHECKING:
    from knows.api.client import KnowsClient


async def list_questions(client: "KnowsClient", request: HistoryRequest) -> Any:
    return await client.post_json(LIST_QUESTION_PATH, request.to_payload())


async def list_interpretations(client: "KnowsClient", request: HistoryRequest) -> Any:
    return await client.post_json(LIST_INTERPRETATION_PATH, request.to_payload())
