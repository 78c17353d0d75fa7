from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from knows.models.scope import AnswerType, DataScope


class KnowsRequest(BaseModel):
    """Base class for validated KnowS requests."""

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> dict[str, Any]:
        """Convert to the JSON body sent to the KnowS API."""
        return self.model_dump(mode="json", exclude_none=True)


class SearchRequest(KnowsRequest):
    """Evidence search for a clinical question."""

    question: str = Field(..., min_length=1, description="Question text to search evidence for")
    data_scope: tuple[DataScope, ...] = Field(..., min_length=1, description="Evidence types to search")

    def to_payload(self) -> dict[str, Any]:
        return {
            "query": self.question,
            "data_scope": [scope.value for scope in self.data_scope],
        }


class AnswerRequest(KnowsRequest):
    """Answer generation for a question_id returned by a search."""

    question_id: str = Field(..., min_length=1)
    answer_type: AnswerType


class EvidenceRequest(KnowsRequest):
    """Single evidence lookup by identifier."""

    evidence_id: str = Field(..., min_length=1)
    translate_to_chinese: bool | None = Field(
        default=None,
        description="Translate title/abstract; omitted from the payload when None",
    )

    @property
    def translate_key(self) -> bool:
        """Translation flag as used in cache keys, absent counting as False."""
        return bool(self.translate_to_chinese)


class EvidenceDetailRequest(EvidenceRequest):
    """Evidence lookup dispatched on the evidence type."""

    type: DataScope

    def for_kind(self) -> EvidenceRequest:
        """Drop the discriminator, and the translation flag where unsupported."""
        translate = self.translate_to_chinese if self.type.supports_translation else None
        return EvidenceRequest(evidence_id=self.evidence_id, translate_to_chinese=translate)


class AutoTaggingRequest(KnowsRequest):
    """Tag extraction from free text or an evidence item."""

    tagging_type: str = Field(..., min_length=1)
    content: str = ""
    evidence_id: str = ""

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"tagging_type": self.tagging_type}
        if self.content:
            payload["content"] = self.content
        if self.evidence_id:
            payload["evidence_id"] = self.evidence_id
        return payload


class HistoryRequest(KnowsRequest):
    """Paged listing of historical records, optionally bounded by time."""

    from_time: int | None = None
    to_time: int | None = None
    page: int | None = None
    page_size: int | None = None
