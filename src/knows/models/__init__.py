from knows.models.scope import ALL_DATA_SCOPES, AnswerType, DataScope
from knows.models.requests import (
    AnswerRequest,
    AutoTaggingRequest,
    EvidenceDetailRequest,
    EvidenceRequest,
    HistoryRequest,
    KnowsRequest,
    SearchRequest,
)
from knows.models.result import ToolResult

__all__ = [
    "ALL_DATA_SCOPES",
    "AnswerType",
    "DataScope",
    "AnswerRequest",
    "AutoTaggingRequest",
    "EvidenceDetailRequest",
    "EvidenceRequest",
    "HistoryRequest",
    "KnowsRequest",
    "SearchRequest",
    "ToolResult",
]
