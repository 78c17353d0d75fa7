from knows.api.client import KnowsAPIError, KnowsClient
from knows.api.evidence import fetch_detail, fetch_evidence_detail
from knows.api.search import search_evidence

__all__ = [
    "KnowsAPIError",
    "KnowsClient",
    "fetch_detail",
    "fetch_evidence_detail",
    "search_evidence",
]
