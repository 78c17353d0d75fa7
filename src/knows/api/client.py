"""KnowS API client."""

import json
from typing import Any

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from knows.api.evidence import (
    fetch_detail,
    fetch_evidence_detail,
    get_evidence_highlight,
    get_evidence_summary,
)
from knows.api.history import list_interpretations, list_questions
from knows.api.search import auto_tag, generate_answer, search_evidence
from knows.config.constants import (
    API_KEY_HEADER,
    DEFAULT_MAX_RETRIES,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRY_BACKOFF,
    MAX_ERROR_BODY_LENGTH,
    MAX_RETRY_BACKOFF,
)
from knows.config.settings import KnowsSettings
from knows.models import (
    AnswerRequest,
    AutoTaggingRequest,
    DataScope,
    EvidenceDetailRequest,
    EvidenceRequest,
    HistoryRequest,
    SearchRequest,
)
from knows.utils.cache import DetailCache

logger = structlog.get_logger(__name__)


class KnowsAPIError(Exception):
    """Raised when a KnowS API call fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        retryable: bool = False,
    ):
        self.message = message
        self.status_code = status_code
        self.retryable = retryable
        super().__init__(message)


def truncate_for_error(value: str, max_length: int = MAX_ERROR_BODY_LENGTH) -> str:
    """Trim a response body so it can be embedded in an error message."""
    value = value.strip()
    if max_length <= 0 or len(value) <= max_length:
        return value
    return value[:max_length] + "..."


def _is_retryable(exc: BaseException) -> bool:
    # CancelledError is not a KnowsAPIError, so cancellation is never retried
    return isinstance(exc, KnowsAPIError) and exc.retryable


class KnowsClient:
    """Client for the KnowS evidence API.

    Every call is a JSON POST authenticated with the ``x-api-key`` header.
    Transport failures and 5xx responses are retried with capped exponential
    backoff; everything else fails on the first attempt.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_backoff: float = DEFAULT_RETRY_BACKOFF,
        cache: DetailCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize KnowS client.

        Args:
            api_key: KnowS API key
            base_url: API root, e.g. ``https://api.example.com``
            timeout: Request timeout in seconds
            max_retries: Retries after the first attempt
            retry_backoff: Base delay in seconds for exponential backoff
            cache: Evidence detail cache (a disabled cache when omitted)
            transport: Optional httpx transport, used by tests
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_backoff = retry_backoff
        self.cache = cache if cache is not None else DetailCache(ttl=0, max_entries=0)
        self._transport = transport

        self._client: httpx.AsyncClient | None = None

        logger.info(
            "KnowS client initialized",
            base_url=self.base_url,
            max_retries=max_retries,
            cache_entries=self.cache.max_entries,
        )

    @classmethod
    def from_settings(
        cls,
        settings: KnowsSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "KnowsClient":
        """Build a client and its detail cache from settings."""
        return cls(
            api_key=settings.api_key.strip(),
            base_url=settings.api_base_url.strip(),
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            retry_backoff=settings.retry_backoff,
            cache=DetailCache(ttl=settings.cache_ttl, max_entries=settings.cache_max_entries),
            transport=transport,
        )

    async def __aenter__(self) -> "KnowsClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    @property
    def client(self) -> httpx.AsyncClient:
        """Get HTTP client, creating if needed."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            API_KEY_HEADER: self.api_key,
        }

    async def post_json(self, path: str, payload: Any = None) -> Any:
        """POST a JSON payload and return the unwrapped response data.

        Args:
            path: Endpoint path, e.g. ``/knows/ai_search``
            payload: JSON-serializable request body

        Returns:
            The ``data`` field of an enveloped response, the whole decoded
            document otherwise, or an empty dict for an empty body

        Raises:
            KnowsAPIError: If the request cannot be encoded, fails, or returns
                an undecodable body
            asyncio.CancelledError: If the calling task is cancelled
        """
        if payload is None:
            payload = {}

        try:
            body = json.dumps(payload).encode()
        except (TypeError, ValueError) as e:
            raise KnowsAPIError(f"failed to encode request for {path}: {e}") from e

        retrying = AsyncRetrying(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(multiplier=self.retry_backoff, exp_base=2, max=MAX_RETRY_BACKOFF),
            before_sleep=self._log_retry(path),
            reraise=True,
        )
        response_body = await retrying(self._send, path, body)

        return self._decode(path, response_body)

    async def _send(self, path: str, body: bytes) -> bytes:
        """Perform one attempt, classifying failures as retryable or not."""
        url = f"{self.base_url}{path}"

        logger.debug("KnowS request", path=path)

        try:
            response = await self.client.post(url, content=body, headers=self._headers())
        except httpx.TransportError as e:
            raise KnowsAPIError(f"request to {path} failed: {e!r}", retryable=True) from e

        if not response.is_success:
            status = response.status_code
            raise KnowsAPIError(
                f"request to {path} failed with status {status}: {truncate_for_error(response.text)}",
                status_code=status,
                retryable=500 <= status <= 599,
            )

        logger.debug("KnowS response", path=path, status_code=response.status_code)
        return response.content

    @staticmethod
    def _decode(path: str, body: bytes) -> Any:
        if not body.strip():
            return {}

        try:
            raw = json.loads(body)
        except ValueError as e:
            raise KnowsAPIError(f"failed to decode response from {path}: {e}") from e

        # Strip the {"data": ...} envelope the API wraps payloads in
        if isinstance(raw, dict) and raw.get("data") is not None:
            return raw["data"]

        return raw

    @staticmethod
    def _log_retry(path: str):
        def log(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception() if retry_state.outcome else None
            logger.warning(
                "Retrying KnowS request",
                path=path,
                attempt=retry_state.attempt_number,
                wait_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
                error=str(error),
            )

        return log

    async def ai_search(self, request: SearchRequest) -> Any:
        """Search evidence and return a question_id plus evidence list."""
        return await search_evidence(self, request)

    async def answer(self, request: AnswerRequest) -> Any:
        """Generate an answer for a searched question."""
        return await generate_answer(self, request)

    async def evidence_summary(self, evidence_id: str) -> Any:
        return await get_evidence_summary(self, evidence_id)

    async def evidence_highlight(self, evidence_id: str) -> Any:
        return await get_evidence_highlight(self, evidence_id)

    async def get_paper_en(self, request: EvidenceRequest) -> Any:
        return await fetch_detail(self, DataScope.PAPER, request)

    async def get_paper_cn(self, evidence_id: str) -> Any:
        return await fetch_detail(self, DataScope.PAPER_CN, EvidenceRequest(evidence_id=evidence_id))

    async def get_guide(self, request: EvidenceRequest) -> Any:
        return await fetch_detail(self, DataScope.GUIDE, request)

    async def get_meeting(self, request: EvidenceRequest) -> Any:
        return await fetch_detail(self, DataScope.MEETING, request)

    async def fetch_evidence_detail(self, request: EvidenceDetailRequest) -> Any:
        """Fetch evidence details, dispatching on the evidence type."""
        return await fetch_evidence_detail(self, request)

    async def auto_tagging(self, request: AutoTaggingRequest) -> Any:
        return await auto_tag(self, request)

    async def list_question(self, request: HistoryRequest) -> Any:
        return await list_questions(self, request)

    async def list_interpretation(self, request: HistoryRequest) -> Any:
        return await list_interpretations(self, request)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

