"""Assembly of the KnowS tool catalog."""

from collections.abc import Iterator

import httpx
import structlog

from knows.api.client import KnowsClient
from knows.config.settings import ConfigurationError, KnowsSettings, get_settings
from knows.models import ALL_DATA_SCOPES, DataScope
from knows.tools.base import KnowsTool, ToolContext
from knows.tools.evidence import (
    batch_get_evidence_details_tool,
    evidence_highlight_tool,
    evidence_summary_tool,
    get_evidence_detail_tool,
    get_guide_tool,
    get_meeting_tool,
    get_paper_cn_tool,
    get_paper_en_tool,
)
from knows.tools.history import list_interpretation_tool, list_question_tool
from knows.tools.search import ai_search_tool, answer_tool, batch_answer_tool
from knows.tools.tagging import auto_tagging_tool
from knows.utils.validators import ValidationError

logger = structlog.get_logger(__name__)

TOOL_FACTORIES = (
    ai_search_tool,
    answer_tool,
    batch_answer_tool,
    evidence_summary_tool,
    evidence_highlight_tool,
    get_paper_en_tool,
    get_paper_cn_tool,
    get_guide_tool,
    get_meeting_tool,
    get_evidence_detail_tool,
    auto_tagging_tool,
    list_question_tool,
    list_interpretation_tool,
    batch_get_evidence_details_tool,
)


class KnowsToolkit:
    """The fixed set of KnowS tools sharing one client and detail cache."""

    def __init__(self, client: KnowsClient, tools: tuple[KnowsTool, ...]):
        self.client = client
        self.tools = tools
        self._by_name = {tool.name: tool for tool in tools}

    @property
    def names(self) -> list[str]:
        return [tool.name for tool in self.tools]

    def get(self, name: str) -> KnowsTool:
        """Look up a tool by name.

        Raises:
            KeyError: If no tool has that name
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"unknown tool {name!r}; available: {', '.join(self.names)}") from None

    def __iter__(self) -> Iterator[KnowsTool]:
        return iter(self.tools)

    def __len__(self) -> int:
        return len(self.tools)

    async def __aenter__(self) -> "KnowsToolkit":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()


def build_toolkit(
    settings: KnowsSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> KnowsToolkit:
    """Build the KnowS tool catalog.

    Args:
        settings: Adapter settings (environment settings when omitted)
        transport: Optional httpx transport, used by tests

    Returns:
        Toolkit exposing every KnowS tool

    Raises:
        ConfigurationError: If the API key or base URL is missing, or the
            default data scope contains an unknown value
    """
    if settings is None:
        settings = get_settings()

    if not settings.api_key.strip():
        raise ConfigurationError("knows api_key is required")
    if not settings.api_base_url.strip():
        raise ConfigurationError("knows api_base_url is required")

    try:
        default_scope = tuple(DataScope.parse_many(settings.default_data_scope))
    except ValidationError as e:
        raise ConfigurationError(f"invalid knows default_data_scope: {e.message}") from e

    ctx = ToolContext(
        client=KnowsClient.from_settings(settings, transport=transport),
        default_data_scope=default_scope or ALL_DATA_SCOPES,
        batch_concurrency=settings.batch_concurrency,
    )
    tools = tuple(factory(ctx) for factory in TOOL_FACTORIES)

    logger.info(
        "KnowS toolkit built",
        tools=len(tools),
        default_data_scope=[scope.value for scope in ctx.default_data_scope],
        batch_concurrency=ctx.batch_concurrency,
    )

    return KnowsToolkit(ctx.client, tools)
