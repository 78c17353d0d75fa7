"""Tool descriptor shared by every KnowS tool."""

import asyncio
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import structlog
from langsmith import traceable

from knows.api.client import KnowsClient
from knows.models import DataScope, ToolResult

logger = structlog.get_logger(__name__)

Handler = Callable[[Mapping[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class ToolContext:
    """Shared state the tool handlers close over."""

    client: KnowsClient
    default_data_scope: tuple[DataScope, ...]
    batch_concurrency: int


@dataclass(frozen=True)
class KnowsTool:
    """A named, schema-described operation an agent can call."""

    name: str
    description: str
    parameters: Mapping[str, Any]
    handler: Handler = field(repr=False)

    async def execute(
        self,
        args: Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> ToolResult:
        """Run the tool and wrap the outcome for the agent.

        Failures never raise: they come back as a ToolResult with
        ``is_error`` set. Cancelling the calling task still propagates
        ``asyncio.CancelledError``.

        Args:
            args: Tool-call arguments
            timeout: Optional deadline in seconds for the whole call

        Returns:
            ToolResult with the JSON-encoded result or an error message
        """
        traced = traceable(name=self.name, run_type="tool")(self._execute)
        return await traced(args, timeout)

    async def _execute(self, args: Any, timeout: float | None) -> ToolResult:
        if args is None:
            args = {}
        if not isinstance(args, Mapping):
            logger.error("Tool arguments not an object", tool=self.name, type=type(args).__name__)
            return ToolResult.failure("arguments must be an object")

        args = dict(args)
        logger.info("Tool called", tool=self.name, args=sorted(args))

        try:
            if timeout is None:
                result = await self.handler(args)
            else:
                result = await asyncio.wait_for(self.handler(args), timeout)
        except asyncio.TimeoutError as e:
            if timeout is None:
                return self._failure(e)
            logger.error("Tool timed out", tool=self.name, timeout=timeout)
            return ToolResult.failure(f"{self.name} timed out after {timeout}s")
        except Exception as e:
            return self._failure(e)

        try:
            return ToolResult.success(result)
        except (TypeError, ValueError) as e:
            logger.error("Tool result not serializable", tool=self.name, error=str(e))
            return ToolResult.failure(f"failed to serialize knows response: {e}")

    def _failure(self, error: Exception) -> ToolResult:
        message = str(error) or repr(error)
        logger.error("Tool failed", tool=self.name, error=message)
        return ToolResult.failure(message)


def string_property(description: str | None = None, enum: Sequence[str] | None = None) -> dict[str, Any]:
    prop: dict[str, Any] = {"type": "string"}
    if description:
        prop["description"] = description
    if enum:
        prop["enum"] = list(enum)
    return prop


def object_schema(
    properties: Mapping[str, Any],
    required: Sequence[str] = (),
) -> dict[str, Any]:
    """Build a JSON-schema object with the given properties."""
    schema: dict[str, Any] = {"type": "object", "properties": dict(properties)}
    if required:
        schema["required"] = list(required)
    return schema


TRANSLATE_PROPERTY = {
    "type": "boolean",
    "description": "Optional translation flag for title/abstract.",
}
