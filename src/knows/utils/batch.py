"""Bounded-concurrency batch execution."""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar, cast

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class ItemStatus(str, Enum):
    """Outcome of one batch sub-request."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass
class BatchOutcome:
    """Result of one batch sub-request, addressed by its input position."""

    index: int
    status: ItemStatus
    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == ItemStatus.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        """Convert to a row carrying either ``data`` or ``error``."""
        row: dict[str, Any] = {"index": self.index, "status": self.status.value}
        if self.ok:
            row["data"] = self.data
        else:
            row["error"] = self.error
        return row


class ConcurrencyLimiter:
    """Semaphore-based concurrency limiter."""

    def __init__(self, max_concurrent: int):
        """Initialize concurrency limiter.

        Args:
            max_concurrent: Maximum concurrent operations
        """
        if max_concurrent <= 0:
            raise ValueError("max_concurrent must be positive")
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._current = 0
        self.peak = 0

    async def acquire(self) -> None:
        """Acquire a slot."""
        await self._semaphore.acquire()
        self._current += 1
        self.peak = max(self.peak, self._current)
        logger.debug(
            "Concurrency slot acquired",
            current=self._current,
            max=self.max_concurrent,
        )

    def release(self) -> None:
        """Release a slot."""
        self._current -= 1
        self._semaphore.release()
        logger.debug("Concurrency slot released", current=self._current)

    async def __aenter__(self) -> "ConcurrencyLimiter":
        """Async context manager entry."""
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        self.release()

    @property
    def current_concurrent(self) -> int:
        """Get current number of concurrent operations."""
        return self._current


async def run_batch(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[Any]],
    limit: int,
) -> list[BatchOutcome]:
    """Run ``worker`` over every item with at most ``limit`` in flight.

    A failure in one item is recorded in that item's outcome and does not
    affect its siblings. Outcomes are returned in input order, whatever order
    the workers finish in.

    Args:
        items: Sub-requests to execute
        worker: Coroutine function executing a single sub-request
        limit: Maximum concurrent workers

    Returns:
        One outcome per item, ``outcomes[i]`` describing ``items[i]``
    """
    limiter = ConcurrencyLimiter(limit)
    outcomes: list[BatchOutcome | None] = [None] * len(items)

    async def run_one(index: int, item: T) -> None:
        async with limiter:
            try:
                data = await worker(item)
            except Exception as e:
                logger.warning("Batch item failed", index=index, error=str(e))
                outcomes[index] = BatchOutcome(index=index, status=ItemStatus.ERROR, error=str(e))
            else:
                outcomes[index] = BatchOutcome(index=index, status=ItemStatus.SUCCESS, data=data)

    logger.info("Running batch", size=len(items), concurrency=limit)

    await asyncio.gather(*(run_one(index, item) for index, item in enumerate(items)))

    failed = sum(1 for outcome in outcomes if outcome is not None and not outcome.ok)
    logger.info("Batch completed", size=len(items), failed=failed)

    return cast(list[BatchOutcome], outcomes)
