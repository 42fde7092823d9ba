"""Debounce for query-change events."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Emit the latest submitted value once ``delay`` seconds pass with no newer one.

    Must be used from a running event loop.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[T], Awaitable[None] | None],
        *,
        accept: Callable[[T], bool] | None = None,
    ):
        self.delay = delay
        self.callback = callback
        self.accept = accept
        self._pending: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def submit(self, value: T) -> None:
        """Replace any pending emission with ``value``.

        Values rejected by ``accept`` still cancel the pending emission.
        """
        self.cancel()
        if self.accept is not None and not self.accept(value):
            return
        self._pending = asyncio.ensure_future(self._emit_later(value))

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def flush(self) -> None:
        """Wait for the pending emission, if any."""
        if self._pending is None:
            return
        try:
            await self._pending
        except asyncio.CancelledError:
            pass

    async def _emit_later(self, value: T) -> None:
        await asyncio.sleep(self.delay)
        outcome = self.callback(value)
        if inspect.isawaitable(outcome):
            await outcome


def min_length(n: int) -> Callable[[str], bool]:
    """Accept predicate for queries with at least ``n`` non-blank characters."""

    def accept(value: str) -> bool:
        return len(value.strip()) >= n

    return accept
