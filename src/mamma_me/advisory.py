"""Supersedable advisory lookups keyed by query submission tokens."""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Callable

from mamma_me.core import request_advisory
from mamma_me.providers.base import BaseAdvisoryProvider
from mamma_me.schema import AdvisoryResult

logger = logging.getLogger(__name__)

AdvisoryRequest = Callable[..., AdvisoryResult]


class AdvisoryCoordinator:
    """Applies only the advisory result that belongs to the latest query.

    Every submission takes a fresh token. A result arriving with an older
    token is dropped silently, so a slow answer for a previous query can
    never overwrite the answer for the current one.
    """

    def __init__(
        self,
        provider: str | BaseAdvisoryProvider | None = None,
        *,
        request: AdvisoryRequest = request_advisory,
    ):
        self.provider = provider
        self._request = request
        self._tokens = itertools.count(1)
        self._current_token = 0
        self._task: asyncio.Task | None = None
        self.result: AdvisoryResult | None = None
        self.loading = False

    @property
    def current_token(self) -> int:
        return self._current_token

    def submit(self) -> int:
        """Start a new submission; any outstanding one becomes stale."""
        self._current_token = next(self._tokens)
        self.result = None
        self.loading = True
        return self._current_token

    def apply(self, token: int, result: AdvisoryResult) -> bool:
        if token != self._current_token:
            logger.debug("discarding stale advisory for token %d", token)
            return False
        self.result = result
        self.loading = False
        return True

    def cancel(self) -> None:
        """Invalidate the outstanding submission, e.g. when the query changes."""
        self._current_token = next(self._tokens)
        self.result = None
        self.loading = False
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def run(self, query: str) -> AdvisoryResult | None:
        """Fetch an advisory for ``query``; returns None if superseded meanwhile."""
        token = self.submit()
        result = await asyncio.to_thread(self._request, query, provider=self.provider)
        if self.apply(token, result):
            return result
        return None

    def start(self, query: str) -> asyncio.Task:
        """Schedule ``run(query)`` on the running loop, cancelling the previous task."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = asyncio.ensure_future(self.run(query))
        return self._task
