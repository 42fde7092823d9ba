"""Token index built from the food names of a dataset."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from mamma_me.schema import FoodSummary
from mamma_me.search.text import normalize

logger = logging.getLogger(__name__)

MIN_HINT_LEN = 2
MAX_HINT_LEN = 4


@dataclass(frozen=True)
class TokenIndex:
    substrings2to4: frozenset[str] = field(default_factory=frozenset)
    whole_single_char: frozenset[str] = field(default_factory=frozenset)


def build_token_index(summaries: Sequence[FoodSummary]) -> TokenIndex:
    """Collect the 2-4 char substrings and the one-char names found in the dataset."""
    substrings: set[str] = set()
    singles: set[str] = set()

    for summary in summaries:
        name = summary.name.strip()
        if not name:
            continue
        if len(name) == 1:
            singles.add(normalize(name))

        normalized = normalize(name)
        for size in range(MIN_HINT_LEN, MAX_HINT_LEN + 1):
            for i in range(len(normalized) - size + 1):
                substrings.add(normalized[i : i + size])

    return TokenIndex(
        substrings2to4=frozenset(substrings),
        whole_single_char=frozenset(singles),
    )


class TokenIndexCache:
    """Rebuilds the token index only when the summary list changes.

    Entries are keyed by the identity of the summary list and an optional
    caller-supplied version, so swapping in a reloaded dataset invalidates it.
    """

    def __init__(self) -> None:
        self._key: tuple[int, object] | None = None
        self._summaries: Sequence[FoodSummary] | None = None
        self._index: TokenIndex | None = None

    def get(self, summaries: Sequence[FoodSummary], version: object = None) -> TokenIndex:
        key = (id(summaries), version)
        # Holding the list keeps id() from being reused by another object.
        if self._index is None or self._key != key or self._summaries is not summaries:
            logger.debug("building token index for %d foods", len(summaries))
            self._index = build_token_index(summaries)
            self._key = key
            self._summaries = summaries
        return self._index

    def clear(self) -> None:
        self._key = None
        self._summaries = None
        self._index = None
