"""Search pipeline: filter candidates and order them by rank key."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass

from mamma_me.dataset.repository import DatasetStore
from mamma_me.schema import FoodSummary
from mamma_me.search.expand import SynonymTable, expand_query
from mamma_me.search.hints import extract_hints
from mamma_me.search.index import TokenIndex, TokenIndexCache
from mamma_me.search.ranking import sort_key
from mamma_me.search.text import normalize
from mamma_me.search.types import SearchResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchConfig:
    hide_empty: bool = True
    limit: int | None = None

    @classmethod
    def from_env(cls) -> "SearchConfig":
        limit_raw = os.getenv("SEARCH_LIMIT", "20")
        try:
            limit = int(limit_raw) if limit_raw else None
        except ValueError:
            limit = 20
        return cls(limit=limit if limit is None or limit > 0 else None)


def rank_candidates(
    query: str,
    summaries: Sequence[FoodSummary],
    synonyms: SynonymTable,
    index: TokenIndex,
) -> list[FoodSummary]:
    """Filter ``summaries`` to plausible matches for ``query`` and sort them best first."""
    if not query.strip():
        return []

    expanded = expand_query(query, synonyms)
    hints = extract_hints(query, index)
    return _rank(query, summaries, expanded, hints)


def _rank(
    query: str,
    summaries: Sequence[FoodSummary],
    expanded: list[str],
    hints: list[str],
) -> list[FoodSummary]:
    n_query = normalize(query)
    n_expanded = [normalize(variant) for variant in expanded]
    n_hints = [normalize(hint) for hint in hints]

    candidates = []
    for summary in summaries:
        n_name = normalize(summary.name)
        if (
            n_name == n_query
            or any(variant in n_name for variant in n_expanded)
            or any(hint in n_name for hint in n_hints)
        ):
            candidates.append(summary)

    return sorted(candidates, key=lambda summary: sort_key(summary, query, expanded, hints))


def is_strong_match(query: str, top: FoodSummary | None) -> bool:
    """True when the best result is the query itself or starts with it."""
    if top is None:
        return False
    n_name = normalize(top.name)
    n_query = normalize(query)
    return n_name == n_query or n_name.startswith(n_query)


def search(
    query: str,
    summaries: Sequence[FoodSummary],
    synonyms: SynonymTable,
    index: TokenIndex,
    *,
    config: SearchConfig | None = None,
) -> SearchResult:
    """Run the full search pipeline for one query."""
    config = config or SearchConfig()
    if not query.strip():
        return SearchResult(query=query)

    expanded = expand_query(query, synonyms)
    hints = extract_hints(query, index)
    ranked = _rank(query, summaries, expanded, hints)
    if config.hide_empty:
        ranked = [summary for summary in ranked if summary.entries]
    if config.limit is not None:
        ranked = ranked[: config.limit]

    strong = is_strong_match(query, ranked[0] if ranked else None)
    return SearchResult(
        query=query,
        results=ranked,
        hints=hints,
        expanded=expanded,
        strong_match=strong,
        show_advisory=not strong or not ranked,
    )


class SearchEngine:
    """Searches the dataset held by a DatasetStore.

    The token index is cached per dataset version and rebuilt after a reload.
    """

    def __init__(self, store: DatasetStore, config: SearchConfig | None = None):
        self.store = store
        self.config = config or SearchConfig()
        self._index_cache = TokenIndexCache()

    def index(self) -> TokenIndex:
        dataset = self.store.get()
        return self._index_cache.get(dataset.summaries, dataset.version)

    def search(self, query: str) -> SearchResult:
        """Search the loaded dataset.

        Raises:
            DatasetNotReadyError: If the dataset has not finished loading.
            DatasetLoadError: If the dataset failed to load.
        """
        dataset = self.store.get()
        index = self._index_cache.get(dataset.summaries, dataset.version)
        result = search(query, dataset.summaries, dataset.synonyms, index, config=self.config)
        logger.debug("query %r: %d results, strong=%s", query, len(result.results), result.strong_match)
        return result
