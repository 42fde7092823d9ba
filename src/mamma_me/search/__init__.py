"""Search, hint extraction and ranking over food names."""

from mamma_me.search.engine import SearchConfig, SearchEngine, is_strong_match, rank_candidates, search
from mamma_me.search.expand import expand_query
from mamma_me.search.hints import extract_hints
from mamma_me.search.index import TokenIndex, TokenIndexCache, build_token_index
from mamma_me.search.ranking import RankKey, rank_key, relevance, sort_key
from mamma_me.search.text import contains_at_hangul_boundary, is_hangul_syllable, normalize, trailing_hangul_run
from mamma_me.search.types import SearchResult

__all__ = [
    "RankKey",
    "SearchConfig",
    "SearchEngine",
    "SearchResult",
    "TokenIndex",
    "TokenIndexCache",
    "build_token_index",
    "contains_at_hangul_boundary",
    "expand_query",
    "extract_hints",
    "is_hangul_syllable",
    "is_strong_match",
    "normalize",
    "rank_candidates",
    "rank_key",
    "relevance",
    "search",
    "sort_key",
    "trailing_hangul_run",
]
