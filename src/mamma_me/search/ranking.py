"""Relevance scoring and bucketed rank keys for search candidates."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from mamma_me.schema import FoodSummary
from mamma_me.search.text import (
    contains_at_hangul_boundary,
    normalize,
    tokens_by_space,
    trailing_hangul_run,
)

BUCKET_EXACT = 0
BUCKET_HINT_IS_NAME = 1
BUCKET_HINT_IN_NAME = 2
BUCKET_SYNONYM_BOUNDARY = 3
BUCKET_SUBSTRING = 4
BUCKET_FALLBACK = 9

EXACT_BASE = 1_000_000.0
HINT_IS_NAME_BASE = 500_000.0
HINT_IN_NAME_BASE = 200_000.0
SYNONYM_BASE = 80_000.0
SUBSTRING_BASE = 10_000.0
BOUNDARY_BONUS = 2_000.0
TRAILING_RUN_PENALTY = 120.0


@dataclass(frozen=True)
class RankKey:
    bucket: int
    score: float
    name_len: int


def relevance(name: str, query: str, dataset_score: float) -> float:
    """Blend exactness, prefix/containment, token overlap, length and quality."""
    n = normalize(name)
    q = normalize(query)
    if n == q:
        return 1000.0 + dataset_score

    score = 0.0
    if n.startswith(q):
        score += 200.0
    if q in n:
        score += 120.0

    name_tokens = {token.lower() for token in tokens_by_space(name)}
    query_tokens = {token.lower() for token in tokens_by_space(query)}
    if query_tokens:
        shared = len(name_tokens & query_tokens)
        score += 100.0 * shared / max(1, len(query_tokens))

    extra_len = max(0, len(n) - len(q))
    score += 80.0 / (1 + extra_len)
    score += dataset_score * 10.0
    return score


def rank_key(
    summary: FoodSummary,
    query: str,
    expanded: Sequence[str],
    hints: Sequence[str],
) -> RankKey:
    """Place ``summary`` in the first matching bucket and score it within that bucket.

    Buckets, best first: exact name, a hint equal to the name, a hint inside
    the name, a synonym at a Hangul word boundary, a raw substring match,
    and finally a relevance-only fallback.
    """
    name = summary.name
    n_name = normalize(name)
    n_query = normalize(query)
    name_len = len(name)
    rounded = summary.score_rounded

    if n_name == n_query:
        return RankKey(BUCKET_EXACT, EXACT_BASE + rounded, name_len)

    for idx, hint in enumerate(hints):
        if normalize(hint) == n_name:
            bonus = (10_000 - idx * 500) + len(hint) * 50
            return RankKey(BUCKET_HINT_IS_NAME, HINT_IS_NAME_BASE + bonus + rounded, name_len)

    hits: list[tuple[int, int, str]] = []
    for order, hint in enumerate(hints):
        pos = n_name.find(normalize(hint))
        if pos >= 0:
            hits.append((order, pos, hint))
    if hits:
        order, _, hint = min(hits, key=lambda hit: (hit[0], hit[1]))
        boundary = BOUNDARY_BONUS if contains_at_hangul_boundary(name, hint) else 0.0
        bonus = (5_000 - order * 300) + len(hint) * 200 + boundary
        score = HINT_IN_NAME_BASE + bonus + relevance(name, query, rounded)
        return RankKey(BUCKET_HINT_IN_NAME, score, name_len)

    variants = [variant for variant in expanded if normalize(variant) != n_query]
    if any(contains_at_hangul_boundary(name, variant) for variant in variants):
        return RankKey(BUCKET_SYNONYM_BOUNDARY, SYNONYM_BASE + relevance(name, query, rounded), name_len)

    trimmed = query.strip()
    if trimmed and trimmed.lower() in name.lower():
        penalty = TRAILING_RUN_PENALTY * trailing_hangul_run(name, trimmed)
        score = SUBSTRING_BASE + relevance(name, query, rounded) - penalty
        return RankKey(BUCKET_SUBSTRING, score, name_len)

    return RankKey(BUCKET_FALLBACK, relevance(name, query, rounded), name_len)


def sort_key(
    summary: FoodSummary,
    query: str,
    expanded: Sequence[str],
    hints: Sequence[str],
) -> tuple[int, float, int, int]:
    """Ascending sort key: bucket, then score desc, shorter name, higher verdict score."""
    key = rank_key(summary, query, expanded, hints)
    return (key.bucket, -key.score, key.name_len, -summary.score_rounded)
