"""Synonym-based query expansion."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from mamma_me.search.text import normalize

SynonymTable = Mapping[str, Sequence[str]]


def expand_query(query: str, synonyms: SynonymTable) -> list[str]:
    """Return the query, its normalized form and its aliases, deduplicated in order."""
    base = query.strip()
    if not base:
        return []
    normalized = normalize(base)

    variants = [base]
    if normalized != base:
        variants.append(normalized)
    variants.extend(synonyms.get(base, ()))
    variants.extend(synonyms.get(normalized, ()))

    out: list[str] = []
    seen: set[str] = set()
    for variant in variants:
        value = variant.strip()
        if not value or value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out
