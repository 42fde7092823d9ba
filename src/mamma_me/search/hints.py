"""Extract dataset-validated food mentions ("hints") from free-text queries."""

from __future__ import annotations

from mamma_me.search.index import MAX_HINT_LEN, MIN_HINT_LEN, TokenIndex
from mamma_me.search.text import normalize


def extract_hints(query: str, index: TokenIndex) -> list[str]:
    """Find substrings of ``query`` that also occur in some food name.

    Hints are ordered by where they first appear in the normalized query,
    longer hints first at the same position. One-char hints are kept only
    when no longer hint already covers them (``팥빙수`` suppresses ``팥``).
    """
    q = normalize(query)
    if not q:
        return []

    found_multi: set[str] = set()
    for size in range(MIN_HINT_LEN, MAX_HINT_LEN + 1):
        for i in range(len(q) - size + 1):
            sub = q[i : i + size]
            if sub in index.substrings2to4:
                found_multi.add(sub)

    found_single = {ch for ch in q if ch in index.whole_single_char}
    if found_multi:
        found_single = {
            one for one in found_single if not any(one in hint for hint in found_multi)
        }

    combined = found_multi | found_single
    return sorted(combined, key=lambda hint: (q.find(hint), -len(hint)))
