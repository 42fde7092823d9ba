"""Text normalization and Hangul word-boundary helpers."""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")

HANGUL_FIRST = "가"
HANGUL_LAST = "힣"


def normalize(value: str) -> str:
    """Lowercase and drop every whitespace run."""
    return _WHITESPACE.sub("", value.lower())


def tokens_by_space(value: str) -> list[str]:
    return [token for token in _WHITESPACE.split(value.strip()) if token]


def is_hangul_syllable(ch: str) -> bool:
    return HANGUL_FIRST <= ch <= HANGUL_LAST


def trailing_hangul_run(haystack: str, needle: str) -> int:
    """Count Hangul syllables right after the first occurrence of ``needle``.

    A long run usually means the match is the head of a different, longer word
    (e.g. ``커피`` inside ``커피우유``). Returns 0 when ``needle`` is absent.
    """
    h = haystack.lower()
    n = needle.lower()
    idx = h.find(n)
    if idx < 0:
        return 0

    count = 0
    j = idx + len(n)
    while j < len(h) and is_hangul_syllable(h[j]):
        count += 1
        j += 1
    return count


def contains_at_hangul_boundary(haystack: str, needle: str) -> bool:
    """Return True if some occurrence of ``needle`` is not inside a Hangul run.

    Every occurrence is checked: an early embedded match must not hide a later
    standalone one.
    """
    if not needle.strip():
        return False
    h = haystack.lower()
    n = needle.lower()

    idx = h.find(n)
    while idx >= 0:
        before_ok = idx == 0 or not is_hangul_syllable(h[idx - 1])
        after = idx + len(n)
        after_ok = after >= len(h) or not is_hangul_syllable(h[after])
        if before_ok and after_ok:
            return True
        idx = h.find(n, idx + 1)
    return False
