"""String normalization and edit-distance helpers used for candidate scoring."""

from __future__ import annotations

import functools
import re

from rapidfuzz.distance import Levenshtein

_SEPARATOR_OR_SYMBOL_RE = re.compile(r"[+]|[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


@functools.lru_cache(maxsize=2048)
def normalize_for_match(value: str) -> str:
    """Return ``value`` lowercased with separators and punctuation collapsed to single spaces."""
    spaced = _SEPARATOR_OR_SYMBOL_RE.sub(" ", value)
    return _WHITESPACE_RE.sub(" ", spaced).lower().strip()


def substring_distance(needle: str, haystack: str) -> int:
    """Smallest edit distance between ``needle`` and any substring of ``haystack``.

    Leading and trailing characters of ``haystack`` are free, so a title that
    appears verbatim inside a longer filename scores 0.
    """
    if not needle:
        return 0
    if not haystack:
        return len(needle)

    # previous[j]: cost of aligning needle[:i] so that it ends at haystack[j]
    previous = [0] * (len(haystack) + 1)
    for i, needle_char in enumerate(needle, start=1):
        current = [i] + [0] * len(haystack)
        for j, hay_char in enumerate(haystack, start=1):
            substitution = previous[j - 1] + (needle_char != hay_char)
            current[j] = min(previous[j] + 1, current[j - 1] + 1, substitution)
        previous = current
    return min(previous)


def edit_distance(title: str, filename: str, *, substring: bool = True) -> int:
    """Dissimilarity between a candidate title and the filename; lower is better.

    With ``substring`` the title is matched against the closest stretch of the
    filename, otherwise the whole strings are compared.
    """
    if substring:
        return substring_distance(title, filename)
    return int(Levenshtein.distance(title, filename))
