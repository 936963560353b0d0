"""Search terms: filename tokenization and one-token-at-a-time reduction.

A search term is the ordered list of words taken from a filename once the
extension and release-metadata noise (resolution, source, codec tags) have
been removed. When the provider returns nothing for a term, the reducer drops
a single word from one end so the next query is slightly broader.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional, Tuple

from ..models import Direction

SEPARATOR = "+"

# Release-metadata markers that never belong to a title
IGNORED_TOKENS = frozenset(
    {
        "bdrip",
        "brrip",
        "720p",
        "1080p",
        "hdrip",
        "bluray",
        "xvid",
        "divx",
        "dvdscr",
        "dvdrip",
        "readnfo",
        "hdtv",
        "web-dl",
        "extended",
        "webrip",
        "ws",
        "vodrip",
        "ntsc",
        "dvd",
        "hd-ts",
        "r5",
        "unrated",
        "remastered",
        "x264",
    }
)

_DELIMITER_RE = re.compile(r"[-_.() ]")
_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]{1,5}$")


@dataclass(frozen=True, slots=True)
class SearchTerm:
    """Non-empty ordered sequence of filename words."""

    tokens: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.tokens:
            raise ValueError("A search term needs at least one token")

    def __len__(self) -> int:
        return len(self.tokens)

    def __str__(self) -> str:
        return self.joined

    @property
    def joined(self) -> str:
        return SEPARATOR.join(self.tokens)

    @property
    def query(self) -> str:
        """Text sent to the provider's search endpoint."""
        return " ".join(self.tokens)

    @classmethod
    def parse(cls, joined: str) -> Optional["SearchTerm"]:
        tokens = tuple(token for token in joined.split(SEPARATOR) if token)
        return cls(tokens) if tokens else None


class ReductionResult(NamedTuple):
    term: Optional[SearchTerm]
    year: Optional[int]


def strip_extension(filename: str) -> str:
    """Remove a trailing file extension.

    Purely numeric suffixes (``show.201``) are episode or year tokens rather than
    extensions and are kept.
    """
    root, extension = os.path.splitext(filename)
    if extension and _EXTENSION_RE.match(extension) and not extension[1:].isdigit():
        return root
    return filename


def sanitize(filename: str, ignored: Iterable[str] = IGNORED_TOKENS) -> Optional[SearchTerm]:
    """Turn a raw filename into a search term with noise tokens removed.

    Returns None when no token survives.
    """
    ignored_set = ignored if isinstance(ignored, (set, frozenset)) else frozenset(ignored)
    words = _DELIMITER_RE.split(strip_extension(filename))
    tokens = tuple(word for word in words if word and word.lower() not in ignored_set)
    return SearchTerm(tokens) if tokens else None


def parse_token_as_year(token: str) -> Optional[int]:
    token = token.strip()
    if not token.isdigit():
        return None
    return int(token, 10)


def reduce_term(term: SearchTerm, direction: Direction) -> ReductionResult:
    """Drop one token from ``term``.

    ``Direction.FORWARD`` removes the first token and ``Direction.BACKWARD`` the
    last. The removed token is reported as ``year`` when it parses as an
    integer; it is not checked for being a plausible calendar year here.
    """
    if len(term) == 1:
        return ReductionResult(None, None)

    if Direction(direction) is Direction.FORWARD:
        dropped, remaining = term.tokens[0], term.tokens[1:]
    else:
        dropped, remaining = term.tokens[-1], term.tokens[:-1]

    return ReductionResult(SearchTerm(remaining), parse_token_as_year(dropped))
