"""Query retry engine.

Runs provider searches for one filename in one direction. An empty result
set shrinks the search term by a single token and searches again; a rate
limited response waits a fixed interval and repeats the same search. The
reduction path ends after at most ``len(term) - 1`` shrinking steps, while
rate-limit retries are unbounded.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import replace
from typing import Callable, Iterable, Optional, Protocol

from pydantic import ValidationError

from ..errors import InputError, NoMatchError, ProviderProtocolError
from ..models import Direction, MatchDecision
from ..tmdb.client import SearchResponse
from ..tmdb.models import SearchPage
from .scoring import score_candidates
from .terms import IGNORED_TOKENS, reduce_term, sanitize

LOGGER = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_TOO_MANY_REQUESTS = 429
DEFAULT_RATE_LIMIT_BACKOFF = 10.0

MIN_PLAUSIBLE_YEAR = 1870
MAX_PLAUSIBLE_YEAR = 2100


class SearchProvider(Protocol):
    def search(self, term: str, media_type: str) -> SearchResponse: ...


def is_plausible_year(value: Optional[int]) -> bool:
    return value is not None and MIN_PLAUSIBLE_YEAR <= value <= MAX_PLAUSIBLE_YEAR


class QueryEngine:
    """Searches the provider until a match is scored or the term runs out."""

    def __init__(
        self,
        provider: SearchProvider,
        *,
        rate_limit_backoff: float = DEFAULT_RATE_LIMIT_BACKOFF,
        substring_search: bool = True,
        ignored_tokens: Iterable[str] = IGNORED_TOKENS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.provider = provider
        self.rate_limit_backoff = rate_limit_backoff
        self.substring_search = substring_search
        self.ignored_tokens = frozenset(ignored_tokens)
        self._sleep = sleep

    def query(
        self,
        filename: Optional[str],
        media_type: str,
        search_term: Optional[str],
        *,
        year: Optional[int] = None,
        direction: Direction = Direction.BACKWARD,
    ) -> MatchDecision:
        """Resolve ``filename`` by searching with ``search_term`` and shrinking it on empty results.

        Raises:
            InputError: if the filename or search term is missing, or nothing but noise.
            NoMatchError: if the term is exhausted, or no result carries a usable date.
            ProviderProtocolError: on any status other than 200 or 429.
        """
        if not filename or not search_term:
            raise InputError()

        direction = Direction(direction)
        filename_term = sanitize(os.path.basename(filename), self.ignored_tokens)
        term = sanitize(os.path.basename(search_term), self.ignored_tokens)
        if filename_term is None or term is None:
            raise InputError()

        while True:
            LOGGER.debug("Searching %s for %r (%s, year=%s)", media_type, term.query, direction.value, year)
            response = self.provider.search(term.query, media_type)

            if response.status_code == HTTP_TOO_MANY_REQUESTS:
                LOGGER.warning("Rate limited, waiting %.0f seconds before retrying %r", self.rate_limit_backoff, term.query)
                self._sleep(self.rate_limit_backoff)
                continue

            if response.status_code != HTTP_OK:
                raise ProviderProtocolError(response.status_code)

            try:
                page = SearchPage.model_validate_json(response.body)
            except ValidationError as exc:
                raise ProviderProtocolError(response.status_code, f"Malformed search response: {exc}") from exc

            if page.total_results == 0:
                reduction = reduce_term(term, direction)
                if reduction.term is None:
                    LOGGER.debug("Search term exhausted %s for %s", direction.value, filename)
                    raise NoMatchError()
                if is_plausible_year(reduction.year):
                    year = reduction.year
                LOGGER.debug("No results for %r, reducing to %r", term.query, reduction.term.query)
                term = reduction.term
                continue

            decision = score_candidates(
                term,
                page.results,
                filename_term,
                year,
                substring=self.substring_search,
            )
            return replace(decision, filename=os.path.basename(filename), media_type=media_type)
