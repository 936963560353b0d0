"""Candidate scoring: pick the provider result closest to the filename."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..errors import NoMatchError
from ..models import MatchDecision
from ..tmdb.models import SearchResult
from .similarity import edit_distance, normalize_for_match
from .terms import SearchTerm

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class CandidateRecord:
    result: SearchResult
    title: str
    search_term: str
    match_score: int
    date: str

    @property
    def release_year(self) -> Optional[int]:
        head = self.date.split("-", 1)[0]
        return int(head) if head.isdigit() else None

    def date_contains(self, year: Optional[int]) -> bool:
        if not year:
            return False
        return str(year) in self.date


def build_candidates(
    search_term: SearchTerm,
    results: Iterable[SearchResult],
    filename: SearchTerm,
    *,
    substring: bool = True,
) -> list[CandidateRecord]:
    """Score every result that carries a release or first-air date."""
    normalized_term = normalize_for_match(search_term.joined)
    normalized_filename = normalize_for_match(filename.joined)

    candidates: list[CandidateRecord] = []
    for result in results:
        if not (result.release_date or result.first_air_date):
            continue
        title = normalize_for_match(result.display_title)
        candidates.append(
            CandidateRecord(
                result=result,
                title=title,
                search_term=normalized_term,
                match_score=edit_distance(title, normalized_filename, substring=substring),
                date=result.date,
            )
        )
    return candidates


def prefer(best: CandidateRecord, item: CandidateRecord, year: Optional[int]) -> CandidateRecord:
    """Return whichever of two candidates should win.

    A date containing the requested year beats edit distance; otherwise the
    smaller distance wins and ties keep ``best``.
    """
    best_has_year = best.date_contains(year)
    item_has_year = item.date_contains(year)
    if item_has_year and not best_has_year:
        return item
    if best_has_year and not item_has_year:
        return best
    if item.match_score < best.match_score:
        return item
    return best


def score_candidates(
    search_term: SearchTerm,
    results: Iterable[SearchResult],
    filename: SearchTerm,
    year: Optional[int],
    *,
    substring: bool = True,
) -> MatchDecision:
    """Reduce provider results to the single best match for ``filename``.

    Raises:
        NoMatchError: if no result has a release or first-air date.
    """
    candidates = build_candidates(search_term, results, filename, substring=substring)
    if not candidates:
        raise NoMatchError()

    best = candidates[0]
    for item in candidates[1:]:
        best = prefer(best, item, year)

    LOGGER.debug(
        "Best of %d candidate(s) for %r: %r (score=%d, date=%s)",
        len(candidates),
        search_term.query,
        best.result.display_title,
        best.match_score,
        best.date or "-",
    )

    return MatchDecision(
        name=best.result.display_title,
        provider_id=best.result.id,
        match_score=best.match_score,
        year_matches=best.date_contains(year),
        filename="",
        media_type="",
        release_date=best.date,
    )
