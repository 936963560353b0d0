"""Run the query engine from both ends of the filename and keep the better outcome."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from ..errors import InputError, NoMatchError
from ..models import MEDIA_TYPES, Direction, MatchDecision
from .engine import QueryEngine

LOGGER = logging.getLogger(__name__)

# Backward runs first and wins year-match ties
DIRECTION_ORDER = (Direction.BACKWARD, Direction.FORWARD)


def choose_decision(backward: Optional[MatchDecision], forward: Optional[MatchDecision]) -> MatchDecision:
    """Pick between the two directional outcomes.

    A year match wins first (backward before forward), then the lower match
    score, then on equal scores the longer candidate name.

    Raises:
        InputError: if neither direction reached a decision.
    """
    if backward is None and forward is None:
        raise InputError()
    if forward is None:
        return backward  # type: ignore[return-value]
    if backward is None:
        return forward

    if backward.year_matches:
        return backward
    if forward.year_matches:
        return forward
    if backward.match_score == forward.match_score:
        return backward if len(backward.name) > len(forward.name) else forward
    return backward if backward.match_score < forward.match_score else forward


class Reconciler:
    def __init__(self, engine: QueryEngine, *, parallel: bool = False) -> None:
        self.engine = engine
        self.parallel = parallel

    def _attempt(
        self,
        filename: str,
        media_type: str,
        year: Optional[int],
        direction: Direction,
    ) -> Optional[MatchDecision]:
        try:
            return self.engine.query(filename, media_type, filename, year=year, direction=direction)
        except (InputError, NoMatchError) as exc:
            LOGGER.debug("No %s decision for %s: %s", direction.value, filename, exc)
            return None

    def resolve(self, filename: str, media_type: str, year: Optional[int] = None) -> MatchDecision:
        """Return the best decision for ``filename`` across both search directions.

        Raises:
            InputError: on an unknown media type, or if both directions fail.
            ProviderProtocolError: if the provider misbehaves in either direction.
        """
        if media_type not in MEDIA_TYPES:
            raise InputError(f"Unsupported media type: {media_type!r}")

        if self.parallel:
            with ThreadPoolExecutor(max_workers=len(DIRECTION_ORDER)) as executor:
                futures = [
                    executor.submit(self._attempt, filename, media_type, year, direction)
                    for direction in DIRECTION_ORDER
                ]
                backward, forward = (future.result() for future in futures)
        else:
            backward, forward = (
                self._attempt(filename, media_type, year, direction) for direction in DIRECTION_ORDER
            )

        LOGGER.debug("Backward outcome: %s", backward)
        LOGGER.debug("Forward outcome: %s", forward)
        return choose_decision(backward, forward)
