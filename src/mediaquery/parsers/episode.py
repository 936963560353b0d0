from __future__ import annotations

import re
from typing import Callable, Optional, Sequence, Tuple

from ..models import EpisodeDescriptor

# Digits not glued to other letters or digits; "_" counts as a separator
_LEFT = r"(?<![A-Za-z0-9])"
_RIGHT = r"(?![A-Za-z0-9])"

SEASON_EPISODE_RE = re.compile(r"S(\d{2})E(\d{2})", re.IGNORECASE)
DIGIT_RUN_RE = re.compile(_LEFT + r"(\d{3,4})" + _RIGHT)
CROSS_RE = re.compile(_LEFT + r"(\d{1,2})x(\d{2})" + _RIGHT, re.IGNORECASE)
DASH_RE = re.compile(_LEFT + r"(\d{1,2})-(\d{2})" + _RIGHT)

Strategy = Callable[[str], Optional[Tuple[str, str]]]


def _groups(pattern: re.Pattern[str]) -> Strategy:
    def strategy(filename: str) -> Optional[Tuple[str, str]]:
        match = pattern.search(filename)
        if not match:
            return None
        return match.group(1), match.group(2)

    return strategy


def _digit_run(filename: str) -> Optional[Tuple[str, str]]:
    match = DIGIT_RUN_RE.search(filename)
    if not match:
        return None
    digits = match.group(1)
    return digits[:-2], digits[-2:]


# Evaluated in order; the first strategy that matches decides
STRATEGIES: Sequence[Tuple[str, Strategy]] = (
    ("season-episode", _groups(SEASON_EPISODE_RE)),
    ("digit-run", _digit_run),
    ("cross", _groups(CROSS_RE)),
    ("dash", _groups(DASH_RE)),
)


def parse_episode(filename: str) -> Optional[EpisodeDescriptor]:
    """Extract season and episode numbers from a TV filename.

    Recognizes ``S03E09``, bare ``201``/``1205`` digit runs, ``2x01`` and
    ``12-05``, in that order of precedence. Numbers are not range checked.
    Returns None when nothing matches.
    """
    for _name, strategy in STRATEGIES:
        found = strategy(filename)
        if found is None:
            continue
        season, episode = found
        return EpisodeDescriptor(season_number=int(season, 10), episode_number=int(episode, 10))
    return None
