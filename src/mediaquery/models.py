from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

MOVIE = "movie"
TV = "tv"
MEDIA_TYPES = (MOVIE, TV)


class Direction(str, enum.Enum):
    """Which end of a search term is dropped when a query comes back empty."""

    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(slots=True, frozen=True)
class MatchDecision:
    """The candidate chosen for one filename by one search direction."""

    name: str
    provider_id: int
    match_score: int
    year_matches: bool
    filename: str
    media_type: str
    release_date: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "provider_id": self.provider_id,
            "match_score": self.match_score,
            "year_matches": self.year_matches,
            "filename": self.filename,
            "media_type": self.media_type,
        }


@dataclass(slots=True)
class EpisodeDescriptor:
    season_number: int
    episode_number: int
    name: Optional[str] = None
    overview: Optional[str] = None
    image: Optional[str] = None
    guest_stars: List[Dict[str, Any]] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "season_number": self.season_number,
            "episode_number": self.episode_number,
        }
        if self.name is not None or self.overview is not None or self.image is not None or self.guest_stars:
            data.update(
                {
                    "name": self.name,
                    "overview": self.overview,
                    "image": self.image,
                    "guest_stars": list(self.guest_stars),
                }
            )
        return data


@dataclass(slots=True)
class ResolvedMedia:
    """A confirmed match together with its translated provider details."""

    decision: MatchDecision
    details: Dict[str, Any] = field(default_factory=dict)
    episode: Optional[EpisodeDescriptor] = None

    @property
    def title(self) -> Optional[str]:
        return self.details.get("title") or self.decision.name

    def to_dict(self) -> Dict[str, Any]:
        data = self.decision.as_dict()
        data.update(self.details)
        if self.episode is not None:
            data["episode"] = self.episode.as_dict()
        return data
