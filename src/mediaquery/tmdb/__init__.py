"""TMDB API client package."""

from __future__ import annotations

from .client import SearchResponse, TMDBClient, TMDBError, TMDBNotFoundError
from .models import (
    Credits,
    EpisodeDetails,
    MovieDetails,
    SearchPage,
    SearchResult,
    TVDetails,
)

__all__ = [
    "Credits",
    "EpisodeDetails",
    "MovieDetails",
    "SearchPage",
    "SearchResponse",
    "SearchResult",
    "TMDBClient",
    "TMDBError",
    "TMDBNotFoundError",
    "TVDetails",
]
