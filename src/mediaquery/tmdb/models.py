"""Pydantic models for TMDB API responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SearchResult(BaseModel):
    """A single hit from ``/search/movie`` or ``/search/tv``."""

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str | None = None
    original_title: str | None = None
    name: str | None = None
    original_name: str | None = None
    release_date: str | None = None
    first_air_date: str | None = None
    overview: str | None = None
    popularity: float | None = None

    @property
    def display_title(self) -> str:
        return self.title or self.original_name or self.name or self.original_title or ""

    @property
    def date(self) -> str:
        return self.release_date or self.first_air_date or ""


class SearchPage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    page: int = 1
    total_results: int = 0
    total_pages: int = 0
    results: list[SearchResult] = Field(default_factory=list)


class Genre(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str


class Person(BaseModel):
    """Cast, crew, creator or guest-star entry."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str
    job: str | None = None
    character: str | None = None
    profile_path: str | None = None
    order: int | None = None


class Credits(BaseModel):
    model_config = ConfigDict(extra="ignore")

    cast: list[Person] = Field(default_factory=list)
    crew: list[Person] = Field(default_factory=list)


class ExternalIds(BaseModel):
    model_config = ConfigDict(extra="ignore")

    imdb_id: str | None = None
    tvdb_id: int | None = None


class MovieDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    original_title: str | None = None
    overview: str | None = None
    release_date: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    budget: int | None = None
    runtime: int | None = None
    imdb_id: str | None = None
    genres: list[Genre] = Field(default_factory=list)
    credits: Credits = Field(default_factory=Credits)


class TVDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    original_name: str | None = None
    overview: str | None = None
    first_air_date: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    number_of_seasons: int | None = None
    genres: list[Genre] = Field(default_factory=list)
    created_by: list[Person] = Field(default_factory=list)
    external_ids: ExternalIds = Field(default_factory=ExternalIds)


class EpisodeDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str | None = None
    overview: str | None = None
    air_date: str | None = None
    season_number: int
    episode_number: int
    still_path: str | None = None
    guest_stars: list[Person] = Field(default_factory=list)
