"""Translate a confirmed provider match into an output record.

Movies and TV series expose the same capabilities and are selected by the
media type tag through ``get_translator``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol

from .errors import InputError
from .models import MOVIE, TV, EpisodeDescriptor
from .parsers.episode import parse_episode

if TYPE_CHECKING:  # pragma: no cover
    from .tmdb.client import TMDBClient
    from .tmdb.models import MovieDetails, SearchResult, TVDetails

MAX_ACTORS = 3


def _join_names(people: list[Any], separator: str = ", ") -> str:
    return separator.join(person.name for person in people)


def _year_of(date: Optional[str]) -> Optional[str]:
    if not date:
        return None
    return date.split("-", 1)[0]


class MediaTranslator(Protocol):
    media_type: str

    def get_title(self, result: SearchResult) -> str: ...

    def get_release_year(self, result: SearchResult) -> Optional[str]: ...

    def get_details(self, provider_id: int) -> Dict[str, Any]: ...


class MovieTranslator:
    media_type = MOVIE

    def __init__(self, client: TMDBClient) -> None:
        self.client = client

    def get_title(self, result: SearchResult) -> str:
        return result.title or result.original_title or ""

    def get_release_year(self, result: SearchResult) -> Optional[str]:
        return _year_of(result.release_date)

    def get_details(self, provider_id: int) -> Dict[str, Any]:
        return movie_record(self.client.get_movie_details(provider_id))


class TVTranslator:
    media_type = TV

    def __init__(self, client: TMDBClient) -> None:
        self.client = client

    def get_title(self, result: SearchResult) -> str:
        return result.original_name or result.name or ""

    def get_release_year(self, result: SearchResult) -> Optional[str]:
        return _year_of(result.first_air_date)

    def get_details(self, provider_id: int) -> Dict[str, Any]:
        return tv_record(self.client.get_tv_details(provider_id))

    @staticmethod
    def parse_episode(filename: str) -> Optional[EpisodeDescriptor]:
        return parse_episode(filename)


def movie_record(details: MovieDetails) -> Dict[str, Any]:
    crew = details.credits.crew
    directors = [person for person in crew if person.job == "Director"]
    writers = [person for person in crew if person.job == "Screenplay"]
    actors = details.credits.cast[:MAX_ACTORS]

    return {
        "title": details.title,
        "media_type": MOVIE,
        "id": details.id,
        "long_plot": details.overview,
        "release_date": details.release_date,
        "poster_path": details.poster_path,
        "backdrop_path": details.backdrop_path,
        "budget": details.budget,
        "genres": [genre.name for genre in details.genres],
        "director": _join_names(directors),
        "writer": _join_names(writers),
        "actors": _join_names(actors),
        "imdb_id": details.imdb_id or "",
    }


def tv_record(details: TVDetails) -> Dict[str, Any]:
    return {
        "title": details.name,
        "media_type": TV,
        "id": details.id,
        "long_plot": details.overview,
        "release_date": details.first_air_date,
        "poster_path": details.poster_path,
        "backdrop_path": details.backdrop_path,
        "genres": [genre.name for genre in details.genres],
        "director": _join_names(details.created_by, ","),
        "writer": "",
        "actors": "",
        "imdb_id": details.external_ids.imdb_id or "",
    }


_TRANSLATORS = {
    MOVIE: MovieTranslator,
    TV: TVTranslator,
}


def get_translator(media_type: str, client: TMDBClient) -> MediaTranslator:
    try:
        translator_cls = _TRANSLATORS[media_type]
    except KeyError:
        raise InputError(f"Unsupported media type: {media_type!r}") from None
    return translator_cls(client)
