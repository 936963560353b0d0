"""HTTP client for the TMDB v3 REST API."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

import httpx

from ..config import TMDBSettings
from .models import EpisodeDetails, MovieDetails, TVDetails

LOGGER = logging.getLogger(__name__)

MAX_RETRIES = 3
RETRY_BACKOFF = 1.0
MAX_BACKOFF = 30.0

SEARCH_PATHS = {
    "movie": "/search/movie",
    "tv": "/search/tv",
}


class TMDBError(Exception):
    """Base exception for TMDB API errors."""


class TMDBNotFoundError(TMDBError):
    """Resource not found (404)."""


@dataclass(frozen=True, slots=True)
class SearchResponse:
    """Raw outcome of a search call; the status code is left for the caller to judge."""

    status_code: int
    body: str


class TMDBClient:
    """HTTP client for TMDB search and details endpoints.

    ``search`` hands back the raw status and body so the query engine can
    decide how to react to empty pages and rate limiting. The details calls
    retry rate-limited and failed requests themselves and return parsed models.
    """

    def __init__(
        self,
        settings: TMDBSettings,
        *,
        client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Credentials, base URL, language and timeout
            client: Optional pre-built httpx client (owned by the caller)
            sleep: Delay function used between retries
        """
        if not settings.has_credentials:
            raise ValueError("TMDB credentials are required: set tmdb.api_key or tmdb.access_token (TMDB_API_KEY)")

        self.settings = settings
        self.base_url = settings.base_url.rstrip("/")
        self._sleep = sleep

        headers = {"Accept": "application/json"}
        if settings.access_token:
            headers["Authorization"] = f"Bearer {settings.access_token}"

        if client is None:
            self._client = httpx.Client(timeout=settings.timeout, headers=headers)
            self._owns_client = True
        else:
            self._client = client
            self._client.headers.update(headers)
            self._owns_client = False

    def _params(self, extra: dict[str, Any] | None = None) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.settings.api_key and not self.settings.access_token:
            params["api_key"] = self.settings.api_key
        if self.settings.language:
            params["language"] = self.settings.language
        if extra:
            params.update(extra)
        return params

    def _send(self, path: str, params: dict[str, Any]) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            return self._client.get(url, params=params)
        except httpx.RequestError as exc:
            raise TMDBError(f"Request to {path} failed: {exc}") from exc

    def _get_json(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET ``path`` with retry logic and return the decoded body.

        Raises:
            TMDBNotFoundError: If resource not found (404)
            TMDBError: On other API errors
        """
        last_exception: Exception | None = None
        backoff = RETRY_BACKOFF

        for attempt in range(MAX_RETRIES):
            try:
                response = self._send(path, self._params(params))
                if response.status_code == 404:
                    raise TMDBNotFoundError(f"Resource not found: {path}")
                if response.status_code == 429:
                    retry_after = float(response.headers.get("Retry-After", backoff))
                    LOGGER.warning("Rate limited, waiting %.0f seconds", retry_after)
                    self._sleep(retry_after)
                    backoff = min(backoff * 2, MAX_BACKOFF)
                    continue
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as exc:
                last_exception = exc
            except TMDBNotFoundError:
                raise
            except TMDBError as exc:
                last_exception = exc

            if attempt < MAX_RETRIES - 1:
                LOGGER.debug("Request failed (attempt %d/%d): %s", attempt + 1, MAX_RETRIES, last_exception)
                self._sleep(backoff)
                backoff = min(backoff * 2, MAX_BACKOFF)

        raise TMDBError(f"Failed to fetch {path} after {MAX_RETRIES} attempts") from last_exception

    def search(self, term: str, media_type: str) -> SearchResponse:
        """Run a title search and return the raw response.

        Raises:
            ValueError: For a media type without a search endpoint
            TMDBError: If the request could not be sent
        """
        path = SEARCH_PATHS.get(media_type)
        if path is None:
            raise ValueError(f"Unsupported media type: {media_type!r}")
        response = self._send(path, self._params({"query": term}))
        return SearchResponse(status_code=response.status_code, body=response.text)

    def get_movie_details(self, movie_id: int) -> MovieDetails:
        LOGGER.debug("Fetching movie details: %s", movie_id)
        data = self._get_json(f"/movie/{movie_id}", {"append_to_response": "credits,external_ids"})
        return MovieDetails.model_validate(data)

    def get_tv_details(self, series_id: int) -> TVDetails:
        LOGGER.debug("Fetching tv details: %s", series_id)
        data = self._get_json(f"/tv/{series_id}", {"append_to_response": "external_ids"})
        return TVDetails.model_validate(data)

    def get_episode_info(self, series_id: int, season_number: int, episode_number: int) -> EpisodeDetails:
        LOGGER.debug("Fetching episode %s S%02dE%02d", series_id, season_number, episode_number)
        data = self._get_json(f"/tv/{series_id}/season/{season_number}/episode/{episode_number}")
        return EpisodeDetails.model_validate(data)

    def image_url(self, path: str | None, size: str = "original") -> str | None:
        if not path:
            return None
        return f"{self.settings.image_base_url.rstrip('/')}/{size}{path}"

    def close(self) -> None:
        """Close the HTTP client."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> TMDBClient:
        return self

    def __exit__(self, *args) -> None:
        self.close()
