from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .utils import env_bool, env_str, load_yaml_file, parse_env_bool, validate_url

DEFAULT_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"


@dataclass
class TMDBSettings:
    """Connection settings for the TMDB API."""

    api_key: str | None = None
    access_token: str | None = None
    base_url: str = DEFAULT_BASE_URL
    image_base_url: str = DEFAULT_IMAGE_BASE_URL
    language: str | None = None
    timeout: float = 15.0

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key or self.access_token)


@dataclass
class SearchSettings:
    """Tuning knobs for the query-reduction engine."""

    rate_limit_backoff: float = 10.0
    parallel_directions: bool = False
    substring_search: bool = True
    extra_ignored_tokens: list[str] = field(default_factory=list)


@dataclass
class AppConfig:
    tmdb: TMDBSettings = field(default_factory=TMDBSettings)
    search: SearchSettings = field(default_factory=SearchSettings)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    # Unset ${VARS} survive os.path.expandvars verbatim
    if not text or text.startswith("${"):
        return None
    return text


def _build_tmdb_settings(data: dict[str, Any]) -> TMDBSettings:
    if not data:
        return TMDBSettings()
    if not isinstance(data, dict):
        raise ValueError("'tmdb' must be provided as a mapping when specified")

    base_url = str(data.get("base_url", DEFAULT_BASE_URL)).strip().rstrip("/") or DEFAULT_BASE_URL
    if not validate_url(base_url):
        raise ValueError(f"'tmdb.base_url' must be a valid http/https URL, got: {base_url}")

    image_base_url = str(data.get("image_base_url", DEFAULT_IMAGE_BASE_URL)).strip().rstrip("/")
    if not validate_url(image_base_url):
        raise ValueError(f"'tmdb.image_base_url' must be a valid http/https URL, got: {image_base_url}")

    try:
        timeout = float(data.get("timeout", 15.0))
    except (TypeError, ValueError) as exc:
        raise ValueError("'tmdb.timeout' must be a number") from exc
    if timeout <= 0:
        raise ValueError("'tmdb.timeout' must be greater than 0")

    return TMDBSettings(
        api_key=_optional_str(data.get("api_key")),
        access_token=_optional_str(data.get("access_token")),
        base_url=base_url,
        image_base_url=image_base_url,
        language=_optional_str(data.get("language")),
        timeout=timeout,
    )


def _build_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if isinstance(value, bool):
        return value
    parsed = parse_env_bool(value) if isinstance(value, str) else None
    if parsed is None:
        raise ValueError(f"'search.{key}' must be a boolean")
    return parsed


def _build_search_settings(data: dict[str, Any]) -> SearchSettings:
    if not data:
        return SearchSettings()
    if not isinstance(data, dict):
        raise ValueError("'search' must be provided as a mapping when specified")

    try:
        backoff = float(data.get("rate_limit_backoff", 10.0))
    except (TypeError, ValueError) as exc:
        raise ValueError("'search.rate_limit_backoff' must be a number") from exc
    if backoff < 0:
        raise ValueError("'search.rate_limit_backoff' must be greater than or equal to 0")

    extra_raw = data.get("extra_ignored_tokens", []) or []
    if not isinstance(extra_raw, list):
        raise ValueError("'search.extra_ignored_tokens' must be provided as a list when specified")
    extra: list[str] = []
    for index, token in enumerate(extra_raw):
        if not isinstance(token, str):
            raise ValueError(f"'search.extra_ignored_tokens[{index}]' must be a string")
        if token.strip():
            extra.append(token.strip().lower())

    return SearchSettings(
        rate_limit_backoff=backoff,
        parallel_directions=_build_bool(data, "parallel_directions", False),
        substring_search=_build_bool(data, "substring_search", True),
        extra_ignored_tokens=extra,
    )


def load_config(path: Path) -> AppConfig:
    data = load_yaml_file(path)
    return AppConfig(
        tmdb=_build_tmdb_settings(data.get("tmdb", {}) or {}),
        search=_build_search_settings(data.get("search", {}) or {}),
    )


def load_config_from_env() -> AppConfig:
    """Build configuration from ``TMDB_*`` and ``MEDIAQUERY_*`` environment variables."""
    tmdb = TMDBSettings(
        api_key=env_str("TMDB_API_KEY"),
        access_token=env_str("TMDB_ACCESS_TOKEN"),
        language=env_str("TMDB_LANGUAGE"),
    )
    search = SearchSettings()

    backoff = env_str("MEDIAQUERY_RATE_LIMIT_BACKOFF")
    if backoff is not None:
        try:
            search.rate_limit_backoff = float(backoff)
        except ValueError as exc:
            raise ValueError("MEDIAQUERY_RATE_LIMIT_BACKOFF must be a number") from exc

    parallel = env_bool("MEDIAQUERY_PARALLEL_DIRECTIONS")
    if parallel is not None:
        search.parallel_directions = parallel

    return AppConfig(tmdb=tmdb, search=search)


def resolve_config(path: Optional[Path]) -> AppConfig:
    """Load ``path`` when given (or named by ``MEDIAQUERY_CONFIG``), else read the environment.

    Credentials missing from the file are filled in from the environment.
    """
    if path is None:
        env_path = os.getenv("MEDIAQUERY_CONFIG")
        path = Path(env_path).expanduser() if env_path else None
    if path is None:
        return load_config_from_env()

    config = load_config(path)
    if not config.tmdb.has_credentials:
        config.tmdb.api_key = env_str("TMDB_API_KEY")
        config.tmdb.access_token = env_str("TMDB_ACCESS_TOKEN")
    return config
