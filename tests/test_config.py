from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from mediaquery.config import (
    DEFAULT_BASE_URL,
    load_config,
    load_config_from_env,
    resolve_config,
)
from mediaquery.utils import parse_env_bool, validate_url

ENV_NAMES = (
    "TMDB_API_KEY",
    "TMDB_ACCESS_TOKEN",
    "TMDB_LANGUAGE",
    "MEDIAQUERY_CONFIG",
    "MEDIAQUERY_RATE_LIMIT_BACKOFF",
    "MEDIAQUERY_PARALLEL_DIRECTIONS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "mediaquery.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


def test_load_config_reads_both_sections(tmp_path) -> None:
    path = write_config(
        tmp_path,
        """
        tmdb:
          api_key: abc123
          language: de-DE
          timeout: 5
        search:
          rate_limit_backoff: 2.5
          parallel_directions: true
          substring_search: false
          extra_ignored_tokens: [PROPER, " Repack "]
        """,
    )

    config = load_config(path)

    assert config.tmdb.api_key == "abc123"
    assert config.tmdb.language == "de-DE"
    assert config.tmdb.timeout == 5.0
    assert config.tmdb.base_url == DEFAULT_BASE_URL
    assert config.search.rate_limit_backoff == 2.5
    assert config.search.parallel_directions is True
    assert config.search.substring_search is False
    assert config.search.extra_ignored_tokens == ["proper", "repack"]


def test_load_config_expands_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("TMDB_API_KEY", "from-env")
    path = write_config(
        tmp_path,
        """
        tmdb:
          api_key: ${TMDB_API_KEY}
          access_token: ${TMDB_ACCESS_TOKEN}
        """,
    )

    config = load_config(path)

    assert config.tmdb.api_key == "from-env"
    assert config.tmdb.access_token is None


def test_empty_file_gives_defaults(tmp_path) -> None:
    config = load_config(write_config(tmp_path, ""))
    assert config.tmdb.has_credentials is False
    assert config.search.rate_limit_backoff == 10.0
    assert config.search.parallel_directions is False


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("tmdb: [1, 2]\n", "'tmdb' must be provided as a mapping"),
        ("tmdb:\n  base_url: ftp://example.com\n", "'tmdb.base_url' must be a valid"),
        ("tmdb:\n  timeout: 0\n", "'tmdb.timeout' must be greater than 0"),
        ("tmdb:\n  timeout: soon\n", "'tmdb.timeout' must be a number"),
        ("search:\n  rate_limit_backoff: -1\n", "'search.rate_limit_backoff' must be greater"),
        ("search:\n  extra_ignored_tokens: proper\n", "'search.extra_ignored_tokens' must be provided as a list"),
        ("search:\n  extra_ignored_tokens: [1]\n", r"'search.extra_ignored_tokens\[0\]' must be a string"),
        ("search:\n  parallel_directions: maybe\n", "'search.parallel_directions' must be a boolean"),
        ("search:\n  substring_search: [1]\n", "'search.substring_search' must be a boolean"),
        ("- just\n- a list\n", "must contain a mapping at the top level"),
    ],
)
def test_invalid_config_is_rejected(tmp_path, content: str, message: str) -> None:
    path = write_config(tmp_path, content)
    with pytest.raises(ValueError, match=message):
        load_config(path)


def test_search_booleans_accept_quoted_strings(tmp_path) -> None:
    path = write_config(tmp_path, 'search:\n  parallel_directions: "false"\n  substring_search: "no"\n')
    config = load_config(path)
    assert config.search.parallel_directions is False
    assert config.search.substring_search is False

    config = load_config(write_config(tmp_path, 'search:\n  parallel_directions: "on"\n'))
    assert config.search.parallel_directions is True
    assert config.search.substring_search is True


def test_load_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("TMDB_ACCESS_TOKEN", " token ")
    monkeypatch.setenv("TMDB_LANGUAGE", "fr-FR")
    monkeypatch.setenv("MEDIAQUERY_RATE_LIMIT_BACKOFF", "3")
    monkeypatch.setenv("MEDIAQUERY_PARALLEL_DIRECTIONS", "yes")

    config = load_config_from_env()

    assert config.tmdb.access_token == "token"
    assert config.tmdb.api_key is None
    assert config.tmdb.language == "fr-FR"
    assert config.search.rate_limit_backoff == 3.0
    assert config.search.parallel_directions is True


def test_load_config_from_env_rejects_bad_backoff(monkeypatch) -> None:
    monkeypatch.setenv("MEDIAQUERY_RATE_LIMIT_BACKOFF", "later")
    with pytest.raises(ValueError, match="MEDIAQUERY_RATE_LIMIT_BACKOFF"):
        load_config_from_env()


def test_resolve_config_uses_config_env_path(tmp_path, monkeypatch) -> None:
    path = write_config(tmp_path, "search:\n  rate_limit_backoff: 1\n")
    monkeypatch.setenv("MEDIAQUERY_CONFIG", str(path))
    monkeypatch.setenv("TMDB_API_KEY", "env-key")

    config = resolve_config(None)

    assert config.search.rate_limit_backoff == 1.0
    assert config.tmdb.api_key == "env-key"


def test_resolve_config_prefers_file_credentials(tmp_path, monkeypatch) -> None:
    path = write_config(tmp_path, "tmdb:\n  api_key: file-key\n")
    monkeypatch.setenv("TMDB_API_KEY", "env-key")

    assert resolve_config(path).tmdb.api_key == "file-key"


def test_resolve_config_without_file_reads_env(monkeypatch) -> None:
    monkeypatch.setenv("TMDB_API_KEY", "env-key")
    assert resolve_config(None).tmdb.api_key == "env-key"


def test_resolve_config_missing_file(tmp_path) -> None:
    with pytest.raises(OSError):
        resolve_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", True), ("On", True), ("no", False), (" FALSE ", False), ("maybe", None), (None, None)],
)
def test_parse_env_bool(value, expected) -> None:
    assert parse_env_bool(value) is expected


def test_validate_url() -> None:
    assert validate_url("https://api.themoviedb.org/3")
    assert not validate_url("api.themoviedb.org")
    assert not validate_url(None)
