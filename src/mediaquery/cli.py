from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml
from rich.console import Console

from .config import resolve_config
from .errors import InputError, MediaQueryError
from .help_formatter import formatter_with
from .logging_utils import configure_logging
from .matcher.terms import sanitize
from .models import MEDIA_TYPES, ResolvedMedia
from .parsers.episode import parse_episode
from .resolver import MediaResolver
from .result_table import ResultTableRenderer
from .tmdb.client import TMDBError
from .utils import load_yaml_file
from .validation import validate_config_data

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_PROVIDER_ERROR = 2

EXAMPLES = [
    ("Match a TV episode", "mediaquery resolve Game.of.Thrones.S03E09.HDTV.x264-EVOLVE.mp4 --type tv"),
    ("Match a movie with a known year", "mediaquery resolve Movie.Title.1080p.BluRay.mkv --type movie --year 2020"),
    ("Print the sanitized search term", "mediaquery sanitize Movie.Title.2020.1080p.BluRay.x264.mkv"),
    ("Check a config file", "mediaquery --config mediaquery.yaml validate-config"),
]

ENV_VARS = [
    ("TMDB_API_KEY", "TMDB v3 API key"),
    ("TMDB_ACCESS_TOKEN", "TMDB v4 read access token (used instead of the API key)"),
    ("MEDIAQUERY_CONFIG", "Path to a YAML config file"),
    ("MEDIAQUERY_RATE_LIMIT_BACKOFF", "Seconds to wait after a rate-limited search"),
]


def build_parser() -> argparse.ArgumentParser:
    formatter = formatter_with(EXAMPLES, ENV_VARS)
    parser = argparse.ArgumentParser(
        prog="mediaquery",
        description="Match noisy media filenames to TMDB movies and TV series.",
        formatter_class=formatter,
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to YAML config")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-level", default=None, help="Explicit log level (DEBUG, INFO, WARNING, ...)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve = subparsers.add_parser("resolve", help="Match filenames against TMDB", formatter_class=formatter)
    resolve.add_argument("filenames", nargs="+", help="Media filenames or paths")
    resolve.add_argument("--type", dest="media_type", choices=MEDIA_TYPES, required=True, help="Media type")
    resolve.add_argument("--year", type=int, default=None, help="Release year hint")
    resolve.add_argument("--json", action="store_true", help="Print results as JSON")

    episode = subparsers.add_parser("episode", help="Parse season/episode numbers", formatter_class=formatter)
    episode.add_argument("filename")

    sanitize_cmd = subparsers.add_parser("sanitize", help="Show the search term for a filename", formatter_class=formatter)
    sanitize_cmd.add_argument("filename")

    subparsers.add_parser("validate-config", help="Validate a YAML config file", formatter_class=formatter)

    return parser


def _log_level(args: argparse.Namespace) -> int | str:
    if args.log_level:
        return args.log_level
    return logging.DEBUG if args.verbose else logging.WARNING


def run_resolve(args: argparse.Namespace, console: Console) -> int:
    try:
        config = resolve_config(args.config)
        resolver = MediaResolver(config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        LOGGER.error("Failed to load config: %s", exc)
        return EXIT_INPUT_ERROR

    outcomes: list[tuple[str, ResolvedMedia | str]] = []
    exit_code = EXIT_OK
    with resolver:
        for filename in args.filenames:
            try:
                outcomes.append((filename, resolver.lookup(filename, args.media_type, args.year)))
            except InputError as exc:
                LOGGER.warning("No match for %s: %s", filename, exc)
                outcomes.append((filename, str(exc)))
                exit_code = max(exit_code, EXIT_INPUT_ERROR)
            except (MediaQueryError, TMDBError) as exc:
                LOGGER.error("Provider error for %s: %s", filename, exc)
                outcomes.append((filename, str(exc)))
                exit_code = EXIT_PROVIDER_ERROR

    if args.json:
        payload = [
            outcome.to_dict() if isinstance(outcome, ResolvedMedia) else {"filename": filename, "error": outcome}
            for filename, outcome in outcomes
        ]
        console.print_json(json.dumps(payload if len(payload) > 1 else payload[0]))
    else:
        renderer = ResultTableRenderer(console)
        renderer.print(renderer.render_resolved_table(outcomes))
    return exit_code


def run_episode(args: argparse.Namespace, console: Console) -> int:
    episode = parse_episode(args.filename)
    renderer = ResultTableRenderer(console)
    renderer.print(renderer.render_episode_table(args.filename, episode))
    return EXIT_OK if episode is not None else EXIT_INPUT_ERROR


def run_sanitize(args: argparse.Namespace, console: Console) -> int:
    term = sanitize(args.filename)
    renderer = ResultTableRenderer(console)
    renderer.print(renderer.render_term_table(args.filename, term))
    return EXIT_OK if term is not None else EXIT_INPUT_ERROR


def run_validate_config(args: argparse.Namespace, console: Console) -> int:
    path = args.config
    if path is None:
        env_path = os.getenv("MEDIAQUERY_CONFIG")
        path = Path(env_path).expanduser() if env_path else None
    if path is None:
        LOGGER.error("No config file given: pass --config or set MEDIAQUERY_CONFIG")
        return EXIT_INPUT_ERROR

    try:
        data = load_yaml_file(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        LOGGER.error("Failed to read %s: %s", path, exc)
        return EXIT_INPUT_ERROR

    report = validate_config_data(data)
    ResultTableRenderer(console).print_validation_report(report)
    return EXIT_OK if report.is_valid else EXIT_INPUT_ERROR


COMMANDS = {
    "resolve": run_resolve,
    "episode": run_episode,
    "sanitize": run_sanitize,
    "validate-config": run_validate_config,
}


def main(argv: Optional[Sequence[str]] = None, *, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(_log_level(args))
    except ValueError as exc:
        parser.error(str(exc))

    return COMMANDS[args.command](args, console or Console())


if __name__ == "__main__":
    sys.exit(main())
