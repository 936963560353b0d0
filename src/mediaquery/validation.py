from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from jsonschema import Draft7Validator

from .utils import validate_url


@dataclass(slots=True)
class ValidationIssue:
    """Represents a single validation problem."""

    severity: str
    path: str
    message: str
    code: str


@dataclass(slots=True)
class ValidationReport:
    """Aggregates validation warnings and errors."""

    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "tmdb": {
            "type": "object",
            "properties": {
                "api_key": {"type": ["string", "null"]},
                "access_token": {"type": ["string", "null"]},
                "base_url": {"type": "string"},
                "image_base_url": {"type": "string"},
                "language": {"type": ["string", "null"]},
                "timeout": {"type": "number", "exclusiveMinimum": 0},
            },
            "additionalProperties": False,
        },
        "search": {
            "type": "object",
            "properties": {
                "rate_limit_backoff": {"type": "number", "minimum": 0},
                "parallel_directions": {"type": "boolean"},
                "substring_search": {"type": "boolean"},
                "extra_ignored_tokens": {"type": "array", "items": {"type": "string"}},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}


def _dotted_path(path: Sequence[Any]) -> str:
    rendered = ""
    for part in path:
        if isinstance(part, int):
            rendered += f"[{part}]"
        else:
            rendered += f".{part}" if rendered else str(part)
    return rendered or "<root>"


def _error(path: str, message: str, code: str) -> ValidationIssue:
    return ValidationIssue(severity="error", path=path, message=message, code=code)


def validate_config_data(data: Dict[str, Any]) -> ValidationReport:
    """Validate configuration data against schema and semantic rules.

    Args:
        data: The configuration data to validate, after environment expansion

    Returns:
        ValidationReport containing any errors or warnings found
    """
    report = ValidationReport()
    validator = Draft7Validator(CONFIG_SCHEMA)

    for error in sorted(validator.iter_errors(data), key=lambda exc: list(exc.absolute_path)):
        report.errors.append(_error(_dotted_path(error.absolute_path), error.message, "schema"))

    _validate_semantics(data, report)
    return report


def _validate_semantics(data: Dict[str, Any], report: ValidationReport) -> None:
    tmdb = data.get("tmdb") or {}
    if not isinstance(tmdb, dict):
        return

    for key in ("base_url", "image_base_url"):
        value = tmdb.get(key)
        if isinstance(value, str) and not validate_url(value.strip()):
            report.errors.append(_error(f"tmdb.{key}", f"'{value}' is not a valid http/https URL", "tmdb-url"))

    credentials = [tmdb.get("api_key"), tmdb.get("access_token")]
    if not any(isinstance(value, str) and value.strip() and not value.startswith("${") for value in credentials):
        report.warnings.append(
            ValidationIssue(
                severity="warning",
                path="tmdb",
                message="No TMDB credentials in the file; TMDB_API_KEY or TMDB_ACCESS_TOKEN must be set",
                code="tmdb-credentials",
            )
        )
