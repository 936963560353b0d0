from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from textwrap import wrap
from typing import Union

DEFAULT_WRAP_WIDTH = 100
DEFAULT_LABEL_WIDTH = 18
DEFAULT_INDENT = "    "
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s\n%(message)s\n"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

FieldMapping = Union[Mapping[str, object], Sequence[tuple[str, object]]]


def _stringify(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple, set)):
        return ", ".join(_stringify(item) for item in value)
    return str(value)


def render_fields_block(
    title: str,
    fields: FieldMapping,
    *,
    wrap_width: int = DEFAULT_WRAP_WIDTH,
    indent: str = DEFAULT_INDENT,
) -> str:
    """Render ``fields`` as an underlined title followed by aligned ``label: value`` lines."""
    items = list(fields.items()) if isinstance(fields, Mapping) else list(fields)
    lines = [title, "-" * len(title)]
    if not items:
        return "\n".join(lines)

    label_width = max(min(max(len(str(key)) for key, _ in items), DEFAULT_LABEL_WIDTH), 8)
    value_width = max(wrap_width - len(indent) - label_width - 4, 32)

    for key, value in items:
        wrapped = wrap(_stringify(value), width=value_width) or [""]
        lines.append(f"{indent}{str(key):<{label_width}}: {wrapped[0]}")
        for continuation in wrapped[1:]:
            lines.append(f"{indent}{'':<{label_width}}  {continuation}")
    return "\n".join(lines).rstrip()


def configure_logging(level: int | str = logging.INFO) -> None:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, force=True)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
