from __future__ import annotations

import argparse
import shutil
from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

MAX_HELP_WIDTH = 120
HEADING_STYLE = "bold bright_cyan"

Pairs = Sequence[tuple[str, str]]


class RichHelpFormatter(argparse.HelpFormatter):
    """Argparse formatter that styles section headings and appends
    example commands and environment variables.

    argparse builds the formatter itself, so the extra sections are class
    attributes; use ``formatter_with`` to bind them. Output stays plain when
    the console is not a terminal.
    """

    examples: Pairs = ()
    env_vars: Pairs = ()

    def __init__(
        self,
        prog: str,
        indent_increment: int = 2,
        max_help_position: int = 24,
        width: int | None = None,
        console: Console | None = None,
    ) -> None:
        super().__init__(
            prog=prog,
            indent_increment=indent_increment,
            max_help_position=max_help_position,
            width=width or min(shutil.get_terminal_size().columns, MAX_HELP_WIDTH),
        )
        self.console = console or Console()

    def format_help(self) -> str:
        plain = super().format_help()
        if not self.console.is_terminal:
            return plain

        blocks = [self._style_headings(plain)]
        if self.examples:
            blocks.append(self._render_examples(self.examples))
        if self.env_vars:
            blocks.append(self._render_env_vars(self.env_vars))
        return "\n".join(blocks)

    def _heading(self, title: str) -> str:
        with self.console.capture() as capture:
            self.console.print(Text(title, style=HEADING_STYLE))
        return capture.get().rstrip("\n")

    def _style_headings(self, plain: str) -> str:
        # argparse headings are unindented lines ending in ':' ("options:")
        lines = []
        for line in plain.splitlines():
            if line and not line[0].isspace() and line.endswith(":"):
                lines.append(self._heading(line))
            else:
                lines.append(line)
        return "\n".join(lines)

    def _render_examples(self, examples: Pairs) -> str:
        with self.console.capture() as capture:
            self.console.print(Text("Examples:", style=HEADING_STYLE))
            for index, (description, command) in enumerate(examples, 1):
                self.console.print(Text.assemble((f"  {index}. ", "dim cyan"), (description, "bright_white")))
                self.console.print(f"     $ {command}", style="bright_yellow", highlight=False)
        return capture.get()

    def _render_env_vars(self, env_vars: Pairs) -> str:
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Variable", style="bright_green bold", no_wrap=True)
        table.add_column("Description", style="bright_white")
        for name, description in env_vars:
            table.add_row(name, description)

        with self.console.capture() as capture:
            self.console.print(Text("Environment Variables:", style=HEADING_STYLE))
            self.console.print(table)
        return capture.get()


def formatter_with(examples: Pairs | None = None, env_vars: Pairs | None = None) -> type[RichHelpFormatter]:
    """Return a ``RichHelpFormatter`` subclass carrying ``examples`` and ``env_vars``."""
    return type(
        "MediaQueryHelpFormatter",
        (RichHelpFormatter,),
        {"examples": tuple(examples or ()), "env_vars": tuple(env_vars or ())},
    )
