from __future__ import annotations

from typing import Iterable, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .matcher.terms import SearchTerm
from .models import EpisodeDescriptor, ResolvedMedia
from .validation import ValidationReport

SUCCESS_COLOR = "green"
WARNING_COLOR = "yellow"
ERROR_COLOR = "red"
DIM_COLOR = "dim"

SUCCESS_SYMBOL = "✓"
WARNING_SYMBOL = "⚠"
ERROR_SYMBOL = "✗"


class ResultTableRenderer:
    """Renders resolved media, episode descriptors and search terms as Rich tables."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    @staticmethod
    def _year_cell(year_matches: bool) -> str:
        if year_matches:
            return f"[{SUCCESS_COLOR}]{SUCCESS_SYMBOL} yes[/{SUCCESS_COLOR}]"
        return f"[{DIM_COLOR}]no[/{DIM_COLOR}]"

    @staticmethod
    def _score_cell(score: int) -> str:
        color = SUCCESS_COLOR if score == 0 else WARNING_COLOR
        return f"[{color}]{score}[/{color}]"

    def render_resolved_table(self, results: Iterable[Tuple[str, ResolvedMedia | str]]) -> Table:
        """Build a table with one row per input file.

        ``results`` pairs each filename with either its resolution or an error message.
        """
        table = Table(title="Matches", show_header=True, header_style="bold")
        table.add_column("File", style="cyan", no_wrap=True)
        table.add_column("Title")
        table.add_column("TMDB id", justify="right")
        table.add_column("Released")
        table.add_column("Score", justify="right")
        table.add_column("Year", justify="center")
        table.add_column("Episode")

        for filename, outcome in results:
            if isinstance(outcome, str):
                table.add_row(
                    escape(filename),
                    f"[{ERROR_COLOR}]{ERROR_SYMBOL} {escape(outcome)}[/{ERROR_COLOR}]",
                    "",
                    "",
                    "",
                    "",
                    "",
                )
                continue
            decision = outcome.decision
            table.add_row(
                escape(filename),
                escape(outcome.title or ""),
                str(decision.provider_id),
                outcome.details.get("release_date") or decision.release_date or "",
                self._score_cell(decision.match_score),
                self._year_cell(decision.year_matches),
                escape(format_episode(outcome.episode)),
            )
        return table

    def render_episode_table(self, filename: str, episode: Optional[EpisodeDescriptor]) -> Table:
        table = Table(title="Episode", show_header=True, header_style="bold")
        table.add_column("File", style="cyan", no_wrap=True)
        table.add_column("Season", justify="right")
        table.add_column("Episode", justify="right")
        if episode is None:
            table.add_row(escape(filename), f"[{DIM_COLOR}]-[/{DIM_COLOR}]", f"[{DIM_COLOR}]-[/{DIM_COLOR}]")
        else:
            table.add_row(escape(filename), str(episode.season_number), str(episode.episode_number))
        return table

    def render_term_table(self, filename: str, term: Optional[SearchTerm]) -> Table:
        table = Table(title="Search term", show_header=True, header_style="bold")
        table.add_column("File", style="cyan", no_wrap=True)
        table.add_column("Tokens", justify="right")
        table.add_column("Term")
        if term is None:
            table.add_row(escape(filename), "0", f"[{WARNING_COLOR}]{WARNING_SYMBOL} nothing left after sanitizing[/{WARNING_COLOR}]")
        else:
            table.add_row(escape(filename), str(len(term)), term.joined)
        return table

    def render_validation_table(self, report: ValidationReport) -> Table:
        table = Table(title="Validation", show_header=True, header_style="bold")
        table.add_column("Severity")
        table.add_column("Path", style="cyan", no_wrap=True)
        table.add_column("Problem")
        for issue in report.errors:
            table.add_row(f"[{ERROR_COLOR}]{ERROR_SYMBOL} error[/{ERROR_COLOR}]", escape(issue.path), escape(issue.message))
        for issue in report.warnings:
            table.add_row(f"[{WARNING_COLOR}]{WARNING_SYMBOL} warning[/{WARNING_COLOR}]", escape(issue.path), escape(issue.message))
        return table

    def print_validation_report(self, report: ValidationReport) -> None:
        if report.errors or report.warnings:
            self.print(self.render_validation_table(report))
        if report.is_valid:
            suffix = " (with warnings)" if report.warnings else ""
            self.console.print(f"[bold {SUCCESS_COLOR}]{SUCCESS_SYMBOL} Configuration passed validation{suffix}.[/bold {SUCCESS_COLOR}]")

    def print(self, table: Table) -> None:
        self.console.print(table)


def format_episode(episode: Optional[EpisodeDescriptor]) -> str:
    if episode is None:
        return ""
    label = f"S{episode.season_number:02d}E{episode.episode_number:02d}"
    if episode.name:
        label = f"{label} {episode.name}"
    return label
