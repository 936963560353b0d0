from __future__ import annotations

from rich.console import Console

from mediaquery.matcher.terms import SearchTerm
from mediaquery.models import EpisodeDescriptor, MatchDecision, ResolvedMedia
from mediaquery.result_table import (
    DIM_COLOR,
    SUCCESS_COLOR,
    WARNING_COLOR,
    ResultTableRenderer,
    format_episode,
)


def make_console() -> Console:
    return Console(record=True, width=200, color_system=None)


def resolved(name: str = "Game of Thrones", score: int = 0, episode: EpisodeDescriptor | None = None) -> ResolvedMedia:
    decision = MatchDecision(
        name=name,
        provider_id=1399,
        match_score=score,
        year_matches=True,
        filename="got.S03E09.mkv",
        media_type="tv",
        release_date="2011-04-17",
    )
    return ResolvedMedia(decision=decision, details={"title": name}, episode=episode)


class TestCellHelpers:
    def test_score_cell_colors(self) -> None:
        assert SUCCESS_COLOR in ResultTableRenderer._score_cell(0)
        assert WARNING_COLOR in ResultTableRenderer._score_cell(3)

    def test_year_cell(self) -> None:
        assert "yes" in ResultTableRenderer._year_cell(True)
        assert DIM_COLOR in ResultTableRenderer._year_cell(False)


class TestResultTableRenderer:
    def test_resolved_rows_and_errors(self) -> None:
        console = make_console()
        renderer = ResultTableRenderer(console)
        episode = EpisodeDescriptor(season_number=3, episode_number=9, name="The Rains of Castamere")

        renderer.print(
            renderer.render_resolved_table(
                [
                    ("got.S03E09.mkv", resolved(episode=episode)),
                    ("[rarbg] xyzoiujdpu.mkv", "No Filename for Query"),
                ]
            )
        )

        output = console.export_text()
        assert "Game of Thrones" in output
        assert "1399" in output
        assert "2011-04-17" in output
        assert "S03E09 The Rains of Castamere" in output
        assert "[rarbg] xyzoiujdpu.mkv" in output
        assert "No Filename for Query" in output

    def test_episode_table(self) -> None:
        console = make_console()
        renderer = ResultTableRenderer(console)

        renderer.print(renderer.render_episode_table("show.2x01.mkv", EpisodeDescriptor(2, 1)))
        renderer.print(renderer.render_episode_table("movie.mkv", None))

        output = console.export_text()
        assert "show.2x01.mkv" in output
        assert "movie.mkv" in output

    def test_term_table(self) -> None:
        console = make_console()
        renderer = ResultTableRenderer(console)

        renderer.print(renderer.render_term_table("Movie.Title.mkv", SearchTerm(("Movie", "Title"))))
        renderer.print(renderer.render_term_table("720p.mkv", None))

        output = console.export_text()
        assert "Movie+Title" in output
        assert "nothing left after sanitizing" in output


def test_format_episode() -> None:
    assert format_episode(None) == ""
    assert format_episode(EpisodeDescriptor(1, 2)) == "S01E02"
    assert format_episode(EpisodeDescriptor(12, 5, name="Pilot")) == "S12E05 Pilot"
