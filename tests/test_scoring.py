from __future__ import annotations

import pytest

from mediaquery.errors import NoMatchError
from mediaquery.matcher.scoring import build_candidates, score_candidates
from mediaquery.matcher.terms import SearchTerm
from mediaquery.tmdb.models import SearchResult

FILENAME = SearchTerm(("Movie", "Title", "2020"))
SEARCH = SearchTerm(("Movie", "Title"))


def result(**fields) -> SearchResult:
    return SearchResult.model_validate(fields)


CLOSE_OLD = result(id=1, title="Movie Title", release_date="1999-05-01")
FAR_NEW = result(id=2, title="Movie Title Returns Again", release_date="2020-03-01")
UNDATED = result(id=3, title="Movie Title")


class TestScoreCandidates:
    def test_lower_edit_distance_wins_without_year(self) -> None:
        decision = score_candidates(SEARCH, [FAR_NEW, CLOSE_OLD], FILENAME, None)
        assert decision.provider_id == 1
        assert decision.match_score == 0
        assert decision.year_matches is False

    def test_year_match_beats_edit_distance(self) -> None:
        decision = score_candidates(SEARCH, [CLOSE_OLD, FAR_NEW], FILENAME, 2020)
        assert decision.provider_id == 2
        assert decision.match_score > 0
        assert decision.year_matches is True

    def test_year_match_wins_regardless_of_order(self) -> None:
        decision = score_candidates(SEARCH, [FAR_NEW, CLOSE_OLD], FILENAME, 2020)
        assert decision.provider_id == 2

    def test_when_both_match_year_distance_decides(self) -> None:
        close_new = result(id=5, title="Movie Title", release_date="2020-07-07")
        decision = score_candidates(SEARCH, [FAR_NEW, close_new], FILENAME, 2020)
        assert decision.provider_id == 5
        assert decision.year_matches is True

    def test_ties_keep_the_first_candidate(self) -> None:
        first = result(id=10, title="Movie Title", release_date="2001-01-01")
        second = result(id=11, title="Movie Title", release_date="2002-01-01")
        decision = score_candidates(SEARCH, [first, second], FILENAME, None)
        assert decision.provider_id == 10

    def test_candidates_without_dates_are_discarded(self) -> None:
        decision = score_candidates(SEARCH, [UNDATED, FAR_NEW], FILENAME, None)
        assert decision.provider_id == 2

    def test_no_dated_candidates_is_no_match(self) -> None:
        with pytest.raises(NoMatchError):
            score_candidates(SEARCH, [UNDATED], FILENAME, None)
        with pytest.raises(NoMatchError):
            score_candidates(SEARCH, [], FILENAME, None)

    def test_tv_results_use_name_and_first_air_date(self) -> None:
        show = result(id=7, name="Movie Title", original_name="Movie Title", first_air_date="2020-01-01")
        decision = score_candidates(SEARCH, [show], FILENAME, 2020)
        assert decision.name == "Movie Title"
        assert decision.release_date == "2020-01-01"
        assert decision.year_matches is True

    def test_tv_results_score_the_original_name(self) -> None:
        show = result(id=71446, name="Money Heist", original_name="La casa de papel", first_air_date="2017-05-02")
        filename = SearchTerm(("La", "Casa", "De", "Papel", "S01E01"))
        decision = score_candidates(SearchTerm(("La", "Casa", "De", "Papel")), [show], filename, None)
        assert decision.name == "La casa de papel"
        assert decision.match_score == 0

    def test_year_matches_is_a_substring_check(self) -> None:
        decision = score_candidates(SEARCH, [CLOSE_OLD], FILENAME, 1999)
        assert decision.year_matches is True
        decision = score_candidates(SEARCH, [CLOSE_OLD], FILENAME, 2001)
        assert decision.year_matches is False

    def test_year_zero_is_no_hint(self) -> None:
        decision = score_candidates(SEARCH, [CLOSE_OLD], FILENAME, 0)
        assert decision.year_matches is False
        decision = score_candidates(SEARCH, [FAR_NEW, CLOSE_OLD], FILENAME, 0)
        assert decision.provider_id == 1


def test_scores_against_filename_not_search_term() -> None:
    # "2020" is only in the filename, so a title containing it scores perfectly
    titled = result(id=20, title="Title 2020", release_date="2010-01-01")
    candidates = build_candidates(SearchTerm(("Movie",)), [titled], FILENAME)
    assert candidates[0].match_score == 0
    assert candidates[0].search_term == "movie"
    assert candidates[0].release_year == 2010
