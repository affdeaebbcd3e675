"""Unit tests for the free-text → discovery filter heuristics."""

from __future__ import annotations

from datetime import date

import pytest

from cineassist.models.movie import SortOrder
from cineassist.services.filter_extractor import GENRE_LEXICON, detect_genre, extract_filters

_TODAY = date(2024, 5, 10)


class TestDefaults:
    def test_unmatched_query_gets_defaults(self) -> None:
        filters = extract_filters("algo legal pra ver", today=_TODAY)
        assert filters.sort_order == SortOrder.POPULARITY_DESC.value
        assert filters.genre_id is None
        assert filters.release_date_from is None
        assert filters.release_date_to == "2024-12-31"
        assert filters.minimum_rating is None
        assert filters.minimum_vote_count == 200
        assert filters.original_language is None
        assert filters.region == "BR"
        assert filters.include_adult is False

    def test_empty_query_never_raises(self) -> None:
        assert extract_filters("", today=_TODAY).release_date_to == "2024-12-31"


class TestDates:
    def test_two_digit_decade(self) -> None:
        filters = extract_filters("filmes dos anos 80", today=_TODAY)
        assert filters.release_date_from == "1980-01-01"
        assert filters.release_date_to == "1989-12-31"

    def test_four_digit_decade(self) -> None:
        filters = extract_filters("anos 1990", today=_TODAY)
        assert filters.release_date_from == "1990-01-01"
        assert filters.release_date_to == "1999-12-31"

    @pytest.mark.parametrize("phrase", ["anos 80s", "anos 1980s"])
    def test_decade_with_plural_suffix(self, phrase: str) -> None:
        filters = extract_filters(f"terror dos {phrase}", today=_TODAY)
        assert filters.release_date_from == "1980-01-01"
        assert filters.release_date_to == "1989-12-31"

    def test_decade_needs_whole_number(self) -> None:
        filters = extract_filters("anos 198", today=_TODAY)
        assert filters.release_date_from is None
        assert filters.release_date_to == "2024-12-31"

    @pytest.mark.parametrize("phrase", ["últimos 30 anos", "ultimos 30 anos", "last 30 years"])
    def test_relative_span(self, phrase: str) -> None:
        filters = extract_filters(f"ficção dos {phrase}", today=_TODAY)
        assert filters.release_date_from == "1994-01-01"
        assert filters.release_date_to == "2024-12-31"


class TestGenreAndMood:
    def test_drama_cerebral(self) -> None:
        filters = extract_filters("quero um drama cerebral", today=_TODAY)
        assert filters.genre_id == 18
        assert filters.minimum_rating == 7.0
        assert filters.sort_order == SortOrder.RATING_DESC.value

    def test_first_lexicon_key_wins(self) -> None:
        # "ação" is declared before "comédia".
        assert detect_genre("comédia de ação") == 28

    def test_animation_is_not_action(self) -> None:
        assert detect_genre("uma animação para crianças") == 16

    @pytest.mark.parametrize(
        ("query", "genre_id"),
        [
            ("dramas dos anos 80", 18),
            ("comédias românticas", 35),
            ("thrillers psicológicos", 53),
            ("aventuras épicas", 12),
            ("fantasias medievais", 14),
            ("romances de época", 10749),
        ],
    )
    def test_plural_genre_words(self, query: str, genre_id: int) -> None:
        assert detect_genre(query) == genre_id

    def test_plural_suffix_still_needs_a_word_end(self) -> None:
        assert detect_genre("dramaturgia brasileira") is None
        assert detect_genre("animações de ação") == 28

    def test_melancholic_maps_to_drama_and_raises_rating(self) -> None:
        filters = extract_filters("algo melancólico", today=_TODAY)
        assert filters.genre_id == 18
        assert filters.minimum_rating == 7.0

    def test_case_insensitive(self) -> None:
        assert detect_genre("SCI-FI") == 878

    def test_lexicon_is_immutable(self) -> None:
        with pytest.raises(TypeError):
            GENRE_LEXICON["western"] = 37  # type: ignore[index]


class TestLanguage:
    @pytest.mark.parametrize("phrase", ["em inglês", "em ingles", "in english"])
    def test_english_phrases(self, phrase: str) -> None:
        assert extract_filters(f"suspense {phrase}", today=_TODAY).original_language == "en"


def test_query_params_use_tmdb_names() -> None:
    params = extract_filters("drama cerebral dos anos 80 em inglês", today=_TODAY).to_query_params()
    assert params == {
        "sort_by": "vote_average.desc",
        "include_adult": "false",
        "with_genres": 18,
        "primary_release_date.gte": "1980-01-01",
        "primary_release_date.lte": "1989-12-31",
        "vote_average.gte": 7.0,
        "vote_count.gte": 200,
        "with_original_language": "en",
        "region": "BR",
    }
