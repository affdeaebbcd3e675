"""Free text → TMDB discovery filters, using fixed keyword heuristics.

This is the fallback understanding layer for queries keyword search
cannot answer ("um drama cerebral dos anos 80 em inglês").  Every
heuristic runs independently over a lower-cased copy of the query:

    relative span   "últimos 30 anos" / "last 30 years"  → release_date_from
    decade          "anos 80" / "anos 1990" / "anos 80s" → from/to span
    genre           first lexicon key found (or plural)   → genre_id
    mood            "cerebral", "melancólico", ...        → rating ≥ 7, rating sort
    language        "em inglês" / "in english"            → original_language

Defaults bias discovery toward well-known, regionally relevant titles:
popularity sort, no adult titles, region BR, at least 200 votes, and a
release window closed at the end of the current year.

The lexicons are immutable module data; nothing here mutates state.
"""

from __future__ import annotations

import re
from datetime import date
from types import MappingProxyType

from cineassist.models.movie import DiscoverFilters, SortOrder

# TMDB movie genre ids.
_ACTION = 28
_ADVENTURE = 12
_ANIMATION = 16
_COMEDY = 35
_CRIME = 80
_DRAMA = 18
_FANTASY = 14
_HORROR = 27
_ROMANCE = 10749
_SCIENCE_FICTION = 878
_THRILLER = 53

# Declaration order is the match priority: the first key found in the
# query wins and genres are never combined.
GENRE_LEXICON: MappingProxyType[str, int] = MappingProxyType({
    "ação": _ACTION,
    "acao": _ACTION,
    "action": _ACTION,
    "sci-fi": _SCIENCE_FICTION,
    "ficção científica": _SCIENCE_FICTION,
    "ficcao cientifica": _SCIENCE_FICTION,
    "science fiction": _SCIENCE_FICTION,
    "drama": _DRAMA,
    "comédia": _COMEDY,
    "comedia": _COMEDY,
    "comedy": _COMEDY,
    "thriller": _THRILLER,
    "suspense": _THRILLER,
    "animação": _ANIMATION,
    "animacao": _ANIMATION,
    "animation": _ANIMATION,
    "terror": _HORROR,
    "horror": _HORROR,
    "romance": _ROMANCE,
    "aventura": _ADVENTURE,
    "adventure": _ADVENTURE,
    "crime": _CRIME,
    "fantasia": _FANTASY,
    "fantasy": _FANTASY,
    "melancólico": _DRAMA,
    "melancolico": _DRAMA,
    "melancholic": _DRAMA,
    "triste": _DRAMA,
    "sad": _DRAMA,
})

CEREBRAL_KEYWORDS: tuple[str, ...] = (
    "cerebral",
    "reflexivo",
    "reflective",
    "mind-bending",
    "mind bending",
)
MELANCHOLIC_KEYWORDS: tuple[str, ...] = (
    "melancólico",
    "melancolico",
    "melancholic",
    "triste",
    "sad",
)
RELATIVE_SPAN_PHRASES: tuple[str, ...] = (
    "últimos 30 anos",
    "ultimos 30 anos",
    "last 30 years",
)
ENGLISH_LANGUAGE_PHRASES: tuple[str, ...] = (
    "em inglês",
    "em ingles",
    "in english",
)

_RELATIVE_SPAN_YEARS = 30
_DECADE_PATTERN = re.compile(r"\banos\s+(\d{4}|\d{2})s?\b")

_MOOD_MINIMUM_RATING = 7.0
_DEFAULT_MINIMUM_VOTES = 200
_DEFAULT_REGION = "BR"


def _word_pattern(keyword: str, plural: bool = False) -> re.Pattern[str]:
    # Whole words only: "ação" must not fire inside "animação", "sad" inside "mesada".
    suffix = r"(?:s|es)?" if plural else ""
    return re.compile(rf"(?<!\w){re.escape(keyword)}{suffix}(?!\w)")


_GENRE_PATTERNS: tuple[tuple[re.Pattern[str], int], ...] = tuple(
    (_word_pattern(keyword, plural=True), genre_id) for keyword, genre_id in GENRE_LEXICON.items()
)
_MOOD_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    _word_pattern(keyword) for keyword in CEREBRAL_KEYWORDS + MELANCHOLIC_KEYWORDS
)


def _contains_any(text: str, phrases: tuple[str, ...]) -> bool:
    return any(phrase in text for phrase in phrases)


def detect_genre(query: str) -> int | None:
    """Return the TMDB genre id of the first lexicon key found in *query*."""
    lowered = (query or "").lower()
    for pattern, genre_id in _GENRE_PATTERNS:
        if pattern.search(lowered):
            return genre_id
    return None


def _decade_span(lowered: str) -> tuple[int, int] | None:
    match = _DECADE_PATTERN.search(lowered)
    if match is None:
        return None
    digits = match.group(1)
    start = 1900 + int(digits) if len(digits) == 2 else int(digits)
    return start, start + 9


def extract_filters(query: str, today: date | None = None) -> DiscoverFilters:
    """Build discovery filters from the keyword heuristics described above.

    Parameters
    ----------
    query:
        Free-text user query, any casing.
    today:
        Reference date for "current year" computations; defaults to
        :func:`date.today`.

    Returns
    -------
    DiscoverFilters
        Always a valid filter set; defaults only when nothing matched.
    """
    lowered = (query or "").lower()
    current_year = (today or date.today()).year

    start_year: int | None = None
    end_year = current_year

    if _contains_any(lowered, RELATIVE_SPAN_PHRASES):
        start_year = current_year - _RELATIVE_SPAN_YEARS

    decade = _decade_span(lowered)
    if decade is not None:
        start_year, end_year = decade

    moody = any(pattern.search(lowered) for pattern in _MOOD_PATTERNS)

    return DiscoverFilters(
        sort_order=SortOrder.RATING_DESC if moody else SortOrder.POPULARITY_DESC,
        genre_id=detect_genre(lowered),
        release_date_from=f"{start_year}-01-01" if start_year is not None else None,
        release_date_to=f"{end_year}-12-31",
        minimum_rating=_MOOD_MINIMUM_RATING if moody else None,
        minimum_vote_count=_DEFAULT_MINIMUM_VOTES,
        original_language="en" if _contains_any(lowered, ENGLISH_LANGUAGE_PHRASES) else None,
        region=_DEFAULT_REGION,
        include_adult=False,
    )
