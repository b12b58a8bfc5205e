"""Read-only report operations over an immutable set of catalog records."""
from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from catalog.errors import DuplicateRecordError, ReportParameterError
from catalog.schema import CatalogSummary, ContentKind, ContentRecord
from utils.logging import get_logger

from .rows import ActorCount, CategoryCount, CountryCount, GenreCount, KindCount, RatingCount, YearShare

LOGGER = get_logger(__name__)

BAD_KEYWORDS: Tuple[str, ...] = ("kill", "violence")
MATCH_MODES = ("exact", "substring")
TIE_MODES = ("all", "first")
RANK_MODES = ("count", "percentage")
WINDOW_MODES = ("inclusive", "exclusive")


def _check_choice(name: str, value: str, choices: Sequence[str]) -> str:
    if value not in choices:
        raise ReportParameterError(f"{name} must be one of {list(choices)}; got {value!r}")
    return value


def _check_non_negative(name: str, value: int) -> int:
    if value < 0:
        raise ReportParameterError(f"{name} must be >= 0; got {value}")
    return value


def _ranked(counts: Counter, limit: Optional[int] = None) -> List[Tuple[str, int]]:
    """Sort by descending count, then label, so ties at the cut-off are deterministic."""

    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return ordered if limit is None else ordered[:limit]


def _years_before(day: date, years: int) -> date:
    year = day.year - years
    if year < date.min.year:
        raise ReportParameterError(f"years must not reach before year {date.min.year}; got {years}")
    try:
        return day.replace(year=year)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=year, day=28)


def _name_matches(entries: Iterable[str], name: str, match: str, ignore_case: bool) -> bool:
    needle = name.casefold() if ignore_case else name
    for entry in entries:
        candidate = entry.casefold() if ignore_case else entry
        if match == "exact" and candidate == needle:
            return True
        if match == "substring" and needle in candidate:
            return True
    return False


def classify_description(description: str, keywords: Sequence[str] = BAD_KEYWORDS) -> str:
    """Return ``"Bad"`` if ``description`` mentions any keyword, otherwise ``"Good"``."""

    text = description.casefold()
    return "Bad" if any(keyword.casefold() in text for keyword in keywords) else "Good"


class CatalogReportEngine:
    """Compute the catalog reports over a record set loaded once."""

    def __init__(self, records: Iterable[ContentRecord]) -> None:
        records = tuple(records)
        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                raise DuplicateRecordError(record.id)
            seen.add(record.id)
        self._records: Tuple[ContentRecord, ...] = records
        LOGGER.debug("Report engine holds %d records", len(records))

    @property
    def records(self) -> Tuple[ContentRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def _of_kind(self, kind: ContentKind) -> Iterable[ContentRecord]:
        return (record for record in self._records if record.kind is kind)

    def _listing_country(self, country: str) -> Iterable[ContentRecord]:
        wanted = country.strip().casefold()
        return (
            record
            for record in self._records
            if any(entry.casefold() == wanted for entry in record.countries)
        )

    def summary(self) -> CatalogSummary:
        return CatalogSummary.from_records(self._records)

    def type_distribution(self) -> List[KindCount]:
        counts = Counter(record.kind for record in self._records)
        return [KindCount(kind=kind.value, count=counts[kind]) for kind in ContentKind if counts[kind]]

    def most_common_rating(self, ties: str = "all") -> List[RatingCount]:
        """Most frequent rating per kind.

        ``ties="all"`` keeps every rating sharing the top count (ordered by
        rating); ``ties="first"`` keeps only the alphabetically first one.
        """

        _check_choice("ties", ties, TIE_MODES)
        grouped: Dict[ContentKind, Counter] = {}
        for record in self._records:
            if record.rating is None:
                continue
            grouped.setdefault(record.kind, Counter())[record.rating] += 1

        rows: List[RatingCount] = []
        for kind in ContentKind:
            counts = grouped.get(kind)
            if not counts:
                continue
            top = max(counts.values())
            leaders = sorted(rating for rating, count in counts.items() if count == top)
            if ties == "first":
                leaders = leaders[:1]
            rows.extend(RatingCount(kind=kind.value, rating=rating, count=top) for rating in leaders)
        return rows

    def movies_released_in(self, year: int = 2020) -> List[ContentRecord]:
        return [record for record in self._of_kind(ContentKind.MOVIE) if record.release_year == year]

    def top_countries(self, limit: int = 5) -> List[CountryCount]:
        _check_non_negative("limit", limit)
        counts = Counter(country for record in self._records for country in record.countries)
        return [CountryCount(country=country, count=count) for country, count in _ranked(counts, limit)]

    def longest_movie(self) -> List[ContentRecord]:
        """The movie with the most minutes; the first encountered wins a tie."""

        longest: Optional[ContentRecord] = None
        for record in self._of_kind(ContentKind.MOVIE):
            minutes = record.minutes
            if minutes is None:
                continue
            if longest is None or minutes > longest.minutes:
                longest = record
        return [longest] if longest is not None else []

    def added_within_years(self, years: int = 5, today: Optional[date] = None) -> List[ContentRecord]:
        _check_non_negative("years", years)
        cutoff = _years_before(today or date.today(), years)
        return [
            record
            for record in self._records
            if record.date_added is not None and record.date_added >= cutoff
        ]

    def by_director(self, name: str, match: str = "exact", ignore_case: bool = False) -> List[ContentRecord]:
        _check_choice("match", match, MATCH_MODES)
        return [
            record
            for record in self._records
            if record.directors and _name_matches(record.directors, name, match, ignore_case)
        ]

    def long_running_shows(self, min_seasons: int = 5) -> List[ContentRecord]:
        return [
            record
            for record in self._of_kind(ContentKind.TV_SHOW)
            if record.seasons is not None and record.seasons > min_seasons
        ]

    def genre_counts(self) -> List[GenreCount]:
        counts = Counter(genre for record in self._records for genre in record.genres)
        return [GenreCount(genre=genre, count=count) for genre, count in _ranked(counts)]

    def country_share_by_year(
        self, country: str = "India", limit: int = 5, rank_by: str = "count"
    ) -> List[YearShare]:
        """Release years contributing most titles that list ``country``.

        Percentages are relative to all titles listing ``country`` and rounded
        to two decimals. Ties are broken by the earlier release year.
        """

        _check_choice("rank_by", rank_by, RANK_MODES)
        _check_non_negative("limit", limit)
        counts = Counter(record.release_year for record in self._listing_country(country))
        total = sum(counts.values())
        if not total:
            return []
        rows = [
            YearShare(release_year=year, count=count, percentage=round(count * 100.0 / total, 2))
            for year, count in counts.items()
        ]
        if rank_by == "count":
            rows.sort(key=lambda row: (-row.count, row.release_year))
        else:
            rows.sort(key=lambda row: (-row.percentage, row.release_year))
        return rows[:limit]

    def documentaries(self, genre: str = "Documentaries") -> List[ContentRecord]:
        needle = genre.casefold()
        return [
            record
            for record in self._of_kind(ContentKind.MOVIE)
            if any(needle in label.casefold() for label in record.genres)
        ]

    def missing_director(self) -> List[ContentRecord]:
        return [record for record in self._records if not record.directors]

    def actor_appearances(
        self,
        actor: str,
        years: int = 10,
        current_year: Optional[int] = None,
        window: str = "inclusive",
        match: str = "exact",
        ignore_case: bool = False,
    ) -> List[ContentRecord]:
        """Movies featuring ``actor`` released within the last ``years`` years.

        ``window="inclusive"`` keeps ``release_year >= current_year - years``;
        ``"exclusive"`` keeps ``release_year > current_year - years``.
        """

        _check_choice("window", window, WINDOW_MODES)
        _check_choice("match", match, MATCH_MODES)
        _check_non_negative("years", years)
        start = (current_year or date.today().year) - years
        rows = []
        for record in self._of_kind(ContentKind.MOVIE):
            if not _name_matches(record.cast, actor, match, ignore_case):
                continue
            in_window = record.release_year >= start if window == "inclusive" else record.release_year > start
            if in_window:
                rows.append(record)
        return rows

    def top_actors(self, country: str = "India", limit: int = 10) -> List[ActorCount]:
        _check_non_negative("limit", limit)
        counts = Counter(
            actor
            for record in self._listing_country(country)
            if record.kind is ContentKind.MOVIE
            for actor in record.cast
        )
        return [ActorCount(actor=actor, count=count) for actor, count in _ranked(counts, limit)]

    def categorize_by_keywords(
        self, keywords: Sequence[str] = BAD_KEYWORDS, by_kind: bool = False
    ) -> List[CategoryCount]:
        if isinstance(keywords, str):
            keywords = tuple(word.strip() for word in keywords.split(",") if word.strip())
        if not keywords:
            raise ReportParameterError("keywords must not be empty")
        counts: Counter = Counter()
        for record in self._records:
            category = classify_description(record.description, keywords)
            counts[(category, record.kind.value if by_kind else None)] += 1
        ordered = sorted(counts.items(), key=lambda item: (item[0][0], item[0][1] or ""))
        return [CategoryCount(category=category, kind=kind, count=count) for (category, kind), count in ordered]
