"""Named report definitions and dispatch by report name."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from catalog.errors import ReportParameterError, UnknownReportError
from catalog.fields import split_multi_value
from utils.logging import get_logger

from .engine import CatalogReportEngine

LOGGER = get_logger(__name__)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _to_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"expected a boolean, got {raw!r}")


_CONVERTERS: Dict[str, Callable[[str], Any]] = {
    "int": lambda raw: int(raw.strip()),
    "str": str,
    "bool": _to_bool,
    "date": lambda raw: date.fromisoformat(raw.strip()),
    "list": split_multi_value,
}


def _check_typed(kind: str, value: Any) -> Any:
    """Validate an already-typed value (e.g. from YAML) against its declared type."""

    if kind == "int" and isinstance(value, int) and not isinstance(value, bool):
        return value
    if kind == "str" and isinstance(value, str):
        return value
    if kind == "bool" and isinstance(value, bool):
        return value
    if kind == "date" and isinstance(value, date):
        return value.date() if isinstance(value, datetime) else value
    if kind == "list" and isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise ValueError(f"expected {kind}, got {type(value).__name__} {value!r}")


@dataclass(slots=True, frozen=True)
class ReportDefinition:
    """A report name bound to an engine method and its accepted parameters."""

    name: str
    method: str
    description: str
    params: Mapping[str, str] = field(default_factory=dict)
    label_field: Optional[str] = None
    value_field: Optional[str] = None

    @property
    def is_count_report(self) -> bool:
        return self.label_field is not None and self.value_field is not None

    def coerce(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate parameter names and convert values to their declared types."""

        converted: Dict[str, Any] = {}
        for key, value in params.items():
            key = key.replace("-", "_")
            if key not in self.params:
                accepted = ", ".join(self.params) or "none"
                raise ReportParameterError(f"report {self.name!r} does not accept {key!r} (accepted: {accepted})")
            kind = self.params[key]
            try:
                if isinstance(value, str):
                    value = _CONVERTERS[kind](value)
                else:
                    value = _check_typed(kind, value)
            except ValueError as exc:
                raise ReportParameterError(f"invalid value for {key!r}: {exc}") from exc
            converted[key] = value
        return converted


REPORTS: Dict[str, ReportDefinition] = {
    definition.name: definition
    for definition in (
        ReportDefinition(
            "type-distribution",
            "type_distribution",
            "Number of movies vs TV shows.",
            label_field="kind",
            value_field="count",
        ),
        ReportDefinition(
            "top-rating-per-type",
            "most_common_rating",
            "Most common rating for movies and TV shows.",
            {"ties": "str"},
        ),
        ReportDefinition("movies-in-year", "movies_released_in", "Movies released in a given year.", {"year": "int"}),
        ReportDefinition(
            "top-countries",
            "top_countries",
            "Countries with the most titles.",
            {"limit": "int"},
            label_field="country",
            value_field="count",
        ),
        ReportDefinition("longest-movie", "longest_movie", "The longest movie."),
        ReportDefinition(
            "recently-added",
            "added_within_years",
            "Titles added in the last N years.",
            {"years": "int", "today": "date"},
        ),
        ReportDefinition(
            "by-director",
            "by_director",
            "Titles by a director.",
            {"name": "str", "match": "str", "ignore_case": "bool"},
        ),
        ReportDefinition(
            "long-running-shows",
            "long_running_shows",
            "TV shows with more than N seasons.",
            {"min_seasons": "int"},
        ),
        ReportDefinition(
            "genre-counts",
            "genre_counts",
            "Number of titles per genre.",
            label_field="genre",
            value_field="count",
        ),
        ReportDefinition(
            "country-share-by-year",
            "country_share_by_year",
            "Years with the largest share of a country's titles.",
            {"country": "str", "limit": "int", "rank_by": "str"},
            label_field="release_year",
            value_field="percentage",
        ),
        ReportDefinition("documentaries", "documentaries", "Movies that are documentaries.", {"genre": "str"}),
        ReportDefinition("missing-director", "missing_director", "Titles without a director."),
        ReportDefinition(
            "actor-movies",
            "actor_appearances",
            "Movies featuring an actor in the last N years.",
            {
                "actor": "str",
                "years": "int",
                "current_year": "int",
                "window": "str",
                "match": "str",
                "ignore_case": "bool",
            },
        ),
        ReportDefinition(
            "top-actors",
            "top_actors",
            "Actors appearing in the most movies produced in a country.",
            {"country": "str", "limit": "int"},
            label_field="actor",
            value_field="count",
        ),
        ReportDefinition(
            "content-categories",
            "categorize_by_keywords",
            "Titles labelled Bad or Good by description keywords.",
            {"keywords": "list", "by_kind": "bool"},
            label_field="category",
            value_field="count",
        ),
    )
}


def available_reports() -> List[ReportDefinition]:
    return [REPORTS[name] for name in sorted(REPORTS)]


def get_report(name: str) -> ReportDefinition:
    try:
        return REPORTS[name]
    except KeyError:
        raise UnknownReportError(name, sorted(REPORTS)) from None


def run_report(engine: CatalogReportEngine, name: str, /, **params: Any) -> Sequence[Any]:
    """Run the report registered as ``name`` with the given parameters."""

    definition = get_report(name)
    kwargs = definition.coerce(params)
    LOGGER.debug("Running report %s with %s", name, kwargs)
    try:
        rows = getattr(engine, definition.method)(**kwargs)
    except TypeError as exc:
        raise ReportParameterError(f"report {name!r}: {exc}") from exc
    LOGGER.debug("Report %s produced %d rows", name, len(rows))
    return rows
