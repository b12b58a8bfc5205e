"""Pydantic models describing a catalog title and catalog-wide summaries."""
from __future__ import annotations

from datetime import date
import json
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DurationUnit = Literal["min", "seasons"]


class ContentKind(str, Enum):
    """Kind of catalog title."""

    MOVIE = "Movie"
    TV_SHOW = "TV Show"

    @property
    def duration_unit(self) -> str:
        return "min" if self is ContentKind.MOVIE else "seasons"


class Duration(BaseModel):
    """Running time of a title: minutes for movies, season count for shows."""

    model_config = ConfigDict(frozen=True)

    value: int = Field(ge=0)
    unit: DurationUnit

    def __str__(self) -> str:
        if self.unit == "min":
            return f"{self.value} min"
        return f"{self.value} Season" if self.value == 1 else f"{self.value} Seasons"


class ContentRecord(BaseModel):
    """Structured representation of a single movie or TV show."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    kind: ContentKind
    title: str
    directors: Tuple[str, ...] = ()
    cast: Tuple[str, ...] = ()
    countries: Tuple[str, ...] = ()
    date_added: Optional[date] = None
    release_year: int
    rating: Optional[str] = None
    duration: Optional[Duration] = None
    genres: Tuple[str, ...] = ()
    description: str = ""

    @field_validator("countries", "genres")
    @classmethod
    def drop_duplicates(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(dict.fromkeys(value))

    @field_validator("rating")
    @classmethod
    def blank_rating_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @model_validator(mode="after")
    def check_duration_unit(self) -> "ContentRecord":
        if self.duration is not None and self.duration.unit != self.kind.duration_unit:
            raise ValueError(
                f"{self.kind.value} duration must be in {self.kind.duration_unit}; got {self.duration.unit!r}"
            )
        return self

    @property
    def minutes(self) -> Optional[int]:
        if self.kind is ContentKind.MOVIE and self.duration is not None:
            return self.duration.value
        return None

    @property
    def seasons(self) -> Optional[int]:
        if self.kind is ContentKind.TV_SHOW and self.duration is not None:
            return self.duration.value
        return None

    def as_record(self) -> Dict[str, Any]:
        """Return a flat JSON-serialisable mapping with multi-valued fields re-joined."""

        return {
            "id": self.id,
            "kind": self.kind.value,
            "title": self.title,
            "directors": ", ".join(self.directors),
            "cast": ", ".join(self.cast),
            "countries": ", ".join(self.countries),
            "date_added": self.date_added.isoformat() if self.date_added else None,
            "release_year": self.release_year,
            "rating": self.rating,
            "duration": str(self.duration) if self.duration else None,
            "genres": ", ".join(self.genres),
            "description": self.description,
        }

    def jsonl(self) -> str:
        return json.dumps(self.as_record(), ensure_ascii=False)


class CatalogSummary(BaseModel):
    """Aggregate summary information of a loaded catalog."""

    total_records: int
    kinds: Dict[str, int]
    earliest_release_year: Optional[int] = None
    latest_release_year: Optional[int] = None
    dated_records: int = 0

    @classmethod
    def from_records(cls, records: Iterable[ContentRecord]) -> "CatalogSummary":
        records_list = list(records)
        counts: Dict[str, int] = {}
        for record in records_list:
            counts[record.kind.value] = counts.get(record.kind.value, 0) + 1
        years = [record.release_year for record in records_list]
        return cls(
            total_records=len(records_list),
            kinds=counts,
            earliest_release_year=min(years) if years else None,
            latest_release_year=max(years) if years else None,
            dated_records=sum(1 for record in records_list if record.date_added is not None),
        )
