"""Result row models produced by the aggregate reports."""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReportRow(BaseModel):
    """Base class for aggregate report rows."""

    model_config = ConfigDict(frozen=True)

    def as_record(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    def jsonl(self) -> str:
        return json.dumps(self.as_record(), ensure_ascii=False)


class KindCount(ReportRow):
    kind: str
    count: int = Field(ge=0)


class RatingCount(ReportRow):
    kind: str
    rating: str
    count: int = Field(ge=0)


class CountryCount(ReportRow):
    country: str
    count: int = Field(ge=0)


class GenreCount(ReportRow):
    genre: str
    count: int = Field(ge=0)


class ActorCount(ReportRow):
    actor: str
    count: int = Field(ge=0)


class YearShare(ReportRow):
    """Titles from one release year as a share of all titles listing a country."""

    release_year: int
    count: int = Field(ge=0)
    percentage: float


class CategoryCount(ReportRow):
    category: str
    kind: Optional[str] = None
    count: int = Field(ge=0)
