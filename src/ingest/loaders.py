"""Readers turning tabular catalog exports into :class:`ContentRecord` values."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd
from pydantic import ValidationError

from catalog.fields import (
    parse_date_added,
    parse_duration,
    parse_kind,
    parse_release_year,
    split_multi_value,
)
from catalog.schema import ContentRecord
from utils.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_COLUMNS: Dict[str, str] = {
    "id": "show_id",
    "kind": "type",
    "title": "title",
    "directors": "director",
    "cast": "cast",
    "countries": "country",
    "date_added": "date_added",
    "release_year": "release_year",
    "rating": "rating",
    "duration": "duration",
    "genres": "listed_in",
    "description": "description",
}
REQUIRED_FIELDS = ("id", "kind", "title", "release_year")


def read_table(path: Path) -> pd.DataFrame:
    """Read a raw catalog table with a pandas reader inferred from the file suffix."""

    if not path.exists():
        raise FileNotFoundError(f"Catalog file {path} does not exist")
    suffix = path.suffix.lower()
    if suffix in {".csv", ".txt"}:
        LOGGER.info("Reading delimited catalog at %s", path)
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    if suffix in {".xls", ".xlsx"}:
        LOGGER.info("Reading Excel catalog at %s", path)
        return pd.read_excel(path, dtype=str, keep_default_na=False)
    if suffix == ".parquet":
        LOGGER.info("Reading Parquet catalog at %s", path)
        return pd.read_parquet(path)
    raise ValueError(f"Unsupported catalog format for {path}")


def _text(raw: Any) -> str:
    if raw is None or (isinstance(raw, float) and raw != raw):
        return ""
    return str(raw).strip()


def _build_record(row: Mapping[str, Any], columns: Mapping[str, str]) -> ContentRecord:
    def value(field: str) -> Any:
        return row.get(columns[field])

    kind = parse_kind(value("kind"))
    return ContentRecord(
        id=_text(value("id")),
        kind=kind,
        title=_text(value("title")),
        directors=split_multi_value(value("directors")),
        cast=split_multi_value(value("cast")),
        countries=split_multi_value(value("countries")),
        date_added=parse_date_added(value("date_added")),
        release_year=parse_release_year(value("release_year")),
        rating=_text(value("rating")) or None,
        duration=parse_duration(value("duration"), kind),
        genres=split_multi_value(value("genres")),
        description=_text(value("description")),
    )


def records_from_frame(frame: pd.DataFrame, columns: Optional[Mapping[str, str]] = None) -> List[ContentRecord]:
    """Convert raw rows to records, skipping rows that cannot be parsed."""

    mapping = {**DEFAULT_COLUMNS, **(columns or {})}
    missing = [mapping[field] for field in REQUIRED_FIELDS if mapping[field] not in frame.columns]
    if missing:
        raise ValueError(f"Catalog is missing required columns: {', '.join(missing)}")

    records: List[ContentRecord] = []
    seen: set[str] = set()
    for index, row in enumerate(frame.to_dict(orient="records")):
        try:
            record = _build_record(row, mapping)
        except (ValueError, ValidationError) as exc:
            LOGGER.warning("Skipping catalog row %d: %s", index, exc)
            continue
        if record.id in seen:
            LOGGER.warning("Skipping catalog row %d: duplicate id %s", index, record.id)
            continue
        seen.add(record.id)
        records.append(record)
    LOGGER.info("Loaded %d of %d catalog rows", len(records), len(frame))
    return records


def load_records(path: Path, columns: Optional[Mapping[str, str]] = None) -> List[ContentRecord]:
    """Load every parseable title from ``path``."""

    return records_from_frame(read_table(path), columns)
