"""Parsers turning raw delimited catalog text into typed field values."""
from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Iterable, Optional, Tuple

from .schema import ContentKind, Duration

DATE_FORMATS = ("%B %d, %Y", "%b %d, %Y", "%Y-%m-%d", "%Y-%m-%d %H:%M:%S", "%d-%b-%y")

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*(min|mins|minutes|season|seasons)\s*$", re.IGNORECASE)
_KIND_ALIASES = {
    "movie": ContentKind.MOVIE,
    "tv show": ContentKind.TV_SHOW,
    "tvshow": ContentKind.TV_SHOW,
    "tv": ContentKind.TV_SHOW,
}


def _is_missing(raw: Any) -> bool:
    if raw is None:
        return True
    if isinstance(raw, float) and math.isnan(raw):
        return True
    return isinstance(raw, str) and not raw.strip()


def split_multi_value(raw: Any, delimiter: str = ",") -> Tuple[str, ...]:
    """Split a delimited field into trimmed, non-empty segments."""

    if _is_missing(raw):
        return ()
    segments = (segment.strip() for segment in str(raw).split(delimiter))
    return tuple(segment for segment in segments if segment)


def join_multi_value(values: Iterable[str], delimiter: str = ",") -> str:
    """Inverse of :func:`split_multi_value` for already-trimmed values."""

    return f"{delimiter} ".join(values)


def parse_kind(raw: Any) -> ContentKind:
    """Map a raw ``type`` value onto :class:`ContentKind`."""

    if _is_missing(raw):
        raise ValueError("content type is missing")
    key = " ".join(str(raw).split()).lower()
    try:
        return _KIND_ALIASES[key]
    except KeyError:
        raise ValueError(f"unknown content type {raw!r}") from None


def parse_duration(raw: Any, kind: ContentKind) -> Optional[Duration]:
    """Parse ``"90 min"`` or ``"3 Seasons"``; ``None`` if malformed or the unit contradicts ``kind``."""

    if _is_missing(raw):
        return None
    match = _DURATION_PATTERN.match(str(raw))
    if match is None:
        return None
    value, unit = match.groups()
    unit = "min" if unit.lower().startswith("min") else "seasons"
    if unit != kind.duration_unit:
        return None
    return Duration(value=int(value), unit=unit)


def parse_date_added(raw: Any) -> Optional[date]:
    """Parse the ``date_added`` column; unparseable values become ``None``."""

    if _is_missing(raw):
        return None
    if isinstance(raw, datetime):
        # also covers pandas.Timestamp; NaT compares unequal to itself
        return None if raw != raw else raw.date()
    if isinstance(raw, date):
        return raw
    text = " ".join(str(raw).split())
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_release_year(raw: Any) -> int:
    """Return ``raw`` as an integer year or raise ``ValueError``."""

    if _is_missing(raw):
        raise ValueError("release year is missing")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ValueError(f"release year {raw!r} is not an integer")
        return int(raw)
    return int(str(raw).strip())
