"""Catalog package providing the title record model and raw field parsers."""

from .errors import CatalogError, DuplicateRecordError, ReportParameterError, UnknownReportError
from .fields import join_multi_value, parse_date_added, parse_duration, parse_kind, split_multi_value
from .schema import CatalogSummary, ContentKind, ContentRecord, Duration

__all__ = [
    "CatalogError",
    "CatalogSummary",
    "ContentKind",
    "ContentRecord",
    "DuplicateRecordError",
    "Duration",
    "ReportParameterError",
    "UnknownReportError",
    "join_multi_value",
    "parse_date_added",
    "parse_duration",
    "parse_kind",
    "split_multi_value",
]
