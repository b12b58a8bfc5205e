"""Exception types raised by the catalog and report packages."""
from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog report failures."""


class DuplicateRecordError(CatalogError):
    """Raised when two records share the same identifier."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"duplicate record id {record_id!r}")
        self.record_id = record_id


class UnknownReportError(CatalogError, LookupError):
    """Raised when a report name is not registered."""

    def __init__(self, name: str, known: list[str]) -> None:
        super().__init__(f"unknown report {name!r}; expected one of {', '.join(known)}")
        self.name = name
        self.known = known


class ReportParameterError(CatalogError, ValueError):
    """Raised when a report is given a parameter it does not accept."""
