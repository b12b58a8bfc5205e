"""Data ingestion utilities for reading catalog exports."""

from .loaders import DEFAULT_COLUMNS, load_records, read_table, records_from_frame

__all__ = ["DEFAULT_COLUMNS", "load_records", "read_table", "records_from_frame"]
