"""Bar charts of count reports."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import matplotlib.pyplot as plt

from reports.rows import ReportRow

from .exporters import export_figure
from .style import apply_report_style


def _bar_label(record: Dict[str, Any], label: str) -> str:
    # per-kind category rows share a category label
    kind = record.get("kind")
    if label != "kind" and kind:
        return f"{record[label]} ({kind})"
    return str(record[label])


def plot_counts(
    rows: Iterable[ReportRow],
    label: str,
    value: str,
    output: Path,
    title: Optional[str] = None,
) -> List[Path]:
    """Draw ``rows`` as a horizontal bar chart, largest value on top."""

    records = [row.as_record() for row in rows]
    if not records:
        raise ValueError("nothing to plot: the report returned no rows")
    labels = [_bar_label(record, label) for record in records]
    values = [record[value] for record in records]

    with apply_report_style():
        figure, axis = plt.subplots()
        try:
            axis.barh(labels[::-1], values[::-1], color="#4c72b0")
            axis.set_xlabel(value.replace("_", " "))
            if title:
                axis.set_title(title)
            return export_figure(output, figure=figure)
        finally:
            plt.close(figure)
