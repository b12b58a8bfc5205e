"""Plotting utilities for report charts."""

from .charts import plot_counts
from .exporters import export_figure
from .style import apply_report_style

__all__ = ["apply_report_style", "export_figure", "plot_counts"]
