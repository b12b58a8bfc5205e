"""Matplotlib style used for report charts."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import matplotlib.pyplot as plt

REPORT_PARAMS = {
    "figure.figsize": (5.0, 3.6),
    "font.family": "sans-serif",
    "font.size": 8,
    "axes.titlesize": 9,
    "axes.labelsize": 8,
    "axes.linewidth": 0.6,
    "axes.spines.top": False,
    "axes.spines.right": False,
    "axes.grid": True,
    "axes.grid.axis": "x",
    "grid.linewidth": 0.3,
    "ytick.labelsize": 7,
    "legend.frameon": False,
    "savefig.dpi": 600,
}


@contextmanager
def apply_report_style() -> Iterator[None]:
    """Temporarily apply the report chart parameters."""

    original = plt.rcParams.copy()
    plt.rcParams.update(REPORT_PARAMS)
    try:
        yield
    finally:
        plt.rcParams.update(original)
