"""Utilities for exporting figures to multiple formats with consistent settings."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from utils.logging import get_logger

LOGGER = get_logger(__name__)


def export_figure(path: Path, formats: Iterable[str] = ("png", "eps"), figure: Optional[Figure] = None) -> List[Path]:
    """Save ``figure`` (default: the current one) next to ``path`` in each format at 600 dpi."""

    figure = figure or plt.gcf()
    path.parent.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for extension in formats:
        target = path.with_suffix(f".{extension}")
        LOGGER.info("Saving figure to %s", target)
        figure.savefig(target, dpi=600, bbox_inches="tight")
        written.append(target)
    return written
