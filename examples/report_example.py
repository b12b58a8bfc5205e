"""Example script showing how to run catalog reports programmatically."""
from __future__ import annotations

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from ingest import load_records  # type: ignore  # noqa: E402
from reports import CatalogReportEngine, run_report  # type: ignore  # noqa: E402
from utils.logging import configure_logging  # type: ignore  # noqa: E402


def main(path: Path = PROJECT_ROOT / "data" / "netflix_titles.csv") -> None:
    configure_logging("INFO")
    engine = CatalogReportEngine(load_records(path))
    for row in engine.type_distribution():
        print(row.jsonl())
    for row in run_report(engine, "country-share-by-year", country="India", rank_by="percentage"):
        print(row.jsonl())


if __name__ == "__main__":
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else PROJECT_ROOT / "data" / "netflix_titles.csv")
