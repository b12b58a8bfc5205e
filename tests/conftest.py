from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List

import pandas as pd
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
for _path in (PROJECT_ROOT / "src", PROJECT_ROOT):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from catalog import ContentRecord  # noqa: E402
from ingest import records_from_frame  # noqa: E402
from reports import CatalogReportEngine  # noqa: E402

COLUMNS = [
    "show_id",
    "type",
    "title",
    "director",
    "cast",
    "country",
    "date_added",
    "release_year",
    "rating",
    "duration",
    "listed_in",
    "description",
]

SAMPLE_ROWS: List[List[str]] = [
    ["s1", "Movie", "Dick Johnson Is Dead", "Kirsten Johnson", "", "United States", "September 25, 2021", "2020",
     "PG-13", "90 min", "Documentaries",
     "As her father nears the end of his life, filmmaker Kirsten Johnson stages his death in inventive ways."],
    ["s2", "TV Show", "Blood & Water", "", "Ama Qamata, Khosi Ngema", "South Africa", "September 24, 2021", "2021",
     "TV-MA", "2 Seasons", "International TV Shows, TV Dramas, TV Mysteries",
     "After crossing paths at a party, a Cape Town teen sets out to find her sister."],
    ["s3", "Movie", "Monsoon Days", "Rajiv Chilaka", "Shah Rukh Khan, Kajol", "India", "March 1, 2019", "2018",
     "TV-14", "150 min", "Dramas, International Movies", "A love story across two decades."],
    ["s4", "Movie", "City of Guns", "Anurag Kashyap, Vikramaditya Motwane", "Shah Rukh Khan, Nawazuddin Siddiqui",
     "India, France", "January 5, 2020", "2019", "TV-MA", "171 min", "Action & Adventure, International Movies",
     "A gangster sets out to kill his rival amid rising violence."],
    ["s5", "TV Show", "Kota Lessons", "", "Jitendra Kumar", "India", " August 2, 2016", "2016", "TV-14",
     "6 Seasons", "International TV Shows, TV Comedies", "Students struggle at a coaching centre."],
    ["s6", "Movie", "Little Heroes", "Rajiv Chilaka Jr.", "Salman Khan", "India", "not a date", "2019", "TV-Y7",
     "171 min", "Children & Family Movies", "Friends save the village fair."],
    ["s7", "TV Show", "Old Friends", "", "", "", "", "2010", "", "9 Seasons", "TV Comedies",
     "A sitcom about friends who never kill time."],
    ["s8", "Movie", "Bad Runtime", "Jane Doe", "Salman Khan, Kajol", "United States, India", "June 15, 2023", "2022",
     "TV-14", "2 Seasons", "Documentaries, Dramas", "Behind the scenes of a violence-free film."],
]


@pytest.fixture(autouse=True)
def _configure_test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MPLBACKEND", "Agg")


@pytest.fixture
def sample_frame() -> pd.DataFrame:
    return pd.DataFrame(SAMPLE_ROWS, columns=COLUMNS)


@pytest.fixture
def sample_records(sample_frame: pd.DataFrame) -> List[ContentRecord]:
    return records_from_frame(sample_frame)


@pytest.fixture
def engine(sample_records: List[ContentRecord]) -> CatalogReportEngine:
    return CatalogReportEngine(sample_records)


@pytest.fixture
def catalog_csv(tmp_path: Path, sample_frame: pd.DataFrame) -> Path:
    path = tmp_path / "netflix_titles.csv"
    sample_frame.to_csv(path, index=False)
    return path


def ids(records) -> List[str]:
    return [record.id for record in records]


def as_dict(rows, key: str, value: str = "count") -> Dict[str, object]:
    return {getattr(row, key): getattr(row, value) for row in rows}
