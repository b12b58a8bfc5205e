from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pandas as pd
import pytest
from typer.testing import CliRunner

from cli.titlecli import app

runner = CliRunner()


def _invoke(tmp_path: Path, *args: str):
    return runner.invoke(app, ["--config", str(tmp_path / "missing.yml"), *args])


def _json_lines(output: str) -> List[dict]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_list_reports(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "list")
    assert result.exit_code == 0
    assert "type-distribution" in result.output
    assert "content-categories" in result.output


def test_run_report_as_json(tmp_path: Path, catalog_csv: Path) -> None:
    result = _invoke(tmp_path, "run", "type-distribution", "--data", str(catalog_csv), "--format", "json")
    assert result.exit_code == 0, result.output
    assert _json_lines(result.output) == [{"kind": "Movie", "count": 5}, {"kind": "TV Show", "count": 3}]


def test_run_report_with_params(tmp_path: Path, catalog_csv: Path) -> None:
    result = _invoke(
        tmp_path,
        "run",
        "by-director",
        "--data",
        str(catalog_csv),
        "--param",
        "name=Rajiv Chilaka",
        "--param",
        "match=substring",
        "--format",
        "json",
    )
    assert result.exit_code == 0, result.output
    assert [row["id"] for row in _json_lines(result.output)] == ["s3", "s6"]


def test_run_report_table(tmp_path: Path, catalog_csv: Path) -> None:
    result = _invoke(tmp_path, "run", "top-countries", "--data", str(catalog_csv), "--limit", "1")
    assert result.exit_code == 0, result.output
    assert "India" in result.output
    assert "France" not in result.output


def test_run_report_with_no_rows(tmp_path: Path, catalog_csv: Path) -> None:
    result = _invoke(tmp_path, "run", "movies-in-year", "--data", str(catalog_csv), "-p", "year=1900")
    assert result.exit_code == 0
    assert "returned no rows" in result.output


def test_config_supplies_data_path_and_defaults(tmp_path: Path, catalog_csv: Path) -> None:
    config = tmp_path / "title-reports.yml"
    config.write_text(f"data_path: {catalog_csv.as_posix()}\nreport_defaults:\n  top-countries:\n    limit: 2\n")
    result = runner.invoke(app, ["--config", str(config), "run", "top-countries", "--format", "json"])
    assert result.exit_code == 0, result.output
    assert [row["country"] for row in _json_lines(result.output)] == ["India", "United States"]


@pytest.mark.parametrize(
    "args",
    [
        ["run", "best-movies"],
        ["run", "movies-in-year", "-p", "year"],
        ["run", "genre-counts", "-p", "limit=3"],
    ],
)
def test_usage_errors(tmp_path: Path, catalog_csv: Path, args: List[str]) -> None:
    result = _invoke(tmp_path, *args, "--data", str(catalog_csv))
    assert result.exit_code == 2


def test_summarize(tmp_path: Path, catalog_csv: Path) -> None:
    result = _invoke(tmp_path, "summarize", "--data", str(catalog_csv))
    assert result.exit_code == 0, result.output
    assert '"total_records": 8' in result.output


@pytest.mark.parametrize("suffix", [".csv", ".jsonl", ".parquet"])
def test_export(tmp_path: Path, catalog_csv: Path, suffix: str) -> None:
    if suffix == ".parquet":
        pytest.importorskip("pyarrow")
    out = tmp_path / "exports" / f"genres{suffix}"
    result = _invoke(tmp_path, "export", "genre-counts", str(out), "--data", str(catalog_csv))
    assert result.exit_code == 0, result.output
    if suffix == ".csv":
        frame = pd.read_csv(out)
    elif suffix == ".parquet":
        frame = pd.read_parquet(out)
    else:
        frame = pd.read_json(out, lines=True)
    assert list(frame.columns) == ["genre", "count"]
    assert frame.iloc[0]["genre"] == "Documentaries"


def test_export_rejects_unknown_format(tmp_path: Path, catalog_csv: Path) -> None:
    result = _invoke(tmp_path, "export", "genre-counts", str(tmp_path / "out.xml"), "--data", str(catalog_csv))
    assert result.exit_code == 2


def test_plot(tmp_path: Path, catalog_csv: Path) -> None:
    base = tmp_path / "plots" / "genres"
    result = _invoke(tmp_path, "plot", "genre-counts", str(base), "--data", str(catalog_csv))
    assert result.exit_code == 0, result.output
    assert base.with_suffix(".png").exists()


def test_plot_rejects_record_reports(tmp_path: Path, catalog_csv: Path) -> None:
    result = _invoke(tmp_path, "plot", "missing-director", str(tmp_path / "x"), "--data", str(catalog_csv))
    assert result.exit_code == 2


def _write_config(tmp_path: Path, catalog_csv: Path, extra: str = "") -> Path:
    config = tmp_path / "title-reports.yml"
    config.write_text(
        f"data_path: {catalog_csv.as_posix()}\noutput_dir: {(tmp_path / 'reports').as_posix()}\n{extra}"
    )
    return config


def test_plot_defaults_to_configured_output_dir(tmp_path: Path, catalog_csv: Path) -> None:
    config = _write_config(tmp_path, catalog_csv)
    result = runner.invoke(app, ["--config", str(config), "plot", "top-countries"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "reports" / "top-countries.png").exists()


def test_export_relative_path_lands_in_output_dir(tmp_path: Path, catalog_csv: Path) -> None:
    config = _write_config(tmp_path, catalog_csv)
    result = runner.invoke(app, ["--config", str(config), "export", "genre-counts", "genres.csv"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "reports" / "genres.csv").exists()


def test_director_report_by_name(tmp_path: Path, catalog_csv: Path) -> None:
    result = _invoke(
        tmp_path, "run", "by-director", "--data", str(catalog_csv), "-p", "name=Anurag Kashyap", "--format", "json"
    )
    assert result.exit_code == 0, result.output
    assert [row["id"] for row in _json_lines(result.output)] == ["s4"]


def test_mistyped_config_default_is_a_usage_error(tmp_path: Path, catalog_csv: Path) -> None:
    config = _write_config(tmp_path, catalog_csv, "report_defaults:\n  top-actors:\n    country: 2020\n")
    result = runner.invoke(app, ["--config", str(config), "run", "top-actors"])
    assert result.exit_code == 2
