"""Typer-based command line interface for title-catalog-reports."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import typer
from rich.console import Console
from rich.table import Table

import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from catalog import CatalogError, ContentRecord  # type: ignore  # noqa: E402
from ingest import load_records  # type: ignore  # noqa: E402
from plot import plot_counts  # type: ignore  # noqa: E402
from reports import CatalogReportEngine, available_reports, get_report, run_report  # type: ignore  # noqa: E402
from utils.config import AppConfig, load_config  # type: ignore  # noqa: E402
from utils.logging import configure_logging  # type: ignore  # noqa: E402

app = typer.Typer(add_completion=False, help="Run fixed reports over a streaming catalog export.")

TABLE_FIELDS = ("id", "kind", "title", "directors", "countries", "release_year", "rating", "duration")


def _data_option():
    return typer.Option(None, "--data", "-d", help="Catalog file (defaults to the configured data_path).")


def _param_option():
    return typer.Option(None, "--param", "-p", help="Report parameter as key=value; repeatable.")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
    config: Path = typer.Option(Path("title-reports.yml"), "--config", help="YAML configuration file."),
) -> None:
    settings = load_config(config)
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


def _parse_params(raw: Optional[Sequence[str]]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for item in raw or ():
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"expected key=value, got {item!r}", param_hint="--param")
        params[key.strip()] = value
    return params


def _execute(settings: AppConfig, name: str, data: Optional[Path], raw_params: Optional[Sequence[str]]) -> List[Any]:
    path = data or settings.data_path
    try:
        definition = get_report(name)
        engine = CatalogReportEngine(load_records(path))
        params = settings.params_for(definition.name, _parse_params(raw_params))
        return list(run_report(engine, definition.name, **params))
    except (CatalogError, FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc


def _render_table(rows: List[Any], title: str) -> Table:
    table = Table(title=title)
    records = [row.as_record() for row in rows]
    fields = list(TABLE_FIELDS) if isinstance(rows[0], ContentRecord) else list(records[0])
    for field in fields:
        table.add_column(field, no_wrap=field in {"id", "kind"})
    for record in records:
        table.add_row(*("" if record[field] is None else str(record[field]) for field in fields))
    return table


@app.command("list")
def list_reports() -> None:
    """Show the available report names."""

    table = Table(title="Reports")
    table.add_column("name", no_wrap=True)
    table.add_column("parameters")
    table.add_column("description")
    for definition in available_reports():
        table.add_row(definition.name, ", ".join(definition.params), definition.description)
    Console().print(table)


@app.command()
def run(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Report name (see `list`)."),
    data: Optional[Path] = _data_option(),
    param: Optional[List[str]] = _param_option(),
    output_format: str = typer.Option("table", "--format", help="table or json."),
    limit: Optional[int] = typer.Option(None, "--limit", min=0, help="Show at most this many rows."),
) -> None:
    rows = _execute(ctx.obj, name, data, param)
    if limit is not None:
        rows = rows[:limit]
    if output_format == "json":
        for row in rows:
            typer.echo(row.jsonl())
        return
    if output_format != "table":
        raise typer.BadParameter("format must be table or json", param_hint="--format")
    if not rows:
        typer.echo(f"Report {name} returned no rows")
        return
    Console().print(_render_table(rows, name))


@app.command()
def summarize(ctx: typer.Context, data: Optional[Path] = _data_option()) -> None:
    path = data or ctx.obj.data_path
    try:
        engine = CatalogReportEngine(load_records(path))
    except (CatalogError, FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(engine.summary().model_dump_json(indent=2))


@app.command()
def export(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Report name."),
    out: Path = typer.Argument(..., help="Output .csv, .jsonl or .parquet file, relative to output_dir."),
    data: Optional[Path] = _data_option(),
    param: Optional[List[str]] = _param_option(),
) -> None:
    import pandas as pd

    suffix = out.suffix.lower()
    if suffix not in {".csv", ".jsonl", ".parquet"}:
        raise typer.BadParameter(f"unsupported export format {suffix!r}", param_hint="OUT")
    if not out.is_absolute():
        out = ctx.obj.output_dir / out
    rows = _execute(ctx.obj, name, data, param)
    out.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".jsonl":
        out.write_text("".join(row.jsonl() + "\n" for row in rows), encoding="utf-8")
    else:
        df = pd.DataFrame([row.as_record() for row in rows])
        if suffix == ".csv":
            df.to_csv(out, index=False)
        else:
            df.to_parquet(out, index=False)
    typer.echo(f"Exported {len(rows)} rows to {out}")


@app.command()
def plot(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Count report name."),
    output: Optional[Path] = typer.Argument(None, help="Output base path (default: <output_dir>/<name>)."),
    data: Optional[Path] = _data_option(),
    param: Optional[List[str]] = _param_option(),
) -> None:
    try:
        definition = get_report(name)
    except CatalogError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if not definition.is_count_report:
        raise typer.BadParameter(f"report {name!r} does not produce counts and cannot be plotted")
    if output is None:
        output = ctx.obj.output_dir / definition.name
    rows = _execute(ctx.obj, name, data, param)
    try:
        written = plot_counts(rows, definition.label_field, definition.value_field, output, title=definition.description)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(f"Saved chart to {', '.join(str(path) for path in written)}")


if __name__ == "__main__":
    app()
