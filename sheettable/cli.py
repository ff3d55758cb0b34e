"""Typer based command line entry points for sheettable."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from .config import TableOptions
from .errors import SheetTableError
from .excel_reader import read_table
from .excel_writer import save_data_table
from .placement import parse_cell_ref
from .schema import ColumnType
from .utils.log import get_logger, set_level

app = typer.Typer(help="Write tabular data into Excel workbooks as formatted tables.")


def _parse_type_options(values: List[str]) -> dict[str, ColumnType]:
    parsed: dict[str, ColumnType] = {}
    for item in values:
        name, sep, kind = item.rpartition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Expected NAME=TYPE, received {item!r}")
        try:
            parsed[name] = ColumnType.parse(kind)
        except SheetTableError as exc:
            raise typer.BadParameter(str(exc)) from exc
    return parsed


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")
    set_level(level_value)


@app.command("write")
def write_command(
    source: Path = typer.Argument(..., help="Source .csv or Excel file."),
    output: Path = typer.Argument(..., help="Workbook to create or extend."),
    sheet: Optional[str] = typer.Option(None, "--sheet", help="Target sheet name."),
    source_sheet: Optional[str] = typer.Option(None, "--source-sheet", help="Sheet to read from an Excel source."),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML table options."),
    anchor: Optional[str] = typer.Option(None, "--anchor", help="Top-left cell, e.g. B3."),
    table_style: Optional[str] = typer.Option(None, "--table-style", help="Excel table style name."),
    no_col_names: bool = typer.Option(False, "--no-col-names", help="Do not write a header row."),
    row_names: bool = typer.Option(False, "--row-names", help="Prepend row identifiers as a column."),
    types: List[str] = typer.Option([], "--type", help="Column type as NAME=TYPE; repeatable."),
) -> None:
    """Write SOURCE into OUTPUT as an Excel table."""

    logger = get_logger("cli")
    column_types = _parse_type_options(types)
    try:
        options = TableOptions.from_yaml(config) if config else TableOptions()
        options = options.with_overrides(
            sheet=sheet,
            anchor=parse_cell_ref(anchor) if anchor else None,
            table_style=table_style,
            col_names=False if no_col_names else None,
            row_names=True if row_names else None,
            column_types={**options.column_types, **column_types} or None,
        )
        df = read_table(source, sheet=source_sheet)
        region = save_data_table(df, output, sheet=options.sheet, **options.write_kwargs())
    except (SheetTableError, FileNotFoundError, ValueError) as exc:
        logger.error("Table write failed", extra={"error": str(exc)})
        typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    typer.echo(f"{options.sheet}!{region.ref} ({region.table_style})")


if __name__ == "__main__":  # pragma: no cover
    app()
