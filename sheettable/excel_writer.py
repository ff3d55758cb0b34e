"""Excel output helpers for writing datasets as formatted tables."""

# Module responsibilities:
# - Implement the SheetBackend contract on top of openpyxl workbooks.
# - Persist a built TableRegion: cell values, column styles, then the table object.
# - Offer file-level helpers that create or extend a workbook on disk.

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Union
from xml.sax.saxutils import unescape

from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE, KNOWN_TYPES, Cell
from openpyxl.styles import Font
from openpyxl.styles.numbers import BUILTIN_FORMATS, FORMAT_DATE_YYYYMMDD2
from openpyxl.worksheet.filters import AutoFilter
from openpyxl.worksheet.table import Table, TableColumn, TableStyleInfo
from openpyxl.worksheet.worksheet import Worksheet

from .backend import SheetBackend
from .builder import build_table_region
from .dataset import drop_timezone
from .errors import ArgumentError, DatasetTypeError
from .placement import ColumnRef, RowRef
from .schema import ColumnType, ColumnTypeSpec, Dataset, StyleKind, TableRegion
from .table_style import DEFAULT_TABLE_STYLE
from .utils.log import get_logger

logger = get_logger("excel_writer")

SheetRef = Union[str, int, Worksheet]

NUMBER_FORMATS: Dict[StyleKind, str] = {
    StyleKind.DATE: FORMAT_DATE_YYYYMMDD2,
    StyleKind.CURRENCY: '"$"#,##0.00',
    StyleKind.ACCOUNTING: BUILTIN_FORMATS[44],
}
HYPERLINK_FONT = Font(color="0000FF", underline="single")
_XML_ENTITIES = {"&quot;": '"', "&apos;": "'"}


def _excel_value(value: Any, column: str) -> Any:
    value = drop_timezone(value)
    if not isinstance(value, KNOWN_TYPES):
        raise DatasetTypeError(f"Column '{column}' holds a value Excel cannot store: {value!r}")
    if isinstance(value, str) and ILLEGAL_CHARACTERS_RE.search(value):
        raise DatasetTypeError(f"Column '{column}' holds characters Excel cannot store: {value!r}")
    return value


def _write_literal(ws: Worksheet, row: int, column: int, value: Any) -> Cell:
    cell = ws.cell(row=row, column=column, value=value)
    # openpyxl treats strings starting with "=" as formulas
    if cell.data_type == "f" and isinstance(value, (str, bytes)):
        cell.data_type = "s"
    return cell


class OpenpyxlBackend(SheetBackend):
    """SheetBackend writing into an in-memory openpyxl Workbook."""

    def __init__(self, workbook: Workbook) -> None:
        self.workbook = workbook

    def resolve_sheet(self, sheet: SheetRef) -> Worksheet:
        """Resolve a worksheet by object, name or 1-based position."""

        if isinstance(sheet, Worksheet):
            if sheet not in self.workbook.worksheets:
                raise ArgumentError(f"Worksheet '{sheet.title}' does not belong to this workbook")
            return sheet
        if isinstance(sheet, int) and not isinstance(sheet, bool):
            worksheets = self.workbook.worksheets
            if not 1 <= sheet <= len(worksheets):
                raise ArgumentError(f"Sheet index {sheet} out of range 1..{len(worksheets)}")
            return worksheets[sheet - 1]
        if isinstance(sheet, str) and sheet in self.workbook.sheetnames:
            return self.workbook[sheet]
        raise ArgumentError(f"Sheet '{sheet}' not found in workbook")

    def write_data(
        self,
        sheet: SheetRef,
        dataset: Dataset,
        include_header: bool,
        start_row: int,
        start_col: int,
    ) -> None:
        ws = self.resolve_sheet(sheet)
        # every value is checked before the first cell is touched
        header = [_excel_value(name, name) for name in dataset.names] if include_header else []
        rows = [
            [_excel_value(value, name) for value, name in zip(values, dataset.names)]
            for values in dataset.rows()
        ]

        row_idx = start_row
        if header:
            for offset, name in enumerate(header):
                _write_literal(ws, row_idx, start_col + offset, name)
            row_idx += 1

        hyperlink_cols = {
            offset for offset, kind in enumerate(dataset.types) if kind is ColumnType.HYPERLINK
        }
        for values in rows:
            for offset, value in enumerate(values):
                cell = _write_literal(ws, row_idx, start_col + offset, value)
                if offset in hyperlink_cols and value not in (None, ""):
                    cell.hyperlink = str(value)
            row_idx += 1

    def add_style(
        self,
        sheet: SheetRef,
        style: StyleKind,
        rows: Sequence[int],
        cols: Sequence[int],
        grid_expand: bool = True,
    ) -> None:
        ws = self.resolve_sheet(sheet)
        if grid_expand:
            targets = [(row, col) for row in rows for col in cols]
        else:
            if len(rows) != len(cols):
                raise ArgumentError("rows and cols must have equal length when grid_expand is False")
            targets = list(zip(rows, cols))
        for row, col in targets:
            cell = ws.cell(row=row, column=col)
            if style is StyleKind.HYPERLINK:
                cell.font = HYPERLINK_FONT
            else:
                cell.number_format = NUMBER_FORMATS[style]

    def _next_table_number(self) -> int:
        existing = {name for ws in self.workbook.worksheets for name in ws.tables}
        number = len(existing) + 1
        while f"Table{number}" in existing:
            number += 1
        return number

    def build_table(
        self,
        sheet: SheetRef,
        header_labels: Sequence[str],
        ref: str,
        show_header: bool,
        table_style: str,
    ) -> Table:
        ws = self.resolve_sheet(sheet)
        number = self._next_table_number()
        # openpyxl escapes on serialization, so it receives plain text.
        columns = [
            TableColumn(id=idx, name=unescape(label, _XML_ENTITIES))
            for idx, label in enumerate(header_labels, start=1)
        ]
        table = Table(
            id=number,
            displayName=f"Table{number}",
            ref=ref,
            headerRowCount=1 if show_header else 0,
            autoFilter=AutoFilter(ref=ref) if show_header else None,
            tableColumns=columns,
            tableStyleInfo=TableStyleInfo(
                name=table_style,
                showFirstColumn=False,
                showLastColumn=False,
                showRowStripes=True,
                showColumnStripes=False,
            ),
        )
        ws.add_table(table)
        logger.info(
            "Table registered",
            extra={"sheet": ws.title, "table": table.displayName, "ref": ref, "style": table_style},
        )
        return table


def persist_region(backend: SheetBackend, sheet: Any, region: TableRegion) -> Any:
    """Hand a built region to ``backend``: values, styles, then the table object."""

    backend.write_data(
        sheet,
        region.dataset,
        region.show_header,
        region.placement.row,
        region.placement.col,
    )
    for assignment in region.style_plan:
        backend.add_style(sheet, assignment.kind, assignment.rows, list(assignment.cols), grid_expand=True)
    return backend.build_table(
        sheet, region.header_labels, region.ref, region.show_header, region.table_style
    )


def write_data_table(
    workbook: Workbook,
    sheet: SheetRef,
    data: Any,
    *,
    start_col: ColumnRef = 1,
    start_row: RowRef = 1,
    anchor: Optional[Sequence[Any]] = None,
    col_names: bool = True,
    row_names: bool = False,
    table_style: str = DEFAULT_TABLE_STYLE,
    column_types: Optional[Mapping[str, ColumnTypeSpec]] = None,
) -> TableRegion:
    """Write ``data`` to a worksheet and format it as an Excel table.

    Args:
        workbook: Target openpyxl workbook.
        sheet: Worksheet, sheet name or 1-based sheet index.
        data: ``Dataset`` or ``pandas.DataFrame``.
        start_col: Column letters or index of the top-left cell.
        start_row: Row of the top-left cell.
        anchor: Optional ``(column, row)`` pair overriding ``start_col``/``start_row``.
        col_names: Write a header row with the column names.
        row_names: Prepend the row identifiers as a ``"row names"`` column.
        table_style: One of TableStyleLight1-21, TableStyleMedium1-28, TableStyleDark1-11.
        column_types: Optional per-column ColumnType overrides.

    Returns:
        The TableRegion that was persisted.
    """

    if not isinstance(workbook, Workbook):
        raise ArgumentError("workbook must be an openpyxl Workbook")
    backend = OpenpyxlBackend(workbook)
    ws = backend.resolve_sheet(sheet)
    region = build_table_region(
        data,
        start_col=start_col,
        start_row=start_row,
        anchor=anchor,
        include_header=col_names,
        include_row_names=row_names,
        table_style=table_style,
        column_types=column_types,
    )
    persist_region(backend, ws, region)
    return region


def save_data_table(
    data: Any,
    out_path: Path,
    sheet: str = "Sheet1",
    **options: Any,
) -> TableRegion:
    """Write ``data`` as a table into ``out_path``, creating the workbook or sheet if needed.

    Keyword options are forwarded to :func:`write_data_table`.
    """

    if out_path.exists():
        wb = load_workbook(out_path)
        if sheet not in wb.sheetnames:
            wb.create_sheet(title=sheet)
    else:
        wb = Workbook()
        wb.active.title = sheet

    region = write_data_table(wb, sheet, data, **options)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(out_path)
    logger.info(
        "Workbook saved",
        extra={"output": str(out_path), "sheet": sheet, "ref": region.ref},
    )
    return region
