"""Placement resolution for table anchors."""

# Module responsibilities:
# - Convert between spreadsheet column letters and 1-based column indices.
# - Normalize separate (column, row) values or a two-element anchor into a Placement.

from __future__ import annotations

import numbers
from typing import Any, Optional, Sequence, Tuple

from openpyxl.utils.cell import column_index_from_string, coordinate_from_string, get_column_letter
from openpyxl.utils.exceptions import CellCoordinatesException

from .errors import ArgumentError
from .schema import Placement

MAX_COLUMNS = 16384
MAX_ROWS = 1048576

ColumnRef = Any
RowRef = Any


def column_letter(index: int) -> str:
    """Return the letter code for a 1-based column index (1 -> ``A``, 27 -> ``AA``)."""

    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
        raise ArgumentError(f"Column index must be an integer, received {index!r}")
    if not 1 <= index <= MAX_COLUMNS:
        raise ArgumentError(f"Column index {index} outside 1..{MAX_COLUMNS}")
    return get_column_letter(int(index))


def column_index(letters: str) -> int:
    """Return the 1-based index for a column letter code (case-insensitive)."""

    if not isinstance(letters, str) or not letters.isalpha() or not letters.isascii():
        raise ArgumentError(f"Invalid column reference: {letters!r}")
    try:
        index = column_index_from_string(letters.upper())
    except ValueError as exc:
        raise ArgumentError(f"Invalid column reference: {letters!r}") from exc
    if index > MAX_COLUMNS:
        raise ArgumentError(f"Column {letters!r} beyond the last sheet column")
    return index


def _as_positive_int(value: Any, label: str) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        number = int(value)
    elif isinstance(value, numbers.Real) and float(value).is_integer():
        number = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        return None
    if number < 1:
        raise ArgumentError(f"{label} must be a positive integer, received {value!r}")
    return number


def resolve_column(ref: ColumnRef) -> int:
    """Resolve a column reference given as letters or a positive integer."""

    number = _as_positive_int(ref, "Column")
    if number is not None:
        if number > MAX_COLUMNS:
            raise ArgumentError(f"Column {number} beyond the last sheet column {MAX_COLUMNS}")
        return number
    if isinstance(ref, str):
        return column_index(ref.strip())
    raise ArgumentError(f"Invalid column reference: {ref!r}")


def resolve_row(ref: RowRef) -> int:
    """Coerce a row reference to a positive integer."""

    number = _as_positive_int(ref, "Row")
    if number is None:
        raise ArgumentError(f"Invalid row reference: {ref!r}")
    if number > MAX_ROWS:
        raise ArgumentError(f"Row {number} beyond the last sheet row {MAX_ROWS}")
    return number


def resolve_placement(
    start_col: ColumnRef = 1,
    start_row: RowRef = 1,
    anchor: Optional[Sequence[Any]] = None,
) -> Placement:
    """Normalize placement arguments into a 1-based Placement.

    Args:
        start_col: Column letters or index, used when ``anchor`` is absent.
        start_row: Row number, used when ``anchor`` is absent.
        anchor: Optional ``(column, row)`` pair overriding the separate values.

    Raises:
        ArgumentError: When the anchor does not have exactly two elements or
            a coordinate cannot be resolved.
    """

    if anchor is not None:
        if isinstance(anchor, (str, bytes)):
            raise ArgumentError("anchor must have exactly two elements")
        try:
            items = tuple(anchor)
        except TypeError as exc:
            raise ArgumentError("anchor must have exactly two elements") from exc
        if len(items) != 2:
            raise ArgumentError("anchor must have exactly two elements")
        start_col, start_row = items
    return Placement(col=resolve_column(start_col), row=resolve_row(start_row))


def parse_cell_ref(ref: str) -> Tuple[str, int]:
    """Split an ``"B3"`` style reference into an anchor pair."""

    try:
        letters, row = coordinate_from_string(str(ref).strip().upper())
    except (CellCoordinatesException, ValueError) as exc:
        raise ArgumentError(f"Invalid cell reference: {ref!r}") from exc
    return letters, row
