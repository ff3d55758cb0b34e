"""Table range calculation."""

from __future__ import annotations

from .errors import ArgumentError
from .placement import MAX_COLUMNS, MAX_ROWS, column_letter
from .schema import Placement, TableRange


def cell_ref(cell: Placement) -> str:
    """Format a placement as an ``A1`` style reference."""

    return f"{column_letter(cell.col)}{cell.row}"


def compute_range(placement: Placement, n_rows: int, n_cols: int, include_header: bool) -> TableRange:
    """Return the inclusive extent of a table with ``n_rows`` data rows.

    The header row, when shown, sits above the data and extends the range by one.
    """

    if n_rows < 1 or n_cols < 1:
        raise ArgumentError(f"Table needs at least one row and column, received {n_rows}x{n_cols}")
    bottom_right = Placement(
        col=placement.col + n_cols - 1,
        row=placement.row + n_rows - 1 + int(include_header),
    )
    if bottom_right.col > MAX_COLUMNS or bottom_right.row > MAX_ROWS:
        raise ArgumentError(
            f"Table extends beyond the sheet limits ({MAX_COLUMNS} columns, {MAX_ROWS} rows)"
        )
    return TableRange(
        top_left=placement,
        bottom_right=bottom_right,
        ref=f"{cell_ref(placement)}:{cell_ref(bottom_right)}",
    )
