"""Style planning for typed table columns."""

# Module responsibilities:
# - Map column types to the style kind they need.
# - Group matching columns into one StyleAssignment per style kind, data rows only.

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .schema import ColumnType, Placement, StyleAssignment, StyleKind

STYLE_FOR_TYPE: Dict[ColumnType, StyleKind] = {
    ColumnType.DATE: StyleKind.DATE,
    ColumnType.TIMESTAMP: StyleKind.DATE,
    ColumnType.CURRENCY: StyleKind.CURRENCY,
    ColumnType.ACCOUNTING: StyleKind.ACCOUNTING,
    ColumnType.HYPERLINK: StyleKind.HYPERLINK,
}


def plan_styles(
    column_types: Sequence[ColumnType],
    placement: Placement,
    n_rows: int,
    include_header: bool,
) -> Tuple[StyleAssignment, ...]:
    """Return one assignment per style kind present, in StyleKind order.

    Column indices are absolute sheet columns; rows cover data rows only.
    """

    first_row = placement.row + int(include_header)
    last_row = first_row + n_rows - 1

    grouped: Dict[StyleKind, List[int]] = {kind: [] for kind in StyleKind}
    for local_idx, column_type in enumerate(column_types, start=1):
        kind = STYLE_FOR_TYPE.get(column_type)
        if kind is None:
            continue
        grouped[kind].append(local_idx + placement.col - 1)

    return tuple(
        StyleAssignment(first_row=first_row, last_row=last_row, cols=tuple(cols), kind=kind)
        for kind, cols in grouped.items()
        if cols
    )
