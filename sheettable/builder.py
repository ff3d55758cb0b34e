"""Table-region builder: dataset + placement -> range, labels, style plan."""

# Module responsibilities:
# - Run validation, placement, normalization, range and style planning as one pure step.
# - Fail before producing anything when any input is invalid.

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from .dataset import as_dataset, normalize_dataset, require_flag
from .placement import ColumnRef, RowRef, resolve_placement
from .ranges import compute_range
from .schema import ColumnTypeSpec, TableRegion
from .styles import plan_styles
from .table_style import DEFAULT_TABLE_STYLE, validate_table_style
from .utils.log import get_logger

logger = get_logger("builder")


def build_table_region(
    data: Any,
    *,
    start_col: ColumnRef = 1,
    start_row: RowRef = 1,
    anchor: Optional[Sequence[Any]] = None,
    include_header: bool = True,
    include_row_names: bool = False,
    table_style: str = DEFAULT_TABLE_STYLE,
    column_types: Optional[Mapping[str, ColumnTypeSpec]] = None,
) -> TableRegion:
    """Translate a dataset and placement into a complete TableRegion.

    Args:
        data: ``Dataset`` or ``pandas.DataFrame``; the caller's object is not modified.
        start_col: Column letters or 1-based index of the top-left cell.
        start_row: 1-based row of the top-left cell.
        anchor: Optional ``(column, row)`` pair replacing ``start_col``/``start_row``.
        include_header: Reserve and write a header row with the column names.
        include_row_names: Prepend a ``"row names"`` column.
        table_style: Table style name, matched case-insensitively.
        column_types: Optional per-column type overrides.

    Returns:
        TableRegion bundling placement, normalized data, escaped labels,
        range and style plan.

    Raises:
        ValidationError: Unknown table style or column type.
        ArgumentError: Malformed anchor, coordinates or flags.
        DatasetTypeError: ``data`` is not tabular.
    """

    canonical_style = validate_table_style(table_style)
    require_flag(include_header, "include_header")
    require_flag(include_row_names, "include_row_names")
    placement = resolve_placement(start_col, start_row, anchor)

    dataset = as_dataset(data, column_types)
    normalized = normalize_dataset(dataset, include_header, include_row_names)
    table = normalized.dataset

    table_range = compute_range(placement, table.n_rows, table.n_cols, include_header)
    style_plan = plan_styles(table.types, placement, table.n_rows, include_header)

    logger.debug(
        "Table region built",
        extra={
            "ref": table_range.ref,
            "rows": table.n_rows,
            "columns": table.names,
            "styles": [assignment.kind.value for assignment in style_plan],
            "table_style": canonical_style,
        },
    )
    return TableRegion(
        placement=placement,
        dataset=table,
        header_labels=normalized.header_labels,
        show_header=include_header,
        range=table_range,
        style_plan=style_plan,
        table_style=canonical_style,
    )
