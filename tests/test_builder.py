"""Unit tests for the table-region builder."""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple

import pandas as pd
import pytest

from sheettable.backend import SheetBackend
from sheettable.builder import build_table_region
from sheettable.errors import ArgumentError, DatasetTypeError, ValidationError
from sheettable.excel_writer import persist_region
from sheettable.schema import Column, ColumnType, Dataset, Placement, StyleAssignment, StyleKind


class RecordingBackend(SheetBackend):
    def __init__(self) -> None:
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def write_data(self, sheet: Any, dataset: Dataset, include_header: bool, start_row: int, start_col: int) -> None:
        self.calls.append(("write_data", (sheet, dataset.names, include_header, start_row, start_col)))

    def add_style(self, sheet: Any, style: StyleKind, rows: Sequence[int], cols: Sequence[int], grid_expand: bool = True) -> None:
        self.calls.append(("add_style", (sheet, style, list(rows), list(cols), grid_expand)))

    def build_table(self, sheet: Any, header_labels: Sequence[str], ref: str, show_header: bool, table_style: str) -> str:
        self.calls.append(("build_table", (sheet, tuple(header_labels), ref, show_header, table_style)))
        return "table"


def test_example_region(ledger: Dataset) -> None:
    region = build_table_region(ledger, start_col=2, start_row=5)

    assert region.ref == "B5:C8"
    assert region.placement == Placement(2, 5)
    assert region.show_header is True
    assert region.header_labels == ("Date", "Amount")
    assert region.table_style == "TableStyleMedium2"
    assert region.style_plan == (
        StyleAssignment(6, 8, (2,), StyleKind.DATE),
        StyleAssignment(6, 8, (3,), StyleKind.CURRENCY),
    )


def test_anchor_matches_separate_placement(ledger: Dataset) -> None:
    assert build_table_region(ledger, anchor=("B", 5)) == build_table_region(ledger, start_col=2, start_row=5)


def test_empty_dataset_region() -> None:
    empty = Dataset(columns=(Column("a", ()), Column("b", ())))
    region = build_table_region(empty)
    assert region.ref == "A1:B2"
    assert region.dataset.n_rows == 1


def test_row_names_shift_styles_right(ledger: Dataset) -> None:
    plain = build_table_region(ledger, start_col=2, start_row=5)
    shifted = build_table_region(ledger, start_col=2, start_row=5, include_row_names=True)

    assert shifted.dataset.names[0] == "row names"
    assert shifted.ref == "B5:D8"
    assert [a.cols for a in shifted.style_plan] == [
        tuple(col + 1 for col in a.cols) for a in plain.style_plan
    ]


def test_no_header_region(ledger: Dataset) -> None:
    region = build_table_region(ledger, include_header=False, table_style="tablestyledark3")
    assert region.ref == "A1:B3"
    assert region.header_labels == ("Column1", "Column2")
    assert region.table_style == "TableStyleDark3"
    assert all(a.first_row == 1 for a in region.style_plan)


def test_dataframe_input_is_not_mutated() -> None:
    df = pd.DataFrame({"Cash": [1.0, 2.0], "Link": ["https://a", "https://b"]})
    before = df.copy()
    region = build_table_region(
        df, include_row_names=True, column_types={"Cash": "currency", "Link": ColumnType.HYPERLINK}
    )

    pd.testing.assert_frame_equal(df, before)
    assert region.dataset.names == ["row names", "Cash", "Link"]
    assert [(a.kind, a.cols) for a in region.style_plan] == [
        (StyleKind.CURRENCY, (2,)),
        (StyleKind.HYPERLINK, (3,)),
    ]


def test_table_style_checked_before_dataset() -> None:
    with pytest.raises(ValidationError):
        build_table_region("not a table", table_style="TableStyleLight99")


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"anchor": ("A", 1, 1)}, ArgumentError),
        ({"include_header": "yes"}, ArgumentError),
        ({"include_row_names": 0}, ArgumentError),
        ({"start_row": 0}, ArgumentError),
        ({"table_style": "TableStyleMedium"}, ValidationError),
        ({"column_types": {"Amount": "money"}}, ValidationError),
    ],
)
def test_invalid_arguments(ledger: Dataset, kwargs: dict, error: type) -> None:
    with pytest.raises(error):
        build_table_region(ledger, **kwargs)


def test_non_tabular_input() -> None:
    with pytest.raises(DatasetTypeError):
        build_table_region([1, 2, 3])


def test_persist_region_call_order(ledger: Dataset) -> None:
    backend = RecordingBackend()
    region = build_table_region(ledger, start_col="B", start_row=5)

    result = persist_region(backend, "S1", region)

    assert result == "table"
    assert [name for name, _ in backend.calls] == ["write_data", "add_style", "add_style", "build_table"]
    assert backend.calls[0][1] == ("S1", ["Date", "Amount"], True, 5, 2)
    assert backend.calls[1][1] == ("S1", StyleKind.DATE, [6, 7, 8], [2], True)
    assert backend.calls[-1][1] == ("S1", ("Date", "Amount"), "B5:C8", True, "TableStyleMedium2")
