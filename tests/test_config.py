"""Unit tests for YAML table options."""

from __future__ import annotations

from pathlib import Path

import pytest

from sheettable.config import TableOptions
from sheettable.errors import ConfigError, ValidationError
from sheettable.schema import ColumnType


def _write(path: Path, payload: str) -> Path:
    path.write_text(payload, encoding="utf-8")
    return path


def test_from_yaml_full_payload(tmp_path: Path) -> None:
    options = TableOptions.from_yaml(
        _write(
            tmp_path / "table.yaml",
            "sheet: Report\n"
            "anchor: b3\n"
            "col_names: true\n"
            "row_names: true\n"
            "table_style: tablestylelight9\n"
            "column_types:\n"
            "  Cash: currency\n"
            "  Link: Hyperlink\n",
        )
    )

    assert options.sheet == "Report"
    assert options.anchor == ("B", 3)
    assert options.row_names is True
    assert options.table_style == "TableStyleLight9"
    assert options.column_types == {"Cash": ColumnType.CURRENCY, "Link": ColumnType.HYPERLINK}
    assert options.write_kwargs()["column_types"] == {
        "Cash": ColumnType.CURRENCY,
        "Link": ColumnType.HYPERLINK,
    }


def test_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    options = TableOptions.from_yaml(_write(tmp_path / "empty.yaml", ""))
    assert options == TableOptions()
    assert options.write_kwargs()["column_types"] is None


def test_anchor_list_and_separate_values(tmp_path: Path) -> None:
    listed = TableOptions.from_yaml(_write(tmp_path / "a.yaml", "anchor: [C, 7]\n"))
    separate = TableOptions.from_yaml(_write(tmp_path / "b.yaml", "start_col: C\nstart_row: 7\n"))
    assert listed.anchor == ("C", 7)
    assert (separate.start_col, separate.start_row) == ("C", 7)


@pytest.mark.parametrize(
    "payload",
    [
        "- just\n- a list\n",
        "unknown_key: 1\n",
        "anchor: [A, 1, 2]\n",
        "anchor: 7B\n",
        "start_row: 0\n",
        "col_names: yes please\n",
        "column_types: [currency]\n",
        "sheet: [unclosed\n",
    ],
)
def test_malformed_payloads_raise_config_error(tmp_path: Path, payload: str) -> None:
    with pytest.raises(ConfigError):
        TableOptions.from_yaml(_write(tmp_path / "bad.yaml", payload))


@pytest.mark.parametrize("payload", ["table_style: TableStyleLight99\n", "column_types:\n  a: money\n"])
def test_closed_enumerations_raise_validation_error(tmp_path: Path, payload: str) -> None:
    with pytest.raises(ValidationError):
        TableOptions.from_yaml(_write(tmp_path / "bad.yaml", payload))


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        TableOptions.from_yaml(tmp_path / "nope.yaml")


def test_with_overrides_ignores_none() -> None:
    options = TableOptions(sheet="A").with_overrides(sheet=None, row_names=True)
    assert options.sheet == "A"
    assert options.row_names is True


@pytest.mark.parametrize("payload", ["sheet: 2\n", "sheet: ''\n", "sheet: [Data]\n"])
def test_sheet_must_be_a_name(tmp_path: Path, payload: str) -> None:
    with pytest.raises(ConfigError):
        TableOptions.from_yaml(_write(tmp_path / "bad.yaml", payload))
