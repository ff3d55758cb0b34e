"""Unit tests for placement resolution and column letter encoding."""

from __future__ import annotations

import pytest

from sheettable.errors import ArgumentError
from sheettable.placement import (
    MAX_COLUMNS,
    column_index,
    column_letter,
    parse_cell_ref,
    resolve_placement,
)
from sheettable.schema import Placement


@pytest.mark.parametrize(
    "index, letters",
    [(1, "A"), (26, "Z"), (27, "AA"), (52, "AZ"), (53, "BA"), (702, "ZZ"), (703, "AAA"), (16384, "XFD")],
)
def test_column_letter_known_values(index: int, letters: str) -> None:
    assert column_letter(index) == letters
    assert column_index(letters) == index


def test_column_encoding_is_a_bijection() -> None:
    seen = set()
    for n in range(1, MAX_COLUMNS + 1):
        letters = column_letter(n)
        assert column_index(letters) == n
        seen.add(letters)
    assert len(seen) == MAX_COLUMNS


def test_column_index_is_case_insensitive() -> None:
    assert column_index("ab") == column_index("AB") == 28


@pytest.mark.parametrize("bad", ["", "A1", "XFE", "ZZZZ", "é"])
def test_column_index_rejects_invalid_letters(bad: str) -> None:
    with pytest.raises(ArgumentError):
        column_index(bad)


@pytest.mark.parametrize("bad", [0, -1, MAX_COLUMNS + 1, True, 2.5])
def test_column_letter_rejects_out_of_range(bad: object) -> None:
    with pytest.raises(ArgumentError):
        column_letter(bad)  # type: ignore[arg-type]


def test_separate_values_and_anchor_resolve_identically() -> None:
    expected = Placement(col=2, row=3)
    assert resolve_placement("B", 3) == expected
    assert resolve_placement(2, "3") == expected
    assert resolve_placement(anchor=("B", 3)) == expected
    assert resolve_placement(anchor=[2, 3.0]) == expected


def test_anchor_overrides_separate_values() -> None:
    assert resolve_placement("Z", 99, anchor=("c", 4)) == Placement(col=3, row=4)


@pytest.mark.parametrize("anchor", [(), ("A",), ("A", 1, 2), ["B", 3, "x", "y"], "B3", 5])
def test_anchor_with_wrong_arity_fails(anchor: object) -> None:
    with pytest.raises(ArgumentError, match="exactly two elements"):
        resolve_placement(anchor=anchor)  # type: ignore[arg-type]


@pytest.mark.parametrize("col, row", [(0, 1), ("A", 0), ("A", -3), ("1A", 1), (None, 1), ("A", "x"), (False, 1)])
def test_invalid_coordinates_raise(col: object, row: object) -> None:
    with pytest.raises(ArgumentError):
        resolve_placement(col, row)


def test_parse_cell_ref() -> None:
    assert parse_cell_ref("b12") == ("B", 12)
    assert parse_cell_ref("$C$4") == ("C", 4)
    with pytest.raises(ArgumentError):
        parse_cell_ref("12B")
