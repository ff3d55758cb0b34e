"""Shared schemas for datasets, placements and table regions."""

# Module responsibilities:
# - Define the closed enumerations for column semantics and style kinds.
# - Provide immutable containers for datasets and the table region bundle.
# - Declare the YAML payload schema for table options.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, NotRequired, Optional, Sequence, Tuple, TypedDict, Union

from .errors import DatasetTypeError, ValidationError


class ColumnType(str, Enum):
    """Semantic type attached to a column; drives styling only."""

    PLAIN = "plain"
    DATE = "date"
    TIMESTAMP = "timestamp"
    CURRENCY = "currency"
    ACCOUNTING = "accounting"
    HYPERLINK = "hyperlink"

    @classmethod
    def parse(cls, value: Union["ColumnType", str]) -> "ColumnType":
        """Parse a column type from its enum member or (case-insensitive) value."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            allowed = ", ".join(member.value for member in cls)
            raise ValidationError(
                f"Unknown column type {value!r}; expected one of: {allowed}"
            ) from exc


class StyleKind(str, Enum):
    """Formatting rule applied to a group of table columns."""

    DATE = "Date"
    CURRENCY = "Currency"
    ACCOUNTING = "Accounting"
    HYPERLINK = "Hyperlink"


ColumnTypeSpec = Union[ColumnType, str]


@dataclass(frozen=True)
class Column:
    """A named column of cell values sharing one semantic type."""

    name: str
    values: Tuple[Any, ...]
    type: ColumnType = ColumnType.PLAIN

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", str(self.name))
        object.__setattr__(self, "values", tuple(self.values))
        object.__setattr__(self, "type", ColumnType.parse(self.type))


@dataclass(frozen=True)
class Dataset:
    """Ordered columns of equal length plus optional row identifiers."""

    columns: Tuple[Column, ...]
    row_names: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        columns = tuple(self.columns)
        if not columns:
            raise DatasetTypeError("Dataset must contain at least one column")
        if not all(isinstance(column, Column) for column in columns):
            raise DatasetTypeError("Dataset columns must be Column instances")
        lengths = {len(column.values) for column in columns}
        if len(lengths) > 1:
            raise DatasetTypeError(
                f"Dataset columns have unequal lengths: {sorted(lengths)}"
            )
        object.__setattr__(self, "columns", columns)
        if self.row_names is not None:
            row_names = tuple(str(name) for name in self.row_names)
            if len(row_names) != self.n_rows:
                raise DatasetTypeError(
                    f"Expected {self.n_rows} row names, received {len(row_names)}"
                )
            object.__setattr__(self, "row_names", row_names)

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Sequence[Any]],
        column_types: Optional[Mapping[str, ColumnTypeSpec]] = None,
        row_names: Optional[Sequence[Any]] = None,
    ) -> "Dataset":
        """Build a dataset from ``name -> values`` preserving insertion order."""

        types = dict(column_types or {})
        unknown = set(types) - {str(name) for name in data}
        if unknown:
            raise ValidationError(
                f"column_types references unknown columns: {', '.join(sorted(unknown))}"
            )
        columns = tuple(
            Column(name=str(name), values=tuple(values), type=types.get(str(name), ColumnType.PLAIN))
            for name, values in data.items()
        )
        return cls(columns=columns, row_names=tuple(row_names) if row_names is not None else None)

    @property
    def n_rows(self) -> int:
        return len(self.columns[0].values)

    @property
    def n_cols(self) -> int:
        return len(self.columns)

    @property
    def names(self) -> List[str]:
        return [column.name for column in self.columns]

    @property
    def types(self) -> List[ColumnType]:
        return [column.type for column in self.columns]

    def resolved_row_names(self) -> Tuple[str, ...]:
        """Row identifiers, defaulting to ``"1".."R"``."""

        if self.row_names is not None:
            return self.row_names
        return tuple(str(idx) for idx in range(1, self.n_rows + 1))

    def rows(self) -> List[Tuple[Any, ...]]:
        """Return cell values row by row."""

        return list(zip(*(column.values for column in self.columns)))


@dataclass(frozen=True)
class Placement:
    """1-based top-left anchor cell of a table."""

    col: int
    row: int


@dataclass(frozen=True)
class TableRange:
    """Inclusive rectangular extent of a table region."""

    top_left: Placement
    bottom_right: Placement
    ref: str

    @property
    def n_rows(self) -> int:
        return self.bottom_right.row - self.top_left.row + 1

    @property
    def n_cols(self) -> int:
        return self.bottom_right.col - self.top_left.col + 1


@dataclass(frozen=True)
class StyleAssignment:
    """A style kind applied to data rows ``first_row..last_row`` of the listed columns."""

    first_row: int
    last_row: int
    cols: Tuple[int, ...]
    kind: StyleKind

    @property
    def rows(self) -> List[int]:
        return list(range(self.first_row, self.last_row + 1))


@dataclass(frozen=True)
class NormalizedDataset:
    """Output of dataset normalization."""

    dataset: Dataset
    header_labels: Tuple[str, ...]
    include_header: bool


@dataclass(frozen=True)
class TableRegion:
    """Complete, internally consistent description of a table to persist."""

    placement: Placement
    dataset: Dataset
    header_labels: Tuple[str, ...]
    show_header: bool
    range: TableRange
    style_plan: Tuple[StyleAssignment, ...] = field(default_factory=tuple)
    table_style: str = "TableStyleMedium2"

    @property
    def ref(self) -> str:
        return self.range.ref


class TableOptionsConfig(TypedDict):
    """Schema for table option YAML payloads."""

    sheet: NotRequired[str]
    anchor: NotRequired[Union[str, List[Union[str, int]]]]
    start_col: NotRequired[Union[str, int]]
    start_row: NotRequired[int]
    col_names: NotRequired[bool]
    row_names: NotRequired[bool]
    table_style: NotRequired[str]
    column_types: NotRequired[Dict[str, str]]
