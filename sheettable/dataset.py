"""Dataset ingestion and normalization."""

# Module responsibilities:
# - Convert pandas DataFrames into typed Dataset values.
# - Build the normalized view used for table placement (row names, padding, header labels).

from __future__ import annotations

import datetime as dt
from typing import Any, Mapping, Optional, Sequence, Set, Tuple
from xml.sax.saxutils import escape

import pandas as pd

from .errors import ArgumentError, DatasetTypeError, ValidationError
from .schema import Column, ColumnType, ColumnTypeSpec, Dataset, NormalizedDataset

ROW_NAMES_COLUMN = "row names"
_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def _infer_column_type(series: pd.Series) -> ColumnType:
    if pd.api.types.is_datetime64_any_dtype(series.dtype):
        return ColumnType.TIMESTAMP
    if series.dtype == object:
        present = series.dropna()
        if len(present) and all(
            isinstance(value, dt.date) and not isinstance(value, dt.datetime) for value in present
        ):
            return ColumnType.DATE
        if len(present) and all(isinstance(value, dt.datetime) for value in present):
            return ColumnType.TIMESTAMP
    return ColumnType.PLAIN


def drop_timezone(value: Any) -> Any:
    """Return ``value`` without tzinfo, keeping wall-clock time; Excel stores naive times only."""

    if isinstance(value, (dt.datetime, dt.time)) and value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


def _cell_values(series: pd.Series) -> Tuple[Any, ...]:
    if isinstance(series.dtype, pd.DatetimeTZDtype):
        series = series.dt.tz_localize(None)
    values = []
    for value in series.astype(object).tolist():
        if value is None or (pd.api.types.is_scalar(value) and pd.isna(value)):
            values.append(None)
        elif isinstance(value, pd.Timestamp):
            values.append(drop_timezone(value.to_pydatetime()))
        else:
            values.append(drop_timezone(value))
    return tuple(values)


def from_dataframe(
    df: pd.DataFrame,
    column_types: Optional[Mapping[str, ColumnTypeSpec]] = None,
) -> Dataset:
    """Convert a DataFrame into a Dataset.

    Datetime columns are typed as timestamps and columns holding only
    ``datetime.date`` values as dates; ``column_types`` overrides inference.
    The DataFrame index becomes the row identifiers.
    """

    if df.columns.duplicated().any():
        raise DatasetTypeError("DataFrame column names must be unique")
    if len(df.columns) == 0:
        raise DatasetTypeError("DataFrame must contain at least one column")
    overrides = {str(name): ColumnType.parse(kind) for name, kind in (column_types or {}).items()}
    names = [str(name) for name in df.columns]
    unknown = set(overrides) - set(names)
    if unknown:
        raise ValidationError(
            f"column_types references unknown columns: {', '.join(sorted(unknown))}"
        )

    columns = []
    for position, name in enumerate(names):
        series = df.iloc[:, position]
        kind = overrides.get(name) or _infer_column_type(series)
        columns.append(Column(name=name, values=_cell_values(series), type=kind))
    row_names = tuple(str(label) for label in df.index)
    return Dataset(columns=tuple(columns), row_names=row_names)


def as_dataset(data: Any, column_types: Optional[Mapping[str, ColumnTypeSpec]] = None) -> Dataset:
    """Accept a Dataset or DataFrame; anything else is rejected as non-tabular."""

    if isinstance(data, pd.DataFrame):
        return from_dataframe(data, column_types)
    if isinstance(data, Dataset):
        if not column_types:
            return data
        overrides = {str(name): ColumnType.parse(kind) for name, kind in column_types.items()}
        unknown = set(overrides) - set(data.names)
        if unknown:
            raise ValidationError(
                f"column_types references unknown columns: {', '.join(sorted(unknown))}"
            )
        columns = tuple(
            Column(name=column.name, values=column.values, type=overrides.get(column.name, column.type))
            for column in data.columns
        )
        return Dataset(columns=columns, row_names=data.row_names)
    raise DatasetTypeError(
        f"data must be a Dataset or pandas.DataFrame, received {type(data).__name__}"
    )


def escape_label(label: str) -> str:
    """Escape ``& " ' < >`` for use inside table XML. Not idempotent; apply once."""

    return escape(label, _XML_ENTITIES)


def require_flag(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ArgumentError(f"{name} must be a boolean, received {value!r}")
    return value


def header_labels(names: Sequence[str], include_header: bool) -> Tuple[str, ...]:
    if include_header:
        return tuple(str(name) for name in names)
    return tuple(f"Column{idx}" for idx in range(1, len(names) + 1))


def _require_unique_labels(labels: Sequence[str]) -> None:
    # Excel compares table column names case-insensitively
    seen: Set[str] = set()
    duplicates = []
    for label in labels:
        key = label.casefold()
        if key in seen:
            duplicates.append(label)
        seen.add(key)
    if duplicates:
        raise DatasetTypeError(
            f"Table column names must be unique (case-insensitive): {', '.join(duplicates)}"
        )


def normalize_dataset(
    dataset: Dataset,
    include_header: bool = True,
    include_row_names: bool = False,
) -> NormalizedDataset:
    """Return the normalized view of ``dataset`` without mutating it.

    Steps:
    1. Prepend a ``"row names"`` column when requested.
    2. Resolve header labels (column names or ``Column1..N`` placeholders);
       labels that repeat ignoring case are rejected.
    3. Pad a zero-row dataset with one row of empty strings.
    4. Escape the labels for XML.
    """

    include_header = require_flag(include_header, "include_header")
    include_row_names = require_flag(include_row_names, "include_row_names")
    if not isinstance(dataset, Dataset):
        raise DatasetTypeError(f"Expected a Dataset, received {type(dataset).__name__}")

    columns = list(dataset.columns)
    if include_row_names:
        columns.insert(0, Column(name=ROW_NAMES_COLUMN, values=dataset.resolved_row_names()))

    labels = header_labels([column.name for column in columns], include_header)
    _require_unique_labels(labels)

    row_names = dataset.row_names
    if dataset.n_rows == 0:
        columns = [Column(name=column.name, values=("",), type=column.type) for column in columns]
        row_names = None

    normalized = Dataset(columns=tuple(columns), row_names=row_names)
    return NormalizedDataset(
        dataset=normalized,
        header_labels=tuple(escape_label(label) for label in labels),
        include_header=include_header,
    )
