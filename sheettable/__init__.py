"""`sheettable` top-level package exports the table-region builder and its Excel writer."""

# Module responsibilities:
# - Re-export the builder, data model and openpyxl helpers as the stable API surface.

from __future__ import annotations

from .backend import SheetBackend
from .builder import build_table_region
from .config import TableOptions
from .dataset import as_dataset, from_dataframe, normalize_dataset
from .errors import ArgumentError, ConfigError, DatasetTypeError, SheetTableError, ValidationError
from .excel_reader import read_table
from .excel_writer import OpenpyxlBackend, persist_region, save_data_table, write_data_table
from .placement import column_index, column_letter, parse_cell_ref, resolve_placement
from .schema import (
    Column,
    ColumnType,
    Dataset,
    Placement,
    StyleAssignment,
    StyleKind,
    TableRange,
    TableRegion,
)
from .table_style import DEFAULT_TABLE_STYLE, TABLE_STYLE_NAMES, validate_table_style

__all__ = [
    "build_table_region",
    "write_data_table",
    "save_data_table",
    "persist_region",
    "read_table",
    "OpenpyxlBackend",
    "SheetBackend",
    "TableOptions",
    "Column",
    "ColumnType",
    "Dataset",
    "Placement",
    "StyleAssignment",
    "StyleKind",
    "TableRange",
    "TableRegion",
    "as_dataset",
    "from_dataframe",
    "normalize_dataset",
    "column_index",
    "column_letter",
    "parse_cell_ref",
    "resolve_placement",
    "validate_table_style",
    "DEFAULT_TABLE_STYLE",
    "TABLE_STYLE_NAMES",
    "SheetTableError",
    "ArgumentError",
    "ConfigError",
    "DatasetTypeError",
    "ValidationError",
]

__version__ = "0.1.0"
