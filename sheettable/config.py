"""Table option configuration backed by YAML files."""

# Module responsibilities:
# - Load and validate table options (placement, flags, style, column types) from YAML.
# - Convert options into keyword arguments for write_data_table.

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .errors import ArgumentError, ConfigError
from .placement import parse_cell_ref, resolve_placement
from .schema import ColumnType, TableOptionsConfig
from .table_style import DEFAULT_TABLE_STYLE, validate_table_style

_ALLOWED_KEYS = frozenset(TableOptionsConfig.__annotations__)


@dataclass(frozen=True)
class TableOptions:
    """Placement, header and style options for one table."""

    sheet: str = "Sheet1"
    start_col: Union[str, int] = 1
    start_row: int = 1
    anchor: Optional[Tuple[Any, Any]] = None
    col_names: bool = True
    row_names: bool = False
    table_style: str = DEFAULT_TABLE_STYLE
    column_types: Dict[str, ColumnType] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: Path) -> "TableOptions":
        """Load table options from a YAML file."""

        if not path.exists():
            raise ConfigError(f"Table options file not found: {path}")
        with path.open("r", encoding="utf-8") as fh:
            try:
                payload = yaml.safe_load(fh)
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if payload is None:
            return cls()
        if not isinstance(payload, dict):
            raise ConfigError("Invalid table options YAML structure (expected mapping)")
        return cls.from_payload(payload)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "TableOptions":
        """Validate a decoded payload and build options from it."""

        if unknown := set(payload) - _ALLOWED_KEYS:
            raise ConfigError(f"Unknown table option keys: {', '.join(sorted(map(str, unknown)))}")

        config: TableOptionsConfig = payload  # type: ignore[assignment]
        options: Dict[str, Any] = {}
        if "sheet" in config:
            if not isinstance(config["sheet"], str) or not config["sheet"]:
                raise ConfigError(f"sheet must be a sheet name, received {config['sheet']!r}")
            options["sheet"] = config["sheet"]
        for key in ("col_names", "row_names"):
            if key in config:
                if not isinstance(config[key], bool):
                    raise ConfigError(f"{key} must be true or false")
                options[key] = config[key]
        if "table_style" in config:
            options["table_style"] = validate_table_style(config["table_style"])
        if "column_types" in config:
            types = config["column_types"]
            if not isinstance(types, dict):
                raise ConfigError("column_types must be a mapping of column name to type")
            options["column_types"] = {
                str(name): ColumnType.parse(kind) for name, kind in types.items()
            }
        if "start_col" in config:
            options["start_col"] = config["start_col"]
        if "start_row" in config:
            options["start_row"] = config["start_row"]
        if "anchor" in config:
            options["anchor"] = _parse_anchor(config["anchor"])

        try:
            resolve_placement(
                options.get("start_col", 1), options.get("start_row", 1), options.get("anchor")
            )
        except ArgumentError as exc:
            raise ConfigError(f"Invalid table placement: {exc}") from exc
        return cls(**options)

    def with_overrides(self, **changes: Any) -> "TableOptions":
        """Return a copy with the non-None ``changes`` applied."""

        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    def write_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments accepted by write_data_table."""

        return {
            "start_col": self.start_col,
            "start_row": self.start_row,
            "anchor": self.anchor,
            "col_names": self.col_names,
            "row_names": self.row_names,
            "table_style": self.table_style,
            "column_types": dict(self.column_types) or None,
        }


def _parse_anchor(value: Any) -> Tuple[Any, ...]:
    if isinstance(value, str):
        try:
            return parse_cell_ref(value)
        except ArgumentError as exc:
            raise ConfigError(str(exc)) from exc
    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise ConfigError("anchor must have exactly two elements")
        return tuple(value)
    raise ConfigError(f"anchor must be a cell reference or [column, row] pair, received {value!r}")
