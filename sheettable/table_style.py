"""Closed set of Excel table style names."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from .errors import ValidationError

DEFAULT_TABLE_STYLE = "TableStyleMedium2"

TABLE_STYLE_NAMES: Tuple[str, ...] = (
    tuple(f"TableStyleLight{idx}" for idx in range(1, 22))
    + tuple(f"TableStyleMedium{idx}" for idx in range(1, 29))
    + tuple(f"TableStyleDark{idx}" for idx in range(1, 12))
)

_CANONICAL: Dict[str, str] = {name.lower(): name for name in TABLE_STYLE_NAMES}


def validate_table_style(name: Any) -> str:
    """Return the canonical casing of ``name``; reject anything outside the closed set."""

    if not isinstance(name, str):
        raise ValidationError(f"Table style must be a string, received {type(name).__name__}")
    canonical = _CANONICAL.get(name.lower())
    if canonical is None:
        raise ValidationError(
            f"Invalid table style {name!r}; expected TableStyleLight1-21, "
            "TableStyleMedium1-28 or TableStyleDark1-11"
        )
    return canonical
