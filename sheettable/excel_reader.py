"""Source table input helpers."""

# Module responsibilities:
# - Provide a thin wrapper around pandas readers for CSV and Excel sources.
# - Emit structured logs for traceability.

from __future__ import annotations

from pathlib import Path
from typing import Union

import pandas as pd

from .utils.log import get_logger

logger = get_logger("excel_reader")

SheetType = Union[str, int, None]
EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


def read_table(path: Path, sheet: SheetType = None) -> pd.DataFrame:
    """Load a DataFrame from a CSV file or an Excel workbook.

    Args:
        path: Path to the ``.csv`` or Excel file.
        sheet: Sheet name or index for workbooks; defaults to the first sheet.

    Returns:
        DataFrame containing the requested data.

    Raises:
        FileNotFoundError: When the source file does not exist.
        ValueError: When the suffix is unsupported or pandas fails to parse the sheet.
    """

    if not path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")

    suffix = path.suffix.lower()
    logger.info("Reading source table", extra={"path": str(path), "sheet": sheet})

    if suffix == ".csv":
        df = pd.read_csv(path)
    elif suffix in EXCEL_SUFFIXES:
        try:
            df = pd.read_excel(path, sheet_name=0 if sheet is None else sheet)
        except ValueError as exc:
            logger.error("Failed to read Excel workbook", extra={"error": str(exc)})
            raise
    else:
        raise ValueError(f"Unsupported source format: {path.suffix or '<none>'}")

    if isinstance(df, dict):
        raise ValueError("read_table expects a single sheet; received multiple sheets")

    logger.info(
        "Source table loaded",
        extra={"rows": len(df.index), "columns": [str(c) for c in df.columns]},
    )
    return df
