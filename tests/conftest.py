from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep log files out of the home directory; modules configure logging on import.
os.environ.setdefault("SHEETTABLE_LOG_DIR", tempfile.mkdtemp(prefix="sheettable-logs-"))

from sheettable.schema import Column, ColumnType, Dataset


@pytest.fixture
def ledger() -> Dataset:
    """Three rows of a date column followed by a currency column."""

    return Dataset(
        columns=(
            Column("Date", ("2024-01-01", "2024-01-02", "2024-01-03"), ColumnType.DATE),
            Column("Amount", (10.5, 20, 30.25), ColumnType.CURRENCY),
        )
    )
