"""Collaborator contract for persisting table regions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from .schema import Dataset, StyleKind


class SheetBackend(ABC):
    """Abstract sink that materializes a TableRegion into a sheet."""

    @abstractmethod
    def write_data(
        self,
        sheet: Any,
        dataset: Dataset,
        include_header: bool,
        start_row: int,
        start_col: int,
    ) -> None:
        """Write cell values (header row first when requested) at the 1-based anchor."""

    @abstractmethod
    def add_style(
        self,
        sheet: Any,
        style: StyleKind,
        rows: Sequence[int],
        cols: Sequence[int],
        grid_expand: bool = True,
    ) -> None:
        """Mark cells with ``style``; ``grid_expand`` applies the rows x cols cross product."""

    @abstractmethod
    def build_table(
        self,
        sheet: Any,
        header_labels: Sequence[str],
        ref: str,
        show_header: bool,
        table_style: str,
    ) -> Any:
        """Register a table object with a unique identifier and return it."""
