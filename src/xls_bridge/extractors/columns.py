"""Header row to column index mapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from openpyxl.cell.cell import Cell
from openpyxl.worksheet.worksheet import Worksheet

from ..exceptions import MissingColumnsError
from .base import BaseExtractor, get_header_row


@dataclass
class ColumnMap:
    """Header labels of a sheet.

    Attributes:
        columns: Upper-cased header text -> 1-based column index.
        header_row: Cells of the header row, for positional lookups.
    """

    columns: dict[str, int] = field(default_factory=dict)
    header_row: tuple[Cell, ...] = ()

    @property
    def labels(self) -> list[str]:
        """Upper-cased labels in column order."""
        return list(self.columns)


class ColumnMapper(BaseExtractor):
    """Maps the header row of a sheet and checks required columns."""

    name = "columns"

    def __init__(
        self,
        worksheet: Worksheet,
        header_row: int = 1,
        required_columns: Iterable[str] | None = None,
    ):
        super().__init__(worksheet)
        self.header_index = header_row
        self.required_columns = [str(c).upper() for c in required_columns or []]

    def extract(self) -> ColumnMap:
        """Build the column map.

        Header cells that are empty, or whose value is not plain text or a
        number (dates, formula objects), are left out.

        Returns:
            ColumnMap for the sheet

        Raises:
            InvalidHeaderRowError: If the header row index is invalid.
            MissingColumnsError: If required labels are absent.
        """
        header_row = get_header_row(self.worksheet, self.header_index)

        columns: dict[str, int] = {}
        for cell in header_row:
            value = cell.value
            if value is None or value == "" or isinstance(value, bool):
                continue
            if not isinstance(value, (str, int, float)):
                continue
            columns[str(value).upper()] = cell.column

        verify_required_columns(columns, self.required_columns)
        return ColumnMap(columns=columns, header_row=header_row)


def verify_required_columns(columns: dict[str, int], required: Iterable[str]) -> None:
    """Raise MissingColumnsError listing every required label not in ``columns``."""
    missing = [label for label in required if label.upper() not in columns]
    if missing:
        raise MissingColumnsError(label.upper() for label in missing)
