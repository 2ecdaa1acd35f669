"""Base extractor protocol and sheet lookup utilities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from openpyxl import Workbook
from openpyxl.cell.cell import Cell
from openpyxl.utils import column_index_from_string
from openpyxl.worksheet.worksheet import Worksheet

from ..exceptions import InvalidHeaderRowError, SheetNotFoundError

MAX_SHEET_TITLE = 31


class BaseExtractor(ABC):
    """Base class for all extractors."""

    name: str = "base"

    def __init__(self, worksheet: Worksheet):
        """Initialize extractor.

        Args:
            worksheet: The openpyxl Worksheet to read from
        """
        self.worksheet = worksheet

    @abstractmethod
    def extract(self) -> Any:
        """Extract data from the worksheet.

        Returns:
            Extracted data (type depends on extractor)
        """
        pass

    def hidden_columns(self) -> set[int]:
        """1-based indexes of every hidden column.

        Column dimensions loaded from a file may span several columns
        (``min``..``max``), so ranges are expanded.
        """
        hidden = set()
        for letter, dim in self.worksheet.column_dimensions.items():
            if not dim.hidden:
                continue
            first = dim.min or column_index_from_string(letter)
            last = dim.max or first
            hidden.update(range(first, last + 1))
        return hidden


def get_worksheet(workbook: Workbook, sheet: str | int = 1) -> Worksheet:
    """Find a worksheet by 1-based index or by name.

    Names longer than 31 characters are retried truncated, since that is all
    Excel keeps of a sheet title.

    Raises:
        SheetNotFoundError: If nothing matches.
    """
    if isinstance(sheet, int) and not isinstance(sheet, bool):
        if 1 <= sheet <= len(workbook.worksheets):
            return workbook.worksheets[sheet - 1]
        raise SheetNotFoundError(sheet)

    if isinstance(sheet, str):
        for candidate in (sheet, sheet[:MAX_SHEET_TITLE]):
            if candidate in workbook.sheetnames:
                return workbook[candidate]

    raise SheetNotFoundError(sheet)


def get_header_row(worksheet: Worksheet, header_row: int = 1) -> tuple[Cell, ...]:
    """Return the cells of the header row.

    Raises:
        InvalidHeaderRowError: If the index is not >= 1 or the row is past
            the last populated row.
    """
    if (
        not isinstance(header_row, int)
        or isinstance(header_row, bool)
        or header_row < 1
        or header_row > worksheet.max_row
    ):
        raise InvalidHeaderRowError(header_row)

    return worksheet[header_row]
