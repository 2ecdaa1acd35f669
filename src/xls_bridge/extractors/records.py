"""Data row to keyed record extraction."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from openpyxl.cell.cell import Cell
from openpyxl.worksheet.worksheet import Worksheet

from ..exceptions import InvalidStartRowError, XlsBridgeError
from ..formatting import format_record
from ..identifiers import to_identifier, unique_key
from ..models import ErrorPolicy, RowError
from .base import BaseExtractor

logger = logging.getLogger(__name__)


class RecordExtractor(BaseExtractor):
    """Turns data rows into dicts keyed by header identifiers.

    Header cells are matched by column position. Empty data cells, columns
    with an empty header and hidden columns contribute nothing; rows left with
    no keys are dropped. Repeated identifiers inside one row get ``_2``,
    ``_3``... suffixes in column order.
    """

    name = "records"

    def __init__(
        self,
        worksheet: Worksheet,
        header_row: Sequence[Cell],
        start_row: int = 2,
    ):
        super().__init__(worksheet)
        if (
            not isinstance(start_row, int)
            or isinstance(start_row, bool)
            or start_row < 1
        ):
            raise InvalidStartRowError(start_row)
        self.header_row = header_row
        self.start_row = start_row
        self._headers = {cell.column: cell.value for cell in header_row}

    def extract(self) -> list[dict[str, Any]]:
        """Extract raw records (values as stored in the sheet).

        Returns:
            One dict per non-empty row
        """
        return [record for _, record in self.iter_records()]

    def iter_records(self):
        """Yield ``(row_number, raw_record)`` for every non-empty row."""
        hidden = self.hidden_columns()
        last_row = self.worksheet.max_row

        for row in self.worksheet.iter_rows(min_row=self.start_row, max_row=last_row):
            record = self._row_record(row, hidden)
            if record:
                yield row[0].row, record

    def _row_record(self, row: Sequence[Cell], hidden: set[int]) -> dict[str, Any]:
        record: dict[str, Any] = {}
        for cell in row:
            if cell.value is None:
                continue
            column = cell.column
            header = self._headers.get(column)
            if not header or column in hidden:
                continue
            identifier = to_identifier(header)
            if not identifier:
                continue
            record[unique_key(identifier, record)] = cell.value
        return record

    def extract_formatted(
        self, on_error: ErrorPolicy = ErrorPolicy.COLLECT
    ) -> tuple[list[dict[str, str]], list[RowError]]:
        """Extract records and format every value.

        Args:
            on_error: RAISE re-raises the first row failure; COLLECT logs it,
                skips the row and reports it in the returned error list.

        Returns:
            Tuple of (formatted records, row errors)
        """
        records: list[dict[str, str]] = []
        errors: list[RowError] = []

        for row_number, raw in self.iter_records():
            try:
                records.append(format_record(raw))
            except (XlsBridgeError, TypeError, ValueError) as e:
                if on_error is ErrorPolicy.RAISE:
                    raise
                logger.warning(
                    "Skipping row %d of sheet %r: %s",
                    row_number, self.worksheet.title, e,
                )
                errors.append(RowError(row=row_number, message=str(e)))

        return records, errors
