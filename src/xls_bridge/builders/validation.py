"""Dropdown lists backed by a hidden lookup sheet."""

from __future__ import annotations

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from ..models import ListSelect, SheetVisibility, ValidationRule

HIDDEN_SHEET = "HiddenSelect"
DROPDOWN_ERROR_TITLE = "Entrada inválida"
DROPDOWN_ERROR_MESSAGE = "Escolha um valor da lista suspensa."


class ValidationListAllocator:
    """Writes dropdown option lists once and hands out range-based rules.

    One allocator belongs to one construction call. Option lists are keyed by
    their pipe-joined values, so columns (or cells) with the same options in
    the same order share a single range of the hidden sheet; a reordered list
    gets its own range.

    The hidden sheet is created on first use, or reused when the workbook
    already has one, and is always set to very-hidden so it cannot be
    unhidden from the Excel UI.
    """

    def __init__(self, workbook: Workbook):
        self.workbook = workbook
        self._sheet: Worksheet | None = None
        self._next_row = 1
        self._ranges: dict[str, tuple[int, int]] = {}

    @property
    def sheet(self) -> Worksheet:
        """The hidden lookup sheet, created on first access."""
        if self._sheet is None:
            if HIDDEN_SHEET in self.workbook.sheetnames:
                sheet = self.workbook[HIDDEN_SHEET]
                self._next_row = _used_rows(sheet) + 1
            else:
                sheet = self.workbook.create_sheet(HIDDEN_SHEET)
            sheet.sheet_state = SheetVisibility.VERY_HIDDEN.sheet_state
            self._sheet = sheet
        return self._sheet

    def allocate(self, select: ListSelect) -> ValidationRule | None:
        """Return a list rule pointing at the options of ``select``.

        Returns:
            The rule, or None for an empty option list
        """
        if not select.values:
            return None

        key = select.dedup_key
        if key not in self._ranges:
            sheet = self.sheet
            start = self._next_row
            for offset, value in enumerate(select.values):
                sheet.cell(row=start + offset, column=1, value=value)
            end = start + len(select.values) - 1
            self._ranges[key] = (start, end)
            self._next_row = end + 1

        start, end = self._ranges[key]
        return ValidationRule(
            type="list",
            formula1=f"{HIDDEN_SHEET}!$A${start}:$A${end}",
            allow_blank=True,
            show_error_message=True,
            error_title=DROPDOWN_ERROR_TITLE,
            error=DROPDOWN_ERROR_MESSAGE,
        )

    def finalize(self) -> None:
        """Move the hidden sheet behind every user sheet.

        Keeps user sheets at the front so index lookups and the active sheet
        are unaffected by the lookup sheet.
        """
        if self._sheet is None:
            return
        position = self.workbook.index(self._sheet)
        last = len(self.workbook.sheetnames) - 1
        self.workbook.move_sheet(self._sheet, offset=last - position)
        self.workbook.active = 0


def _used_rows(sheet: Worksheet) -> int:
    if sheet.max_row == 1 and sheet.cell(row=1, column=1).value is None:
        return 0
    return sheet.max_row
