"""Worksheet construction from column and row specs."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from openpyxl.cell.cell import Cell
from openpyxl.comments import Comment
from openpyxl.styles import Protection
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.datavalidation import DataValidation
from openpyxl.worksheet.worksheet import Worksheet

from ..exceptions import InvalidColumnsError
from ..models import (
    ColumnSpec,
    ListSelect,
    ProtectionConfig,
    RichCell,
    SheetConfig,
    ValidationRule,
    coerce_cell,
)
from ..styles import apply_style, merge_styles
from .validation import ValidationListAllocator

logger = logging.getLogger(__name__)

HEADER_ROW = 1
WIDTH_MARGIN = 5
MIN_HEADER_WIDTH = 10
NOTE_AUTHOR = "xls-bridge"


class SheetConfigurator:
    """Fills a worksheet with a header, styled data rows, validation and protection.

    Header cells are aligned to columns by position; row values are looked
    up by each column's key, so a row missing a key leaves that cell empty.

    Style layers are merged per cell in this order: the config's global
    style, the column style, then the rich cell's own style.

    Example:
        >>> from openpyxl import Workbook
        >>> wb = Workbook()
        >>> SheetConfigurator(
        ...     wb.active,
        ...     ["Nome", {"value": "Status", "validation": {"select": True, "values": ["Ativo", "Inativo"]}}],
        ...     [{"nome": "Ana", "status": "Ativo"}],
        ... ).configure()
    """

    def __init__(
        self,
        worksheet: Worksheet,
        columns: Sequence[Any],
        rows: Sequence[Mapping[str, Any]] | None = None,
        config: SheetConfig | None = None,
        protection: ProtectionConfig | None = None,
        allocator: ValidationListAllocator | None = None,
    ):
        if not isinstance(columns, (list, tuple)):
            raise InvalidColumnsError("Columns must be provided as a list.")

        self.worksheet = worksheet
        self.columns = [ColumnSpec.coerce(column) for column in columns]
        self.rows = list(rows or [])
        self.config = config or SheetConfig()
        self.protection = protection
        self.allocator = allocator or ValidationListAllocator(worksheet.parent)
        self._validations: dict[ValidationRule, DataValidation] = {}

    def configure(self) -> Worksheet:
        """Write everything and return the worksheet."""
        self._prepare_columns()
        self._write_header()

        for offset, row in enumerate(self.rows, start=1):
            self._write_row(HEADER_ROW + offset, row)

        if self.config.auto_width:
            self._adjust_widths()

        if self.protection and self.protection.enabled:
            self._protect()

        return self.worksheet

    # -------------------------------------------------------------------------
    # Header
    # -------------------------------------------------------------------------

    def _prepare_columns(self) -> None:
        for index, column in enumerate(self.columns, start=1):
            if column.width:
                letter = get_column_letter(index)
                self.worksheet.column_dimensions[letter].width = column.width

    def _write_header(self) -> None:
        header = self.config.header
        base_style = _header_style(header.style)

        for index, column in enumerate(self.columns, start=1):
            cell = self.worksheet.cell(row=HEADER_ROW, column=index, value=column.label)
            style = merge_styles(base_style, column.header_style)
            if column.rotation is not None:
                style.setdefault("alignment", {})["text_rotation"] = column.rotation
            apply_style(cell, style)

        if header.fixed:
            self.worksheet.freeze_panes = f"A{header.row + 1}"

        if header.filter and self.columns:
            last = get_column_letter(len(self.columns))
            self.worksheet.auto_filter.ref = f"A{header.row}:{last}{header.row}"

    # -------------------------------------------------------------------------
    # Data
    # -------------------------------------------------------------------------

    def _write_row(self, row_number: int, data: Mapping[str, Any]) -> None:
        for index, column in enumerate(self.columns, start=1):
            cell = self.worksheet.cell(row=row_number, column=index)
            entry = coerce_cell(data.get(column.key) if column.key else None)
            self._write_cell(cell, column, entry)

    def _write_cell(self, cell: Cell, column: ColumnSpec, entry: Any) -> None:
        rich = entry if isinstance(entry, RichCell) else None

        if rich is not None:
            value = rich.value
            style = merge_styles(self.config.global_style, column.style, rich.style)
            if rich.note:
                cell.comment = Comment(rich.note, NOTE_AUTHOR)
            validation = rich.validation
        else:
            value = entry
            style = merge_styles(self.config.global_style, column.style)
            validation = None

        apply_style(cell, style)

        if validation is None:
            validation = column.validation
        if isinstance(validation, ListSelect):
            validation = self.allocator.allocate(validation)
        if validation is not None:
            self._add_validation(cell, validation)

        cell.value = value

        protection: dict[str, bool] = {}
        if column.editable:
            protection["locked"] = False
        if rich is not None and rich.protection:
            protection.update(rich.protection)
        if protection:
            cell.protection = Protection(**protection)

    def _add_validation(self, cell: Cell, rule: ValidationRule) -> None:
        dv = self._validations.get(rule)
        if dv is None:
            dv = DataValidation(
                type=rule.type,
                formula1=rule.formula1,
                formula2=rule.formula2,
                operator=rule.operator,
                allowBlank=rule.allow_blank,
                showErrorMessage=rule.show_error_message,
                errorTitle=rule.error_title,
                error=rule.error,
                showInputMessage=bool(rule.prompt),
                promptTitle=rule.prompt_title,
                prompt=rule.prompt,
            )
            self.worksheet.add_data_validation(dv)
            self._validations[rule] = dv
        dv.add(cell)

    # -------------------------------------------------------------------------
    # Finishing
    # -------------------------------------------------------------------------

    def _adjust_widths(self) -> None:
        """Size columns without a manual width to their longest text plus a margin."""
        for index, column in enumerate(self.columns, start=1):
            if column.width:
                continue

            longest = len(str(column.label)) if column.label else MIN_HEADER_WIDTH
            for (value,) in self.worksheet.iter_rows(
                min_row=HEADER_ROW + 1,
                min_col=index,
                max_col=index,
                values_only=True,
            ):
                if value is not None and value != "":
                    longest = max(longest, len(str(value)))

            letter = get_column_letter(index)
            self.worksheet.column_dimensions[letter].width = longest + WIDTH_MARGIN

    def _protect(self) -> None:
        # In openpyxl, False means the action stays allowed
        protection = self.worksheet.protection
        protection.sheet = True
        if self.protection.password:
            protection.password = self.protection.password
        protection.selectLockedCells = False
        protection.selectUnlockedCells = False
        protection.autoFilter = False
        logger.debug("Protected sheet %r", self.worksheet.title)


def _header_style(style: Mapping[str, Any] | None) -> dict[str, Any]:
    """Resolve a header style, accepting a top-level ``textRotation``."""
    if not style:
        return {}
    style = dict(style)
    rotation = style.pop("textRotation", style.pop("text_rotation", None))
    merged = merge_styles(style)
    if rotation is not None:
        merged.setdefault("alignment", {})["text_rotation"] = rotation
    return merged
