"""
Extraction and construction pipelines.

This module ties the readers and writers together around openpyxl
workbooks: ``extract_records`` reads a sheet into formatted records and
``create_workbook`` builds and saves a styled workbook from column and row
specs.

Example:
    >>> from xls_bridge import create_workbook, extract_records
    >>> create_workbook("Pessoas", ["Nome", "Idade"], [{"nome": "Ana", "idade": 30}], "pessoas.xlsx")
    >>> extract_records("pessoas.xlsx").records
    [{'nome': 'Ana', 'idade': '30'}]
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from copy import copy
from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence

import openpyxl
from openpyxl import Workbook
from openpyxl.utils import column_index_from_string, get_column_letter
from openpyxl.worksheet.dimensions import ColumnDimension
from openpyxl.worksheet.worksheet import Worksheet

from .builders import SheetConfigurator, ValidationListAllocator
from .exceptions import InvalidPathError, SheetNameRequiredError, WriteFailureError
from .extractors import ColumnMapper, RecordExtractor, get_worksheet
from .models import (
    ExtractionOptions,
    ExtractionResult,
    ProtectionConfig,
    SheetConfig,
    SheetSpec,
)

logger = logging.getLogger(__name__)


@contextmanager
def open_workbook(file_path: str | Path, data_only: bool = True) -> Iterator[Workbook]:
    """Open a workbook and close it on exit.

    Args:
        file_path: Path to the Excel file.
        data_only: Read cached formula results instead of formula text.

    Raises:
        InvalidPathError: If the path is empty.
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a readable Excel file.
    """
    if not file_path or not str(file_path).strip():
        raise InvalidPathError("A valid Excel file path must be provided.")

    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        workbook = openpyxl.load_workbook(path, data_only=data_only)
    except Exception as e:
        raise ValueError(f"Could not open Excel file: {e}") from e

    try:
        yield workbook
    finally:
        workbook.close()


# =============================================================================
# Read path
# =============================================================================


def extract_records(
    file_path: str | Path,
    options: ExtractionOptions | None = None,
) -> ExtractionResult:
    """Read one sheet of a workbook into formatted records.

    Args:
        file_path: Path to the Excel file.
        options: Sheet, header row, first data row, required columns and
            row failure policy. Defaults to the first sheet, header on row 1,
            data from row 2, collecting row failures.

    Returns:
        ExtractionResult with the header labels, records and row errors.

    Raises:
        SheetNotFoundError: If the sheet does not exist.
        InvalidHeaderRowError: If the header row is invalid.
        InvalidStartRowError: If the start row is below 1.
        MissingColumnsError: If required columns are absent.
    """
    with open_workbook(file_path) as workbook:
        return extract_from_workbook(workbook, options)


def extract_from_workbook(
    workbook: Workbook,
    options: ExtractionOptions | None = None,
) -> ExtractionResult:
    """Same as ``extract_records`` for an already opened workbook."""
    if options is None:
        options = ExtractionOptions()

    worksheet = get_worksheet(workbook, options.sheet)
    column_map = ColumnMapper(
        worksheet, options.header_row, options.required_columns
    ).extract()
    extractor = RecordExtractor(worksheet, column_map.header_row, options.start_row)

    records, errors = extractor.extract_formatted(options.on_error)
    if errors:
        logger.warning(
            "Extracted %d records from %r; %d rows failed",
            len(records), worksheet.title, len(errors),
        )

    return ExtractionResult(header=column_map.labels, records=records, errors=errors)


# =============================================================================
# Write path
# =============================================================================


def build_workbook(
    sheet: str | Sequence[SheetSpec],
    columns: Sequence[Any] | None = None,
    rows: Sequence[Mapping[str, Any]] | None = None,
    config: SheetConfig | None = None,
    protection: ProtectionConfig | None = None,
) -> Workbook:
    """Build an in-memory workbook with one or several configured sheets.

    Args:
        sheet: Sheet name for a single sheet, or a list of SheetSpec (or
            ``{"name", "columns", "rows"}`` mappings) for several.
        columns: Column specs of the single sheet.
        rows: Row mappings of the single sheet.
        config: Header/style/width options shared by every sheet.
        protection: Sheet protection shared by every sheet.

    Raises:
        SheetNameRequiredError: If a sheet has no name.
        InvalidColumnsError: If column specs are malformed.
    """
    if isinstance(sheet, (list, tuple)):
        specs = [_sheet_spec(item) for item in sheet]
    else:
        specs = [SheetSpec(name=sheet, columns=columns, rows=list(rows or []))]

    if not specs:
        raise SheetNameRequiredError()
    for spec in specs:
        if not spec.name:
            raise SheetNameRequiredError()

    workbook = Workbook()
    workbook.remove(workbook.active)
    allocator = ValidationListAllocator(workbook)

    for spec in specs:
        worksheet = workbook.create_sheet(spec.name)
        SheetConfigurator(
            worksheet,
            spec.columns,
            spec.rows,
            config=config,
            protection=protection,
            allocator=allocator,
        ).configure()

    allocator.finalize()
    return workbook


def _sheet_spec(item: SheetSpec | Mapping[str, Any]) -> SheetSpec:
    if isinstance(item, SheetSpec):
        return item
    return SheetSpec(
        name=item.get("name") or item.get("sheet_name") or item.get("sheetName"),
        columns=item.get("columns"),
        rows=list(item.get("rows") or []),
    )


def save_workbook(workbook: Workbook, file_path: str | Path) -> Path:
    """Save a workbook, wrapping I/O failures in WriteFailureError."""
    path = Path(file_path)
    try:
        workbook.save(path)
    except OSError as e:
        logger.error("Could not save spreadsheet %s: %s", path, e)
        raise WriteFailureError(path, e) from e

    logger.info("Spreadsheet %s saved in %s", path.name, path.parent)
    return path


def create_workbook(
    sheet: str | Sequence[SheetSpec],
    columns: Sequence[Any] | None = None,
    rows: Sequence[Mapping[str, Any]] | None = None,
    file_path: str | Path | None = None,
    config: SheetConfig | None = None,
    protection: ProtectionConfig | None = None,
) -> Path:
    """Build a workbook and save it to ``file_path``.

    See ``build_workbook`` for the arguments.

    Returns:
        Path of the saved file.

    Raises:
        InvalidPathError: If no file path is given.
        WriteFailureError: If saving fails.
    """
    if not file_path:
        raise InvalidPathError("A valid output file path must be provided.")

    workbook = build_workbook(sheet, columns, rows, config, protection)
    try:
        return save_workbook(workbook, file_path)
    finally:
        workbook.close()


# =============================================================================
# Modifiers
# =============================================================================


def hide_columns(
    file_path: str | Path,
    sheet: str | int,
    start_column: int,
    count: int = 1,
) -> Path:
    """Hide ``count`` consecutive columns starting at ``start_column`` (1 = A).

    The workbook is rewritten in place. Hidden columns are skipped by
    ``extract_records`` even though their cells keep their values.
    """
    if start_column < 1 or count < 0:
        raise ValueError("start_column must be >= 1 and count >= 0")

    with open_workbook(file_path, data_only=False) as workbook:
        worksheet = get_worksheet(workbook, sheet)
        for index in range(start_column, start_column + count):
            _single_column_dimension(worksheet, index).hidden = True
        return save_workbook(workbook, file_path)


def _single_column_dimension(worksheet: Worksheet, index: int) -> ColumnDimension:
    """Return the dimension of column ``index`` alone.

    Dimensions loaded from a file may cover a range (``min``..``max``). A range
    containing ``index`` is split so the written ``<col>`` elements never
    overlap.
    """
    dimensions = worksheet.column_dimensions
    for letter, dim in list(dimensions.items()):
        first = dim.min or column_index_from_string(letter)
        last = dim.max or first
        if first == last or not first <= index <= last:
            continue

        del dimensions[letter]
        for low, high in ((first, index - 1), (index, index), (index + 1, last)):
            if low <= high:
                dimensions[get_column_letter(low)] = _copy_dimension(dim, low, high)
        break

    return dimensions[get_column_letter(index)]


def _copy_dimension(dim: ColumnDimension, first: int, last: int) -> ColumnDimension:
    clone = ColumnDimension(
        dim.parent,
        index=get_column_letter(first),
        width=dim.width,
        bestFit=dim.bestFit,
        hidden=dim.hidden,
        outlineLevel=dim.outlineLevel,
        collapsed=dim.collapsed,
        min=first,
        max=last,
    )
    clone._style = copy(dim._style)
    return clone
