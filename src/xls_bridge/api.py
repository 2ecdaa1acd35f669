"""
Async façade over the extraction and construction pipelines.

``ExcelBridge`` binds a project folder, a document preset and an optional
protection setting, resolves every file path against the folder, and runs
the blocking openpyxl work in a worker thread.

Example:
    >>> import asyncio
    >>> from xls_bridge import ExcelBridge
    >>> bridge = ExcelBridge("Downloads")
    >>> asyncio.run(bridge.create("Pessoas", ["Nome"], [{"nome": "Ana"}], "pessoas.xlsx"))
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Mapping, Sequence

from . import convert, csv_bridge
from .identifiers import to_identifier
from .models import (
    ErrorPolicy,
    ExtractionOptions,
    ExtractionResult,
    ProtectionConfig,
    SheetConfig,
    SheetSpec,
)
from .paths import project_folder, resolve_path
from .styles import DEFAULT_FONT, DEFAULT_FONT_SIZE, document_preset


class ExcelBridge:
    """Converts between workbooks, CSV files and record lists.

    Args:
        project_dir: Folder relative file paths are resolved against.
            Relative folders live under the home directory; None uses the
            working directory.
        font: Font of the default document preset.
        size: Font size of the default document preset.
        protection: Sheet protection applied to every created sheet.
    """

    def __init__(
        self,
        project_dir: str | Path | None = None,
        font: str = DEFAULT_FONT,
        size: int = DEFAULT_FONT_SIZE,
        protection: ProtectionConfig | None = None,
    ):
        self.project_dir = project_folder(project_dir)
        self.font = font
        self.size = size
        self.protection = protection

    def resolve(self, path: str | Path | None, reading: bool = True, suffix: str = ".xlsx") -> Path:
        """Resolve ``path`` against the project folder."""
        return resolve_path(path, self.project_dir, reading=reading, suffix=suffix)

    @staticmethod
    def to_identifier(value: Any) -> str | None:
        return to_identifier(value)

    async def to_json(
        self,
        file_path: str | Path,
        sheet: str | int = 1,
        header_row: int = 1,
        start_row: int = 2,
        required_columns: Sequence[str] = (),
        on_error: ErrorPolicy = ErrorPolicy.COLLECT,
    ) -> ExtractionResult:
        """Read a sheet into formatted records."""
        path = self.resolve(file_path)
        options = ExtractionOptions(
            sheet=sheet,
            header_row=header_row,
            start_row=start_row,
            required_columns=list(required_columns),
            on_error=on_error,
        )
        return await asyncio.to_thread(convert.extract_records, path, options)

    async def create(
        self,
        sheet: str | Sequence[SheetSpec],
        columns: Sequence[Any] | None = None,
        rows: Sequence[Mapping[str, Any]] | None = None,
        file_path: str | Path | None = None,
        config: str | SheetConfig = "default",
        protection: ProtectionConfig | None = None,
    ) -> Path:
        """Build and save a workbook.

        Args:
            sheet: Sheet name, or a list of SheetSpec for several sheets.
            columns: Column specs of the single sheet.
            rows: Row mappings of the single sheet.
            file_path: Output file; a ``temp_<ms>.xlsx`` name when omitted.
            config: Preset name or an explicit SheetConfig.
            protection: Overrides the bridge-wide protection.

        Returns:
            Path of the saved workbook.
        """
        if isinstance(config, str):
            config = document_preset(config, font=self.font, size=self.size)
        path = self.resolve(file_path, reading=False)
        return await asyncio.to_thread(
            convert.create_workbook,
            sheet,
            columns,
            rows,
            path,
            config,
            protection or self.protection,
        )

    async def csv_to_xlsx(
        self,
        csv_path: str | Path,
        xlsx_path: str | Path | None = None,
        sheet_name: str = csv_bridge.DEFAULT_SHEET_NAME,
    ) -> Path:
        """Convert a CSV file; the workbook defaults to the CSV's name with ``.xlsx``."""
        source = self.resolve(csv_path)
        target = self.resolve(xlsx_path or source.with_suffix(".xlsx"), reading=False)
        return await asyncio.to_thread(csv_bridge.csv_to_xlsx, source, target, sheet_name)

    async def to_csv(
        self,
        file_path: str | Path | None,
        columns: Sequence[str],
        rows: Sequence[Mapping[str, Any]],
    ) -> Path:
        """Write records to a semicolon-separated CSV file."""
        path = self.resolve(file_path, reading=False, suffix=".csv")
        return await asyncio.to_thread(csv_bridge.write_csv, path, columns, rows)

    async def hide_columns(
        self,
        file_path: str | Path,
        sheet: str | int,
        start_column: int,
        count: int = 1,
    ) -> Path:
        """Hide a run of columns in an existing workbook."""
        path = self.resolve(file_path)
        return await asyncio.to_thread(convert.hide_columns, path, sheet, start_column, count)
