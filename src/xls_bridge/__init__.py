"""
xls-bridge: Excel workbook, CSV and record conversion.

This library reads worksheets into lists of keyed, formatted records and
builds styled workbooks (frozen headers, autofilters, dropdown lists backed by
a hidden sheet, notes and sheet protection) from column and row specs. It
also converts CSV files to workbooks and records to CSV.

Reading:
    >>> from xls_bridge import extract_records, ExtractionOptions
    >>> result = extract_records("pessoas.xlsx", ExtractionOptions(required_columns=["NOME"]))
    >>> print(result.records)

Building:
    >>> from xls_bridge import create_workbook, document_preset
    >>> create_workbook(
    ...     "Pessoas",
    ...     ["Nome", {"value": "Status", "validation": {"select": True, "values": ["Ativo", "Inativo"]}}],
    ...     [{"nome": "Ana", "status": "Ativo"}],
    ...     "pessoas.xlsx",
    ...     config=document_preset(),
    ... )

Async usage:
    >>> import asyncio
    >>> from xls_bridge import ExcelBridge
    >>> bridge = ExcelBridge("Downloads")
    >>> result = asyncio.run(bridge.to_json("pessoas.xlsx"))
"""

from .api import ExcelBridge
from .convert import (
    build_workbook,
    create_workbook,
    extract_from_workbook,
    extract_records,
    hide_columns,
    open_workbook,
    save_workbook,
)
from .csv_bridge import csv_to_xlsx, read_csv_rows, write_csv
from .exceptions import (
    InvalidColumnsError,
    InvalidDateError,
    InvalidHeaderRowError,
    InvalidPathError,
    InvalidStartRowError,
    InvalidStyleError,
    MissingColumnsError,
    SheetNameRequiredError,
    SheetNotFoundError,
    WriteFailureError,
    XlsBridgeError,
)
from .formatting import (
    format_date,
    format_extended_date,
    format_full_date,
    format_record,
    format_schedule,
    format_value,
)
from .identifiers import to_identifier
from .models import (
    # Enums
    ErrorPolicy,
    SheetVisibility,
    # Construction specs
    ColumnSpec,
    RichCell,
    ValidationRule,
    ListSelect,
    SheetSpec,
    # Configuration
    HeaderConfig,
    SheetConfig,
    ProtectionConfig,
    ExtractionOptions,
    # Results
    ExtractionResult,
    RowError,
)
from .paths import project_folder, resolve_path
from .styles import CELL_STYLES, document_preset

__version__ = "0.1.0"

__all__ = [
    # Main API
    "ExcelBridge",
    "extract_records",
    "extract_from_workbook",
    "build_workbook",
    "create_workbook",
    "save_workbook",
    "hide_columns",
    "open_workbook",
    # CSV
    "csv_to_xlsx",
    "read_csv_rows",
    "write_csv",
    # Helpers
    "to_identifier",
    "format_value",
    "format_record",
    "format_date",
    "format_full_date",
    "format_schedule",
    "format_extended_date",
    "project_folder",
    "resolve_path",
    "document_preset",
    "CELL_STYLES",
    # Models
    "ErrorPolicy",
    "SheetVisibility",
    "ColumnSpec",
    "RichCell",
    "ValidationRule",
    "ListSelect",
    "SheetSpec",
    "HeaderConfig",
    "SheetConfig",
    "ProtectionConfig",
    "ExtractionOptions",
    "ExtractionResult",
    "RowError",
    # Errors
    "XlsBridgeError",
    "InvalidPathError",
    "SheetNotFoundError",
    "SheetNameRequiredError",
    "MissingColumnsError",
    "InvalidColumnsError",
    "InvalidHeaderRowError",
    "InvalidStartRowError",
    "InvalidDateError",
    "InvalidStyleError",
    "WriteFailureError",
]
