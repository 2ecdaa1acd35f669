"""
CSV to spreadsheet conversion and record export to CSV.

Reading trims each line and splits it on every ``;`` or ``,``, with no
quote-aware parsing. The only quoting handled is a field wrapped entirely in
double quotes (as written by ``write_csv``), which is unwrapped.

Writing produces ``;``-separated, fully quoted fields with ``\\n`` line
endings and a UTF-8 byte-order mark so Excel detects the encoding.
"""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence

from openpyxl import Workbook

from .exceptions import InvalidPathError, WriteFailureError
from .identifiers import to_identifier

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "Planilha1"

_DELIMITERS = re.compile(r"[;,]")


def split_line(line: str) -> list[str]:
    """Split one CSV line into raw string fields."""
    return [_unquote(field) for field in _DELIMITERS.split(line.strip())]


def _unquote(field: str) -> str:
    if len(field) >= 2 and field.startswith('"') and field.endswith('"'):
        return field[1:-1].replace('""', '"')
    return field


def read_csv_rows(csv_path: str | Path) -> Iterator[list[str]]:
    """Stream the rows of a CSV file, one list of strings per line.

    A leading UTF-8 byte-order mark is dropped.
    """
    if not csv_path:
        raise InvalidPathError("A valid CSV file path must be provided.")

    with open(csv_path, "r", encoding="utf-8-sig", newline="") as handle:
        for line in handle:
            yield split_line(line)


def csv_to_xlsx(
    csv_path: str | Path,
    xlsx_path: str | Path,
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> Path:
    """Copy every line of a CSV file into a new single-sheet workbook.

    Args:
        csv_path: Input CSV file.
        xlsx_path: Output workbook.
        sheet_name: Title of the sheet (default: "Planilha1").

    Returns:
        Path of the saved workbook.

    Raises:
        InvalidPathError: If either path is missing.
        WriteFailureError: If the workbook cannot be saved.
    """
    if not csv_path:
        raise InvalidPathError("A valid CSV file path must be provided.")
    if not xlsx_path:
        raise InvalidPathError("A valid spreadsheet file path must be provided.")

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = sheet_name or DEFAULT_SHEET_NAME

    for row in read_csv_rows(csv_path):
        worksheet.append(row)

    path = Path(xlsx_path)
    try:
        workbook.save(path)
    except OSError as e:
        logger.error("Could not save %s: %s", path, e)
        raise WriteFailureError(path, e) from e
    finally:
        workbook.close()

    logger.info("Converted %s to %s", csv_path, path)
    return path


def write_csv(
    output_path: str | Path,
    columns: Sequence[str],
    rows: Sequence[Mapping[str, Any]],
) -> Path:
    """Write records as a semicolon-separated CSV file.

    Each row value is looked up by the column label, then by the label's
    identifier ("Data de Emissão" -> "data_de_emissao"). Missing values are
    written as empty strings.

    Raises:
        InvalidPathError: If the output path is missing.
        WriteFailureError: If the file cannot be written.
    """
    if not output_path:
        raise InvalidPathError("A valid CSV file path must be provided.")

    path = Path(output_path)
    try:
        with open(path, "w", encoding="utf-8-sig", newline="") as handle:
            writer = csv.writer(
                handle,
                delimiter=";",
                quotechar='"',
                quoting=csv.QUOTE_ALL,
                lineterminator="\n",
            )
            writer.writerow(columns)
            for row in rows:
                writer.writerow([_lookup(row, column) for column in columns])
    except OSError as e:
        logger.error("Could not write %s: %s", path, e)
        raise WriteFailureError(path, e) from e

    logger.info("CSV file written: %s", path)
    return path


def _lookup(row: Mapping[str, Any], column: str) -> Any:
    if column in row:
        value = row[column]
    else:
        value = row.get(to_identifier(column) or column)
    return "" if value is None else value
