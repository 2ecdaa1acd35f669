"""CLI entry point for xls-bridge.

Usage:
    python -m xls_bridge to-json workbook.xlsx --sheet Pessoas --require NOME
    xls-bridge csv-to-xlsx dados.csv -o dados.xlsx
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .convert import extract_records
from .csv_bridge import DEFAULT_SHEET_NAME, csv_to_xlsx
from .exceptions import XlsBridgeError
from .models import ErrorPolicy, ExtractionOptions


def _sheet_arg(value: str) -> str | int:
    return int(value) if value.isdigit() else value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xls-bridge",
        description="Convert between Excel workbooks, CSV files and JSON records",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug messages",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    to_json = commands.add_parser("to-json", help="Print a sheet as JSON records")
    to_json.add_argument("input", help="Path to Excel file (.xlsx, .xlsm)")
    to_json.add_argument(
        "--sheet",
        type=_sheet_arg,
        default=1,
        help="Sheet name or 1-based index (default: 1)",
    )
    to_json.add_argument("--header-row", type=int, default=1, help="Header row (default: 1)")
    to_json.add_argument("--start-row", type=int, default=2, help="First data row (default: 2)")
    to_json.add_argument(
        "--require",
        nargs="+",
        default=[],
        metavar="COL",
        help="Header labels that must be present",
    )
    to_json.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first row that cannot be formatted",
    )

    to_xlsx = commands.add_parser("csv-to-xlsx", help="Convert a CSV file to a workbook")
    to_xlsx.add_argument("input", help="Path to CSV file")
    to_xlsx.add_argument(
        "-o", "--output",
        help="Output workbook (default: <input>.xlsx)",
    )
    to_xlsx.add_argument(
        "--sheet",
        default=DEFAULT_SHEET_NAME,
        help=f"Sheet name (default: {DEFAULT_SHEET_NAME})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    file_path = Path(args.input)
    if not file_path.exists():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1

    try:
        if args.command == "to-json":
            options = ExtractionOptions(
                sheet=args.sheet,
                header_row=args.header_row,
                start_row=args.start_row,
                required_columns=args.require,
                on_error=ErrorPolicy.RAISE if args.strict else ErrorPolicy.COLLECT,
            )
            result = extract_records(file_path, options)
            print(json.dumps(result.records, ensure_ascii=False, indent=2))
            return 0 if result.ok else 1

        output = Path(args.output) if args.output else file_path.with_suffix(".xlsx")
        csv_to_xlsx(file_path, output, args.sheet)
        print(f"Output: {output}")
        return 0

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        return 130
    except (XlsBridgeError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
