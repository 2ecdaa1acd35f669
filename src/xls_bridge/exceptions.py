"""
Exception classes raised by xls-bridge.

Argument and setup problems are raised before any file is touched. Failures
inside a single data row are only raised when the caller asked for
``ErrorPolicy.RAISE``; otherwise they are collected as ``RowError`` records.

Hierarchy:
    XlsBridgeError
    ├── InvalidPathError
    ├── SheetNotFoundError
    ├── SheetNameRequiredError
    ├── MissingColumnsError
    ├── InvalidColumnsError
    ├── InvalidHeaderRowError
    ├── InvalidStartRowError
    ├── InvalidDateError
    ├── InvalidStyleError
    └── WriteFailureError
"""

from __future__ import annotations

from typing import Iterable


class XlsBridgeError(Exception):
    """Base class for every error raised by this package."""


class InvalidPathError(XlsBridgeError):
    """A file path was missing or empty."""

    def __init__(self, message: str = "A valid file path must be provided."):
        super().__init__(message)


class SheetNotFoundError(XlsBridgeError):
    """The requested sheet name or index does not exist in the workbook."""

    def __init__(self, sheet: str | int):
        self.sheet = sheet
        super().__init__(f"Sheet {sheet!r} was not found in the workbook.")


class SheetNameRequiredError(XlsBridgeError):
    """A sheet was about to be created without a name."""

    def __init__(self):
        super().__init__("A sheet name is required to create a worksheet.")


class MissingColumnsError(XlsBridgeError):
    """One or more required header labels are absent.

    Attributes:
        missing: Every absent label, upper-cased, in the order requested.
    """

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        joined = ", ".join(self.missing)
        super().__init__(
            f'Columns "{joined}" are required to process the sheet data.'
        )


class InvalidColumnsError(XlsBridgeError):
    """Column specifications were not a list, or a column lacked a label."""


class InvalidHeaderRowError(XlsBridgeError):
    """The header row index is below 1 or past the last populated row."""

    def __init__(self, header_row: object):
        self.header_row = header_row
        super().__init__(
            f"Invalid header row {header_row!r}: must be a populated row number >= 1."
        )


class InvalidStartRowError(XlsBridgeError):
    """The first data row index is below 1."""

    def __init__(self, start_row: object):
        self.start_row = start_row
        super().__init__(
            f"Invalid start row {start_row!r}: must be a number >= 1."
        )


class InvalidDateError(XlsBridgeError):
    """A value that should be a date could not be interpreted as one."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid date value: {value!r}")


class InvalidStyleError(XlsBridgeError):
    """A style token or preset name is not recognized."""

    def __init__(self, style: object):
        self.style = style
        super().__init__(f"Invalid or unknown style: {style!r}")


class WriteFailureError(XlsBridgeError):
    """Saving a file failed. The message carries the underlying cause."""

    def __init__(self, path: object, cause: BaseException):
        self.path = path
        super().__init__(f"Could not save {path}: {cause}")
