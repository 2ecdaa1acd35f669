"""Sheet readers."""

from .base import BaseExtractor, get_header_row, get_worksheet
from .columns import ColumnMap, ColumnMapper, verify_required_columns
from .records import RecordExtractor

__all__ = [
    "BaseExtractor",
    "ColumnMap",
    "ColumnMapper",
    "RecordExtractor",
    "get_header_row",
    "get_worksheet",
    "verify_required_columns",
]
