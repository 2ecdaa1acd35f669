"""Sheet writers."""

from .sheet import SheetConfigurator
from .validation import (
    DROPDOWN_ERROR_MESSAGE,
    DROPDOWN_ERROR_TITLE,
    HIDDEN_SHEET,
    ValidationListAllocator,
)

__all__ = [
    "DROPDOWN_ERROR_MESSAGE",
    "DROPDOWN_ERROR_TITLE",
    "HIDDEN_SHEET",
    "SheetConfigurator",
    "ValidationListAllocator",
]
