"""
Data models for sheet construction specs and extraction results.

This module contains the dataclasses used on both sides of the bridge:
column/cell/validation specs consumed when building a sheet, the option
objects that configure a call, and the result objects returned when reading
a sheet back.

Loose inputs (a bare label, a ``{"value": ...}`` mapping, a ``{"select":
True, "values": [...]}`` mapping) are resolved into these types once, at
ingestion, by the ``coerce`` helpers.

Example:
    >>> from xls_bridge.models import ColumnSpec
    >>> ColumnSpec.coerce("Data de Emissão").key
    'data_de_emissao'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from .exceptions import InvalidColumnsError
from .identifiers import to_identifier


# =============================================================================
# Enums
# =============================================================================


class SheetVisibility(Enum):
    """Visibility state of a worksheet.

    Attributes:
        VISIBLE: Sheet is visible in the workbook.
        HIDDEN: Sheet is hidden but can be unhidden via Excel UI.
        VERY_HIDDEN: Sheet is hidden and can only be unhidden via VBA.
    """

    VISIBLE = "visible"
    HIDDEN = "hidden"
    VERY_HIDDEN = "very_hidden"

    @property
    def sheet_state(self) -> str:
        """The matching openpyxl ``Worksheet.sheet_state`` value."""
        return {
            SheetVisibility.VISIBLE: "visible",
            SheetVisibility.HIDDEN: "hidden",
            SheetVisibility.VERY_HIDDEN: "veryHidden",
        }[self]

    @classmethod
    def from_sheet_state(cls, state: str | None) -> "SheetVisibility":
        if state == "hidden":
            return cls.HIDDEN
        if state == "veryHidden":
            return cls.VERY_HIDDEN
        return cls.VISIBLE


class ErrorPolicy(Enum):
    """What to do when a single data row fails to format.

    Attributes:
        RAISE: Abort the whole call on the first failing row.
        COLLECT: Skip the failing row, record a RowError and keep going.
    """

    RAISE = "raise"
    COLLECT = "collect"


# =============================================================================
# Validation
# =============================================================================


@dataclass(frozen=True)
class ValidationRule:
    """A literal data validation rule, written as-is to the cells it covers.

    Field names follow openpyxl's ``DataValidation``. Instances are hashable
    so every cell carrying an identical rule shares one validation object.

    Attributes:
        type: Validation type (list, whole, decimal, date, textLength, custom).
        formula1: First formula or value.
        formula2: Second formula (for between/notBetween).
        operator: Comparison operator (between, equal, greaterThan...).
        allow_blank: Whether empty cells pass validation.
        show_error_message: Whether Excel shows the error box on bad input.
        error_title: Title of the error box.
        error: Body of the error box.
        prompt_title: Title of the input message.
        prompt: Body of the input message.
    """

    type: str
    formula1: str | None = None
    formula2: str | None = None
    operator: str | None = None
    allow_blank: bool = True
    show_error_message: bool = False
    error_title: str | None = None
    error: str | None = None
    prompt_title: str | None = None
    prompt: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ValidationRule":
        formulae = list(data.get("formulae") or [])
        formula1 = data.get("formula1", formulae[0] if formulae else None)
        formula2 = data.get("formula2", formulae[1] if len(formulae) > 1 else None)
        return cls(
            type=data.get("type", "list"),
            formula1=_formula_text(formula1),
            formula2=_formula_text(formula2),
            operator=data.get("operator"),
            allow_blank=bool(data.get("allow_blank", data.get("allowBlank", True))),
            show_error_message=bool(
                data.get("show_error_message", data.get("showErrorMessage", False))
            ),
            error_title=data.get("error_title", data.get("errorTitle")),
            error=data.get("error"),
            prompt_title=data.get("prompt_title", data.get("promptTitle")),
            prompt=data.get("prompt"),
        )


@dataclass(frozen=True)
class ListSelect:
    """A dropdown whose options are materialized in the hidden lookup sheet.

    Attributes:
        values: Dropdown options, in display order.
    """

    values: tuple[Any, ...]

    @property
    def dedup_key(self) -> str:
        """Pipe-joined values; order matters."""
        return "|".join(str(v) for v in self.values)


def _formula_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def coerce_validation(value: Any) -> ValidationRule | ListSelect | None:
    """Resolve a validation spec into a ValidationRule or ListSelect."""
    if value is None or isinstance(value, (ValidationRule, ListSelect)):
        return value
    if isinstance(value, Mapping):
        if value.get("select") and isinstance(value.get("values"), (list, tuple)):
            return ListSelect(tuple(value["values"]))
        return ValidationRule.from_mapping(value)
    raise TypeError(f"Unsupported validation spec: {value!r}")


# =============================================================================
# Columns and cells
# =============================================================================


@dataclass
class ColumnSpec:
    """A column of a sheet under construction.

    Attributes:
        label: Header text written in the header row.
        key: Record key used to look values up in each row mapping.
        width: Manual width; None lets auto-width size the column.
        style: Preset style names and/or style dicts for data cells.
        header_style: Style dict applied to this column's header cell only.
        rotation: Header text rotation in degrees.
        validation: Literal rule or dropdown list for every data cell.
        editable: Unlock the column's data cells on protected sheets.
    """

    label: str
    key: str | None = None
    width: float | None = None
    style: list[Any] = field(default_factory=list)
    header_style: dict[str, Any] | None = None
    rotation: int | None = None
    validation: ValidationRule | ListSelect | None = None
    editable: bool = False

    def __post_init__(self):
        if self.key is None:
            self.key = to_identifier(self.label)

    @classmethod
    def coerce(cls, value: Any) -> "ColumnSpec":
        """Build a ColumnSpec from a label, a mapping or a ColumnSpec."""
        if isinstance(value, ColumnSpec):
            return value
        if isinstance(value, str):
            return cls(label=value)
        if isinstance(value, Mapping) and value.get("value"):
            style = value.get("style") or []
            if not isinstance(style, (list, tuple)):
                style = [style]
            return cls(
                label=value["value"],
                key=value.get("key") or None,
                width=value.get("width") or None,
                style=list(style),
                header_style=value.get("header_style"),
                rotation=value.get("rotation"),
                validation=coerce_validation(value.get("validation")),
                editable=bool(value.get("editable", False)),
            )
        raise InvalidColumnsError(
            'Each column must be a string or a mapping with a "value" field.'
        )


@dataclass
class RichCell:
    """A cell value carrying its own overrides.

    Attributes:
        value: The scalar written to the cell.
        style: Style names/dicts merged over the column style.
        note: Comment text attached to the cell.
        validation: Rule that replaces the column's validation for this cell.
        protection: ``{"locked": ..., "hidden": ...}``; wins over ``editable``.
    """

    value: Any = None
    style: list[Any] = field(default_factory=list)
    note: str | None = None
    validation: ValidationRule | ListSelect | None = None
    protection: dict[str, bool] | None = None


def coerce_cell(value: Any) -> RichCell | Any:
    """Return a RichCell for rich inputs, the scalar itself otherwise.

    A mapping is rich when it has a ``"value"`` key.
    """
    if isinstance(value, RichCell):
        return value
    if isinstance(value, Mapping) and "value" in value:
        style = value.get("style") or []
        if not isinstance(style, (list, tuple)):
            style = [style]
        return RichCell(
            value=value["value"],
            style=list(style),
            note=value.get("note"),
            validation=coerce_validation(value.get("validation")),
            protection=value.get("protection"),
        )
    return value


# =============================================================================
# Configuration
# =============================================================================


@dataclass
class HeaderConfig:
    """Header row options.

    Attributes:
        fixed: Freeze the rows down to ``row``.
        row: Freeze boundary and autofilter row (default: 1).
        style: Style dict for every header cell. ``font`` may be the string
            ``"bold"``; ``alignment`` may be a horizontal alignment string.
        filter: Enable an autofilter over the header (default: True).
    """

    fixed: bool = False
    row: int = 1
    style: dict[str, Any] = field(default_factory=dict)
    filter: bool = True


@dataclass
class SheetConfig:
    """Options for building a sheet.

    Attributes:
        header: Header row options.
        global_style: Style dict applied to every data cell before the
            column and cell layers.
        auto_width: Size columns without a manual width (default: True).

    Example:
        >>> config = SheetConfig(header=HeaderConfig(fixed=True), auto_width=False)
    """

    header: HeaderConfig = field(default_factory=HeaderConfig)
    global_style: dict[str, Any] | None = None
    auto_width: bool = True


@dataclass
class ProtectionConfig:
    """Sheet protection.

    Attributes:
        enabled: Lock the sheet.
        password: Password required to unprotect it.
    """

    enabled: bool = False
    password: str | None = None


@dataclass
class SheetSpec:
    """One sheet of a multi-sheet workbook.

    Attributes:
        name: Worksheet title.
        columns: Column specs (labels, mappings or ColumnSpec).
        rows: Row mappings keyed by column key.
    """

    name: str
    columns: list[Any]
    rows: list[Mapping[str, Any]] = field(default_factory=list)


@dataclass
class ExtractionOptions:
    """Options for reading a sheet into records.

    Attributes:
        sheet: Sheet name or 1-based index (default: 1).
        header_row: Row holding the header labels (default: 1).
        start_row: First data row (default: 2).
        required_columns: Header labels that must exist (case-insensitive).
        on_error: Row failure policy (default: COLLECT).
    """

    sheet: str | int = 1
    header_row: int = 1
    start_row: int = 2
    required_columns: list[str] = field(default_factory=list)
    on_error: ErrorPolicy = ErrorPolicy.COLLECT


# =============================================================================
# Results
# =============================================================================


@dataclass
class RowError:
    """A data row that could not be formatted.

    Attributes:
        row: 1-based sheet row number.
        message: Human-readable error message.
    """

    row: int
    message: str


@dataclass
class ExtractionResult:
    """Records read from a sheet.

    Attributes:
        header: Upper-cased header labels in column order.
        records: One dict per non-empty data row.
        errors: Rows skipped under ``ErrorPolicy.COLLECT``.
    """

    header: list[str] = field(default_factory=list)
    records: list[dict[str, Any]] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Whether every row was extracted."""
        return not self.errors
