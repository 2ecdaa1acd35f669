"""
Cell value formatting for extracted records.

Every extracted value leaves the pipeline as a string. Dates are rendered
according to the record key they sit under: keys containing ``horario``
become ``HH:MM``, keys containing ``extenso`` become a long Portuguese date
("15 de janeiro de 2024") and every other date becomes ``DD/MM/YYYY``.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Mapping

from .exceptions import InvalidDateError

MONTHS = (
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)

# Excel stores time-only cells as a fraction of a day after this date
SPREADSHEET_EPOCH = date(1899, 12, 30)


def format_full_date(value: date) -> str:
    """Format as ``DD/MM/YYYY``."""
    if not isinstance(value, date):
        raise InvalidDateError(value)
    return value.strftime("%d/%m/%Y")


def format_schedule(value: datetime | time) -> str:
    """Format as ``HH:MM``."""
    if not isinstance(value, (datetime, time)):
        raise InvalidDateError(value)
    return f"{value.hour:02d}:{value.minute:02d}"


def format_extended_date(value: date | str) -> str:
    """Format as a long date, e.g. ``05 de março de 2024``.

    Args:
        value: A date/datetime, or a ``DD/MM/YYYY`` string.

    Raises:
        InvalidDateError: If the string is not a valid ``DD/MM/YYYY`` date.
    """
    if isinstance(value, str):
        value = _parse_brazilian_date(value)
    if not isinstance(value, date):
        raise InvalidDateError(value)
    return f"{value.day:02d} de {MONTHS[value.month - 1]} de {value.year}"


def _parse_brazilian_date(text: str) -> date:
    parts = text.strip().split("/")
    if len(parts) != 3:
        raise InvalidDateError(text)
    try:
        day, month, year = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateError(text) from e


def to_wall_clock(value: Any) -> datetime:
    """Normalize a date-like value to a naive datetime.

    Timezone-aware datetimes keep their UTC wall-clock fields, which is how
    spreadsheet codecs hand over cell dates. Time-only values are anchored on
    the spreadsheet epoch. Strings must be ISO 8601.

    Raises:
        InvalidDateError: If the value cannot be read as a date.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise InvalidDateError(value) from e

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, time):
        return datetime.combine(SPREADSHEET_EPOCH, value.replace(tzinfo=None))

    raise InvalidDateError(value)


def format_date(key: str, value: Any) -> str:
    """Render a date according to the record key it belongs to."""
    moment = to_wall_clock(value)

    if "horario" in key:
        return format_schedule(moment)
    if "extenso" in key:
        return format_extended_date(moment)
    return format_full_date(moment)


def format_value(key: str, value: Any) -> str:
    """Format one extracted value.

    Rules, first match wins:
        1. date/datetime/time -> ``format_date``
        2. str -> stripped
        3. booleans -> "true" or "false"
        4. objects carrying a ``result`` attribute (formula carriers) -> that
           result, or "" when it is empty
        5. anything else (numbers, durations...) -> ``str(value)``, integral
           floats without the trailing ``.0``
    """
    if not isinstance(key, str):
        raise TypeError(f"Record keys must be strings, got {key!r}")

    if isinstance(value, (datetime, date, time)):
        return format_date(key, value)

    if isinstance(value, str):
        return value.strip()

    if value is None:
        return ""

    if isinstance(value, bool):
        return "true" if value else "false"

    if hasattr(value, "result"):
        result = value.result
        return "" if result is None or result == "" else _number_text(result)

    return _number_text(value)


def _number_text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_record(record: Mapping[str, Any]) -> dict[str, str]:
    """Apply ``format_value`` to every field of a record."""
    return {key: format_value(key, value) for key, value in record.items()}
