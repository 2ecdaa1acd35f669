"""Header label to record key normalization."""

from __future__ import annotations

import re
import unicodedata
from typing import Any, Container

_SPACES = re.compile(r" +")


def strip_diacritics(text: str) -> str:
    """Remove combining accent marks ("ação" -> "acao")."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def to_identifier(value: Any) -> str | None:
    """Turn a header label into a record key.

    The label is trimmed, lower-cased, stripped of diacritics, trimmed again
    and every run of spaces becomes a single underscore. Nothing else is
    filtered, so symbols such as ``%`` or ``/`` are kept.

    Args:
        value: Header cell value.

    Returns:
        The identifier, or None when ``value`` is not a string.

    Example:
        >>> to_identifier("  Data de Emissão ")
        'data_de_emissao'
    """
    if not isinstance(value, str):
        return None

    text = value.strip().lower()
    # compatibility decomposition can surface upper-case letters ("ℌ" -> "H")
    text = strip_diacritics(text).lower().strip()
    return _SPACES.sub("_", text)


def unique_key(base: str, taken: Container[str]) -> str:
    """Return ``base`` or the first of ``base_2``, ``base_3``... not in ``taken``."""
    key = base
    counter = 1
    while key in taken:
        counter += 1
        key = f"{base}_{counter}"
    return key
