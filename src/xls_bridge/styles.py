"""
Style presets and the layered style merge.

Styles are plain dicts with up to four property groups, mirroring the
openpyxl style objects they become::

    {
        "font": {"name": "Aptos Narrow", "size": 9, "bold": True, "color": "9C0006"},
        "fill": {"pattern": "solid", "color": "FFC7CE"},
        "alignment": {"horizontal": "center", "text_rotation": 90},
        "border": {"bottom": {"style": "thin", "color": "000000"}},
    }

A style layer may also be the name of a preset in ``CELL_STYLES``. Layers are
merged left to right: later layers override individual properties while
properties they do not mention accumulate.
"""

from __future__ import annotations

from copy import deepcopy
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from openpyxl.cell.cell import Cell
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from .exceptions import InvalidStyleError
from .models import HeaderConfig, SheetConfig

STYLE_GROUPS = ("font", "fill", "alignment", "border")

CELL_STYLES: Mapping[str, Mapping[str, Any]] = MappingProxyType({
    "Bom": MappingProxyType({
        "fill": {"pattern": "solid", "color": "C6EFCE"},
        "font": {"color": "006100"},
    }),
    "Ruim": MappingProxyType({
        "fill": {"pattern": "solid", "color": "FFC7CE"},
        "font": {"color": "9C0006"},
    }),
    "Neutro": MappingProxyType({
        "fill": {"pattern": "solid", "color": "FFEB9C"},
        "font": {"color": "9C6500"},
    }),
    "Centralizado": MappingProxyType({
        "alignment": {"horizontal": "center"},
    }),
})

DEFAULT_FONT = "Aptos Narrow"
DEFAULT_FONT_SIZE = 9

# camelCase spellings accepted for alignment keys
_ALIGNMENT_ALIASES = {
    "textRotation": "text_rotation",
    "wrapText": "wrap_text",
    "shrinkToFit": "shrink_to_fit",
}


def document_preset(
    name: str = "default",
    font: str = DEFAULT_FONT,
    size: int = DEFAULT_FONT_SIZE,
) -> SheetConfig:
    """Build a fresh SheetConfig for a named document preset.

    Args:
        name: Preset name. Only ``"default"`` exists: a frozen, bold,
            centered header and the document font on every data cell.
        font: Font family used by the preset.
        size: Font size used by the preset.

    Raises:
        InvalidStyleError: If the preset name is unknown.
    """
    if name != "default":
        raise InvalidStyleError(name)

    return SheetConfig(
        header=HeaderConfig(
            fixed=True,
            style={
                "font": {"name": font, "size": size, "bold": True},
                "alignment": "center",
            },
        ),
        global_style={"font": {"name": font, "size": size}},
    )


def resolve_layer(layer: Any) -> dict[str, Any]:
    """Expand one style layer (preset name or dict) into a style dict."""
    if isinstance(layer, str):
        preset = CELL_STYLES.get(layer)
        if preset is None:
            raise InvalidStyleError(layer)
        return {group: dict(props) for group, props in preset.items()}

    if isinstance(layer, Mapping):
        style: dict[str, Any] = {}
        for group, props in layer.items():
            if group not in STYLE_GROUPS:
                raise InvalidStyleError(group)
            style[group] = _normalize_group(group, props)
        return style

    raise InvalidStyleError(layer)


def _normalize_group(group: str, props: Any) -> dict[str, Any]:
    # shorthands kept from header configs: font="bold", alignment="center"
    if group == "font" and props == "bold":
        return {"bold": True}
    if group == "alignment" and isinstance(props, str):
        return {"horizontal": props}
    if not isinstance(props, Mapping):
        raise InvalidStyleError({group: props})
    if group == "alignment":
        return {_ALIGNMENT_ALIASES.get(k, k): v for k, v in props.items()}
    if group == "border":
        sides = {}
        for side, spec in props.items():
            if not isinstance(spec, Mapping):
                raise InvalidStyleError({group: props})
            sides[side] = {k: _color(v) for k, v in spec.items()}
        return sides
    return {k: _color(v) for k, v in deepcopy(dict(props)).items()}


def _color(value: Any) -> Any:
    # {"argb": "FF0000"} -> "FF0000"
    if isinstance(value, Mapping) and "argb" in value:
        return value["argb"]
    return value


def merge_styles(*layers: Any) -> dict[str, Any]:
    """Merge style layers; later layers override, other properties accumulate.

    Each argument may be None, a preset name, a style dict, or a list of
    those.

    Example:
        >>> merge_styles({"font": {"bold": True}}, ["Ruim"])["font"]
        {'bold': True, 'color': '9C0006'}
    """
    merged: dict[str, Any] = {}
    for layer in _flatten(layers):
        for group, props in resolve_layer(layer).items():
            if group == "border":
                target = merged.setdefault(group, {})
                for side, spec in props.items():
                    target[side] = {**target.get(side, {}), **spec}
            else:
                merged[group] = {**merged.get(group, {}), **props}
    return merged


def _flatten(layers: Iterable[Any]) -> Iterable[Any]:
    for layer in layers:
        if layer is None:
            continue
        if isinstance(layer, (list, tuple)):
            yield from _flatten(layer)
        else:
            yield layer


def apply_style(cell: Cell, style: Mapping[str, Any]) -> None:
    """Write a merged style dict onto an openpyxl cell."""
    if not style:
        return
    try:
        if "font" in style:
            cell.font = Font(**style["font"])
        if "fill" in style:
            fill = dict(style["fill"])
            color = fill.get("color")
            kwargs: dict[str, Any] = {"fill_type": fill.get("pattern", "solid")}
            for attr in ("fgColor", "bgColor"):
                value = fill.get(attr, color)
                if value is not None:
                    kwargs[attr] = value
            cell.fill = PatternFill(**kwargs)
        if "alignment" in style:
            cell.alignment = Alignment(**style["alignment"])
        if "border" in style:
            cell.border = Border(**{
                side: Side(**spec) for side, spec in style["border"].items()
            })
    except (TypeError, ValueError) as e:
        raise InvalidStyleError(dict(style)) from e
