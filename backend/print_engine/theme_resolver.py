"""
Print Theme Resolver

Turns a hydrated flat settings record into an immutable Theme for a single
render pass.

The resolver never substitutes a color or length: every such value passes
through exactly as stored. The only values it computes are the header's
layout primitives (flex direction and alignment), taken from an explicit
lookup table keyed by (direction, header alignment, header layout style).
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple, Optional

from .exceptions import ConfigurationIncomplete
from .print_config import (
    DEFAULT_PRINT_SETTINGS,
    ENUM_FIELDS,
    config_from_settings,
    get_config_value,
    hydrate_settings,
)


class HeaderLayout(NamedTuple):
    flex_direction: str
    align_items: str
    justify_content: str


# =============================================================================
# HEADER LAYOUT TABLE
# (direction, alignment, layout_style) -> HeaderLayout
#
# In rtl, "left" and "right" name visual edges, so their start/end
# mapping is flipped. Split aligns items like "right".
# =============================================================================

_STACKED = HeaderLayout("column", "center", "center")

HEADER_LAYOUT_TABLE = {
    ("ltr", "left", "row"): HeaderLayout("row", "flex-start", "flex-start"),
    ("ltr", "center", "row"): HeaderLayout("row", "center", "center"),
    ("ltr", "right", "row"): HeaderLayout("row", "flex-end", "flex-end"),
    ("ltr", "split", "row"): HeaderLayout("row", "flex-end", "space-between"),
    ("rtl", "left", "row"): HeaderLayout("row-reverse", "flex-end", "flex-end"),
    ("rtl", "center", "row"): HeaderLayout("row-reverse", "center", "center"),
    ("rtl", "right", "row"): HeaderLayout("row-reverse", "flex-start", "flex-start"),
    ("rtl", "split", "row"): HeaderLayout("row-reverse", "flex-start", "space-between"),

    ("ltr", "left", "column"): _STACKED,
    ("ltr", "center", "column"): _STACKED,
    ("ltr", "right", "column"): _STACKED,
    ("ltr", "split", "column"): _STACKED,
    ("rtl", "left", "column"): _STACKED,
    ("rtl", "center", "column"): _STACKED,
    ("rtl", "right", "column"): _STACKED,
    ("rtl", "split", "column"): _STACKED,

    ("ltr", "left", "centered"): _STACKED,
    ("ltr", "center", "centered"): _STACKED,
    ("ltr", "right", "centered"): _STACKED,
    ("ltr", "split", "centered"): _STACKED,
    ("rtl", "left", "centered"): _STACKED,
    ("rtl", "center", "centered"): _STACKED,
    ("rtl", "right", "centered"): _STACKED,
    ("rtl", "split", "centered"): _STACKED,
}

_REVERSED_ROW = {"row": "row-reverse", "row-reverse": "row"}


def resolve_header_layout(
    direction: str,
    alignment: str,
    layout_style: str,
    swap_logo_position: bool = False,
) -> HeaderLayout:
    """
    Look up the header layout primitives.

    The logo swap flag reverses a row layout once more (row <-> row-reverse);
    stacked layouts are unaffected.
    """
    layout = HEADER_LAYOUT_TABLE[(direction, alignment, layout_style)]
    if swap_logo_position and layout.flex_direction in _REVERSED_ROW:
        layout = layout._replace(flex_direction=_REVERSED_ROW[layout.flex_direction])
    return layout


# =============================================================================
# THEME
# =============================================================================

def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    return value


@dataclass(frozen=True)
class Theme:
    """Resolved, read-only snapshot of the print config for one render."""
    config: Mapping[str, Any]
    direction: str
    text_align: str
    flex_direction: str
    align_items: str
    justify_content: str

    def value(self, path) -> Any:
        return get_config_value(self.config, path)

    @property
    def is_rtl(self) -> bool:
        return self.direction == "rtl"

    @property
    def start_edge(self) -> str:
        """Physical edge where lines start ("left" in ltr)."""
        return "right" if self.is_rtl else "left"

    @property
    def end_edge(self) -> str:
        return "left" if self.is_rtl else "right"


def resolve_theme(settings: Optional[Mapping]) -> Theme:
    """
    Resolve a hydrated flat settings record into a Theme.

    Args:
        settings: Output of hydrate_settings() (or an equally complete record)

    Raises:
        ConfigurationIncomplete: settings were not merged over the defaults
            (a field is missing or None, or an enum field is out of range)
    """
    settings = settings or {}

    missing = [key for key in DEFAULT_PRINT_SETTINGS if settings.get(key) is None]
    if missing:
        raise ConfigurationIncomplete(missing)

    invalid = [key for key, allowed in ENUM_FIELDS.items() if settings[key] not in allowed]
    if invalid:
        raise ConfigurationIncomplete(invalid, reason="invalid value")

    direction = settings["page_direction"]
    alignment = settings["header_alignment"]
    layout = resolve_header_layout(
        direction,
        alignment,
        settings["header_layout_style"],
        bool(settings["header_logo_swap_position"]),
    )

    return Theme(
        config=_freeze(config_from_settings(settings)),
        direction=direction,
        text_align="right" if alignment == "split" else alignment,
        flex_direction=layout.flex_direction,
        align_items=layout.align_items,
        justify_content=layout.justify_content,
    )


def theme_from_settings(stored: Optional[Mapping] = None) -> Theme:
    """Hydrate stored settings over the defaults and resolve them."""
    return resolve_theme(hydrate_settings(stored))
