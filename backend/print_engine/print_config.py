"""
Print Configuration

Declarative schema of every stylable property of a printed document and the
defaults factory that keeps it total.

The hierarchical tree (DEFAULT_PRINT_CONFIG) is the single source of truth.
Persisted settings are a flat record with one key per tree leaf, e.g.
table.header.background_color <-> table_header_background_color.
Callers always merge stored values over the defaults, so a key that was
never saved keeps its default instead of going missing.

Every leaf is a color string, a length-with-unit string, plain text,
a boolean toggle or an enum value.
"""

import copy
import logging
from typing import Any, Dict, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# =============================================================================
# DEFAULT PRINT CONFIG
# =============================================================================

DEFAULT_PRINT_CONFIG = {
    "page": {
        "direction": "ltr",             # ltr, rtl
        "size": "A4",                   # A3, A4, A5, letter, legal
        "orientation": "portrait",      # portrait, landscape
        "width": "210mm",
        "min_height": "297mm",
        "margins": {
            "top": "15mm",
            "right": "15mm",
            "bottom": "15mm",
            "left": "15mm",
        },
        "background_color": "#ffffff",
        "text_color": "#1f2937",
        "font_family": "Cairo, Tajawal, Arial, sans-serif",
        "font_url": "",                 # Optional web-font stylesheet
        "font_size": "12px",
        "line_height": "1.6",
    },

    "header": {
        "enabled": True,
        "alignment": "split",           # left, center, right, split
        "layout_style": "row",          # row, column, centered
        "background_color": "transparent",
        "padding": "10px 0",
        "margin_bottom": "20px",
        "border_bottom": "2px solid #e5e7eb",
        "logo": {
            "enabled": True,
            "url": "",                  # URL or data: URL
            "width": "80px",
            "height": "auto",
            "object_fit": "contain",    # contain, cover, fill
            "swap_position": False,     # Put the logo on the other side
        },
        "title": {
            "enabled": True,
            "text": "Document",         # Used when the document has no title
            "font_size": "24px",
            "font_weight": "bold",
            "color": "#1f2937",
        },
        "subtitle": {
            "enabled": False,
            "text": "",
            "font_size": "14px",
            "color": "#6b7280",
        },
        "document_info": {
            "enabled": True,
            "alignment": "left",        # left, center, right
            "font_size": "12px",
            "color": "#374151",
            "number_label": "Document No.",
            "date_label": "Date",
        },
    },

    "company_info": {
        "enabled": True,
        "name": "",
        "subtitle": "",
        "address": "",
        "phone": "",
        "email": "",
        "tax_id": "",
        "show_name": True,
        "show_subtitle": False,
        "show_address": True,
        "show_contact": True,
        "show_tax_id": False,
        "tax_id_label": "Tax ID",
        "font_size": "11px",
        "color": "#6b7280",
        "alignment": "right",
    },

    "party_info": {
        "enabled": True,
        "title": "Customer",
        "name_label": "Name",
        "company_label": "Company",
        "phone_label": "Phone",
        "email_label": "Email",
        "background_color": "#f9fafb",
        "border_color": "#e5e7eb",
        "border_radius": "8px",
        "padding": "12px",
        "margin_bottom": "20px",
        "title_font_size": "14px",
        "title_color": "#1f2937",
        "content_font_size": "12px",
        "content_color": "#374151",
    },

    "table": {
        "width": "100%",
        "margin_bottom": "0",
        "thousands_separator": ",",
        "header": {
            "background_color": "#1f2937",
            "text_color": "#ffffff",
            "font_size": "12px",
            "font_weight": "bold",
            "padding": "10px 8px",
            "alignment": "center",
        },
        "body": {
            "font_size": "11px",
            "padding": "8px",
            "text_color": "#374151",
            "odd_row_background": "#ffffff",
            "even_row_background": "#f9fafb",
        },
        "border": {
            "width": "1px",
            "style": "solid",           # solid, dashed, dotted, none
            "color": "#e5e7eb",
        },
    },

    "totals": {
        "enabled": True,
        "background_color": "#f3f4f6",
        "text_color": "#1f2937",
        "border_color": "#e5e7eb",
        "padding": "10px 8px",
        "label_font_size": "12px",
        "label_font_weight": "bold",
        "value_font_size": "14px",
        "value_font_weight": "bold",
        "highlight_background": "#1f2937",
        "highlight_text_color": "#ffffff",
        "alignment": "right",
    },

    "footer": {
        "enabled": True,
        "text": "",
        "font_size": "10px",
        "color": "#9ca3af",
        "alignment": "center",
        "border_top": "1px solid #e5e7eb",
        "padding": "10px 0",
        "margin_top": "20px",
        "show_page_number": True,
        "page_number_format": "Page {page}",
    },

    "notes": {
        "enabled": True,
        "title": "Notes",
        "content": "",                  # Used when the caller passes no notes
        "font_size": "11px",
        "color": "#6b7280",
        "background_color": "#fffbeb",
        "border_color": "#fcd34d",
        "padding": "10px",
        "margin_top": "15px",
    },
}

# Allowed values for enum leaves (flat keys)
ALIGNMENTS = ("left", "center", "right")

ENUM_FIELDS = {
    "page_direction": ("ltr", "rtl"),
    "page_size": ("A3", "A4", "A5", "letter", "legal"),
    "page_orientation": ("portrait", "landscape"),
    "header_alignment": ("left", "center", "right", "split"),
    "header_layout_style": ("row", "column", "centered"),
    "header_logo_object_fit": ("contain", "cover", "fill"),
    "header_document_info_alignment": ALIGNMENTS,
    "company_info_alignment": ALIGNMENTS,
    "table_header_alignment": ALIGNMENTS,
    "table_border_style": ("solid", "dashed", "dotted", "none"),
    "totals_alignment": ALIGNMENTS,
    "footer_alignment": ALIGNMENTS,
}


# =============================================================================
# FLAT <-> TREE MAPPING
# =============================================================================

def _collect_fields(tree: Mapping, prefix: Tuple[str, ...] = ()) -> Dict[str, Tuple[str, ...]]:
    fields = {}
    for key, value in tree.items():
        path = prefix + (key,)
        if isinstance(value, Mapping):
            fields.update(_collect_fields(value, path))
        else:
            fields["_".join(path)] = path
    return fields


# Flat settings key -> path in the config tree
SETTINGS_FIELDS: Dict[str, Tuple[str, ...]] = _collect_fields(DEFAULT_PRINT_CONFIG)


def create_default_config() -> dict:
    """
    Return a new, fully populated print config tree.

    Each call returns an independent deep copy, so callers can overlay
    persisted values without touching the module defaults.
    """
    return copy.deepcopy(DEFAULT_PRINT_CONFIG)


def get_config_value(config: Mapping, path) -> Any:
    """
    Look up a leaf by dotted path ("table.header.background_color")
    or by a tuple of keys.
    """
    keys = path.split(".") if isinstance(path, str) else path
    node = config
    for key in keys:
        node = node[key]
    return node


def flatten_config(config: Mapping) -> dict:
    """Convert a config tree into the flat settings record."""
    return {key: get_config_value(config, path) for key, path in SETTINGS_FIELDS.items()}


# Flat defaults, derived from the tree
DEFAULT_PRINT_SETTINGS = flatten_config(DEFAULT_PRINT_CONFIG)


def config_from_settings(settings: Mapping) -> dict:
    """
    Build a config tree from a flat settings record.

    Starts from the defaults factory and overlays each flat field at its
    tree path; fields absent from settings keep their default.
    """
    config = create_default_config()
    for key, path in SETTINGS_FIELDS.items():
        if key not in settings or settings[key] is None:
            continue
        node = config
        for part in path[:-1]:
            node = node[part]
        node[path[-1]] = settings[key]
    return config


# =============================================================================
# HYDRATION
# =============================================================================

def hydrate_settings(stored: Optional[Mapping] = None) -> dict:
    """
    Merge persisted settings over the defaults, field by field.

    Args:
        stored: Flat settings as loaded from storage. May be partial and
            loosely typed (booleans stored as "true"/"false", numbers, etc).

    Returns:
        Complete flat settings record. Missing or None values keep their
        default, unknown keys are dropped, enum values outside the allowed
        set are logged and replaced by the default.
    """
    settings = dict(DEFAULT_PRINT_SETTINGS)

    for key, value in (stored or {}).items():
        if key not in settings or value is None:
            continue

        if isinstance(settings[key], bool):
            value = _to_bool(value)
        else:
            value = str(value)

        allowed = ENUM_FIELDS.get(key)
        if allowed and value not in allowed:
            logger.warning(f"Ignoring invalid print setting {key}={value!r}; expected one of {allowed}")
            continue

        settings[key] = value

    return settings


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('true', '1', 'yes', 'on')
