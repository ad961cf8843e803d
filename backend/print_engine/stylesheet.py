"""
Print Stylesheet

CSS generation from a resolved Theme. Every themable value is bound to a
named custom property in :root and the selector rules only reference those
variables, so the output for a given theme is always byte-identical.

Style injection into a preview surface is the one side effect and lives in
StyleHost / StyleHandle below, away from the pure generator.
"""

import re
from typing import Dict, Iterator, Optional

from .theme_resolver import Theme

PREVIEW_STYLE_ID = "print-engine-preview-styles"


# =============================================================================
# VALUE ESCAPING
# Settings are free text; they are made safe here, when written into CSS.
# =============================================================================

# Characters that could end a declaration, a rule or the <style> element
_UNSAFE_VALUE = re.compile(r"[<>{};\\\r\n]|/\*|\*/")


def css_value(value) -> str:
    """Drop anything from a setting that could escape its declaration."""
    return _UNSAFE_VALUE.sub("", str(value))


def css_string(value) -> str:
    """Quote a setting as a single-quoted CSS string."""
    text = str(value)
    for char, escape in (("\\", "\\\\"), ("'", "\\'"), ("<", "\\3c "), (">", "\\3e "), ("\n", "\\a "), ("\r", "")):
        text = text.replace(char, escape)
    return f"'{text}'"


# =============================================================================
# STYLE VARIABLES
# CSS custom property -> config path
# =============================================================================

STYLE_VARIABLES = (
    # Page
    ("--print-page-width", "page.width"),
    ("--print-page-min-height", "page.min_height"),
    ("--print-padding-top", "page.margins.top"),
    ("--print-padding-right", "page.margins.right"),
    ("--print-padding-bottom", "page.margins.bottom"),
    ("--print-padding-left", "page.margins.left"),
    ("--print-page-bg", "page.background_color"),
    ("--print-text-color", "page.text_color"),
    ("--print-font-family", "page.font_family"),
    ("--print-font-size", "page.font_size"),
    ("--print-line-height", "page.line_height"),

    # Header
    ("--header-bg", "header.background_color"),
    ("--header-padding", "header.padding"),
    ("--header-margin-bottom", "header.margin_bottom"),
    ("--header-border-bottom", "header.border_bottom"),
    ("--logo-width", "header.logo.width"),
    ("--logo-height", "header.logo.height"),
    ("--logo-object-fit", "header.logo.object_fit"),
    ("--title-font-size", "header.title.font_size"),
    ("--title-font-weight", "header.title.font_weight"),
    ("--title-color", "header.title.color"),
    ("--subtitle-font-size", "header.subtitle.font_size"),
    ("--subtitle-color", "header.subtitle.color"),
    ("--doc-info-font-size", "header.document_info.font_size"),
    ("--doc-info-color", "header.document_info.color"),
    ("--doc-info-align", "header.document_info.alignment"),

    # Company
    ("--company-font-size", "company_info.font_size"),
    ("--company-color", "company_info.color"),
    ("--company-align", "company_info.alignment"),

    # Party
    ("--party-bg", "party_info.background_color"),
    ("--party-border-color", "party_info.border_color"),
    ("--party-border-radius", "party_info.border_radius"),
    ("--party-padding", "party_info.padding"),
    ("--party-margin-bottom", "party_info.margin_bottom"),
    ("--party-title-font-size", "party_info.title_font_size"),
    ("--party-title-color", "party_info.title_color"),
    ("--party-content-font-size", "party_info.content_font_size"),
    ("--party-content-color", "party_info.content_color"),

    # Table
    ("--table-width", "table.width"),
    ("--table-margin-bottom", "table.margin_bottom"),
    ("--table-header-bg", "table.header.background_color"),
    ("--table-header-text", "table.header.text_color"),
    ("--table-header-font-size", "table.header.font_size"),
    ("--table-header-font-weight", "table.header.font_weight"),
    ("--table-header-padding", "table.header.padding"),
    ("--table-header-align", "table.header.alignment"),
    ("--table-body-font-size", "table.body.font_size"),
    ("--table-body-padding", "table.body.padding"),
    ("--table-text-color", "table.body.text_color"),
    ("--table-odd-row-bg", "table.body.odd_row_background"),
    ("--table-even-row-bg", "table.body.even_row_background"),
    ("--table-border-width", "table.border.width"),
    ("--table-border-style", "table.border.style"),
    ("--table-border-color", "table.border.color"),

    # Totals
    ("--totals-bg", "totals.background_color"),
    ("--totals-text", "totals.text_color"),
    ("--totals-border", "totals.border_color"),
    ("--totals-padding", "totals.padding"),
    ("--totals-label-size", "totals.label_font_size"),
    ("--totals-label-weight", "totals.label_font_weight"),
    ("--totals-value-size", "totals.value_font_size"),
    ("--totals-value-weight", "totals.value_font_weight"),
    ("--totals-highlight-bg", "totals.highlight_background"),
    ("--totals-highlight-text", "totals.highlight_text_color"),
    ("--totals-align", "totals.alignment"),

    # Notes
    ("--notes-font-size", "notes.font_size"),
    ("--notes-color", "notes.color"),
    ("--notes-bg", "notes.background_color"),
    ("--notes-border-color", "notes.border_color"),
    ("--notes-padding", "notes.padding"),
    ("--notes-margin-top", "notes.margin_top"),

    # Footer
    ("--footer-font-size", "footer.font_size"),
    ("--footer-color", "footer.color"),
    ("--footer-align", "footer.alignment"),
    ("--footer-border-top", "footer.border_top"),
    ("--footer-padding", "footer.padding"),
    ("--footer-margin-top", "footer.margin_top"),
)


def generate_root_variables(theme: Theme) -> str:
    """Render the :root block binding every themable value to a variable."""
    lines = [f"            {name}: {css_value(theme.value(path))};" for name, path in STYLE_VARIABLES]
    lines.append(f"            --header-flex-direction: {theme.flex_direction};")
    lines.append(f"            --header-align-items: {theme.align_items};")
    lines.append(f"            --header-justify-content: {theme.justify_content};")
    return "        :root {\n" + "\n".join(lines) + "\n        }\n"


def generate_print_css(theme: Theme) -> str:
    """Generate the complete print stylesheet for a theme."""
    font_url = theme.value("page.font_url")
    font_import = f"        @import url({css_string(font_url)});\n" if font_url else ""

    margins = theme.value("page.margins")
    page_size = css_value(f'{theme.value("page.size")} {theme.value("page.orientation")}')
    page_margin = css_value(f'{margins["top"]} {margins["right"]} {margins["bottom"]} {margins["left"]}')

    start = theme.start_edge
    end = theme.end_edge

    return font_import + generate_root_variables(theme) + f'''
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}

        html, body {{
            direction: {css_value(theme.direction)};
            background: var(--print-page-bg);
        }}

        body {{
            font-family: var(--print-font-family);
            font-size: var(--print-font-size);
            line-height: var(--print-line-height);
            color: var(--print-text-color);
        }}

        .print-page {{
            direction: {css_value(theme.direction)};
            width: var(--print-page-width);
            min-height: var(--print-page-min-height);
            margin: 0 auto;
            padding: var(--print-padding-top) var(--print-padding-right) var(--print-padding-bottom) var(--print-padding-left);
            background-color: var(--print-page-bg);
            display: flex;
            flex-direction: column;
        }}

        /* Header */
        .print-header {{
            display: flex;
            flex-direction: var(--header-flex-direction);
            align-items: var(--header-align-items);
            justify-content: var(--header-justify-content);
            gap: 16px;
            background: var(--header-bg);
            padding: var(--header-padding);
            margin-bottom: var(--header-margin-bottom);
            border-bottom: var(--header-border-bottom);
            text-align: {css_value(theme.text_align)};
        }}

        .print-logo img {{
            width: var(--logo-width);
            height: var(--logo-height);
            object-fit: var(--logo-object-fit);
        }}

        .print-title {{
            font-size: var(--title-font-size);
            font-weight: var(--title-font-weight);
            color: var(--title-color);
        }}

        .print-subtitle {{
            font-size: var(--subtitle-font-size);
            color: var(--subtitle-color);
        }}

        .print-doc-info {{
            text-align: var(--doc-info-align);
            font-size: var(--doc-info-font-size);
            color: var(--doc-info-color);
        }}

        .print-doc-info-item {{
            margin-bottom: 4px;
        }}

        .print-doc-info-label {{
            font-weight: 600;
            margin-{end}: 6px;
        }}

        /* Company */
        .print-company {{
            text-align: var(--company-align);
            font-size: var(--company-font-size);
            color: var(--company-color);
            margin-bottom: 15px;
        }}

        .print-company-name {{
            font-weight: bold;
            font-size: calc(var(--company-font-size) + 2px);
            margin-bottom: 4px;
        }}

        /* Party */
        .print-party {{
            background: var(--party-bg);
            border: 1px solid var(--party-border-color);
            border-{start}: 4px solid var(--party-border-color);
            border-radius: var(--party-border-radius);
            padding: var(--party-padding);
            margin-bottom: var(--party-margin-bottom);
        }}

        .print-party-title {{
            font-size: var(--party-title-font-size);
            font-weight: bold;
            color: var(--party-title-color);
            margin-bottom: 8px;
            padding-bottom: 6px;
            border-bottom: 1px solid var(--party-border-color);
        }}

        .print-party-content {{
            font-size: var(--party-content-font-size);
            color: var(--party-content-color);
        }}

        .print-party-row {{
            display: flex;
            gap: 8px;
            margin-bottom: 4px;
        }}

        .print-party-label {{
            font-weight: 600;
            min-width: 60px;
        }}

        /* Statistics cards */
        .print-statistics {{
            display: flex;
            flex-wrap: wrap;
            gap: 10px;
            margin-bottom: var(--party-margin-bottom);
        }}

        .print-stat-card {{
            flex: 1 1 0;
            min-width: 100px;
            text-align: center;
            background: var(--party-bg);
            border: 1px solid var(--party-border-color);
            border-radius: var(--party-border-radius);
            padding: 8px;
        }}

        .print-stat-value {{
            font-size: calc(var(--party-title-font-size) + 4px);
            font-weight: bold;
            color: var(--party-title-color);
        }}

        .print-stat-label {{
            font-size: var(--party-content-font-size);
            color: var(--party-content-color);
        }}

        /* Payment details */
        .print-payment-details {{
            margin-bottom: 15px;
            page-break-inside: avoid;
        }}

        .print-payment-details-title {{
            font-size: var(--party-title-font-size);
            font-weight: bold;
            color: var(--party-title-color);
            margin-bottom: 8px;
        }}

        .print-payment-table {{
            width: 100%;
            border-collapse: collapse;
        }}

        .print-payment-table td {{
            font-size: var(--table-body-font-size);
            padding: var(--table-body-padding);
            color: var(--table-text-color);
            border: var(--table-border-width) var(--table-border-style) var(--table-border-color);
            text-align: center;
        }}

        .print-payment-table tr:nth-child(odd) {{ background-color: var(--table-odd-row-bg); }}
        .print-payment-table tr:nth-child(even) {{ background-color: var(--table-even-row-bg); }}

        .print-payment-table td.payment-label {{
            width: 35%;
            font-weight: 600;
            text-align: {start};
        }}

        /* Table */
        .print-table {{
            width: var(--table-width);
            margin-bottom: var(--table-margin-bottom);
            border-collapse: collapse;
            table-layout: fixed;
            word-wrap: break-word;
            overflow-wrap: break-word;
            border: var(--table-border-width) var(--table-border-style) var(--table-border-color);
        }}

        .print-table thead {{ display: table-header-group; }}
        .print-table tfoot {{ display: table-footer-group; }}

        .print-table th {{
            background-color: var(--table-header-bg);
            color: var(--table-header-text);
            font-size: var(--table-header-font-size);
            font-weight: var(--table-header-font-weight);
            padding: var(--table-header-padding);
            text-align: var(--table-header-align);
            border: var(--table-border-width) var(--table-border-style) var(--table-border-color);
        }}

        .print-table td {{
            font-size: var(--table-body-font-size);
            padding: var(--table-body-padding);
            color: var(--table-text-color);
            border: var(--table-border-width) var(--table-border-style) var(--table-border-color);
            text-align: center;
            vertical-align: middle;
        }}

        .print-table tbody tr:nth-child(odd) {{ background-color: var(--table-odd-row-bg); }}
        .print-table tbody tr:nth-child(even) {{ background-color: var(--table-even-row-bg); }}

        .print-table .align-left {{ text-align: left; }}
        .print-table .align-center {{ text-align: center; }}
        .print-table .align-right {{ text-align: right; }}

        /* Totals band (inside tfoot) */
        .print-table tfoot tr.totals-row {{
            background-color: var(--totals-bg);
            color: var(--totals-text);
        }}

        .print-table tfoot tr.totals-row td {{
            padding: var(--totals-padding);
            border: var(--table-border-width) var(--table-border-style) var(--totals-border);
            color: inherit;
        }}

        .print-table tfoot td.totals-label {{
            text-align: var(--totals-align);
            font-size: var(--totals-label-size);
            font-weight: var(--totals-label-weight);
        }}

        .print-table tfoot td.totals-value {{
            font-size: var(--totals-value-size);
            font-weight: var(--totals-value-weight);
        }}

        .print-table tfoot .totals-title {{
            margin-bottom: 6px;
            padding-bottom: 4px;
            border-bottom: 1px solid var(--totals-border);
        }}

        .print-table tfoot tr.totals-row.bold td {{ font-weight: bold; }}

        .print-table tfoot tr.totals-row.highlight {{
            background-color: var(--totals-highlight-bg);
            color: var(--totals-highlight-text);
        }}

        /* Notes */
        .print-notes {{
            background: var(--notes-bg);
            border: 1px solid var(--notes-border-color);
            border-radius: 6px;
            padding: var(--notes-padding);
            margin-top: var(--notes-margin-top);
            font-size: var(--notes-font-size);
            color: var(--notes-color);
            white-space: pre-wrap;
        }}

        .print-notes-title {{
            font-weight: bold;
            margin-bottom: 6px;
        }}

        /* Footer */
        .print-footer {{
            margin-top: var(--footer-margin-top);
            padding: var(--footer-padding);
            border-top: var(--footer-border-top);
            font-size: var(--footer-font-size);
            color: var(--footer-color);
            text-align: var(--footer-align);
        }}

        .print-page-number {{ margin-top: 4px; }}
        .page-number::after {{ content: "1"; }}

        @page {{
            size: {page_size};
            margin: {page_margin};
        }}

        @media print {{
            * {{
                -webkit-print-color-adjust: exact !important;
                print-color-adjust: exact !important;
                color-scheme: light !important;
            }}

            html, body {{
                margin: 0 !important;
                padding: 0 !important;
            }}

            .no-print {{ display: none !important; }}

            .print-page {{
                width: 100% !important;
                min-height: auto !important;
                padding: 0 !important;
                box-shadow: none !important;
            }}

            .print-table {{ page-break-inside: auto; }}
            .print-table thead {{ display: table-header-group !important; }}
            .print-table tfoot {{ display: table-footer-group !important; }}
            .print-table tr {{
                page-break-inside: avoid !important;
                page-break-after: auto;
            }}

            .print-notes {{ page-break-inside: avoid; }}

            .page-number::after {{ content: counter(page); }}
        }}
    '''


# =============================================================================
# STYLE INJECTION
# =============================================================================

class StyleHost:
    """
    Head of one preview surface: style elements keyed by element id.

    Each preview surface owns its own host, so two surfaces never share a
    style element even when they use the same id.
    """

    def __init__(self):
        self._elements: Dict[str, str] = {}

    def set(self, element_id: str, css: str) -> None:
        # Replacing moves the element to the end, like remove + append
        self._elements.pop(element_id, None)
        self._elements[element_id] = css

    def get(self, element_id: str) -> Optional[str]:
        return self._elements.get(element_id)

    def remove(self, element_id: str) -> bool:
        return self._elements.pop(element_id, None) is not None

    def __contains__(self, element_id: str) -> bool:
        return element_id in self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[str]:
        return iter(self._elements)

    def render(self) -> str:
        """Render the host's style elements for a document head."""
        return "\n".join(
            f'<style id="{element_id}">{css}</style>'
            for element_id, css in self._elements.items()
        )


class StyleHandle:
    """
    Owned reference to a single style element in a StyleHost.

    inject() replaces the element if it already exists, release() removes
    it. Usable as a context manager so teardown always releases.
    """

    def __init__(self, host: StyleHost, element_id: str = PREVIEW_STYLE_ID):
        self.host = host
        self.element_id = element_id

    @property
    def active(self) -> bool:
        return self.element_id in self.host

    def inject(self, css: str) -> None:
        self.host.set(self.element_id, css)

    def release(self) -> bool:
        return self.host.remove(self.element_id)

    def __enter__(self) -> "StyleHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


def inject_print_styles(host: StyleHost, theme: Theme, element_id: str = PREVIEW_STYLE_ID) -> StyleHandle:
    """Generate the theme's stylesheet and inject it, replacing any previous one."""
    handle = StyleHandle(host, element_id)
    handle.inject(generate_print_css(theme))
    return handle
