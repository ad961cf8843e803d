"""
Document Assembler

Serializes a document to one self-contained HTML page: inline stylesheet,
optional web-font import, explicit @page rule. With auto_print the page
opens the print dialog itself once loaded, after the settle delay.
"""

from typing import Mapping, Optional, Sequence

from .document_tree import (
    Column,
    DocumentData,
    DocumentTree,
    LabeledValue,
    PartyData,
    StatisticCard,
    TotalsItem,
    build_document_tree,
)
from .layout import render_document
from .markup import esc
from .stylesheet import generate_print_css
from .theme_resolver import Theme

# Seconds between page load and window.print(); remote fonts and images
# have no reliable ready signal.
DEFAULT_SETTLE_DELAY = 0.5


def print_trigger_script(settle_delay: float = DEFAULT_SETTLE_DELAY) -> str:
    """One-shot script: print once the page (and its assets) have loaded."""
    delay_ms = max(int(round(settle_delay * 1000)), 0)
    return f'''<script>
        window.addEventListener('load', function() {{
            setTimeout(function() {{
                window.focus();
                window.print();
            }}, {delay_ms});
        }});
    </script>'''


def generate_base_html(
    title: str,
    css: str,
    body: str,
    direction: str = "ltr",
    script: str = "",
    styles: Optional[str] = None,
) -> str:
    """
    Generate complete HTML document with CSS and body content.

    styles, when given, is used as-is in place of the single inline
    <style> block (e.g. the rendered elements of a StyleHost).
    """
    if styles is None:
        styles = f'''<style>
{css}
    </style>'''

    return f'''<!DOCTYPE html>
<html dir="{esc(direction)}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{esc(title)}</title>
    {styles}
</head>
<body dir="{esc(direction)}">
    {body}
    {script}
</body>
</html>'''


def render_body(tree: DocumentTree) -> str:
    return render_document(tree).to_html()


def assemble_tree(
    theme: Theme,
    tree: DocumentTree,
    auto_print: bool = False,
    settle_delay: float = DEFAULT_SETTLE_DELAY,
) -> str:
    """Assemble the HTML page for an already-built document tree."""
    script = print_trigger_script(settle_delay) if auto_print else ""
    return generate_base_html(
        title=tree.title,
        css=generate_print_css(theme),
        body=render_body(tree),
        direction=tree.direction,
        script=script,
    )


def assemble_document(
    theme: Theme,
    document: DocumentData,
    columns: Sequence[Column],
    rows: Sequence[Mapping],
    party: Optional[PartyData] = None,
    totals: Optional[Sequence[TotalsItem]] = None,
    totals_title: Optional[str] = None,
    notes: Optional[str] = None,
    statistics: Optional[Sequence[StatisticCard]] = None,
    payment_details: Optional[Sequence[LabeledValue]] = None,
    payment_details_title: Optional[str] = None,
    auto_print: bool = False,
    settle_delay: float = DEFAULT_SETTLE_DELAY,
) -> str:
    """
    Assemble a complete print-ready HTML document.

    Sections, in order: header, company, party, statistics, payment details,
    table (with totals in its footer), notes, footer. Disabled or empty
    sections are left out.

    Args:
        theme: Resolved theme for this render
        document: Title, number, date and extra fields
        columns: Table columns in display order
        rows: Table rows
        party: Optional counterpart block
        totals: Optional totals items, caller order preserved
        totals_title: Optional heading for the totals band
        notes: Optional free-text notes
        statistics: Optional summary cards (statements)
        payment_details: Optional labeled payment rows
        payment_details_title: Optional heading for the payment rows
        auto_print: Embed the load -> print trigger
        settle_delay: Seconds to wait after load before printing

    Returns:
        Complete HTML document string
    """
    tree = build_document_tree(
        theme, document, columns, rows,
        party=party, totals=totals, totals_title=totals_title, notes=notes,
        statistics=statistics, payment_details=payment_details,
        payment_details_title=payment_details_title,
    )
    return assemble_tree(theme, tree, auto_print=auto_print, settle_delay=settle_delay)
