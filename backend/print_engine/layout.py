"""
Document Layout

Turns a DocumentTree into the Element tree both renderers serialize.
Each section kind has one renderer, registered in SECTION_RENDERERS for
dynamic lookup.
"""

from typing import Callable, Dict, List, Optional

from .document_tree import (
    CompanySection,
    DocumentTree,
    FooterSection,
    HeaderSection,
    NotesSection,
    PartySection,
    PaymentDetailsSection,
    StatisticsSection,
    TableSection,
)
from .markup import Element, el

PAGE_NUMBER_PLACEHOLDER = "{page}"


def _align_class(align: Optional[str]) -> Optional[str]:
    return f"align-{align}" if align else None


# =============================================================================
# SECTION RENDERERS
# =============================================================================

def r_header(section: HeaderSection) -> Element:
    children = []

    if section.logo_url:
        children.append(el('div', 'print-logo', Element('img', {'src': section.logo_url, 'alt': 'Logo'})))

    if section.title or section.subtitle:
        children.append(el(
            'div', 'print-header-text',
            el('div', 'print-title', section.title) if section.title else None,
            el('div', 'print-subtitle', section.subtitle) if section.subtitle else None,
        ))

    if section.info:
        children.append(el('div', 'print-doc-info', *[
            el('div', 'print-doc-info-item',
               el('span', 'print-doc-info-label', f"{item.label}:"),
               el('span', 'print-doc-info-value', str(item.value)))
            for item in section.info
        ]))

    return el('header', 'print-header', *children)


def r_company(section: CompanySection) -> Element:
    return el(
        'div', 'print-company',
        el('div', 'print-company-name', section.name) if section.name else None,
        el('div', 'print-company-subtitle', section.subtitle) if section.subtitle else None,
        *[el('div', 'print-company-line', line) for line in section.lines],
    )


def r_party(section: PartySection) -> Element:
    return el(
        'div', 'print-party',
        el('div', 'print-party-title', section.title),
        el('div', 'print-party-content', *[
            el('div', 'print-party-row',
               el('span', 'print-party-label', f"{item.label}:"),
               el('span', 'print-party-value', str(item.value)))
            for item in section.fields
        ]),
    )


def r_statistics(section: StatisticsSection) -> Element:
    return el('div', 'print-statistics', *[
        el('div', 'print-stat-card',
           el('div', 'print-stat-value', card.value),
           el('div', 'print-stat-label', f"{card.label} {card.unit}" if card.unit else card.label))
        for card in section.cards
    ])


def r_payment_details(section: PaymentDetailsSection) -> Element:
    rows = [
        Element('tr', {}, [
            Element('td', {'class': 'payment-label'}, [item.label]),
            Element('td', {'class': 'payment-value'}, [item.value]),
        ])
        for item in section.rows
    ]
    return el(
        'div', 'print-payment-details',
        el('div', 'print-payment-details-title', section.title) if section.title else None,
        el('table', 'print-payment-table', el('tbody', None, *rows)),
    )


def r_table(section: TableSection) -> Element:
    header_cells = [
        Element('th', {
            'class': _align_class(h.align),
            'style': f"width: {h.width}" if h.width else None,
        }, [h.label])
        for h in section.headers
    ]

    body_rows = [
        Element('tr', {}, [
            Element('td', {'class': _align_class(h.align)}, [cell])
            for h, cell in zip(section.headers, row)
        ])
        for row in section.rows
    ]

    parts = [
        el('thead', None, Element('tr', {}, header_cells)),
        el('tbody', None, *body_rows),
    ]

    if section.totals:
        parts.append(el('tfoot', None, *_totals_rows(section)))

    return el('table', 'print-table', *parts)


def _totals_rows(section: TableSection) -> List[Element]:
    """
    Totals band: one row per item inside the table footer.

    The label cell spans every column but the last (at least one) so values
    stay aligned with the last data column. The totals title goes into the
    first label cell rather than its own row.
    """
    rows = []
    for index, item in enumerate(section.totals):
        row_classes = ['totals-row']
        if item.highlight:
            row_classes.append('highlight')
        if item.bold:
            row_classes.append('bold')

        label_children = []
        if index == 0 and section.totals_title:
            label_children.append(el('div', 'totals-title', section.totals_title))
        label_children.append(el('span', 'totals-label-text', item.label))

        rows.append(Element('tr', {'class': ' '.join(row_classes)}, [
            Element('td', {'class': 'totals-label', 'colspan': section.totals_label_colspan}, label_children),
            Element('td', {'class': 'totals-value'}, [item.value]),
        ]))
    return rows


def r_notes(section: NotesSection) -> Element:
    return el(
        'div', 'print-notes',
        el('div', 'print-notes-title', section.title) if section.title else None,
        el('div', 'print-notes-content', section.content),
    )


def r_footer(section: FooterSection) -> Element:
    children = []
    if section.text:
        children.append(el('div', 'print-footer-text', section.text))

    if section.page_number_format:
        before, sep, after = section.page_number_format.partition(PAGE_NUMBER_PLACEHOLDER)
        number = [before, el('span', 'page-number')] if sep else [before]
        children.append(el('div', 'print-page-number', *number, after if sep else None))

    return el('footer', 'print-footer', *children)


SECTION_RENDERERS: Dict[str, Callable] = {
    'header': r_header,
    'company': r_company,
    'party': r_party,
    'statistics': r_statistics,
    'payment_details': r_payment_details,
    'table': r_table,
    'notes': r_notes,
    'footer': r_footer,
}


def render_section(section) -> Optional[Element]:
    renderer = SECTION_RENDERERS.get(section.kind)
    if not renderer:
        return None
    return renderer(section)


def render_document(tree: DocumentTree) -> Element:
    """Render every section of the tree, in order, inside the page container."""
    return Element(
        'div',
        {'class': 'print-page', 'dir': tree.direction},
        [render_section(section) for section in tree.sections],
    )
