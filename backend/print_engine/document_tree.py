"""
Document Tree

The single intermediate representation of a printable document. Built once
from a Theme plus business data, then handed to exactly two serializers
(the print assembler and the preview layout).

All omission rules live here: a section that is disabled or has nothing to
show is simply not in the tree, so neither serializer can render an empty
container for it.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from .formatting import format_number
from .theme_resolver import Theme

# =============================================================================
# INPUT DATA
# =============================================================================


@dataclass(frozen=True)
class LabeledValue:
    label: str
    value: Any


@dataclass
class DocumentData:
    """Per-request document identity: title, number, issue date, extra fields."""
    title: Optional[str] = None
    number: Optional[str] = None
    date: Optional[str] = None
    extra_fields: Sequence[LabeledValue] = field(default_factory=list)


@dataclass
class PartyData:
    """The document's counterpart (customer, supplier)."""
    name: str
    title: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    extra_fields: Sequence[LabeledValue] = field(default_factory=list)


@dataclass
class Column:
    key: str
    header: str
    width: Optional[str] = None
    align: Optional[str] = None         # left, center, right
    format: Optional[Callable[[Any], Any]] = None


@dataclass
class TotalsItem:
    label: str
    value: Any
    highlight: bool = False
    bold: bool = False


@dataclass
class StatisticCard:
    """Summary figure shown as a card next to the party block (statements)."""
    label: str
    value: Any
    unit: Optional[str] = None


# =============================================================================
# SECTION NODES
# =============================================================================


@dataclass(frozen=True)
class HeaderSection:
    logo_url: Optional[str]
    title: Optional[str]
    subtitle: Optional[str]
    info: Tuple[LabeledValue, ...]
    kind: str = "header"


@dataclass(frozen=True)
class CompanySection:
    name: Optional[str]
    subtitle: Optional[str]
    lines: Tuple[str, ...]
    kind: str = "company"


@dataclass(frozen=True)
class PartySection:
    title: str
    fields: Tuple[LabeledValue, ...]
    kind: str = "party"


@dataclass(frozen=True)
class StatisticsSection:
    cards: Tuple[StatisticCard, ...]
    kind: str = "statistics"


@dataclass(frozen=True)
class PaymentDetailsSection:
    title: Optional[str]
    rows: Tuple[LabeledValue, ...]
    kind: str = "payment_details"


@dataclass(frozen=True)
class TableHeader:
    label: str
    width: Optional[str] = None
    align: Optional[str] = None


@dataclass(frozen=True)
class TotalsRow:
    label: str
    value: str
    highlight: bool = False
    bold: bool = False


@dataclass(frozen=True)
class TableSection:
    headers: Tuple[TableHeader, ...]
    rows: Tuple[Tuple[str, ...], ...]
    totals: Tuple[TotalsRow, ...] = ()
    totals_title: Optional[str] = None
    kind: str = "table"

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @property
    def totals_label_colspan(self) -> int:
        return max(self.column_count - 1, 1)


@dataclass(frozen=True)
class NotesSection:
    title: Optional[str]
    content: str
    kind: str = "notes"


@dataclass(frozen=True)
class FooterSection:
    text: Optional[str]
    page_number_format: Optional[str]
    kind: str = "footer"


@dataclass(frozen=True)
class DocumentTree:
    """Ordered sections of one document plus the document-level attributes."""
    title: str
    direction: str
    sections: Tuple[Any, ...]

    def section(self, kind: str):
        for section in self.sections:
            if section.kind == kind:
                return section
        return None

    @property
    def kinds(self) -> Tuple[str, ...]:
        return tuple(s.kind for s in self.sections)


# =============================================================================
# BUILDERS
# =============================================================================


def _present(value: Any) -> bool:
    return value is not None and str(value).strip() != ''


def format_cell(value: Any, formatter: Optional[Callable[[Any], Any]]) -> str:
    """Run a cell through its column formatter; missing values render empty."""
    if value is None:
        return ''
    if formatter is not None:
        value = formatter(value)
        if value is None:
            return ''
    return str(value)


def build_header(theme: Theme, document: DocumentData) -> Optional[HeaderSection]:
    if not theme.value("header.enabled"):
        return None

    logo_url = None
    if theme.value("header.logo.enabled") and _present(theme.value("header.logo.url")):
        logo_url = theme.value("header.logo.url")

    title = None
    if theme.value("header.title.enabled"):
        title = document.title if _present(document.title) else theme.value("header.title.text")
        title = title if _present(title) else None

    subtitle = None
    if theme.value("header.subtitle.enabled") and _present(theme.value("header.subtitle.text")):
        subtitle = theme.value("header.subtitle.text")

    info = []
    if theme.value("header.document_info.enabled"):
        if _present(document.number):
            info.append(LabeledValue(theme.value("header.document_info.number_label"), document.number))
        if _present(document.date):
            info.append(LabeledValue(theme.value("header.document_info.date_label"), document.date))
        info.extend(f for f in document.extra_fields if _present(f.value))

    if not (logo_url or title or subtitle or info):
        return None
    return HeaderSection(logo_url=logo_url, title=title, subtitle=subtitle, info=tuple(info))


def build_company(theme: Theme) -> Optional[CompanySection]:
    if not theme.value("company_info.enabled"):
        return None

    def shown(toggle: str, path: str) -> Optional[str]:
        value = theme.value(path)
        return value if theme.value(toggle) and _present(value) else None

    name = shown("company_info.show_name", "company_info.name")
    subtitle = shown("company_info.show_subtitle", "company_info.subtitle")

    lines = []
    address = shown("company_info.show_address", "company_info.address")
    if address:
        lines.append(address)
    if theme.value("company_info.show_contact"):
        contact = [v for v in (theme.value("company_info.phone"), theme.value("company_info.email")) if _present(v)]
        if contact:
            lines.append(" | ".join(contact))
    tax_id = shown("company_info.show_tax_id", "company_info.tax_id")
    if tax_id:
        lines.append(f'{theme.value("company_info.tax_id_label")}: {tax_id}')

    if not (name or subtitle or lines):
        return None
    return CompanySection(name=name, subtitle=subtitle, lines=tuple(lines))


def build_party(theme: Theme, party: Optional[PartyData]) -> Optional[PartySection]:
    if party is None or not theme.value("party_info.enabled"):
        return None

    fields = [
        LabeledValue(theme.value(f"party_info.{label}"), value)
        for label, value in (
            ("name_label", party.name),
            ("company_label", party.company),
            ("phone_label", party.phone),
            ("email_label", party.email),
        )
        if _present(value)
    ]
    fields.extend(f for f in party.extra_fields if _present(f.value))

    if not fields:
        return None
    title = party.title if _present(party.title) else theme.value("party_info.title")
    return PartySection(title=title, fields=tuple(fields))


def build_statistics(theme: Theme, cards: Optional[Sequence[StatisticCard]]) -> Optional[StatisticsSection]:
    separator = theme.value("table.thousands_separator")
    shown = tuple(
        StatisticCard(str(card.label), format_number(card.value, separator), card.unit if _present(card.unit) else None)
        for card in (cards or [])
        if _present(card.value)
    )
    if not shown:
        return None
    return StatisticsSection(cards=shown)


def build_payment_details(
    details: Optional[Sequence[LabeledValue]],
    title: Optional[str] = None,
) -> Optional[PaymentDetailsSection]:
    rows = tuple(
        LabeledValue(str(item.label), str(item.value))
        for item in (details or [])
        if _present(item.value)
    )
    if not rows:
        return None
    return PaymentDetailsSection(title=title if _present(title) else None, rows=rows)


def build_table(
    theme: Theme,
    columns: Sequence[Column],
    rows: Sequence[Mapping],
    totals: Optional[Sequence[TotalsItem]] = None,
    totals_title: Optional[str] = None,
) -> Optional[TableSection]:
    if not columns:
        return None

    headers = tuple(TableHeader(c.header, c.width, c.align) for c in columns)
    body = tuple(
        tuple(format_cell(row.get(c.key), c.format) for c in columns)
        for row in rows
    )

    totals_rows: Tuple[TotalsRow, ...] = ()
    if totals and theme.value("totals.enabled"):
        separator = theme.value("table.thousands_separator")
        totals_rows = tuple(
            TotalsRow(
                label=str(item.label),
                value=format_number(item.value, separator),
                highlight=bool(item.highlight),
                bold=bool(item.bold),
            )
            for item in totals
        )

    return TableSection(
        headers=headers,
        rows=body,
        totals=totals_rows,
        totals_title=totals_title if totals_rows and _present(totals_title) else None,
    )


def build_notes(theme: Theme, notes: Optional[str]) -> Optional[NotesSection]:
    if not theme.value("notes.enabled"):
        return None
    content = notes if _present(notes) else theme.value("notes.content")
    if not _present(content):
        return None
    title = theme.value("notes.title")
    return NotesSection(title=title if _present(title) else None, content=content)


def build_footer(theme: Theme) -> Optional[FooterSection]:
    if not theme.value("footer.enabled"):
        return None
    text = theme.value("footer.text")
    page_number_format = theme.value("footer.page_number_format") if theme.value("footer.show_page_number") else None
    text = text if _present(text) else None
    page_number_format = page_number_format if _present(page_number_format) else None
    if not (text or page_number_format):
        return None
    return FooterSection(text=text, page_number_format=page_number_format)


def build_document_tree(
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
) -> DocumentTree:
    """
    Build the document tree: header, company, party, statistics, payment
    details, table, notes, footer.

    Args:
        theme: Resolved theme for this render
        document: Title, number, date and extra fields
        columns: Table columns in display order
        rows: Table rows; cells are looked up by column key
        party: Optional counterpart block
        totals: Optional totals, rendered in caller order after the data rows
        totals_title: Optional heading shown with the totals
        notes: Free text; falls back to the configured default notes
        statistics: Optional summary cards shown after the party block
        payment_details: Optional labeled payment rows shown before the table
        payment_details_title: Optional heading for the payment details

    Returns:
        DocumentTree with every omitted section absent
    """
    sections = (
        build_header(theme, document),
        build_company(theme),
        build_party(theme, party),
        build_statistics(theme, statistics),
        build_payment_details(payment_details, payment_details_title),
        build_table(theme, columns, rows, totals, totals_title),
        build_notes(theme, notes),
        build_footer(theme),
    )
    title = document.title if _present(document.title) else theme.value("header.title.text")
    return DocumentTree(
        title=str(title or ''),
        direction=theme.direction,
        sections=tuple(s for s in sections if s is not None),
    )
