"""
Pydantic Schemas for Print Requests
Covers: document identity, party, table columns/rows, totals, statement
        cards, payment details and unsaved settings overrides.

Shared by the print router and the command-line printer.
"""

from pydantic import BaseModel, Field
from functools import partial
from typing import Optional, List, Dict, Any, Literal

from print_engine.document_tree import Column, DocumentData, LabeledValue, PartyData, StatisticCard, TotalsItem
from print_engine.formatting import COLUMN_FORMATTERS, format_number, get_formatter
from print_engine.theme_resolver import Theme


# =============================================================================
# DOCUMENT DATA
# =============================================================================

class LabeledValueIn(BaseModel):
    label: str
    value: Any = None


class DocumentIn(BaseModel):
    """Title, number, issue date and extra header fields"""
    title: Optional[str] = None
    number: Optional[str] = None
    date: Optional[str] = None
    extra_fields: List[LabeledValueIn] = Field(default_factory=list)


class PartyIn(BaseModel):
    """Document counterpart (customer / supplier)"""
    name: str
    title: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    extra_fields: List[LabeledValueIn] = Field(default_factory=list)


# =============================================================================
# TABLE
# =============================================================================

class ColumnIn(BaseModel):
    key: str
    header: str
    width: Optional[str] = None                 # '30%', '120px'
    align: Optional[Literal['left', 'center', 'right']] = None
    format: Optional[str] = None                # 'text', 'number', 'date'


class TotalsItemIn(BaseModel):
    label: str
    value: Any = None
    highlight: bool = False
    bold: bool = False


# =============================================================================
# STATEMENTS
# =============================================================================

class StatisticCardIn(BaseModel):
    """Summary card next to the party block"""
    label: str
    value: Any = None
    unit: Optional[str] = None


# =============================================================================
# REQUEST
# =============================================================================

class PrintRequest(BaseModel):
    """Everything needed to print or preview one document"""
    document_type: Optional[str] = None
    document: DocumentIn = Field(default_factory=DocumentIn)
    columns: List[ColumnIn] = Field(default_factory=list)
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    party: Optional[PartyIn] = None
    totals: Optional[List[TotalsItemIn]] = None
    totals_title: Optional[str] = None
    notes: Optional[str] = None
    statistics: Optional[List[StatisticCardIn]] = None
    payment_details: Optional[List[LabeledValueIn]] = None
    payment_details_title: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None   # Unsaved overrides (live preview)

    def engine_arguments(self, theme: Theme) -> dict:
        """
        Convert to print engine keyword arguments.

        Raises:
            ValueError: a column names an unknown formatter
        """
        doc = self.document
        party = None
        if self.party is not None:
            p = self.party
            party = PartyData(
                name=p.name, title=p.title, company=p.company, phone=p.phone, email=p.email,
                extra_fields=_labeled(p.extra_fields),
            )

        totals = None
        if self.totals:
            totals = [TotalsItem(t.label, t.value, t.highlight, t.bold) for t in self.totals]

        return {
            "document": DocumentData(
                title=doc.title, number=doc.number, date=doc.date,
                extra_fields=_labeled(doc.extra_fields),
            ),
            "columns": build_columns(theme, self.columns),
            "rows": self.rows,
            "party": party,
            "totals": totals,
            "totals_title": self.totals_title,
            "notes": self.notes,
            "statistics": [StatisticCard(c.label, c.value, c.unit) for c in self.statistics or []],
            "payment_details": _labeled(self.payment_details or []),
            "payment_details_title": self.payment_details_title,
        }


def _labeled(values: List[LabeledValueIn]) -> List[LabeledValue]:
    return [LabeledValue(v.label, v.value) for v in values]


def build_columns(theme: Theme, columns: List[ColumnIn]) -> List[Column]:
    """Resolve named formatters; numbers use the theme's thousands separator."""
    result = []
    for col in columns:
        formatter = get_formatter(col.format)
        if col.format and formatter is None:
            raise ValueError(
                f"Unknown column format '{col.format}' (expected one of {sorted(COLUMN_FORMATTERS)})"
            )
        if formatter is format_number:
            formatter = partial(format_number, separator=theme.value("table.thousands_separator"))
        result.append(Column(key=col.key, header=col.header, width=col.width, align=col.align, format=formatter))
    return result
