"""
Preview Layout

Structured-node rendering of a document for on-screen preview. Uses the same
document tree and the same layout as the assembler, so the preview and the
printed page cannot drift apart.
"""

from typing import Mapping, Optional, Sequence

from .assembler import generate_base_html
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
from .markup import Element
from .stylesheet import PREVIEW_STYLE_ID, StyleHandle, StyleHost, generate_print_css
from .theme_resolver import Theme


def preview_payload(theme: Theme, tree: DocumentTree, style_id: str = PREVIEW_STYLE_ID) -> dict:
    return {
        "style_id": style_id,
        "css": generate_print_css(theme),
        "direction": tree.direction,
        "title": tree.title,
        "sections": list(tree.kinds),
        "tree": render_document(tree).to_dict(),
    }


def render_preview(
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
) -> dict:
    """
    Render a document as preview nodes.

    Returns:
        {"style_id", "css", "direction", "title", "sections", "tree"} where
        tree is nested {"tag", "attrs", "children"} dicts and text children
        are plain strings.
    """
    tree = build_document_tree(
        theme, document, columns, rows,
        party=party, totals=totals, totals_title=totals_title, notes=notes,
        statistics=statistics, payment_details=payment_details,
        payment_details_title=payment_details_title,
    )
    return preview_payload(theme, tree)


class PreviewSession:
    """
    One live preview surface.

    Owns its StyleHost and the handle to the preview stylesheet. Each
    render() replaces the stylesheet; close() (or leaving the with-block)
    removes it.
    """

    def __init__(self, host: Optional[StyleHost] = None, style_id: str = PREVIEW_STYLE_ID):
        self.host = host if host is not None else StyleHost()
        self.handle = StyleHandle(self.host, style_id)
        self._last: Optional[dict] = None

    def render(self, theme: Theme, document: DocumentData, columns: Sequence[Column],
               rows: Sequence[Mapping], **kwargs) -> dict:
        tree = build_document_tree(theme, document, columns, rows, **kwargs)
        payload = preview_payload(theme, tree, self.handle.element_id)
        self.handle.inject(payload["css"])
        self._last = payload
        return payload

    def page(self) -> str:
        """Standalone preview page from the host's styles and the last render."""
        if self._last is None:
            return generate_base_html("Preview", "", "", styles=self.host.render())
        return generate_base_html(
            title=self._last["title"],
            css="",
            body=Element.from_dict(self._last["tree"]).to_html(),
            direction=self._last["direction"],
            styles=self.host.render(),
        )

    def close(self) -> None:
        self.handle.release()
        self._last = None

    def __enter__(self) -> "PreviewSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
