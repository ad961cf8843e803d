"""
Markup Elements

Minimal element tree shared by the print assembler and the preview layout.
Layout code builds Elements once; to_html() serializes them for printing and
to_dict() for preview clients, so both see exactly the same structure.
"""

from html import escape as html_escape
from typing import Any, Dict, List, Optional, Union

VOID_TAGS = frozenset({'img', 'br', 'hr', 'meta', 'link'})


def esc(text: Any) -> str:
    if text is None:
        return ''
    return html_escape(str(text))


Child = Union["Element", str]


class Element:
    """An HTML element: tag, ordered attributes and children (Elements or text)."""

    __slots__ = ('tag', 'attrs', 'children')

    def __init__(self, tag: str, attrs: Optional[Dict[str, Any]] = None, children: Optional[List[Child]] = None):
        self.tag = tag
        self.attrs = {k: v for k, v in (attrs or {}).items() if v is not None and v is not False}
        self.children: List[Child] = [c for c in (children or []) if c is not None and c != '']

    def __repr__(self) -> str:
        return f"Element({self.tag!r}, {self.attrs!r}, {len(self.children)} children)"

    def to_html(self) -> str:
        attrs = ''.join(
            f' {name}' if value is True else f' {name}="{esc(value)}"'
            for name, value in self.attrs.items()
        )
        if self.tag in VOID_TAGS:
            return f'<{self.tag}{attrs}>'
        inner = ''.join(
            child.to_html() if isinstance(child, Element) else esc(child)
            for child in self.children
        )
        return f'<{self.tag}{attrs}>{inner}</{self.tag}>'

    @classmethod
    def from_dict(cls, node: dict) -> "Element":
        return cls(node['tag'], node.get('attrs'), [
            child if isinstance(child, str) else cls.from_dict(child)
            for child in node.get('children', [])
        ])

    def to_dict(self) -> dict:
        return {
            'tag': self.tag,
            'attrs': {k: (v if v is True else str(v)) for k, v in self.attrs.items()},
            'children': [
                child.to_dict() if isinstance(child, Element) else str(child)
                for child in self.children
            ],
        }


def el(tag: str, class_name: Optional[str] = None, *children: Child, **attrs) -> Element:
    """Shorthand: el('div', 'print-title', 'Invoice')."""
    if class_name:
        attrs['class'] = class_name
    return Element(tag, attrs, list(children))
