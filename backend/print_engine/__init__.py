"""
Print Engine Package

Turns persisted print settings plus business document data (title, party,
statement cards, payment details, table rows, totals) into a print-ready
HTML document, and previews the same document on screen.

Components:
- print_config: Configuration schema, defaults factory and flat settings
- theme_resolver: Settings -> immutable Theme with header layout primitives
- stylesheet: Theme -> print CSS, scoped preview style injection
- document_tree: Theme + data -> ordered section nodes (omission rules)
- layout / markup: Section nodes -> element tree shared by both renderers
- assembler: Complete HTML document for printing
- preview: Structured preview nodes and preview sessions
- orchestrator: Browsing context + delayed print call
- settings_store: Settings table persistence (shared + per document type)
"""

from .exceptions import ConfigurationIncomplete, PrintEngineError
from .print_config import (
    DEFAULT_PRINT_CONFIG,
    DEFAULT_PRINT_SETTINGS,
    SETTINGS_FIELDS,
    create_default_config,
    hydrate_settings,
)
from .theme_resolver import HEADER_LAYOUT_TABLE, Theme, resolve_theme, theme_from_settings
from .stylesheet import PREVIEW_STYLE_ID, StyleHandle, StyleHost, generate_print_css
from .document_tree import (
    Column,
    DocumentData,
    LabeledValue,
    PartyData,
    StatisticCard,
    TotalsItem,
    build_document_tree,
)
from .assembler import assemble_document
from .preview import PreviewSession, render_preview
from .orchestrator import PRINT_UNAVAILABLE_MESSAGE, BrowserPrintHost, PrintJob, PrintOrchestrator

__all__ = [
    'ConfigurationIncomplete',
    'PrintEngineError',
    'DEFAULT_PRINT_CONFIG',
    'DEFAULT_PRINT_SETTINGS',
    'SETTINGS_FIELDS',
    'create_default_config',
    'hydrate_settings',
    'HEADER_LAYOUT_TABLE',
    'Theme',
    'resolve_theme',
    'theme_from_settings',
    'PREVIEW_STYLE_ID',
    'StyleHandle',
    'StyleHost',
    'generate_print_css',
    'Column',
    'DocumentData',
    'LabeledValue',
    'PartyData',
    'StatisticCard',
    'TotalsItem',
    'build_document_tree',
    'assemble_document',
    'PreviewSession',
    'render_preview',
    'PRINT_UNAVAILABLE_MESSAGE',
    'BrowserPrintHost',
    'PrintJob',
    'PrintOrchestrator',
]
