"""
Print Settings Store

Loads and saves flat print settings in the tenant's settings table.

Shared settings live under category "print"; a document type (invoice,
statement, ...) can override any of them under "print:<document_type>".
Reads always merge defaults <- shared <- overrides, so callers get a
complete record.
"""

import logging
import re
from typing import Dict, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from .print_config import DEFAULT_PRINT_SETTINGS, hydrate_settings
from .theme_resolver import Theme, resolve_theme

logger = logging.getLogger(__name__)

SETTINGS_CATEGORY = "print"

DOCUMENT_TYPE_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]{0,39}$")


def valid_document_type(document_type: Optional[str]) -> bool:
    return document_type is None or bool(DOCUMENT_TYPE_PATTERN.match(document_type))


def settings_category(document_type: Optional[str] = None) -> str:
    if not document_type:
        return SETTINGS_CATEGORY
    return f"{SETTINGS_CATEGORY}:{document_type}"


# =============================================================================
# LOADERS
# =============================================================================

def load_stored_settings(db: Session, document_type: Optional[str] = None) -> Dict[str, str]:
    """Raw stored values: shared settings with document type overrides on top."""
    stored = _load_category(db, settings_category())
    if document_type:
        stored.update(_load_category(db, settings_category(document_type)))
    return stored


def get_print_settings(db: Session, document_type: Optional[str] = None) -> dict:
    """
    Load print settings from the tenant's settings table.
    Merges stored values with defaults for any missing keys.

    Args:
        db: Database session (tenant-specific)
        document_type: Optional document type whose overrides apply

    Returns:
        Complete flat settings record
    """
    return hydrate_settings(load_stored_settings(db, document_type))


def get_print_theme(db: Session, document_type: Optional[str] = None) -> Theme:
    return resolve_theme(get_print_settings(db, document_type))


def get_overridden_keys(db: Session, document_type: str) -> List[str]:
    return sorted(_load_category(db, settings_category(document_type)))


# =============================================================================
# WRITERS
# =============================================================================

def save_print_settings(db: Session, updates: Mapping, document_type: Optional[str] = None) -> List[str]:
    """
    Upsert print settings and commit.

    Unknown keys and None values are skipped.

    Returns:
        Keys that were written
    """
    category = settings_category(document_type)
    updated = []

    for key, value in updates.items():
        if key not in DEFAULT_PRINT_SETTINGS:
            logger.warning(f"Skipping unknown print setting {key!r}")
            continue
        if value is None:
            continue
        _upsert_setting(db, category, key, value)
        updated.append(key)

    db.commit()
    if updated:
        logger.info(f"Saved {len(updated)} print setting(s) in {category}")
    return updated


def reset_print_settings(db: Session, document_type: Optional[str] = None) -> int:
    """Delete stored settings for the category. Returns the number of rows removed."""
    category = settings_category(document_type)
    result = db.execute(
        text("DELETE FROM settings WHERE category = :cat"),
        {"cat": category}
    )
    db.commit()
    logger.info(f"Reset print settings in {category} ({result.rowcount} removed)")
    return result.rowcount


# =============================================================================
# PRIVATE HELPERS
# =============================================================================

def _load_category(db: Session, category: str) -> Dict[str, str]:
    rows = db.execute(
        text("SELECT key, value FROM settings WHERE category = :cat"),
        {"cat": category}
    ).fetchall()
    return {row[0]: row[1] for row in rows if row[1] is not None}


def _upsert_setting(db: Session, category: str, key: str, value) -> None:
    if isinstance(value, bool):
        value_str = 'true' if value else 'false'
        value_type = 'boolean'
    elif isinstance(value, (int, float)):
        value_str = str(value)
        value_type = 'number'
    else:
        value_str = str(value)
        value_type = 'string'

    exists = db.execute(
        text("SELECT 1 FROM settings WHERE category = :cat AND key = :key"),
        {"cat": category, "key": key}
    ).fetchone()

    if exists:
        db.execute(
            text("UPDATE settings SET value = :value, value_type = :value_type, updated_at = CURRENT_TIMESTAMP "
                 "WHERE category = :cat AND key = :key"),
            {"cat": category, "key": key, "value": value_str, "value_type": value_type}
        )
    else:
        db.execute(
            text("INSERT INTO settings (category, key, value, value_type) VALUES (:cat, :key, :value, :value_type)"),
            {"cat": category, "key": key, "value": value_str, "value_type": value_type}
        )
