"""
Print Settings Router - Tenant print style configuration

Shared settings apply to every document; ?document_type= reads or writes the
overrides for one document type (invoice, statement, ...).
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from pydantic import create_model
from typing import Literal, Optional

from database import get_db
from print_engine.print_config import DEFAULT_PRINT_SETTINGS, ENUM_FIELDS, create_default_config
from print_engine.settings_store import (
    get_overridden_keys,
    get_print_settings,
    reset_print_settings,
    save_print_settings,
    valid_document_type,
)

router = APIRouter()


def _field_type(key: str, default):
    if key in ENUM_FIELDS:
        return Literal[ENUM_FIELDS[key]]
    if isinstance(default, bool):
        return bool
    return str


# Every flat setting, all optional; enum fields only accept their values
PrintSettingsUpdate = create_model(
    'PrintSettingsUpdate',
    **{
        key: (Optional[_field_type(key, default)], None)
        for key, default in DEFAULT_PRINT_SETTINGS.items()
    }
)


def _document_type(document_type: Optional[str] = Query(None)) -> Optional[str]:
    if document_type is not None and not valid_document_type(document_type):
        raise HTTPException(status_code=400, detail=f"Invalid document type: {document_type}")
    return document_type or None


@router.get("")
async def get_print_settings_config(
    document_type: Optional[str] = Depends(_document_type),
    db: Session = Depends(get_db),
):
    result = get_print_settings(db, document_type)
    if document_type:
        return {"document_type": document_type, "overrides": get_overridden_keys(db, document_type), "settings": result}
    return {"document_type": None, "overrides": [], "settings": result}


@router.put("")
async def update_print_settings_config(
    updates: PrintSettingsUpdate,
    document_type: Optional[str] = Depends(_document_type),
    db: Session = Depends(get_db),
):
    updates_dict = updates.model_dump(exclude_none=True)
    updated = save_print_settings(db, updates_dict, document_type)
    return {"status": "ok", "document_type": document_type, "updated": updated}


@router.post("/reset")
async def reset_print_settings_config(
    document_type: Optional[str] = Depends(_document_type),
    db: Session = Depends(get_db),
):
    removed = reset_print_settings(db, document_type)
    scope = f"'{document_type}' overrides" if document_type else "Print settings"
    return {"status": "ok", "removed": removed, "message": f"{scope} reset to defaults"}


@router.get("/defaults")
async def get_print_settings_defaults():
    return {"settings": dict(DEFAULT_PRINT_SETTINGS), "config": create_default_config()}
