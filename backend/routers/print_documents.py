"""
Print Documents Router - Printable HTML and preview trees

Callers post the document data (title, party, columns, rows, totals);
the tenant's print settings for the document type style it.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

import config
from database import get_db
from schemas_print import PrintRequest
from print_engine.assembler import assemble_document
from print_engine.preview import PreviewSession, render_preview
from print_engine.print_config import hydrate_settings
from print_engine.settings_store import load_stored_settings, valid_document_type
from print_engine.theme_resolver import Theme, resolve_theme

router = APIRouter()


def _load_request(db: Session, request: PrintRequest) -> tuple:
    if not valid_document_type(request.document_type):
        raise HTTPException(status_code=400, detail=f"Invalid document type: {request.document_type}")

    stored = load_stored_settings(db, request.document_type)
    if request.settings:
        stored.update(request.settings)
    theme: Theme = resolve_theme(hydrate_settings(stored))

    try:
        arguments = request.engine_arguments(theme)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return theme, arguments


@router.post("/html")
async def get_print_html(request: PrintRequest, db: Session = Depends(get_db)):
    """Complete document that opens the print dialog once loaded."""
    theme, arguments = _load_request(db, request)
    html = assemble_document(theme, auto_print=True, settle_delay=config.PRINT_SETTLE_DELAY, **arguments)
    return HTMLResponse(content=html)


@router.post("/preview")
async def get_print_preview(request: PrintRequest, db: Session = Depends(get_db)):
    theme, arguments = _load_request(db, request)
    return render_preview(theme, **arguments)


@router.post("/preview/page")
async def get_print_preview_page(request: PrintRequest, db: Session = Depends(get_db)):
    theme, arguments = _load_request(db, request)
    with PreviewSession() as session:
        session.render(theme, **arguments)
        html = session.page()
    return HTMLResponse(content=html)
