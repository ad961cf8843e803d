#!/usr/bin/env python3
"""
Print a document from a JSON file

Reads a print request (same shape as POST /api/print/html), styles it with
the tenant's print settings (or the defaults with --no-db), writes it to a
temporary page and opens it in the system browser, which prints it once
loaded.

Usage:
    python scripts/print_document.py invoice.json --document-type invoice
    python scripts/print_document.py invoice.json --no-db --output invoice.html
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

import config
from print_engine.assembler import assemble_document
from print_engine.orchestrator import PRINT_UNAVAILABLE_MESSAGE, BrowserPrintHost, PrintOrchestrator
from print_engine.print_config import hydrate_settings
from print_engine.theme_resolver import resolve_theme
from schemas_print import PrintRequest

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger("print_document")


def load_stored(document_type, use_db: bool) -> dict:
    if not use_db:
        return {}
    from database import SessionLocal
    from print_engine.settings_store import load_stored_settings

    db = SessionLocal()
    try:
        return load_stored_settings(db, document_type)
    finally:
        db.close()


async def print_html(html: str, title: str, browser, settle_delay: float) -> bool:
    orchestrator = PrintOrchestrator(BrowserPrintHost(browser), settle_delay=settle_delay)
    job = orchestrator.print_document(html, title=title)
    if job is None:
        logger.error(PRINT_UNAVAILABLE_MESSAGE)
        return False
    return await job.wait()


def main():
    parser = argparse.ArgumentParser(description='Print a document from a JSON print request')
    parser.add_argument('request', help='Path to the print request JSON file')
    parser.add_argument('--document-type', help='Document type whose settings apply (overrides the file)')
    parser.add_argument('--no-db', action='store_true', help='Use default settings, do not read the database')
    parser.add_argument('--output', help='Write the HTML to this file instead of printing')
    parser.add_argument('--browser', default=config.PRINT_BROWSER, help='webbrowser name (default: system browser)')
    parser.add_argument('--delay', type=float, default=config.PRINT_SETTLE_DELAY, help='Settle delay in seconds')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        request = PrintRequest.model_validate(json.loads(Path(args.request).read_text(encoding="utf-8")))
    except (OSError, ValueError, ValidationError) as e:
        logger.error(f"Could not read print request {args.request}: {e}")
        sys.exit(1)

    document_type = args.document_type or request.document_type
    stored = load_stored(document_type, use_db=not args.no_db)
    if request.settings:
        stored.update(request.settings)
    theme = resolve_theme(hydrate_settings(stored))

    try:
        arguments = request.engine_arguments(theme)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    if args.output:
        html = assemble_document(theme, **arguments)
        Path(args.output).write_text(html, encoding="utf-8")
        logger.info(f"Wrote {args.output}")
        return

    html = assemble_document(theme, auto_print=True, settle_delay=args.delay, **arguments)
    title = request.document.title or Path(args.request).stem
    if not asyncio.run(print_html(html, title, args.browser, args.delay)):
        sys.exit(1)


if __name__ == "__main__":
    main()
