"""
Print Engine API
Print-ready documents (invoices, statements, price lists) from tenant print settings
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

import config
from routers import print_settings, print_documents

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Print Engine API starting up...")
    yield
    # Shutdown
    logger.info("Print Engine API shutting down...")

app = FastAPI(
    title="Print Engine API",
    description="Print-ready HTML documents with shared theming",
    version="1.0.0",
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(print_settings.router, prefix="/api/print-settings", tags=["Print Settings"])
app.include_router(print_documents.router, prefix="/api/print", tags=["Print"])

@app.get("/")
async def root():
    return {"status": "ok", "service": "Print Engine API", "version": "1.0.0"}

@app.get("/health")
async def health():
    return {"status": "healthy"}
