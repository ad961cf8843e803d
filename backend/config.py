"""
Runtime configuration for the Print Engine API

Values come from environment variables, with defaults for local use.
"""

import os

DATABASE_URL = os.environ.get("PRINT_ENGINE_DATABASE_URL", "postgresql:///print_engine_db")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Seconds between page load and the print call
PRINT_SETTLE_DELAY = float(os.environ.get("PRINT_SETTLE_DELAY", "0.5"))

# webbrowser name for server-side printing (None = platform default)
PRINT_BROWSER = os.environ.get("PRINT_BROWSER") or None
