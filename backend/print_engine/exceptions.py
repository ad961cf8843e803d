"""
Print Engine Exceptions

Only programming errors are raised. Environment failures (a browsing context
that cannot be opened) are reported through return values by the
orchestrator, and late-loading assets are not errors at all.
"""

from typing import Iterable, List


class PrintEngineError(Exception):
    """Base class for print engine errors."""


class ConfigurationIncomplete(PrintEngineError):
    """
    A theme was resolved from settings that did not pass through the
    defaults factory (missing fields or unknown enum values).
    """

    def __init__(self, fields: Iterable[str], reason: str = "missing"):
        self.fields: List[str] = sorted(fields)
        self.reason = reason
        preview = ", ".join(self.fields[:10])
        if len(self.fields) > 10:
            preview += f", ... ({len(self.fields)} total)"
        super().__init__(
            f"Print settings incomplete ({reason}): {preview}. "
            f"Hydrate stored settings with hydrate_settings() before resolving a theme."
        )
