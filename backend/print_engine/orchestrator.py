"""
Print Orchestrator

Opens a new browsing context for an assembled document, writes the document
into it and schedules the native print call after a settle delay.

A host that refuses to open a context is not an exception: print_document()
logs a warning and returns None so callers can offer a retry. Once the
print call has been made it cannot be cancelled; PrintJob.cancel() only
works while the settle delay is still running.
"""

import asyncio
import logging
import os
import tempfile
import webbrowser
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .assembler import DEFAULT_SETTLE_DELAY

logger = logging.getLogger(__name__)

PRINT_UNAVAILABLE_MESSAGE = (
    "Could not open a print window. Check that pop-ups and printing are "
    "allowed for this site, then try again."
)


# =============================================================================
# HOSTS
# =============================================================================

class BrowsingContext(ABC):
    """A fresh top-level context holding exactly one document."""

    @abstractmethod
    def write(self, html: str) -> None:
        ...

    @abstractmethod
    def print(self) -> None:
        ...

    def close(self) -> None:
        pass


class PrintHost(ABC):
    """Environment that can open browsing contexts."""

    @abstractmethod
    def open_context(self, title: Optional[str] = None) -> Optional[BrowsingContext]:
        """Open a new context, or return None when the environment refuses."""


class TempFileContext(BrowsingContext):
    """One temporary HTML file, shown with the system browser on print()."""

    def __init__(self, browser: webbrowser.BaseBrowser, path: Path):
        self.browser = browser
        self.path = path

    @property
    def uri(self) -> str:
        return self.path.resolve().as_uri()

    def write(self, html: str) -> None:
        self.path.write_text(html, encoding="utf-8")

    def print(self) -> None:
        # The page carries its own load -> window.print() trigger
        if not self.browser.open_new(self.uri):
            raise OSError(f"Browser did not accept {self.uri}")

    def close(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


class BrowserPrintHost(PrintHost):
    """
    Default host: the system browser via the webbrowser module.

    Args:
        browser: Optional webbrowser name (e.g. "firefox"); None uses the
            platform default
        directory: Where to write the temporary documents
    """

    def __init__(self, browser: Optional[str] = None, directory: Optional[str] = None):
        self.browser_name = browser
        self.directory = directory

    def open_context(self, title: Optional[str] = None) -> Optional[BrowsingContext]:
        try:
            browser = webbrowser.get(self.browser_name)
        except webbrowser.Error as e:
            logger.warning(f"No browser available for printing: {e}")
            return None

        try:
            fd, path = tempfile.mkstemp(prefix="print-", suffix=".html", dir=self.directory)
        except OSError as e:
            logger.warning(f"Could not create print document in {self.directory or 'temp dir'}: {e}")
            return None
        os.close(fd)
        return TempFileContext(browser, Path(path))


# =============================================================================
# JOBS
# =============================================================================

class PrintJob:
    """A scheduled print call for one browsing context."""

    def __init__(self, context: BrowsingContext, title: Optional[str] = None):
        self.context = context
        self.title = title
        self.printed = False
        self.cancelled = False
        self.error: Optional[Exception] = None
        self._handle: Optional[asyncio.TimerHandle] = None
        self._done: Optional[asyncio.Future] = None

    def _schedule(self, loop: asyncio.AbstractEventLoop, delay: float) -> None:
        self._done = loop.create_future()
        self._handle = loop.call_later(delay, self._fire)

    def _fire(self) -> None:
        # Settle delay elapsed; assets that are still loading fall back to
        # host defaults.
        logger.debug(f"Settle delay elapsed for {self.title or 'document'}, printing")
        try:
            self.context.print()
            self.printed = True
        except OSError as e:
            self.error = e
            self.context.close()
            logger.warning(f"Print call failed for {self.title or 'document'}: {e}")
        finally:
            if self._done is not None and not self._done.done():
                self._done.set_result(self.printed)

    @property
    def pending(self) -> bool:
        return not (self.printed or self.cancelled or self.error)

    def cancel(self) -> bool:
        """Prevent the print call. Only possible before the delay elapses."""
        if not self.pending or self._handle is None:
            return False
        self._handle.cancel()
        self.cancelled = True
        self.context.close()
        if self._done is not None and not self._done.done():
            self._done.set_result(False)
        logger.info(f"Print cancelled for {self.title or 'document'}")
        return True

    async def wait(self) -> bool:
        """Wait until the job printed or was cancelled. Returns printed."""
        if self._done is None:
            return self.printed
        return await self._done


class PrintOrchestrator:
    """
    Stateless print entry point; every call gets its own browsing context.

    Args:
        host: PrintHost to open contexts with (BrowserPrintHost by default)
        settle_delay: Seconds between writing the document and printing
    """

    def __init__(self, host: Optional[PrintHost] = None, settle_delay: float = DEFAULT_SETTLE_DELAY):
        self.host = host if host is not None else BrowserPrintHost()
        self.settle_delay = settle_delay

    def print_document(
        self,
        html: str,
        title: Optional[str] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> Optional[PrintJob]:
        """
        Write a document into a new context and schedule printing.

        With BrowserPrintHost the print call only shows the page; the
        print dialog comes from the page's own trigger, so the html must
        be assembled with auto_print=True.

        Args:
            html: Complete assembled document
            title: Used for logging and the context name
            loop: Event loop to schedule on (the running loop by default)

        Returns:
            PrintJob, or None when no browsing context could be opened
        """
        if loop is None:
            loop = asyncio.get_running_loop()

        context = self.host.open_context(title)
        if context is None:
            logger.warning(f"Print context unavailable for {title or 'document'}")
            return None

        try:
            context.write(html)
        except OSError as e:
            logger.warning(f"Could not write document to print context: {e}")
            context.close()
            return None

        job = PrintJob(context, title)
        job._schedule(loop, self.settle_delay)
        logger.info(f"Print scheduled for {title or 'document'} in {self.settle_delay}s")
        return job
