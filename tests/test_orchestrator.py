import asyncio
import webbrowser

from print_engine.orchestrator import (
    BrowserPrintHost,
    BrowsingContext,
    PrintHost,
    PrintOrchestrator,
    TempFileContext,
)


class FakeContext(BrowsingContext):
    def __init__(self, fail_write=False):
        self.html = None
        self.print_calls = 0
        self.closed = False
        self.fail_write = fail_write

    def write(self, html):
        if self.fail_write:
            raise OSError("context closed")
        self.html = html

    def print(self):
        self.print_calls += 1

    def close(self):
        self.closed = True


class FakeHost(PrintHost):
    def __init__(self, refuse=False, fail_write=False):
        self.refuse = refuse
        self.fail_write = fail_write
        self.contexts = []

    def open_context(self, title=None):
        if self.refuse:
            return None
        context = FakeContext(self.fail_write)
        self.contexts.append(context)
        return context


def test_refused_context_returns_none():
    async def run():
        return PrintOrchestrator(FakeHost(refuse=True), settle_delay=0).print_document("<html></html>")

    assert asyncio.run(run()) is None


def test_failed_write_returns_none_and_closes_context():
    host = FakeHost(fail_write=True)

    async def run():
        return PrintOrchestrator(host, settle_delay=0).print_document("<html></html>")

    assert asyncio.run(run()) is None
    assert host.contexts[0].closed
    assert host.contexts[0].print_calls == 0


def test_prints_after_settle_delay():
    host = FakeHost()

    async def run():
        job = PrintOrchestrator(host, settle_delay=0.01).print_document("<html>doc</html>", title="Invoice")
        assert host.contexts[0].print_calls == 0
        printed = await job.wait()
        return job, printed

    job, printed = asyncio.run(run())
    assert printed is True
    assert job.printed and not job.cancelled
    assert host.contexts[0].html == "<html>doc</html>"
    assert host.contexts[0].print_calls == 1


def test_cancel_before_delay_prevents_print():
    host = FakeHost()

    async def run():
        job = PrintOrchestrator(host, settle_delay=0.05).print_document("<html></html>")
        assert job.cancel() is True
        printed = await job.wait()
        await asyncio.sleep(0.1)
        return job, printed

    job, printed = asyncio.run(run())
    assert printed is False
    assert job.cancelled and not job.printed
    assert host.contexts[0].print_calls == 0
    assert host.contexts[0].closed


def test_cancel_after_print_is_refused():
    host = FakeHost()

    async def run():
        job = PrintOrchestrator(host, settle_delay=0).print_document("<html></html>")
        await job.wait()
        return job.cancel(), job

    cancelled, job = asyncio.run(run())
    assert cancelled is False
    assert job.printed


def test_jobs_are_independent():
    host = FakeHost()

    async def run():
        orchestrator = PrintOrchestrator(host, settle_delay=0.01)
        first = orchestrator.print_document("<html>first</html>")
        second = orchestrator.print_document("<html>second</html>")
        first.cancel()
        await second.wait()
        return first, second

    first, second = asyncio.run(run())
    assert len(host.contexts) == 2
    assert host.contexts[0] is not host.contexts[1]
    assert host.contexts[0].html == "<html>first</html>"
    assert host.contexts[1].html == "<html>second</html>"
    assert first.cancelled and host.contexts[0].print_calls == 0
    assert second.printed and host.contexts[1].print_calls == 1


def test_browser_host_without_browser(monkeypatch):
    def no_browser(name=None):
        raise webbrowser.Error("could not locate runnable browser")

    monkeypatch.setattr(webbrowser, "get", no_browser)
    assert BrowserPrintHost().open_context() is None


def test_browser_host_with_missing_directory(monkeypatch, tmp_path):
    monkeypatch.setattr(webbrowser, "get", lambda name=None: RecordingBrowser())
    host = BrowserPrintHost(directory=str(tmp_path / "missing"))

    async def run():
        return PrintOrchestrator(host, settle_delay=0).print_document("<html></html>")

    assert asyncio.run(run()) is None


class RecordingBrowser(webbrowser.BaseBrowser):
    def __init__(self):
        super().__init__("recording")
        self.opened = []

    def open(self, url, new=0, autoraise=True):
        self.opened.append(url)
        return True


def test_browser_host_writes_temp_file_and_opens_it(monkeypatch, tmp_path):
    browser = RecordingBrowser()
    monkeypatch.setattr(webbrowser, "get", lambda name=None: browser)

    host = BrowserPrintHost(directory=str(tmp_path))

    async def run():
        job = PrintOrchestrator(host, settle_delay=0).print_document("<html>doc</html>", title="Invoice")
        await job.wait()
        return job

    job = asyncio.run(run())
    assert isinstance(job.context, TempFileContext)
    assert job.context.path.parent == tmp_path
    assert job.context.path.read_text(encoding="utf-8") == "<html>doc</html>"
    assert browser.opened == [job.context.uri]
    job.context.close()
    assert not job.context.path.exists()


class RejectingBrowser(RecordingBrowser):
    def open(self, url, new=0, autoraise=True):
        super().open(url, new, autoraise)
        return False


def test_rejected_open_is_not_reported_as_printed(monkeypatch, tmp_path):
    browser = RejectingBrowser()
    monkeypatch.setattr(webbrowser, "get", lambda name=None: browser)
    host = BrowserPrintHost(directory=str(tmp_path))

    async def run():
        job = PrintOrchestrator(host, settle_delay=0).print_document("<html>doc</html>")
        printed = await job.wait()
        return job, printed

    job, printed = asyncio.run(run())
    assert printed is False
    assert not job.printed and not job.pending
    assert isinstance(job.error, OSError)
    assert len(browser.opened) == 1
    assert not job.context.path.exists()
