"""Runs the query engine against a live Playwright page."""

from typing import Any, List, Optional

from playwright.async_api import Page, Error as PlaywrightError

from ..core.config import EngineConfig
from ..core.engine import QueryEngine
from ..core.errors import SnapshotError
from ..protocol.codec import collect_records
from ..protocol.sink import ListSink
from ..types import ElementRecord, Query, SetTextQuery
from ..utils.logger import WebViewQueryLogger, get_logger
from .scripts import REPLAY_SCRIPT, SNAPSHOT_SCRIPT
from .snapshot import SnapshotDocument, build_document


async def capture_document(page: Page) -> SnapshotDocument:
    """
    Capture a page's DOM, geometry and rendered text into a document.

    Args:
        page: Playwright page

    Returns:
        SnapshotDocument mirroring the page

    Raises:
        SnapshotError: If the page cannot be serialized
    """
    try:
        snapshot = await page.evaluate(SNAPSHOT_SCRIPT)
    except PlaywrightError as e:
        raise SnapshotError(str(e)) from e
    return build_document(snapshot)


class PlaywrightWebView:
    """
    A web view the native driver can query.

    Each call captures the page, runs one engine request over the capture,
    pushes any click or value write back into the page, and returns the
    messages the request emitted (records, then the termination sentinel).
    """

    def __init__(
        self,
        page: Page,
        config: Optional[EngineConfig] = None,
        logger: Optional[WebViewQueryLogger] = None,
    ):
        self._page = page
        self.config = config or EngineConfig()
        self._logger = logger or get_logger(self.config.verbose, component="webview")

    async def _engine(self, sink: ListSink) -> QueryEngine:
        document = await capture_document(self._page)
        self._logger.debug("host:capture", "Captured page", url=self._page.url)
        return QueryEngine(document, sink, config=self.config, logger=self._logger)

    async def _replay(self, document: SnapshotDocument) -> int:
        mutations = document.pending_mutations()
        if not mutations:
            return 0
        applied = await self._page.evaluate(REPLAY_SCRIPT, mutations)
        self._logger.info("host:replay", "Replayed actions", requested=len(mutations), applied=applied)
        return applied

    async def invoke(self, function_name: str, *args: str) -> List[str]:
        """
        Call a bridge entry point by name and return the emitted messages.

        Args:
            function_name: Exported name, e.g. "byId"
            *args: String arguments for the entry point

        Returns:
            Messages in emission order, ending with the sentinel
        """
        sink = ListSink()
        engine = await self._engine(sink)
        try:
            engine.invoke(function_name, *args)
        finally:
            await self._replay(engine.document)
        return sink.drain()

    async def query(self, query: Query) -> List[str]:
        """Run a locate query; returns the emitted messages."""
        sink = ListSink()
        engine = await self._engine(sink)
        try:
            engine.execute(query)
        finally:
            await self._replay(engine.document)
        return sink.drain()

    async def set_text(self, query: SetTextQuery) -> List[str]:
        """Run a set-text query; returns the emitted messages (only the sentinel)."""
        sink = ListSink()
        engine = await self._engine(sink)
        try:
            engine.set_text(query)
        finally:
            await self._replay(engine.document)
        return sink.drain()

    async def find(self, query: Query) -> List[ElementRecord]:
        """Run a locate query and decode its records."""
        records, _ = collect_records(await self.query(query), self.config.tool_name)
        return records

    def __getattr__(self, name: str) -> Any:
        """Proxy other attributes to the Playwright page."""
        return getattr(self._page, name)
