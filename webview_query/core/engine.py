"""QueryEngine: the exported entry points of the in-page query engine."""

from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from ..dom.document import HostDocument, Node
from ..dom.strategies import Locator
from ..protocol.sink import Sink
from ..types import Action, Query, SetTextQuery, Strategy
from ..utils.logger import WebViewQueryLogger, get_logger, request_scope
from .config import EngineConfig
from .errors import HostFaultError, UnknownEntryPointError
from .reporter import Reporter

# Bridge names for the locate entry points, current and legacy spellings
LOCATE_ENTRY_POINTS: Dict[str, Strategy] = {
    "byId": Strategy.ID,
    "id": Strategy.ID,
    "byPath": Strategy.PATH,
    "xpath": Strategy.PATH,
    "bySelector": Strategy.SELECTOR,
    "cssSelector": Strategy.SELECTOR,
    "byName": Strategy.NAME,
    "name": Strategy.NAME,
    "byClass": Strategy.CLASS,
    "className": Strategy.CLASS,
    "byText": Strategy.TEXT,
    "textContent": Strategy.TEXT,
    "byTag": Strategy.TAG,
    "tagName": Strategy.TAG,
}

SET_TEXT_ENTRY_POINTS: Dict[str, Strategy] = {
    "setTextById": Strategy.ID,
    "enterTextById": Strategy.ID,
    "setTextByPath": Strategy.PATH,
    "enterTextByXpath": Strategy.PATH,
    "setTextBySelector": Strategy.SELECTOR,
    "enterTextByCssSelector": Strategy.SELECTOR,
    "setTextByName": Strategy.NAME,
    "enterTextByName": Strategy.NAME,
    "setTextByClass": Strategy.CLASS,
    "enterTextByClassName": Strategy.CLASS,
    "setTextByText": Strategy.TEXT,
    "enterTextByTextContent": Strategy.TEXT,
    "setTextByTag": Strategy.TAG,
    "enterTextByTagName": Strategy.TAG,
}


def action_from_flag(click: Any) -> Action:
    """The bridge passes the action flag as a string; only "true" means interact."""
    if isinstance(click, Action):
        return click
    if click is True or click == "true":
        return Action.INTERACT
    return Action.REPORT


class QueryEngine:
    """
    Runs one self-contained query-and-report cycle per call.

    Each call walks the document, emits one record per visible match (or
    clicks the first match in interact mode) and closes with exactly one
    termination message. Nothing carries over between calls.
    """

    def __init__(
        self,
        document: HostDocument,
        sink: Sink,
        config: Optional[EngineConfig] = None,
        logger: Optional[WebViewQueryLogger] = None,
    ):
        self.config = config or EngineConfig()
        self.document = document
        self.sink = sink
        self.logger = logger or get_logger(self.config.verbose, component="engine")
        self.locator = Locator(document, self.logger)
        self.reporter = Reporter(
            document,
            sink,
            tool_name=self.config.tool_name,
            visibility=self.config.visibility,
            logger=self.logger,
        )
        self._bridge: Dict[str, Callable[..., int]] = {
            "allElements": self.all_elements,
            "allWebElements": self.all_elements,
            "allTexts": self.all_texts,
        }

    def _run(self, candidates: Iterable[Node], interact: bool = False) -> int:
        """
        Shared traversal core: report every candidate, or click the first.

        Termination is emitted exactly once, after the last record, even when
        the walk is cut short by a click or by an error in the locator.

        Returns:
            Number of records emitted
        """
        reported = 0
        try:
            for node in candidates:
                if interact:
                    event = self.document.dispatch_click(node)
                    self.logger.info("engine:interact", "Clicked first match", target=event.target)
                    return 0
                try:
                    if self.reporter.report(node):
                        reported += 1
                except HostFaultError as e:
                    self.logger.debug("strategy:fault", "Skipping unreadable node", reason=e.message)
            return reported
        finally:
            self.reporter.terminate()

    def execute(self, query: Query) -> int:
        """
        Run a validated locate query.

        Args:
            query: Strategy, pattern and action

        Returns:
            Number of records emitted (always 0 in interact mode)
        """
        with request_scope(strategy=query.strategy.value, action=query.action.value):
            self.logger.debug("engine:request", "Running query", pattern=query.pattern)
            reported = self._run(self.locator.locate(query.strategy, query.pattern), interact=query.interact)
            self.logger.debug("engine:request", "Query finished", reported=reported)
        return reported

    def _locate(self, strategy: Strategy, pattern: Any, click: Any) -> int:
        return self.execute(Query.build(strategy, pattern, action_from_flag(click)))

    def all_elements(self) -> int:
        """Report every element of the document."""
        return self._run(self.locator.all_elements())

    def all_texts(self) -> int:
        """Report every visible, non-blank text node."""
        return self._run(self.locator.all_texts())

    def by_id(self, element_id: str, click: Any = False) -> int:
        return self._locate(Strategy.ID, element_id, click)

    def by_path(self, expression: str, click: Any = False) -> int:
        return self._locate(Strategy.PATH, expression, click)

    def by_selector(self, selector: str, click: Any = False) -> int:
        return self._locate(Strategy.SELECTOR, selector, click)

    def by_name(self, name: str, click: Any = False) -> int:
        return self._locate(Strategy.NAME, name, click)

    def by_class(self, class_name: str, click: Any = False) -> int:
        return self._locate(Strategy.CLASS, class_name, click)

    def by_text(self, text: str, click: Any = False) -> int:
        return self._locate(Strategy.TEXT, text, click)

    def by_tag(self, tag: str, click: Any = False) -> int:
        return self._locate(Strategy.TAG, tag, click)

    def set_text(self, query: SetTextQuery) -> int:
        """
        Overwrite the value of the located node(s). Never reports.

        Returns:
            Number of nodes whose value was written
        """
        with request_scope(strategy=query.strategy.value, action="set_text"):
            try:
                targets = self.locator.set_text_targets(query)
                for node in targets:
                    self.document.set_value(node, query.text)
                self.logger.info("engine:set_text", "Set text", pattern=query.pattern, targets=len(targets))
                return len(targets)
            finally:
                self.reporter.terminate()

    def set_text_by(self, strategy: Strategy, locator: Any, text: Any) -> int:
        return self.set_text(SetTextQuery.build(strategy, locator, text))

    def set_text_by_id(self, element_id: str, text: str) -> int:
        return self.set_text_by(Strategy.ID, element_id, text)

    def set_text_by_path(self, expression: str, text: str) -> int:
        return self.set_text_by(Strategy.PATH, expression, text)

    def set_text_by_selector(self, selector: str, text: str) -> int:
        return self.set_text_by(Strategy.SELECTOR, selector, text)

    def set_text_by_name(self, name: str, text: str) -> int:
        return self.set_text_by(Strategy.NAME, name, text)

    def set_text_by_class(self, class_name: str, text: str) -> int:
        return self.set_text_by(Strategy.CLASS, class_name, text)

    def set_text_by_text(self, text_content: str, text: str) -> int:
        return self.set_text_by(Strategy.TEXT, text_content, text)

    def set_text_by_tag(self, tag: str, text: str) -> int:
        return self.set_text_by(Strategy.TAG, tag, text)

    def invoke(self, function_name: str, *args: str) -> int:
        """
        Call an entry point the way the bridge does: by name, with string arguments.

        Args:
            function_name: Exported name, e.g. "byId" or "setTextByName"
            *args: String arguments; locate calls take (pattern, click?),
                set-text calls take (locator, text)

        Returns:
            The called entry point's result

        Raises:
            UnknownEntryPointError: If the name is not exported
            InvalidQueryError: If the arguments do not form a valid query
        """
        with request_scope(entry_point=function_name):
            if function_name in self._bridge:
                return self._bridge[function_name]()
            if function_name in LOCATE_ENTRY_POINTS:
                pattern, click = _split_args(args, 2)
                return self._locate(LOCATE_ENTRY_POINTS[function_name], pattern, click)
            if function_name in SET_TEXT_ENTRY_POINTS:
                locator, text = _split_args(args, 2)
                return self.set_text_by(SET_TEXT_ENTRY_POINTS[function_name], locator, text)
        self.logger.warn("engine:request", "Unknown entry point", entry_point=function_name)
        raise UnknownEntryPointError(function_name)


def _split_args(args: Tuple[str, ...], count: int) -> Tuple[Any, ...]:
    return tuple(args[:count]) + (None,) * (count - len(args))
