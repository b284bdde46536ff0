"""Element-location strategies.

Every strategy is a lazy generator of candidates that already passed the
strategy's match test. Callers decide what to do with them (report every
visible one, or click the first), so a strategy never reads geometry.
"""

from typing import Callable, Dict, Iterator, List, Optional

from ..core.errors import HostFaultError
from ..types import SetTextQuery, Strategy
from ..utils.logger import WebViewQueryLogger, get_logger
from ..utils.text import js_trim
from .document import ElementNode, HostDocument, Node, TextNode


class Locator:
    """Runs the location strategies against one document."""

    def __init__(self, document: HostDocument, logger: Optional[WebViewQueryLogger] = None):
        self.document = document
        self.logger = logger or get_logger()
        self._strategies: Dict[Strategy, Callable[[str], Iterator[Node]]] = {
            Strategy.ID: self.by_id,
            Strategy.PATH: self.by_path,
            Strategy.SELECTOR: self.by_selector,
            Strategy.NAME: self.by_name,
            Strategy.CLASS: self.by_class,
            Strategy.TEXT: self.by_text,
            Strategy.TAG: self.by_tag,
        }

    def locate(self, strategy: Strategy, pattern: str) -> Iterator[Node]:
        """
        Lazily yield every candidate matching a pattern under a strategy.

        Args:
            strategy: Location strategy
            pattern: Locator string

        Returns:
            Iterator over matching nodes in the strategy's order
        """
        return self._strategies[strategy](pattern)

    def _matching(self, nodes: Iterator[Node], predicate: Callable[[Node], bool]) -> Iterator[Node]:
        for node in nodes:
            try:
                matched = predicate(node)
            except HostFaultError as e:
                self.logger.debug("strategy:fault", "Skipping unreadable node", reason=e.message)
                continue
            if matched:
                yield node

    def by_id(self, element_id: str) -> Iterator[Node]:
        element = self.document.get_element_by_id(element_id)
        if element is not None:
            yield element
            return
        # some hosts hide elements from direct lookup; fall back to a full scan
        yield from self._matching(self.document.iter_elements(), lambda n: n.id == element_id)

    def by_path(self, expression: str) -> Iterator[Node]:
        yield from self.document.evaluate_path(expression)

    def by_selector(self, selector: str) -> Iterator[Node]:
        yield from self.document.select(selector)

    def by_name(self, name: str) -> Iterator[Node]:
        def has_name(node: ElementNode) -> bool:
            attribute = node.name
            return attribute is not None and len(js_trim(attribute)) > 0 and attribute == name

        yield from self._matching(self.document.walk_elements(), has_name)

    def by_class(self, class_name: str) -> Iterator[Node]:
        def has_class(node: ElementNode) -> bool:
            value = node.class_name
            return len(js_trim(value)) > 0 and value == class_name

        yield from self._matching(self.document.walk_elements(), has_class)

    def by_text(self, text: str) -> Iterator[Node]:
        wanted = js_trim(text)
        yield from self._matching(self.document.walk_texts(), lambda n: js_trim(n.text) == wanted)

    def by_tag(self, tag: str) -> Iterator[Node]:
        yield from self.document.elements_by_tag(tag)

    def all_elements(self) -> Iterator[ElementNode]:
        yield from self.document.iter_elements()

    def all_texts(self) -> Iterator[TextNode]:
        yield from self._matching(self.document.walk_texts(), lambda n: len(js_trim(n.text)) > 0)

    def set_text_targets(self, query: SetTextQuery) -> List[Node]:
        """
        Nodes whose value a set-text request overwrites.

        Id, path, selector and tag locators target a single node; name, class
        and text locators target every match. Text locators compare the raw,
        untrimmed text.
        """
        strategy, pattern = query.strategy, query.pattern

        if strategy is Strategy.ID:
            element = self.document.get_element_by_id(pattern)
            return [element] if element is not None else []
        if strategy is Strategy.PATH:
            return self.document.evaluate_path(pattern)[:1]
        if strategy is Strategy.SELECTOR:
            return list(self.document.select(pattern)[:1])
        if strategy is Strategy.TAG:
            return list(self.document.elements_by_tag(pattern)[:1])
        if strategy is Strategy.TEXT:
            return list(self._matching(self.document.walk_texts(), lambda n: n.text == pattern))
        return list(self.locate(strategy, pattern))
