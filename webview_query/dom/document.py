"""Document handle that locator strategies read from.

Strategies never touch a global DOM. They receive a ``HostDocument`` and read
nodes through it, so the same traversal runs against a live page snapshot or a
synthetic tree built in a test.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

from lxml import etree
from lxml import html as lxml_html
from lxml.cssselect import CSSSelector
from cssselect import SelectorError

from ..core.errors import InvalidQueryError
from ..types import ClickEvent, Rect, ValueChange
from ..utils.text import rendered_text

# Elements whose text never shows up in innerText
_NON_RENDERED_TAGS = frozenset({"script", "style", "noscript", "template", "head", "title"})

# Elements exposing a ``value`` property straight from their attribute
_VALUE_ATTRIBUTE_TAGS = frozenset({"input", "button", "data", "param"})


class ElementNode:
    """An element candidate: carries its own id, attributes, class and tag."""

    __slots__ = ("document", "element")

    def __init__(self, document: 'HostDocument', element: etree._Element):
        self.document = document
        self.element = element

    @property
    def key(self) -> str:
        return self.document.key_of(self)

    @property
    def id(self) -> str:
        return self.element.get("id", "")

    @property
    def name(self) -> Optional[str]:
        return self.element.get("name")

    @property
    def class_name(self) -> str:
        return self.element.get("class", "")

    @property
    def tag_name(self) -> str:
        return self.document.tag_name_of(self)

    @property
    def attributes(self) -> List[Tuple[str, str]]:
        return self.document.attributes_of(self)

    @property
    def inner_text(self) -> str:
        return self.document.inner_text(self)

    @property
    def value(self) -> Optional[str]:
        return self.document.value_of(self)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ElementNode) and other.key == self.key

    def __hash__(self) -> int:
        return hash(("element", self.key))

    def __repr__(self) -> str:
        return f"<ElementNode {self.key}>"


class TextNode:
    """
    A bare text node.

    lxml stores text as ``element.text`` (first child of the element) or
    ``element.tail`` (the sibling following the element), so a text node is
    addressed by its owning element plus that slot.
    """

    __slots__ = ("document", "owner", "slot")

    def __init__(self, document: 'HostDocument', owner: etree._Element, slot: str):
        self.document = document
        self.owner = owner
        self.slot = slot

    @property
    def key(self) -> str:
        return self.document.key_of(self)

    @property
    def text(self) -> str:
        value = self.owner.text if self.slot == "text" else self.owner.tail
        return value or ""

    @property
    def container(self) -> ElementNode:
        """Nearest element containing this text; identity fields come from it."""
        if self.slot == "text":
            return ElementNode(self.document, self.owner)
        return ElementNode(self.document, self.owner.getparent())

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TextNode) and other.key == self.key

    def __hash__(self) -> int:
        return hash(("text", self.key))

    def __repr__(self) -> str:
        return f"<TextNode {self.key}>"


Node = Union[ElementNode, TextNode]

# Maps a node to its rendered box; None means "not rendered"
Layout = Callable[[Node], Optional[Rect]]


class HostDocument(ABC):
    """Read-mostly handle on a document tree, as seen by the locator strategies."""

    @abstractmethod
    def key_of(self, node: Node) -> str:
        """Stable address of a node within this document."""

    @abstractmethod
    def get_element_by_id(self, element_id: str) -> Optional[ElementNode]:
        """Direct id lookup; first element in document order."""

    @abstractmethod
    def iter_elements(self) -> Iterator[ElementNode]:
        """Every element of the document, document order."""

    @abstractmethod
    def walk_elements(self) -> Iterator[ElementNode]:
        """Every element below <body>, document order, body excluded."""

    @abstractmethod
    def walk_texts(self) -> Iterator[TextNode]:
        """Every text node below <body>, document order."""

    @abstractmethod
    def evaluate_path(self, expression: str) -> List[Node]:
        """Ordered node result of a path expression evaluated against the document."""

    @abstractmethod
    def select(self, selector: str) -> List[ElementNode]:
        """Every element matching a selector, document order."""

    @abstractmethod
    def elements_by_tag(self, tag: str) -> List[ElementNode]:
        """Every element with the given tag name, case-insensitive."""

    @abstractmethod
    def tag_name_of(self, node: ElementNode) -> str:
        """Upper-case tag name, as the host reports it."""

    @abstractmethod
    def attributes_of(self, node: ElementNode) -> List[Tuple[str, str]]:
        """Every attribute as (name, value), source order."""

    @abstractmethod
    def bounding_rect(self, node: ElementNode) -> Rect:
        """Rendered box of an element."""

    @abstractmethod
    def text_rect(self, node: TextNode) -> Rect:
        """Rendered box of a text node's own text range."""

    @abstractmethod
    def inner_text(self, node: ElementNode) -> str:
        """Rendered text of an element."""

    @abstractmethod
    def value_of(self, node: ElementNode) -> Optional[str]:
        """The element's value property, None when it has none."""

    @abstractmethod
    def dispatch_click(self, node: Node) -> ClickEvent:
        """Dispatch one synthesized primary-button click on a node."""

    @abstractmethod
    def set_value(self, node: Node, value: str) -> ValueChange:
        """Overwrite a node's value property."""


class HtmlDocument(HostDocument):
    """
    Document backed by an lxml HTML tree.

    Geometry comes from a layout callable since lxml does not render. A node
    the layout knows nothing about gets an empty box and is treated as hidden.
    Clicks and value writes are recorded in ``mutations`` in the order they
    happen, so a host can replay them against a real page.
    """

    def __init__(self, root: etree._Element, layout: Optional[Layout] = None):
        self._root = root
        self._tree = root.getroottree()
        self._layout = layout
        self._values: Dict[str, str] = {}
        self.mutations: List[Union[ClickEvent, ValueChange]] = []

    @classmethod
    def from_html(cls, markup: str, layout: Optional[Layout] = None) -> 'HtmlDocument':
        """
        Parse markup into a full document rooted at <html>.

        Args:
            markup: HTML source
            layout: Optional node-to-box mapping

        Returns:
            HtmlDocument over the parsed tree
        """
        return cls(lxml_html.document_fromstring(markup), layout=layout)

    @property
    def root(self) -> etree._Element:
        return self._root

    @property
    def body(self) -> Optional[etree._Element]:
        return self._root.find("body")

    @property
    def clicks(self) -> List[ClickEvent]:
        return [m for m in self.mutations if isinstance(m, ClickEvent)]

    def key_of(self, node: Node) -> str:
        if isinstance(node, TextNode):
            return f"{self._tree.getpath(node.owner)}#{node.slot}"
        return self._tree.getpath(node.element)

    def get_element_by_id(self, element_id: str) -> Optional[ElementNode]:
        found = self._root.xpath("//*[@id=$element_id]", element_id=element_id)
        return ElementNode(self, found[0]) if found else None

    def iter_elements(self) -> Iterator[ElementNode]:
        for element in self._root.iter(etree.Element):
            yield ElementNode(self, element)

    def walk_elements(self) -> Iterator[ElementNode]:
        body = self.body
        if body is None:
            return
        for element in body.iterdescendants(etree.Element):
            yield ElementNode(self, element)

    def walk_texts(self) -> Iterator[TextNode]:
        body = self.body
        if body is None:
            return
        yield from self._iter_texts(body)

    def _iter_texts(self, element: etree._Element) -> Iterator[TextNode]:
        if element.text is not None:
            yield TextNode(self, element, "text")
        for child in element:
            # comments and processing instructions only contribute their tail
            if isinstance(child.tag, str):
                yield from self._iter_texts(child)
            if child.tail is not None:
                yield TextNode(self, child, "tail")

    def evaluate_path(self, expression: str) -> List[Node]:
        try:
            result = self._tree.xpath(expression)
        except etree.XPathError as e:
            raise InvalidQueryError("path", expression, str(e)) from e

        if not isinstance(result, list):
            return []

        nodes: List[Node] = []
        for item in result:
            if isinstance(item, etree._Element):
                if isinstance(item.tag, str):
                    nodes.append(ElementNode(self, item))
            elif getattr(item, "is_text", False):
                nodes.append(TextNode(self, item.getparent(), "text"))
            elif getattr(item, "is_tail", False):
                nodes.append(TextNode(self, item.getparent(), "tail"))
        return nodes

    def select(self, selector: str) -> List[ElementNode]:
        try:
            matcher = CSSSelector(selector, translator="html")
        except SelectorError as e:
            raise InvalidQueryError("selector", selector, str(e)) from e
        return [ElementNode(self, element) for element in matcher(self._root)]

    def elements_by_tag(self, tag: str) -> List[ElementNode]:
        if tag == "*":
            return list(self.iter_elements())
        wanted = tag.lower()
        return [
            ElementNode(self, element)
            for element in self._root.iter(etree.Element)
            if element.tag.lower() == wanted
        ]

    def tag_name_of(self, node: ElementNode) -> str:
        return node.element.tag.upper()

    def attributes_of(self, node: ElementNode) -> List[Tuple[str, str]]:
        return list(node.element.attrib.items())

    def _layout_rect(self, node: Node) -> Rect:
        if self._layout is None:
            return Rect()
        return self._layout(node) or Rect()

    def bounding_rect(self, node: ElementNode) -> Rect:
        return self._layout_rect(node)

    def text_rect(self, node: TextNode) -> Rect:
        return self._layout_rect(node)

    def inner_text(self, node: ElementNode) -> str:
        if node.element.tag in _NON_RENDERED_TAGS:
            return ""
        parts = [
            text_node.text
            for text_node in self._iter_texts(node.element)
            if text_node.container.element.tag not in _NON_RENDERED_TAGS
        ]
        return rendered_text("".join(parts))

    def value_of(self, node: ElementNode) -> Optional[str]:
        key = node.key
        if key in self._values:
            return self._values[key]

        element = node.element
        tag = element.tag
        if tag in _VALUE_ATTRIBUTE_TAGS:
            return element.get("value", "")
        if tag == "textarea":
            return element.text_content()
        if tag == "option":
            value = element.get("value")
            return value if value is not None else rendered_text(element.text_content())
        if tag == "select":
            options = element.findall(".//option")
            chosen = [o for o in options if o.get("selected") is not None] or options
            if not chosen:
                return ""
            return self.value_of(ElementNode(self, chosen[0]))
        return None

    def _target(self, node: Node) -> ElementNode:
        return node.container if isinstance(node, TextNode) else node

    def dispatch_click(self, node: Node) -> ClickEvent:
        event = ClickEvent(target=self._target(node).key)
        self.mutations.append(event)
        return event

    def set_value(self, node: Node, value: str) -> ValueChange:
        key = self._target(node).key
        self._values[key] = value
        change = ValueChange(target=key, value=value)
        self.mutations.append(change)
        return change
