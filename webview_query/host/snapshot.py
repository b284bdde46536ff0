"""Builds a queryable document from a serialized live page."""

import re
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from lxml import etree
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.errors import SnapshotError
from ..dom.document import ElementNode, HtmlDocument, TextNode
from ..types import ClickEvent, Rect, ValueChange

_INVALID_TAG_CHARS = re.compile(r"[^A-Za-z0-9_.-]")
# characters a DOM string may hold but an lxml text slot may not
_NON_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class SnapshotNode(BaseModel):
    """One node of the tree produced by SNAPSHOT_SCRIPT."""
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["element", "text", "comment"]
    index: Optional[int] = None
    tag: Optional[str] = None
    attributes: List[Tuple[str, str]] = Field(default_factory=list)
    rect: Rect = Field(default_factory=Rect)
    inner_text: Optional[str] = Field(default=None, alias="innerText")
    value: Optional[str] = None
    text: Optional[str] = None
    children: List['SnapshotNode'] = Field(default_factory=list)


SnapshotNode.model_rebuild()


class _ElementInfo:
    """Host-side facts about one captured element."""

    __slots__ = ("index", "tag", "attributes", "rect", "inner_text", "value")

    def __init__(self, node: SnapshotNode):
        self.index = node.index
        self.tag = node.tag or ""
        self.attributes = list(node.attributes)
        self.rect = node.rect
        self.inner_text = node.inner_text
        self.value = node.value


class SnapshotDocument(HtmlDocument):
    """
    HtmlDocument whose geometry, rendered text and values come from a live page.

    Tags and attributes are kept exactly as the page reported them; the lxml
    tree only holds what lxml can represent.
    """

    def __init__(self, root: etree._Element, elements: Dict[str, _ElementInfo], texts: Dict[str, Rect]):
        super().__init__(root)
        self._elements = elements
        self._texts = texts

    def _info(self, node: ElementNode) -> Optional[_ElementInfo]:
        return self._elements.get(node.key)

    def tag_name_of(self, node: ElementNode) -> str:
        info = self._info(node)
        return info.tag if info is not None else super().tag_name_of(node)

    def attributes_of(self, node: ElementNode) -> List[Tuple[str, str]]:
        info = self._info(node)
        return list(info.attributes) if info is not None else super().attributes_of(node)

    def bounding_rect(self, node: ElementNode) -> Rect:
        info = self._info(node)
        return info.rect if info is not None else Rect()

    def text_rect(self, node: TextNode) -> Rect:
        return self._texts.get(node.key, Rect())

    def inner_text(self, node: ElementNode) -> str:
        info = self._info(node)
        if info is not None and info.inner_text is not None:
            return info.inner_text
        return super().inner_text(node)

    def value_of(self, node: ElementNode) -> Optional[str]:
        if node.key in self._values:
            return self._values[node.key]
        info = self._info(node)
        return info.value if info is not None else None

    def index_of(self, key: str) -> Optional[int]:
        info = self._elements.get(key)
        return info.index if info is not None else None

    def pending_mutations(self) -> List[Dict[str, Any]]:
        """Recorded clicks and value writes, shaped for REPLAY_SCRIPT."""
        payload = []
        for mutation in self.mutations:
            index = self.index_of(mutation.target)
            if index is None:
                continue
            if isinstance(mutation, ClickEvent):
                payload.append({
                    "kind": "click",
                    "index": index,
                    "button": mutation.button,
                    "detail": mutation.detail,
                    "bubbles": mutation.bubbles,
                    "cancelable": mutation.cancelable,
                    "altKey": mutation.modifiers.alt,
                    "ctrlKey": mutation.modifiers.ctrl,
                    "metaKey": mutation.modifiers.meta,
                    "shiftKey": mutation.modifiers.shift,
                })
            else:
                payload.append({"kind": "value", "index": index, "value": mutation.value})
        return payload


def _make_element(parent: Optional[etree._Element], tag: str) -> etree._Element:
    name = tag.lower()
    try:
        if parent is None:
            return etree.Element(name)
        return etree.SubElement(parent, name)
    except ValueError:
        # namespaced or otherwise non-XML tag names
        name = "x-" + _INVALID_TAG_CHARS.sub("-", name)
        if parent is None:
            return etree.Element(name)
        return etree.SubElement(parent, name)


def _make_comment(parent: etree._Element, text: Optional[str]) -> etree._Comment:
    try:
        comment = etree.Comment(text or "")
    except ValueError:
        # "--" and a trailing "-" are legal in the DOM but not in lxml comments
        comment = etree.Comment("")
    parent.append(comment)
    return comment


class _TreeBuilder:
    def __init__(self) -> None:
        self.elements: List[Tuple[etree._Element, _ElementInfo]] = []
        self.texts: List[Tuple[etree._Element, str, Rect]] = []

    def build(self, node: SnapshotNode, parent: Optional[etree._Element] = None) -> etree._Element:
        element = _make_element(parent, node.tag or "")
        for name, value in node.attributes:
            try:
                element.set(name, value)
            except ValueError:
                # still reported through the captured attribute list
                continue
        self.elements.append((element, _ElementInfo(node)))

        # text after `last` lives in its tail; before any child, in element.text
        last: Optional[etree._Element] = None
        slot_taken = False
        for child in node.children:
            if child.type == "element":
                last = self.build(child, element)
                slot_taken = False
            elif child.type == "comment":
                last = _make_comment(element, child.text)
                slot_taken = False
            else:
                if slot_taken:
                    # adjacent DOM text nodes: an empty comment gives the second its own slot
                    last = _make_comment(element, "")
                self._add_text(element, last, child)
                slot_taken = True
        return element

    def _add_text(self, element: etree._Element, last: Optional[etree._Element], node: SnapshotNode) -> None:
        text = _NON_XML_CHARS.sub("", node.text or "")
        if last is None:
            element.text = text
            self.texts.append((element, "text", node.rect))
        else:
            last.tail = text
            self.texts.append((last, "tail", node.rect))


def build_document(snapshot: Union[Dict[str, Any], SnapshotNode]) -> SnapshotDocument:
    """
    Turn the output of SNAPSHOT_SCRIPT into a SnapshotDocument.

    Args:
        snapshot: Serialized document element

    Returns:
        Document ready for the locator strategies

    Raises:
        SnapshotError: If the snapshot is missing or malformed
    """
    if snapshot is None:
        raise SnapshotError("page returned no document element")
    try:
        root_node = snapshot if isinstance(snapshot, SnapshotNode) else SnapshotNode.model_validate(snapshot)
    except ValidationError as e:
        raise SnapshotError(str(e)) from e
    if root_node.type != "element":
        raise SnapshotError("document element is not an element")

    builder = _TreeBuilder()
    root = builder.build(root_node)
    tree = root.getroottree()

    elements = {tree.getpath(element): info for element, info in builder.elements}
    texts = {
        f"{tree.getpath(owner)}#{slot}": rect
        for owner, slot, rect in builder.texts
    }
    return SnapshotDocument(root, elements, texts)
