"""Turns located nodes into bridge messages."""

from typing import Optional

from ..dom.document import ElementNode, HostDocument, TextNode
from ..dom.geometry import VisibilityPolicy, is_visible
from ..protocol.codec import finished_sentinel, serialize_record
from ..protocol.sink import Sink
from ..types import ElementRecord
from ..utils.logger import WebViewQueryLogger, get_logger
from ..utils.text import js_trim


class Reporter:
    """
    Serializes candidates and emits them through a sink.

    Geometry is read here, after a strategy has already matched the node, and
    only visible candidates produce a message.
    """

    def __init__(
        self,
        document: HostDocument,
        sink: Sink,
        tool_name: str = "robotium",
        visibility: VisibilityPolicy = VisibilityPolicy.INCLUSIVE,
        logger: Optional[WebViewQueryLogger] = None,
    ):
        self.document = document
        self.sink = sink
        self.tool_name = tool_name
        self.visibility = visibility
        self.logger = logger or get_logger()

    def report_element(self, node: ElementNode) -> bool:
        """
        Emit one element record if the element is visible.

        Form controls carry their content in ``value`` rather than in child
        text, so a blank rendered text falls back to the value.

        Returns:
            True if a record was emitted
        """
        text = node.inner_text
        if len(js_trim(text or "")) == 0:
            text = node.value

        record = ElementRecord(
            id=node.id,
            text=text,
            name=node.name,
            class_name=node.class_name,
            tag_name=node.tag_name,
            attributes=node.attributes,
        )

        rect = self.document.bounding_rect(node)
        if not is_visible(rect, self.visibility):
            self.logger.debug("reporter:hidden", "Element not visible", node=node.key)
            return False

        self.sink.emit(serialize_record(record.model_copy(update=rect.model_dump())))
        return True

    def report_text_node(self, node: TextNode) -> bool:
        """
        Emit one text record if the text node is non-blank and visible.

        The box is the text range's own, not its container's: inline text is
        usually narrower than the element around it. Identity fields come from
        the containing element.

        Returns:
            True if a record was emitted
        """
        text = node.text
        if len(js_trim(text)) == 0:
            return False

        rect = self.document.text_rect(node)
        if not is_visible(rect, self.visibility):
            self.logger.debug("reporter:hidden", "Text not visible", node=node.key)
            return False

        container = node.container
        record = ElementRecord(
            id=container.id,
            text=text,
            name=container.name,
            class_name=container.class_name,
            tag_name=container.tag_name,
            **rect.model_dump(),
        )
        self.sink.emit(serialize_record(record))
        return True

    def report(self, node) -> bool:
        if isinstance(node, TextNode):
            return self.report_text_node(node)
        return self.report_element(node)

    def terminate(self) -> None:
        """Close the current request's output stream."""
        self.sink.emit(finished_sentinel(self.tool_name))
