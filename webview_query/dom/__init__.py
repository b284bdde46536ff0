"""Document model, visibility filter and location strategies."""

from .document import ElementNode, HostDocument, HtmlDocument, Layout, Node, TextNode
from .geometry import VisibilityPolicy, is_visible
from .strategies import Locator

__all__ = [
    "ElementNode",
    "HostDocument",
    "HtmlDocument",
    "Layout",
    "Node",
    "TextNode",
    "VisibilityPolicy",
    "is_visible",
    "Locator",
]
