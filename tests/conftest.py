"""Shared fixtures: synthetic documents with a hand-written layout."""

from typing import Dict, Optional

import pytest

from webview_query.core import EngineConfig, QueryEngine
from webview_query.dom import ElementNode, HtmlDocument, TextNode
from webview_query.protocol import ListSink
from webview_query.types import Rect

DEFAULT_BOX = Rect(left=10, top=20, width=100, height=30)

FINISHED = "robotium-finished"


def box_layout(boxes: Optional[Dict[str, Optional[Rect]]] = None, default: Optional[Rect] = DEFAULT_BOX):
    """
    Layout keyed by element id, or by "text:<trimmed text>" for text nodes.

    Anything not listed gets ``default``; map a key to None to hide it.
    """
    boxes = boxes or {}

    def layout(node):
        if isinstance(node, TextNode):
            key = "text:" + node.text.strip()
        elif isinstance(node, ElementNode):
            key = node.id
        else:
            return None
        if key in boxes:
            return boxes[key]
        return default

    return layout


def make_document(markup: str, boxes=None, default: Optional[Rect] = DEFAULT_BOX) -> HtmlDocument:
    return HtmlDocument.from_html(markup, layout=box_layout(boxes, default))


def make_engine(document: HtmlDocument, **config) -> tuple:
    sink = ListSink()
    engine = QueryEngine(document, sink, config=EngineConfig(**config))
    return engine, sink


@pytest.fixture
def form_page() -> HtmlDocument:
    return make_document(
        """
        <html>
          <head><title>Login</title></head>
          <body>
            <form id="login">
              <input id="u" name="user" class="txt" value="">
              <input id="p" name="pass" class="txt" type="password" value="secret">
              <button id="go" name="submit" class="btn primary">Sign in</button>
            </form>
            <p id="hint" class="row">Forgot password?</p>
            <p id="away" class="row">Hidden row</p>
          </body>
        </html>
        """,
        boxes={"away": Rect(left=0, top=-40, width=100, height=20)},
    )
