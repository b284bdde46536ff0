"""Tests for the Reporter."""

import pytest

from webview_query.core import Reporter
from webview_query.dom import HtmlDocument, TextNode, VisibilityPolicy
from webview_query.protocol import CallbackSink, ListSink, parse_record
from webview_query.types import Rect

from conftest import make_document


@pytest.fixture
def page():
    return make_document(
        """
        <body>
          <div id="card" class="card" name="main" data-x="1">
            Hello <em>world</em>
          </div>
          <textarea id="note">typed text</textarea>
          <div id="empty"></div>
          <p id="inline">Long paragraph with <span id="s">short</span> inline text</p>
        </body>
        """,
        boxes={
            "text:short": Rect(left=40, top=50, width=30, height=12),
            "text:Hello": None,
        },
    )


@pytest.fixture
def sink():
    return ListSink()


class TestReportElement:
    def test_record_fields(self, page, sink):
        reporter = Reporter(page, sink)
        assert reporter.report_element(page.get_element_by_id("card"))
        record = parse_record(sink.messages[0])
        assert record.text == "Hello world"
        assert record.name == "main"
        assert record.class_name == "card"
        assert record.tag_name == "DIV"
        assert record.attributes == [("id", "card"), ("class", "card"), ("name", "main"), ("data-x", "1")]

    def test_unset_name_serializes_as_null(self, page, sink):
        Reporter(page, sink).report_element(page.get_element_by_id("note"))
        fields = sink.messages[0].split(";,")
        assert fields[2] == "null"
        assert fields[3] == ""

    def test_blank_text_falls_back_to_value(self, page, sink):
        reporter = Reporter(page, sink)
        page.set_value(page.get_element_by_id("empty"), "typed")
        reporter.report_element(page.get_element_by_id("empty"))
        assert parse_record(sink.messages[0]).text == "typed"

    def test_blank_text_without_value_is_null(self, page, sink):
        Reporter(page, sink).report_element(page.get_element_by_id("empty"))
        assert sink.messages[0].split(";,")[1] == "null"

    def test_textarea_content(self, page, sink):
        Reporter(page, sink).report_element(page.get_element_by_id("note"))
        assert parse_record(sink.messages[0]).text == "typed text"

    def test_element_without_attributes_has_empty_list(self, sink):
        document = make_document("<body><section>x</section></body>")
        (section,) = document.elements_by_tag("section")
        Reporter(document, sink).report_element(section)
        assert sink.messages[0].endswith(";,")
        assert parse_record(sink.messages[0]).attributes == []

    def test_geometry_read_only_for_reported_nodes(self, sink):
        seen = []

        def layout(node):
            seen.append(node.key)
            return Rect(left=1, top=1, width=1, height=1)

        document = HtmlDocument.from_html('<body><i id="a">x</i><i id="b">y</i></body>', layout=layout)
        Reporter(document, sink).report_element(document.get_element_by_id("b"))
        assert seen == [document.get_element_by_id("b").key]


class TestReportTextNode:
    def _text(self, page, needle):
        return next(n for n in page.walk_texts() if n.text.strip() == needle)

    def test_uses_text_range_box_not_container(self, page, sink):
        reporter = Reporter(page, sink)
        assert reporter.report_text_node(self._text(page, "short"))
        record = parse_record(sink.messages[0])
        assert record.rect == Rect(left=40, top=50, width=30, height=12)
        assert record.id == "s"
        assert record.tag_name == "SPAN"
        assert record.attributes is None

    def test_tail_text_inherits_from_enclosing_element(self, page, sink):
        Reporter(page, sink).report_text_node(self._text(page, "inline text"))
        assert parse_record(sink.messages[0]).id == "inline"

    def test_blank_text_is_skipped(self, page, sink):
        blank = next(n for n in page.walk_texts() if not n.text.strip())
        assert not Reporter(page, sink).report_text_node(blank)
        assert sink.messages == []

    def test_hidden_text_is_skipped(self, page, sink):
        assert not Reporter(page, sink).report_text_node(self._text(page, "Hello"))
        assert sink.messages == []


class TestVisibilityAndSink:
    def test_strict_policy(self, sink):
        document = make_document('<body><b id="b">x</b></body>', boxes={"b": Rect(left=0, top=5, width=5, height=5)})
        assert Reporter(document, sink).report_element(document.get_element_by_id("b"))
        assert not Reporter(document, sink, visibility=VisibilityPolicy.STRICT).report_element(
            document.get_element_by_id("b")
        )

    def test_callback_sink_and_terminate(self, page):
        received = []
        reporter = Reporter(page, CallbackSink(received.append), tool_name="suite")
        reporter.report(page.get_element_by_id("card"))
        reporter.terminate()
        assert len(received) == 2
        assert received[-1] == "suite-finished"

    def test_report_dispatches_on_node_kind(self, page, sink):
        reporter = Reporter(page, sink)
        text = self._first_text(page)
        assert isinstance(text, TextNode)
        reporter.report(text)
        assert parse_record(sink.messages[0]).is_text_record

    @staticmethod
    def _first_text(page):
        return next(n for n in page.walk_texts() if n.text.strip() == "short")
