"""Tests for the location strategies."""

import pytest

from webview_query.core import HostFaultError, InvalidQueryError
from webview_query.dom import ElementNode, Locator, TextNode
from webview_query.types import SetTextQuery, Strategy

from conftest import make_document

PAGE = """
<html>
  <head><title>Inbox</title></head>
  <body>
    <div id="list">
      <span class="row" name="first">Alpha</span>
      <span class=" row ">Beta</span>
      <span class="row">  Gamma  </span>
      <span name="  ">blank name</span>
      <SPAN class="">no class</SPAN>
    </div>
    <a id="more" href="/more">More <b>items</b></a>
  </body>
</html>
"""


@pytest.fixture
def locator():
    return Locator(make_document(PAGE))


def ids(nodes):
    return [n.id for n in nodes]


class TestById:
    def test_direct_lookup(self, locator):
        assert ids(locator.by_id("more")) == ["more"]

    def test_miss_yields_nothing(self, locator):
        assert list(locator.by_id("nope")) == []

    def test_fallback_scan_runs_only_when_direct_lookup_misses(self, locator, monkeypatch):
        monkeypatch.setattr(locator.document, "get_element_by_id", lambda element_id: None)
        assert ids(locator.by_id("list")) == ["list"]

    def test_fallback_scan_skips_faulty_nodes(self, locator, monkeypatch):
        document = locator.document
        real_iter = document.iter_elements

        class Detached(ElementNode):
            @property
            def id(self):
                raise HostFaultError(self.key, "detached")

        def iter_with_fault():
            for i, node in enumerate(real_iter()):
                if i == 0:
                    yield Detached(document, node.element)
                else:
                    yield node

        monkeypatch.setattr(document, "get_element_by_id", lambda element_id: None)
        monkeypatch.setattr(document, "iter_elements", iter_with_fault)
        assert ids(locator.by_id("more")) == ["more"]


class TestByPath:
    def test_elements_in_result_order(self, locator):
        nodes = list(locator.by_path("//span"))
        assert [n.element.text.strip() for n in nodes] == ["Alpha", "Beta", "Gamma", "blank name", "no class"]

    def test_text_results_become_text_nodes(self, locator):
        nodes = list(locator.by_path("//a[@id='more']/text()"))
        assert len(nodes) == 1
        assert isinstance(nodes[0], TextNode)
        assert nodes[0].text == "More "
        assert nodes[0].container.id == "more"

    def test_tail_text_is_addressed_by_its_container(self, locator):
        nodes = list(locator.by_path("//a[@id='more']/b/following-sibling::text()"))
        assert nodes == []
        nodes = list(locator.by_path("//div[@id='list']/following-sibling::text()"))
        assert nodes and all(n.container.tag_name == "BODY" for n in nodes)

    def test_relative_paths_start_at_the_root_element(self, locator):
        # the <html> element is the context node, not the document
        assert ids(locator.by_path("body/a")) == ["more"]
        assert list(locator.by_path("html/body/a")) == []
        assert ids(locator.by_path("/html/body/a")) == ["more"]

    def test_non_node_results_are_skipped(self, locator):
        assert list(locator.by_path("count(//span)")) == []
        assert list(locator.by_path("//a/@href")) == []

    def test_evaluation_error_is_typed(self, locator):
        with pytest.raises(InvalidQueryError):
            list(locator.by_path("//span[unknown-function()]"))


class TestBySelector:
    def test_matches_in_document_order(self, locator):
        nodes = list(locator.by_selector("#list > span"))
        assert len(nodes) == 5

    def test_class_selector(self, locator):
        nodes = list(locator.by_selector("span.row"))
        assert [n.element.text.strip() for n in nodes] == ["Alpha", "Beta", "Gamma"]


class TestByName:
    def test_exact_match(self, locator):
        nodes = list(locator.by_name("first"))
        assert [n.element.text for n in nodes] == ["Alpha"]

    def test_blank_name_never_matches(self, locator):
        assert list(locator.by_name("  ")) == []


class TestByClass:
    def test_exact_class_string(self, locator):
        nodes = list(locator.by_class("row"))
        assert [n.element.text.strip() for n in nodes] == ["Alpha", "Gamma"]

    def test_padded_class_string_needs_exact_pattern(self, locator):
        nodes = list(locator.by_class(" row "))
        assert [n.element.text for n in nodes] == ["Beta"]

    def test_empty_class_never_matches(self, locator):
        assert list(locator.by_class("")) == []


class TestByText:
    def test_trimmed_match(self, locator):
        nodes = list(locator.by_text("Gamma"))
        assert len(nodes) == 1
        assert nodes[0].text == "  Gamma  "

    def test_pattern_is_trimmed_too(self, locator):
        assert len(list(locator.by_text("  Alpha\n"))) == 1

    def test_partial_text_does_not_match(self, locator):
        assert list(locator.by_text("Gam")) == []

    def test_title_is_outside_body(self, locator):
        assert list(locator.by_text("Inbox")) == []


class TestByTag:
    def test_case_insensitive(self, locator):
        assert len(list(locator.by_tag("SPAN"))) == 5
        assert len(list(locator.by_tag("span"))) == 5

    def test_searches_whole_document(self, locator):
        assert len(list(locator.by_tag("title"))) == 1


class TestEnumerations:
    def test_all_elements_includes_head(self, locator):
        tags = [n.tag_name for n in locator.all_elements()]
        assert tags[:3] == ["HTML", "HEAD", "TITLE"]
        assert len(tags) == len(set(n.key for n in locator.all_elements()))

    def test_all_texts_skips_blank_text(self, locator):
        texts = [n.text.strip() for n in locator.all_texts()]
        assert texts == ["Alpha", "Beta", "Gamma", "blank name", "no class", "More", "items"]


class TestSetTextTargets:
    def test_by_tag_targets_first_only(self, locator):
        targets = locator.set_text_targets(SetTextQuery(strategy=Strategy.TAG, pattern="span", text="x"))
        assert [t.element.text for t in targets] == ["Alpha"]

    def test_by_tag_without_match_is_empty(self, locator):
        assert locator.set_text_targets(SetTextQuery(strategy=Strategy.TAG, pattern="table", text="x")) == []

    def test_by_class_targets_every_match(self, locator):
        targets = locator.set_text_targets(SetTextQuery(strategy=Strategy.CLASS, pattern="row", text="x"))
        assert len(targets) == 2

    def test_by_text_compares_raw_text(self, locator):
        raw = locator.set_text_targets(SetTextQuery(strategy=Strategy.TEXT, pattern="  Gamma  ", text="x"))
        trimmed = locator.set_text_targets(SetTextQuery(strategy=Strategy.TEXT, pattern="Gamma", text="x"))
        assert len(raw) == 1
        assert trimmed == []
