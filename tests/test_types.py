"""Tests for query validation."""

import pytest
from pydantic import ValidationError

from webview_query.core import InvalidQueryError
from webview_query.types import Action, ClickEvent, Query, SetTextQuery, Strategy


class TestQuery:
    def test_build_from_strings(self):
        query = Query.build("class", "row", "interact")
        assert query.strategy is Strategy.CLASS
        assert query.interact

    def test_defaults_to_report(self):
        assert Query(strategy=Strategy.ID, pattern="x").action is Action.REPORT

    def test_is_frozen(self):
        query = Query(strategy=Strategy.ID, pattern="x")
        with pytest.raises(ValidationError):
            query.pattern = "y"

    @pytest.mark.parametrize("strategy, pattern", [
        ("path", "//div[@id="),
        ("selector", "div["),
        ("tag", "   "),
    ])
    def test_unusable_pattern(self, strategy, pattern):
        with pytest.raises(InvalidQueryError) as exc:
            Query.build(strategy, pattern)
        assert exc.value.details["strategy"] == strategy

    def test_unknown_strategy(self):
        with pytest.raises(InvalidQueryError) as exc:
            Query.build("nearest", "x")
        assert exc.value.details["strategy"] == "nearest"

    def test_missing_pattern(self):
        with pytest.raises(InvalidQueryError):
            Query.build(Strategy.ID, None)

    def test_direct_construction_raises_typed_error(self):
        with pytest.raises(InvalidQueryError):
            Query(strategy=Strategy.SELECTOR, pattern="[")

    def test_free_text_patterns_are_accepted(self):
        for strategy in ("id", "name", "class", "text"):
            assert Query.build(strategy, "").pattern == ""


class TestSetTextQuery:
    def test_build(self):
        query = SetTextQuery.build("name", "q", "hello")
        assert query.strategy is Strategy.NAME
        assert query.text == "hello"

    def test_missing_text(self):
        with pytest.raises(InvalidQueryError):
            SetTextQuery.build("name", "q", None)


def test_click_event_defaults():
    event = ClickEvent(target="/html/body/button")
    assert event.type == "click"
    assert (event.button, event.detail) == (0, 1)
    assert event.bubbles and event.cancelable
    assert not event.modifiers.shift
