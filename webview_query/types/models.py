"""Core type definitions for WebViewQuery."""

from typing import Optional, List, Tuple, Any, Literal
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from enum import Enum

from cssselect import GenericTranslator, SelectorError
from lxml import etree

from ..core.errors import InvalidQueryError


class Strategy(str, Enum):
    """Supported element-location strategies."""
    ID = "id"
    PATH = "path"
    SELECTOR = "selector"
    NAME = "name"
    CLASS = "class"
    TEXT = "text"
    TAG = "tag"


class Action(str, Enum):
    """What a strategy does with its matches."""
    REPORT = "report"
    INTERACT = "interact"


def validate_pattern(strategy: Strategy, pattern: str) -> str:
    """
    Check that a pattern is usable for its strategy.

    Args:
        strategy: Location strategy
        pattern: Raw locator string

    Returns:
        The pattern, unchanged

    Raises:
        InvalidQueryError: If the pattern cannot be evaluated
    """
    if strategy is Strategy.PATH:
        try:
            etree.XPath(pattern)
        except etree.XPathSyntaxError as e:
            raise InvalidQueryError(strategy.value, pattern, str(e)) from e
    elif strategy is Strategy.SELECTOR:
        try:
            GenericTranslator().css_to_xpath(pattern)
        except SelectorError as e:
            raise InvalidQueryError(strategy.value, pattern, str(e)) from e
    elif strategy is Strategy.TAG and not pattern.strip():
        raise InvalidQueryError(strategy.value, pattern, "tag name is empty")
    return pattern


class Query(BaseModel):
    """A single locate request: strategy tag, pattern and action."""
    model_config = ConfigDict(frozen=True)

    strategy: Strategy
    pattern: str
    action: Action = Action.REPORT

    @model_validator(mode="after")
    def _check_pattern(self) -> 'Query':
        validate_pattern(self.strategy, self.pattern)
        return self

    @classmethod
    def build(cls, strategy: Any, pattern: Any, action: Any = Action.REPORT) -> 'Query':
        """
        Build a query from loosely typed input, raising InvalidQueryError on any problem.

        Args:
            strategy: Strategy or its string value
            pattern: Locator string
            action: Action or its string value

        Returns:
            Validated Query
        """
        try:
            return cls(strategy=strategy, pattern=pattern, action=action)
        except ValidationError as e:
            raise InvalidQueryError(str(getattr(strategy, "value", strategy)), pattern, e.errors()[0]["msg"]) from e

    @property
    def interact(self) -> bool:
        return self.action is Action.INTERACT


class SetTextQuery(BaseModel):
    """A request to overwrite the value of the located node(s)."""
    model_config = ConfigDict(frozen=True)

    strategy: Strategy
    pattern: str
    text: str

    @model_validator(mode="after")
    def _check_pattern(self) -> 'SetTextQuery':
        validate_pattern(self.strategy, self.pattern)
        return self

    @classmethod
    def build(cls, strategy: Any, pattern: Any, text: Any) -> 'SetTextQuery':
        """Build a set-text query, raising InvalidQueryError on any problem."""
        try:
            return cls(strategy=strategy, pattern=pattern, text=text)
        except ValidationError as e:
            raise InvalidQueryError(str(getattr(strategy, "value", strategy)), pattern, e.errors()[0]["msg"]) from e


class Rect(BaseModel):
    """Rendered bounding box in CSS pixels, relative to the viewport."""
    model_config = ConfigDict(frozen=True)

    left: float = 0
    top: float = 0
    width: float = 0
    height: float = 0


class ElementRecord(BaseModel):
    """What the native driver learns about one located node."""
    id: Optional[str] = None
    text: Optional[str] = None
    name: Optional[str] = None
    class_name: Optional[str] = None
    tag_name: Optional[str] = None
    left: float = 0
    top: float = 0
    width: float = 0
    height: float = 0
    # None for text-node records; a possibly empty list for element records
    attributes: Optional[List[Tuple[str, str]]] = None

    @property
    def rect(self) -> Rect:
        return Rect(left=self.left, top=self.top, width=self.width, height=self.height)

    @property
    def is_text_record(self) -> bool:
        return self.attributes is None


class KeyboardModifiers(BaseModel):
    """Keyboard modifier keys state."""
    alt: bool = False
    ctrl: bool = False
    meta: bool = False
    shift: bool = False


class ClickEvent(BaseModel):
    """One synthesized primary-button press dispatched on a node."""
    type: Literal["click"] = "click"
    target: str
    button: int = 0
    detail: int = 1
    bubbles: bool = True
    cancelable: bool = True
    modifiers: KeyboardModifiers = Field(default_factory=KeyboardModifiers)


class ValueChange(BaseModel):
    """One write of a node's value property."""
    target: str
    value: str
