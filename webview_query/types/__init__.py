"""Type definitions for WebViewQuery."""

from .models import (
    Action,
    ClickEvent,
    ElementRecord,
    KeyboardModifiers,
    Query,
    Rect,
    SetTextQuery,
    Strategy,
    ValueChange,
    validate_pattern,
)

__all__ = [
    "Action",
    "ClickEvent",
    "ElementRecord",
    "KeyboardModifiers",
    "Query",
    "Rect",
    "SetTextQuery",
    "Strategy",
    "ValueChange",
    "validate_pattern",
]
