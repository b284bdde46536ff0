"""
WebViewQuery - in-page element location for web view test automation.

WebViewQuery locates elements in a web view document by id, XPath, CSS
selector, name, class, text or tag and reports them to a native test driver
as flat delimited messages over a one-way bridge.
"""

__version__ = "0.1.0"

from .core import (
    QueryEngine,
    Reporter,
    EngineConfig,
    WebViewQueryError,
    InvalidQueryError,
    UnknownEntryPointError,
    HostFaultError,
    SnapshotError,
    MalformedRecordError,
    ConfigurationError,
)

from .types import (
    Action,
    ClickEvent,
    ElementRecord,
    Query,
    Rect,
    SetTextQuery,
    Strategy,
    ValueChange,
)

from .dom import HostDocument, HtmlDocument, VisibilityPolicy, is_visible
from .protocol import CallbackSink, ListSink, Sink, parse_record, serialize_record

__all__ = [
    # Version
    "__version__",
    # Main classes
    "QueryEngine",
    "Reporter",
    "EngineConfig",
    "HostDocument",
    "HtmlDocument",
    "VisibilityPolicy",
    "is_visible",
    # Protocol
    "CallbackSink",
    "ListSink",
    "Sink",
    "parse_record",
    "serialize_record",
    # Common types
    "Action",
    "ClickEvent",
    "ElementRecord",
    "Query",
    "Rect",
    "SetTextQuery",
    "Strategy",
    "ValueChange",
    # Common errors
    "WebViewQueryError",
    "InvalidQueryError",
    "UnknownEntryPointError",
    "HostFaultError",
    "SnapshotError",
    "MalformedRecordError",
    "ConfigurationError",
]
