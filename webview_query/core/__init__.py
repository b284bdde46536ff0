"""Core WebViewQuery components."""

# errors first: every other module imports from it
from .errors import (
    WebViewQueryError,
    InvalidQueryError,
    UnknownEntryPointError,
    HostFaultError,
    SnapshotError,
    MalformedRecordError,
    ConfigurationError,
)
from .config import EngineConfig
from .reporter import Reporter
from .engine import QueryEngine, LOCATE_ENTRY_POINTS, SET_TEXT_ENTRY_POINTS, action_from_flag

__all__ = [
    # Main classes
    "QueryEngine",
    "Reporter",
    "EngineConfig",
    "LOCATE_ENTRY_POINTS",
    "SET_TEXT_ENTRY_POINTS",
    "action_from_flag",
    # Errors
    "WebViewQueryError",
    "InvalidQueryError",
    "UnknownEntryPointError",
    "HostFaultError",
    "SnapshotError",
    "MalformedRecordError",
    "ConfigurationError",
]
