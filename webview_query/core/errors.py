"""Custom exception hierarchy for WebViewQuery."""

from typing import Optional, Any, Dict


class WebViewQueryError(Exception):
    """Base exception for all WebViewQuery errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def error_code(self) -> Optional[str]:
        return self.details.get("error_code")


class InvalidQueryError(WebViewQueryError):
    """Raised when a query cannot be built from the caller's input."""

    def __init__(self, strategy: str, pattern: Any, reason: str):
        super().__init__(
            f"Invalid {strategy} query {pattern!r}: {reason}",
            {"strategy": strategy, "pattern": pattern, "reason": reason, "error_code": "INVALID_QUERY"}
        )


class UnknownEntryPointError(WebViewQueryError):
    """Raised when the bridge is asked for a function it does not export."""

    def __init__(self, name: str):
        super().__init__(
            f"Unknown entry point: {name}",
            {"entry_point": name, "error_code": "UNKNOWN_ENTRY_POINT"}
        )


class HostFaultError(WebViewQueryError):
    """
    Raised by a host document when a single node cannot be read.

    Strategies skip the node and keep walking; this never ends a request.
    """

    def __init__(self, node: str, reason: str):
        super().__init__(
            f"Host fault on {node}: {reason}",
            {"node": node, "reason": reason, "error_code": "HOST_FAULT"}
        )


class SnapshotError(WebViewQueryError):
    """Raised when a live page cannot be captured into a document."""

    def __init__(self, reason: str):
        super().__init__(
            f"Snapshot failed: {reason}",
            {"reason": reason, "error_code": "SNAPSHOT_FAILED"}
        )


class MalformedRecordError(WebViewQueryError):
    """Raised when a bridge message is not an element record."""

    def __init__(self, message: str, reason: str):
        super().__init__(
            f"Malformed record: {reason}",
            {"record": message, "reason": reason, "error_code": "MALFORMED_RECORD"}
        )


class ConfigurationError(WebViewQueryError):
    """Raised when configuration is invalid."""

    def __init__(self, reason: str):
        super().__init__(
            f"Invalid configuration: {reason}",
            {"reason": reason, "error_code": "CONFIGURATION_ERROR"}
        )
