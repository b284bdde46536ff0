"""Utility helpers for WebViewQuery."""

from .logger import LogLevel, WebViewQueryLogger, configure_logging, get_logger, request_scope
from .text import js_trim, normalise_spaces, rendered_text

__all__ = [
    "LogLevel",
    "WebViewQueryLogger",
    "configure_logging",
    "get_logger",
    "request_scope",
    "js_trim",
    "normalise_spaces",
    "rendered_text",
]
