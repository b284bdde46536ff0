"""Tests for the category-aware logger."""

import structlog

from webview_query.utils import LogLevel, WebViewQueryLogger, configure_logging, get_logger, request_scope


class RecordingLogger:
    def __init__(self, bindings=None):
        self.bindings = bindings or {}
        self.calls = []

    def _record(self, level):
        def method(message, **kwargs):
            self.calls.append((level, message, kwargs))
        return method

    def __getattr__(self, name):
        if name in ("error", "warning", "info", "debug"):
            return self._record(name)
        raise AttributeError(name)

    def bind(self, **bindings):
        child = RecordingLogger({**self.bindings, **bindings})
        child.calls = self.calls
        return child


def test_verbosity_gates_levels():
    backend = RecordingLogger()
    logger = WebViewQueryLogger(backend, verbose=1)
    logger.error("engine:request", "boom")
    logger.warn("engine:request", "careful")
    logger.info("engine:request", "hidden")
    logger.debug("engine:request", "hidden too")
    assert [(level, message) for level, message, _ in backend.calls] == [("error", "boom"), ("warning", "careful")]


def test_category_and_auxiliary_fields():
    backend = RecordingLogger()
    WebViewQueryLogger(backend, verbose=3).debug("strategy:fault", "Skipping", reason="detached")
    (_, _, fields) = backend.calls[0]
    assert fields == {"category": "strategy:fault", "reason": "detached"}


def test_child_keeps_verbosity_and_binds():
    backend = RecordingLogger()
    child = WebViewQueryLogger(backend, verbose=LogLevel.INFO).child(component="host")
    child.info("host:replay", "Replayed actions")
    assert child.verbose == LogLevel.INFO
    assert child.logger.bindings == {"component": "host"}
    assert len(backend.calls) == 1


def test_configure_and_get_logger():
    configure_logging(verbose=3)
    logger = get_logger(verbose=2, component="engine")
    assert isinstance(logger, WebViewQueryLogger)
    logger.info("engine:request", "configured")


def test_request_scope_binds_for_one_request():
    with request_scope(entry_point="byId", strategy="id"):
        assert structlog.contextvars.get_contextvars() == {"entry_point": "byId", "strategy": "id"}
    assert "entry_point" not in structlog.contextvars.get_contextvars()


def test_configure_with_explicit_renderer():
    configure_logging(verbose=9, renderer="json")
    assert get_logger(verbose=1).enabled(LogLevel.WARN)
