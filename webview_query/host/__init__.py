"""Live-page host: capture a Playwright page and replay actions into it."""

from .playwright_host import PlaywrightWebView, capture_document
from .scripts import REPLAY_SCRIPT, SNAPSHOT_SCRIPT
from .snapshot import SnapshotDocument, SnapshotNode, build_document

__all__ = [
    "PlaywrightWebView",
    "capture_document",
    "REPLAY_SCRIPT",
    "SNAPSHOT_SCRIPT",
    "SnapshotDocument",
    "SnapshotNode",
    "build_document",
]
