"""Visibility filter applied to every candidate before it is reported."""

from enum import Enum

from ..types import Rect


class VisibilityPolicy(str, Enum):
    """How strictly a box's left/top offsets are checked."""
    # left >= 0 and top >= 0
    INCLUSIVE = "inclusive"
    # left > 0 and top > 0
    STRICT = "strict"


def is_visible(rect: Rect, policy: VisibilityPolicy = VisibilityPolicy.INCLUSIVE) -> bool:
    """
    Decide whether a rendered box is worth reporting to the native driver.

    A box must have positive width and height and must not start above or
    left of the viewport. The native side turns these coordinates into touch
    targets, so anything zero-sized or off-screen-negative is dropped.

    Args:
        rect: Bounding box of the candidate
        policy: Offset check to apply

    Returns:
        True if the candidate should be reported
    """
    if not (rect.width > 0 and rect.height > 0):
        return False
    if policy is VisibilityPolicy.STRICT:
        return rect.left > 0 and rect.top > 0
    return rect.left >= 0 and rect.top >= 0
