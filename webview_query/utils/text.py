"""Text helpers shared by the document model and the reporter."""

import re

# space, tab, LF, CR, FF: the ASCII whitespace HTML collapses
_WHITESPACE_RUN = re.compile(r"[ \t\n\r\f]+")

# WhiteSpace and LineTerminator code points removed by String.prototype.trim().
# str.strip() would also drop \x1c-\x1f and \x85, which trim() keeps.
_JS_WHITESPACE = (
    "\t\n\x0b\x0c\r \xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def js_trim(s: str) -> str:
    """
    Trim a string the way the host's String.prototype.trim() does.

    Args:
        s: Input string

    Returns:
        String without leading/trailing whitespace
    """
    return s.strip(_JS_WHITESPACE)


def normalise_spaces(s: str) -> str:
    """
    Collapse consecutive whitespace characters into single spaces.

    Args:
        s: Input string

    Returns:
        String with normalized whitespace
    """
    if not s:
        return ""
    return _WHITESPACE_RUN.sub(" ", s)


def rendered_text(text: str) -> str:
    """
    Approximate innerText for a static tree: drop NULs, collapse whitespace, trim.

    Args:
        text: Raw text content

    Returns:
        Text as a reader would see it
    """
    if not text:
        return ""
    return js_trim(normalise_spaces(text.replace("\0", "")))
