"""Escape and unescape line transforms.

Lines are escaped the way a Java string literal is written: control
characters get short escapes where one exists, quotes and backslashes
are backslash-escaped, and everything outside printable ASCII becomes
``\\uXXXX`` with upper-case hex, using UTF-16 surrogate pairs above the
basic multilingual plane. Unescaping is the exact inverse and also
accepts single quotes, octal escapes, and repeated ``u`` markers.
"""

from __future__ import annotations

import re

_SHORT_ESCAPES = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
    '"': '\\"',
    "\\": "\\\\",
}
_SHORT_UNESCAPES = {
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "f": "\f",
    "r": "\r",
    '"': '"',
    "'": "'",
    "\\": "\\",
}
_ESCAPE_PATTERN = re.compile(r'[^\x20-\x7f]|["\\]')
_UNESCAPE_PATTERN = re.compile(r"""\\(u+[0-9A-Fa-f]{4}|[0-3][0-7]{2}|[0-7]{1,2}|[btnfr"'\\])""")
_SURROGATE_PAIR_PATTERN = re.compile("[\ud800-\udbff][\udc00-\udfff]")
_BMP_LIMIT = 0xFFFF


def escape_text(text: str) -> str:
    """Escape special and non-ASCII characters into printable form.

    Args:
        text: Raw text.

    Returns:
        Text containing only printable ASCII.
    """
    return _ESCAPE_PATTERN.sub(_escape_match, text)


def unescape_text(text: str) -> str:
    """Decode escapes produced by ``escape_text``.

    Unknown escapes, malformed ``\\u`` sequences, and a trailing backslash
    are kept as written.

    Args:
        text: Escaped text.

    Returns:
        Unescaped text with surrogate pairs joined into code points.
    """
    unescaped = _UNESCAPE_PATTERN.sub(_unescape_match, text)
    return _SURROGATE_PAIR_PATTERN.sub(_join_surrogate_pair, unescaped)


def escape_line(line_number: int, text: str) -> str:
    """Line transform form of ``escape_text``."""
    return escape_text(text)


def unescape_line(line_number: int, text: str) -> str:
    """Line transform form of ``unescape_text``."""
    return unescape_text(text)


def _escape_match(match: re.Match[str]) -> str:
    char = match.group()
    short_escape = _SHORT_ESCAPES.get(char)
    if short_escape is not None:
        return short_escape
    code_point = ord(char)
    if code_point > _BMP_LIMIT:
        high, low = divmod(code_point - 0x10000, 0x400)
        return f"\\u{0xD800 + high:04X}\\u{0xDC00 + low:04X}"
    return f"\\u{code_point:04X}"


def _unescape_match(match: re.Match[str]) -> str:
    body = match.group(1)
    if body[0] == "u":
        return chr(int(body[-4:], 16))
    if body[0].isdigit():
        return chr(int(body, 8))
    return _SHORT_UNESCAPES[body]


def _join_surrogate_pair(match: re.Match[str]) -> str:
    high, low = match.group()
    return chr(0x10000 + ((ord(high) - 0xD800) << 10) + (ord(low) - 0xDC00))
