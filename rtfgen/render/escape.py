"""Text escaping for RTF output.

Every character below 127 is copied through except newline, tab, backslash
and the two braces. Everything else is written twice: once as a ``\\uN``
Unicode escape and once as a Windows-1252 ``\\'xx`` fallback for readers that
skip the Unicode form. Characters without a Windows-1252 byte fall back to a
plain ``?``.
"""

from __future__ import annotations

from typing import Dict, Iterator

FALLBACK_ENCODING = "cp1252"

_ASCII_ESCAPES: Dict[str, str] = {
    "\n": "\\par\n",
    "\t": "\\tab\n",
    "\\": "\\\\",
    "{": "\\{",
    "}": "\\}",
}


def fallback_byte(char: str) -> str:
    """Return the single-byte fallback for ``char``."""
    try:
        encoded = char.encode(FALLBACK_ENCODING)
    except UnicodeEncodeError:
        return "?"
    return "\\'%02x" % encoded[0]


def _utf16_units(char: str) -> Iterator[str]:
    code_point = ord(char)
    if code_point <= 0xFFFF:
        yield char
        return
    # Readers expect 16-bit \u values, so astral characters go out as surrogates.
    code_point -= 0x10000
    yield chr(0xD800 + (code_point >> 10))
    yield chr(0xDC00 + (code_point & 0x3FF))


def escape_char(char: str) -> str:
    """Escape a single character."""
    replacement = _ASCII_ESCAPES.get(char)
    if replacement is not None:
        return replacement
    if ord(char) < 127:
        return char
    return "".join(
        "\\u%d%s" % (ord(unit), fallback_byte(unit)) for unit in _utf16_units(char)
    )


def escape(text: str) -> str:
    """Convert ``text`` into an RTF-safe character stream."""
    if text is None:
        return ""
    return "".join(escape_char(char) for char in text)
