"""Backslash escape resolution for text payloads.

Users type payloads such as `AT+RST\\r\\n` in a single-line editor, so the
escapes are stored literally and resolved right before transmission.
"""

import re

from serialactions.codec.document import clean_text

_SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}

_ESCAPE_RE = re.compile(
    r"\\(x[0-9A-Fa-f]{1,2}|u[0-9A-Fa-f]{4}|[0-7]{1,3}|.)",
    re.DOTALL,
)


def _replace(match: re.Match[str]) -> str:
    token = match.group(1)
    head = token[0]
    if head == "x" and len(token) > 1:
        return chr(int(token[1:], 16))
    if head == "u" and len(token) == 5:
        return chr(int(token[1:], 16))
    if head in "01234567":
        return chr(int(token, 8))
    if token in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[token]
    # Unknown escape: keep it literally
    return match.group(0)


def resolve_escape_sequences(text: str) -> str:
    """Replace backslash escapes in `text` with the characters they denote.

    Supports `\\n \\r \\t \\\\ \\" \\' \\a \\b \\f \\v`, octal (`\\0`, `\\101`),
    `\\xHH` and `\\uHHHH`. Unknown escapes and a trailing lone backslash are
    left untouched. Never raises.
    """
    if "\\" not in text:
        return text
    return _ESCAPE_RE.sub(_replace, text)


def encode_text(text: str) -> bytes:
    """Encode text as UTF-8 for transmission. Never raises.

    Surrogate pairs written as two `\\uHHHH` escapes are joined into one
    character; a lone surrogate becomes U+FFFD.
    """
    return clean_text(text).encode("utf-8", "replace")
