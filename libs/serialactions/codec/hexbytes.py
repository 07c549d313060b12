"""Best-effort hexadecimal decoding for binary payloads."""

import logging
import re

logger = logging.getLogger(__name__)

_SEPARATOR_RE = re.compile(r"[\s,:;\-]+")
_PAIR_RE = re.compile(r"[0-9A-Fa-f]{2}")


def iter_hex_pairs(text: str) -> list[str]:
    """Split `text` into two-character candidates.

    Separators and `0x` prefixes are removed first, so `"4 1"` pairs as
    `"41"`. A trailing unpaired nibble is returned on its own so callers can
    report it.
    """
    digits = "".join(
        token[2:] if token[:2] in ("0x", "0X") else token
        for token in _SEPARATOR_RE.split(text)
    )
    return [digits[i : i + 2] for i in range(0, len(digits), 2)]


def is_hex_pair(pair: str) -> bool:
    return _PAIR_RE.fullmatch(pair) is not None


def hex_to_bytes(text: str) -> bytes:
    """Decode hex digit pairs such as `"41 42"` or `"0x41:0x42"` into bytes.

    Whitespace and `, : ; -` are ignored before digits are paired. Pairs
    that are not valid hex (and an unpaired trailing nibble) are dropped
    rather than raising, so a half-typed payload still sends what it can.
    """
    out = bytearray()
    for pair in iter_hex_pairs(text):
        if is_hex_pair(pair):
            out.append(int(pair, 16))
        else:
            logger.debug("Dropping malformed hex pair %r", pair)
    return bytes(out)
