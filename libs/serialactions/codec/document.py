"""Get-or-default access over JSON-like documents.

Values read from a persisted document are coerced to the expected leaf type
instead of being validated, so a hand-edited project file degrades to
sensible values rather than failing to load.
"""

import math
from collections.abc import Mapping
from typing import Any


def safe_read(document: Mapping[str, Any], key: str, default: Any) -> Any:
    """Return `document[key]` if the key exists, else `default`.

    Presence is about the key only: an explicit `None` value is returned
    as-is and does not fall back to the default.
    """
    if key in document:
        return document[key]
    return default


def as_str(value: Any) -> str:
    if isinstance(value, str):
        return clean_text(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    return ""


def clean_text(text: str) -> str:
    """Join surrogate pairs and replace lone surrogates with U+FFFD.

    `json.loads` yields lone surrogates for escapes like `"\\ud800"`.
    """
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value != "" and value.lower() not in ("0", "false")
    return False


def as_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        # Half away from zero, not banker's rounding
        return int(math.copysign(math.floor(abs(value) + 0.5), value))
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            return 0
    return 0


def simplified(text: str) -> str:
    """Trim the ends and collapse internal whitespace runs to one space.

    `"  Hello   World  "` → `"Hello World"`
    """
    return " ".join(text.split())
