"""Action document validation utilities.

`Action.read` accepts anything non-empty; these helpers report what a
strict reader would have complained about, for editors and load logs.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from serialactions.codec.hexbytes import is_hex_pair, iter_hex_pairs
from serialactions.models.action import DEFAULT_TIMER_INTERVAL_MS
from serialactions.models.timer import TimerMode


class ActionDocument(BaseModel):
    """Strict schema of a persisted action document."""

    icon: str = ""
    title: str = ""
    tx_data: str = Field(default="", alias="txData")
    eol: str = ""
    binary: bool = False
    timer_interval_ms: int = Field(default=DEFAULT_TIMER_INTERVAL_MS, ge=1, alias="timerIntervalMs")
    timer_mode: TimerMode = Field(default=TimerMode.OFF, alias="timerMode", strict=False)
    auto_execute_on_connect: bool = Field(default=False, alias="autoExecuteOnConnect")

    model_config = {"extra": "forbid", "strict": True}


def validate_action_document(document: Any) -> list[str]:
    """Validate a persisted action document.

    Returns a list of error strings. Empty list means valid.
    """
    errors: list[str] = []

    if not isinstance(document, Mapping):
        errors.append(f"Action document must be an object, got {type(document).__name__}")
        return errors

    if not document:
        errors.append("Action document is empty")
        return errors

    try:
        parsed = ActionDocument.model_validate(dict(document))
    except ValidationError as e:
        for err in e.errors():
            loc = ".".join(str(x) for x in err["loc"])
            errors.append(f"{loc}: {err['msg']}")
        return errors

    # binary payloads must be clean hex
    if parsed.binary:
        for pair in iter_hex_pairs(parsed.tx_data):
            if not is_hex_pair(pair):
                errors.append(f"txData: malformed hex pair {pair!r}")

    return errors
