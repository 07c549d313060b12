"""Action model — a named command transmitted to a connected device.

An action carries a payload (hex or escaped text), an optional end-of-line
suffix, and a declared timer policy. The scheduler reads the timer fields;
the transport sends whatever `tx_byte_array()` returns.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from serialactions.codec.document import as_bool, as_int, as_str, safe_read, simplified
from serialactions.codec.escapes import encode_text, resolve_escape_sequences
from serialactions.codec.hexbytes import hex_to_bytes
from serialactions.models.timer import TimerMode, decode_timer_mode

DEFAULT_ICON = "Play Property"
DEFAULT_TIMER_INTERVAL_MS = 100


class Action(BaseModel):
    """A user-defined command for a device.

    Fields use snake_case in Python and the project-file keys as aliases
    (`txData`, `eol`, `binary`, ...). `action_id` is the position of the
    action in its project and is never persisted.

    Usage:
        action = Action(0)
        action.tx_data = "AT\\r"
        action.eol_sequence = "\\n"
        link.send(action.tx_byte_array())
    """

    action_id: int = Field(default=0, frozen=True, exclude=True)
    binary_data: bool = Field(default=False, alias="binary")
    icon: str = DEFAULT_ICON
    title: str = ""
    tx_data: str = Field(default="", alias="txData")
    eol_sequence: str = Field(default="", alias="eol")
    timer_interval_ms: int = Field(default=DEFAULT_TIMER_INTERVAL_MS, alias="timerIntervalMs")
    timer_mode: TimerMode = Field(default=TimerMode.OFF, alias="timerMode")
    auto_execute_on_connect: bool = Field(default=False, alias="autoExecuteOnConnect")

    model_config = {"populate_by_name": True, "validate_assignment": True}

    def __init__(self, action_id: int = 0, **data: Any) -> None:
        super().__init__(action_id=action_id, **data)

    @field_validator("icon", "title")
    @classmethod
    def simplify_whitespace(cls, value: str) -> str:
        return simplified(value)

    def tx_byte_array(self) -> bytes:
        """Build the exact bytes to transmit for this action.

        Binary actions decode `tx_data` as hex (malformed pairs are dropped);
        text actions resolve escapes and encode as UTF-8. A non-empty EOL is
        always treated as escaped text and appended.
        """
        if self.binary_data:
            data = hex_to_bytes(self.tx_data)
        else:
            data = encode_text(resolve_escape_sequences(self.tx_data))

        if self.eol_sequence:
            data += encode_text(resolve_escape_sequences(self.eol_sequence))

        return data

    def serialize(self) -> dict[str, Any]:
        """Return the persisted form of this action (JSON-safe, no id)."""
        return self.model_dump(mode="json", by_alias=True)

    def read(self, document: Mapping[str, Any]) -> bool:
        """Load fields from a persisted document, filling gaps with defaults.

        Returns False for an empty (or non-mapping) document and leaves the
        action untouched. Any non-empty document is accepted: missing keys
        take their defaults and mistyped values are coerced.
        """
        if not isinstance(document, Mapping) or not document:
            return False

        self.eol_sequence = as_str(safe_read(document, "eol", ""))
        self.tx_data = as_str(safe_read(document, "txData", ""))
        self.binary_data = as_bool(safe_read(document, "binary", False))
        self.timer_interval_ms = as_int(
            safe_read(document, "timerIntervalMs", DEFAULT_TIMER_INTERVAL_MS)
        )
        self.icon = as_str(safe_read(document, "icon", ""))
        self.title = as_str(safe_read(document, "title", ""))
        self.auto_execute_on_connect = as_bool(
            safe_read(document, "autoExecuteOnConnect", False)
        )
        self.timer_mode = decode_timer_mode(
            as_int(safe_read(document, "timerMode", int(TimerMode.OFF)))
        )
        return True
