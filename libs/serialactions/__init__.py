"""Serial actions — user-defined device commands, payloads and timers."""

from serialactions.client.nats_client import DeviceLinkClient
from serialactions.client.transport import NatsTransport, Transport
from serialactions.codec.escapes import resolve_escape_sequences
from serialactions.codec.hexbytes import hex_to_bytes
from serialactions.helpers.factory import parse_actions, serialize_actions
from serialactions.helpers.validation import ActionDocument, validate_action_document
from serialactions.models.action import DEFAULT_ICON, DEFAULT_TIMER_INTERVAL_MS, Action
from serialactions.models.link import LinkStatus, TriggerRequest
from serialactions.models.timer import TimerMode, decode_timer_mode
from serialactions.models.topics import Topics, from_nats_subject, to_nats_subject
from serialactions.scheduler import (
    ActionScheduler,
    ConnectPlan,
    SchedulerState,
    TimerCommand,
    TriggerDecision,
)

__all__ = [
    # Client
    "DeviceLinkClient",
    "NatsTransport",
    "Transport",
    # Scheduler
    "ActionScheduler",
    "ConnectPlan",
    "SchedulerState",
    "TimerCommand",
    "TriggerDecision",
    # Models
    "Action",
    "DEFAULT_ICON",
    "DEFAULT_TIMER_INTERVAL_MS",
    "LinkStatus",
    "TimerMode",
    "Topics",
    "TriggerRequest",
    # Helpers
    "ActionDocument",
    "decode_timer_mode",
    "from_nats_subject",
    "hex_to_bytes",
    "parse_actions",
    "resolve_escape_sequences",
    "serialize_actions",
    "to_nats_subject",
    "validate_action_document",
]
