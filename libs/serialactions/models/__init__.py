from serialactions.models.action import DEFAULT_ICON, DEFAULT_TIMER_INTERVAL_MS, Action
from serialactions.models.link import LinkStatus, TriggerRequest
from serialactions.models.timer import TimerMode, decode_timer_mode
from serialactions.models.topics import Topics, from_nats_subject, to_nats_subject

__all__ = [
    "Action",
    "DEFAULT_ICON",
    "DEFAULT_TIMER_INTERVAL_MS",
    "LinkStatus",
    "TimerMode",
    "Topics",
    "TriggerRequest",
    "decode_timer_mode",
    "from_nats_subject",
    "to_nats_subject",
]
