"""Timer modes — how an action's repeating timer starts and stops."""

import logging
from enum import IntEnum

logger = logging.getLogger(__name__)


class TimerMode(IntEnum):
    """Declared timer policy for an action. Persisted as its integer value.

    - OFF: the action never fires from a timer.
    - AUTO_START: the timer starts as soon as the device connects.
    - START_ON_TRIGGER: the timer starts on the first manual trigger.
    - TOGGLE_ON_TRIGGER: each manual trigger starts or stops the timer.
    """

    OFF = 0
    AUTO_START = 1
    START_ON_TRIGGER = 2
    TOGGLE_ON_TRIGGER = 3


def decode_timer_mode(raw: int) -> TimerMode:
    """Decode a stored integer into a TimerMode.

    Unknown values fail closed to OFF so a corrupt project file can never
    start a timer.
    """
    try:
        return TimerMode(raw)
    except ValueError:
        logger.warning("Unknown timer mode %r, falling back to OFF", raw)
        return TimerMode.OFF
