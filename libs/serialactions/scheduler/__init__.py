from serialactions.scheduler.runner import ActionScheduler
from serialactions.scheduler.state import (
    ConnectPlan,
    SchedulerState,
    TimerCommand,
    TriggerDecision,
)

__all__ = [
    "ActionScheduler",
    "ConnectPlan",
    "SchedulerState",
    "TimerCommand",
    "TriggerDecision",
]
