"""Timer bookkeeping for the action scheduler.

Pure, synchronous rules: given a link event or a manual trigger, decide what
to transmit and which timers to start or stop. The asyncio runner executes
the decisions.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from serialactions.models.action import Action
from serialactions.models.timer import TimerMode


class TimerCommand(StrEnum):
    """What a trigger does to the action's repeating timer."""

    NONE = "none"
    START = "start"
    STOP = "stop"


@dataclass(frozen=True)
class TriggerDecision:
    """Outcome of a manual trigger."""

    transmit: bool
    timer: TimerCommand = TimerCommand.NONE


@dataclass
class ConnectPlan:
    """Work to do right after the device connects."""

    execute_once: list[Action] = field(default_factory=list)
    start_timers: list[Action] = field(default_factory=list)


@dataclass
class SchedulerState:
    """Tracks link connectivity and which actions have a running timer."""

    connected: bool = False
    _running: set[int] = field(default_factory=set)

    def is_running(self, action_id: int) -> bool:
        return action_id in self._running

    def running_ids(self) -> list[int]:
        return sorted(self._running)

    def mark_started(self, action_id: int) -> None:
        self._running.add(action_id)

    def mark_stopped(self, action_id: int) -> None:
        self._running.discard(action_id)

    # --- Link events ---

    def on_connect(self, actions: Iterable[Action]) -> ConnectPlan:
        """Device connected: one-shot auto-executes and AUTO_START timers."""
        self.connected = True
        plan = ConnectPlan()
        for action in actions:
            if action.auto_execute_on_connect:
                plan.execute_once.append(action)
            if action.timer_mode == TimerMode.AUTO_START and not self.is_running(action.action_id):
                plan.start_timers.append(action)
        return plan

    def on_disconnect(self) -> list[int]:
        """Device dropped: every timer stops. Returns the ids that were running."""
        self.connected = False
        stopped = self.running_ids()
        self._running.clear()
        return stopped

    # --- Manual trigger ---

    def on_trigger(self, action: Action) -> TriggerDecision:
        """Decide what a manual invocation of `action` does."""
        if not self.connected:
            return TriggerDecision(transmit=False)

        mode = action.timer_mode
        running = self.is_running(action.action_id)

        if mode == TimerMode.START_ON_TRIGGER and not running:
            return TriggerDecision(transmit=True, timer=TimerCommand.START)

        if mode == TimerMode.TOGGLE_ON_TRIGGER:
            if running:
                return TriggerDecision(transmit=False, timer=TimerCommand.STOP)
            return TriggerDecision(transmit=True, timer=TimerCommand.START)

        return TriggerDecision(transmit=True)
