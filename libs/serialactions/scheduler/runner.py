"""ActionScheduler — runs action timers against a transport."""

import asyncio
import logging
from collections.abc import Iterable

from serialactions.client.transport import Transport
from serialactions.models.action import Action
from serialactions.scheduler.state import SchedulerState, TimerCommand

logger = logging.getLogger(__name__)

MIN_TIMER_INTERVAL_MS = 1


class ActionScheduler:
    """Executes actions and their timers on behalf of a connected device.

    Usage:
        scheduler = ActionScheduler(transport, parse_actions(project))
        await scheduler.connect()        # device came up
        await scheduler.trigger(2)       # button pressed
        await scheduler.disconnect()     # device went away
    """

    def __init__(self, transport: Transport, actions: Iterable[Action] = ()) -> None:
        self._transport = transport
        self._state = SchedulerState()
        self._actions: dict[int, Action] = {}
        self._timers: dict[int, asyncio.Task[None]] = {}
        self.set_actions(actions)

    @property
    def state(self) -> SchedulerState:
        """Expose state for testing."""
        return self._state

    @property
    def actions(self) -> list[Action]:
        return [self._actions[i] for i in sorted(self._actions)]

    def set_actions(self, actions: Iterable[Action]) -> None:
        """Replace the action set. Running timers keep their old action."""
        self._actions = {action.action_id: action for action in actions}

    def get_action(self, action_id: int) -> Action | None:
        return self._actions.get(action_id)

    def is_running(self, action_id: int) -> bool:
        return self._state.is_running(action_id)

    async def connect(self) -> None:
        """Handle a device connection: auto-execute, then start AUTO_START timers."""
        plan = self._state.on_connect(self.actions)
        for action in plan.execute_once:
            logger.info("Auto-executing action %d (%s)", action.action_id, action.title)
            await self._transmit(action)
        for action in plan.start_timers:
            self._start_timer(action)

    async def disconnect(self) -> None:
        """Handle a device disconnection: stop every timer."""
        for action_id in self._state.on_disconnect():
            await self._cancel_timer(action_id)
        logger.info("Device disconnected, all action timers stopped")

    async def trigger(self, action_id: int) -> bool:
        """Manually invoke an action. Returns False for an unknown id."""
        action = self._actions.get(action_id)
        if action is None:
            logger.warning("Trigger for unknown action %d ignored", action_id)
            return False

        if not self._state.connected:
            logger.debug("Trigger for action %d ignored while disconnected", action_id)
            return True

        decision = self._state.on_trigger(action)
        if decision.transmit:
            await self._transmit(action)
        if decision.timer == TimerCommand.START:
            self._start_timer(action)
        elif decision.timer == TimerCommand.STOP:
            await self._stop_timer(action_id)
        return True

    async def stop(self) -> None:
        """Cancel every timer without touching the link state."""
        for action_id in list(self._timers):
            await self._stop_timer(action_id)

    # --- Timers ---

    def _start_timer(self, action: Action) -> None:
        if action.timer_interval_ms < MIN_TIMER_INTERVAL_MS:
            logger.warning(
                "Action %d has invalid timer interval %d ms, timer not started",
                action.action_id,
                action.timer_interval_ms,
            )
            return

        self._state.mark_started(action.action_id)
        self._timers[action.action_id] = asyncio.create_task(self._timer_loop(action))
        logger.info(
            "Started timer for action %d (every %d ms)",
            action.action_id,
            action.timer_interval_ms,
        )

    async def _stop_timer(self, action_id: int) -> None:
        self._state.mark_stopped(action_id)
        await self._cancel_timer(action_id)
        logger.info("Stopped timer for action %d", action_id)

    async def _cancel_timer(self, action_id: int) -> None:
        task = self._timers.pop(action_id, None)
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _timer_loop(self, action: Action) -> None:
        """Transmit the action every `timer_interval_ms` until cancelled."""
        interval = action.timer_interval_ms / 1000
        while True:
            await asyncio.sleep(interval)
            await self._transmit(action)

    async def _transmit(self, action: Action) -> None:
        try:
            data = action.tx_byte_array()
            if not data:
                logger.debug("Action %d has an empty payload, nothing sent", action.action_id)
                return
            await self._transport.send(data)
        except Exception:
            logger.exception("Error transmitting action %d", action.action_id)
