"""Tests for the asyncio ActionScheduler against a recording transport."""

import asyncio
import logging

from serialactions import Action, ActionScheduler, TimerMode

# Long enough that a timer never fires during a test
NEVER_MS = 60_000


def _action(action_id: int, mode: TimerMode = TimerMode.OFF, interval: int = NEVER_MS, **kwargs) -> Action:
    return Action(
        action_id,
        tx_data=f"A{action_id}",
        timer_mode=mode,
        timer_interval_ms=interval,
        **kwargs,
    )


class TestConnect:
    async def test_auto_execute_on_connect(self, transport):
        scheduler = ActionScheduler(transport, [_action(0, auto_execute_on_connect=True), _action(1)])
        await scheduler.connect()
        assert transport.sent == [b"A0"]
        await scheduler.stop()

    async def test_auto_start_repeats(self, transport):
        scheduler = ActionScheduler(transport, [_action(0, TimerMode.AUTO_START, interval=10)])
        await scheduler.connect()
        assert scheduler.is_running(0)
        await asyncio.sleep(0.2)
        assert len(transport.sent) >= 3
        assert set(transport.sent) == {b"A0"}
        await scheduler.stop()

    async def test_disconnect_stops_timers(self, transport):
        scheduler = ActionScheduler(transport, [_action(0, TimerMode.AUTO_START, interval=10)])
        await scheduler.connect()
        await asyncio.sleep(0.05)
        await scheduler.disconnect()
        assert not scheduler.is_running(0)
        count = len(transport.sent)
        await asyncio.sleep(0.05)
        assert len(transport.sent) == count

    async def test_invalid_interval_not_started(self, transport, caplog):
        scheduler = ActionScheduler(transport, [_action(0, TimerMode.AUTO_START, interval=0)])
        with caplog.at_level(logging.WARNING):
            await scheduler.connect()
        assert not scheduler.is_running(0)
        assert "invalid timer interval" in caplog.text


class TestTrigger:
    async def test_unknown_action(self, transport):
        scheduler = ActionScheduler(transport, [_action(0)])
        await scheduler.connect()
        assert await scheduler.trigger(99) is False
        assert transport.sent == []

    async def test_ignored_while_disconnected(self, transport):
        scheduler = ActionScheduler(transport, [_action(0)])
        assert await scheduler.trigger(0) is True
        assert transport.sent == []

    async def test_off_sends_once(self, transport):
        scheduler = ActionScheduler(transport, [_action(0)])
        await scheduler.connect()
        await scheduler.trigger(0)
        assert transport.sent == [b"A0"]
        assert not scheduler.is_running(0)

    async def test_start_on_trigger(self, transport):
        scheduler = ActionScheduler(transport, [_action(0, TimerMode.START_ON_TRIGGER)])
        await scheduler.connect()
        assert not scheduler.is_running(0)

        await scheduler.trigger(0)
        assert scheduler.is_running(0)
        await scheduler.trigger(0)
        assert scheduler.is_running(0)
        assert transport.sent == [b"A0", b"A0"]
        await scheduler.stop()

    async def test_toggle_on_trigger(self, transport):
        scheduler = ActionScheduler(transport, [_action(0, TimerMode.TOGGLE_ON_TRIGGER)])
        await scheduler.connect()

        await scheduler.trigger(0)
        assert scheduler.is_running(0)
        await scheduler.trigger(0)
        assert not scheduler.is_running(0)
        await scheduler.trigger(0)
        assert scheduler.is_running(0)
        assert transport.sent == [b"A0", b"A0"]
        await scheduler.stop()

    async def test_started_timer_fires(self, transport):
        scheduler = ActionScheduler(transport, [_action(0, TimerMode.START_ON_TRIGGER, interval=10)])
        await scheduler.connect()
        await scheduler.trigger(0)
        await asyncio.sleep(0.1)
        assert len(transport.sent) >= 3
        await scheduler.stop()


class TestTransmit:
    async def test_empty_payload_not_sent(self, transport):
        scheduler = ActionScheduler(transport, [Action(0)])
        await scheduler.connect()
        await scheduler.trigger(0)
        assert transport.sent == []

    async def test_sends_built_payload(self, transport):
        action = Action(0, binary_data=True, tx_data="DE AD", eol_sequence="\\n")
        scheduler = ActionScheduler(transport, [action])
        await scheduler.connect()
        await scheduler.trigger(0)
        assert transport.sent == [b"\xde\xad\n"]

    async def test_payload_errors_are_logged_and_timer_survives(self, transport, caplog, monkeypatch):
        def broken(self):
            raise UnicodeEncodeError("utf-8", "\ud800", 0, 1, "surrogates not allowed")

        scheduler = ActionScheduler(transport, [_action(0, TimerMode.AUTO_START, interval=10)])
        monkeypatch.setattr(Action, "tx_byte_array", broken)
        with caplog.at_level(logging.ERROR):
            await scheduler.connect()
            await asyncio.sleep(0.05)
        assert "Error transmitting action 0" in caplog.text
        assert transport.sent == []

        monkeypatch.undo()
        await asyncio.sleep(0.05)
        assert scheduler.is_running(0)
        assert transport.sent
        assert set(transport.sent) == {b"A0"}
        await scheduler.stop()

    async def test_lone_surrogate_payload_is_sent(self, transport):
        scheduler = ActionScheduler(transport, [Action(0, tx_data="\\uD800")])
        await scheduler.connect()
        await scheduler.trigger(0)
        assert transport.sent == [b"\xef\xbf\xbd"]

    async def test_transport_errors_are_logged(self, transport, caplog):
        transport.fail = True
        scheduler = ActionScheduler(transport, [_action(0, TimerMode.TOGGLE_ON_TRIGGER, interval=10)])
        await scheduler.connect()
        with caplog.at_level(logging.ERROR):
            await scheduler.trigger(0)
            await asyncio.sleep(0.05)
        assert "Error transmitting action 0" in caplog.text
        assert scheduler.is_running(0)
        await scheduler.stop()


class TestStop:
    async def test_stop_cancels_all(self, transport):
        scheduler = ActionScheduler(
            transport,
            [_action(0, TimerMode.AUTO_START, interval=10), _action(1, TimerMode.AUTO_START, interval=10)],
        )
        await scheduler.connect()
        assert scheduler.state.running_ids() == [0, 1]
        await scheduler.stop()
        assert scheduler.state.running_ids() == []
        count = len(transport.sent)
        await asyncio.sleep(0.05)
        assert len(transport.sent) == count

    async def test_actions_sorted(self, transport):
        scheduler = ActionScheduler(transport, [_action(2), _action(0)])
        assert [a.action_id for a in scheduler.actions] == [0, 2]
        assert scheduler.get_action(2) is not None
        assert scheduler.get_action(1) is None
