"""Integration tests for the dispatcher service. Requires NATS running."""

import asyncio
import json

import pytest

from serialactions import DeviceLinkClient, LinkStatus, Topics, TriggerRequest
from services.dispatcher.dispatcher import ActionDispatcher

pytestmark = pytest.mark.integration

DEVICE_ID = "itest-01"


@pytest.fixture
async def dispatcher(nats_url: str, tmp_path) -> ActionDispatcher:
    """Start a dispatcher on a small project, tear it down after the test."""
    path = tmp_path / "actions.json"
    path.write_text(
        json.dumps(
            [
                {"title": "Hello", "txData": "HELLO", "eol": "\\n"},
                {"title": "Beacon", "binary": True, "txData": "AA 55", "timerMode": 1, "timerIntervalMs": 50},
            ]
        ),
        encoding="utf-8",
    )
    d = ActionDispatcher(nats_url, device_id=DEVICE_ID, actions_file=path)
    await d.start()
    await asyncio.sleep(0.3)
    yield d  # type: ignore[misc]
    await d.stop()


class TestDispatcherFlow:
    async def test_connect_then_trigger(self, dispatcher: ActionDispatcher, bus_client: DeviceLinkClient):
        received: list[bytes] = []
        got_hello = asyncio.Event()
        got_beacons = asyncio.Event()

        async def on_tx(data: bytes) -> None:
            received.append(data)
            if data == b"HELLO\n":
                got_hello.set()
            if received.count(b"\xaa\x55") >= 2:
                got_beacons.set()

        await bus_client.subscribe_bytes(Topics.device_tx(DEVICE_ID), on_tx)
        await asyncio.sleep(0.3)

        await bus_client.publish(
            Topics.device_status(DEVICE_ID), LinkStatus(device_id=DEVICE_ID, connected=True)
        )
        await asyncio.wait_for(got_beacons.wait(), timeout=5.0)
        assert dispatcher.scheduler.is_running(1)

        await bus_client.publish(Topics.device_trigger(DEVICE_ID), TriggerRequest(action_id=0))
        await asyncio.wait_for(got_hello.wait(), timeout=5.0)

        await bus_client.publish(
            Topics.device_status(DEVICE_ID), LinkStatus(device_id=DEVICE_ID, connected=False)
        )
        await asyncio.sleep(0.5)
        assert not dispatcher.scheduler.is_running(1)
