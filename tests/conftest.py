"""Shared test fixtures."""

import os

import pytest
from serialactions import DeviceLinkClient


class RecordingTransport:
    """Transport double that keeps every payload it is asked to send."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[bytes] = []
        self.fail = fail

    async def send(self, data: bytes) -> None:
        if self.fail:
            raise ConnectionError("link down")
        self.sent.append(data)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def nats_url() -> str:
    return os.environ.get("NATS_URL", "nats://localhost:4222")


@pytest.fixture
async def bus_client(nats_url: str) -> DeviceLinkClient:
    """Provide a connected DeviceLinkClient, cleaned up after use."""
    client = DeviceLinkClient(nats_url)
    await client.connect()
    yield client  # type: ignore[misc]
    await client.close()
