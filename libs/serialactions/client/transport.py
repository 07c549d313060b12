"""Transports — where action payloads go once they are built."""

import logging
from typing import Protocol

from serialactions.client.nats_client import DeviceLinkClient
from serialactions.models.topics import Topics

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything that can push raw bytes to a device."""

    async def send(self, data: bytes) -> None: ...


class NatsTransport:
    """Sends payloads to a device's tx topic through a DeviceLinkClient."""

    def __init__(self, client: DeviceLinkClient, device_id: str) -> None:
        self._client = client
        self._topic = Topics.device_tx(device_id)

    @property
    def topic(self) -> str:
        return self._topic

    async def send(self, data: bytes) -> None:
        await self._client.publish_bytes(self._topic, data)
        logger.debug("Sent %d bytes to %s", len(data), self._topic)
