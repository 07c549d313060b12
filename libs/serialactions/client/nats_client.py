"""DeviceLinkClient — async wrapper around NATS JetStream for device links."""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

import nats
from nats.aio.client import Client as NATSClient
from nats.aio.msg import Msg
from nats.js.api import DeliverPolicy
from nats.js.client import JetStreamContext
from pydantic import BaseModel

from serialactions.models.topics import to_nats_subject

logger = logging.getLogger(__name__)

STREAM_NAME = "SERIALACTIONS"
STREAM_SUBJECTS = ["device.>"]

ModelT = TypeVar("ModelT", bound=BaseModel)


class DeviceLinkClient:
    """Async NATS client relaying action payloads and link events.

    Usage:
        client = DeviceLinkClient("nats://localhost:4222")
        await client.connect()
        await client.publish_bytes(Topics.device_tx("uart-01"), b"AT\\r\\n")
        await client.subscribe(Topics.device_status("uart-01"), LinkStatus, handler)
        await client.close()
    """

    def __init__(self, url: str = "nats://localhost:4222") -> None:
        self._url = url
        self._nc: NATSClient | None = None
        self._js: JetStreamContext | None = None
        self._subscriptions: list[Any] = []

    @property
    def is_connected(self) -> bool:
        return self._nc is not None and self._nc.is_connected

    async def connect(self) -> None:
        """Connect to NATS and set up the JetStream stream."""
        self._nc = await nats.connect(
            self._url,
            reconnected_cb=self._on_reconnect,
            disconnected_cb=self._on_disconnect,
            error_cb=self._on_error,
            max_reconnect_attempts=10,
            reconnect_time_wait=2,
        )
        self._js = self._nc.jetstream()

        # Create the SERIALACTIONS stream if it is missing
        try:
            await self._js.find_stream_name_by_subject(STREAM_SUBJECTS[0])
            logger.info("JetStream stream '%s' already exists", STREAM_NAME)
        except Exception:
            await self._js.add_stream(
                name=STREAM_NAME,
                subjects=STREAM_SUBJECTS,
            )
            logger.info("Created JetStream stream '%s'", STREAM_NAME)

    async def publish_bytes(self, topic: str, data: bytes) -> None:
        """Publish raw bytes to a topic via JetStream.

        Args:
            topic: Topic path (e.g., `/device/uart-01/tx`).
            data: The payload, sent unmodified.
        """
        if self._js is None:
            raise RuntimeError("Not connected. Call connect() first.")

        subject = to_nats_subject(topic)
        await self._js.publish(subject, data)
        logger.debug("Published %d bytes to %s", len(data), subject)

    async def publish(self, topic: str, model: BaseModel) -> None:
        """Publish a pydantic model as JSON."""
        await self.publish_bytes(topic, model.model_dump_json().encode())

    async def subscribe(
        self,
        topic: str,
        model: type[ModelT],
        handler: Callable[[ModelT], Coroutine[Any, Any, None]],
    ) -> None:
        """Subscribe to a topic, decoding each message into `model`.

        Args:
            topic: Topic path (e.g., `/device/uart-01/status`).
            model: Pydantic model each message is decoded into.
            handler: Async callback receiving the decoded model.
        """

        async def _decode(data: bytes) -> None:
            await handler(model.model_validate_json(data))

        await self.subscribe_bytes(topic, _decode)

    async def subscribe_bytes(
        self,
        topic: str,
        handler: Callable[[bytes], Coroutine[Any, Any, None]],
    ) -> None:
        """Subscribe to raw message bytes. Tries JetStream first, falls back to core NATS.

        Args:
            topic: Topic path (e.g., `/device/uart-01/tx`).
            handler: Async callback receiving the message data.
        """
        subject = to_nats_subject(topic)

        async def _msg_handler(msg: Msg) -> None:
            try:
                await handler(msg.data)
            except Exception:
                logger.exception("Error handling message on %s", subject)
            finally:
                # Auto-ack for JetStream messages
                if msg._ackd is not True:
                    try:
                        await msg.ack()
                    except Exception:
                        logger.debug("Ack skipped for message on %s", subject)

        # Try JetStream subscription first
        if self._js is not None:
            try:
                sub = await self._js.subscribe(
                    subject,
                    manual_ack=True,
                    deliver_policy=DeliverPolicy.NEW,
                )
                self._subscriptions.append(sub)
                # Start consuming in background
                asyncio.ensure_future(self._consume(sub, _msg_handler))
                logger.info("JetStream subscribed to %s", subject)
                return
            except Exception:
                logger.debug("JetStream subscribe failed for %s, falling back to core", subject)

        # Fallback to core NATS
        if self._nc is None:
            raise RuntimeError("Not connected. Call connect() first.")
        sub = await self._nc.subscribe(subject, cb=_msg_handler)
        self._subscriptions.append(sub)
        logger.info("Core NATS subscribed to %s", subject)

    async def _consume(self, sub: Any, handler: Callable[[Msg], Coroutine[Any, Any, None]]) -> None:
        """Consume messages from a JetStream push subscription."""
        try:
            async for msg in sub.messages:
                await handler(msg)
        except Exception:
            logger.debug("Subscription consumer stopped")

    async def close(self) -> None:
        """Unsubscribe from all topics and disconnect."""
        for sub in self._subscriptions:
            try:
                await sub.unsubscribe()
            except Exception:
                logger.debug("Unsubscribe failed during close")
        self._subscriptions.clear()

        if self._nc is not None:
            await self._nc.drain()
            self._nc = None
            self._js = None
        logger.info("Disconnected from NATS")

    async def _on_reconnect(self, _: Any = None) -> None:
        logger.info("Device link reconnected to %s", self._url)

    async def _on_disconnect(self, _: Any = None) -> None:
        logger.warning("Device link lost NATS connection; payloads cannot be relayed")

    async def _on_error(self, e: Exception) -> None:
        logger.error("Device link error: %s", e)
