"""ActionDispatcher — runs a project's actions against one device link."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from serialactions import (
    Action,
    ActionScheduler,
    DeviceLinkClient,
    LinkStatus,
    NatsTransport,
    Topics,
    Transport,
    TriggerRequest,
    parse_actions,
    validate_action_document,
)

logger = logging.getLogger(__name__)

DEFAULT_DEVICE_ID = "device-01"
DEFAULT_ACTIONS_FILE = "actions.json"


def load_project(path: str | Path) -> list[Action]:
    """Load actions from a project file, logging schema problems per action."""
    data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    documents = data.get("actions", []) if isinstance(data, dict) else data
    if isinstance(documents, list):
        for index, document in enumerate(documents):
            for error in validate_action_document(document):
                logger.warning("Action %d: %s", index, error)
    return parse_actions(data)


class ActionDispatcher:
    """Bridges link status and trigger requests to the action scheduler.

    Listens on the device's status topic (connect / disconnect) and trigger
    topic (manual invocations); payloads go out on the device's tx topic.
    """

    def __init__(
        self,
        nats_url: str = "nats://localhost:4222",
        device_id: str | None = None,
        actions_file: str | Path | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._device_id = device_id or os.environ.get("DEVICE_ID", DEFAULT_DEVICE_ID)
        self._actions_file = Path(
            actions_file or os.environ.get("ACTIONS_FILE", DEFAULT_ACTIONS_FILE)
        )
        self._bus = DeviceLinkClient(nats_url)
        self._scheduler = ActionScheduler(transport or NatsTransport(self._bus, self._device_id))

    @property
    def scheduler(self) -> ActionScheduler:
        """Expose scheduler for testing."""
        return self._scheduler

    @property
    def device_id(self) -> str:
        return self._device_id

    async def start(self) -> None:
        """Load actions, connect to NATS and subscribe to the device topics."""
        actions = load_project(self._actions_file)
        self._scheduler.set_actions(actions)
        logger.info("Loaded %d actions from %s", len(actions), self._actions_file)

        await self._bus.connect()
        await self._bus.subscribe(
            Topics.device_status(self._device_id), LinkStatus, self._on_status
        )
        await self._bus.subscribe(
            Topics.device_trigger(self._device_id), TriggerRequest, self._on_trigger
        )
        logger.info("Dispatcher for %s subscribed to status and trigger topics", self._device_id)

    async def stop(self) -> None:
        """Clean shutdown."""
        await self._scheduler.stop()
        await self._bus.close()
        logger.info("Dispatcher for %s stopped", self._device_id)

    async def _on_status(self, status: LinkStatus) -> None:
        if status.device_id != self._device_id:
            return
        if status.connected and not self._scheduler.state.connected:
            logger.info("Device %s connected", self._device_id)
            await self._scheduler.connect()
        elif not status.connected and self._scheduler.state.connected:
            await self._scheduler.disconnect()

    async def _on_trigger(self, request: TriggerRequest) -> None:
        await self._scheduler.trigger(request.action_id)
