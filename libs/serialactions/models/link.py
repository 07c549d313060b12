"""Wire models exchanged with the device link over the message bus."""

import time

from pydantic import BaseModel, Field


class LinkStatus(BaseModel):
    """Published by the link owner whenever the device connects or drops."""

    device_id: str
    connected: bool
    timestamp: float = Field(default_factory=time.time)


class TriggerRequest(BaseModel):
    """Manual invocation of one action, e.g. a dashboard button press."""

    action_id: int = Field(ge=0)
