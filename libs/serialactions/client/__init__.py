from serialactions.client.nats_client import DeviceLinkClient
from serialactions.client.transport import NatsTransport, Transport

__all__ = [
    "DeviceLinkClient",
    "NatsTransport",
    "Transport",
]
