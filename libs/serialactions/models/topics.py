"""Topic paths for device links and NATS subject conversion.

Topics use `/` separators (e.g., `/device/uart-01/tx`), while NATS uses `.`
separators (e.g., `device.uart-01.tx`). This module handles the conversion
transparently.
"""


class Topics:
    """Per-device topic paths."""

    DEVICES = "/device"

    @classmethod
    def device_tx(cls, device_id: str) -> str:
        """Raw payload bytes headed for the device."""
        return f"{cls.DEVICES}/{device_id}/tx"

    @classmethod
    def device_status(cls, device_id: str) -> str:
        """Link status updates (connected / disconnected)."""
        return f"{cls.DEVICES}/{device_id}/status"

    @classmethod
    def device_trigger(cls, device_id: str) -> str:
        """Manual trigger requests for the device's actions."""
        return f"{cls.DEVICES}/{device_id}/trigger"

    @classmethod
    def all_device_topics(cls, device_id: str) -> list[str]:
        """Return every topic used for one device."""
        return [
            cls.device_tx(device_id),
            cls.device_status(device_id),
            cls.device_trigger(device_id),
        ]


def to_nats_subject(topic: str) -> str:
    """Convert a topic path to a NATS subject.

    `/device/uart-01/tx` → `device.uart-01.tx`
    """
    return topic.lstrip("/").replace("/", ".")


def from_nats_subject(subject: str) -> str:
    """Convert a NATS subject back to a topic path.

    `device.uart-01.tx` → `/device/uart-01/tx`
    """
    return "/" + subject.replace(".", "/")
