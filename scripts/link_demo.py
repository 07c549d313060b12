"""Link demo — drives a running dispatcher through a connect and a trigger.

Run with: python scripts/link_demo.py
Requires: NATS running and `python -m services.dispatcher` for the same DEVICE_ID
"""

import asyncio
import os
import sys

from serialactions import (
    DeviceLinkClient,
    LinkStatus,
    Topics,
    TriggerRequest,
)


def _unhandled_exception(loop, context):
    msg = context.get("exception", context["message"])
    print(f"Unhandled error: {msg}", file=sys.stderr)
    sys.exit(1)


async def main() -> None:
    nats_url = os.environ.get("NATS_URL", "nats://localhost:4222")
    device_id = os.environ.get("DEVICE_ID", "device-01")
    action_id = int(os.environ.get("ACTION_ID", "0"))
    client = DeviceLinkClient(nats_url)

    print("=" * 60)
    print(f"  Serial Actions — link demo for {device_id}")
    print("=" * 60)
    print()

    print("[1/4] Connecting to NATS...", end=" ")
    await client.connect()
    print(f"OK ({nats_url})")

    received: list[bytes] = []
    got_payload = asyncio.Event()

    async def on_tx(data: bytes) -> None:
        received.append(data)
        print(f"       Device received {len(data)} bytes: {data.hex(' ')}")
        got_payload.set()

    print("[2/4] Listening on", Topics.device_tx(device_id), "...", end=" ")
    await client.subscribe_bytes(Topics.device_tx(device_id), on_tx)
    print("OK")
    await asyncio.sleep(0.5)

    print("[3/4] Announcing device connection...")
    await client.publish(
        Topics.device_status(device_id), LinkStatus(device_id=device_id, connected=True)
    )
    await asyncio.sleep(0.5)

    print(f"[4/4] Triggering action {action_id}...")
    await client.publish(Topics.device_trigger(device_id), TriggerRequest(action_id=action_id))

    try:
        await asyncio.wait_for(got_payload.wait(), timeout=5.0)
    except asyncio.TimeoutError:
        print("       Timeout! No payload reached the device topic")
        await client.close()
        sys.exit(1)

    await client.publish(
        Topics.device_status(device_id), LinkStatus(device_id=device_id, connected=False)
    )

    print()
    print("=" * 60)
    print(f"  SUCCESS! {len(received)} payload(s) relayed to {device_id}.")
    print("=" * 60)

    await client.close()


if __name__ == "__main__":
    loop = asyncio.new_event_loop()
    loop.set_exception_handler(_unhandled_exception)
    loop.run_until_complete(main())
