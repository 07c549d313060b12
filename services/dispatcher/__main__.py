"""Entry point: python -m services.dispatcher"""

import asyncio
import logging
import os
import signal

from services.dispatcher.dispatcher import ActionDispatcher


async def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    dispatcher = ActionDispatcher(os.environ.get("NATS_URL", "nats://localhost:4222"))
    loop = asyncio.get_running_loop()

    # Handle graceful shutdown
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        logging.getLogger(__name__).info("Shutdown signal received")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _signal_handler)

    await dispatcher.start()
    logging.getLogger(__name__).info(
        "Dispatcher for %s is running. Press Ctrl+C to stop.", dispatcher.device_id
    )

    await stop_event.wait()
    await dispatcher.stop()


if __name__ == "__main__":
    asyncio.run(main())
