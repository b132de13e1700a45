# src/tickwork/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the scheduler, then either:
- runs the console REPL (default), or
- waits for SIGINT/SIGTERM while scheduled jobs run in the background.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from ..cli.bootstrap import create_scheduler
from ..config import Settings, get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def run(settings: Settings) -> None:
    scheduler = create_scheduler(settings=settings)

    async with scheduler:
        if settings.console_enabled:
            await run_console_loop(scheduler)
            return

        stop_main = asyncio.Event()
        loop = asyncio.get_running_loop()

        def _handle_signal(signum: int) -> None:
            logger.info("Signal %s received, shutting down...", signum)
            stop_main.set()

        for signum in (signal.SIGINT, signal.SIGTERM):
            # add_signal_handler is unavailable on some platforms (Windows).
            with contextlib.suppress(NotImplementedError, RuntimeError):
                loop.add_signal_handler(signum, _handle_signal, signum)

        logger.info("Console disabled. Running scheduled jobs only. Press Ctrl+C to stop.")
        await stop_main.wait()


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)
    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
