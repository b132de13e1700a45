# src/tickwork/tasks/builtin_jobs.py

from __future__ import annotations

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


def make_heartbeat(app_name: str = "tickwork") -> Callable[[], None]:
    """Action that logs an "alive" line with process uptime."""
    started = time.monotonic()
    beats = 0

    def heartbeat() -> None:
        nonlocal beats
        beats += 1
        uptime = int(time.monotonic() - started)
        logger.info("%s alive: beat=%d uptime=%ds", app_name, beats, uptime)

    return heartbeat


def make_echo(text: str, emit: Callable[[str], None] = print) -> Callable[[], None]:
    """Action that passes `text` to `emit` (console /every jobs). The emitter formats it."""

    def echo() -> None:
        emit(text)

    return echo
