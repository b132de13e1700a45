# src/tickwork/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures local (gitignored) directories exist,
- builds the Scheduler,
- registers the jobs enabled in settings.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..tasks.builtin_jobs import make_heartbeat
from ..tasks.task_scheduler import Scheduler

logger = logging.getLogger(__name__)

HEARTBEAT_TASK = "heartbeat"


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def _report_task_error(task_name: str, exc: BaseException) -> None:
    # The scheduler already logged the traceback; keep a one-line summary for the console.
    logger.warning("Task %s failed: %s", task_name, exc)


def create_scheduler(*, settings: Settings | None = None) -> Scheduler:
    """
    Create a Scheduler and register configured jobs. Needs a running event loop.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    scheduler = Scheduler(on_error=_report_task_error)

    if settings.heartbeat_enabled:
        scheduler.schedule(
            HEARTBEAT_TASK,
            make_heartbeat(settings.app_name),
            settings.heartbeat_interval,
            run_immediately=True,
            max_executions=settings.heartbeat_max_executions,
        )

    return scheduler
