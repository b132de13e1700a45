"""
tickwork: in-process periodic task scheduler on top of asyncio.

    async with Scheduler() as scheduler:
        scheduler.schedule("ping", ping, "minute", run_immediately=True)
        ...
"""

from .tasks.errors import InvalidArgument, SchedulerClosed, SchedulerError
from .tasks.intervals import INTERVAL_MS, resolve_interval
from .tasks.task_models import IntervalUnit, ScheduleOptions, TaskInfo
from .tasks.task_scheduler import Scheduler

__all__ = [
    "INTERVAL_MS",
    "IntervalUnit",
    "InvalidArgument",
    "ScheduleOptions",
    "Scheduler",
    "SchedulerClosed",
    "SchedulerError",
    "TaskInfo",
    "resolve_interval",
]
