# src/tickwork/tasks/task_models.py

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

AsyncAction = Callable[[], Awaitable[None]]


class IntervalUnit(StrEnum):
    """Symbolic recurrence units accepted by Scheduler.schedule()."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"


@dataclass(slots=True, frozen=True)
class ScheduleOptions:
    """
    Optional settings for a registration.

    - run_immediately: run once right away (not counted toward execution_count)
    - max_executions: auto-stop after this many counted runs (None = unlimited)
    - single_flight: skip a tick while the previous run of the same task is still going
    """

    run_immediately: bool = False
    max_executions: int | None = None
    single_flight: bool = False


@dataclass(slots=True, frozen=True)
class TaskInfo:
    """Read-only snapshot of a registered task."""

    name: str
    interval: int | float
    start_time: datetime
    execution_count: int
    is_active: bool = True


@dataclass(slots=True, eq=False)
class TaskEntry:
    """
    Registry entry. Mutated in place by ticks and manual runs.

    Compared by identity: a tick only acts on the entry that armed its timer.
    """

    name: str
    action: AsyncAction
    interval_ms: int | float
    start_time: datetime
    max_executions: int | None = None
    single_flight: bool = False
    execution_count: int = 0
    in_flight: int = 0
    timer: asyncio.Task[None] | None = None

    def snapshot(self) -> TaskInfo:
        return TaskInfo(
            name=self.name,
            interval=self.interval_ms,
            start_time=self.start_time,
            execution_count=self.execution_count,
        )

    @property
    def cap_reached(self) -> bool:
        return self.max_executions is not None and self.execution_count >= self.max_executions
