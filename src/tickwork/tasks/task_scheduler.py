# src/tickwork/tasks/task_scheduler.py

from __future__ import annotations

"""
In-process periodic task scheduler.

One asyncio timer loop per registered task. Each tick:
- looks up the task (it may have been stopped or replaced meanwhile),
- runs the action through the isolated wrapper and waits for it,
- counts the run,
- stops the task when max_executions is reached.

Ticks run as their own asyncio tasks, so a slow action may overlap the next tick of the
same task unless the task was registered with single_flight=True.
"""

import asyncio
import inspect
import logging
from collections.abc import Coroutine
from datetime import UTC, datetime
from typing import Any

from ..core.ports import ErrorHandler, TaskAction
from .errors import InvalidArgument, SchedulerClosed
from .intervals import describe_interval, resolve_interval
from .task_models import AsyncAction, IntervalUnit, ScheduleOptions, TaskEntry, TaskInfo

logger = logging.getLogger(__name__)


def _as_async(action: TaskAction) -> AsyncAction:
    """Normalize a sync-or-async action into a coroutine function."""
    if inspect.iscoroutinefunction(action):
        return action  # type: ignore[return-value]

    async def _run() -> None:
        result = action()
        if inspect.isawaitable(result):
            await result

    return _run


class Scheduler:
    """
    Registry of named periodic tasks.

    All methods must be called from the event loop thread; schedule() additionally needs
    a running loop because it arms an asyncio timer. Mutations of the registry happen
    between awaits, so no lock is needed.
    """

    def __init__(self, *, on_error: ErrorHandler | None = None) -> None:
        self._tasks: dict[str, TaskEntry] = {}
        self._inflight: set[asyncio.Task[None]] = set()
        self._on_error = on_error
        self._closed = False

    # ------------------------------------------------------------------ registration

    def schedule(
        self,
        name: str,
        action: TaskAction,
        interval: IntervalUnit | str | int | float,
        options: ScheduleOptions | None = None,
        **kwargs: Any,
    ) -> Scheduler:
        """
        Create (or replace) the task `name`, running `action` every `interval`.

        interval is a unit name ("second", "minute", "hour", "day", "week") or a number
        of milliseconds. Options come either as a ScheduleOptions or as keyword arguments
        (run_immediately=, max_executions=, single_flight=).

        Raises InvalidArgument on bad input (nothing is registered) and SchedulerClosed
        after destroy(). Returns self for chaining.
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgument("task name required")
        if not callable(action):
            raise InvalidArgument("action required")
        interval_ms = resolve_interval(interval)

        if options is None:
            try:
                options = ScheduleOptions(**kwargs)
            except TypeError as e:
                raise InvalidArgument(str(e)) from None
        elif kwargs:
            raise InvalidArgument("pass either options or keyword options, not both")

        max_executions = options.max_executions
        if max_executions is not None and (
            isinstance(max_executions, bool) or not isinstance(max_executions, int) or max_executions <= 0
        ):
            raise InvalidArgument(f"invalid max_executions: {max_executions!r}")

        if self._closed:
            raise SchedulerClosed("scheduler destroyed")

        loop = asyncio.get_running_loop()
        run = _as_async(action)

        self.stop(name)

        entry = TaskEntry(
            name=name,
            action=run,
            interval_ms=interval_ms,
            start_time=datetime.now(UTC),
            max_executions=max_executions,
            single_flight=options.single_flight,
        )

        # Not counted, but tracked as in flight so single_flight ticks wait for it.
        if options.run_immediately:
            self._spawn(self._guarded_run(entry), name=f"tickwork:{name}:immediate")

        entry.timer = loop.create_task(self._run_timer(entry), name=f"tickwork:{name}:timer")
        self._tasks[name] = entry

        logger.info(
            "Task %r scheduled every %s (max_executions=%s)",
            name,
            describe_interval(interval_ms),
            max_executions,
        )
        return self

    def stop(self, name: str) -> bool:
        """Cancel the task's timer and remove it. False if there was no such task."""
        entry = self._tasks.pop(name, None)
        if entry is None:
            return False

        if entry.timer is not None:
            entry.timer.cancel()
        logger.info("Task %r stopped after %d runs", name, entry.execution_count)
        return True

    def stop_all(self) -> int:
        names = list(self._tasks)
        for name in names:
            self.stop(name)
        return len(names)

    async def execute_now(self, name: str) -> bool:
        """
        Run the task once out of band and count it.

        The timer keeps its schedule: the next tick fires when it was going to anyway.
        """
        entry = self._tasks.get(name)
        if entry is None:
            return False

        await self._guarded_run(entry)
        if self._tasks.get(name) is entry:
            entry.execution_count += 1
        return True

    # ------------------------------------------------------------------ introspection

    def get_task(self, name: str) -> TaskInfo | None:
        entry = self._tasks.get(name)
        return entry.snapshot() if entry is not None else None

    def get_all_tasks(self) -> dict[str, TaskInfo]:
        return {name: entry.snapshot() for name, entry in self._tasks.items()}

    def get_active_tasks(self) -> list[str]:
        return list(self._tasks)

    def has_task(self, name: str) -> bool:
        return name in self._tasks

    @property
    def task_count(self) -> int:
        return len(self._tasks)

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    # ------------------------------------------------------------------ teardown

    def destroy(self) -> None:
        """Stop every task and refuse new registrations. Safe to call twice."""
        removed = self.stop_all()
        if not self._closed:
            self._closed = True
            logger.info("Scheduler destroyed (%d tasks stopped)", removed)

    async def wait_idle(self) -> None:
        """
        Wait until no action run is in flight.

        Runs started while waiting are waited for too, so with short live timers this may
        not return; call destroy() first (aclose() does).
        """
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def aclose(self) -> None:
        timers = [entry.timer for entry in self._tasks.values() if entry.timer is not None]
        self.destroy()
        if timers:
            await asyncio.gather(*timers, return_exceptions=True)
        await self.wait_idle()

    async def __aenter__(self) -> Scheduler:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------ internals

    def _spawn(self, coro: Coroutine[Any, Any, None], *, name: str) -> None:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _run_timer(self, entry: TaskEntry) -> None:
        loop = asyncio.get_running_loop()
        period = entry.interval_ms / 1000
        deadline = loop.time()

        while True:
            deadline += period
            await asyncio.sleep(max(0.0, deadline - loop.time()))

            # Coalesce missed deadlines (loop stalled) into this single tick.
            now = loop.time()
            if now - deadline >= period:
                deadline = now

            self._spawn(self._tick(entry), name=f"tickwork:{entry.name}:tick")

    async def _tick(self, entry: TaskEntry) -> None:
        name = entry.name
        if self._tasks.get(name) is not entry:
            return

        if entry.single_flight and entry.in_flight:
            logger.debug("Task %r still running; tick skipped", name)
            return

        await self._guarded_run(entry)

        # Stopped or replaced while running: nothing left to count.
        if self._tasks.get(name) is not entry:
            return

        entry.execution_count += 1
        logger.debug("Task %r tick done (runs=%d)", name, entry.execution_count)

        if entry.cap_reached:
            logger.info("Task %r reached max_executions=%s", name, entry.max_executions)
            self.stop(name)

    async def _guarded_run(self, entry: TaskEntry) -> None:
        entry.in_flight += 1
        try:
            await self._execute(entry.name, entry.action)
        finally:
            entry.in_flight -= 1

    async def _execute(self, name: str, action: AsyncAction) -> None:
        """Isolated execution: failures are logged and reported, never raised."""
        try:
            await action()
        except Exception as e:
            logger.exception("Task %r failed", name)
            if self._on_error is not None:
                try:
                    self._on_error(name, e)
                except Exception:
                    logger.exception("on_error handler failed for task %r", name)
