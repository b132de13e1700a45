# tests/fakes.py

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass, field


async def wait_until(predicate: Callable[[], bool], *, timeout: float = 2.0, step: float = 0.005) -> None:
    """Poll `predicate` on the running loop; fail the test if it stays false."""
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not met within %.2fs" % timeout)
        await asyncio.sleep(step)


@dataclass(slots=True)
class RecordingAction:
    """
    Async action used by scheduler tests.

    - counts calls and records loop timestamps
    - optionally sleeps (to simulate slow jobs) or raises
    - tracks how many runs overlap
    """

    delay: float = 0.0
    fail_on: set[int] = field(default_factory=set)
    calls: int = 0
    times: list[float] = field(default_factory=list)
    running: int = 0
    max_running: int = 0

    async def __call__(self) -> None:
        self.calls += 1
        call_no = self.calls
        self.times.append(asyncio.get_running_loop().time())
        self.running += 1
        self.max_running = max(self.max_running, self.running)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if call_no in self.fail_on:
                raise RuntimeError(f"boom #{call_no}")
        finally:
            self.running -= 1


@dataclass(slots=True)
class SyncRecordingAction:
    """Plain (non-async) action; raises on the listed call numbers."""

    fail_on: set[int] = field(default_factory=set)
    calls: int = 0

    def __call__(self) -> None:
        self.calls += 1
        if self.calls in self.fail_on:
            raise ValueError(f"sync boom #{self.calls}")


@dataclass(slots=True)
class ErrorLog:
    """on_error sink."""

    errors: list[tuple[str, BaseException]] = field(default_factory=list)

    def __call__(self, task_name: str, exc: BaseException) -> None:
        self.errors.append((task_name, exc))
