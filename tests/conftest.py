# tests/conftest.py

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from tickwork.tasks.task_scheduler import Scheduler

from .fakes import ErrorLog


@pytest.fixture()
def error_log() -> ErrorLog:
    return ErrorLog()


@pytest_asyncio.fixture()
async def scheduler(error_log: ErrorLog) -> AsyncIterator[Scheduler]:
    """
    Scheduler bound to the test's event loop.

    Torn down with aclose() so no timer or in-flight run outlives the test.
    """
    sched = Scheduler(on_error=error_log)
    try:
        yield sched
    finally:
        await sched.aclose()
