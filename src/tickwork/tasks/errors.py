# src/tickwork/tasks/errors.py

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for errors raised by the scheduler's public methods."""


class InvalidArgument(SchedulerError, ValueError):
    """A schedule() precondition failed; nothing was registered."""


class SchedulerClosed(SchedulerError, RuntimeError):
    """The scheduler was destroyed and no longer accepts new tasks."""
