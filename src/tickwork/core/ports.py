# src/tickwork/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the scheduler.

Task actions and error reporters are plain callables; the Protocols only make the
expected shapes explicit for type checkers and for code that wires the scheduler.
"""

from typing import Awaitable, Protocol


class TaskAction(Protocol):
    """Zero-argument unit of work. May return None or an awaitable."""
    def __call__(self) -> Awaitable[None] | None: ...


class ErrorHandler(Protocol):
    """
    Reporting channel for execution failures.

    Called by the scheduler after a task action raised; the scheduler has already
    logged the failure. Must not raise (if it does, the error is logged and dropped).
    """

    def __call__(self, task_name: str, exc: BaseException) -> None: ...
