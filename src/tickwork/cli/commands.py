# src/tickwork/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable

from ..config import parse_interval_setting
from ..tasks.builtin_jobs import make_echo
from ..tasks.errors import SchedulerError
from ..tasks.intervals import describe_interval
from ..tasks.task_scheduler import Scheduler

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[
    [Scheduler, list[str], CommandEmitter | None], str | Awaitable[str]
]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        scheduler: Scheduler,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            reply = handler(scheduler, args, emit)
            if inspect.isawaitable(reply):
                reply = await reply
        except SchedulerError as e:
            # Bad user input (invalid interval, closed scheduler): show it, don't log a trace.
            return f"Error: {e}"
        return reply

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(scheduler: Scheduler, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_tasks(scheduler: Scheduler, args: list[str], emit: CommandEmitter | None = None) -> str:
    tasks = scheduler.get_all_tasks()
    if not tasks:
        return "No active tasks."
    lines = [f"Active tasks ({len(tasks)}):"]
    for info in tasks.values():
        lines.append(
            f"  {info.name}: every {describe_interval(info.interval)}, "
            f"runs={info.execution_count}"
        )
    return "\n".join(lines)


def cmd_task(scheduler: Scheduler, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /task <name>"
    info = scheduler.get_task(args[0])
    if info is None:
        return f"No such task: {args[0]}"
    started = info.start_time.astimezone().strftime("%Y-%m-%d %H:%M:%S")
    return (
        f"Task {info.name}:\n"
        f"  Interval: {describe_interval(info.interval)} ({info.interval} ms)\n"
        f"  Started: {started}\n"
        f"  Runs: {info.execution_count}\n"
        f"  Active: {'yes' if info.is_active else 'no'}"
    )


def cmd_every(scheduler: Scheduler, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /every <name> <interval> [--max N] [--now] <text...>

    interval is a unit name (second/minute/hour/day/week) or milliseconds.
    """
    usage = "Usage: /every <name> <interval> [--max N] [--now] <text...>"
    if len(args) < 3:
        return usage

    name, raw_interval, rest = args[0], args[1], args[2:]
    max_executions: int | None = None
    run_immediately = False
    words: list[str] = []

    it = iter(rest)
    for word in it:
        if word == "--now":
            run_immediately = True
        elif word == "--max":
            raw_max = next(it, "")
            try:
                max_executions = int(raw_max)
            except ValueError:
                return f"--max expects an integer, got {raw_max!r}"
        else:
            words.append(word)

    if not words:
        return usage

    scheduler.schedule(
        name,
        make_echo(" ".join(words), emit or print),
        parse_interval_setting(raw_interval),
        run_immediately=run_immediately,
        max_executions=max_executions,
    )
    info = scheduler.get_task(name)
    interval = describe_interval(info.interval) if info is not None else raw_interval
    return f"Scheduled {name} every {interval}."


async def cmd_run(scheduler: Scheduler, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /run <name>"
    if await scheduler.execute_now(args[0]):
        return f"Ran {args[0]}."
    return f"No such task: {args[0]}"


def cmd_stop(scheduler: Scheduler, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /stop <name>"
    if scheduler.stop(args[0]):
        return f"Stopped {args[0]}."
    return f"No such task: {args[0]}"


def cmd_stopall(scheduler: Scheduler, args: list[str], emit: CommandEmitter | None = None) -> str:
    n = scheduler.stop_all()
    return f"Stopped {n} task(s)."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("tasks", cmd_tasks, help_text="List active tasks.", aliases=["ls"])
registry.register("task", cmd_task, help_text="Show one task: /task <name>.")
registry.register(
    "every",
    cmd_every,
    help_text="Schedule an echo job: /every <name> <interval> [--max N] [--now] <text>.",
)
registry.register("run", cmd_run, help_text="Run a task now: /run <name>.")
registry.register("stop", cmd_stop, help_text="Stop a task: /stop <name>.")
registry.register("stopall", cmd_stopall, help_text="Stop every task.")
