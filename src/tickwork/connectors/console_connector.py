# src/tickwork/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import os
import sys
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import TextIO

from ..cli.commands import CommandRegistry
from ..cli.commands import registry as command_registry
from ..tasks.task_scheduler import Scheduler

logger = logging.getLogger(__name__)

LineReader = Callable[[str], Awaitable[str]]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class StdinLineReader:
    """
    Read input lines on the event loop (loop.add_reader on the stdin fd).

    No thread is ever parked in input(), so cancelling the console (Ctrl+C) lets
    asyncio.run() return right away. Raises EOFError at end of input.
    """

    def __init__(self, stream: TextIO | None = None, *, prompt_stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self._prompt_stream = prompt_stream if prompt_stream is not None else sys.stdout
        self._buf = b""
        self._eof = False

    async def __call__(self, prompt: str) -> str:
        if prompt:
            self._prompt_stream.write(prompt)
            self._prompt_stream.flush()

        while b"\n" not in self._buf and not self._eof:
            chunk = await self._read_chunk()
            if chunk:
                self._buf += chunk
            else:
                self._eof = True

        if b"\n" in self._buf:
            raw, _, self._buf = self._buf.partition(b"\n")
        elif self._buf:
            raw, self._buf = self._buf, b""
        else:
            raise EOFError

        return raw.decode("utf-8", errors="replace").rstrip("\r")

    async def _read_chunk(self) -> bytes:
        loop = asyncio.get_running_loop()
        fd = self._stream.fileno()
        fut: asyncio.Future[bytes] = loop.create_future()

        def _on_readable() -> None:
            if fut.done():
                return
            try:
                fut.set_result(os.read(fd, 4096))
            except OSError as e:
                fut.set_exception(e)

        try:
            loop.add_reader(fd, _on_readable)
        except NotImplementedError:
            # Proactor loop (Windows) has no add_reader.
            return await asyncio.to_thread(os.read, fd, 4096)

        try:
            return await fut
        finally:
            loop.remove_reader(fd)


async def run_console_loop(
    scheduler: Scheduler,
    *,
    registry: CommandRegistry | None = None,
    read_line: LineReader | None = None,
    emit: Callable[[str], None] = _print_ts,
) -> None:
    """
    Interactive REPL driving the scheduler.

    Input is awaited on the event loop, so scheduled tasks keep ticking while the prompt waits.
    """
    registry = registry or command_registry
    read_line = read_line or StdinLineReader()
    logger.info("Console connector started.")
    emit("[CONSOLE] Use /help for commands. Use /exit to quit.")

    try:
        while True:
            try:
                line = (await read_line("> ")).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break

            if not line:
                continue

            if line.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                response = await registry.handle(scheduler, line, emit=emit)
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            if response is None:
                response = "Not a command. Use /help to list available commands."
            emit(response)
    finally:
        logger.info("Console connector finished.")
