"""
Brewing controller session driver.

Feeds incoming notification lines through the decoder and the session state
machine, and serializes every outgoing command (user issued or automatic)
through a single FIFO queue so that lines of different commands never
interleave.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Callable, List, Optional

from grainlink.app.config import ControllerSettings, get_settings
from grainlink.app.logging import create_logger
from grainlink.domain.recipe import RecipeDetails
from grainlink.parsing.commands.builder import Command
from grainlink.parsing.notifications.decode import DecodeResult, NotificationDecodeError, decode_notification
from grainlink.parsing.notifications.model import AutoStatus, StatusRecord
from grainlink.session.context import SessionContext
from grainlink.session.machine import derive_session
from grainlink.session.model import SessionSnapshot
from grainlink.transports.base import LineTransport

RecordObserver = Callable[[StatusRecord], None]
SessionObserver = Callable[[SessionSnapshot], None]


class BrewController:
    def __init__(
        self,
        transport: LineTransport,
        settings: Optional[ControllerSettings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.transport = transport
        self.settings = settings or get_settings()
        self.logger = logger or create_logger("grainlink.controller", self.settings.log_ring_size)
        self.context = SessionContext()
        self.snapshot = SessionSnapshot()
        self.decode_errors = 0
        self._queue: asyncio.Queue[Command] = asyncio.Queue(maxsize=self.settings.queue_max_size)
        self._record_observers: List[RecordObserver] = []
        self._session_observers: List[SessionObserver] = []
        self._stop_event: Optional[asyncio.Event] = None
        self._writer: Optional[asyncio.Task] = None
        self._reader: Optional[asyncio.Task] = None

    # ---- session ----
    @property
    def recipe(self) -> Optional[RecipeDetails]:
        return self.context.recipe

    def set_recipe(self, recipe: RecipeDetails) -> None:
        """
        Start following a session for ``recipe``.

        The controller needs the recipe to locate the sparge, boil and hop
        stand stages. All boil additions are marked as not yet sent.
        """
        recipe.reset_sent()
        self.context = self.context.with_recipe(recipe)
        self.logger.info("recipe_set", extra={"details": {"name": recipe.name}})

    def clear_recipe(self) -> None:
        self.context = self.context.with_recipe(None)
        self.logger.info("recipe_cleared")

    def subscribe_records(self, observer: RecordObserver) -> None:
        self._record_observers.append(observer)

    def subscribe_session(self, observer: SessionObserver) -> None:
        self._session_observers.append(observer)

    def process_line(self, line: str | bytes) -> DecodeResult:
        """
        Process one notification line.

        Raises:
            NotificationDecodeError: If the line cannot be decoded. The session
                is left untouched.
        """
        result = decode_notification(line)
        self.context = self.context.observe(result.record)
        for command in result.commands:
            self._enqueue(command)
        if isinstance(result.record, AutoStatus):
            self._update_session(result.record)
        for observer in self._record_observers:
            observer(result.record)
        return result

    def handle_line(self, line: str | bytes) -> Optional[DecodeResult]:
        try:
            return self.process_line(line)
        except NotificationDecodeError as exc:
            self.decode_errors += 1
            self.logger.warning("decode_failed", extra={"details": {"line": exc.line, "reason": exc.reason}})
            return None

    def _update_session(self, status: AutoStatus) -> None:
        update = derive_session(self.context, status)
        if update.fired_additions:
            self.context.recipe.mark_sent(update.fired_additions)
            steps = [self.context.recipe.boil_steps[index] for index in update.fired_additions]
            self.logger.info(
                "boil_addition",
                extra={"details": {"names": [step.name for step in steps], "time": steps[0].time}},
            )
        if update.snapshot.state != self.snapshot.state:
            self.logger.info(
                "session_state",
                extra={"details": {"from": self.snapshot.state.value, "to": update.snapshot.state.value}},
            )
        for command in update.commands:
            if self.settings.enable_auto_advance:
                self._enqueue(command)
            else:
                self.logger.info("auto_advance_skipped", extra={"details": {"command": command.name}})
        self.snapshot = update.snapshot
        for observer in self._session_observers:
            observer(update.snapshot)

    # ---- outgoing ----
    def send(self, command: Command) -> None:
        """
        Queue a command behind everything already queued.

        Raises:
            asyncio.QueueFull: If ``queue_max_size`` commands are waiting.
        """
        self._queue.put_nowait(command)
        self.logger.info("command_queued", extra={"details": {"command": command.name, "lines": len(command)}})

    def _enqueue(self, command: Command) -> None:
        try:
            self.send(command)
        except asyncio.QueueFull:
            self.logger.error("command_dropped", extra={"details": {"command": command.name, "reason": "queue_full"}})

    @property
    def pending_commands(self) -> int:
        return self._queue.qsize()

    async def write_command(self, command: Command) -> None:
        for line in command.encode(warn=self.settings.warn_on_long_lines):
            await self.transport.write_line(line)
            self.logger.info("line_written", extra={"details": {"command": command.name, "line": line.decode("ascii")}})
            await asyncio.sleep(self.settings.inter_line_delay)

    async def drain(self) -> None:
        """Wait until every queued command has been written."""
        await self._queue.join()

    async def run_writer(self, stop_event: asyncio.Event) -> None:
        """Write queued commands until ``stop_event`` is set. A started command is always finished."""
        while not stop_event.is_set():
            getter = asyncio.ensure_future(self._queue.get())
            stopper = asyncio.ensure_future(stop_event.wait())
            try:
                await asyncio.wait({getter, stopper}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                stopper.cancel()
                if not getter.done():
                    getter.cancel()
                    with contextlib.suppress(asyncio.CancelledError):
                        await getter
            if getter.cancelled():
                break
            command = getter.result()
            try:
                await self.write_command(command)
            finally:
                self._queue.task_done()

    async def run_reader(self, stop_event: asyncio.Event) -> None:
        while not stop_event.is_set():
            line = await self.transport.read_line()
            if line is None:
                self.logger.info("transport_closed")
                break
            self.handle_line(line)

    def start(self) -> None:
        self._stop_event = asyncio.Event()
        self._writer = asyncio.create_task(self.run_writer(self._stop_event), name="grainlink-writer")
        self._reader = asyncio.create_task(self.run_reader(self._stop_event), name="grainlink-reader")

    async def stop(self) -> None:
        if self._stop_event is None:
            return
        self._stop_event.set()
        try:
            if self._reader is not None:
                self._reader.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await self._reader
            if self._writer is not None:
                await self._writer
        finally:
            self._reader = self._writer = self._stop_event = None
