"""Operator interrupts that inject demos into a running render batch.

The handler only ever produces: it sends new jobs (or one scoped error) on the job
channel and a resume token on the resume channel. The render queue is the single
consumer and the only owner of the pending jobs.
"""

from __future__ import annotations

import logging
import queue
import signal
import threading
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import click

from doom_launcher.command_model import NonUtf8PathError
from doom_launcher.file_resolution import ResolutionError

from .operator_prompts import read_demo_names
from .render_jobs import RenderJob

logger = logging.getLogger(__name__)

DemoResolver = Callable[[str], Sequence[Path]]
JobFactory = Callable[[Path], RenderJob]
LineReader = Callable[[], str]


class InterruptInputError(Exception):
    """Operator input from one interrupt could not be turned into jobs."""


def _exit_immediately() -> None:
    click.echo()
    click.echo("Received interrupt, exiting. Goodbye.")
    raise SystemExit(0)


class InterruptController:
    """Pause/resume gate shared between the render queue and the interrupt handler."""

    def __init__(
        self,
        *,
        resolve_demo: DemoResolver,
        job_factory: JobFactory,
        read_line: LineReader | None = None,
        on_shutdown: Callable[[], None] | None = None,
    ) -> None:
        self._resolve_demo = resolve_demo
        self._job_factory = job_factory
        self._read_line = read_line or read_demo_names
        self._on_shutdown = on_shutdown or _exit_immediately
        self.interruptible = threading.Event()
        self.paused = threading.Event()
        self.job_channel: queue.SimpleQueue[RenderJob | InterruptInputError] = (
            queue.SimpleQueue()
        )
        self.resume_channel: queue.SimpleQueue[None] = queue.SimpleQueue()
        # Reentrant: the signal handler may run on the thread that holds it.
        self._gate = threading.RLock()

    def handle_interrupt(self) -> None:
        """Collect extra demos while interruptible, otherwise shut down."""
        with self._gate:
            if not self.interruptible.is_set():
                self._on_shutdown()
                return
            self.paused.set()
        try:
            self._collect_jobs()
        finally:
            self.paused.clear()
            self.resume_channel.put(None)

    def open_window(self) -> None:
        self.interruptible.set()

    def close_window(self) -> None:
        """End the interruptible window, waiting for an interrupt still collecting input."""
        with self._gate:
            self.interruptible.clear()
            waiting = self.paused.is_set()
        if waiting:
            self.resume_channel.get()
        # Tokens left by interrupts that finished before anyone waited.
        while True:
            try:
                self.resume_channel.get_nowait()
            except queue.Empty:
                break

    def drain_jobs(self) -> list[RenderJob | InterruptInputError]:
        """Every message sent so far, without blocking."""
        messages: list[RenderJob | InterruptInputError] = []
        while True:
            try:
                messages.append(self.job_channel.get_nowait())
            except queue.Empty:
                return messages

    @contextmanager
    def installed(self) -> Iterator[None]:
        """Route SIGINT to `handle_interrupt` for the duration of the block."""
        if not hasattr(signal, "SIGINT"):
            yield
            return

        original_sigint = signal.getsignal(signal.SIGINT)

        def _handler(_signum: int, _frame: object | None) -> None:
            self.handle_interrupt()

        try:
            signal.signal(signal.SIGINT, _handler)
        except ValueError:
            # Signal handlers can only be installed in main thread.
            yield
            return
        try:
            yield
        finally:
            signal.signal(signal.SIGINT, original_sigint)

    def _collect_jobs(self) -> None:
        names = self._read_line().split()
        if not names:
            click.echo("You didn't enter any demo names.")
            return
        try:
            jobs = [
                self._job_factory(demo_path)
                for name in names
                for demo_path in self._resolve_demo(name)
            ]
        except (ResolutionError, NonUtf8PathError) as exc:
            logger.debug("Discarding interrupt input %r", names)
            self.job_channel.put(InterruptInputError(str(exc)))
            return
        for job in jobs:
            self.job_channel.put(job)
