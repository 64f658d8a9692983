"""Sequential, interruptible render queue."""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

import click

from doom_launcher.command_model import CommandLine, launch_command
from doom_launcher.configuration.runtime_settings import DEFAULT_COOLDOWN_SECONDS

from .interrupt_channel import InterruptController, InterruptInputError
from .operator_prompts import wait_for_enter
from .render_jobs import RenderJob

logger = logging.getLogger(__name__)

Launcher = Callable[[Iterable[str]], int]


class RenderJobFailedError(Exception):
    """Raised when a render job exits abnormally; the rest of the queue is dropped."""


class QueueState(str, Enum):
    """Render queue run states."""

    IDLE = "idle"
    ANNOUNCING = "announcing"
    RUNNING = "running"
    COOLDOWN = "cooldown"


@dataclass(frozen=True)
class RenderSummary:
    """Jobs launched by one queue run, in launch order."""

    completed: tuple[RenderJob, ...]


class RenderQueue:  # pylint: disable=too-many-instance-attributes
    """FIFO of render jobs sharing one command line template."""

    def __init__(
        self,
        template: CommandLine,
        controller: InterruptController,
        *,
        jobs: Iterable[RenderJob] = (),
        launch: Launcher | None = None,
        confirm: Callable[[str], None] | None = None,
        sleep: Callable[[float], None] | None = None,
        cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
    ) -> None:
        self._template = template.clone()
        self._controller = controller
        self._pending: deque[RenderJob] = deque(jobs)
        self._launch = launch or launch_command
        self._confirm = confirm or wait_for_enter
        self._sleep = sleep or time.sleep
        self._cooldown_seconds = cooldown_seconds
        self.state = QueueState.IDLE

    @property
    def pending(self) -> tuple[RenderJob, ...]:
        return tuple(self._pending)

    def enqueue(self, job: RenderJob) -> None:
        self._pending.append(job)

    def build_job_command(self, job: RenderJob) -> CommandLine:
        """Template clone with the job's playback source and video output appended."""
        command = self._template.clone()
        command.push_word("-timedemo", 1)
        command.push_path(job.source_path, 2)
        command.push_word("-viddump", 1)
        command.push_path(job.output_path, 2)
        return command

    def run(self) -> RenderSummary:
        """Launch every pending job, including ones injected during cooldowns."""
        completed: list[RenderJob] = []
        try:
            while self._pending:
                self.state = QueueState.ANNOUNCING
                self._announce()
                job = self._pending.popleft()
                job.output_path.parent.mkdir(parents=True, exist_ok=True)
                command = self.build_job_command(job)
                number = len(completed) + 1
                click.echo(f"Command line #{number}: \n'\n{command.display_text()}'")
                if number == 1:
                    batch = "batch " if self._pending else ""
                    self._confirm(f"Press enter to begin {batch}rendering.")
                else:
                    self._cool_down()

                self.state = QueueState.RUNNING
                logger.info("Rendering %s to %s", job.source_path, job.output_path)
                exit_code = self._launch(command.flat_words())
                if exit_code != 0:
                    raise RenderJobFailedError(
                        f"Rendering '{job.label}' exited with status {exit_code}; "
                        f"{len(self._pending)} queued job(s) dropped."
                    )
                completed.append(job)
        finally:
            self.state = QueueState.IDLE
        return RenderSummary(completed=tuple(completed))

    def _announce(self) -> None:
        click.echo("====== RENDERING QUEUE ======")
        for job in self._pending:
            click.echo(f"{job.source_path}  ==>  {job.label}")
        click.echo("==== END RENDERING QUEUE ====")

    def _cool_down(self) -> None:
        self.state = QueueState.COOLDOWN
        click.echo(
            f"Continuing batch rendering in {self._cooldown_seconds:g} seconds. "
            "Press <C-c> to add more demos to the queue."
        )
        self._controller.open_window()
        try:
            self._sleep(self._cooldown_seconds)
        finally:
            self._controller.close_window()
        for message in self._controller.drain_jobs():
            if isinstance(message, InterruptInputError):
                click.echo(f"ERROR: {message}", err=True)
                continue
            self._pending.append(message)
