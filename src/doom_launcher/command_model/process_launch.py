"""Synchronous launch of a flattened command line."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

ProcessRunner = Callable[[Sequence[str], Path], int]


class ProcessLaunchError(Exception):
    """Raised when the external program cannot be started."""


def launch_command(words: Iterable[str], *, run_process: ProcessRunner | None = None) -> int:
    """Run `words` (executable first) from the executable's directory and return its exit code."""
    process_runner = run_process or _run_process
    iterator = iter(words)
    try:
        binary = Path(next(iterator))
    except StopIteration as exc:
        raise ProcessLaunchError("Cannot launch an empty command line.") from exc
    if not binary.exists():
        raise ProcessLaunchError(f"could not run Doom: file not found: '{binary}'")
    arguments = [word.strip() for word in iterator if word.strip()]
    command = (str(binary), *arguments)
    logger.debug("Launching %s", shlex.join(command))
    return process_runner(command, binary.parent)


def _run_process(command: Sequence[str], cwd: Path) -> int:
    try:
        completed = subprocess.run(list(command), cwd=cwd, check=False)
    except OSError as exc:
        raise ProcessLaunchError(f"could not run Doom: {exc}") from exc
    return completed.returncode
