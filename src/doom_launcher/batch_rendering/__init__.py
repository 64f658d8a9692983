"""Batch rendering domain exports."""

from .interrupt_channel import InterruptController, InterruptInputError
from .operator_prompts import read_demo_names, wait_for_enter
from .render_jobs import RenderJob, build_render_job
from .render_queue import (
    QueueState,
    RenderJobFailedError,
    RenderQueue,
    RenderSummary,
)

__all__ = [
    "InterruptController",
    "InterruptInputError",
    "read_demo_names",
    "wait_for_enter",
    "RenderJob",
    "build_render_job",
    "QueueState",
    "RenderJobFailedError",
    "RenderQueue",
    "RenderSummary",
]
