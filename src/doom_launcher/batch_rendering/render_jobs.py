"""Render job entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from doom_launcher.command_model import path_text

VIDEO_SUFFIX = ".mp4"


@dataclass(frozen=True)
class RenderJob:
    """One demo to play back and dump to a video file."""

    label: str
    source_path: Path
    output_path: Path


def build_render_job(demo_path: Path, video_dir: Path) -> RenderJob:
    """Job rendering `demo_path` to `<video_dir>/<demo stem>.mp4`."""
    label = path_text(demo_path.stem)
    return RenderJob(
        label=label,
        source_path=demo_path,
        output_path=video_dir / f"{label}{VIDEO_SUFFIX}",
    )
