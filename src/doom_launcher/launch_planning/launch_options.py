"""Launch planning entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from doom_launcher.batch_rendering import RenderJob
from doom_launcher.command_model import CommandLine
from doom_launcher.engine_registry import EngineDescriptor


@dataclass(frozen=True)
class LaunchOptions:  # pylint: disable=too-many-instance-attributes
    """Operator choices for one launch; `None` means use the configured default."""

    engine: str | None = None
    iwad: str | None = None
    pwads: tuple[str, ...] = ()
    extra_pwads: tuple[str, ...] = ()
    complevel: str | None = None
    video_mode: str | None = None
    geometry: str | None = None
    record: str | None = None
    record_from_to: tuple[str, str] | None = None
    play_demo: str | None = None
    warp: str | None = None
    skill: str | None = None
    fast: bool = False
    respawn: bool = False
    no_monsters: bool = False
    pistol_start: bool = False
    short_tics: bool = False
    vanilla_weapons: bool = False
    sound_pack: bool = False
    debug: bool = False
    render: tuple[str, ...] = ()
    passthrough: tuple[str, ...] = ()


@dataclass
class AssetBundle:
    """Archives passed as files and patches passed as DEH/BEX, in load order."""

    wads: list[Path] = field(default_factory=list)
    dehs: list[Path] = field(default_factory=list)


@dataclass(frozen=True)
class LaunchPlan:
    """Command template plus everything derived while building it."""

    command: CommandLine
    engine: EngineDescriptor
    iwad_path: Path
    video_dir: Path
    render_jobs: tuple[RenderJob, ...] = ()
