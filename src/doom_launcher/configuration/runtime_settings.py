"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from doom_launcher.engine_registry import EngineRegistry
from doom_launcher.file_resolution import AssetCategory

DEFAULT_ENGINE = "prboom-pp"
DEFAULT_IWAD = "doom2"
DEFAULT_COMPLEVEL = "9"
DEFAULT_VIDEO_MODE = "GL"
DEFAULT_GEOMETRY = "2560x1440F"
DEFAULT_COOLDOWN_SECONDS = 10.0
SHARED_DOOM_DIR = Path("/usr/share/games/doom")


@dataclass(frozen=True)
class LaunchDefaults:
    """Values used when the operator does not name them."""

    engine: str = DEFAULT_ENGINE
    iwad: str = DEFAULT_IWAD
    complevel: str = DEFAULT_COMPLEVEL
    video_mode: str = DEFAULT_VIDEO_MODE
    geometry: str = DEFAULT_GEOMETRY


@dataclass(frozen=True)
class LauncherSettings:  # pylint: disable=too-many-instance-attributes
    """Top-level configuration aggregate."""

    doom_dir: Path
    demo_dir: Path
    video_dir: Path
    search_roots: Mapping[AssetCategory, tuple[Path, ...]]
    cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS
    apply_sprite_fixes: bool = True
    defaults: LaunchDefaults = field(default_factory=LaunchDefaults)
    engines: EngineRegistry = field(default_factory=EngineRegistry)
    path: Path | None = None

    @property
    def autoloads_path(self) -> Path:
        return self.doom_dir / "autoloads.json"


@dataclass(frozen=True)
class Autoloads:
    """PWAD names loaded without being asked for."""

    universal: tuple[str, ...] = ()
    sourceport: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    iwad: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def names_for(self, engine_stem: str, iwad_stem: str) -> tuple[str, ...]:
        """Universal names, then the sourceport's, then the IWAD's."""
        return (
            self.universal
            + tuple(self.sourceport.get(engine_stem, ()))
            + tuple(self.iwad.get(iwad_stem, ()))
        )


def default_search_roots(doom_dir: Path) -> dict[AssetCategory, tuple[Path, ...]]:
    return {
        AssetCategory.IWAD: (doom_dir, SHARED_DOOM_DIR),
        AssetCategory.PWAD: (doom_dir, SHARED_DOOM_DIR),
        AssetCategory.DEMO: (doom_dir,),
    }
