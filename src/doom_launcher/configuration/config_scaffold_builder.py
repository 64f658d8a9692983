"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "launcher.yaml"
AUTOLOADS_FILENAME = "autoloads.json"

_CONFIG_SCAFFOLD_TEMPLATE = """# Launcher configuration for doom-launcher.
# Every key is optional; the commented values are the defaults.
# Relative paths are resolved against the Doom directory.

# demo_dir: "demo"
# video_dir: "videos"
# cooldown_seconds: 10
# apply_sprite_fixes: true

# Searched in order; the first directory with a match wins.
# search_roots:
#   iwad: [".", "/usr/share/games/doom"]
#   pwad: [".", "/usr/share/games/doom"]
#   demo: ["."]

# defaults:
#   engine: "prboom-pp"
#   iwad: "doom2"
#   complevel: "9"
#   video_mode: "GL"
#   geometry: "2560x1440F"

engines:
  prboom-pp:
    binary: "<REQUIRED>"
    # kind is one of zdoom, boom, chocolate, other.
    kind: "boom"
    required_args: []
    supports_widescreen_assets: false
    # true makes PWADs load with -merge instead of -file.
    merges_assets: false
"""

_AUTOLOADS_TEMPLATE = """{
    "_comment": "Place in 'universal' those PWADs that you always want to load.",
    "universal": [],
    "iwad": {
        "_comment": ["PWADs loaded only under one IWAD, keyed by IWAD name."],
        "_example": ["foo.wad", "bar.pk3", "baz.zip"]
    },
    "sourceport": {
        "_comment": ["PWADs loaded only under one sourceport, keyed by binary name."],
        "_example": ["foo.wad", "bar.pk3", "baz.zip"]
    }
}
"""


def build_placeholder_configuration() -> str:
    """Build a YAML launcher configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def build_placeholder_autoloads() -> str:
    return _AUTOLOADS_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder launcher configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(
            f"Launcher configuration file already exists: {destination.resolve()}"
        )
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()


def write_placeholder_autoloads(output_path: Path | str) -> Path:
    """Write the autoloads template unless a file is already there."""
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Autoloads file already exists: {destination.resolve()}")
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(build_placeholder_autoloads(), encoding="utf-8")
    return destination.resolve()
