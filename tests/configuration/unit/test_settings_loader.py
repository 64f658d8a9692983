"""Launcher settings loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from doom_launcher.configuration import (
    ConfigurationError,
    load_autoloads,
    load_settings,
)
from doom_launcher.configuration.runtime_settings import SHARED_DOOM_DIR
from doom_launcher.engine_registry import EngineKind
from doom_launcher.file_resolution import AssetCategory


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_defaults_apply_when_the_doom_dir_has_no_configuration(tmp_path: Path) -> None:
    settings = load_settings(tmp_path)

    assert settings.path is None
    assert settings.demo_dir == tmp_path / "demo"
    assert settings.video_dir == tmp_path / "videos"
    assert settings.autoloads_path == tmp_path / "autoloads.json"
    assert settings.search_roots[AssetCategory.IWAD] == (tmp_path, SHARED_DOOM_DIR)
    assert settings.search_roots[AssetCategory.DEMO] == (tmp_path,)
    assert settings.cooldown_seconds == 10.0
    assert settings.apply_sprite_fixes is True
    assert settings.defaults.engine == "prboom-pp"
    assert settings.defaults.iwad == "doom2"
    assert settings.defaults.complevel == "9"
    assert len(settings.engines) == 0


def test_loads_yaml_configuration_from_the_doom_dir(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "launcher.yaml",
        """
demo_dir: recordings
video_dir: /srv/videos
cooldown_seconds: 0
apply_sprite_fixes: false
search_roots:
  demo: [recordings, "/srv/demos"]
defaults:
  engine: gzdoom
  complevel: 11
engines:
  gzdoom:
    binary: /usr/bin/gzdoom
    kind: zdoom
""",
    )

    settings = load_settings(tmp_path)

    assert settings.path == config_path
    assert settings.demo_dir == (tmp_path / "recordings").resolve()
    assert settings.video_dir == Path("/srv/videos")
    assert settings.cooldown_seconds == 0.0
    assert settings.apply_sprite_fixes is False
    assert settings.search_roots[AssetCategory.DEMO] == (
        (tmp_path / "recordings").resolve(),
        Path("/srv/demos"),
    )
    assert settings.search_roots[AssetCategory.PWAD] == (tmp_path, SHARED_DOOM_DIR)
    assert settings.defaults.engine == "gzdoom"
    assert settings.defaults.complevel == "11"
    assert settings.defaults.iwad == "doom2"
    assert settings.engines.get("gzdoom").kind is EngineKind.ZDOOM


def test_explicit_configuration_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Configuration file not found"):
        load_settings(tmp_path, tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    ("contents", "message"),
    [
        ("- just\n- a list\n", "must be a mapping"),
        ("cooldown_seconds: -1\n", "must not be negative"),
        ("cooldown_seconds: soon\n", "must be a number"),
        ("search_roots:\n  maps: [.]\n", "not one of: iwad, pwad, demo"),
        ("engines:\n  dsda:\n    binary: '<REQUIRED>'\n", "placeholder"),
        ("apply_sprite_fixes: maybe\n", "true or false"),
        ("engines: [\n", "bad YAML/JSON"),
    ],
)
def test_invalid_configuration_is_rejected(tmp_path: Path, contents: str, message: str) -> None:
    config_path = _write_file(tmp_path / "custom.yaml", contents)

    with pytest.raises(ConfigurationError, match=message):
        load_settings(tmp_path, config_path)


def test_missing_autoloads_file_is_created_from_the_template(tmp_path: Path) -> None:
    autoloads_path = tmp_path / "autoloads.json"

    autoloads = load_autoloads(autoloads_path)

    assert autoloads_path.exists()
    assert json.loads(autoloads_path.read_text(encoding="utf-8"))["universal"] == []
    assert autoloads.universal == ()
    assert autoloads.iwad == {}
    assert autoloads.sourceport == {}


def test_autoloads_are_ordered_universal_sourceport_then_iwad(tmp_path: Path) -> None:
    autoloads_path = _write_file(
        tmp_path / "autoloads.json",
        json.dumps(
            {
                "universal": ["brightmaps.pk3"],
                "sourceport": {"prboom-plus": ["smoothed.wad"], "_comment": ["ignored"]},
                "iwad": {"doom2": ["nerve.wad", "  "], "tnt": ["tntfix.wad"]},
            }
        ),
    )

    autoloads = load_autoloads(autoloads_path)

    assert "_comment" not in autoloads.sourceport
    assert autoloads.names_for("prboom-plus", "doom2") == (
        "brightmaps.pk3",
        "smoothed.wad",
        "nerve.wad",
    )
    assert autoloads.names_for("gzdoom", "plutonia") == ("brightmaps.pk3",)
