"""Configuration loader service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from doom_launcher.engine_registry import EngineRegistryError, parse_engine_registry
from doom_launcher.file_resolution import AssetCategory

from .config_scaffold_builder import DEFAULT_CONFIG_FILENAME, write_placeholder_autoloads
from .runtime_settings import (
    DEFAULT_COOLDOWN_SECONDS,
    Autoloads,
    LaunchDefaults,
    LauncherSettings,
    default_search_roots,
)

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def default_doom_dir() -> Path:
    return Path.home() / "doom"


def load_settings(
    doom_dir: Path | str | None = None, config_path: Path | str | None = None
) -> LauncherSettings:
    """Load and validate the launcher configuration.

    Without an explicit `config_path`, `<doom_dir>/launcher.yaml` is read when present
    and defaults are used otherwise.
    """
    base = Path(doom_dir).expanduser() if doom_dir is not None else default_doom_dir()
    if config_path is None:
        path = base / DEFAULT_CONFIG_FILENAME
        if not path.exists():
            logger.debug("No launcher configuration at %s, using defaults", path)
            return _build_settings({}, base, None)
    else:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")
    return _build_settings(_read_mapping(path), base, path)


def load_autoloads(autoloads_path: Path | str) -> Autoloads:
    """Read the autoloads file, creating the commented template first if it is missing."""
    path = Path(autoloads_path)
    if not path.exists():
        try:
            write_placeholder_autoloads(path)
        except OSError as exc:
            raise ConfigurationError(
                f"creating {path.name} in your Doom directory: {exc}"
            ) from exc
        logger.info("Created autoloads template at %s", path)
    parsed = _read_mapping(path)
    return Autoloads(
        universal=_string_sequence(parsed.get("universal"), "universal"),
        sourceport=_string_sequence_mapping(parsed.get("sourceport"), "sourceport"),
        iwad=_string_sequence_mapping(parsed.get("iwad"), "iwad"),
    )


def _read_mapping(path: Path) -> Mapping[str, Any]:
    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"'{path}' contains bad YAML/JSON: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError(f"Configuration root of '{path}' must be a mapping.")
    return parsed


def _build_settings(
    parsed: Mapping[str, Any], doom_dir: Path, path: Path | None
) -> LauncherSettings:
    demo_dir = _optional_path(parsed.get("demo_dir"), doom_dir, "demo_dir") or doom_dir / "demo"
    video_dir = (
        _optional_path(parsed.get("video_dir"), doom_dir, "video_dir") or doom_dir / "videos"
    )
    search_roots = _parse_search_roots(parsed.get("search_roots"), doom_dir)
    cooldown_seconds = _require_non_negative_number(
        parsed.get("cooldown_seconds", DEFAULT_COOLDOWN_SECONDS), "cooldown_seconds"
    )
    apply_sprite_fixes = _require_bool(
        parsed.get("apply_sprite_fixes", True), "apply_sprite_fixes"
    )
    defaults = _parse_defaults(parsed.get("defaults"))
    try:
        engines = parse_engine_registry(parsed.get("engines"), doom_dir)
    except EngineRegistryError as exc:
        raise ConfigurationError(str(exc)) from exc

    return LauncherSettings(
        doom_dir=doom_dir,
        demo_dir=demo_dir,
        video_dir=video_dir,
        search_roots=search_roots,
        cooldown_seconds=cooldown_seconds,
        apply_sprite_fixes=apply_sprite_fixes,
        defaults=defaults,
        engines=engines,
        path=path,
    )


def _parse_search_roots(value: Any, doom_dir: Path) -> dict[AssetCategory, tuple[Path, ...]]:
    roots = default_search_roots(doom_dir)
    if value is None:
        return roots
    section = _require_mapping(value, "search_roots")
    for key, entries in section.items():
        try:
            category = AssetCategory(str(key).lower())
        except ValueError as exc:
            raise ConfigurationError(
                f"search_roots.{key} is not one of: iwad, pwad, demo."
            ) from exc
        names = _string_sequence(entries, f"search_roots.{key}")
        roots[category] = tuple(_resolve_path(doom_dir, name) for name in names)
    return roots


def _parse_defaults(value: Any) -> LaunchDefaults:
    if value is None:
        return LaunchDefaults()
    section = _require_mapping(value, "defaults")
    fallback = LaunchDefaults()
    return LaunchDefaults(
        engine=_optional_scalar(section.get("engine"), "defaults.engine") or fallback.engine,
        iwad=_optional_scalar(section.get("iwad"), "defaults.iwad") or fallback.iwad,
        complevel=_optional_scalar(section.get("complevel"), "defaults.complevel")
        or fallback.complevel,
        video_mode=_optional_scalar(section.get("video_mode"), "defaults.video_mode")
        or fallback.video_mode,
        geometry=_optional_scalar(section.get("geometry"), "defaults.geometry")
        or fallback.geometry,
    )


def _string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _string_sequence_mapping(value: Any, field_name: str) -> dict[str, tuple[str, ...]]:
    if value is None:
        return {}
    section = _require_mapping(value, field_name)
    return {
        str(key): _string_sequence(entries, f"{field_name}.{key}")
        for key, entries in section.items()
        if not str(key).startswith("_")
    }


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_path(value: Any, base_path: Path, field_name: str) -> Path | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{field_name} must be a non-empty string.")
    return _resolve_path(base_path, value.strip())


def _optional_scalar(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, str | int | float):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = str(value).strip()
    return stripped or None


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_non_negative_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ConfigurationError(f"{field_name} must be a number.")
    if value < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return float(value)
