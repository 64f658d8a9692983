"""Engine registry parsing and lookup."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any

from .engine_models import EngineDescriptor, EngineKind

PLACEHOLDER_VALUE = "<REQUIRED>"


class EngineRegistryError(Exception):
    """Raised when the engine registry section is invalid."""


class UnknownEngineError(EngineRegistryError):
    """Raised when a requested sourceport is not registered."""


class EngineRegistry:
    """Read-only mapping of sourceport names to descriptors."""

    def __init__(self, engines: Mapping[str, EngineDescriptor] | None = None) -> None:
        self._engines = dict(engines or {})

    def get(self, name: str) -> EngineDescriptor:
        try:
            return self._engines[name]
        except KeyError as exc:
            raise UnknownEngineError(f"Unknown sourceport '{name}'") from exc

    def names(self) -> tuple[str, ...]:
        return tuple(self._engines)

    def __contains__(self, name: object) -> bool:
        return name in self._engines

    def __iter__(self) -> Iterator[EngineDescriptor]:
        return iter(self._engines.values())

    def __len__(self) -> int:
        return len(self._engines)


def parse_engine_registry(value: Any, base_path: Path) -> EngineRegistry:
    """Build a registry from the `engines` mapping of the settings file."""
    if value is None:
        return EngineRegistry()
    if not isinstance(value, Mapping):
        raise EngineRegistryError("Configuration section 'engines' must be a mapping.")
    engines: dict[str, EngineDescriptor] = {}
    for name, definition in value.items():
        if not isinstance(name, str) or not name.strip():
            raise EngineRegistryError("Engine names must be non-empty strings.")
        engines[name] = _parse_engine(name, definition, base_path)
    return EngineRegistry(engines)


def _parse_engine(name: str, definition: Any, base_path: Path) -> EngineDescriptor:
    label = f"engines.{name}"
    if isinstance(definition, str):
        definition = {"binary": definition}
    if not isinstance(definition, Mapping):
        raise EngineRegistryError(f"{label} must be a mapping or a binary path.")

    binary = definition.get("binary")
    if not isinstance(binary, str) or not binary.strip():
        raise EngineRegistryError(f"{label}.binary must be a non-empty string.")
    if binary.strip() == PLACEHOLDER_VALUE:
        raise EngineRegistryError(
            f"{label}.binary still holds the {PLACEHOLDER_VALUE} placeholder."
        )
    binary_path = Path(binary.strip()).expanduser()
    if not binary_path.is_absolute():
        binary_path = (base_path / binary_path).resolve()

    kind_raw = definition.get("kind", EngineKind.BOOM.value)
    try:
        kind = EngineKind(str(kind_raw).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in EngineKind)
        raise EngineRegistryError(f"{label}.kind must be one of: {allowed}.") from exc

    return EngineDescriptor(
        name=name,
        binary_path=binary_path,
        required_args=_string_tuple(definition.get("required_args"), f"{label}.required_args"),
        kind=kind,
        supports_widescreen_assets=_flag(
            definition.get("supports_widescreen_assets"), f"{label}.supports_widescreen_assets"
        ),
        merges_assets=_flag(definition.get("merges_assets"), f"{label}.merges_assets"),
    )


def _string_tuple(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.split())
    if not isinstance(value, Sequence):
        raise EngineRegistryError(f"{field_name} must be a list of strings.")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str | int | float) or isinstance(item, bool):
            raise EngineRegistryError(f"{field_name} entries must be strings.")
        text = str(item).strip()
        if text:
            items.append(text)
    return tuple(items)


def _flag(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise EngineRegistryError(f"{field_name} must be true or false.")
    return value
