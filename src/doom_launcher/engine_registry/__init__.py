"""Engine registry domain exports."""

from .engine_models import EngineDescriptor, EngineKind
from .registry_loader import (
    EngineRegistry,
    EngineRegistryError,
    UnknownEngineError,
    parse_engine_registry,
)

__all__ = [
    "EngineDescriptor",
    "EngineKind",
    "EngineRegistry",
    "EngineRegistryError",
    "UnknownEngineError",
    "parse_engine_registry",
]
