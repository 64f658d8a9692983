"""Engine registry entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EngineKind(str, Enum):
    """Argument dialect family of a sourceport."""

    ZDOOM = "zdoom"
    BOOM = "boom"
    CHOCOLATE = "chocolate"
    OTHER = "other"


@dataclass(frozen=True)
class EngineDescriptor:
    """How to invoke one sourceport."""

    name: str
    binary_path: Path
    required_args: tuple[str, ...] = ()
    kind: EngineKind = EngineKind.BOOM
    supports_widescreen_assets: bool = False
    merges_assets: bool = False

    @property
    def skill_flag(self) -> str:
        return "+skill" if self.kind is EngineKind.ZDOOM else "-skill"

    @property
    def default_skill(self) -> str:
        return "3" if self.kind is EngineKind.ZDOOM else "4"

    @property
    def asset_flag(self) -> str:
        return "-merge" if self.merges_assets else "-file"
