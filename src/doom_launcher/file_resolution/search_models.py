"""File resolution domain entities."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

PathPredicate = Callable[[Path], bool]

ASSET_EXTENSIONS = ("wad", "deh", "bex", "pk3", "pk7", "pke", "zip")
ARCHIVE_EXTENSIONS = ("wad", "pk3", "pk7", "pke", "zip")
PATCH_EXTENSIONS = ("deh", "bex")


class AssetCategory(str, Enum):
    """Kind of asset being looked up; selects the search roots."""

    IWAD = "iwad"
    PWAD = "pwad"
    DEMO = "demo"


def accept_all(_path: Path) -> bool:
    return True


def extension_allow_list(extensions: tuple[str, ...] = ASSET_EXTENSIONS) -> PathPredicate:
    """Build a predicate accepting paths whose extension is in `extensions`, ignoring case."""
    allowed = frozenset(extension.lower().lstrip(".") for extension in extensions)

    def _accept(path: Path) -> bool:
        return path.suffix[1:].lower() in allowed

    return _accept


@dataclass(frozen=True)
class SearchRequest:
    """One name to resolve within a category."""

    raw_name: str
    category: AssetCategory
    accept: PathPredicate = field(default=accept_all, compare=False)

    def __post_init__(self) -> None:
        if not self.raw_name or not self.raw_name.strip():
            raise ValueError("Search name must not be empty.")


@dataclass(frozen=True)
class Candidate:
    """Scored filesystem entry, only comparable within one resolution call."""

    path: Path
    score: int


@dataclass(frozen=True)
class ResolutionResult:
    """Ranked paths for one request, best match first."""

    raw_name: str
    paths: tuple[Path, ...]

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    @property
    def is_empty(self) -> bool:
        return not self.paths

    @property
    def is_ambiguous(self) -> bool:
        return len(self.paths) > 1

    @property
    def best(self) -> Path:
        """Highest-ranked path."""
        if not self.paths:
            raise IndexError(f"No candidates for '{self.raw_name}'.")
        return self.paths[0]
