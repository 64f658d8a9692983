"""Match-quality scoring between a requested name and a filesystem entry."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path, PurePath

ADMISSIBLE_SCORE = 2

STEM_CASELESS_SCORE = 2
STEM_EXACT_SCORE = 5
EXTENSION_SCORE = 1
EXTENSION_WITH_CASELESS_STEM_SCORE = 10
EXTENSION_WITH_EXACT_STEM_SCORE = 5
PARENT_CHAIN_SCORE = 20


@dataclass(frozen=True)
class RequestedName:
    """Pieces of a requested name that scoring compares against."""

    stem: str
    extension: str | None
    parents: tuple[str, ...]

    @classmethod
    def parse(cls, raw_name: str | PurePath) -> RequestedName:
        """Split `iwad/doom2.wad` into stem `doom2`, extension `wad`, parents `("iwad",)`."""
        name = PurePath(raw_name)
        extension = name.suffix[1:] if name.suffix else None
        parents = tuple(part for part in name.parent.parts if part not in ("", "."))
        return cls(stem=name.stem, extension=extension, parents=parents)


def score_candidate(requested: RequestedName, candidate: Path) -> int:
    """Score `candidate` against `requested`; anything below 2 is a rejection."""
    candidate_stem = candidate.stem
    candidate_extension = candidate.suffix[1:]

    stems_match = candidate_stem.lower() == requested.stem.lower()
    stems_match_exactly = candidate_stem == requested.stem
    extensions_match = (
        requested.extension is None or requested.extension.lower() == candidate_extension.lower()
    )

    score = 0
    if stems_match:
        score += STEM_CASELESS_SCORE
    if stems_match_exactly:
        score += STEM_EXACT_SCORE
    if extensions_match:
        score += EXTENSION_SCORE
        if stems_match:
            score += EXTENSION_WITH_CASELESS_STEM_SCORE
        if stems_match_exactly:
            score += EXTENSION_WITH_EXACT_STEM_SCORE
    if stems_match and _parent_chain_matches(requested.parents, candidate):
        score += PARENT_CHAIN_SCORE
    return score


def is_admissible(score: int) -> bool:
    return score >= ADMISSIBLE_SCORE


def _parent_chain_matches(requested_parents: Sequence[str], candidate: Path) -> bool:
    """Compare the requested folders with the candidate's nearest ancestor folders."""
    if not requested_parents:
        return False
    candidate_parents = candidate.parent.parts
    if len(candidate_parents) < len(requested_parents):
        return False
    nearest = candidate_parents[len(candidate_parents) - len(requested_parents) :]
    return all(
        wanted == actual for wanted, actual in zip(requested_parents, nearest, strict=True)
    )
