"""Fuzzy asset resolution over configured search roots."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path

from .path_scoring import RequestedName, is_admissible, score_candidate
from .search_models import (
    AssetCategory,
    Candidate,
    PathPredicate,
    ResolutionResult,
    SearchRequest,
    accept_all,
)

logger = logging.getLogger(__name__)

SearchRoots = Mapping[AssetCategory, Sequence[Path]]


class ResolutionError(Exception):
    """Raised when a requested asset name cannot be turned into a path."""


class AssetNotFoundError(ResolutionError):
    """Raised when no search root yields an admissible candidate."""

    def __init__(self, raw_name: str) -> None:
        super().__init__(f"file not found: '{raw_name}'")
        self.raw_name = raw_name


class AmbiguousSelectionError(ResolutionError):
    """Raised when a single file is required but none was chosen among candidates."""


class AssetResolver:
    """Stateless resolver; every call walks the filesystem afresh."""

    def __init__(self, search_roots: SearchRoots) -> None:
        self._search_roots = {
            category: tuple(Path(root) for root in roots)
            for category, roots in search_roots.items()
        }

    def roots_for(self, category: AssetCategory) -> tuple[Path, ...]:
        return self._search_roots.get(category, ())

    def search(self, request: SearchRequest) -> ResolutionResult:
        """Return the ranked candidates of the first root with any; may be empty."""
        requested_path = Path(request.raw_name)
        if requested_path.is_absolute():
            # The requested extension is dropped: only the stem is searched for.
            return self._search_roots_in_order(
                request.raw_name,
                RequestedName(stem=requested_path.stem, extension=None, parents=()),
                (requested_path.parent,),
                request.accept,
            )
        return self._search_roots_in_order(
            request.raw_name,
            RequestedName.parse(request.raw_name),
            self.roots_for(request.category),
            request.accept,
        )

    def resolve(self, request: SearchRequest) -> ResolutionResult:
        """Like `search`, but an empty outcome raises `AssetNotFoundError`."""
        result = self.search(request)
        if result.is_empty:
            raise AssetNotFoundError(request.raw_name)
        return result

    def resolve_name(
        self,
        raw_name: str,
        category: AssetCategory,
        accept: PathPredicate = accept_all,
    ) -> ResolutionResult:
        return self.resolve(SearchRequest(raw_name=raw_name, category=category, accept=accept))

    def _search_roots_in_order(
        self,
        raw_name: str,
        requested: RequestedName,
        roots: Sequence[Path],
        accept: PathPredicate,
    ) -> ResolutionResult:
        for root in roots:
            logger.info("Searching for '%s' in '%s'", raw_name, root)
            if not root.is_dir():
                logger.debug("Skipping missing search root '%s'", root)
                continue
            candidates = [
                candidate
                for candidate in _score_entries(requested, root.resolve(), accept)
                if is_admissible(candidate.score)
            ]
            if candidates:
                ranked = sorted(candidates, key=lambda candidate: candidate.score, reverse=True)
                paths = tuple(candidate.path for candidate in ranked)
                logger.info("Results: [%s]", ", ".join(str(path) for path in paths))
                return ResolutionResult(raw_name=raw_name, paths=paths)
        return ResolutionResult(raw_name=raw_name, paths=())


def _score_entries(
    requested: RequestedName, root: Path, accept: PathPredicate
) -> Iterator[Candidate]:
    for path in _walk_files(root):
        if not accept(path):
            continue
        yield Candidate(path=path, score=score_candidate(requested, path))


def _walk_files(root: Path) -> Iterator[Path]:
    """Yield every non-directory entry below `root`, in a stable name order."""

    def _raise(error: OSError) -> None:
        raise ResolutionError(f"walking directory '{error.filename}': {error.strerror}") from error

    for directory, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(directory) / filename
            if not path.is_dir():
                yield path
