"""File resolution domain exports."""

from .candidate_selection import (
    Chooser,
    choose_candidates,
    first_candidate,
    parse_selection,
    prompt_for_candidates,
)
from .path_scoring import RequestedName, score_candidate
from .resolver import (
    AmbiguousSelectionError,
    AssetNotFoundError,
    AssetResolver,
    ResolutionError,
    SearchRoots,
)
from .search_models import (
    ARCHIVE_EXTENSIONS,
    ASSET_EXTENSIONS,
    PATCH_EXTENSIONS,
    AssetCategory,
    Candidate,
    ResolutionResult,
    SearchRequest,
    accept_all,
    extension_allow_list,
)

__all__ = [
    "ARCHIVE_EXTENSIONS",
    "ASSET_EXTENSIONS",
    "PATCH_EXTENSIONS",
    "AssetCategory",
    "Candidate",
    "ResolutionResult",
    "SearchRequest",
    "accept_all",
    "extension_allow_list",
    "RequestedName",
    "score_candidate",
    "AssetResolver",
    "SearchRoots",
    "ResolutionError",
    "AssetNotFoundError",
    "AmbiguousSelectionError",
    "Chooser",
    "choose_candidates",
    "first_candidate",
    "parse_selection",
    "prompt_for_candidates",
]
