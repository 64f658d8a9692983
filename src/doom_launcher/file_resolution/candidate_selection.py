"""Disambiguation between several resolved candidates."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from pathlib import Path

import click

from .resolver import AmbiguousSelectionError
from .search_models import ResolutionResult

Chooser = Callable[[str, Sequence[Path]], list[Path]]

_INDEX_SEPARATORS = re.compile(r"[\s,]+")


def first_candidate(_raw_name: str, candidates: Sequence[Path]) -> list[Path]:
    """Deterministic chooser keeping only the best-ranked candidate."""
    return list(candidates[:1])


def prompt_for_candidates(raw_name: str, candidates: Sequence[Path]) -> list[Path]:
    """Interactive chooser: list the candidates and read one or more indices."""
    click.echo(
        f"Multiple files were found for the search term {raw_name}. "
        "Please select one or more of the following:"
    )
    for index, candidate in enumerate(candidates, start=1):
        click.echo(f"  [{index}] {candidate}")
    while True:
        answer = click.prompt("Selection", default="1", show_default=True)
        try:
            return parse_selection(answer, candidates)
        except ValueError as exc:
            click.echo(str(exc), err=True)


def parse_selection(answer: str, candidates: Sequence[Path]) -> list[Path]:
    """Turn `"1, 3"` into the first and third candidates."""
    chosen: list[Path] = []
    for token in _INDEX_SEPARATORS.split(answer.strip()):
        if not token:
            continue
        if not token.isdigit() or not 1 <= int(token) <= len(candidates):
            raise ValueError(f"Selection '{token}' is not between 1 and {len(candidates)}.")
        candidate = candidates[int(token) - 1]
        if candidate not in chosen:
            chosen.append(candidate)
    return chosen


def choose_candidates(result: ResolutionResult, chooser: Chooser) -> list[Path]:
    """Return the chosen paths of `result`; a lone candidate needs no chooser."""
    if len(result) == 1:
        return [result.best]
    chosen = chooser(result.raw_name, result.paths) if result.paths else []
    if not chosen:
        raise AmbiguousSelectionError(f"No file selected for '{result.raw_name}'.")
    return chosen
