"""Structured, indentation-aware command line."""

from __future__ import annotations

import copy
import shlex
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from os import PathLike, fspath

INDENT_UNIT = "    "


class NonUtf8PathError(ValueError):
    """Raised when a path cannot be represented as UTF-8 text."""


def path_text(path: str | PathLike[str]) -> str:
    """Return `path` as text, rejecting names that only survive as surrogate escapes."""
    text = fspath(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise NonUtf8PathError(
            f"The path '{text.encode('utf-8', 'replace').decode('utf-8')}' is not valid UTF-8"
        ) from exc
    return text


@dataclass
class Line:
    """One indented group of argument words."""

    words: list[str]
    indent_level: int = 0

    def __post_init__(self) -> None:
        if self.indent_level < 0:
            raise ValueError("Indent level must not be negative.")
        if any(not word for word in self.words):
            raise ValueError("Command line words must not be empty.")

    def render(self, indent_unit: str = INDENT_UNIT) -> str:
        return indent_unit * self.indent_level + " ".join(self.words)


@dataclass
class CommandLine:
    """Ordered lines of words; flattening views never mutate it."""

    lines: list[Line] = field(default_factory=list)

    def push_line(self, words: Iterable[str], indent: int = 0) -> CommandLine:
        self.lines.append(Line(words=[str(word) for word in words], indent_level=indent))
        return self

    def push_word(self, word: str, indent: int = 0) -> CommandLine:
        return self.push_line((word,), indent)

    def push_path(self, path: str | PathLike[str], indent: int = 0) -> CommandLine:
        return self.push_word(path_text(path), indent)

    def clone(self) -> CommandLine:
        return copy.deepcopy(self)

    def flat_words(self) -> Iterator[str]:
        """Every word in line order, indentation discarded."""
        for line in self.lines:
            yield from line.words

    def display_text(self, indent_unit: str = INDENT_UNIT) -> str:
        return "\n".join(line.render(indent_unit) for line in self.lines)

    def script_text(self) -> str:
        """Single shell-safe line; each word is quoted on its own."""
        return " ".join(shlex.quote(word) for word in self.flat_words())

    def __len__(self) -> int:
        return len(self.lines)

    def __str__(self) -> str:
        return self.display_text()
