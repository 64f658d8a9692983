"""Command line model tests."""

from __future__ import annotations

import shlex
from collections.abc import Iterator
from pathlib import Path

import pytest
from doom_launcher.command_model import CommandLine, Line, NonUtf8PathError, path_text


def _sample_command() -> CommandLine:
    command = CommandLine()
    command.push_word("/opt/doom/dsda-doom", 0)
    command.push_line(["-iwad", "/home/player/doom/doom2.wad"], 1)
    command.push_word("-file", 1)
    command.push_path(Path("/home/player/doom/3P Sound Pack.wad"), 2)
    command.push_path(Path("/home/player/doom/it's \"quoted\" $HOME.wad"), 2)
    return command


def test_display_text_indents_each_line() -> None:
    assert _sample_command().display_text() == (
        "/opt/doom/dsda-doom\n"
        "    -iwad /home/player/doom/doom2.wad\n"
        "    -file\n"
        "        /home/player/doom/3P Sound Pack.wad\n"
        "        /home/player/doom/it's \"quoted\" $HOME.wad"
    )


def test_flat_words_is_lazy_and_drops_indentation() -> None:
    words = _sample_command().flat_words()

    assert isinstance(words, Iterator)
    assert list(words) == [
        "/opt/doom/dsda-doom",
        "-iwad",
        "/home/player/doom/doom2.wad",
        "-file",
        "/home/player/doom/3P Sound Pack.wad",
        "/home/player/doom/it's \"quoted\" $HOME.wad",
    ]


def test_script_text_round_trips_through_a_shell_lexer() -> None:
    command = _sample_command()

    assert shlex.split(command.script_text()) == list(command.flat_words())


def test_flattening_is_idempotent() -> None:
    command = _sample_command()

    assert list(command.flat_words()) == list(command.flat_words())
    assert command.display_text() == command.display_text()
    assert command.script_text() == command.script_text()
    assert len(command) == 5


def test_clone_is_independent_of_the_template() -> None:
    template = _sample_command()
    clone = template.clone()

    clone.push_word("-timedemo", 1)
    clone.lines[0].words.append("--extra")

    assert len(template) == 5
    assert template.lines[0].words == ["/opt/doom/dsda-doom"]
    assert len(clone) == 6


def test_lines_reject_empty_words_and_negative_indents() -> None:
    with pytest.raises(ValueError):
        CommandLine().push_line(["-warp", ""], 1)
    with pytest.raises(ValueError):
        Line(words=["-fast"], indent_level=-1)


def test_path_text_rejects_paths_that_are_not_utf8() -> None:
    with pytest.raises(NonUtf8PathError, match="not valid UTF-8"):
        path_text(Path("/demos/bad\udcff.lmp"))
    assert path_text(Path("/demos/good.lmp")) == "/demos/good.lmp"
