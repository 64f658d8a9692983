"""Engine registry tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from doom_launcher.engine_registry import (
    EngineKind,
    EngineRegistryError,
    UnknownEngineError,
    parse_engine_registry,
)


def test_parses_engines_with_flags_and_relative_binaries(tmp_path: Path) -> None:
    registry = parse_engine_registry(
        {
            "gzdoom": {
                "binary": "/usr/bin/gzdoom",
                "kind": "ZDoom",
                "required_args": ["-stdout", "+vid_fps", 1],
            },
            "prboom-pp": {
                "binary": "ports/prboom-plus",
                "supports_widescreen_assets": True,
            },
            "chocolate": {"binary": "/usr/bin/chocolate-doom", "merges_assets": True},
        },
        tmp_path,
    )

    gzdoom = registry.get("gzdoom")
    prboom = registry.get("prboom-pp")
    chocolate = registry.get("chocolate")
    assert registry.names() == ("gzdoom", "prboom-pp", "chocolate")
    assert gzdoom.kind is EngineKind.ZDOOM
    assert gzdoom.required_args == ("-stdout", "+vid_fps", "1")
    assert (gzdoom.skill_flag, gzdoom.default_skill) == ("+skill", "3")
    assert prboom.binary_path == (tmp_path / "ports" / "prboom-plus").resolve()
    assert prboom.kind is EngineKind.BOOM
    assert (prboom.skill_flag, prboom.default_skill) == ("-skill", "4")
    assert prboom.supports_widescreen_assets is True
    assert prboom.asset_flag == "-file"
    assert chocolate.asset_flag == "-merge"


def test_binary_path_shorthand(tmp_path: Path) -> None:
    registry = parse_engine_registry({"dsda": "/opt/dsda-doom"}, tmp_path)

    assert registry.get("dsda").binary_path == Path("/opt/dsda-doom")
    assert "dsda" in registry
    assert len(registry) == 1


def test_missing_section_is_an_empty_registry(tmp_path: Path) -> None:
    assert len(parse_engine_registry(None, tmp_path)) == 0


def test_unknown_engine_lookup_names_the_sourceport(tmp_path: Path) -> None:
    registry = parse_engine_registry({"dsda": "/opt/dsda-doom"}, tmp_path)

    with pytest.raises(UnknownEngineError, match="Unknown sourceport 'eternity'"):
        registry.get("eternity")


@pytest.mark.parametrize(
    ("definition", "message"),
    [
        ({"binary": "<REQUIRED>"}, "placeholder"),
        ({"binary": ""}, "binary must be a non-empty string"),
        ({"binary": "/bin/doom", "kind": "build"}, "kind must be one of"),
        ({"binary": "/bin/doom", "merges_assets": "yes"}, "must be true or false"),
        (["/bin/doom"], "must be a mapping"),
    ],
)
def test_invalid_engine_definitions_are_rejected(
    tmp_path: Path, definition: object, message: str
) -> None:
    with pytest.raises(EngineRegistryError, match=message):
        parse_engine_registry({"broken": definition}, tmp_path)
