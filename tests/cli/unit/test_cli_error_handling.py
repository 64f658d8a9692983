"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from doom_launcher.cli import main


def test_missing_argument_returns_clean_click_error(capsys) -> None:
    exit_code = main(["search"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing argument" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["search", "--bogus", "doom2"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_invalid_configuration_is_reported_without_traceback(tmp_path: Path, capsys) -> None:
    (tmp_path / "launcher.yaml").write_text("cooldown_seconds: -5\n", encoding="utf-8")

    exit_code = main(["--doom-dir", str(tmp_path), "search", "doom2"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "ERROR: cooldown_seconds must not be negative." in captured.err
    assert "Traceback" not in captured.err


def test_unknown_sourceport_is_reported(tmp_path: Path, capsys) -> None:
    (tmp_path / "doom2.wad").write_bytes(b"IWAD")

    exit_code = main(["--doom-dir", str(tmp_path), "play", "--dry-run", "-e", "eternity"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "ERROR: Unknown sourceport 'eternity'" in captured.err


def test_engine_flag_without_separator_is_a_usage_error(tmp_path: Path, capsys) -> None:
    (tmp_path / "doom2.wad").write_bytes(b"IWAD")

    exit_code = main(["--doom-dir", str(tmp_path), "play", "--dry-run", "-nomusic"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option" in captured.err
    assert "-nomu" not in captured.out
    assert "Traceback" not in captured.err
