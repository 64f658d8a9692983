"""Scenario-style integration tests for core launcher behaviors."""

from __future__ import annotations

import stat
from pathlib import Path

from click.testing import CliRunner
from doom_launcher.batch_rendering import InterruptController, RenderQueue, build_render_job
from doom_launcher.cli import cli
from doom_launcher.configuration import load_settings
from doom_launcher.file_resolution import AssetCategory, AssetResolver, first_candidate
from doom_launcher.launch_planning import LaunchOptions, LaunchPlanner


def _build_doom_dir(tmp_path: Path) -> Path:
    root = tmp_path.resolve() / "doom"
    for name in (
        "doom2.wad",
        "DOOM2.WAD",
        "pwads/ancient/ancient.wad",
        "pwads/ancient/ancient.deh",
        "demo/ancient/a01.lmp",
        "demo/ancient/a02.lmp",
        "demo/ancient/a03.lmp",
        "demo/ancient/extra.lmp",
    ):
        target = root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(b"WAD")
    binary = root.parent / "bin" / "prboom-plus"
    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    binary.chmod(binary.stat().st_mode | stat.S_IXUSR)
    (root / "launcher.yaml").write_text(
        f"""
video_dir: {root.parent / "videos"}
cooldown_seconds: 0
apply_sprite_fixes: false
search_roots:
  iwad: ["."]
  pwad: ["pwads"]
  demo: ["demo"]
engines:
  prboom-pp: {binary}
""",
        encoding="utf-8",
    )
    return root


def test_exact_case_iwad_is_preferred_over_other_casings(tmp_path: Path) -> None:
    settings = load_settings(_build_doom_dir(tmp_path))
    resolver = AssetResolver(settings.search_roots)

    result = resolver.resolve_name("doom2.wad", AssetCategory.IWAD)

    assert result.best.name == "doom2.wad"
    assert [path.name for path in result] == ["doom2.wad", "DOOM2.WAD"]


def test_batch_render_with_an_injected_demo(tmp_path: Path) -> None:
    settings = load_settings(_build_doom_dir(tmp_path))
    planner = LaunchPlanner(
        settings,
        AssetResolver(settings.search_roots),
        chooser=first_candidate,
    )
    plan = planner.plan(LaunchOptions(pwads=("ancient",), render=("a01:a02", "a03")))
    controller = InterruptController(
        resolve_demo=planner.resolve_demos,
        job_factory=lambda demo: build_render_job(demo, plan.video_dir),
        read_line=lambda: "extra",
    )
    launched: list[str] = []
    interrupted: list[bool] = []

    def sleep(_seconds: float) -> None:
        if not interrupted:
            interrupted.append(True)
            controller.handle_interrupt()

    def launch(words) -> int:
        words = list(words)
        launched.append(Path(words[words.index("-timedemo") + 1]).stem)
        return 0

    render_queue = RenderQueue(
        plan.command,
        controller,
        jobs=plan.render_jobs,
        launch=launch,
        confirm=lambda message: None,
        sleep=sleep,
        cooldown_seconds=settings.cooldown_seconds,
    )

    summary = render_queue.run()

    assert launched == ["a01", "a02", "a03", "extra"]
    assert summary.completed[-1].output_path == (
        settings.video_dir / "doom2.wad" / "ancient" / "extra.mp4"
    )


def test_render_command_runs_every_demo_through_the_engine(tmp_path: Path) -> None:
    doom_dir = _build_doom_dir(tmp_path)
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["--doom-dir", str(doom_dir), "play", "-p", "ancient", "-R", "a01", "-R", "a02"],
        input="\n",
    )

    assert result.exit_code == 0, result.output
    assert "====== RENDERING QUEUE ======" in result.output
    assert "Rendered 2 demo(s) into" in result.output
    assert (tmp_path.resolve() / "videos" / "doom2.wad" / "ancient").is_dir()
