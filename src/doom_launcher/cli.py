"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import click

from doom_launcher.batch_rendering import (
    InterruptController,
    RenderJobFailedError,
    RenderQueue,
    build_render_job,
    wait_for_enter,
)
from doom_launcher.command_model import NonUtf8PathError, ProcessLaunchError, launch_command
from doom_launcher.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    LauncherSettings,
    default_doom_dir,
    load_settings,
    write_placeholder_configuration,
)
from doom_launcher.engine_registry import EngineRegistryError
from doom_launcher.file_resolution import (
    AssetCategory,
    AssetResolver,
    ResolutionError,
    SearchRequest,
    first_candidate,
    prompt_for_candidates,
)
from doom_launcher.launch_planning import LaunchOptions, LaunchPlan, LaunchPlanner

logger = logging.getLogger(__name__)


class CliError(Exception):
    """Custom CLI error."""


@dataclass(frozen=True)
class CliContext:
    """Options shared by every subcommand."""

    doom_dir: Path
    config_path: str | None

    def load_settings(self) -> LauncherSettings:
        try:
            return load_settings(self.doom_dir, self.config_path)
        except (ConfigurationError, OSError) as exc:
            raise CliError(str(exc)) from exc


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="doom-launcher")
@click.option(
    "--doom-dir",
    envvar="DOOM_DIR",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory holding WADs, demos and launcher.yaml [default: ~/doom]",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=str),
    default=None,
    help="Launcher configuration file [default: <doom-dir>/launcher.yaml]",
)
@click.option("--verbose", is_flag=True, default=False, help="Show debug diagnostics.")
@click.pass_context
def cli(ctx: click.Context, doom_dir: Path | None, config_path: str | None, verbose: bool) -> None:
    """Command-line Doom launcher.

    Shortcuts to the many long-winded options that Doom engines accept.
    """
    _configure_logging(verbose)
    ctx.obj = CliContext(
        doom_dir=(doom_dir or default_doom_dir()).expanduser(),
        config_path=config_path,
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=None,
    type=click.Path(path_type=str),
    help=(
        "Path to write the launcher configuration template "
        f"[default: <doom-dir>/{DEFAULT_CONFIG_FILENAME}]"
    ),
)
@click.pass_obj
def generate_config(context: CliContext, output_path: str | None) -> None:
    """Generate a placeholder launcher configuration with guidance comments."""
    destination = output_path or context.doom_dir / DEFAULT_CONFIG_FILENAME
    try:
        resolved_output = write_placeholder_configuration(destination)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="search")
@click.argument("name")
@click.option(
    "--category",
    type=click.Choice([category.value for category in AssetCategory]),
    default=AssetCategory.PWAD.value,
    show_default=True,
    help="Which search roots to look in",
)
@click.pass_obj
def search(context: CliContext, name: str, category: str) -> None:
    """Print every file matching NAME, best match first."""
    settings = context.load_settings()
    resolver = AssetResolver(settings.search_roots)
    try:
        result = resolver.resolve(SearchRequest(raw_name=name, category=AssetCategory(category)))
    except (ResolutionError, ValueError) as exc:
        raise CliError(str(exc)) from exc
    for path in result:
        click.echo(str(path))


@cli.command(
    name="play",
    context_settings={"allow_interspersed_args": False},
)
@click.option("--3p", "sound_pack", is_flag=True, help="Add the 3P Sound Pack")
@click.option(
    "-c", "--compatibility-level", "complevel", metavar="LEVEL", help="Set the compatibility level"
)
@click.option("-G", "--debug", is_flag=True, help="Run Doom under a debugger")
@click.option("-e", "--engine", metavar="ENGINE", help="Play the game with ENGINE")
@click.option(
    "-x",
    "--extra-pwads",
    multiple=True,
    metavar="WAD",
    help="Add PWADs silently: they are left out of the rendered video folder name",
)
@click.option("-f", "--fast", is_flag=True, help="Enable fast monsters")
@click.option("-g", "--geometry", metavar="GEOM", help="Set the screen resolution to WxH")
@click.option("-i", "--iwad", metavar="WAD", help="Set the game's IWAD")
@click.option("--no-monsters", is_flag=True, help="Play the game with no monsters")
@click.option("--pistol-start", is_flag=True, help="Play each level from a pistol start")
@click.option("-d", "--play-demo", metavar="DEMO", help="Play back DEMO")
@click.option("-p", "--pwads", multiple=True, metavar="WAD", help="Add PWADs to the game")
@click.option(
    "-r", "--record", metavar="DEMO", help="Record a demo to DEMO, relative to the demo dir"
)
@click.option(
    "--record-from-to",
    nargs=2,
    metavar="FROM TO",
    default=None,
    help="Play back FROM, allowing you to rewrite its ending to TO",
)
@click.option(
    "-R", "--render", multiple=True, metavar="DEMO", help="Render demos as videos, in order"
)
@click.option("--respawn", is_flag=True, help="Enable respawning monsters")
@click.option("--short-tics", is_flag=True, help="Play with short tics instead of long tics")
@click.option("-s", "--skill", metavar="SKILL", help="Set the game's skill level by a number")
@click.option("--vanilla-weapons", is_flag=True, help="Load smooth vanilla weapon animations")
@click.option("-v", "--video-mode", metavar="MODE", help="Set the video mode (software, GL)")
@click.option("-w", "--warp", metavar="LEVEL", help="Start the game at a specific level")
@click.option(
    "--pick-first",
    is_flag=True,
    default=False,
    help="Take the best match instead of asking when several demos match.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Print the command line(s) without launching anything.",
)
@click.option(
    "--script",
    is_flag=True,
    default=False,
    help="Print the command as a single shell-escaped line.",
)
@click.argument("passthrough", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def play(  # pylint: disable=too-many-arguments,too-many-locals
    context: CliContext,
    sound_pack: bool,
    complevel: str | None,
    debug: bool,
    engine: str | None,
    extra_pwads: tuple[str, ...],
    fast: bool,
    geometry: str | None,
    iwad: str | None,
    no_monsters: bool,
    pistol_start: bool,
    play_demo: str | None,
    pwads: tuple[str, ...],
    record: str | None,
    record_from_to: tuple[str, str] | None,
    render: tuple[str, ...],
    respawn: bool,
    short_tics: bool,
    skill: str | None,
    vanilla_weapons: bool,
    video_mode: str | None,
    warp: str | None,
    pick_first: bool,
    dry_run: bool,
    script: bool,
    passthrough: tuple[str, ...],
) -> None:
    """Launch Doom, or batch-render demos with --render.

    Words after `--` are handed to the engine unchanged.
    """
    options = LaunchOptions(
        engine=engine,
        iwad=iwad,
        pwads=pwads,
        extra_pwads=extra_pwads,
        complevel=complevel,
        video_mode=video_mode,
        geometry=geometry,
        record=record,
        record_from_to=tuple(record_from_to) if record_from_to else None,
        play_demo=play_demo,
        warp=warp,
        skill=skill,
        fast=fast,
        respawn=respawn,
        no_monsters=no_monsters,
        pistol_start=pistol_start,
        short_tics=short_tics,
        vanilla_weapons=vanilla_weapons,
        sound_pack=sound_pack,
        debug=debug,
        render=render,
        passthrough=passthrough,
    )
    settings = context.load_settings()
    planner = LaunchPlanner(
        settings,
        AssetResolver(settings.search_roots),
        chooser=first_candidate if pick_first else prompt_for_candidates,
    )
    try:
        plan = planner.plan(options)
    except (
        ConfigurationError,
        EngineRegistryError,
        ResolutionError,
        NonUtf8PathError,
        OSError,
    ) as exc:
        raise CliError(str(exc)) from exc

    if script:
        click.echo(plan.command.script_text())
    click.echo()
    if plan.render_jobs:
        _render(planner, plan, settings, dry_run=dry_run)
    else:
        _launch_once(plan, dry_run=dry_run)


def _launch_once(plan: LaunchPlan, *, dry_run: bool) -> None:
    click.echo(f"Command line: \n'\n{plan.command.display_text()}'")
    if dry_run:
        return
    wait_for_enter("Press enter to launch Doom.")
    try:
        exit_code = launch_command(plan.command.flat_words())
    except ProcessLaunchError as exc:
        raise CliError(str(exc)) from exc
    logger.debug("Doom exited with status %s", exit_code)


def _render(
    planner: LaunchPlanner, plan: LaunchPlan, settings: LauncherSettings, *, dry_run: bool
) -> None:
    controller = InterruptController(
        resolve_demo=planner.resolve_demos,
        job_factory=lambda demo_path: build_render_job(demo_path, plan.video_dir),
    )
    render_queue = RenderQueue(
        plan.command,
        controller,
        jobs=plan.render_jobs,
        cooldown_seconds=settings.cooldown_seconds,
    )
    try:
        if dry_run:
            for number, job in enumerate(render_queue.pending, start=1):
                command = render_queue.build_job_command(job)
                click.echo(f"Command line #{number}: \n'\n{command.display_text()}'")
            return
        with controller.installed():
            summary = render_queue.run()
    except (RenderJobFailedError, ProcessLaunchError, NonUtf8PathError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"Rendered {len(summary.completed)} demo(s) into {plan.video_dir}")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), prog_name="doom-launcher", standalone_mode=False)
    except CliError as exc:
        click.echo(f"ERROR: {exc}", err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
