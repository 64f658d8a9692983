"""Turns launch options into a structured command line."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

import click

from doom_launcher.batch_rendering import RenderJob, build_render_job
from doom_launcher.command_model import CommandLine, path_text
from doom_launcher.configuration import Autoloads, LauncherSettings, load_autoloads
from doom_launcher.engine_registry import EngineDescriptor
from doom_launcher.file_resolution import (
    ARCHIVE_EXTENSIONS,
    ASSET_EXTENSIONS,
    AssetCategory,
    AssetNotFoundError,
    AssetResolver,
    Chooser,
    choose_candidates,
    extension_allow_list,
)

from .launch_options import AssetBundle, LaunchOptions, LaunchPlan

logger = logging.getLogger(__name__)

ARG_SEPARATOR = os.pathsep
DEBUGGER_BINARY = "/usr/bin/lldb"
SOUND_PACK = "3P Sound Pack.wad"
IWAD_TITLES = {
    "doom": "Doom",
    "doom2": "Doom 2",
    "tnt": "TNT: Evilution",
    "plutonia": "The Plutonia Experiment",
}
_DOOM2_FIXES = ("d2spfx19.wad", "d2dehfix.deh")
SPRITE_FIXES = {
    "doom": ("d1spfx19.wad", "d1dehfix.deh"),
    "doom2": _DOOM2_FIXES,
    "tnt": _DOOM2_FIXES,
    "plutonia": _DOOM2_FIXES,
}

AutoloadsLoader = Callable[[Path], Autoloads]


def split_arguments(values: Iterable[str]) -> list[str]:
    """Flatten `("a:b", "c")` into `["a", "b", "c"]` using the OS list separator."""
    return [part for value in values for part in value.split(ARG_SEPARATOR) if part]


class LaunchPlanner:
    """Resolves every named asset and lays the command out line by line."""

    def __init__(
        self,
        settings: LauncherSettings,
        resolver: AssetResolver,
        *,
        chooser: Chooser,
        autoloads_loader: AutoloadsLoader | None = None,
    ) -> None:
        self._settings = settings
        self._resolver = resolver
        self._chooser = chooser
        self._autoloads_loader = autoloads_loader or load_autoloads
        self._accept_assets = extension_allow_list(ASSET_EXTENSIONS)

    def plan(self, options: LaunchOptions) -> LaunchPlan:
        defaults = self._settings.defaults
        engine = self._settings.engines.get(options.engine or defaults.engine)
        iwad_path = self._resolver.resolve_name(
            options.iwad or defaults.iwad, AssetCategory.IWAD
        ).best.absolute()
        iwad_stem = path_text(iwad_path.stem).lower()

        command = CommandLine()
        if options.debug:
            command.push_word(DEBUGGER_BINARY, 0)
        command.push_path(engine.binary_path, 0)
        if options.debug:
            command.push_word("--", 0)
        if engine.required_args:
            command.push_line(engine.required_args, 1)
        command.push_line(("-iwad", path_text(iwad_path)), 1)

        assets = AssetBundle()
        self._add_builtin_assets(assets, engine, iwad_stem)
        self._add_autoloads(assets, engine, iwad_stem)
        folder_stems = self._add_requested_pwads(assets, options)
        self._add_optional_packs(assets, options)
        self._push_assets(command, engine, assets)

        self._push_gameplay_options(command, engine, options)

        video_dir = self._settings.video_dir / path_text(iwad_path.name) / ",".join(folder_stems)
        render_jobs = self._plan_render_jobs(options.render, video_dir)

        for word in options.passthrough:
            if word:
                command.push_word(word, 1)

        return LaunchPlan(
            command=command,
            engine=engine,
            iwad_path=iwad_path,
            video_dir=video_dir,
            render_jobs=render_jobs,
        )

    def resolve_demos(self, raw_name: str) -> tuple[Path, ...]:
        """Every demo matching `raw_name`, best first."""
        return self._resolver.resolve_name(raw_name, AssetCategory.DEMO).paths

    def _add_builtin_assets(
        self, assets: AssetBundle, engine: EngineDescriptor, iwad_stem: str
    ) -> None:
        if engine.supports_widescreen_assets:
            try:
                assets.wads.append(
                    self._best_asset(f"{iwad_stem}_widescreen_assets.wad")
                )
            except AssetNotFoundError:
                title = IWAD_TITLES.get(iwad_stem, "<unknown IWAD>")
                click.echo(f"Couldn't find widescreen assets for {title}.")

        if self._settings.apply_sprite_fixes and iwad_stem in SPRITE_FIXES:
            sprite_fix, deh_fix = SPRITE_FIXES[iwad_stem]
            assets.wads.append(self._best_asset(sprite_fix))
            assets.dehs.append(self._best_asset(deh_fix))

    def _add_autoloads(self, assets: AssetBundle, engine: EngineDescriptor, iwad_stem: str) -> None:
        autoloads = self._autoloads_loader(self._settings.autoloads_path)
        for raw_name in autoloads.names_for(engine.binary_path.stem, iwad_stem):
            for pwad in self._all_assets(raw_name):
                _classify(assets, pwad)

    def _add_requested_pwads(self, assets: AssetBundle, options: LaunchOptions) -> list[str]:
        """Add every same-stem match of each PWAD name; return the stems for the video folder."""
        folder_stems: list[str] = []
        for raw_name in split_arguments(options.pwads):
            for pwad in self._all_assets(raw_name):
                _classify(assets, pwad)
                stem = path_text(pwad.stem)
                if stem not in folder_stems:
                    folder_stems.append(stem)
        for raw_name in split_arguments(options.extra_pwads):
            for pwad in self._all_assets(raw_name):
                _classify(assets, pwad)
        return folder_stems

    def _add_optional_packs(self, assets: AssetBundle, options: LaunchOptions) -> None:
        if options.vanilla_weapons:
            assets.wads.append(self._best_asset("vsmooth.wad"))
            assets.dehs.append(self._best_asset("vsmooth.deh"))
        if options.sound_pack:
            assets.wads.append(self._best_asset(SOUND_PACK))

    def _push_assets(
        self, command: CommandLine, engine: EngineDescriptor, assets: AssetBundle
    ) -> None:
        if assets.wads:
            command.push_word(engine.asset_flag, 1)
            for wad in assets.wads:
                command.push_path(wad, 2)
        if assets.dehs:
            command.push_word("-deh", 1)
            for deh in assets.dehs:
                command.push_path(deh, 2)

    def _push_gameplay_options(
        self, command: CommandLine, engine: EngineDescriptor, options: LaunchOptions
    ) -> None:
        defaults = self._settings.defaults
        command.push_line(("-complevel", options.complevel or defaults.complevel), 1)
        if options.pistol_start:
            command.push_word("-pistolstart", 1)
        command.push_line(("-vidmode", options.video_mode or defaults.video_mode), 1)
        command.push_line(("-geom", options.geometry or defaults.geometry), 1)

        if options.record:
            demo_path = Path(options.record).expanduser()
            if not demo_path.is_absolute():
                demo_path = self._settings.demo_dir / demo_path
            command.push_word("-record", 1)
            command.push_path(demo_path, 2)
            if not options.short_tics:
                command.push_word("-longtics", 1)
        elif options.short_tics:
            command.push_word("-shorttics", 1)

        if options.record_from_to:
            command.push_word("-recordfromto", 1)
            command.push_line(options.record_from_to, 2)

        if options.play_demo:
            result = self._resolver.resolve_name(options.play_demo, AssetCategory.DEMO)
            demo = choose_candidates(result, self._chooser)[0]
            command.push_word("-playdemo", 1)
            command.push_path(demo, 2)

        if options.warp:
            command.push_line(("-warp", *split_arguments((options.warp,))), 1)

        if options.skill:
            command.push_line((engine.skill_flag, options.skill), 1)
        elif options.warp:
            command.push_line((engine.skill_flag, engine.default_skill), 1)

        if options.no_monsters:
            command.push_word("-nomonsters", 1)
        if options.fast:
            command.push_word("-fast", 1)
        if options.respawn:
            command.push_word("-respawn", 1)

    def _plan_render_jobs(self, raw_names: Iterable[str], video_dir: Path) -> tuple[RenderJob, ...]:
        return tuple(
            build_render_job(demo_path, video_dir)
            for raw_name in split_arguments(raw_names)
            for demo_path in self.resolve_demos(raw_name)
        )

    def _best_asset(self, raw_name: str) -> Path:
        return self._resolver.resolve_name(
            raw_name, AssetCategory.PWAD, self._accept_assets
        ).best

    def _all_assets(self, raw_name: str) -> tuple[Path, ...]:
        return self._resolver.resolve_name(raw_name, AssetCategory.PWAD, self._accept_assets).paths


def _classify(assets: AssetBundle, pwad: Path) -> None:
    extension = pwad.suffix[1:].lower()
    if extension in ARCHIVE_EXTENSIONS:
        assets.wads.append(pwad)
    else:
        assets.dehs.append(pwad)
