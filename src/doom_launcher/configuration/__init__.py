"""Configuration domain exports."""

from .config_scaffold_builder import (
    AUTOLOADS_FILENAME,
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_autoloads,
    build_placeholder_configuration,
    write_placeholder_autoloads,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, default_doom_dir, load_autoloads, load_settings
from .runtime_settings import (
    Autoloads,
    LaunchDefaults,
    LauncherSettings,
    default_search_roots,
)

__all__ = [
    "Autoloads",
    "LaunchDefaults",
    "LauncherSettings",
    "default_search_roots",
    "ConfigurationError",
    "default_doom_dir",
    "load_autoloads",
    "load_settings",
    "AUTOLOADS_FILENAME",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_autoloads",
    "build_placeholder_configuration",
    "write_placeholder_autoloads",
    "write_placeholder_configuration",
]
