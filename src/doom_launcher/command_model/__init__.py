"""Command model domain exports."""

from .command_line import INDENT_UNIT, CommandLine, Line, NonUtf8PathError, path_text
from .process_launch import ProcessLaunchError, ProcessRunner, launch_command

__all__ = [
    "INDENT_UNIT",
    "CommandLine",
    "Line",
    "NonUtf8PathError",
    "path_text",
    "ProcessLaunchError",
    "ProcessRunner",
    "launch_command",
]
