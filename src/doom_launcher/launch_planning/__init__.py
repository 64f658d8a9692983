"""Launch planning domain exports."""

from .command_planner import LaunchPlanner, split_arguments
from .launch_options import AssetBundle, LaunchOptions, LaunchPlan

__all__ = [
    "AssetBundle",
    "LaunchOptions",
    "LaunchPlan",
    "LaunchPlanner",
    "split_arguments",
]
