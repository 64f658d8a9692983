"""Terminal prompts used while launching and rendering."""

from __future__ import annotations

import click


def wait_for_enter(message: str) -> None:
    click.prompt(message, default="", show_default=False, prompt_suffix="")


def read_demo_names() -> str:
    return click.prompt(
        "Enter demo names, separated by spaces",
        default="",
        show_default=False,
    )
