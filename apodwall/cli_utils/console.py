"""
apodwall console utilities

This module provides application-wide access to a Rich Console object for
handling writing to stdout and stderr. Status messages go to stdout and failures go to
stderr, so failures are still visible when output is silenced with --quiet.
"""

from rich.console import Console
from rich.filesize import decimal
from rich.markup import escape
from rich.theme import Theme

apodwall_theme = Theme({"fail": "bold red", "confirm": "green", "describe": ""})

console = Console(theme=apodwall_theme)
error_console = Console(theme=apodwall_theme, stderr=True)


"""
Formatting helpers
"""


def describe(msg: str, **kwargs):
    """
    Format descriptive msg and print to stdout.
    """

    console.print(f"{msg}", style="describe", **kwargs)


def confirm_success(msg: str, **kwargs):
    """
    Format confirmation msg and print to stdout. Accept any additional kwargs that console.print from
    rich module exposes.
    """

    console.print(f"{msg}", style="confirm", **kwargs)


def fail(msg: str):
    """
    Format failure msg and print to stderr.
    """

    error_console.print(f":x-emoji: failed. {escape(msg)}", style="fail")


def format_size(size: int) -> str:
    """Human readable byte count, e.g. 1.3 MB"""

    return decimal(size)


def format_duration(seconds: float) -> str:
    """
    Render a duration as minutes, seconds and milliseconds, e.g. "1m 2s 345ms".

    Components before the first non-zero one are dropped, as are zero components after it,
    so 0.25 renders as "250ms" and 60 as "1m". A zero duration renders as "0ms".
    """

    total_ms = round(seconds * 1000)
    minutes, remainder = divmod(total_ms, 60_000)
    secs, ms = divmod(remainder, 1000)

    parts = [
        f"{value}{unit}"
        for value, unit in ((minutes, "m"), (secs, "s"), (ms, "ms"))
        if value
    ]

    return " ".join(parts) if parts else "0ms"
