"""
apodwall

Set the NASA Astronomy Picture of the Day as your desktop wallpaper.

This module defines the entry point to the apodwall CLI. The command takes a single MODE
argument that selects which day's picture to fetch, and a few options that override the
defaults in ApodConfig. The actual run is performed by apodwall.modes.run.
"""

from dataclasses import replace
from io import StringIO
from pathlib import Path

import click

from apodwall.config import config
from apodwall.modes import ModeError, run
from apodwall.cli_utils.console import console
from apodwall.cli_utils.decorators import catch_errors


def reject_unknown_options(ctx, param, value):
    """
    Unknown options are let through so that negative numbers reach MODE. Anything that still
    looks like a long option is a typo, not a mode.
    """

    if value is not None and value.startswith("--"):
        raise click.NoSuchOption(value, ctx=ctx)

    return value


@click.command(
    context_settings={"ignore_unknown_options": True}
)  # let negative numbers through to MODE so they get a proper error message
@click.argument("mode", required=False, default="today", callback=reject_unknown_options)
@click.option(
    "--dest",
    "-d",
    type=click.Path(
        file_okay=False, path_type=Path
    ),  # make sure that file paths are always Path objects.
    help=f"Directory to save images to. Created if it doesn't exist.  [default: {config.APOD_DOWNLOAD_DIR}]",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Seconds to wait for each request before giving up. Waits indefinitely by default.",
)
@click.option(
    "--download-only",
    is_flag=True,
    default=False,
    help="Save the image without changing the desktop background.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Silence all output printed to stdout. Errors are still printed to stderr.",
)
@click.version_option(package_name="apodwall")
@catch_errors
def cli(mode, dest, timeout, download_only, quiet):  # named cli by convention in the click docs
    """
    Set the Astronomy Picture of the Day as your desktop wallpaper.

    \b
    MODE selects the day:
        today          today's picture (default)
        yesterday, y   yesterday's picture
        N              the picture from N days ago, e.g. 3
        random, r      a random picture from the archive since June 1995

    \b
    Examples:
        $ apodwall
        $ apodwall random
        $ apodwall 7 --dest ~/Pictures/APOD
    """

    # if quiet, capture everything written to the stdout console in a junk stream.
    if quiet:
        console.file = StringIO()

    overrides = {}
    if dest is not None:
        overrides["APOD_DOWNLOAD_DIR"] = dest
    if timeout is not None:
        overrides["APOD_TIMEOUT"] = timeout

    settings = replace(config, **overrides)

    try:
        run(mode, config=settings, set_wallpaper=not download_only)
    except ModeError as error:
        raise click.BadParameter(str(error), param_hint="'MODE'") from error


def main():
    cli()


if __name__ == "__main__":
    main()
