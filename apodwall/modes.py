"""
apodwall run modes

A run picks one APOD page, scrapes the image path from it, downloads the image and sets it
as the desktop background. The mode decides which page:

    today (default)   astropix.html, the page that always shows the current picture
    yesterday, y      the page for yesterday's date (UTC)
    N                 the page for N days ago (UTC)
    random, r         a random page from the archive, redrawn until it features a picture

Any mode that isn't recognised falls back to today. Days that feature a video rather than a
picture end the run with "No image found." In random mode those days are skipped instead.
"""

from datetime import date
from typing import Optional

from rich.markup import escape

from apodwall.apod_handler import (
    TODAY_PAGE,
    apod_url,
    extract_image_path,
    fetch_page_markup,
    is_image_path,
)
from apodwall.cli_utils.console import (
    confirm_success,
    describe,
    format_duration,
    format_size,
)
from apodwall.config import ApodConfig, config as default_config
from apodwall.dates import date_days_ago, page_name_for_date, random_candidate_date
from apodwall.image_handler import SavedImage, save_image
from apodwall.wallpaper_handler import update_wallpaper

RANDOM_MODES = ("random", "r")
YESTERDAY_MODES = ("yesterday", "y")


class ModeError(ValueError):
    """Raised for a mode that names a day which cannot have been published yet."""

    pass


def resolve_date(mode: Optional[str]) -> Optional[date]:
    """
    Date that mode refers to, or None for today's page. Random mode is handled separately
    by find_random_image_path.
    """

    if mode in YESTERDAY_MODES:
        return date_days_ago(1)

    try:
        days = int(mode)
    except (TypeError, ValueError):
        return None

    if days < 0:
        raise ModeError(f"Cannot look {-days} days into the future.")

    return date_days_ago(days)


def get_image_path_from_page(
    page_name: str, config: ApodConfig = default_config
) -> Optional[str]:
    describe(f":earth_americas-emoji: Getting {escape(apod_url(page_name, config))} ...")
    return extract_image_path(fetch_page_markup(page_name, config))


def find_random_image_path(config: ApodConfig = default_config) -> tuple[str, date]:
    """
    Draw random archive days until one of them links to a picture. Fetch errors are not
    retried and end the search.
    """

    while True:
        day = random_candidate_date()
        image_path = get_image_path_from_page(page_name_for_date(day), config)
        if is_image_path(image_path):
            return image_path, day
        describe(f"No picture on {day.isoformat()}, drawing another day ...")


def find_image_path(
    mode: Optional[str], config: ApodConfig = default_config
) -> tuple[Optional[str], Optional[date]]:
    """
    Image path scraped from the page selected by mode, together with the date it belongs to.
    The date is None for today's page.
    """

    if mode in RANDOM_MODES:
        return find_random_image_path(config)

    day = resolve_date(mode)
    if day is None:
        describe("Looking for today's image ...")
        page_name = TODAY_PAGE
    else:
        describe(f"Looking for the image of {day.isoformat()} ...")
        page_name = page_name_for_date(day)

    return get_image_path_from_page(page_name, config), day


def run(
    mode: Optional[str] = None,
    config: ApodConfig = default_config,
    set_wallpaper: bool = True,
) -> Optional[SavedImage]:
    """
    Run apodwall in the given mode. Return the saved image, or None if the selected page has
    no picture. Errors from fetching, saving or setting the wallpaper propagate. A downloaded
    image is kept even when setting the wallpaper fails.
    """

    image_path, day = find_image_path(mode, config)

    if not is_image_path(image_path):
        describe("No image found.")
        return None

    describe(
        f":floppy_disk-emoji: Writing {escape(image_path)} "
        f"to {escape(str(config.APOD_DOWNLOAD_DIR))} ..."
    )
    saved = save_image(image_path, for_date=day, config=config)
    describe(
        f"Downloaded {format_size(saved.size)} in {format_duration(saved.elapsed)} to {escape(str(saved.path))}."
    )

    if set_wallpaper:
        describe(f":desktop_computer-emoji: Setting {escape(str(saved.path))} as wallpaper ...")
        update_wallpaper(saved.path)

    confirm_success(":white_check_mark-emoji: Done")
    return saved
