"""
Image Handler

Utilities for saving and validating images.

Saving images: the picture referenced by an APOD page is streamed straight from the
network to a file in the download directory, so large pictures are never held in memory
as a whole. Files are named after the day they belong to, which means fetching the same
day twice replaces the earlier file.

Validating images: Pillow is used to confirm that a file on disk really is an image
before it is handed to the desktop.
"""

import time
from dataclasses import dataclass
from datetime import date
from pathlib import Path, PurePosixPath
from typing import Optional

import requests
from PIL import Image, UnidentifiedImageError

from apodwall.apod_handler import FetchError, fetch_image
from apodwall.config import ApodConfig, config as default_config


class InvalidImageError(Exception):
    """
    Raised when a provided binary input file is not an image. Wrapper around the PIL
    UnidentifiedImageError for better identification of errors during debugging
    and custom error messaging.
    """

    pass


class StorageError(Exception):
    """
    Raised when a downloaded image cannot be written to the download directory.
    """

    pass


@dataclass(frozen=True)
class SavedImage:
    """An image written to disk, with the figures needed to report on the download."""

    path: Path
    size: int
    elapsed: float


def validate_image(input) -> str:
    """
    Determine whether input is a valid image and return its format (e.g. "JPEG"). PIL open method
    accepts a Path object, string, or file object (buffered stream). The PIL method reads the
    content header to determine file type but doesn't actually load any of the contents in memory,
    so it should be safe to use as a validation method.
    """

    try:
        with Image.open(input) as image:

            return image.format

    except UnidentifiedImageError as error:
        raise InvalidImageError(
            f"Input {str(input)} does not appear to be an image."
        ) from error

    except FileNotFoundError as error:
        raise InvalidImageError(f"Input {str(input)} could not be found.") from error


def image_file_path(
    image_path: str, for_date: Optional[date] = None, config: ApodConfig = default_config
) -> Path:
    """
    Local file for the image at image_path, e.g. download/apod-2025-01-01.jpg. The extension is
    taken from image_path and the name from for_date, or from today's date if no date is given.
    """

    day = for_date or date.today()
    extension = PurePosixPath(image_path).suffix

    return config.APOD_DOWNLOAD_DIR / f"apod-{day.isoformat()}{extension}"


def save_image(
    image_path: str, for_date: Optional[date] = None, config: ApodConfig = default_config
) -> SavedImage:
    """
    Download the image at image_path (relative to the APOD base url) and write it to the
    download directory, creating the directory if needed. The image is streamed to a .part
    file next to the destination and moved into place once complete, so an existing file
    for the same day is only replaced by a full download.

    Raise StorageError if the directory or file can't be written, FetchError if the download
    fails.
    """

    destination = image_file_path(image_path, for_date, config)

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise StorageError(
            f"Could not create download directory {destination.parent}: {error}"
        ) from error

    start = time.monotonic()
    r = fetch_image(image_path, config)
    size = 0

    # the earlier file for this day stays in place until the new one is complete
    partial = destination.with_name(destination.name + ".part")

    # RequestException derives from OSError, so it has to be caught first.
    try:
        with open(partial, "wb") as file:
            for chunk in r.iter_content(chunk_size=config.APOD_CHUNK_SIZE):
                size += file.write(chunk)

        partial.replace(destination)

    except requests.exceptions.RequestException as error:
        partial.unlink(missing_ok=True)
        raise FetchError(f"Download of {image_path} was interrupted: {error}") from error

    except OSError as error:
        partial.unlink(missing_ok=True)
        raise StorageError(f"Could not write {destination}: {error}") from error

    finally:
        r.close()

    return SavedImage(path=destination, size=size, elapsed=time.monotonic() - start)
