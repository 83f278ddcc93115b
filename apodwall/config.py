"""
apodwall Configuration

This module holds the settings used across apodwall. ApodConfig is a plain dataclass
with sensible defaults; there is no configuration file. The command line builds a
derived ApodConfig from its options (see cli.py) and passes it down to the handlers,
so application code references the identifiers in ApodConfig instead of brittle
dictionary keys or hard coded urls and filesystem paths.

Raise an ApodConfigError for any value that cannot be used.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class ApodConfigError(Exception):
    """Raise when an issue occurs with handling apodwall configuration."""

    pass


@dataclass
class ApodConfig:
    """
    Configuration variables for apodwall.

    APOD_BASE_URL: address that page names and image paths are resolved against.
    APOD_DOWNLOAD_DIR: directory that downloaded images are written to. Relative paths
        are relative to the current working directory.
    APOD_TIMEOUT: seconds to wait on each network request. None waits indefinitely.
    APOD_CHUNK_SIZE: number of bytes read per chunk when streaming an image to disk.
    """

    APOD_BASE_URL: str = "https://apod.nasa.gov/apod/"
    APOD_DOWNLOAD_DIR: Path = Path("download")
    APOD_TIMEOUT: Optional[float] = None
    APOD_CHUNK_SIZE: int = 64 * 1024

    def __post_init__(self):
        """
        Normalize values supplied from the command line, which arrive as str, and reject
        values that would break a download.

        __post_init__ is called automatically by the generated __init__ method (and by
        dataclasses.replace).
        """

        self.APOD_DOWNLOAD_DIR = Path(self.APOD_DOWNLOAD_DIR).expanduser()

        # page names are joined onto the base url, which drops the last path segment
        # unless the url ends with a slash.
        if not self.APOD_BASE_URL.endswith("/"):
            self.APOD_BASE_URL = f"{self.APOD_BASE_URL}/"

        if self.APOD_TIMEOUT is not None and self.APOD_TIMEOUT <= 0:
            raise ApodConfigError(
                f"Timeout must be a positive number of seconds, got {self.APOD_TIMEOUT}."
            )

        if self.APOD_CHUNK_SIZE <= 0:
            raise ApodConfigError(
                f"Chunk size must be a positive number of bytes, got {self.APOD_CHUNK_SIZE}."
            )


config = ApodConfig()
