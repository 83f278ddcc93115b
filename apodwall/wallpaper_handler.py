"""
Desktop Wallpaper Handler

This module updates the desktop background. There is one entry point, update_wallpaper,
which validates the image and hands it to the handler registered for the host platform:

- linux: GNOME, through the gsettings CLI. Settings for desktop backgrounds are defined under
  the schema org.gnome.desktop.background. More information on this schema can be found at:
  https://github.com/GNOME/gsettings-desktop-schemas/blob/master/schemas/org.gnome.desktop.background.gschema.xml.in
  GNOME 42 and later keep a separate picture for the dark style (picture-uri-dark), which is
  updated as well when the schema has it.
- darwin: macOS, through osascript asking System Events to update every desktop.
- win32: Windows, through the SystemParametersInfoW call in user32.

A failed update never touches the image file itself.
"""

import ctypes
import subprocess
import sys
from pathlib import Path
from typing import Callable, Optional

from apodwall.image_handler import InvalidImageError, validate_image

GNOME_SCHEMA = "org.gnome.desktop.background"

# see SystemParametersInfoW in the Win32 API reference
SPI_SETDESKWALLPAPER = 0x0014
SPIF_UPDATEINIFILE = 0x01
SPIF_SENDWININICHANGE = 0x02


class WallpaperError(Exception):
    """
    Raised when an attempt to update the desktop background fails, or when the host
    platform has no known way of doing so.
    """

    pass


def _gsettings(*args: str) -> subprocess.CompletedProcess:
    """
    Drop into the gsettings CLI. subprocess.CalledProcessError is raised by run() if a non-zero
    exit status is returned, which is our main way of determining that gsettings failed.
    """

    try:
        return subprocess.run(
            ["gsettings", *args],
            check=True,
            text=True,
            capture_output=True,
        )

    except FileNotFoundError as error:
        raise WallpaperError(
            "gsettings was not found. Only GNOME desktops are supported on Linux."
        ) from error

    except subprocess.CalledProcessError as error:
        raise WallpaperError(
            f"Could not set desktop background: {error.stderr or error}"
        ) from error


def _set_gnome_wallpaper(wallpaper_location: Path) -> None:

    uri = wallpaper_location.as_uri()
    _gsettings("set", GNOME_SCHEMA, "picture-uri", uri)

    keys = _gsettings("list-keys", GNOME_SCHEMA).stdout.split()
    if "picture-uri-dark" in keys:
        _gsettings("set", GNOME_SCHEMA, "picture-uri-dark", uri)


def _set_macos_wallpaper(wallpaper_location: Path) -> None:

    posix_path = str(wallpaper_location).replace("\\", "\\\\").replace('"', '\\"')
    script = (
        'tell application "System Events" to tell every desktop '
        f'to set picture to "{posix_path}"'
    )

    try:
        subprocess.run(
            ["osascript", "-e", script], check=True, text=True, capture_output=True
        )

    except (FileNotFoundError, subprocess.CalledProcessError) as error:
        details = getattr(error, "stderr", None) or error
        raise WallpaperError(f"Could not set desktop background: {details}") from error


def _set_windows_wallpaper(wallpaper_location: Path) -> None:

    ok = ctypes.windll.user32.SystemParametersInfoW(
        SPI_SETDESKWALLPAPER,
        0,
        str(wallpaper_location),
        SPIF_UPDATEINIFILE | SPIF_SENDWININICHANGE,
    )
    if not ok:
        raise WallpaperError(
            f"Could not set desktop background: SystemParametersInfoW failed for {wallpaper_location}"
        )


WALLPAPER_HANDLERS: dict[str, Callable[[Path], None]] = {
    "linux": _set_gnome_wallpaper,
    "darwin": _set_macos_wallpaper,
    "win32": _set_windows_wallpaper,
}


def get_wallpaper_handler(platform: Optional[str] = None) -> Callable[[Path], None]:
    """
    Return the function that sets the wallpaper on platform (default: sys.platform).
    Raise WallpaperError if there is none.
    """

    platform = platform or sys.platform

    # older interpreters report linux2, linux3, ...
    if platform.startswith("linux"):
        platform = "linux"

    try:
        return WALLPAPER_HANDLERS[platform]
    except KeyError:
        raise WallpaperError(
            f"Setting the desktop background is not supported on '{platform}'."
        ) from None


def update_wallpaper(img_path: Path, platform: Optional[str] = None) -> Path:
    """
    Update the background image to the one at img_path and return its absolute location.
    Raise WallpaperError if the platform is unsupported, the file isn't an image, or the
    platform call fails.
    """

    handler = get_wallpaper_handler(platform)

    # desktop settings are read directly by the desktop, which does no path validation of its
    # own, so make sure to hand over an absolute path to an existing image.
    try:
        wallpaper_location = Path(img_path).expanduser().resolve()
    except TypeError as error:
        raise WallpaperError(
            f"Invalid parameter: {img_path} is not a valid Pathlike object."
        ) from error

    if not wallpaper_location.is_file():
        raise WallpaperError(
            f"Invalid path provided for image location: {img_path} does not exist."
        )

    try:
        validate_image(wallpaper_location)
    except InvalidImageError as error:
        raise WallpaperError(
            f"Invalid image type provided. {wallpaper_location.name} is not a valid image."
        ) from error

    handler(wallpaper_location)

    return wallpaper_location
