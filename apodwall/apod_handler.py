"""
APOD Handler

This module is a thin wrapper around the Astronomy Picture of the Day website. It builds
urls for archive pages, fetches them, and scrapes the path of the picture out of the
page markup. Writing the picture to disk is left to the image handler.

The archive has no API. Every page follows the same fixed layout, in which the first link
points back to the archive and the second link wraps the picture itself. Scraping relies
on that ordering: the href of the second <a> tag is taken to be the image path. Days that
feature a video or an applet instead of a picture still have a second link, so callers
should check the result with is_image_path().
"""

from pathlib import PurePosixPath
from typing import Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup, SoupStrainer

from apodwall import __version__
from apodwall.config import ApodConfig, config as default_config

# page that always shows the current picture
TODAY_PAGE = "astropix.html"

IMAGE_EXTENSIONS = (".jpg", ".gif", ".png")

HEADERS = {"User-Agent": f"apodwall/{__version__}"}


class FetchError(Exception):
    """
    Raised when a page or image cannot be retrieved from the APOD website, either because
    the request failed or because the server did not answer with a success status.
    """

    pass


def apod_url(path: str, config: ApodConfig = default_config) -> str:
    """
    Resolve a page name or image path against the APOD base url. Absolute urls are
    returned unchanged.
    """

    return urljoin(config.APOD_BASE_URL, path)


def _get(url: str, config: ApodConfig, stream: bool = False) -> requests.Response:
    """
    GET url and return the response. Raise FetchError for network errors and for
    error status codes. Redirects are followed by requests.
    """

    try:
        r = requests.get(
            url, headers=HEADERS, timeout=config.APOD_TIMEOUT, stream=stream
        )

    except requests.exceptions.RequestException as error:
        raise FetchError(f"Could not reach {url}: {error}") from error

    # successful request but received a bad response from the server.
    try:
        r.raise_for_status()
    except requests.exceptions.HTTPError as error:
        r.close()
        raise FetchError(
            f"Something went wrong trying to access {url} (status code {r.status_code})"
        ) from error

    return r


def fetch_page_markup(page_name: str, config: ApodConfig = default_config) -> str:
    """Retrieve the markup of an APOD page, e.g. astropix.html or ap250101.html."""

    return _get(apod_url(page_name, config), config).text


def fetch_image(image_path: str, config: ApodConfig = default_config) -> requests.Response:
    """
    Request the image at image_path (relative to the APOD base url) without reading the body.
    The caller consumes the body with iter_content() and is responsible for closing the
    response.
    """

    return _get(apod_url(image_path, config), config, stream=True)


def extract_image_path(markup: str) -> Optional[str]:
    """
    Return the href of the second <a> tag in markup, or None if there are fewer than two
    anchors (or the second one has no href).

    Only <a> tags are handed to the tree builder, in document order. The html.parser backend
    decodes entities in attribute values (&amp; becomes &) and never raises on broken markup;
    whatever it can't make sense of is skipped.
    """

    soup = BeautifulSoup(markup, "html.parser", parse_only=SoupStrainer("a"))
    anchors = soup.find_all("a", limit=2)

    if len(anchors) < 2:
        return None

    return anchors[1].get("href")


def is_image_path(path: Optional[str]) -> bool:
    """
    True if path ends in one of the picture extensions used by the archive. The check is
    case sensitive and looks at the path only, never at the content behind it.
    """

    if not path:
        return False

    return PurePosixPath(path).suffix in IMAGE_EXTENSIONS
