"""
conftest.py

Test configuration for apodwall tests.

Defines Pytest fixtures for supplying test data to tests across the entire
test suite. Fixtures used within only a single module are defined
directly in that module. Conftest.py should only be used for universal
fixtures to avoid unnecessary performance hit.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image

from apodwall.config import ApodConfig
from apodwall.cli_utils.console import console


@pytest.fixture(scope="session")
def test_image(tmp_path_factory) -> Path:
    """
    Path to a small JPEG written with Pillow, shared by the whole test session.
    """

    path = tmp_path_factory.mktemp("test_data") / "nebula.jpg"
    Image.new("RGB", (16, 9), color=(10, 20, 60)).save(path, format="JPEG")
    return path


@pytest.fixture(scope="session")
def not_an_image(tmp_path_factory) -> Path:
    """Path to a text file with an image extension."""

    path = tmp_path_factory.mktemp("test_data") / "not_an_image.jpg"
    path.write_text("<html><body>404 Not Found</body></html>")
    return path


@pytest.fixture
def apod_config(tmp_path) -> ApodConfig:
    """Default configuration, downloading into a temporary directory."""

    return ApodConfig(APOD_DOWNLOAD_DIR=tmp_path / "download")


@pytest.fixture
def make_response():
    """
    Factory for fake requests.Response objects. Pass text for page markup or content for
    image bytes, which are served from iter_content() in two chunks.
    """

    def inner(text: str = "", content: bytes = b"", status_code: int = 200) -> MagicMock:

        response = MagicMock()
        response.status_code = status_code
        response.text = text
        response.iter_content.side_effect = lambda chunk_size=1: iter(
            [content[: len(content) // 2], content[len(content) // 2 :]]
        )
        return response

    return inner


@pytest.fixture(autouse=True)
def reset_console():
    """--quiet swaps the console output for a junk stream, put it back after each test."""

    yield
    console.file = None
