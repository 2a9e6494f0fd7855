"""Shared fixtures for the liveness client tests."""
import io
from unittest import mock

import pytest
import requests
from PIL import Image


@pytest.fixture(autouse=True)
def clean_bws_env(monkeypatch):
    """Keep real credentials in the environment out of unit tests."""
    for name in ("BWS_APP_ID", "BWS_APP_SECRET", "BWS_ENDPOINT", "BWS_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def _save_image(path, fmt, color="gray"):
    img = Image.new('RGB', (64, 64), color=color)
    img_bytes = io.BytesIO()
    img.save(img_bytes, format=fmt)
    path.write_bytes(img_bytes.getvalue())
    return path


@pytest.fixture
def jpeg_file(tmp_path):
    """Create a small JPEG face stand-in."""
    return _save_image(tmp_path / "face1.jpg", "JPEG")


@pytest.fixture
def png_file(tmp_path):
    """Create a small PNG face stand-in."""
    return _save_image(tmp_path / "face2.png", "PNG", color="white")


@pytest.fixture
def gif_file(tmp_path):
    """Create a GIF, which the service does not accept."""
    return _save_image(tmp_path / "face.gif", "GIF")


@pytest.fixture
def text_file(tmp_path):
    path = tmp_path / "notes.jpg"
    path.write_text("definitely not an image\n")
    return path


def make_session(status_code=200, content=b"", side_effect=None):
    """Build a stand-in for requests.Session returning one canned response."""
    response = mock.MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.content = content

    session = mock.MagicMock(spec=requests.Session)
    session.__enter__.return_value = session
    if side_effect is not None:
        session.post.side_effect = side_effect
    else:
        session.post.return_value = response
    return session


@pytest.fixture
def session_factory():
    return make_session
