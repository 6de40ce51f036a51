"""
Shared fixtures.
"""

import io
from pathlib import Path

import pytest
from PIL import Image


def png_bytes(width: int = 64, height: int = 36, color=(200, 220, 240)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def make_image(tmp_path):
    """Write a solid PNG and return its path."""

    def _make(name: str = "slide.png", width: int = 160, height: int = 90) -> Path:
        path = tmp_path / name
        path.write_bytes(png_bytes(width, height))
        return path

    return _make
