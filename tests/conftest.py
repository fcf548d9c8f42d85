from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image, ImageFont

from image_watermark import watermark

PIL_FORMATS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".bmp": "BMP",
    ".gif": "GIF",
    ".webp": "WEBP",
}


def make_image_bytes(width: int = 100, height: int = 100, extension: str = ".png", mode: str = "RGB") -> bytes:
    color = (40, 80, 120, 255) if mode == "RGBA" else (40, 80, 120)
    img = Image.new(mode, (width, height), color)
    buf = BytesIO()
    img.save(buf, format=PIL_FORMATS[extension])
    return buf.getvalue()


@pytest.fixture
def image_stream():
    def factory(width: int = 100, height: int = 100, extension: str = ".png", mode: str = "RGB") -> BytesIO:
        return BytesIO(make_image_bytes(width, height, extension, mode))

    return factory


@pytest.fixture(autouse=True)
def bundled_default_font(monkeypatch):
    """Use Pillow's bundled font so tests do not depend on installed system fonts."""
    calls = []

    def fake_resolve(size, *args, **kwargs):
        calls.append(size)
        return ImageFont.load_default(size=size)

    monkeypatch.setattr(watermark, "resolve_default_font", fake_resolve)
    return calls
