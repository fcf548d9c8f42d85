from __future__ import annotations

import logging
from enum import Enum
from io import BytesIO
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

from .errors import ImageDecodeError, ImageEncodeError, UnsupportedFormatError

logger = logging.getLogger(__name__)


class ImageFormat(Enum):
    """Encoders selectable by extension tag."""

    PNG = ("PNG", (".png",))
    JPEG = ("JPEG", (".jpg", ".jpeg"))
    BMP = ("BMP", (".bmp",))
    GIF = ("GIF", (".gif",))
    WEBP = ("WEBP", (".webp",))

    def __init__(self, pil_format: str, extensions: tuple[str, ...]) -> None:
        self.pil_format = pil_format
        self.extensions = extensions

    @property
    def supports_alpha(self) -> bool:
        return self in (ImageFormat.PNG, ImageFormat.GIF, ImageFormat.WEBP)

    @classmethod
    def from_extension(cls, extension: str) -> "ImageFormat":
        tag = (extension or "").strip().lower()
        if tag and not tag.startswith("."):
            tag = "." + tag
        for member in cls:
            if tag in member.extensions:
                return member
        raise UnsupportedFormatError(extension)


SUPPORTED_EXTENSIONS = tuple(ext for fmt in ImageFormat for ext in fmt.extensions)


def has_alpha(image: Image.Image) -> bool:
    return image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info


def decode(stream: BinaryIO) -> Image.Image:
    """Decode a stream into a fully loaded image; the format is sniffed from the bytes."""
    try:
        image = Image.open(stream)
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, EOFError, SyntaxError, ValueError) as exc:
        raise ImageDecodeError(f"cannot decode image: {exc}") from exc
    logger.debug("decoded %s image %dx%d (%s)", image.format, image.width, image.height, image.mode)
    return image


def encode(
    image: Image.Image,
    fmt: ImageFormat,
    *,
    keep_alpha: bool = True,
    jpeg_quality: int = 90,
    webp_quality: int = 90,
) -> bytes:
    """Encode ``image`` with the encoder for ``fmt`` and return the bytes."""
    if fmt.supports_alpha and keep_alpha:
        out = image if image.mode == "RGBA" else image.convert("RGBA")
    else:
        out = image if image.mode == "RGB" else image.convert("RGB")

    params: dict = {}
    if fmt is ImageFormat.JPEG:
        params["quality"] = jpeg_quality
    elif fmt is ImageFormat.WEBP:
        params["quality"] = webp_quality

    buffer = BytesIO()
    try:
        out.save(buffer, format=fmt.pil_format, **params)
    except (OSError, ValueError, KeyError) as exc:
        raise ImageEncodeError(f"cannot encode image as {fmt.pil_format}: {exc}") from exc
    buffer.seek(0)
    return buffer.getvalue()
