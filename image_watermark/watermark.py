from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO, Union

from PIL import Image, ImageDraw, ImageFont

from .config import WatermarkConfig
from .errors import InvalidArgumentError, InvalidOperationError, OutOfRangeError
from .fonts import resolve_default_font
from .formats import ImageFormat, decode, encode, has_alpha
from .position import WatermarkPosition, calculate_position

logger = logging.getLogger(__name__)

Color = Union[str, tuple]
Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


@dataclass(frozen=True)
class TextMetrics:
    width: float
    height: float


def measure_text(text: str, font: Font) -> TextMetrics:
    """Extent of ``text`` drawn at the origin, right and bottom edges included."""
    draw = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
    box = draw.textbbox((0, 0), text, font=font)
    return TextMetrics(width=max(0, box[2]), height=max(0, box[3]))


class Watermarker:
    """
    Draws a text watermark onto one source image and re-encodes it in the
    format named by ``extension``.

    The watermarker owns ``source_stream`` and closes it on :meth:`close`.
    Without an explicit ``config`` the environment is read on first use, so a
    malformed ``WATERMARK_*`` variable surfaces from :meth:`add_watermark` as
    :class:`OutOfRangeError`, never from the constructor.
    """

    def __init__(
        self,
        source_stream: BinaryIO,
        extension: str,
        pixels_threshold: int = 0,
        config: WatermarkConfig | None = None,
    ) -> None:
        if source_stream is None:
            raise InvalidArgumentError("source_stream is required")
        if not extension:
            raise InvalidArgumentError("extension is required")

        self.source_stream = source_stream
        self.extension = extension.strip().lower()
        self._config = config
        self._pixels_threshold = pixels_threshold if pixels_threshold > 0 else 0
        self._closed = False

    @property
    def config(self) -> WatermarkConfig:
        if self._config is None:
            self._config = WatermarkConfig.load()
        return self._config

    @property
    def pixels_threshold(self) -> int:
        return self._pixels_threshold

    @property
    def size_gated(self) -> bool:
        return self._pixels_threshold > 0

    @property
    def closed(self) -> bool:
        return self._closed

    def set_pixels_threshold(self, value: int) -> None:
        if value <= 0:
            raise OutOfRangeError(f"pixels_threshold must be positive, got {value}")
        self._pixels_threshold = value

    def add_watermark(
        self,
        text: str,
        color: Color,
        position: WatermarkPosition | str = WatermarkPosition.BOTTOM_RIGHT,
        padding: int = 10,
        font_size: int = 20,
        font: Font | None = None,
        *,
        clamp: bool = False,
    ) -> bytes | None:
        """
        Draw ``text`` onto the source image and return the encoded bytes.

        Returns ``None`` when size-gating is enabled and the image area is
        below the threshold.
        """
        if self._closed:
            raise InvalidOperationError("watermarker is closed")
        if not isinstance(text, str) or not text.strip():
            raise InvalidArgumentError("watermark text must not be empty")
        if padding < 0:
            raise OutOfRangeError(f"padding must be >= 0, got {padding}")
        if font_size <= 0:
            raise OutOfRangeError(f"font_size must be > 0, got {font_size}")
        position = WatermarkPosition.coerce(position)
        fmt = ImageFormat.from_extension(self.extension)
        config = self.config

        if self.source_stream.seekable():
            self.source_stream.seek(0)

        with decode(self.source_stream) as im:
            width, height = im.size
            if self.size_gated and width * height < self._pixels_threshold:
                logger.debug(
                    "skipping %dx%d image, below threshold of %d pixels",
                    width,
                    height,
                    self._pixels_threshold,
                )
                return None

            keep_alpha = has_alpha(im)
            base = im.convert("RGBA")

        if font is None:
            font = resolve_default_font(font_size, extra_dirs=config.font_dirs)

        metrics = measure_text(text, font)
        x, y = calculate_position(position, width, height, metrics.width, metrics.height, padding, clamp=clamp)
        logger.debug("drawing %r at (%d, %d) on %dx%d image", text, x, y, width, height)

        overlay = Image.new("RGBA", base.size, (255, 255, 255, 0))
        draw = ImageDraw.Draw(overlay)
        draw.text((x, y), text, fill=color, font=font)
        out = Image.alpha_composite(base, overlay)

        return encode(out, fmt, keep_alpha=keep_alpha, **config.encoder_options())

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.source_stream.close()
        except (OSError, ValueError):
            logger.debug("error while closing source stream", exc_info=True)

    def __enter__(self) -> "Watermarker":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
