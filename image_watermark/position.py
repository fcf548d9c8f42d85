from __future__ import annotations

import math
from enum import Enum

from .errors import InvalidArgumentError


class WatermarkPosition(Enum):
    """Anchor points for watermark placement."""

    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    CENTER = "center"

    @classmethod
    def coerce(cls, value: "WatermarkPosition | str") -> "WatermarkPosition":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "-")
            for member in cls:
                if member.value == key:
                    return member
        raise InvalidArgumentError(f"unknown watermark position: {value!r}")


def calculate_position(
    position: WatermarkPosition | str,
    img_width: int,
    img_height: int,
    text_width: float,
    text_height: float,
    padding: int,
    clamp: bool = False,
) -> tuple[int, int]:
    """
    Return the top-left drawing origin of the text for the given anchor.

    Padding only applies to the edges an anchor touches; CENTER ignores it.
    Without ``clamp`` the origin may be negative or push the text past the
    image edge when the text does not fit. With ``clamp`` each coordinate is
    bounded to ``[0, max(0, image_size - text_size)]``.
    """
    pos = WatermarkPosition.coerce(position)
    tw = math.ceil(text_width)
    th = math.ceil(text_height)

    mapping = {
        WatermarkPosition.TOP_LEFT: (padding, padding),
        WatermarkPosition.TOP_RIGHT: (img_width - tw - padding, padding),
        WatermarkPosition.BOTTOM_LEFT: (padding, img_height - th - padding),
        WatermarkPosition.BOTTOM_RIGHT: (img_width - tw - padding, img_height - th - padding),
        WatermarkPosition.CENTER: ((img_width - tw) // 2, (img_height - th) // 2),
    }
    x, y = mapping[pos]

    if clamp:
        x = min(max(x, 0), max(0, img_width - tw))
        y = min(max(y, 0), max(0, img_height - th))

    return x, y
