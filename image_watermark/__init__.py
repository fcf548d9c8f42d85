from __future__ import annotations

from .config import WatermarkConfig
from .errors import (
    ImageDecodeError,
    ImageEncodeError,
    InvalidArgumentError,
    InvalidOperationError,
    OutOfRangeError,
    PlatformUnsupportedError,
    UnsupportedFormatError,
    WatermarkError,
)
from .fonts import FontRegistry, default_font_family, resolve_default_font
from .formats import SUPPORTED_EXTENSIONS, ImageFormat
from .position import WatermarkPosition, calculate_position
from .watermark import TextMetrics, Watermarker, measure_text

__version__ = "0.1.0"

__all__ = [
    "FontRegistry",
    "ImageDecodeError",
    "ImageEncodeError",
    "ImageFormat",
    "InvalidArgumentError",
    "InvalidOperationError",
    "OutOfRangeError",
    "PlatformUnsupportedError",
    "SUPPORTED_EXTENSIONS",
    "TextMetrics",
    "UnsupportedFormatError",
    "WatermarkConfig",
    "WatermarkError",
    "WatermarkPosition",
    "Watermarker",
    "calculate_position",
    "default_font_family",
    "measure_text",
    "resolve_default_font",
]
