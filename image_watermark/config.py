from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import OutOfRangeError


def _int_env(name: str, default: int, *, min_value: int, max_value: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise OutOfRangeError(f"{name} must be an integer, got {raw!r}") from exc
    if not min_value <= value <= max_value:
        raise OutOfRangeError(f"{name} must be between {min_value} and {max_value}, got {value}")
    return value


def parse_log_level(value: str) -> str:
    """Normalise a level name, rejecting names the logging module does not know."""
    level = (value or "").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise OutOfRangeError(f"unknown log level: {value!r}")
    return level


def _path_list_env(name: str) -> tuple[Path, ...]:
    raw = os.getenv(name) or ""
    return tuple(Path(p).expanduser() for p in raw.split(os.pathsep) if p.strip())


@dataclass(frozen=True)
class WatermarkConfig:
    font_dirs: tuple[Path, ...] = field(default_factory=tuple)
    jpeg_quality: int = 90
    webp_quality: int = 90
    log_level: str = "WARNING"

    @staticmethod
    def load() -> "WatermarkConfig":
        font_dirs = _path_list_env("WATERMARK_FONT_DIRS")
        jpeg_quality = _int_env("WATERMARK_JPEG_QUALITY", 90, min_value=1, max_value=95)
        webp_quality = _int_env("WATERMARK_WEBP_QUALITY", 90, min_value=1, max_value=100)
        log_level = parse_log_level(os.getenv("WATERMARK_LOG_LEVEL") or "WARNING")

        return WatermarkConfig(
            font_dirs=font_dirs,
            jpeg_quality=jpeg_quality,
            webp_quality=webp_quality,
            log_level=log_level,
        )

    def encoder_options(self) -> dict:
        return {
            "jpeg_quality": self.jpeg_quality,
            "webp_quality": self.webp_quality,
        }
