from __future__ import annotations


class WatermarkError(Exception):
    """Base exception for all watermarking operations."""


class InvalidArgumentError(WatermarkError, ValueError):
    """Raised when a required argument is missing or malformed."""


class OutOfRangeError(WatermarkError, ValueError):
    """Raised when a numeric argument falls outside its allowed range."""


class ImageDecodeError(WatermarkError):
    """Raised when the source bytes cannot be decoded as an image."""


class ImageEncodeError(WatermarkError):
    """Raised when the watermarked image cannot be encoded."""


class UnsupportedFormatError(ImageEncodeError):
    def __init__(self, extension: str) -> None:
        super().__init__(f"unsupported image format: {extension!r}")
        self.extension = extension


class PlatformUnsupportedError(WatermarkError):
    def __init__(self, system: str) -> None:
        super().__init__(f"no default font known for platform {system!r}")
        self.system = system


class InvalidOperationError(WatermarkError):
    """Raised when the operation cannot run in the current state or environment."""
