from __future__ import annotations

import os
from pathlib import Path

import pytest

from image_watermark.config import WatermarkConfig, parse_log_level
from image_watermark.errors import OutOfRangeError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("WATERMARK_FONT_DIRS", "WATERMARK_JPEG_QUALITY", "WATERMARK_WEBP_QUALITY", "WATERMARK_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cfg = WatermarkConfig.load()
    assert cfg.font_dirs == ()
    assert cfg.jpeg_quality == 90
    assert cfg.webp_quality == 90
    assert cfg.log_level == "WARNING"


def test_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("WATERMARK_FONT_DIRS", os.pathsep.join([str(tmp_path), str(tmp_path / "more")]))
    monkeypatch.setenv("WATERMARK_JPEG_QUALITY", "70")
    monkeypatch.setenv("WATERMARK_WEBP_QUALITY", "55")
    monkeypatch.setenv("WATERMARK_LOG_LEVEL", "debug")

    cfg = WatermarkConfig.load()
    assert cfg.font_dirs == (tmp_path, tmp_path / "more")
    assert cfg.jpeg_quality == 70
    assert cfg.webp_quality == 55
    assert cfg.log_level == "DEBUG"
    assert cfg.encoder_options() == {"jpeg_quality": 70, "webp_quality": 55}


@pytest.mark.parametrize("value", ["0", "96", "high"])
def test_invalid_jpeg_quality(monkeypatch, value):
    monkeypatch.setenv("WATERMARK_JPEG_QUALITY", value)
    with pytest.raises(OutOfRangeError):
        WatermarkConfig.load()


def test_empty_font_dir_entries_are_ignored(monkeypatch):
    monkeypatch.setenv("WATERMARK_FONT_DIRS", os.pathsep + "/opt/fonts" + os.pathsep)
    assert WatermarkConfig.load().font_dirs == (Path("/opt/fonts"),)


@pytest.mark.parametrize("value", ["loud", "Level 5", "12"])
def test_invalid_log_level(monkeypatch, value):
    monkeypatch.setenv("WATERMARK_LOG_LEVEL", value)
    with pytest.raises(OutOfRangeError):
        WatermarkConfig.load()


@pytest.mark.parametrize("value, expected", [("debug", "DEBUG"), (" Error ", "ERROR"), ("critical", "CRITICAL")])
def test_parse_log_level(value, expected):
    assert parse_log_level(value) == expected
