from __future__ import annotations

import pytest

from image_watermark.errors import InvalidArgumentError
from image_watermark.position import WatermarkPosition, calculate_position


@pytest.mark.parametrize(
    "position, expected",
    [
        (WatermarkPosition.TOP_LEFT, (5, 5)),
        (WatermarkPosition.TOP_RIGHT, (145, 5)),
        (WatermarkPosition.BOTTOM_LEFT, (5, 175)),
        (WatermarkPosition.BOTTOM_RIGHT, (145, 175)),
        (WatermarkPosition.CENTER, (75, 90)),
    ],
)
def test_anchor_positions(position, expected):
    assert calculate_position(position, 200, 200, 50, 20, 5) == expected


def test_zero_padding_top_left_is_origin():
    assert calculate_position(WatermarkPosition.TOP_LEFT, 200, 200, 50, 20, 0) == (0, 0)


def test_zero_padding_bottom_right_touches_edges():
    assert calculate_position(WatermarkPosition.BOTTOM_RIGHT, 200, 200, 50, 20, 0) == (150, 180)


def test_center_ignores_padding():
    assert calculate_position(WatermarkPosition.CENTER, 200, 200, 50, 20, 40) == (75, 90)


def test_fractional_text_size_is_rounded_up():
    assert calculate_position(WatermarkPosition.BOTTOM_RIGHT, 200, 200, 49.2, 19.01, 5) == (145, 175)


def test_center_uses_floor_division():
    assert calculate_position(WatermarkPosition.CENTER, 201, 101, 50, 20, 0) == (75, 40)


def test_text_larger_than_image_is_not_clamped_by_default():
    x, y = calculate_position(WatermarkPosition.BOTTOM_RIGHT, 10, 10, 80, 30, 10)
    assert (x, y) == (-80, -30)


def test_clamped_mode_keeps_origin_inside_image():
    assert calculate_position(WatermarkPosition.BOTTOM_RIGHT, 10, 10, 80, 30, 10, clamp=True) == (0, 0)
    assert calculate_position(WatermarkPosition.TOP_LEFT, 100, 100, 95, 20, 10, clamp=True) == (5, 10)
    assert calculate_position(WatermarkPosition.TOP_RIGHT, 200, 200, 50, 20, 5, clamp=True) == (145, 5)


def test_string_positions_are_coerced():
    assert calculate_position("top-right", 200, 200, 50, 20, 5) == (145, 5)
    assert calculate_position("BOTTOM_LEFT", 200, 200, 50, 20, 5) == (5, 175)


@pytest.mark.parametrize("value", ["middle", "", 3, None])
def test_unknown_anchor_raises(value):
    with pytest.raises(InvalidArgumentError):
        calculate_position(value, 200, 200, 50, 20, 5)
