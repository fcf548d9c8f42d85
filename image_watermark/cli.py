from __future__ import annotations

import argparse
import platform
import sys
from pathlib import Path

from dotenv import load_dotenv
from PIL import ImageColor, ImageFont

from .config import WatermarkConfig, parse_log_level
from .errors import InvalidArgumentError, WatermarkError
from .fonts import default_font_family, default_registry, system_font_dirs
from .formats import SUPPORTED_EXTENSIONS
from .log import configure_logging
from .position import WatermarkPosition
from .watermark import Watermarker

EXIT_SKIPPED = 2


def _parse_color(value: str) -> tuple[int, int, int, int]:
    try:
        return ImageColor.getcolor(value, "RGBA")
    except ValueError as exc:
        raise InvalidArgumentError(f"invalid color: {value!r}") from exc


def _load_font(path: str | None, size: int) -> ImageFont.FreeTypeFont | None:
    if not path:
        return None
    try:
        return ImageFont.truetype(path, size)
    except OSError as exc:
        raise InvalidArgumentError(f"cannot load font file {path!r}: {exc}") from exc


def _cmd_apply(args: argparse.Namespace, cfg: WatermarkConfig) -> int:
    src = Path(args.src)
    dst = Path(args.dst)
    color = _parse_color(args.color)
    font = _load_font(args.font, args.font_size)

    with Watermarker(src.open("rb"), src.suffix, pixels_threshold=args.threshold, config=cfg) as wm:
        data = wm.add_watermark(
            args.text,
            color,
            position=args.position,
            padding=args.padding,
            font_size=args.font_size,
            font=font,
            clamp=args.clamp,
        )

    if data is None:
        print(f"skipped: {src} is smaller than {args.threshold} pixels")
        return EXIT_SKIPPED

    dst.parent.mkdir(parents=True, exist_ok=True)
    dst.write_bytes(data)
    print(dst)
    return 0


def _cmd_fonts(_args: argparse.Namespace, cfg: WatermarkConfig) -> int:
    registry = default_registry(extra_dirs=cfg.font_dirs)
    for family in registry.families():
        print(family)
    print("default:", default_font_family(registry=registry))
    return 0


def _cmd_self_check(_args: argparse.Namespace, cfg: WatermarkConfig) -> int:
    dirs = list(system_font_dirs()) + list(cfg.font_dirs)
    print("platform:", platform.system())
    for directory in dirs:
        print("font dir:", directory, "" if directory.is_dir() else "(missing)")
    print("default font:", default_font_family(registry=default_registry(extra_dirs=cfg.font_dirs)))
    print("formats:", " ".join(SUPPORTED_EXTENSIONS))
    print("OK")
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(prog="image_watermark", description="Draw a text watermark onto an image")
    parser.add_argument("--log-level", default=None, help="override WATERMARK_LOG_LEVEL")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_apply = sub.add_parser("apply", help="watermark one image file")
    p_apply.add_argument("src", help="source image; its extension selects the output format")
    p_apply.add_argument("dst", help="where to write the watermarked image")
    p_apply.add_argument("--text", required=True)
    p_apply.add_argument("--color", default="white", help="color name or #rrggbb[aa]")
    p_apply.add_argument(
        "--position",
        default=WatermarkPosition.BOTTOM_RIGHT.value,
        choices=[p.value for p in WatermarkPosition],
    )
    p_apply.add_argument("--padding", type=int, default=10)
    p_apply.add_argument("--font-size", type=int, default=20)
    p_apply.add_argument("--font", default=None, help="path to a TrueType/OpenType font file")
    p_apply.add_argument("--threshold", type=int, default=0, help="skip images with fewer pixels than this")
    p_apply.add_argument("--clamp", action="store_true", help="keep the text inside the image bounds")
    p_apply.set_defaults(func=_cmd_apply)

    p_fonts = sub.add_parser("fonts", help="list installed font families")
    p_fonts.set_defaults(func=_cmd_fonts)

    p_check = sub.add_parser("self-check", help="show platform, font directories and default font")
    p_check.set_defaults(func=_cmd_self_check)

    args = parser.parse_args(argv)

    try:
        cfg = WatermarkConfig.load()
        level = parse_log_level(args.log_level) if args.log_level else cfg.log_level
        configure_logging(level)
        return int(args.func(args, cfg))
    except WatermarkError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
