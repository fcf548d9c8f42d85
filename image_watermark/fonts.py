from __future__ import annotations

import logging
import os
import platform
from functools import lru_cache
from itertools import count
from pathlib import Path
from typing import Callable, Iterable, Iterator, NamedTuple

from PIL import ImageFont

from .errors import InvalidOperationError, PlatformUnsupportedError

logger = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "Arial"

LINUX_FONT_PREFERENCES = (
    "Arial",
    "Verdana",
    "Helvetica",
    "Tahoma",
    "Open Sans",
    "DejaVu Sans",
    "DejaVu Sans Mono",
    "Ubuntu Mono",
    "Liberation Sans",
    "Monospace",
)

FONT_EXTENSIONS = (".ttf", ".otf", ".ttc")

_REGULAR_STYLES = ("regular", "book", "normal", "roman", "medium")


class FontFace(NamedTuple):
    path: Path
    index: int = 0


class FontRegistry:
    """
    Index of installed font files keyed by family name.

    Directories are scanned lazily on first lookup. Family names are matched
    case-insensitively; each family maps style names (as reported by the font
    itself) to a face, a file path plus the face index within a collection.
    """

    def __init__(self, directories: Iterable[Path | str]):
        self.directories = tuple(Path(d) for d in directories)
        self._index: dict[str, dict[str, FontFace]] | None = None
        self._names: dict[str, str] = {}

    @staticmethod
    def _read_faces(path: Path) -> Iterator[tuple[str | None, str | None, int]]:
        """Yield ``(family, style, index)`` for every face in ``path``."""
        family, style = ImageFont.truetype(str(path), 12).getname()
        yield family, style, 0
        if path.suffix.lower() != ".ttc":
            return
        for index in count(1):
            try:
                family, style = ImageFont.truetype(str(path), 12, index=index).getname()
            except OSError:
                return
            yield family, style, index

    def _scan(self) -> dict[str, dict[str, FontFace]]:
        if self._index is not None:
            return self._index

        index: dict[str, dict[str, FontFace]] = {}
        for directory in self.directories:
            if not directory.is_dir():
                continue
            for path in sorted(directory.rglob("*")):
                if path.suffix.lower() not in FONT_EXTENSIONS or not path.is_file():
                    continue
                try:
                    faces = list(self._read_faces(path))
                except (OSError, ValueError) as exc:
                    logger.debug("skipping unreadable font %s: %s", path, exc)
                    continue
                for family, style, face_index in faces:
                    if not family:
                        continue
                    key = family.lower()
                    self._names.setdefault(key, family)
                    index.setdefault(key, {}).setdefault(style or "Regular", FontFace(path, face_index))

        logger.debug("indexed %d font families from %d directories", len(index), len(self.directories))
        self._index = index
        return index

    def families(self) -> list[str]:
        index = self._scan()
        return sorted((self._names[key] for key in index), key=str.lower)

    def font_exists(self, name: str) -> bool:
        return name.lower() in self._scan()

    def find(self, name: str, bold: bool = True) -> FontFace | None:
        styles = self._scan().get(name.lower())
        if not styles:
            return None

        lowered = {style.lower(): face for style, face in styles.items()}
        if bold:
            if "bold" in lowered:
                return lowered["bold"]
            for style, face in sorted(lowered.items()):
                if "bold" in style and "italic" not in style and "oblique" not in style:
                    return face
        for style in _REGULAR_STYLES:
            if style in lowered:
                return lowered[style]
        return lowered[sorted(lowered)[0]]

    def load(self, name: str, size: int, bold: bool = True) -> ImageFont.FreeTypeFont:
        face = self.find(name, bold=bold)
        if face is None:
            raise InvalidOperationError(f"font family {name!r} is not installed")
        try:
            return ImageFont.truetype(str(face.path), size, index=face.index)
        except OSError as exc:
            raise InvalidOperationError(f"cannot load font {name!r} from {face.path}: {exc}") from exc


def system_font_dirs(system: str | None = None) -> list[Path]:
    system = (system or platform.system()).lower()
    home = Path.home()

    if system == "windows":
        dirs = [Path(os.environ.get("WINDIR", r"C:\Windows")) / "Fonts"]
        local = os.environ.get("LOCALAPPDATA")
        if local:
            dirs.append(Path(local) / "Microsoft" / "Windows" / "Fonts")
        return dirs
    if system == "darwin":
        return [Path("/System/Library/Fonts"), Path("/Library/Fonts"), home / "Library" / "Fonts"]
    return [
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        home / ".fonts",
        home / ".local" / "share" / "fonts",
    ]


@lru_cache()
def get_registry(directories: tuple[Path, ...]) -> FontRegistry:
    return FontRegistry(directories)


def default_registry(system: str | None = None, extra_dirs: Iterable[Path] = ()) -> FontRegistry:
    return get_registry(tuple(system_font_dirs(system)) + tuple(extra_dirs))


def _fixed_family(family: str) -> Callable[[FontRegistry], str]:
    def pick(_registry: FontRegistry) -> str:
        return family

    return pick


def _first_preferred_family(registry: FontRegistry) -> str:
    for name in LINUX_FONT_PREFERENCES:
        if registry.font_exists(name):
            return name

    installed = ", ".join(registry.families()) or "<none>"
    raise InvalidOperationError(
        f"none of the preferred fonts ({', '.join(LINUX_FONT_PREFERENCES)}) is installed; "
        f"installed families: {installed}"
    )


FONT_STRATEGIES: dict[str, Callable[[FontRegistry], str]] = {
    "windows": _fixed_family(DEFAULT_FONT_FAMILY),
    "darwin": _fixed_family(DEFAULT_FONT_FAMILY),
    "linux": _first_preferred_family,
}


def default_font_family(
    system: str | None = None,
    registry: FontRegistry | None = None,
    extra_dirs: Iterable[Path] = (),
) -> str:
    system = system or platform.system()
    strategy = FONT_STRATEGIES.get(system.lower())
    if strategy is None:
        raise PlatformUnsupportedError(system)
    registry = registry or default_registry(system, extra_dirs)
    return strategy(registry)


def resolve_default_font(
    size: int,
    system: str | None = None,
    registry: FontRegistry | None = None,
    extra_dirs: Iterable[Path] = (),
) -> ImageFont.FreeTypeFont:
    """Load the platform default family in bold at ``size``."""
    system = system or platform.system()
    registry = registry or default_registry(system, extra_dirs)
    family = default_font_family(system, registry)
    logger.debug("default font for %s: %s %dpx bold", system, family, size)
    return registry.load(family, size, bold=True)
