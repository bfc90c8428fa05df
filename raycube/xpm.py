"""Reading XPM images into 32-bit pixel arrays."""

from __future__ import annotations

import re
from dataclasses import dataclass

import numpy as np

from .errors import CubError

TRANSPARENT = 0xFF000000

_STRING_RE = re.compile(r'"((?:[^"\\]|\\.)*)"')
_KEYS = ("c", "g", "g4", "m", "s")
_PREFERENCE = ("c", "g", "g4", "m")

_NAMED_COLORS = {
    "black": 0x000000,
    "white": 0xFFFFFF,
    "red": 0xFF0000,
    "green": 0x00FF00,
    "blue": 0x0000FF,
    "yellow": 0xFFFF00,
    "cyan": 0x00FFFF,
    "magenta": 0xFF00FF,
    "gray": 0xBEBEBE,
    "grey": 0xBEBEBE,
}


def _bad(message: str) -> CubError:
    return CubError("texture", message)


@dataclass(frozen=True)
class Texture:
    """An image as rows of ``0xAARRGGBB`` values; alpha 0xFF marks transparency."""

    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the texture")
        return int(self.pixels[y, x])


def _color_value(spec: str) -> int:
    lowered = spec.lower()
    if lowered == "none":
        return TRANSPARENT
    if lowered.startswith("#"):
        digits = lowered[1:]
        if len(digits) not in (3, 6, 9, 12) or not all(c in "0123456789abcdef" for c in digits):
            raise _bad(f"bad colour {spec!r}")
        size = len(digits) // 3
        value = 0
        for start in range(0, len(digits), size):
            component = int(digits[start:start + size], 16)
            if size == 1:
                component *= 17
            elif size > 2:
                component >>= 4 * (size - 2)
            value = value << 8 | component
        return value
    try:
        return _NAMED_COLORS[lowered.replace(" ", "")]
    except KeyError:
        raise _bad(f"unknown colour {spec!r}") from None


def _parse_color_line(line: str, cpp: int) -> tuple[str, int]:
    if len(line) < cpp:
        raise _bad("short colour line")
    symbol = line[:cpp]
    values: dict[str, list[str]] = {}
    current: str | None = None
    for token in line[cpp:].split():
        if token in _KEYS:
            current = token
            values[current] = []
        elif current is None:
            raise _bad("colour line without key")
        else:
            values[current].append(token)
    for key in _PREFERENCE:
        words = values.get(key)
        if words:
            return symbol, _color_value(" ".join(words))
    raise _bad("colour line without a visual colour")


def parse_xpm(text: str) -> Texture:
    """Parse the text of an XPM3 image."""
    strings = _STRING_RE.findall(text)
    if not strings:
        raise _bad("no XPM data")
    header = strings[0].split()
    if len(header) < 4:
        raise _bad("bad XPM header")
    try:
        width, height, ncolors, cpp = (int(v) for v in header[:4])
    except ValueError:
        raise _bad("bad XPM header") from None
    if min(width, height, ncolors, cpp) <= 0:
        raise _bad("bad XPM header")
    if len(strings) < 1 + ncolors + height:
        raise _bad("truncated XPM data")

    palette = dict(_parse_color_line(line, cpp) for line in strings[1:1 + ncolors])
    rows = strings[1 + ncolors:1 + ncolors + height]
    pixels = np.empty((height, width), dtype=np.uint32)
    for y, row in enumerate(rows):
        if len(row) < width * cpp:
            raise _bad("short pixel row")
        try:
            pixels[y] = [palette[row[i:i + cpp]] for i in range(0, width * cpp, cpp)]
        except KeyError:
            raise _bad("pixel uses an undefined colour") from None
    return Texture(pixels)


def load_xpm(path: str) -> Texture:
    """Read and parse the XPM image at ``path``."""
    try:
        with open(path, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        raise _bad("load image fail") from exc
    return parse_xpm(text)