"""Reading level files: identifiers, colours and the map grid."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from enum import Enum, auto

from .errors import CubError
from .mapinfo import MapInfo, Tile
from .validate import validate_map

_REQUIRED_ELEMENTS = 6

_TEXTURE_KEYS = {
    "NO": "north_texture",
    "SO": "south_texture",
    "EA": "east_texture",
    "WE": "west_texture",
}
_COLOR_KEYS = {"F": "floor_color", "C": "ceiling_color"}

_MAP_CHARS = {
    " ": Tile.NONE,
    "0": Tile.PATH,
    "1": Tile.WALL,
    "N": Tile.SPAWN_N,
    "S": Tile.SPAWN_S,
    "E": Tile.SPAWN_E,
    "W": Tile.SPAWN_W,
    "D": Tile.DOOR,
    "C": Tile.SPRITE,
}
_SPAWN_CHARS = "NSEW"

_COLOR_RE = re.compile(r"([0-9]{1,3}),([0-9]{1,3}),([0-9]{1,3})(?:\n.*)?", re.DOTALL)
_MAP_LINE_RE = re.compile(r"[ 10NSEWDC]*")


class _MapState(Enum):
    BEFORE = auto()
    INSIDE = auto()
    AFTER = auto()


def _at_end(text: str) -> bool:
    return text == "" or text.startswith("\n")


def parse_color(text: str) -> int:
    """Turn ``"R,G,B"`` (each 0-255, one to three digits) into ``0xRRGGBB``."""
    match = _COLOR_RE.fullmatch(text)
    if match is None:
        raise CubError("map", "wrong color info")
    red, green, blue = (int(part) for part in match.groups())
    if max(red, green, blue) > 255:
        raise CubError("map", "wrong color info")
    return red << 16 | green << 8 | blue


def _set_texture(info: MapInfo, key: str, rest: str) -> None:
    attribute = _TEXTURE_KEYS[key]
    if getattr(info, attribute) is not None:
        raise CubError("map", f"{key} identifier overlapped")
    rest = rest.lstrip(" ")
    if _at_end(rest):
        raise CubError("map", f"no infomation for {key} identifier")
    setattr(info, attribute, rest.strip("\n"))


def _set_color(info: MapInfo, key: str, rest: str) -> None:
    attribute = _COLOR_KEYS[key]
    if getattr(info, attribute) is not None:
        raise CubError("map", f"{key} identifier overlapped")
    rest = rest.lstrip(" ")
    if rest == "":
        raise CubError("map", f"no infomation for {key} identifier")
    setattr(info, attribute, parse_color(rest))


def _parse_identifier(info: MapInfo, line: str) -> bool:
    """Apply one header line; return True if it held an identifier."""
    body = line.lstrip(" ")
    for key in _TEXTURE_KEYS:
        if body.startswith(key + " "):
            _set_texture(info, key, body[len(key) + 1:])
            return True
    for key in _COLOR_KEYS:
        if body.startswith(key + " "):
            _set_color(info, key, body[len(key) + 1:])
            return True
    if _at_end(body):
        return False
    raise CubError("map", "not a vaild identifier")


def parse_lines(lines: Iterable[str]) -> MapInfo:
    """Build a MapInfo from the lines of a level file.

    The six identifiers come first; the remaining non-blank lines form the
    grid, padded with empty cells to the widest row.
    """
    info = MapInfo()
    found = 0
    rows: list[str] = []
    spawns = 0
    state = _MapState.BEFORE
    for line in lines:
        if found < _REQUIRED_ELEMENTS:
            if _parse_identifier(info, line):
                found += 1
            continue
        if _at_end(line.lstrip(" ")):
            if state is _MapState.INSIDE:
                state = _MapState.AFTER
            continue
        if state is _MapState.AFTER:
            raise CubError("map", "not a vaild map")
        state = _MapState.INSIDE
        content = line.split("\n", 1)[0]
        if _MAP_LINE_RE.fullmatch(content) is None:
            raise CubError("map", "not a vaild element for map")
        spawns += sum(char in _SPAWN_CHARS for char in content)
        rows.append(content.rstrip(" "))

    if found < _REQUIRED_ELEMENTS or not rows:
        raise CubError("map", "not enough elements")
    if spawns == 0:
        raise CubError("map", "none starting position")
    if spawns != 1:
        raise CubError("map", "to much starting positions")

    width = max(len(row) for row in rows)
    info.grid = [[_MAP_CHARS[char] for char in row.ljust(width)] for row in rows]
    return info


def check_map_name(path: str) -> str:
    """Return ``path`` if it names a ``.cub`` file, else raise CubError."""
    if not path.endswith(".cub"):
        raise CubError("map", "mapname not valid")
    return path


def _split_lines(text: str) -> Iterator[str]:
    *complete, last = text.split("\n")
    for part in complete:
        yield part + "\n"
    if last:
        yield last


def find_sprite(info: MapInfo) -> None:
    """Place the sprite at the centre of the first sprite cell, row by row."""
    for row, cells in enumerate(info.grid):
        for col, tile in enumerate(cells):
            if tile == Tile.SPRITE:
                info.sprite_x = row + 0.5
                info.sprite_y = col + 0.5
                return


def load_map(path: str) -> MapInfo:
    """Read, check and validate the level file at ``path``."""
    check_map_name(path)
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise CubError("map", "failed to open map") from exc
    info = parse_lines(_split_lines(text))
    info.path = path
    validate_map(info)
    if info.sprite_count > 1:
        raise CubError("sprite", "we can handle only one")
    find_sprite(info)
    return info