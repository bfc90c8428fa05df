"""Texture file names and loading the full texture set."""

from __future__ import annotations

from .errors import CubError
from .mapinfo import MapInfo
from .xpm import Texture, load_xpm

TEXTURE_COUNT = 69
DOOR_FIRST = 4
DOOR_COUNT = 4
MOON_FIRST = 8
MOON_COUNT = 60
SPRITE_TEXTURE = 68
SPRITE_IMAGE = "./img/cute mushroom walk.xpm"


def moon_image(index: int) -> str:
    """Return the file of the moon phase stored at texture slot ``index``."""
    if not MOON_FIRST <= index < MOON_FIRST + MOON_COUNT:
        raise ValueError(f"texture slot {index} does not hold a moon phase")
    return f"./moon_xpm/moon{index - MOON_FIRST + 1}.xpm"


def texture_paths(info: MapInfo) -> list[str | None]:
    """List the file of every texture slot: walls, doors, moon phases, sprite."""
    walls = [info.north_texture, info.south_texture, info.east_texture, info.west_texture]
    doors = [f"./img/door{n}.xpm" for n in range(1, DOOR_COUNT + 1)]
    moons = [moon_image(index) for index in range(MOON_FIRST, MOON_FIRST + MOON_COUNT)]
    return [*walls, *doors, *moons, SPRITE_IMAGE]


def load_textures(info: MapInfo) -> list[Texture]:
    """Load every texture slot; raise CubError if any image cannot be read."""
    textures = []
    for path in texture_paths(info):
        if path is None:
            raise CubError("texture", "load image fail")
        textures.append(load_xpm(path))
    return textures