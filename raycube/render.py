"""Drawing one frame: background, moon, walls, doors, sprite and minimap."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from itertools import product

import numpy as np

from .game import SCREEN_HEIGHT, SCREEN_WIDTH, Game
from .mapinfo import MapInfo, Tile
from .raycast import RayHit, cast_ray, door_texture_index, wall_texture_index
from .textures import MOON_COUNT, MOON_FIRST, SPRITE_TEXTURE
from .xpm import TRANSPARENT, Texture

PLAYER_COLOR = 0xFF0000
EMPTY_COLOR = 0xDCCCAC
CLOSED_DOOR_COLOR = 0x000000
OPEN_DOOR_COLOR = 0xFFFF33
WALL_COLOR = 0x5F4541

_MINIMAP_CELLS = 15
_MINIMAP_CENTRE = 7
_MINIMAP_CELL_SIZE = 20
_MINIMAP_LEFT = SCREEN_WIDTH - 301

_MOON_SCALE = 4
_MOON_SIZE = 192
_MOON_TOP = 180
_MOON_LEFT = 320

_SPRITE_FRAME_WIDTH = 48
_SPRITE_FRAMES = 4


def _blank_pixels() -> np.ndarray:
    return np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=np.uint32)


@dataclass
class Frame:
    """A screen-sized image of ``0xRRGGBB`` values, indexed ``pixels[row, column]``."""

    pixels: np.ndarray = field(default_factory=_blank_pixels)

    def __post_init__(self) -> None:
        if self.pixels.shape != (SCREEN_HEIGHT, SCREEN_WIDTH):
            raise ValueError(
                f"frame must be {SCREEN_HEIGHT}x{SCREEN_WIDTH}, got {self.pixels.shape}"
            )

    def to_rgb(self) -> np.ndarray:
        """Return the frame as a (height, width, 3) array of bytes."""
        p = self.pixels
        channels = ((p >> 16) & 0xFF, (p >> 8) & 0xFF, p & 0xFF)
        return np.stack(channels, axis=-1).astype(np.uint8)


def _opaque(colors: np.ndarray) -> np.ndarray:
    return (colors & TRANSPARENT) == 0


def _draw_background(frame: Frame, info: MapInfo) -> None:
    half = SCREEN_HEIGHT // 2
    frame.pixels[:half] = info.ceiling_color or 0
    frame.pixels[half:] = info.floor_color or 0


def _draw_moon(frame: Frame, textures: Sequence[Texture], now: int) -> None:
    texture = textures[now % MOON_COUNT + MOON_FIRST]
    source = texture.pixels[: _MOON_SIZE // _MOON_SCALE, : _MOON_SIZE // _MOON_SCALE]
    scaled = np.repeat(np.repeat(source, _MOON_SCALE, axis=0), _MOON_SCALE, axis=1)
    height, width = scaled.shape
    region = frame.pixels[_MOON_TOP:_MOON_TOP + height, _MOON_LEFT:_MOON_LEFT + width]
    mask = _opaque(scaled)
    region[mask] = scaled[mask]


def _texture_rows(start: int, end: int, line_height: int, tex_height: int) -> np.ndarray:
    step = tex_height / line_height
    position = (start - SCREEN_HEIGHT // 2 + line_height // 2) * step
    positions = position + step * np.arange(end - start)
    return positions.astype(np.int64) % tex_height


def _draw_wall(frame: Frame, hit: RayHit, textures: Sequence[Texture]) -> None:
    line_height, start, end = hit.wall_span
    if end <= start:
        return
    texture = textures[wall_texture_index(hit)]
    tex_x = int(hit.wall_x * texture.width)
    if (hit.side == 0 and hit.ray_dir_x > 0) or (hit.side == 1 and hit.ray_dir_y < 0):
        tex_x = texture.width - tex_x - 1
    rows = _texture_rows(start, end, line_height, texture.height)
    frame.pixels[start:end, hit.column] = texture.pixels[rows, tex_x]


def _draw_door(
    frame: Frame, hit: RayHit, textures: Sequence[Texture], now: int, offset: int
) -> bool:
    """Draw the door slice; return False when the door is slid out of this column."""
    line_height, start, end = hit.door_span
    texture = textures[door_texture_index(now)]
    tex_x = int(hit.door_x * texture.width) + offset
    if tex_x >= texture.width:
        return False
    if end > start:
        rows = _texture_rows(start, end, line_height, texture.height)
        frame.pixels[start:end, hit.column] = texture.pixels[rows, tex_x]
    return True


def _has_sprite(info: MapInfo) -> bool:
    return any(Tile.SPRITE in row for row in info.grid)


def _draw_sprite(
    frame: Frame,
    game: Game,
    textures: Sequence[Texture],
    now: int,
    zbuffer: np.ndarray,
    dbuffer: np.ndarray,
) -> None:
    info, cam = game.info, game.camera
    rel_x = info.sprite_x - game.pos_x
    rel_y = info.sprite_y - game.pos_y
    det = cam.plane_x * cam.dir_y - cam.dir_x * cam.plane_y
    if det == 0:
        return
    inv_det = 1.0 / det
    transform_x = inv_det * (cam.dir_y * rel_x - cam.dir_x * rel_y)
    depth = inv_det * (-cam.plane_y * rel_x + cam.plane_x * rel_y)
    if depth <= 0:
        return
    screen_x = int((SCREEN_WIDTH // 2) * (1 + transform_x / depth))
    size = abs(int(SCREEN_HEIGHT / depth))
    if size == 0:
        return
    start_y = max(-(size // 2) + SCREEN_HEIGHT // 2, 0)
    end_y = min(size // 2 + SCREEN_HEIGHT // 2, SCREEN_HEIGHT - 1)
    left = -(size // 2) + screen_x
    start_x = max(left, 0)
    end_x = min(size // 2 + screen_x, SCREEN_WIDTH - 1)

    texture = textures[SPRITE_TEXTURE]
    frame_offset = (now // 2 % _SPRITE_FRAMES) * _SPRITE_FRAME_WIDTH
    ys = np.arange(start_y, end_y, dtype=np.int64)
    d = ys * 256 - SCREEN_HEIGHT * 128 + size * 128
    tex_rows = (d * texture.height) // size // 256
    valid = (tex_rows >= 0) & (tex_rows < texture.height)
    ys, tex_rows = ys[valid], tex_rows[valid]

    for x in range(max(start_x, 1), end_x):
        if not depth < zbuffer[x]:
            continue
        if dbuffer[x] != 0 and not depth < dbuffer[x]:
            continue
        tex_x = (256 * (x - left) * texture.width) // 4 // size // 256 + frame_offset
        if not 0 <= tex_x < texture.width:
            continue
        colors = texture.pixels[tex_rows, tex_x]
        mask = _opaque(colors)
        frame.pixels[ys[mask], x] = colors[mask]


def minimap_color(game: Game, x: int, y: int) -> int:
    """Colour of minimap cell ``x``, ``y`` (0-14, player at 7, 7)."""
    if x == _MINIMAP_CENTRE and y == _MINIMAP_CENTRE:
        return PLAYER_COLOR
    info = game.info
    row = int(game.pos_x) + y - _MINIMAP_CENTRE
    col = int(game.pos_y) + x - _MINIMAP_CENTRE
    if not (0 <= row < info.height and 0 <= col < info.width):
        return EMPTY_COLOR
    tile = info.grid[row][col]
    if tile == Tile.DOOR:
        return CLOSED_DOOR_COLOR if game.door_blocking else OPEN_DOOR_COLOR
    if tile == Tile.WALL:
        return WALL_COLOR
    return EMPTY_COLOR


def _draw_minimap(frame: Frame, game: Game) -> None:
    size = _MINIMAP_CELL_SIZE
    for y, x in product(range(_MINIMAP_CELLS), repeat=2):
        top = y * size
        left = _MINIMAP_LEFT + x * size
        frame.pixels[top:top + size, left:left + size] = minimap_color(game, x, y)


def render_frame(
    game: Game, textures: Sequence[Texture], now: int, frame: Frame | None = None
) -> Frame:
    """Advance the doors and draw the whole scene for time ``now`` into ``frame``."""
    if frame is None:
        frame = Frame()
    _draw_background(frame, game.info)
    _draw_moon(frame, textures, now)
    game.update_door(now)

    zbuffer = np.zeros(SCREEN_WIDTH)
    dbuffer = np.zeros(SCREEN_WIDTH)
    for x in range(SCREEN_WIDTH):
        hit = cast_ray(game, x)
        _draw_wall(frame, hit, textures)
        if hit.door and _draw_door(frame, hit, textures, now, game.door_offset):
            dbuffer[x] = hit.door_dist
        zbuffer[x] = hit.wall_dist

    if _has_sprite(game.info):
        _draw_sprite(frame, game, textures, now, zbuffer, dbuffer)
    _draw_minimap(frame, game)
    return frame