"""Structural checks on a parsed map grid."""

from __future__ import annotations

from .errors import CubError
from .mapinfo import MapInfo, Tile

_NEIGHBOURS = [(dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)]


def _invalid_map() -> CubError:
    return CubError("map", "not a valid map")


def _check_door(info: MapInfo, row: int, col: int) -> None:
    grid = info.grid
    between_horizontal = grid[row][col - 1] == Tile.WALL and grid[row][col + 1] == Tile.WALL
    between_vertical = grid[row - 1][col] == Tile.WALL and grid[row + 1][col] == Tile.WALL
    if not (between_horizontal or between_vertical):
        raise CubError("door", "not a valid door")


def _check_walkable(info: MapInfo, row: int, col: int) -> None:
    if row in (0, info.height - 1) or col in (0, info.width - 1):
        raise _invalid_map()
    tile = info.grid[row][col]
    if tile == Tile.DOOR:
        _check_door(info, row, col)
    if tile == Tile.SPRITE:
        info.sprite_count += 1
    if any(info.grid[row + dr][col + dc] == Tile.NONE for dr, dc in _NEIGHBOURS):
        raise _invalid_map()


def _check_empty(info: MapInfo, row: int, col: int) -> None:
    for dr, dc in _NEIGHBOURS:
        r, c = row + dr, col + dc
        if 0 <= r < info.height and 0 <= c < info.width:
            if info.grid[r][c] not in (Tile.NONE, Tile.WALL):
                raise _invalid_map()


def validate_map(info: MapInfo) -> None:
    """Check that the map is closed and its doors sit between walls.

    Records the spawn position and direction and counts sprites on ``info``.
    Raises CubError on the first problem found.
    """
    for row, cells in enumerate(info.grid):
        for col, tile in enumerate(cells):
            if tile == Tile.NONE:
                _check_empty(info, row, col)
            if tile >= Tile.PATH:
                _check_walkable(info, row, col)
                if info.is_spawn(tile):
                    info.start_x = col
                    info.start_y = row
                    info.start_direction = tile