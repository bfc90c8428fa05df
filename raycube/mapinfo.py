"""Map tiles and the parsed description of a level."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class Tile(IntEnum):
    """Contents of one map cell; order matters for comparisons."""

    NONE = 0
    WALL = 1
    PATH = 2
    SPAWN_N = 3
    SPAWN_S = 4
    SPAWN_E = 5
    SPAWN_W = 6
    DOOR = 7
    SPRITE = 8


@dataclass
class MapInfo:
    """Everything read from a level file: textures, colours and the grid.

    The grid is indexed as ``grid[row][col]``; every row has the same length.
    """

    grid: list[list[Tile]] = field(default_factory=list)
    path: str | None = None
    north_texture: str | None = None
    south_texture: str | None = None
    east_texture: str | None = None
    west_texture: str | None = None
    floor_color: int | None = None
    ceiling_color: int | None = None
    start_x: int = 0
    start_y: int = 0
    start_direction: Tile | None = None
    sprite_x: float = 0.0
    sprite_y: float = 0.0
    sprite_count: int = 0

    def __post_init__(self) -> None:
        widths = {len(row) for row in self.grid}
        if len(widths) > 1:
            raise ValueError("all map rows must have the same width")
        self.grid = [[Tile(cell) for cell in row] for row in self.grid]

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def tile(self, row: int, col: int) -> Tile:
        """Return the tile at ``row``, ``col``; raise IndexError outside the grid."""
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"cell ({row}, {col}) is outside the map")
        return self.grid[row][col]

    def is_spawn(self, tile: Tile) -> bool:
        """Tell whether ``tile`` is one of the four spawn markers."""
        return Tile.SPAWN_N <= tile <= Tile.SPAWN_W