"""Casting one ray per screen column through the map grid."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .game import SCREEN_HEIGHT, SCREEN_WIDTH, Game
from .mapinfo import Tile

_FAR = 1e30
_MIN_DISTANCE = 1e-6
_DOOR_FRAMES = 20


def _span(distance: float) -> tuple[int, int, int]:
    line_height = int(SCREEN_HEIGHT / max(distance, _MIN_DISTANCE))
    start = max(-(line_height // 2) + SCREEN_HEIGHT // 2, 0)
    end = min(line_height // 2 + SCREEN_HEIGHT // 2, SCREEN_HEIGHT - 1)
    return line_height, start, end


@dataclass
class RayHit:
    """Result of casting the ray of one screen column.

    ``side`` is 0 when a row boundary was crossed last and 1 for a column
    boundary. When the ray passed through a door, ``door`` is set and the
    first door's side and distance are recorded.
    """

    column: int
    camera_x: float
    ray_dir_x: float
    ray_dir_y: float
    origin_x: float
    origin_y: float
    map_x: int
    map_y: int
    side: int
    wall_dist: float
    door: bool = False
    door_side: int = 0
    door_dist: float = 0.0

    def _fraction(self, side: int, distance: float) -> float:
        if side == 0:
            coordinate = self.origin_y + distance * self.ray_dir_y
        else:
            coordinate = self.origin_x + distance * self.ray_dir_x
        return coordinate - math.floor(coordinate)

    @property
    def wall_x(self) -> float:
        """Where the wall was struck, as a fraction of the cell edge."""
        return self._fraction(self.side, self.wall_dist)

    @property
    def door_x(self) -> float:
        """Where the door was struck, as a fraction of the cell edge."""
        return self._fraction(self.door_side, self.door_dist)

    @property
    def wall_span(self) -> tuple[int, int, int]:
        """Line height and first and last screen rows of the wall slice."""
        return _span(self.wall_dist)

    @property
    def door_span(self) -> tuple[int, int, int]:
        """Line height and first and last screen rows of the door slice."""
        return _span(self.door_dist)


def cast_ray(game: Game, x: int) -> RayHit:
    """Walk the grid from the player along the ray of screen column ``x``.

    Raises IndexError if the ray leaves the map before meeting a wall.
    """
    camera = game.camera
    camera_x = 2 * x / SCREEN_WIDTH - 1
    ray_x = camera.dir_x + camera.plane_x * camera_x
    ray_y = camera.dir_y + camera.plane_y * camera_x
    map_x, map_y = int(game.pos_x), int(game.pos_y)
    delta_x = _FAR if ray_x == 0 else abs(1 / ray_x)
    delta_y = _FAR if ray_y == 0 else abs(1 / ray_y)

    if ray_x < 0:
        step_x, side_x = -1, (game.pos_x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - game.pos_x) * delta_x
    if ray_y < 0:
        step_y, side_y = -1, (game.pos_y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - game.pos_y) * delta_y

    door = False
    door_side = 0
    door_dist = 0.0
    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        tile = game.info.tile(map_x, map_y)
        if tile == Tile.DOOR and not door:
            door = True
            door_side = side
            door_dist = side_x - delta_x if side == 0 else side_y - delta_y
        if tile == Tile.WALL:
            break

    wall_dist = side_x - delta_x if side == 0 else side_y - delta_y
    return RayHit(
        column=x,
        camera_x=camera_x,
        ray_dir_x=ray_x,
        ray_dir_y=ray_y,
        origin_x=game.pos_x,
        origin_y=game.pos_y,
        map_x=map_x,
        map_y=map_y,
        side=side,
        wall_dist=wall_dist,
        door=door,
        door_side=door_side,
        door_dist=door_dist,
    )


def wall_texture_index(hit: RayHit) -> int:
    """Pick the wall texture (0 north .. 3 west slot) from the face that was hit."""
    if hit.side == 0:
        return 0 if hit.ray_dir_x > 0 else 1
    return 2 if hit.ray_dir_y < 0 else 3


def door_texture_index(now: int) -> int:
    """Pick one of the four animated door textures for time ``now``."""
    phase = now % _DOOR_FRAMES
    return 4 + phase // 5