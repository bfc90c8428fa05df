"""Player view direction and the camera plane used for casting rays."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .mapinfo import Tile

ROTATION_DEGREES = 5

TURN_LEFT = 0
TURN_RIGHT = 1


@dataclass
class Camera:
    """Direction vector and camera plane, in map (row, column) coordinates."""

    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0

    @classmethod
    def from_spawn(cls, tile: Tile | None) -> Camera:
        """Build the camera for a spawn marker; anything unknown faces west."""
        if tile == Tile.SPAWN_N:
            return cls(dir_x=-1.0, plane_y=1.0)
        if tile == Tile.SPAWN_S:
            return cls(dir_x=1.0, plane_y=-1.0)
        if tile == Tile.SPAWN_E:
            return cls(dir_y=1.0, plane_x=1.0)
        return cls(dir_y=-1.0, plane_x=-1.0)

    def rotate(self, direction: int) -> None:
        """Turn by a fixed step: ``TURN_LEFT`` (0) or ``TURN_RIGHT`` (anything else)."""
        degrees = ROTATION_DEGREES if direction == TURN_LEFT else -ROTATION_DEGREES
        angle = degrees * math.pi / 180
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        old_dir_x, old_plane_x = self.dir_x, self.plane_x
        self.dir_x = self.dir_x * cos_a - self.dir_y * sin_a
        self.dir_y = old_dir_x * sin_a + self.dir_y * cos_a
        self.plane_x = self.plane_x * cos_a - self.plane_y * sin_a
        self.plane_y = old_plane_x * sin_a + self.plane_y * cos_a