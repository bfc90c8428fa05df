"""Game state: player movement, input handling and the door animation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .camera import TURN_LEFT, TURN_RIGHT, Camera
from .mapinfo import MapInfo, Tile

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080

_STEP_DIVISOR = 7
_DOOR_SPEED = 4
_DOOR_HOLD = 50
_MOUSE_THRESHOLD = 3


class Key(IntEnum):
    """Key codes the game reacts to."""

    A = 0
    S = 1
    D = 2
    W = 13
    SPACE = 49
    ESCAPE = 53
    LEFT = 123
    RIGHT = 124


@dataclass
class Game:
    """Mutable state of a running level.

    ``pos_x`` runs along map rows and ``pos_y`` along map columns.
    """

    info: MapInfo
    camera: Camera = field(default_factory=Camera)
    pos_x: float = 0.0
    pos_y: float = 0.0
    door_width: int = 0
    door_idle: bool = True
    door_blocking: bool = True
    door_closing: bool = False
    door_offset: int = 0
    door_time: int = 0
    mouse_x: int = 0
    mouse_y: int = 0
    mouse_turn: int | None = 0

    @classmethod
    def from_map(cls, info: MapInfo, door_width: int) -> Game:
        """Start a game at the centre of the map's spawn cell."""
        return cls(
            info=info,
            camera=Camera.from_spawn(info.start_direction),
            pos_x=info.start_y + 0.5,
            pos_y=info.start_x + 0.5,
            door_width=door_width,
        )

    def _can_enter(self, row: int, col: int) -> bool:
        tile = self.info.grid[row][col]
        return tile >= Tile.PATH and not (tile == Tile.DOOR and self.door_blocking)

    def _move(self, dx: float, dy: float) -> None:
        if self._can_enter(int(self.pos_x + dx), int(self.pos_y)):
            self.pos_x += dx
        if self._can_enter(int(self.pos_x), int(self.pos_y + dy)):
            self.pos_y += dy

    def move_forward(self) -> None:
        cam = self.camera
        self._move(cam.dir_x / _STEP_DIVISOR, cam.dir_y / _STEP_DIVISOR)

    def move_back(self) -> None:
        cam = self.camera
        self._move(-(cam.dir_x / _STEP_DIVISOR), -(cam.dir_y / _STEP_DIVISOR))

    def move_left(self) -> None:
        cam = self.camera
        self._move(-(cam.dir_y / _STEP_DIVISOR), cam.dir_x / _STEP_DIVISOR)

    def move_right(self) -> None:
        cam = self.camera
        self._move(cam.dir_y / _STEP_DIVISOR, -(cam.dir_x / _STEP_DIVISOR))

    def handle_key(self, key: int, now: int) -> bool:
        """React to a key press; return False when the game should quit."""
        try:
            key = Key(key)
        except ValueError:
            return True
        actions = {
            Key.W: self.move_forward,
            Key.A: self.move_left,
            Key.S: self.move_back,
            Key.D: self.move_right,
            Key.SPACE: lambda: self.request_door(now),
            Key.LEFT: lambda: self.camera.rotate(TURN_LEFT),
            Key.RIGHT: lambda: self.camera.rotate(TURN_RIGHT),
        }
        if key == Key.ESCAPE:
            return False
        actions[key]()
        return True

    def handle_mouse(self, x: int, y: int) -> None:
        """Turn the camera from horizontal mouse motion."""
        turn: int | None = None
        delta = self.mouse_x - x
        if delta < -_MOUSE_THRESHOLD:
            turn = TURN_RIGHT
        elif delta > _MOUSE_THRESHOLD:
            turn = TURN_LEFT
        elif x < 0 and self.mouse_turn == TURN_LEFT:
            turn = TURN_LEFT
        elif x > SCREEN_WIDTH and self.mouse_turn == TURN_RIGHT:
            turn = TURN_RIGHT
        if turn is not None:
            self.camera.rotate(turn)
        self.mouse_x = x
        self.mouse_y = y
        self.mouse_turn = turn

    def request_door(self, now: int) -> None:
        """Start opening the doors unless a door cycle is already running."""
        if not self.door_idle:
            return
        self.door_idle = False
        self.door_time = now

    def _open_step(self, now: int) -> None:
        if self.door_offset < self.door_width:
            self.door_offset += _DOOR_SPEED
        if self.door_offset == self.door_width:
            self.door_blocking = False
            self.door_time = now

    def _close_step(self) -> None:
        if self.door_offset > 0 and self.door_closing:
            self.door_offset -= _DOOR_SPEED
        if self.door_offset == 0 and self.door_closing:
            self.door_closing = False
            self.door_idle = True

    def update_door(self, now: int) -> None:
        """Advance the door animation by one frame."""
        if self.door_idle:
            return
        standing_on = self.info.grid[int(self.pos_x)][int(self.pos_y)]
        if self.door_blocking and not self.door_closing:
            self._open_step(now)
        elif (
            self.door_time + _DOOR_HOLD < now
            and standing_on != Tile.DOOR
            and not self.door_blocking
        ):
            self.door_blocking = True
            self.door_closing = True
        elif self.door_closing:
            self._close_step()