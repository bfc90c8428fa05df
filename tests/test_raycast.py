import pytest

from raycube.game import SCREEN_HEIGHT, SCREEN_WIDTH, Game
from raycube.mapinfo import MapInfo, Tile
from raycube.raycast import cast_ray, door_texture_index, wall_texture_index

CENTER = SCREEN_WIDTH // 2

_CHARS = {"1": Tile.WALL, "0": Tile.PATH, "D": Tile.DOOR, " ": Tile.NONE}

ROOM = [
    "11111",
    "10001",
    "10001",
    "10001",
    "11111",
]

DOOR_ROOM = [
    "11111",
    "10001",
    "11D11",
    "10001",
    "10001",
    "11111",
]


def _game(rows, row, col, direction):
    grid = [[_CHARS[c] for c in line] for line in rows]
    info = MapInfo(grid=grid, start_x=col, start_y=row, start_direction=direction)
    return Game.from_map(info, 64)


def test_center_ray_north_hits_top_wall():
    hit = cast_ray(_game(ROOM, 2, 2, Tile.SPAWN_N), CENTER)
    assert (hit.map_x, hit.map_y) == (0, 2)
    assert hit.side == 0
    assert hit.wall_dist == pytest.approx(1.5)
    assert hit.door is False


@pytest.mark.parametrize(
    "direction, cell, side, texture",
    [
        (Tile.SPAWN_N, (0, 2), 0, 1),
        (Tile.SPAWN_S, (4, 2), 0, 0),
        (Tile.SPAWN_E, (2, 4), 1, 3),
        (Tile.SPAWN_W, (2, 0), 1, 2),
    ],
)
def test_faces_and_texture_slots(direction, cell, side, texture):
    hit = cast_ray(_game(ROOM, 2, 2, direction), CENTER)
    assert (hit.map_x, hit.map_y) == cell
    assert hit.side == side
    assert wall_texture_index(hit) == texture


def test_leftmost_column_camera_offset():
    hit = cast_ray(_game(ROOM, 2, 2, Tile.SPAWN_N), 0)
    assert hit.camera_x == -1.0
    assert hit.column == 0


def test_symmetric_room_gives_symmetric_distances():
    game = _game(ROOM, 2, 2, Tile.SPAWN_N)
    for x in (100, 400, 700, 900):
        left = cast_ray(game, x)
        right = cast_ray(game, SCREEN_WIDTH - x)
        assert left.wall_dist == pytest.approx(right.wall_dist)


def test_spans_stay_on_screen_and_wall_x_is_fraction():
    game = _game(ROOM, 2, 2, Tile.SPAWN_E)
    for x in range(0, SCREEN_WIDTH, 97):
        hit = cast_ray(game, x)
        height, start, end = hit.wall_span
        assert height > 0
        assert 0 <= start <= end <= SCREEN_HEIGHT - 1
        assert 0.0 <= hit.wall_x < 1.0


def test_nearer_wall_is_taller():
    near = cast_ray(_game(ROOM, 2, 2, Tile.SPAWN_N), CENTER)
    far = cast_ray(_game(DOOR_ROOM, 4, 2, Tile.SPAWN_N), CENTER)
    assert near.wall_dist < far.wall_dist
    assert near.wall_span[0] > far.wall_span[0]


def test_door_is_recorded_before_wall():
    hit = cast_ray(_game(DOOR_ROOM, 4, 2, Tile.SPAWN_N), CENTER)
    assert hit.door is True
    assert hit.door_side == 0
    assert 0 < hit.door_dist < hit.wall_dist
    assert (hit.map_x, hit.map_y) == (0, 2)
    assert 0.0 <= hit.door_x < 1.0
    assert hit.door_span[0] > hit.wall_span[0]


def test_ray_leaving_the_map_raises():
    open_rows = ["000", "000", "000"]
    with pytest.raises(IndexError):
        cast_ray(_game(open_rows, 1, 1, Tile.SPAWN_N), CENTER)


@pytest.mark.parametrize(
    "now, expected",
    [(0, 4), (4, 4), (5, 5), (9, 5), (10, 6), (14, 6), (15, 7), (19, 7), (20, 4), (43, 5)],
)
def test_door_texture_cycle(now, expected):
    assert door_texture_index(now) == expected