import pytest

from raycube.camera import TURN_LEFT, TURN_RIGHT, Camera
from raycube.game import SCREEN_WIDTH, Game, Key
from raycube.mapinfo import MapInfo, Tile
from raycube.validate import validate_map

_CHARS = {
    "1": Tile.WALL,
    "0": Tile.PATH,
    "N": Tile.SPAWN_N,
    "D": Tile.DOOR,
    " ": Tile.NONE,
}


def _map(rows):
    info = MapInfo(grid=[[_CHARS[c] for c in row] for row in rows])
    validate_map(info)
    return info


OPEN_ROOM = ["11111", "10001", "10N01", "10001", "11111"]
DOOR_ROOM = ["11111", "10001", "11D11", "10N01", "11111"]


def _game(rows=OPEN_ROOM, door_width=8):
    return Game.from_map(_map(rows), door_width)


def test_from_map_places_player_at_cell_centre():
    game = _game()
    assert (game.pos_x, game.pos_y) == (2.5, 2.5)
    assert game.camera == Camera.from_spawn(Tile.SPAWN_N)
    assert game.door_idle and game.door_blocking


def test_move_forward_north_decreases_row():
    game = _game()
    game.move_forward()
    assert game.pos_x < 2.5
    assert game.pos_y == 2.5


def test_move_back_reverses_forward():
    game = _game()
    game.move_forward()
    game.move_back()
    assert game.pos_x == pytest.approx(2.5)


def test_left_and_right_change_column():
    game = _game()
    game.move_left()
    left = game.pos_y
    game = _game()
    game.move_right()
    assert left < 2.5 < game.pos_y


@pytest.mark.parametrize(
    "move, cell",
    [
        ("move_forward", (1, 2)),
        ("move_back", (3, 2)),
        ("move_left", (2, 1)),
        ("move_right", (2, 3)),
    ],
)
def test_walls_are_never_entered(move, cell):
    game = _game()
    for _ in range(40):
        getattr(game, move)()
    assert (int(game.pos_x), int(game.pos_y)) == cell


def test_closed_door_blocks():
    game = _game(DOOR_ROOM)
    for _ in range(20):
        game.move_forward()
    assert int(game.pos_x) == 3


def test_door_opens_and_lets_player_through():
    game = _game(DOOR_ROOM, door_width=8)
    game.request_door(10)
    game.update_door(11)
    assert game.door_offset == 4 and game.door_blocking
    game.update_door(12)
    assert game.door_offset == 8
    assert not game.door_blocking
    assert game.door_time == 12
    for _ in range(20):
        game.move_forward()
    assert int(game.pos_x) < 2


def test_door_closes_after_hold_time():
    game = _game(DOOR_ROOM, door_width=8)
    game.request_door(0)
    game.update_door(0)
    game.update_door(0)
    game.update_door(30)
    assert not game.door_blocking
    game.update_door(51)
    assert game.door_blocking and game.door_closing
    game.update_door(52)
    game.update_door(53)
    assert game.door_offset == 0
    assert game.door_idle and not game.door_closing


def test_door_stays_open_while_standing_in_it():
    game = _game(DOOR_ROOM, door_width=8)
    game.request_door(0)
    game.update_door(0)
    game.update_door(0)
    game.pos_x = 2.5
    game.update_door(100)
    assert not game.door_blocking


def test_update_door_does_nothing_when_idle():
    game = _game()
    game.update_door(5)
    assert game.door_offset == 0 and game.door_idle


def test_request_door_ignored_while_running():
    game = _game()
    game.request_door(3)
    game.request_door(9)
    assert game.door_time == 3
    assert not game.door_idle


def test_escape_quits():
    assert _game().handle_key(Key.ESCAPE, 0) is False


def test_key_w_moves_and_keeps_running():
    game = _game()
    assert game.handle_key(Key.W, 0) is True
    assert game.pos_x < 2.5


def test_space_requests_door():
    game = _game()
    game.handle_key(Key.SPACE, 7)
    assert game.door_time == 7 and not game.door_idle


@pytest.mark.parametrize("key, turn", [(Key.LEFT, TURN_LEFT), (Key.RIGHT, TURN_RIGHT)])
def test_arrow_keys_rotate(key, turn):
    game = _game()
    game.handle_key(int(key), 0)
    expected = Camera.from_spawn(Tile.SPAWN_N)
    expected.rotate(turn)
    assert game.camera == expected


def test_unknown_key_is_ignored():
    game = _game()
    assert game.handle_key(99, 0) is True
    assert (game.pos_x, game.pos_y) == (2.5, 2.5)
    assert game.camera == Camera.from_spawn(Tile.SPAWN_N)


def test_mouse_right_motion_turns_right():
    game = _game()
    game.handle_mouse(100, 20)
    expected = Camera.from_spawn(Tile.SPAWN_N)
    expected.rotate(TURN_RIGHT)
    assert game.camera == expected
    assert (game.mouse_x, game.mouse_y, game.mouse_turn) == (100, 20, TURN_RIGHT)


def test_small_mouse_motion_does_not_turn():
    game = _game()
    game.mouse_x = 500
    game.handle_mouse(502, 0)
    assert game.camera == Camera.from_spawn(Tile.SPAWN_N)
    assert game.mouse_turn is None


def test_mouse_past_right_edge_keeps_turning():
    game = _game()
    game.mouse_x = SCREEN_WIDTH + 10
    game.mouse_turn = TURN_RIGHT
    game.handle_mouse(SCREEN_WIDTH + 10, 0)
    expected = Camera.from_spawn(Tile.SPAWN_N)
    expected.rotate(TURN_RIGHT)
    assert game.camera == expected
    assert game.mouse_turn == TURN_RIGHT