# raycube

A first-person ray-casting explorer. You walk through a maze described by a
`.cub` map file, open sliding doors, watch an animated moon in the sky and
look at an animated sprite, with a minimap drawn in the top-right corner of
the screen.

## Installing

```
pip install .
```

This pulls in `numpy` and `pygame`.

## Running

```
raycube path/to/level.cub
```

The command takes exactly one argument, and its name must end in `.cub`.
If the arguments, the map or any texture are not valid, it prints `Error`
followed by a line such as `cub3D: map: not a valid map` to standard error
and exits with status 1. The game opens a 1920×1080 window titled
"Ray Casting"; closing it or pressing Esc ends the program with status 0.

### Controls

| Key           | Action                                  |
|---------------|-----------------------------------------|
| W / A / S / D | move forward / left / back / right      |
| ← / →         | turn left / right by 5 degrees          |
| mouse         | turn by moving sideways                 |
| Space         | open the doors                          |
| Esc           | quit                                    |

Space starts one door cycle for every door in the level: the doors slide
open, stay open for about five seconds, and slide shut again once you are no
longer standing in a doorway. A closed door cannot be walked through.

## Map format

A map file starts with six identifiers, in any order, one per line; blank
lines are allowed between them and before the grid:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

`NO`, `SO`, `WE` and `EA` name the XPM wall textures; `F` and `C` give the
floor and ceiling colours as `R,G,B`, each written with one to three digits
and between 0 and 255, with no spaces around the commas. Each identifier may
appear only once.

The map grid follows. It may use these characters:

- `1` wall, `0` floor, space for nothing
- `N`, `S`, `E`, `W` the player's start and the direction faced (exactly one)
- `D` a door, which must sit between two walls, left and right or above and below
- `C` a sprite (at most one)

Rows may have different lengths; shorter rows are padded with empty cells.
Every walkable cell must be surrounded by walls or other walkable cells and
may not lie on the edge of the grid. The grid may not be interrupted by
blank lines, and nothing may follow it except blank lines.

Besides the four wall textures, the game loads these images relative to the
working directory: `./img/door1.xpm` to `./img/door4.xpm`,
`./moon_xpm/moon1.xpm` to `./moon_xpm/moon60.xpm`, and
`./img/cute mushroom walk.xpm` for the sprite.

## Using it as a library

```python
from raycube.parser import load_map
from raycube.game import Game, Key
from raycube.raycast import cast_ray

info = load_map("level.cub")
game = Game.from_map(info, door_width=64)
game.move_forward()
game.handle_key(Key.LEFT, now=0)
hit = cast_ray(game, 960)
print(hit.wall_dist, hit.side)
```

The modules:

- `raycube.parser` — `load_map`, `parse_lines`, `parse_color`,
  `check_map_name`, `find_sprite`
- `raycube.validate` — `validate_map`, the closed-map and door checks
- `raycube.mapinfo` — `Tile` and `MapInfo`
- `raycube.camera` — `Camera`, with `from_spawn` and `rotate`
- `raycube.game` — `Game` (movement, key and mouse handling, door animation)
  and `Key`
- `raycube.raycast` — `cast_ray`, `RayHit`, `wall_texture_index`,
  `door_texture_index`
- `raycube.xpm` — `parse_xpm`, `load_xpm` and `Texture`
- `raycube.textures` — `texture_paths`, `load_textures`, `moon_image`
- `raycube.render` — `render_frame`, `Frame` and `minimap_color`
- `raycube.errors` — `CubError` and `get_time` (tenths of a second)

Every check raises `raycube.errors.CubError`; its string form is the
`cub3D: <context>: <message>` line the command prints.

## Limits

- Textures must be XPM files. Colours may be `None`, `#`-hex values or a
  handful of basic colour names (black, white, red, green, blue, yellow,
  cyan, magenta, gray/grey); other named colours are rejected.
- The window size is fixed and there is no sound or configuration file.

## Tests

```
pip install .[test]
pytest
```