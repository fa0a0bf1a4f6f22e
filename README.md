# solong

A small top-down puzzle game. You walk a player around a walled map and pick
up every collectible. Once all of them are collected you step onto the exit.
Each move is counted and printed on standard output.

## Installing

```
pip install .
```

This also installs `pygame`. The game reads its textures as XPM files from
`./assets/textures/`. That path is relative to the directory you start the
game from. The files it looks for are:

- `wall.xpm`, `floor.xpm` and `player_right.xpm` (required)
- `collectible.xpm` and `exit.xpm`
- for the bonus edition, also `player_left.xpm` (required) and `exit1.xpm`

If a required texture cannot be loaded, the game prints
`Failed loading the images ...` and exits with status 1.

## Playing

```
so_long path/to/level.ber
```

The bonus edition adds three things:

- The window shows the move count and the number of collectibles left.
- The player sprite faces left or right depending on the last sideways move.
- The exit switches to the `exit1.xpm` image once the last collectible is picked up.

```
so_long_bonus path/to/level.ber
```

| Key | Action     |
|-----|------------|
| W   | move up    |
| A   | move left  |
| S   | move down  |
| D   | move right |
| Esc | quit       |

Closing the window also ends the game. Walls block movement. The exit also
blocks you until every collectible is taken. Stepping onto the open exit
prints `You Win!` and ends the game.

Each command takes exactly one argument, and its name must end in `.ber`.
If either check fails, the command prints an `ERROR:` message and exits
with status 1. If the map is invalid, it prints `Error` followed by the
reason.

## Map files

A map is a plain text file ending in `.ber`. Each line is a row of tiles:

| Char | Tile        |
|------|-------------|
| `1`  | wall        |
| `0`  | floor       |
| `C`  | collectible |
| `E`  | exit        |
| `P`  | player      |

A map is rejected when:

- it contains any other character, or an empty line;
- it is not rectangular (note that the last row must not end with a newline);
- it has no collectible, or does not have exactly one exit and exactly one player;
- it is not surrounded by walls;
- the player cannot reach every collectible and the exit.

Example (no newline after the last row):

```
1111111
1P0C0E1
1111111
```

## Using it as a library

```python
from solong.mapcheck import load_map, MapError
from solong.game import Game, Direction

game_map = load_map("level.ber")      # raises MapError on an invalid map
game = Game.from_map(game_map)
result = game.move(Direction.RIGHT)   # a MoveResult: moved, old, new, moves, collected, exit_opened, won
print(game.status_text())
```

Other modules and functions:

- **`solong.mapcheck`**
  - `check_extension` checks a file name.
  - `read_map` and `validate_map` split the work that `load_map` does.
  - `flood_fill` counts the collectibles and exits reachable from a position.
- **`solong.game`**
  - `key_to_direction` maps W/A/S/D key symbols to a `Direction`.
- **`solong.xpm`** parses XPM images without any display.
  - `load_xpm`, `parse_xpm_text` and `parse_xpm` each return an `XpmImage`.
  - `XpmImage.to_rgba_bytes()` returns the image's pixels as bytes.
  - Errors raise `XpmError`.
- **`solong.colors`**
  - `lookup_color` resolves X11 colour names. It returns `0xRRGGBB`, `-1` for `none`, or `None` if the name is unknown.
- **`solong.app`**
  - `run(path, bonus)` plays a map directly.
  - `main` and `bonus_main` are the command entry points.

## Running the tests

```
pip install .[test]
pytest
```