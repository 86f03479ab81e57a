# solong

A small top-down puzzle game. You walk a player around a walled map and
pick up every collectible; once the last one is taken the exit opens.
Step onto the open exit to win. Every successful step is counted, and
the count is shown near the top-left corner of the window.

## Installing

```
pip install .
```

To also install the test tools:

```
pip install .[test]
```

## Playing

```
solong path/to/level.ber
```

The command takes exactly one argument, the map file. The sprites are
read from an `xpm/` directory in the current working directory, which
must hold `player.xpm`, `floor.xpm`, `collect.xpm`, `wall.xpm`, `ec.xpm`
(closed exit) and `eo.xpm` (open exit, drawn over the closed one). Each
tile takes 64 by 64 pixels of the window.

| Key               | Action     |
|-------------------|------------|
| `W` / Up arrow    | move up    |
| `S` / Down arrow  | move down  |
| `A` / Left arrow  | move left  |
| `D` / Right arrow | move right |
| `Esc`             | quit       |

Closing the window also quits. Walls block the player, and so does the
exit until every collectible has been picked up.

When the map or a sprite cannot be used, the command prints `Error`
followed by a line with the reason and exits with status 1.

## Map files

A map is a text file with the `.ber` extension, one character per tile:

| Char | Tile         |
|------|--------------|
| `1`  | wall         |
| `0`  | floor        |
| `P`  | player start |
| `C`  | collectible  |
| `E`  | exit         |

A map is accepted only when all of these hold:

- every row is as long as the first one;
- the first and last rows are all walls, and every row starts and ends
  with a wall;
- there is exactly one `P`, exactly one `E` and at least one `C`;
- it holds no other characters;
- the player has a floor or collectible next to it, and can reach every
  collectible and the exit.

An example:

```
1111111111111
10010000000C1
1000011111001
1P0011E000001
1111111111111
```

## Using it as a library

```python
from solong.gamemap import GameMap, MapError, load_map
from solong.game import Direction, Game

game_map = load_map("level.ber")   # reads and validates, raises MapError

game = Game.from_map(game_map)
game.move(Direction.RIGHT)         # True if the player moved
print(game.steps, game.collected, game.exit_open, game.finished)
print("\n".join(game.rows))
```

`GameMap.from_text` builds a map from text without checking it;
`GameMap.validate` raises `MapError` with the reason, and the single
checks (`is_rectangular`, `has_closed_walls`, `has_required_tiles`,
`has_only_allowed_tiles`, `player_can_move`, `path_is_valid`) return
booleans. `GameMap.flood_fill` returns a copy with every reachable floor
and collectible turned into `P`.

Other modules:

- `solong.xpm` reads XPM images without any display: `load_xpm` and
  `parse_xpm_text` return an `XpmImage` whose pixels are `0xRRGGBB`
  integers, with transparent pixels as `0xFF000000`; `XpmImage.to_bytes`
  packs them for a given pixel size and byte order. Bad data raises
  `XpmError`.
- `solong.colors` resolves X11 colour names, ignoring case:
  `lookup_color("light goldenrod")`, and `text_to_rgb("#ff8800", None)`
  for XPM colour specs.
- `solong.visual` converts `0xRRGGBB` colours to pixel values for a
  visual given by its channel masks and depth (`VisualFormat.convert`).
- `solong.display` holds the pygame window (`GameWindow`), the sprite
  set (`Sprites`) and the `main` function behind the `solong` command.

## What it does not do

No sprites or sample maps are shipped with the package; the `xpm/`
directory and the `.ber` files have to be supplied.