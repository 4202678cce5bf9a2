# berquest

A small tile-based puzzle game. You walk a player around a walled map,
pick up every coin and then step onto the exit.

## Installing

```
pip install .
```

This pulls in `pygame`, which draws the window.

## Playing

```
berquest path/to/level.ber
```

The game reads its tile pictures from `./textures`, relative to the
directory you start it from: `bg.xpm`, `block.xpm`, `coin.xpm`,
`endgate.xpm` and `player.xpm`. Each map cell is drawn as a 64×64 tile,
and the window is titled "berquest".

Controls (the key is acted on when it is released):

| Key    | Action     |
|--------|------------|
| `W`    | move up    |
| `S`    | move down  |
| `A`    | move left  |
| `D`    | move right |
| `Esc`  | quit       |

Every move that is not blocked by a wall prints the running move count,
as `Movement Count = N`. Stepping onto a coin collects it. When every coin
has been collected, walking onto the exit prints
"Congratulations you finished the game :)" and ends the game. Before that,
a step towards the exit is counted but the player stays where they are.

Pressing `Esc` or closing the window prints "You closed the window :(".
The command exits with status 0 when the window is closed and with
status 1 when the game is finished, quit with `Esc`, or when the map or
the textures cannot be loaded.

## Map files

A map is a plain text file with the extension `.ber`. Every line,
the last one included, ends with a newline (`\n`), and every line must be
the same length. Only these characters are allowed:

| Char | Meaning     |
|------|-------------|
| `1`  | wall        |
| `0`  | empty floor |
| `P`  | player start (exactly one) |
| `E`  | exit (exactly one)         |
| `C`  | coin (at least one)        |

The map must be surrounded by walls, and the player must be able to reach
every coin and the exit. For example:

```
1111111111111
10010000000C1
1000011111001
1P0011E000001
1111111111111
```

A map that breaks any rule is rejected with a message on standard error
before the window opens.

## Using the pieces from Python

- `berquest.mapfile`: `load_map(path)` reads and checks a `.ber` file and
  returns a frozen `GameMap` (`rows`, `player`, `exit`, `collectibles`,
  plus `width` and `height`). It raises `MapError` when the map is not
  valid. The single steps can be called on their own: `check_extension`,
  `read_map`, `check_rectangular`, `check_walls`, `check_characters`,
  `count_items`, `locate`, `flood_fill` and `check_reachable`.
- `berquest.game`: `Game(game_map, out)` holds the play state and writes
  its messages to `out` (standard output when `out` is `None`). Move with
  `Game.move(Direction.UP)`, which returns `False` when a wall is in the
  way, or pass a key symbol to `Game.handle_key`. `Game.tiles()` yields
  `(row, column, tile)` for every cell. Finishing or quitting raises
  `GameOver`, which carries `exit_code` and `won`.
- `berquest.display`: `load_textures(directory)` loads the five tile
  pictures, `Window(game, textures)` draws the map with `draw()` and plays
  it with `run()`, and `main(argv)` is the `berquest` command.
- `berquest.xpm`: `load_xpm(path)`, `parse_xpm_text(text)` and
  `parse_xpm(lines)` read XPM pictures into an `Image`; bad input raises
  `XpmError`. Colours given as `none` become the transparent pixel value
  `0xFF000000`. `split_words`, `strip_comments` and `parse_color` are the
  helpers they use.
- `berquest.image`: `Image(width, height)` is a grid of 32-bit pixels with
  `get_pixel`, `set_pixel`, `rows` and `size_line`. `convert_color(color,
  depth, shifts)` packs a 0xRRGGBB colour for a display of fewer than
  24 bits.
- `berquest.colors`: `lookup_color(name)` gives the RGB value of an X11
  colour name, matched without regard to case (`KeyError` for an unknown
  name), and `color_names()` lists every name it knows.
- `berquest.linereader`: `LineReader(stream, buffer_size)` reads lines
  from a text or binary stream in fixed-size chunks and keeps the line
  endings; it can be iterated over.

```python
from berquest.mapfile import load_map
from berquest.game import Game, Direction

game = Game(load_map("level.ber"), out=None)
game.move(Direction.RIGHT)
```

## What it does not do

The package ships no tile pictures: you supply the five XPM files in
`./textures` yourself. There is no way to choose another texture folder
from the command line, and no level editor, sound, or saved scores.

## Running the tests

```
pip install .[test]
pytest
```