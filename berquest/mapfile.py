"""Loading and validating ``.ber`` map files.

A map is a rectangle of tiles: ``1`` wall, ``0`` floor, ``P`` player,
``E`` exit and ``C`` collectible. A valid map is enclosed by walls, holds
exactly one player and one exit, at least one collectible, and every
collectible and the exit can be reached from the player.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Sequence, Union

from berquest.linereader import LineReader

WALL = "1"
FLOOR = "0"
PLAYER = "P"
EXIT = "E"
COLLECTIBLE = "C"
TILES = frozenset({WALL, FLOOR, PLAYER, EXIT, COLLECTIBLE})
EXTENSION = ".ber"

PathLike = Union[str, Path]
Position = tuple[int, int]


class MapError(ValueError):
    """Raised when a map file cannot be read or is not a valid map."""


class ItemCounts(NamedTuple):
    """How many players, exits and collectibles a map holds."""

    players: int
    exits: int
    collectibles: int


@dataclass(frozen=True)
class GameMap:
    """A validated map: its rows, where the player and exit start, and the
    number of collectibles."""

    rows: tuple[str, ...]
    player: Position
    exit: Position
    collectibles: int

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self.rows)

    @property
    def width(self) -> int:
        """Number of tiles in each row."""
        return len(self.rows[0]) if self.rows else 0


def _require_file(path: PathLike) -> None:
    try:
        with open(path, "rb"):
            pass
    except OSError:
        raise MapError("Error : ! Wrong file...") from None


def check_extension(path: PathLike) -> Path:
    """Return *path* as a Path if it names a ``.ber`` file; raise otherwise."""
    if not str(path).endswith(EXTENSION):
        raise MapError("Error : Maps should have the extension '.ber'...")
    return Path(path)


def read_map(path: PathLike) -> list[str]:
    """Return the lines of a map file, line terminators kept."""
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            lines = list(LineReader(handle))
    except OSError:
        raise MapError("Error : ! Wrong file...") from None
    if not lines:
        raise MapError("the map is empty")
    return lines


def check_rectangular(rows: Sequence[str]) -> None:
    """Require every line, terminator included, to be as long as the first."""
    if not rows:
        raise MapError("the map is empty")
    expected = len(rows[0])
    if any(len(row) != expected for row in rows[1:]):
        raise MapError("Error: Map isn't rectangular")


def check_walls(rows: Sequence[str]) -> None:
    """Require the first and last rows to be walls, and every row in between
    to begin and end with a wall."""
    if not rows:
        raise MapError("the map is empty")
    message = "Error : The map must be enclosed..."
    if any(tile != WALL for tile in rows[0]) or any(tile != WALL for tile in rows[-1]):
        raise MapError(message)
    for row in rows[1:-1]:
        if not row or row[0] != WALL or row[-1] != WALL:
            raise MapError(message)


def check_characters(rows: Sequence[str]) -> None:
    """Require every tile to be one of ``1``, ``0``, ``P``, ``E`` or ``C``."""
    if any(tile not in TILES for row in rows for tile in row):
        raise MapError("There are wrong Characters on the map")


def count_items(rows: Sequence[str]) -> ItemCounts:
    """Count players, exits and collectibles.

    Raises MapError unless there is exactly one player and one exit and at
    least one collectible.
    """
    counts = ItemCounts(
        players=sum(row.count(PLAYER) for row in rows),
        exits=sum(row.count(EXIT) for row in rows),
        collectibles=sum(row.count(COLLECTIBLE) for row in rows),
    )
    if counts.players != 1 or counts.exits != 1:
        raise MapError("Exit or player is not the only one")
    if counts.collectibles < 1:
        raise MapError("Must have at least 1 collection item")
    return counts


def locate(rows: Sequence[str], char: str) -> Position:
    """Return (row, column) of the last occurrence of *char*, scanning rows
    top to bottom and each row left to right."""
    found = [
        (row_index, col_index)
        for row_index, row in enumerate(rows)
        for col_index, tile in enumerate(row)
        if tile == char
    ]
    if not found:
        raise ValueError(f"{char!r} is not on the map")
    return found[-1]


def flood_fill(rows: Sequence[str], start: Position) -> tuple[str, ...]:
    """Return a copy of *rows* with every tile reachable from *start* through
    non-wall tiles turned into a wall."""
    grid = [list(row) for row in rows]
    pending = [start]
    while pending:
        row, col = pending.pop()
        if not (0 <= row < len(grid) and 0 <= col < len(grid[row])):
            continue
        if grid[row][col] == WALL:
            continue
        grid[row][col] = WALL
        pending.extend(((row + 1, col), (row - 1, col), (row, col + 1), (row, col - 1)))
    return tuple("".join(row) for row in grid)


def check_reachable(rows: Sequence[str], start: Position) -> None:
    """Require the exit and every collectible to be reachable from *start*."""
    filled = flood_fill(rows, start)
    if any(EXIT in row or COLLECTIBLE in row for row in filled):
        raise MapError("Error : There are unreachable Items on the map...")


def load_map(path: PathLike) -> GameMap:
    """Read a ``.ber`` file and return it as a validated GameMap."""
    _require_file(path)
    check_extension(path)
    lines = read_map(path)
    check_rectangular(lines)
    width = len(lines[0]) - 1
    rows = tuple(line[:width] for line in lines)
    check_walls(rows)
    check_characters(rows)
    counts = count_items(rows)
    player = locate(rows, PLAYER)
    exit_position = locate(rows, EXIT)
    check_reachable(rows, player)
    return GameMap(
        rows=rows,
        player=player,
        exit=exit_position,
        collectibles=counts.collectibles,
    )