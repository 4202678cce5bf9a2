"""Game rules: moving the player, collecting items and reaching the exit."""

from __future__ import annotations

import sys
from enum import Enum
from typing import Iterator, Optional, TextIO

from berquest.mapfile import COLLECTIBLE, EXIT, FLOOR, PLAYER, WALL, GameMap, Position

KEY_ESCAPE = 0xFF1B
KEY_UP = ord("w")
KEY_DOWN = ord("s")
KEY_LEFT = ord("a")
KEY_RIGHT = ord("d")

FINISH_MESSAGE = "Congratulations you finished the game :)\n"
CLOSE_MESSAGE = "You closed the window :("


class Direction(Enum):
    """A step on the grid as (row change, column change)."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)


_KEY_DIRECTIONS = {
    KEY_UP: Direction.UP,
    KEY_DOWN: Direction.DOWN,
    KEY_LEFT: Direction.LEFT,
    KEY_RIGHT: Direction.RIGHT,
}


class GameOver(Exception):
    """Raised when the game ends, by winning or by the player quitting."""

    def __init__(self, message: str, exit_code: int = 1, won: bool = False) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.won = won


class Game:
    """The state of a game in progress on a validated map."""

    def __init__(self, game_map: GameMap, out: Optional[TextIO] = None) -> None:
        self._grid = [list(row) for row in game_map.rows]
        self.player: Position = game_map.player
        self.exit: Position = game_map.exit
        self.collectibles = game_map.collectibles
        self.moves = 0
        self._out = sys.stdout if out is None else out

    @property
    def rows(self) -> tuple[str, ...]:
        """The current map, one string per row."""
        return tuple("".join(row) for row in self._grid)

    def _tile(self, position: Position) -> str:
        row, col = position
        if 0 <= row < len(self._grid) and 0 <= col < len(self._grid[row]):
            return self._grid[row][col]
        return WALL

    def move(self, direction: Direction) -> bool:
        """Try to step the player; return False if a wall is in the way.

        Every step is counted and reported. Stepping onto the exit once all
        collectibles are taken ends the game with GameOver; stepping onto
        it earlier counts the step but leaves the player in place.
        """
        row, col = self.player
        drow, dcol = direction.value
        target = (row + drow, col + dcol)
        tile = self._tile(target)
        if tile == WALL:
            return False
        self.moves += 1
        self._out.write(f"Movement Count = {self.moves}\n")
        if tile == COLLECTIBLE:
            self.collectibles -= 1
        if tile == EXIT and self.collectibles == 0:
            self._out.write(FINISH_MESSAGE)
            raise GameOver(FINISH_MESSAGE.strip(), exit_code=1, won=True)
        if target != self.exit:
            self._grid[row][col] = FLOOR
            self._grid[target[0]][target[1]] = PLAYER
            self.player = target
        return True

    def close(self) -> None:
        """End the game because its window was closed."""
        self._out.write(CLOSE_MESSAGE)
        raise GameOver(CLOSE_MESSAGE, exit_code=0)

    def handle_key(self, keysym: int) -> None:
        """React to a released key: W/A/S/D move, Escape quits."""
        if keysym == KEY_ESCAPE:
            self._out.write(CLOSE_MESSAGE)
            raise GameOver(CLOSE_MESSAGE, exit_code=1)
        direction = _KEY_DIRECTIONS.get(keysym)
        if direction is not None:
            self.move(direction)

    def tiles(self) -> Iterator[tuple[int, int, str]]:
        """Yield (row, column, tile) for every cell, row by row."""
        for row_index, row in enumerate(self._grid):
            for col_index, tile in enumerate(row):
                yield row_index, col_index, tile