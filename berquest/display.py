"""Drawing the game in a window and running it from the command line."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

import pygame

from berquest.game import KEY_ESCAPE, Game, GameOver
from berquest.image import Image
from berquest.mapfile import MapError, load_map
from berquest.xpm import XpmError, load_xpm

TILE_SIZE = 64
TITLE = "berquest"
TEXTURE_DIR = Path("textures")
FRAMES_PER_SECOND = 60

_TEXTURE_FILES = {
    "bg": "bg.xpm",
    "block": "block.xpm",
    "coin": "coin.xpm",
    "exit": "endgate.xpm",
    "player": "player.xpm",
}

_LAYERS = {
    "0": ("bg",),
    "P": ("bg", "player"),
    "C": ("bg", "coin"),
    "1": ("block",),
    "E": ("exit",),
}


@dataclass
class Textures:
    """The pictures drawn for each kind of tile."""

    bg: pygame.Surface
    block: pygame.Surface
    coin: pygame.Surface
    exit: pygame.Surface
    player: pygame.Surface


def _to_surface(image: Image) -> pygame.Surface:
    data = bytearray()
    for row in image.rows():
        for pixel in row:
            alpha = 0 if pixel >> 24 else 255
            data += bytes(((pixel >> 16) & 0xFF, (pixel >> 8) & 0xFF, pixel & 0xFF, alpha))
    surface = pygame.image.frombuffer(data, (image.width, image.height), "RGBA")
    return surface.copy()


def load_textures(directory: Union[str, Path] = TEXTURE_DIR) -> Textures:
    """Load the five tile pictures from XPM files in *directory*."""
    folder = Path(directory)
    surfaces = {
        name: _to_surface(load_xpm(folder / filename))
        for name, filename in _TEXTURE_FILES.items()
    }
    return Textures(**surfaces)


def _keysym(key: int) -> int:
    return KEY_ESCAPE if key == pygame.K_ESCAPE else key


class Window:
    """A window showing the map, one 64-pixel tile per cell."""

    def __init__(self, game: Game, textures: Textures) -> None:
        self.game = game
        self.textures = textures
        rows = game.rows
        width = len(rows[0]) if rows else 0
        self.canvas = pygame.Surface((width * TILE_SIZE, len(rows) * TILE_SIZE))

    def draw(self) -> pygame.Surface:
        """Paint every tile onto the canvas and return it."""
        for row, col, tile in self.game.tiles():
            position = (col * TILE_SIZE, row * TILE_SIZE)
            for layer in _LAYERS.get(tile, ()):
                self.canvas.blit(getattr(self.textures, layer), position)
        return self.canvas

    def _present(self, screen: pygame.Surface) -> None:
        screen.blit(self.draw(), (0, 0))
        pygame.display.flip()

    def run(self) -> int:
        """Open the window and play until the game ends; return the exit code."""
        pygame.display.init()
        try:
            screen = pygame.display.set_mode(self.canvas.get_size())
            pygame.display.set_caption(TITLE)
            clock = pygame.time.Clock()
            self._present(screen)
            try:
                while True:
                    for event in pygame.event.get():
                        if event.type == pygame.QUIT:
                            self.game.close()
                        elif event.type == pygame.KEYUP:
                            self.game.handle_key(_keysym(event.key))
                    self._present(screen)
                    clock.tick(FRAMES_PER_SECOND)
            except GameOver as over:
                sys.stdout.flush()
                return over.exit_code
        finally:
            pygame.display.quit()


def _fail(message: str) -> int:
    sys.stderr.write(message + "\n")
    return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Play the map named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        return _fail("Error : PLEASE! Enter two arguments")
    try:
        game_map = load_map(args[0])
    except MapError as error:
        return _fail(str(error))
    try:
        textures = load_textures(TEXTURE_DIR)
    except (OSError, XpmError) as error:
        return _fail(f"Error : cannot load textures: {error}")
    game = Game(game_map, sys.stdout)
    return Window(game, textures).run()


if __name__ == "__main__":
    sys.exit(main())