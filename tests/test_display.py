import io

import pygame
import pytest

from berquest.display import Textures, Window, load_textures, main
from berquest.game import Direction, Game
from berquest.mapfile import GameMap

XPM_TEMPLATE = """/* XPM */
static char *tile[] = {
/* columns rows colors chars-per-pixel */
"2 1 2 1",
"a c %s",
"b c None",
"ab"
};
"""

NAMES = {
    "bg.xpm": "#00FF00",
    "block.xpm": "#FF0000",
    "coin.xpm": "yellow",
    "endgate.xpm": "#0000FF",
    "player.xpm": "white",
}


def write_textures(directory):
    for filename, color in NAMES.items():
        (directory / filename).write_text(XPM_TEMPLATE % color)


def test_load_textures_reads_colors_and_transparency(tmp_path):
    write_textures(tmp_path)
    textures = load_textures(tmp_path)
    assert textures.block.get_size() == (2, 1)
    assert tuple(textures.block.get_at((0, 0))) == (255, 0, 0, 255)
    assert tuple(textures.bg.get_at((0, 0))) == (0, 255, 0, 255)
    assert tuple(textures.exit.get_at((0, 0))) == (0, 0, 255, 255)
    assert tuple(textures.coin.get_at((0, 0))) == (255, 255, 0, 255)
    assert tuple(textures.player.get_at((0, 0))) == (255, 255, 255, 255)
    assert textures.block.get_at((1, 0)).a == 0


def test_load_textures_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_textures(tmp_path)


def solid(size, color):
    surface = pygame.Surface(size)
    surface.fill(color)
    return surface


BG = (0, 200, 0)
BLOCK = (90, 90, 90)
COIN = (250, 250, 0)
EXIT = (0, 0, 250)
PLAYER = (250, 0, 250)


def make_window():
    textures = Textures(
        bg=solid((64, 64), BG),
        block=solid((64, 64), BLOCK),
        coin=solid((32, 32), COIN),
        exit=solid((64, 64), EXIT),
        player=solid((64, 64), PLAYER),
    )
    game_map = GameMap(
        rows=("11111", "1PCE1", "11111"), player=(1, 1), exit=(1, 3), collectibles=1
    )
    game = Game(game_map, io.StringIO())
    return Window(game, textures), game


def rgb(surface, point):
    return tuple(surface.get_at(point))[:3]


def test_window_size_follows_map():
    window, _ = make_window()
    assert window.canvas.get_size() == (5 * 64, 3 * 64)


def test_draw_places_tiles():
    window, _ = make_window()
    canvas = window.draw()
    assert rgb(canvas, (0, 0)) == BLOCK
    assert rgb(canvas, (64 + 10, 64 + 10)) == PLAYER
    assert rgb(canvas, (128 + 5, 64 + 5)) == COIN
    assert rgb(canvas, (128 + 40, 64 + 40)) == BG
    assert rgb(canvas, (192 + 5, 64 + 5)) == EXIT


def test_draw_follows_moves():
    window, game = make_window()
    game.move(Direction.RIGHT)
    canvas = window.draw()
    assert rgb(canvas, (64 + 10, 64 + 10)) == BG
    assert rgb(canvas, (128 + 10, 64 + 10)) == PLAYER


def test_main_needs_one_argument(capsys):
    assert main([]) == 1
    assert "Enter two arguments" in capsys.readouterr().err


def test_main_rejects_wrong_extension(tmp_path, capsys):
    path = tmp_path / "map.txt"
    path.write_text("111\n1P1\n111\n")
    assert main([str(path)]) == 1
    assert ".ber" in capsys.readouterr().err


def test_main_rejects_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.ber")]) == 1
    assert "Wrong file" in capsys.readouterr().err