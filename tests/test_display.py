import pygame
import pytest

from solong.display import (
    GameWindow,
    Sprites,
    direction_for_key,
    main,
    sprite_surface,
)
from solong.game import Direction, Game
from solong.gamemap import GameMap
from solong.xpm import TRANSPARENT, XpmImage

CORRIDOR = "1111111\n1P0C0E1\n1111111\n"

COLORS = {
    "player": (255, 0, 0, 255),
    "floor": (0, 255, 0, 255),
    "collectible": (0, 0, 255, 255),
    "wall": (255, 255, 0, 255),
    "exit_closed": (0, 255, 255, 255),
    "exit_open": (255, 0, 255, 255),
}


def solid(color):
    surface = pygame.Surface((64, 64), pygame.SRCALPHA)
    surface.fill(color)
    return surface


@pytest.fixture
def sprites():
    return Sprites(**{name: solid(color) for name, color in COLORS.items()})


@pytest.mark.parametrize(
    "key, direction",
    [
        (pygame.K_w, Direction.UP),
        (pygame.K_UP, Direction.UP),
        (pygame.K_s, Direction.DOWN),
        (pygame.K_DOWN, Direction.DOWN),
        (pygame.K_a, Direction.LEFT),
        (pygame.K_LEFT, Direction.LEFT),
        (pygame.K_d, Direction.RIGHT),
        (pygame.K_RIGHT, Direction.RIGHT),
    ],
)
def test_direction_for_key(key, direction):
    assert direction_for_key(key) is direction


def test_unbound_key_has_no_direction():
    assert direction_for_key(pygame.K_q) is None


def test_sprite_surface_colors_and_transparency():
    image = XpmImage(width=2, height=1, rows=((0xFF0000, TRANSPARENT),))
    surface = sprite_surface(image)
    assert surface.get_size() == (2, 1)
    assert tuple(surface.get_at((0, 0))) == (255, 0, 0, 255)
    assert surface.get_at((1, 0)).a == 0


def test_for_tile(sprites):
    assert sprites.for_tile("1", False) == (sprites.wall,)
    assert sprites.for_tile("P", True) == (sprites.player,)
    assert sprites.for_tile("E", False) == (sprites.exit_closed,)
    assert sprites.for_tile("E", True) == (sprites.exit_closed, sprites.exit_open)
    assert sprites.for_tile("X", True) == ()


def test_load_sprites(tmp_path):
    xpm = '"1 1 1 1",\n"a c #ff0000",\n"a"\n'
    for name in ("player", "floor", "collect", "wall", "ec", "eo"):
        (tmp_path / f"{name}.xpm").write_text(xpm)
    loaded = Sprites.load(tmp_path)
    assert loaded.wall.get_size() == (1, 1)
    assert tuple(loaded.exit_open.get_at((0, 0))) == (255, 0, 0, 255)


def test_load_sprites_missing_file(tmp_path):
    with pytest.raises(OSError):
        Sprites.load(tmp_path)


def test_draw_places_tiles(sprites):
    game = Game.from_map(GameMap.from_text(CORRIDOR))
    surface = pygame.Surface((7 * 64, 3 * 64), pygame.SRCALPHA)
    GameWindow(game, sprites, surface).draw()
    assert tuple(surface.get_at((64 + 10, 64 + 10))) == COLORS["player"]
    assert tuple(surface.get_at((5, 5))) == COLORS["wall"]
    assert tuple(surface.get_at((3 * 64 + 10, 64 + 10))) == COLORS["collectible"]
    assert tuple(surface.get_at((5 * 64 + 10, 64 + 10))) == COLORS["exit_closed"]


def test_draw_open_exit(sprites):
    game = Game.from_map(GameMap.from_text(CORRIDOR))
    game.move(Direction.RIGHT)
    game.move(Direction.RIGHT)
    surface = pygame.Surface((7 * 64, 3 * 64), pygame.SRCALPHA)
    GameWindow(game, sprites, surface).draw()
    assert tuple(surface.get_at((5 * 64 + 10, 64 + 10))) == COLORS["exit_open"]


def test_handle_key_moves_and_escape_stops(sprites):
    game = Game.from_map(GameMap.from_text(CORRIDOR))
    window = GameWindow(game, sprites, pygame.Surface((1, 1)))
    assert window.handle_key(pygame.K_d)
    assert (game.x, game.y) == (2, 1)
    assert not window.handle_key(pygame.K_ESCAPE)
    assert not window.running


def test_handle_key_stops_when_finished(sprites):
    game = Game.from_map(GameMap.from_text(CORRIDOR))
    window = GameWindow(game, sprites, pygame.Surface((1, 1)))
    for _ in range(3):
        window.handle_key(pygame.K_RIGHT)
    assert not window.handle_key(pygame.K_RIGHT)
    assert game.finished


def test_main_needs_one_argument():
    assert main([]) == 1


def test_main_rejects_wrong_extension(capsys):
    assert main(["map.txt"]) == 1
    assert capsys.readouterr().out.startswith("Error\n")


def test_main_reports_missing_map(tmp_path, capsys):
    assert main([str(tmp_path / "absent.ber")]) == 1
    assert capsys.readouterr().out.startswith("Error\n")