"""Window, sprites and main loop of the game."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

import pygame

from solong.game import Direction, Game
from solong.gamemap import COLLECTIBLE, EXIT, FLOOR, PLAYER, WALL, MapError, load_map
from solong.xpm import TRANSPARENT, XpmError, XpmImage, load_xpm

TILE_SIZE = 64
TITLE = "so_long"
SPRITE_DIR = "xpm"
TEXT_POSITION = (28, 32)
TEXT_COLOR = (255, 255, 255)

_KEYS = {
    pygame.K_w: Direction.UP,
    pygame.K_UP: Direction.UP,
    pygame.K_s: Direction.DOWN,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
    pygame.K_RIGHT: Direction.RIGHT,
}


def direction_for_key(key: int) -> Direction | None:
    """Return the direction bound to a key (WASD or arrows), or None."""
    return _KEYS.get(key)


def sprite_surface(image: XpmImage) -> pygame.Surface:
    """Turn a decoded XPM image into a surface with per-pixel alpha."""
    surface = pygame.Surface((image.width, image.height), pygame.SRCALPHA)
    for y, row in enumerate(image.rows):
        for x, value in enumerate(row):
            if value == TRANSPARENT:
                color = (0, 0, 0, 0)
            else:
                color = ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 255)
            surface.set_at((x, y), color)
    return surface


@dataclass(eq=False)
class Sprites:
    """The images drawn for each kind of tile."""

    player: pygame.Surface
    floor: pygame.Surface
    collectible: pygame.Surface
    wall: pygame.Surface
    exit_closed: pygame.Surface
    exit_open: pygame.Surface

    @classmethod
    def load(cls, directory: str | Path) -> Sprites:
        """Load the sprite set from XPM files in a directory."""
        base = Path(directory)

        def read(name: str) -> pygame.Surface:
            return sprite_surface(load_xpm(base / name))

        return cls(
            player=read("player.xpm"),
            floor=read("floor.xpm"),
            collectible=read("collect.xpm"),
            wall=read("wall.xpm"),
            exit_closed=read("ec.xpm"),
            exit_open=read("eo.xpm"),
        )

    def for_tile(self, tile: str, exit_open: bool) -> tuple[pygame.Surface, ...]:
        """Return the surfaces to draw, in order, for one tile."""
        if tile == PLAYER:
            return (self.player,)
        if tile == COLLECTIBLE:
            return (self.collectible,)
        if tile == WALL:
            return (self.wall,)
        if tile == FLOOR:
            return (self.floor,)
        if tile == EXIT:
            return (self.exit_closed, self.exit_open) if exit_open else (self.exit_closed,)
        return ()


class GameWindow:
    """Draws a game on a surface and feeds it key presses."""

    def __init__(
        self,
        game: Game,
        sprites: Sprites,
        surface: pygame.Surface,
        font: pygame.font.Font | None = None,
    ) -> None:
        self.game = game
        self.sprites = sprites
        self.surface = surface
        self.font = font
        self.running = True

    def draw(self) -> None:
        """Draw every tile, then the step count."""
        exit_open = self.game.exit_open
        for y, row in enumerate(self.game.rows):
            for x, tile in enumerate(row):
                for sprite in self.sprites.for_tile(tile, exit_open):
                    self.surface.blit(sprite, (x * TILE_SIZE, y * TILE_SIZE))
        if self.font is not None:
            text = self.font.render(str(self.game.steps), True, TEXT_COLOR)
            tx, baseline = TEXT_POSITION
            self.surface.blit(text, (tx, baseline - self.font.get_ascent()))

    def handle_key(self, key: int) -> bool:
        """Apply a key press; return False once the game should stop."""
        if key == pygame.K_ESCAPE:
            self.running = False
        direction = direction_for_key(key)
        if direction is not None:
            self.game.move(direction)
        if self.game.finished:
            self.running = False
        return self.running

    def run(self) -> None:
        """Process events and redraw until the game ends or is closed."""
        clock = pygame.time.Clock()
        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event.key)
            self.draw()
            pygame.display.flip()
            clock.tick(60)


def main(argv: list[str] | None = None) -> int:
    """Play the map named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("usage: solong MAP.ber", file=sys.stderr)
        return 1
    try:
        game_map = load_map(args[0])
    except MapError as error:
        print(f"Error\n{error}")
        return 1
    pygame.init()
    try:
        try:
            sprites = Sprites.load(SPRITE_DIR)
        except (OSError, XpmError) as error:
            print(f"Error\n{error}")
            return 1
        game = Game.from_map(game_map)
        screen = pygame.display.set_mode(
            (game_map.width * TILE_SIZE, game_map.height * TILE_SIZE)
        )
        pygame.display.set_caption(TITLE)
        font = pygame.font.Font(None, 24)
        GameWindow(game, sprites, screen, font).run()
    finally:
        pygame.quit()
    return 0