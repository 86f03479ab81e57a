"""Game state: the player walking the map, picking up collectibles."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from solong.gamemap import COLLECTIBLE, EXIT, FLOOR, PLAYER, WALL, GameMap


class Direction(Enum):
    """A step on the grid as (dx, dy)."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


@dataclass
class Game:
    """A game in progress on a mutable copy of a map."""

    grid: list[list[str]]
    x: int
    y: int
    total: int
    collected: int = 0
    steps: int = 0
    finished: bool = False
    _exit_open: bool = field(default=False, init=False, repr=False)

    @classmethod
    def from_map(cls, game_map: GameMap) -> Game:
        """Start a game on the given map with the player where the map puts it."""
        x, y = game_map.player_position()
        return cls(
            grid=[list(row) for row in game_map.rows],
            x=x,
            y=y,
            total=game_map.count(COLLECTIBLE),
        )

    @property
    def exit_open(self) -> bool:
        """True once every collectible has been picked up."""
        return self._exit_open

    @property
    def rows(self) -> tuple[str, ...]:
        """The current grid, one string per row."""
        return tuple("".join(row) for row in self.grid)

    def tile(self, x: int, y: int) -> str:
        """Return the tile at column x of row y."""
        if not (0 <= y < len(self.grid) and 0 <= x < len(self.grid[y])):
            raise IndexError(f"tile ({x}, {y}) outside the map")
        return self.grid[y][x]

    def _target(self, x: int, y: int) -> str:
        try:
            return self.tile(x, y)
        except IndexError:
            return WALL

    def move(self, direction: Direction) -> bool:
        """Try to step the player one tile; return True if it moved.

        Stepping onto an open exit finishes the game.  Walls and exits
        block the player.
        """
        if self.finished:
            return False
        tx, ty = self.x + direction.dx, self.y + direction.dy
        target = self._target(tx, ty)
        if target == EXIT and self._exit_open:
            self.finished = True
        moved = target not in (WALL, EXIT)
        if moved:
            if target == COLLECTIBLE:
                self.collected += 1
            self.grid[ty][tx] = PLAYER
            self.grid[self.y][self.x] = FLOOR
            self.x, self.y = tx, ty
            self.steps += 1
        if self.collected == self.total:
            self._exit_open = True
        return moved