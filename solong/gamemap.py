"""Loading and validation of game maps stored in .ber files."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from pathlib import Path

WALL = "1"
FLOOR = "0"
COLLECTIBLE = "C"
EXIT = "E"
PLAYER = "P"
TILES = frozenset((WALL, FLOOR, COLLECTIBLE, EXIT, PLAYER))

MAP_EXTENSION = ".ber"

# Right, up, left, down: the order in which neighbours are examined.
_NEIGHBOURS = ((1, 0), (0, -1), (-1, 0), (0, 1))
_WALKABLE = frozenset((FLOOR, COLLECTIBLE))


class MapError(ValueError):
    """Raised when a map file is missing, malformed or unplayable."""


@dataclass(frozen=True)
class GameMap:
    """A grid of tiles, one string per row, indexed as rows[y][x]."""

    rows: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(self.rows))

    @classmethod
    def from_text(cls, text: str) -> GameMap:
        """Build a map from file text; each row ends at its first CR or LF."""
        if not text:
            raise MapError("Map doesn't exist!")
        lines = text.split("\n")
        if text.endswith("\n"):
            lines.pop()
        return cls(tuple(line.split("\r", 1)[0] for line in lines))

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self.rows)

    @property
    def width(self) -> int:
        """Length of the first row."""
        return len(self.rows[0]) if self.rows else 0

    def is_rectangular(self) -> bool:
        """True when every row is as long as the first one."""
        width = self.width
        return all(len(row) == width for row in self.rows)

    def has_closed_walls(self) -> bool:
        """True when the map is surrounded by wall tiles."""
        if not self.rows:
            return False
        if any(not row or row[0] != WALL or row[-1] != WALL for row in self.rows):
            return False
        return set(self.rows[0]) <= {WALL} and set(self.rows[-1]) <= {WALL}

    def has_required_tiles(self) -> bool:
        """True for exactly one player, one exit and at least one collectible."""
        return (
            self.count(PLAYER) == 1
            and self.count(EXIT) == 1
            and self.count(COLLECTIBLE) >= 1
        )

    def has_only_allowed_tiles(self) -> bool:
        """True when every tile is one of 0, 1, C, E and P."""
        return all(set(row) <= TILES for row in self.rows)

    def count(self, tile: str) -> int:
        """Number of cells holding the given tile."""
        return sum(row.count(tile) for row in self.rows)

    def _cells(self, tile: str) -> list[tuple[int, int]]:
        return [
            (x, y)
            for y, row in enumerate(self.rows)
            for x, cell in enumerate(row)
            if cell == tile
        ]

    def _tile(self, x: int, y: int) -> str:
        if 0 <= y < len(self.rows) and 0 <= x < len(self.rows[y]):
            return self.rows[y][x]
        return ""

    def _neighbours(self, x: int, y: int):
        for dx, dy in _NEIGHBOURS:
            yield x + dx, y + dy

    def player_position(self) -> tuple[int, int]:
        """Return (x, y) of the player; the last one in reading order wins."""
        players = self._cells(PLAYER)
        if not players:
            raise MapError("Map has no player")
        return players[-1]

    def player_can_move(self) -> bool:
        """True when some player tile borders a floor or collectible."""
        return any(
            self._tile(nx, ny) in _WALKABLE
            for x, y in self._cells(PLAYER)
            for nx, ny in self._neighbours(x, y)
        )

    def flood_fill(self) -> GameMap:
        """Return a copy where every floor or collectible reachable from a
        player tile is turned into a player tile.  Exits are not crossed."""
        grid = [list(row) for row in self.rows]
        queue = deque(self._cells(PLAYER))
        while queue:
            x, y = queue.popleft()
            for nx, ny in self._neighbours(x, y):
                if 0 <= ny < len(grid) and 0 <= nx < len(grid[ny]):
                    if grid[ny][nx] in _WALKABLE:
                        grid[ny][nx] = PLAYER
                        queue.append((nx, ny))
        return GameMap(tuple("".join(row) for row in grid))

    def _exit_reached(self, filled: GameMap) -> bool:
        return any(
            filled._tile(nx, ny) == PLAYER
            for x, y in filled._cells(EXIT)
            for nx, ny in filled._neighbours(x, y)
        )

    def path_is_valid(self) -> bool:
        """True when the player can reach every collectible and the exit."""
        filled = self.flood_fill()
        return filled.count(COLLECTIBLE) == 0 and self._exit_reached(filled)

    def validate(self) -> GameMap:
        """Check the map is playable and return it; raise MapError otherwise."""
        if not self.is_rectangular():
            raise MapError("Map should be rectangle")
        if not self.has_closed_walls():
            raise MapError("Walls should be filled with '1'")
        if not self.has_required_tiles():
            raise MapError("There should be at least 1 P, 1 C and 1 E")
        if not self.has_only_allowed_tiles():
            raise MapError("Prohibited char in map")
        if not self.player_can_move():
            raise MapError("Player within walls!")
        filled = self.flood_fill()
        if filled.count(COLLECTIBLE) != 0:
            raise MapError("Collectibles not reachable by the Player!")
        if not self._exit_reached(filled):
            raise MapError("Exit not reachable by the Player!")
        return self


def check_extension(path: str | Path) -> str | Path:
    """Return path unchanged if it names a .ber file; raise MapError otherwise."""
    if not str(path).endswith(MAP_EXTENSION):
        raise MapError("File should be .ber extension!")
    return path


def load_map(path: str | Path) -> GameMap:
    """Read a .ber file and return its map once it has been validated."""
    check_extension(path)
    try:
        data = Path(path).read_bytes()
    except OSError as error:
        raise MapError(f"cannot open map file {path}") from error
    return GameMap.from_text(data.decode("latin-1")).validate()