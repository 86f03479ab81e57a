import pytest

from solong.game import Direction, Game
from solong.gamemap import GameMap, MapError

CORRIDOR = "1111111\n1P0C0E1\n1111111\n"
EXIT_FIRST = "11111\n1EPC1\n11111\n"
OPEN_ROOM = "11111\n1C0E1\n10P01\n10001\n11111\n"


def make_game(text):
    return Game.from_map(GameMap.from_text(text))


def test_from_map_finds_player_and_collectibles():
    game = make_game(CORRIDOR)
    assert (game.x, game.y) == (1, 1)
    assert game.total == 1
    assert game.steps == 0
    assert not game.exit_open


def test_from_map_without_player_raises():
    with pytest.raises(MapError):
        Game.from_map(GameMap.from_text("111\n1C1\n111\n"))


def test_move_onto_floor_leaves_floor_behind():
    game = make_game(CORRIDOR)
    assert game.move(Direction.RIGHT)
    assert (game.x, game.y) == (2, 1)
    assert game.tile(1, 1) == "0"
    assert game.tile(2, 1) == "P"
    assert game.steps == 1


def test_wall_blocks_move():
    game = make_game(CORRIDOR)
    before = game.rows
    assert not game.move(Direction.UP)
    assert game.rows == before
    assert game.steps == 0


def test_collecting_opens_exit_and_exit_finishes():
    game = make_game(CORRIDOR)
    game.move(Direction.RIGHT)
    game.move(Direction.RIGHT)
    assert game.collected == game.total
    assert game.exit_open
    game.move(Direction.RIGHT)
    assert not game.finished
    assert not game.move(Direction.RIGHT)
    assert game.finished
    assert game.steps == 3


def test_closed_exit_blocks_player():
    game = make_game(EXIT_FIRST)
    assert not game.move(Direction.LEFT)
    assert not game.finished
    assert game.tile(1, 1) == "E"
    game.move(Direction.RIGHT)
    assert game.exit_open
    game.move(Direction.LEFT)
    game.move(Direction.LEFT)
    assert game.finished


def test_no_moves_after_finish():
    game = make_game(EXIT_FIRST)
    game.move(Direction.RIGHT)
    game.move(Direction.LEFT)
    game.move(Direction.LEFT)
    steps = game.steps
    assert not game.move(Direction.RIGHT)
    assert game.steps == steps


def test_rows_keep_one_player():
    game = make_game(CORRIDOR)
    for direction in (Direction.RIGHT, Direction.RIGHT, Direction.LEFT):
        game.move(direction)
        assert sum(row.count("P") for row in game.rows) == 1


def test_tile_out_of_range():
    game = make_game(CORRIDOR)
    with pytest.raises(IndexError):
        game.tile(-1, 0)


@pytest.mark.parametrize(
    "direction, expected",
    [
        (Direction.UP, (2, 1)),
        (Direction.DOWN, (2, 3)),
        (Direction.LEFT, (1, 2)),
        (Direction.RIGHT, (3, 2)),
    ],
)
def test_direction_moves_player_by_its_components(direction, expected):
    game = make_game(OPEN_ROOM)
    assert (game.x, game.y) == (2, 2)
    assert game.move(direction)
    assert (game.x, game.y) == expected
    assert (game.x - 2, game.y - 2) == (direction.dx, direction.dy)
    assert game.tile(*expected) == "P"
    assert game.tile(2, 2) == "0"