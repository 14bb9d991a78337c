"""
core grid logic: sliding, merging, scoring and tile spawning

the engine never mutates a state it was given, every operation
returns a fresh GameState for the caller to hold on to
"""
import random
from collections import namedtuple


DEFAULT_SIZE = 4
SPAWN_FOUR_PROBABILITY = 0.1

DIRECTIONS = ('up', 'down', 'left', 'right')


GameState = namedtuple('GameState', ['board', 'score', 'best', 'over'])
MoveOutcome = namedtuple('MoveOutcome', ['state', 'gained', 'changed', 'game_over'])


class Spawner:
    """
    random source for new tiles

    pick_cell chooses uniformly among the empty cells,
    pick_value returns 2 (90%) or 4 (10%)
    """

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random.Random()

    @classmethod
    def from_seed(cls, seed):
        return cls(random.Random(seed))

    def pick_cell(self, cells):
        return self.rng.choice(cells)

    def pick_value(self):
        return 4 if self.rng.random() < SPAWN_FOUR_PROBABILITY else 2


def _check_direction(direction):
    if direction not in DIRECTIONS:
        raise ValueError(f"Invalid direction: {direction!r}. Must be one of {', '.join(DIRECTIONS)}")


def _freeze(board):
    return tuple(tuple(row) for row in board)


def _thaw(board):
    return [list(row) for row in board]


def validate_board(board):
    """reject anything that is not a square grid of zeros and powers of two"""
    size = len(board)
    if size == 0:
        raise ValueError("Board must have at least one row")
    for row in board:
        if len(row) != size:
            raise ValueError(f"Board must be square, got a row of length {len(row)} in a {size}-row board")
        for value in row:
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"Invalid tile value: {value!r}")
            if value == 1 or value & (value - 1):
                raise ValueError(f"Tile value {value} is not a power of two")


def from_board(board, score=0, best=0):
    """build a state around an existing board (tests, replays)"""
    validate_board(board)
    if score < 0 or best < 0:
        raise ValueError("Score and best must be non-negative")
    frozen = _freeze(board)
    return GameState(frozen, score, max(best, score), is_game_over(frozen))


def empty_cells(board):
    """(row, col) of every empty cell, row-major"""
    return [(r, c)
            for r, row in enumerate(board)
            for c, value in enumerate(row)
            if value == 0]


def add_random_tile(board, spawner):
    """
    place one 2 or 4 into a random empty cell of a mutable board

    returns the (row, col) used, or None if the board is full
    """
    cells = empty_cells(board)
    if not cells:
        return None

    row, col = spawner.pick_cell(cells)
    board[row][col] = spawner.pick_value()
    return row, col


def new_game(size=DEFAULT_SIZE, best=0, spawner=None):
    """empty size x size board with two starting tiles"""
    if not isinstance(size, int) or size <= 0:
        raise ValueError(f"Board size must be a positive integer, got {size!r}")
    if spawner is None:
        spawner = Spawner()

    board = [[0] * size for _ in range(size)]
    add_random_tile(board, spawner)
    add_random_tile(board, spawner)

    frozen = _freeze(board)
    return GameState(frozen, 0, best, is_game_over(frozen))


def merge_line(line):
    """
    compact and merge one line toward its leading end

    each tile merges at most once: [2, 2, 2, 0] -> [4, 2, 0, 0]
    returns the new line and the points it earned
    """
    tiles = [value for value in line if value != 0]

    merged = []
    gained = 0
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            value = tiles[i] * 2
            merged.append(value)
            gained += value
            i += 2  # both source tiles are consumed
        else:
            merged.append(tiles[i])
            i += 1

    merged += [0] * (len(line) - len(merged))
    return merged, gained


def _lines(board, direction):
    """lines for a direction, each ordered nearest the target edge first"""
    size = len(board)
    if direction == 'left':
        return [list(board[r]) for r in range(size)]
    if direction == 'right':
        return [list(board[r])[::-1] for r in range(size)]
    if direction == 'up':
        return [[board[r][c] for r in range(size)] for c in range(size)]
    return [[board[r][c] for r in range(size)][::-1] for c in range(size)]


def _write_line(board, direction, index, line):
    size = len(board)
    if direction in ('right', 'down'):
        line = line[::-1]
    if direction in ('left', 'right'):
        board[index] = line
    else:
        for r in range(size):
            board[r][index] = line[r]


def slide(board, direction):
    """
    slide every line of the board, no spawning

    returns the resulting board (as lists) and the points earned
    """
    _check_direction(direction)

    result = _thaw(board)
    gained = 0
    for index, line in enumerate(_lines(board, direction)):
        merged, points = merge_line(line)
        _write_line(result, direction, index, merged)
        gained += points

    return result, gained


def can_move(board):
    """True while there is an empty cell or two equal neighbours"""
    size = len(board)
    for r in range(size):
        for c in range(size):
            value = board[r][c]
            if value == 0:
                return True
            if c + 1 < size and board[r][c + 1] == value:
                return True
            if r + 1 < size and board[r + 1][c] == value:
                return True
    return False


def is_game_over(board):
    return not can_move(board)


def max_tile(board):
    return max(max(row) for row in board)


def move(state, direction, spawner=None):
    """
    apply one move to a state

    only a move that changes the board earns points and spawns a tile
    """
    _check_direction(direction)

    if state.over:
        return MoveOutcome(state, 0, False, True)

    board, gained = slide(state.board, direction)
    changed = _freeze(board) != state.board
    if not changed:
        return MoveOutcome(state, 0, False, False)

    if spawner is None:
        spawner = Spawner()
    add_random_tile(board, spawner)

    frozen = _freeze(board)
    score = state.score + gained
    over = is_game_over(frozen)
    new_state = GameState(frozen, score, max(state.best, score), over)
    return MoveOutcome(new_state, gained, True, over)


def format_board(state):
    """text rendering of a state for the console"""
    size = len(state.board)
    width = size * 5 + 1
    lines = [f"Score: {state.score}  Best: {state.best}", "-" * width]
    for row in state.board:
        cells = "".join("    |" if value == 0 else f"{value:4}|" for value in row)
        lines.append("|" + cells)
    lines.append("-" * width)
    if state.over:
        lines.append("GAME OVER!")
    return "\n".join(lines)
