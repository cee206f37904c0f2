"""Board model: grid, game session, and win detection."""

from __future__ import annotations

from enum import Enum

BOARD_SIZE = 15

# Four directions: horizontal, vertical, diagonal ↘, diagonal ↙
DIRECTIONS = [
    (0, 1),
    (1, 0),
    (1, 1),
    (1, -1),
]


class Player(str, Enum):
    HUMAN = "human"
    COMPUTER = "computer"

    @property
    def opponent(self) -> Player:
        return Player.COMPUTER if self is Player.HUMAN else Player.HUMAN


class Difficulty(str, Enum):
    NOVICE = "novice"
    APPRENTICE = "apprentice"
    JOURNEYMAN = "journeyman"
    MASTER = "master"

    @classmethod
    def from_index(cls, index: int) -> Difficulty:
        members = list(cls)
        if 0 <= index < len(members):
            return members[index]
        return cls.NOVICE

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def search_depth(self) -> int:
        return _SEARCH_DEPTHS[self]

    @property
    def think_ticks(self) -> int:
        """Minimum ticks the computer appears to think, independent of search cost."""
        return 5 + self.search_depth * 2


_SEARCH_DEPTHS = {
    Difficulty.NOVICE: 2,
    Difficulty.APPRENTICE: 3,
    Difficulty.JOURNEYMAN: 4,
    Difficulty.MASTER: 5,
}


class GameResult(str, Enum):
    """Outcome from the human's side of the board."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


Grid = list[list[Player | None]]
Position = tuple[int, int]


def new_grid(size: int = BOARD_SIZE) -> Grid:
    return [[None] * size for _ in range(size)]


def in_bounds(row: int, col: int, size: int = BOARD_SIZE) -> bool:
    return 0 <= row < size and 0 <= col < size


def count_stones(grid: Grid) -> int:
    return sum(1 for line in grid for cell in line if cell is not None)


def is_board_full(grid: Grid) -> bool:
    return all(cell is not None for line in grid for cell in line)


def swap_players(grid: Grid) -> Grid:
    """Return a copy of the grid with every stone handed to the other side."""
    return [[cell.opponent if cell is not None else None for cell in line] for line in grid]


def _count_direction(grid: Grid, row: int, col: int, dr: int, dc: int, player: Player) -> int:
    size = len(grid)
    count = 0
    r, c = row + dr, col + dc
    while in_bounds(r, c, size) and grid[r][c] == player:
        count += 1
        r += dr
        c += dc
    return count


def check_win(grid: Grid, row: int, col: int, player: Player) -> bool:
    """Check if the stone at (row, col) completes five or more in a row.

    Assumes the stone is already on the grid. Overlines count as a win.
    """
    for dr, dc in DIRECTIONS:
        count = 1
        count += _count_direction(grid, row, col, dr, dc, player)
        count += _count_direction(grid, row, col, -dr, -dc, player)
        if count >= 5:
            return True
    return False


def winning_line(grid: Grid, row: int, col: int, player: Player) -> list[Position] | None:
    """Return the cells of the winning run through (row, col), or None."""
    for dr, dc in DIRECTIONS:
        forward = _count_direction(grid, row, col, dr, dc, player)
        backward = _count_direction(grid, row, col, -dr, -dc, player)
        if forward + backward + 1 >= 5:
            return [(row + dr * i, col + dc * i) for i in range(-backward, forward + 1)]
    return None


class GameSession:
    def __init__(self, difficulty: Difficulty = Difficulty.NOVICE, size: int = BOARD_SIZE):
        self.size = size
        self.grid: Grid = new_grid(size)
        self.current_player: Player = Player.HUMAN
        self.cursor: Position = (size // 2, size // 2)
        self.difficulty: Difficulty = difficulty
        self.ai_thinking: bool = False
        self.think_ticks_elapsed: int = 0
        self.move_history: list[tuple[int, int, Player]] = []
        self.last_move: Position | None = None
        self.result: GameResult | None = None
        self.forfeit_pending: bool = False
        self.winning_line: list[Position] | None = None

    @property
    def think_ticks_target(self) -> int:
        return self.difficulty.think_ticks

    @property
    def is_over(self) -> bool:
        return self.result is not None

    def validate_move(self, row: int, col: int) -> str | None:
        """Return an error message if the move is invalid, or None if valid."""
        if self.result is not None:
            return "Game is already over"
        if not in_bounds(row, col, self.size):
            return "Coordinates out of bounds"
        if self.grid[row][col] is not None:
            return "Cell is already occupied"
        return None

    def place_stone(self, row: int, col: int) -> bool:
        """Place the current player's stone. Returns False if the move is rejected."""
        if self.validate_move(row, col) is not None:
            return False
        self.grid[row][col] = self.current_player
        self.move_history.append((row, col, self.current_player))
        self.last_move = (row, col)
        return True

    def switch_player(self):
        self.current_player = self.current_player.opponent

    def move_cursor(self, d_row: int, d_col: int):
        row = min(max(self.cursor[0] + d_row, 0), self.size - 1)
        col = min(max(self.cursor[1] + d_col, 0), self.size - 1)
        self.cursor = (row, col)

    def finish(self, result: GameResult) -> bool:
        """Record the result. A session ends once; later calls are ignored."""
        if self.result is not None:
            return False
        self.result = result
        self.ai_thinking = False
        self.forfeit_pending = False
        return True
