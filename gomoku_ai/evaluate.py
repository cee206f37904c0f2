"""Static evaluation: pattern scores over every five-cell window of the grid."""

from __future__ import annotations

from functools import lru_cache

from gomoku_ai.game import Grid, Player, Position

SCORE_FIVE = 100_000
SCORE_OPEN_FOUR = 10_000
SCORE_CLOSED_FOUR = 1_000
SCORE_OPEN_THREE = 500
SCORE_OPEN_TWO = 50
SCORE_CENTER_BONUS = 5

CENTER_RADIUS = 2
WINDOW = 5


@lru_cache(maxsize=None)
def board_lines(size: int) -> tuple[tuple[Position, ...], ...]:
    """Every row, column and diagonal long enough to hold a five."""
    lines: list[tuple[Position, ...]] = []
    for r in range(size):
        lines.append(tuple((r, c) for c in range(size)))
    for c in range(size):
        lines.append(tuple((r, c) for r in range(size)))

    # ↘ diagonals start on the left column or the top row
    starts = [(r, 0) for r in range(size)] + [(0, c) for c in range(1, size)]
    for r0, c0 in starts:
        n = min(size - r0, size - c0)
        lines.append(tuple((r0 + i, c0 + i) for i in range(n)))

    # ↙ diagonals start on the right column or the top row
    starts = [(r, size - 1) for r in range(size)] + [(0, c) for c in range(size - 1)]
    for r0, c0 in starts:
        n = min(size - r0, c0 + 1)
        lines.append(tuple((r0 + i, c0 - i) for i in range(n)))

    return tuple(line for line in lines if len(line) >= WINDOW)


def score_window(window: list[Player | None], player: Player) -> int:
    """Score one five-cell window for `player`.

    A window containing any opposing stone is dead and scores nothing. Four
    stones plus one gap always score as a closed four, whether or not the run
    is pinned against the edge of the board.
    """
    own = 0
    empty = 0
    for cell in window:
        if cell is None:
            empty += 1
        elif cell == player:
            own += 1
        else:
            return 0

    if own == 5:
        return SCORE_FIVE
    if own == 4 and empty == 1:
        return SCORE_CLOSED_FOUR
    if own == 3 and empty == 2:
        return SCORE_OPEN_THREE
    if own == 2 and empty == 3:
        return SCORE_OPEN_TWO
    return 0


def evaluate_lines(grid: Grid, player: Player) -> int:
    score = 0
    for line in board_lines(len(grid)):
        cells = [grid[r][c] for r, c in line]
        if player not in cells:
            continue
        for start in range(len(cells) - WINDOW + 1):
            score += score_window(cells[start:start + WINDOW], player)
    return score


def center_control(grid: Grid) -> int:
    size = len(grid)
    center = size // 2
    lo = max(center - CENTER_RADIUS, 0)
    hi = min(center + CENTER_RADIUS, size - 1)
    score = 0
    for r in range(lo, hi + 1):
        for c in range(lo, hi + 1):
            if grid[r][c] == Player.COMPUTER:
                score += SCORE_CENTER_BONUS
            elif grid[r][c] == Player.HUMAN:
                score -= SCORE_CENTER_BONUS
    return score


def evaluate(grid: Grid) -> int:
    """Score the position. Positive favors the computer, negative the human."""
    score = evaluate_lines(grid, Player.COMPUTER)
    score -= evaluate_lines(grid, Player.HUMAN)
    score += center_control(grid)
    return score
