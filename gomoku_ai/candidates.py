"""Candidate move generation and cheap move ordering for the search."""

from __future__ import annotations

from gomoku_ai.evaluate import SCORE_FIVE, SCORE_OPEN_FOUR, SCORE_OPEN_THREE, SCORE_OPEN_TWO
from gomoku_ai.game import DIRECTIONS, Grid, Player, Position, in_bounds

CANDIDATE_RADIUS = 2
MAX_CANDIDATES = 15

# Bonus for what playing here would make, keyed by own stones already in the window
_EXTEND_BONUS = {
    4: SCORE_FIVE,
    3: SCORE_OPEN_FOUR,
    2: SCORE_OPEN_THREE,
    1: SCORE_OPEN_TWO,
}

# Bonus for spoiling a line the opponent has started, keyed by their stones
_BLOCK_BONUS = {
    4: SCORE_FIVE // 2,
    3: SCORE_OPEN_FOUR // 2,
    2: SCORE_OPEN_THREE // 2,
}


def candidates(grid: Grid) -> set[Position]:
    """Empty cells within CANDIDATE_RADIUS of any stone, or the center on an empty grid."""
    size = len(grid)
    found: set[Position] = set()
    has_stones = False

    for r in range(size):
        for c in range(size):
            if grid[r][c] is None:
                continue
            has_stones = True
            for dr in range(-CANDIDATE_RADIUS, CANDIDATE_RADIUS + 1):
                for dc in range(-CANDIDATE_RADIUS, CANDIDATE_RADIUS + 1):
                    nr, nc = r + dr, c + dc
                    if in_bounds(nr, nc, size) and grid[nr][nc] is None:
                        found.add((nr, nc))

    if not has_stones:
        center = size // 2
        return {(center, center)}
    return found


def count_line_window(
    grid: Grid, row: int, col: int, dr: int, dc: int, player: Player
) -> tuple[int, int, int]:
    """Count (own, opponent, empty) cells within four steps either side of (row, col)."""
    size = len(grid)
    own = opp = empty = 0
    for offset in range(-4, 5):
        r, c = row + dr * offset, col + dc * offset
        if not in_bounds(r, c, size):
            continue
        cell = grid[r][c]
        if cell is None:
            empty += 1
        elif cell == player:
            own += 1
        else:
            opp += 1
    return own, opp, empty


def score_move_quick(grid: Grid, row: int, col: int, player: Player) -> int:
    """Local score of playing (row, col), used only to order moves."""
    score = 0
    for dr, dc in DIRECTIONS:
        own, opp, _ = count_line_window(grid, row, col, dr, dc, player)
        if opp == 0:
            score += _EXTEND_BONUS.get(own, 0)
        elif own == 0:
            score += _BLOCK_BONUS.get(opp, 0)

    size = len(grid)
    center = size // 2
    dist = abs(row - center) + abs(col - center)
    score += (size - dist) * 2
    return score


def ordered_candidates(grid: Grid, maximizing: bool, cap: int = MAX_CANDIDATES) -> list[Position]:
    """Candidates sorted best first for the side to move, truncated to `cap`."""
    player = Player.COMPUTER if maximizing else Player.HUMAN
    # sorted() first so equal scores keep a fixed position order
    scored = [(pos, score_move_quick(grid, pos[0], pos[1], player)) for pos in sorted(candidates(grid))]
    scored.sort(key=lambda item: item[1], reverse=True)
    return [pos for pos, _ in scored[:cap]]
