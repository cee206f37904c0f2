"""Minimax search with alpha-beta pruning for the computer's move."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass

from gomoku_ai.candidates import candidates, ordered_candidates
from gomoku_ai.evaluate import SCORE_FIVE, evaluate
from gomoku_ai.game import GameSession, Grid, Player, Position, check_win

logger = logging.getLogger(__name__)


@dataclass
class SearchStats:
    nodes: int = 0
    cutoffs: int = 0


def _find_completing_move(grid: Grid, moves: list[Position], player: Player) -> Position | None:
    """First move in `moves` that gives `player` five in a row."""
    for r, c in moves:
        grid[r][c] = player
        try:
            if check_win(grid, r, c, player):
                return (r, c)
        finally:
            grid[r][c] = None
    return None


def minimax(
    grid: Grid,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    last_move: Position | None,
    stats: SearchStats | None = None,
) -> float:
    """Score the position below `last_move`, searching `depth` more plies.

    The grid is mutated in place while exploring and restored before return.
    """
    if stats is not None:
        stats.nodes += 1

    if last_move is not None:
        # The side that just moved is the one not to move now
        mover = Player.HUMAN if maximizing else Player.COMPUTER
        if check_win(grid, last_move[0], last_move[1], mover):
            return -SCORE_FIVE if maximizing else SCORE_FIVE

    if depth == 0:
        return evaluate(grid)

    moves = ordered_candidates(grid, maximizing)
    if not moves:
        return 0

    player = Player.COMPUTER if maximizing else Player.HUMAN
    best = -math.inf if maximizing else math.inf
    for r, c in moves:
        grid[r][c] = player
        try:
            score = minimax(grid, depth - 1, alpha, beta, not maximizing, (r, c), stats)
        finally:
            grid[r][c] = None

        if maximizing:
            best = max(best, score)
            alpha = max(alpha, score)
        else:
            best = min(best, score)
            beta = min(beta, score)
        if beta <= alpha:
            if stats is not None:
                stats.cutoffs += 1
            break
    return best


def find_best_move(
    session: GameSession,
    rng: random.Random | None = None,
    depth: int | None = None,
) -> Position | None:
    """Pick the computer's move, or None if there is nowhere to play.

    Immediate wins are taken and immediate losses blocked before any search.
    Among equally scored moves one is chosen with `rng`.
    """
    if depth is None:
        depth = session.difficulty.search_depth
    if depth < 1:
        raise ValueError(f"search depth must be at least 1, got {depth}")
    if rng is None:
        rng = random.Random()

    grid = session.grid
    raw = sorted(candidates(grid))
    if not raw:
        return None

    move = _find_completing_move(grid, raw, Player.COMPUTER)
    if move is not None:
        logger.debug("Taking winning move at %s", move)
        return move

    move = _find_completing_move(grid, raw, Player.HUMAN)
    if move is not None:
        logger.debug("Blocking opponent five at %s", move)
        return move

    stats = SearchStats()
    best_moves: list[Position] = []
    best_score = -math.inf
    for r, c in ordered_candidates(grid, True):
        grid[r][c] = Player.COMPUTER
        try:
            score = minimax(grid, depth - 1, -math.inf, math.inf, False, (r, c), stats)
        finally:
            grid[r][c] = None

        if score > best_score:
            best_score = score
            best_moves = [(r, c)]
        elif score == best_score:
            best_moves.append((r, c))

    if not best_moves:
        return None

    move = rng.choice(best_moves)
    logger.debug(
        "Depth %d search chose %s (score %s, %d tied, %d nodes, %d cutoffs)",
        depth,
        move,
        best_score,
        len(best_moves),
        stats.nodes,
        stats.cutoffs,
    )
    return move
