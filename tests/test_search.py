"""Tests for the minimax search."""

import copy
import math
import random
from collections import Counter

import pytest

from gomoku_ai.evaluate import SCORE_FIVE
from gomoku_ai.game import BOARD_SIZE, Difficulty, GameSession, Player
from gomoku_ai.search import SearchStats, find_best_move, minimax

H, C = Player.HUMAN, Player.COMPUTER


def make_session(stones, difficulty=Difficulty.NOVICE):
    session = GameSession(difficulty)
    for (r, c), player in stones.items():
        session.grid[r][c] = player
    return session


def four_in_row(player):
    return {(7, c): player for c in range(3, 7)}


class TestImmediateMoves:
    def test_takes_winning_move(self):
        session = make_session(four_in_row(C))
        move = find_best_move(session, random.Random(0))
        assert move in {(7, 2), (7, 7)}

    def test_blocks_human_win(self):
        session = make_session(four_in_row(H))
        move = find_best_move(session, random.Random(0))
        assert move in {(7, 2), (7, 7)}

    def test_blocks_closed_four(self):
        stones = four_in_row(H)
        stones[(7, 2)] = C
        session = make_session(stones)
        assert find_best_move(session, random.Random(0)) == (7, 7)

    def test_prefers_win_over_block(self):
        stones = four_in_row(H)
        stones.update({(10, c): C for c in range(3, 7)})
        session = make_session(stones)
        assert find_best_move(session, random.Random(0)) in {(10, 2), (10, 7)}


class TestSearch:
    def test_empty_board_plays_center(self):
        session = GameSession()
        assert find_best_move(session, random.Random(0)) == (7, 7)

    def test_full_board_has_no_move(self):
        session = GameSession()
        session.grid = [[H if (r + c) % 2 else C for c in range(BOARD_SIZE)] for r in range(BOARD_SIZE)]
        assert find_best_move(session, random.Random(0)) is None

    def test_depth_zero_rejected(self):
        session = make_session({(7, 7): H})
        with pytest.raises(ValueError):
            find_best_move(session, random.Random(0), depth=0)

    def test_grid_restored(self):
        stones = {(7, 7): H, (7, 8): C, (8, 7): H, (6, 6): C, (8, 8): H}
        session = make_session(stones)
        before = copy.deepcopy(session.grid)
        find_best_move(session, random.Random(3))
        assert session.grid == before

    def test_grid_restored_after_immediate_checks(self):
        session = make_session(four_in_row(H))
        before = copy.deepcopy(session.grid)
        find_best_move(session, random.Random(0))
        assert session.grid == before

    def test_move_is_empty_cell(self):
        session = make_session({(7, 7): H, (8, 8): C, (6, 8): H})
        r, c = find_best_move(session, random.Random(1))
        assert session.grid[r][c] is None

    def test_deterministic_with_seed(self):
        stones = {(7, 7): H, (8, 8): C, (6, 8): H}
        first = find_best_move(make_session(stones), random.Random(42))
        second = find_best_move(make_session(stones), random.Random(42))
        assert first == second

    def test_ties_broken_uniformly(self):
        # At depth one every capped reply to a lone central stone scores 0
        counts = Counter(
            find_best_move(make_session({(7, 7): H}), random.Random(seed), depth=1)
            for seed in range(450)
        )
        assert len(counts) == 15
        assert max(counts.values()) < 65

    def test_stops_open_three(self):
        # Human has an open three; the computer should cap one end
        stones = {(7, 5): H, (7, 6): H, (7, 7): H, (0, 0): C}
        session = make_session(stones, Difficulty.NOVICE)
        move = find_best_move(session, random.Random(0))
        assert move in {(7, 3), (7, 4), (7, 8), (7, 9)}


class TestMinimax:
    def test_terminal_win_for_computer(self):
        session = make_session({(7, c): C for c in range(3, 8)})
        score = minimax(session.grid, 2, -math.inf, math.inf, False, (7, 7))
        assert score == SCORE_FIVE

    def test_terminal_win_for_human(self):
        session = make_session({(7, c): H for c in range(3, 8)})
        score = minimax(session.grid, 2, -math.inf, math.inf, True, (7, 7))
        assert score == -SCORE_FIVE

    def test_counts_nodes_and_cutoffs(self):
        session = make_session({(7, 7): H, (8, 8): C})
        stats = SearchStats()
        minimax(session.grid, 2, -math.inf, math.inf, True, None, stats)
        assert stats.nodes > 1
        assert stats.cutoffs >= 0
