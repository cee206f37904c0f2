"""Turn controller: human input, the computer's thinking delay, and game end."""

from __future__ import annotations

import logging
import random
from enum import Enum

from gomoku_ai.game import GameResult, GameSession, Player, check_win, is_board_full, winning_line
from gomoku_ai.search import find_best_move

logger = logging.getLogger(__name__)


class TurnState(str, Enum):
    HUMAN_TURN = "human_turn"
    COMPUTER_THINKING = "computer_thinking"
    TERMINATED = "terminated"


class GomokuInput(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PLACE_STONE = "place_stone"
    FORFEIT = "forfeit"
    OTHER = "other"


_CURSOR_STEPS = {
    GomokuInput.UP: (-1, 0),
    GomokuInput.DOWN: (1, 0),
    GomokuInput.LEFT: (0, -1),
    GomokuInput.RIGHT: (0, 1),
}


def turn_state(session: GameSession) -> TurnState:
    if session.result is not None:
        return TurnState.TERMINATED
    if session.ai_thinking:
        return TurnState.COMPUTER_THINKING
    return TurnState.HUMAN_TURN


def process_input(session: GameSession, action: GomokuInput) -> bool:
    """Apply one input. Returns False if the input was ignored."""
    if session.ai_thinking or session.result is not None:
        return False

    # Forfeit needs a second FORFEIT to confirm; anything else cancels it
    if session.forfeit_pending:
        if action is GomokuInput.FORFEIT:
            session.finish(GameResult.LOSS)
            logger.info("Human forfeited")
        else:
            session.forfeit_pending = False
        return True

    if action in _CURSOR_STEPS:
        session.move_cursor(*_CURSOR_STEPS[action])
    elif action is GomokuInput.PLACE_STONE:
        process_human_move(session)
    elif action is GomokuInput.FORFEIT:
        session.forfeit_pending = True
    return True


def process_human_move(session: GameSession) -> bool:
    """Place the human's stone at the cursor. Returns False if rejected."""
    if session.result is not None or session.current_player is not Player.HUMAN:
        return False

    row, col = session.cursor
    if not session.place_stone(row, col):
        return False

    if check_win(session.grid, row, col, Player.HUMAN):
        session.winning_line = winning_line(session.grid, row, col, Player.HUMAN)
        session.finish(GameResult.WIN)
        return True

    if is_board_full(session.grid):
        session.finish(GameResult.DRAW)
        return True

    session.switch_player()
    session.ai_thinking = True
    session.think_ticks_elapsed = 0
    return True


def process_computer_thinking(session: GameSession, rng: random.Random | None = None):
    """Advance the computer's turn by one tick.

    The search runs only once `think_ticks_target` ticks have passed, so even
    an instant search shows a short, difficulty-scaled pause.
    """
    if not session.ai_thinking or session.result is not None:
        return
    if session.current_player is not Player.COMPUTER:
        logger.warning("Thinking flag set on the human's turn; clearing it")
        session.ai_thinking = False
        session.think_ticks_elapsed = 0
        return

    session.think_ticks_elapsed += 1
    if session.think_ticks_elapsed < session.think_ticks_target:
        return

    move = find_best_move(session, rng)
    if move is None:
        if is_board_full(session.grid):
            session.finish(GameResult.DRAW)
    else:
        row, col = move
        if not session.place_stone(row, col):
            raise RuntimeError(f"search returned unplayable move {move}")
        if check_win(session.grid, row, col, Player.COMPUTER):
            session.winning_line = winning_line(session.grid, row, col, Player.COMPUTER)
            session.finish(GameResult.LOSS)
        elif is_board_full(session.grid):
            session.finish(GameResult.DRAW)
        else:
            session.switch_player()

    session.ai_thinking = False
    session.think_ticks_elapsed = 0
