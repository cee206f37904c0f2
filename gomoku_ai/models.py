"""Pydantic models for WebSocket message protocol."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ValidationError

from gomoku_ai.game import Difficulty, GameResult, Player
from gomoku_ai.turn import GomokuInput


# ---------------------------------------------------------------------------
# Client → Server
# ---------------------------------------------------------------------------

class NewGameMsg(BaseModel):
    type: Literal["new_game"] = "new_game"
    difficulty: Difficulty = Difficulty.NOVICE


class PlaceStoneMsg(BaseModel):
    type: Literal["place_stone"] = "place_stone"
    row: int
    col: int


class InputMsg(BaseModel):
    type: Literal["input"] = "input"
    action: GomokuInput


class LeaveGameMsg(BaseModel):
    type: Literal["leave_game"] = "leave_game"


ClientMessage = NewGameMsg | PlaceStoneMsg | InputMsg | LeaveGameMsg


# ---------------------------------------------------------------------------
# Server → Client
# ---------------------------------------------------------------------------

class GameCreatedMsg(BaseModel):
    type: Literal["game_created"] = "game_created"
    game_id: str
    difficulty: Difficulty
    board_size: int
    search_depth: int


class StonePlacedMsg(BaseModel):
    type: Literal["stone_placed"] = "stone_placed"
    row: int
    col: int
    player: Player
    next_turn: Player | None


class StateSyncMsg(BaseModel):
    type: Literal["state_sync"] = "state_sync"
    board: list[list[Player | None]]
    current_player: Player
    cursor: tuple[int, int]
    difficulty: Difficulty
    ai_thinking: bool
    forfeit_pending: bool
    move_count: int
    result: GameResult | None


class GameOverMsg(BaseModel):
    type: Literal["game_over"] = "game_over"
    result: GameResult
    reason: str  # "five_in_row" | "draw" | "forfeit"
    winning_line: list[tuple[int, int]] | None = None


class ErrorMsg(BaseModel):
    type: Literal["error"] = "error"
    message: str


def parse_client_message(data: dict) -> ClientMessage | None:
    """Parse a raw dict into a typed client message, or None if invalid."""
    msg_type = data.get("type")
    mapping: dict[str, type[BaseModel]] = {
        "new_game": NewGameMsg,
        "place_stone": PlaceStoneMsg,
        "input": InputMsg,
        "leave_game": LeaveGameMsg,
    }
    model = mapping.get(msg_type)  # type: ignore[arg-type]
    if model is None:
        return None
    try:
        return model.model_validate(data)  # type: ignore[return-value]
    except ValidationError:
        return None
