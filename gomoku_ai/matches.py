"""Match management: one game against the computer per WebSocket, tick-driven."""

from __future__ import annotations

import asyncio
import logging
import random
import secrets
from dataclasses import dataclass, field

from fastapi import WebSocket

from gomoku_ai import config
from gomoku_ai.game import Difficulty, GameResult, GameSession, Player
from gomoku_ai.models import (
    ErrorMsg,
    GameCreatedMsg,
    GameOverMsg,
    StateSyncMsg,
    StonePlacedMsg,
)
from gomoku_ai.turn import GomokuInput, process_computer_thinking, process_input

logger = logging.getLogger(__name__)


@dataclass
class Match:
    match_id: str
    ws: WebSocket
    session: GameSession
    rng: random.Random = field(default_factory=random.Random, repr=False)
    tick_task: asyncio.Task | None = field(default=None, repr=False)

    async def send(self, msg_dict: dict):
        try:
            await self.ws.send_json(msg_dict)
        except Exception:
            logger.debug("Dropping message for closed match %s", self.match_id)

    def state_sync(self) -> dict:
        s = self.session
        return StateSyncMsg(
            board=s.grid,
            current_player=s.current_player,
            cursor=s.cursor,
            difficulty=s.difficulty,
            ai_thinking=s.ai_thinking,
            forfeit_pending=s.forfeit_pending,
            move_count=len(s.move_history),
            result=s.result,
        ).model_dump(mode="json")

    def cancel_ticker(self):
        if self.tick_task and not self.tick_task.done():
            self.tick_task.cancel()


class MatchManager:
    def __init__(self, tick_interval: float | None = None, seed: int | None = None):
        self.matches: dict[str, Match] = {}
        self._ws_to_match: dict[WebSocket, str] = {}
        self.tick_interval = config.TICK_INTERVAL if tick_interval is None else tick_interval
        self.seed = config.AI_SEED if seed is None else seed

    def _generate_match_id(self) -> str:
        while True:
            match_id = secrets.token_hex(3)  # 6-char hex
            if match_id not in self.matches:
                return match_id

    async def new_game(self, ws: WebSocket, difficulty: Difficulty) -> Match:
        # Starting over abandons any match already on this socket
        self._end_match(ws)

        match_id = self._generate_match_id()
        rng = random.Random(self.seed) if self.seed is not None else random.Random()
        match = Match(match_id=match_id, ws=ws, session=GameSession(difficulty), rng=rng)
        self.matches[match_id] = match
        self._ws_to_match[ws] = match_id
        logger.info("Match %s started at %s", match_id, difficulty.display_name)

        await match.send(
            GameCreatedMsg(
                game_id=match_id,
                difficulty=difficulty,
                board_size=match.session.size,
                search_depth=difficulty.search_depth,
            ).model_dump(mode="json")
        )
        return match

    async def place_stone(self, ws: WebSocket, row: int, col: int):
        match = self.get_match_for_ws(ws)
        if match is None:
            await ws.send_json(ErrorMsg(message="No game in progress").model_dump(mode="json"))
            return

        session = match.session
        # The search holds trial stones on the grid while the computer thinks
        if session.ai_thinking:
            await match.send(ErrorMsg(message="Not your turn").model_dump(mode="json"))
            return
        error = session.validate_move(row, col)
        if error:
            await match.send(ErrorMsg(message=error).model_dump(mode="json"))
            return
        if session.current_player is not Player.HUMAN:
            await match.send(ErrorMsg(message="Not your turn").model_dump(mode="json"))
            return

        session.cursor = (row, col)
        await self.handle_input(ws, GomokuInput.PLACE_STONE)

    async def handle_input(self, ws: WebSocket, action: GomokuInput):
        match = self.get_match_for_ws(ws)
        if match is None:
            await ws.send_json(ErrorMsg(message="No game in progress").model_dump(mode="json"))
            return

        session = match.session
        moves_before = len(session.move_history)
        if not process_input(session, action):
            message = "Game is already over" if session.is_over else "Computer is thinking"
            await match.send(ErrorMsg(message=message).model_dump(mode="json"))
            return

        if len(session.move_history) > moves_before:
            await self._announce_last_move(match)
        else:
            error = None
            if action is GomokuInput.PLACE_STONE and not session.is_over:
                error = session.validate_move(*session.cursor)
            if error:
                await match.send(ErrorMsg(message=error).model_dump(mode="json"))
            else:
                await match.send(match.state_sync())

        if session.is_over:
            await self._announce_game_over(match)
        elif session.ai_thinking:
            self._start_ticker(match)

    async def handle_disconnect(self, ws: WebSocket):
        self._end_match(ws)

    def _end_match(self, ws: WebSocket):
        match_id = self._ws_to_match.pop(ws, None)
        if match_id is None:
            return
        match = self.matches.pop(match_id, None)
        if match is None:
            return
        match.cancel_ticker()
        logger.info("Match %s closed", match_id)

    def _start_ticker(self, match: Match):
        """Drive the computer's turn: one thinking tick every tick_interval seconds."""
        match.cancel_ticker()

        async def tick_loop():
            session = match.session
            moves_before = len(session.move_history)
            try:
                while session.ai_thinking and not session.is_over:
                    await asyncio.sleep(self.tick_interval)
                    # Deep searches take seconds; keep other matches' sockets served meanwhile
                    await asyncio.to_thread(process_computer_thinking, session, match.rng)
            except Exception:
                logger.exception("Computer turn failed in match %s", match.match_id)
                await match.send(ErrorMsg(message="Computer player failed; game closed").model_dump(mode="json"))
                self._ws_to_match.pop(match.ws, None)
                self.matches.pop(match.match_id, None)
                return

            if len(session.move_history) > moves_before:
                await self._announce_last_move(match)
            if session.is_over:
                await self._announce_game_over(match)

        match.tick_task = asyncio.create_task(tick_loop())

    async def _announce_last_move(self, match: Match):
        session = match.session
        row, col, player = session.move_history[-1]
        next_turn = None if session.is_over else session.current_player
        await match.send(
            StonePlacedMsg(row=row, col=col, player=player, next_turn=next_turn).model_dump(mode="json")
        )

    async def _announce_game_over(self, match: Match):
        session = match.session
        if session.winning_line:
            reason = "five_in_row"
        elif session.result is GameResult.DRAW:
            reason = "draw"
        else:
            reason = "forfeit"
        logger.info("Match %s over: %s (%s)", match.match_id, session.result.value, reason)
        await match.send(
            GameOverMsg(
                result=session.result,
                reason=reason,
                winning_line=session.winning_line,
            ).model_dump(mode="json")
        )

    def get_match_for_ws(self, ws: WebSocket) -> Match | None:
        match_id = self._ws_to_match.get(ws)
        if match_id is None:
            return None
        return self.matches.get(match_id)


match_manager = MatchManager()
