"""WebSocket endpoint and message routing."""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from gomoku_ai.matches import match_manager
from gomoku_ai.models import (
    ErrorMsg,
    InputMsg,
    LeaveGameMsg,
    NewGameMsg,
    PlaceStoneMsg,
    parse_client_message,
)

router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await ws.accept()
    try:
        while True:
            data = await ws.receive_json()
            msg = parse_client_message(data)
            if msg is None:
                await ws.send_json(ErrorMsg(message="Unknown or invalid message").model_dump())
                continue

            if isinstance(msg, NewGameMsg):
                await match_manager.new_game(ws, msg.difficulty)

            elif isinstance(msg, PlaceStoneMsg):
                await match_manager.place_stone(ws, msg.row, msg.col)

            elif isinstance(msg, InputMsg):
                await match_manager.handle_input(ws, msg.action)

            elif isinstance(msg, LeaveGameMsg):
                await match_manager.handle_disconnect(ws)
    except WebSocketDisconnect:
        await match_manager.handle_disconnect(ws)
