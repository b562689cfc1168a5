"""WebSocket handler streaming state and accepting player input."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from grid_snake.controls import (
    direction_for_key,
    direction_for_swipe,
    parse_direction,
)
from grid_snake.server.game_manager import GameManager
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> GameManager:
    return ws.app.state.game_manager


def _direction_from_message(msg: dict) -> Direction | None:
    """Extract a direction from any of the supported input shapes."""
    value = msg.get("direction")
    if isinstance(value, str):
        return parse_direction(value)
    value = msg.get("key")
    if isinstance(value, str):
        return direction_for_key(value)
    value = msg.get("swipe")
    if (
        isinstance(value, list)
        and len(value) == 2
        and all(isinstance(v, (int, float)) for v in value)
    ):
        return direction_for_swipe(value[0], value[1])
    return None


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str) -> None:
    """Player WebSocket: send input, receive game state after each change."""
    manager = _get_manager(websocket)
    session = manager.get_game(game_id)
    if session is None:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    session.subscribers.append(websocket)
    logger.info("Player connected to game %s.", game_id)

    # Send initial state snapshot so the client can draw immediately.
    await websocket.send_text(
        json.dumps(session.engine.get_state(), separators=(",", ":")),
    )

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            action = msg.get("action")
            if action == "pause":
                await manager.toggle_pause(game_id)
                continue
            if action == "reset":
                await manager.reset_game(game_id)
                continue

            direction = _direction_from_message(msg)
            if direction is None:
                continue
            await manager.change_direction(game_id, direction)
    except WebSocketDisconnect:
        logger.info("Player disconnected from game %s.", game_id)
    except KeyError:
        logger.info("Game %s was removed while a player was connected.", game_id)
    finally:
        if websocket in session.subscribers:
            session.subscribers.remove(websocket)
