"""REST API route handlers for game sessions and player intents."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from grid_snake.config import GameConfig
from grid_snake.controls import parse_direction
from grid_snake.server.models import (
    CreateGameRequest,
    DirectionRequest,
    GameSummary,
)

router = APIRouter(prefix="/games", tags=["games"])


def _get_manager(request: Request):
    return request.app.state.game_manager


@router.post("", status_code=201)
async def create_game(body: CreateGameRequest, request: Request) -> GameSummary:
    """Create a new game and start its clock."""
    manager = _get_manager(request)
    try:
        config = GameConfig(
            grid_size=body.grid_size,
            initial_snake_length=body.initial_snake_length,
            tick_rate_ms=body.tick_rate_ms,
            teleport_probability=body.teleport_probability,
            reverse_probability=body.reverse_probability,
            teleport_clearance=body.teleport_clearance,
            collision_rule=body.collision_rule,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    session = manager.create_game(config=config, seed=body.seed)
    return session.summary()


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    """List retained games."""
    return _get_manager(request).list_games()


@router.get("/{game_id}")
async def get_game(game_id: str, request: Request) -> dict:
    """Get game metadata and the full current state."""
    session = _get_manager(request).get_game(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    return {
        **session.summary().model_dump(mode="json"),
        "state": session.engine.get_state(),
    }


@router.post("/{game_id}/direction")
async def change_direction(
    game_id: str, body: DirectionRequest, request: Request,
) -> dict:
    """Request a direction change; rejected turns leave the state unchanged."""
    direction = parse_direction(body.direction)
    if direction is None:
        raise HTTPException(
            status_code=422, detail=f"Unknown direction '{body.direction}'.",
        )
    try:
        state = await _get_manager(request).change_direction(game_id, direction)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return state.to_dict()


@router.post("/{game_id}/pause")
async def toggle_pause(game_id: str, request: Request) -> dict:
    """Pause or resume the game."""
    try:
        state = await _get_manager(request).toggle_pause(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return state.to_dict()


@router.post("/{game_id}/reset")
async def reset_game(game_id: str, request: Request) -> dict:
    """Start over with a fresh game."""
    try:
        state = await _get_manager(request).reset_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return state.to_dict()


@router.delete("/{game_id}", status_code=204)
async def delete_game(game_id: str, request: Request) -> None:
    """Stop and discard a game."""
    try:
        await _get_manager(request).delete_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
