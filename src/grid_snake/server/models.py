"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from grid_snake.config import CollisionRule
from grid_snake.state import GameStatus


class CreateGameRequest(BaseModel):
    """Request body for POST /games."""

    grid_size: int = Field(default=20, ge=4, le=100)
    initial_snake_length: int = Field(default=3, ge=1)
    tick_rate_ms: int = Field(default=150, ge=50, le=2000)
    teleport_probability: float = Field(default=0.1, ge=0.0, le=1.0)
    reverse_probability: float = Field(default=0.1, ge=0.0, le=1.0)
    teleport_clearance: int = Field(default=3, ge=1)
    collision_rule: CollisionRule = CollisionRule.STRICT
    seed: int | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /games/{game_id}/direction.

    Accepts a direction name (``"up"``) or a key code (``"ArrowUp"``).
    """

    direction: str = Field(min_length=1, max_length=16)


class GameSummary(BaseModel):
    """Compact game info for list endpoints."""

    game_id: str
    status: GameStatus
    score: int
    tick: int
    tick_rate_ms: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
