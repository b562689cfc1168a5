"""Game state aggregate and its constructor."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

from grid_snake.config import GameConfig
from grid_snake.food import Food, FoodSpawner
from grid_snake.grid import Position
from grid_snake.snake import Direction, Snake


class GameStatus(str, enum.Enum):
    """Lifecycle states derived from the state flags."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """Everything the rules need to compute the next tick."""

    snake: Snake
    food: Food
    direction: Direction = Direction.RIGHT
    is_game_over: bool = False
    is_paused: bool = False
    has_started: bool = False
    score: int = 0
    tick: int = 0

    @property
    def status(self) -> GameStatus:
        if self.is_game_over:
            return GameStatus.GAME_OVER
        if not self.has_started:
            return GameStatus.NOT_STARTED
        if self.is_paused:
            return GameStatus.PAUSED
        return GameStatus.RUNNING

    def copy(self) -> GameState:
        """Return a snapshot that shares no mutable parts with this state."""
        return replace(self, snake=self.snake.copy())

    def to_dict(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "score": self.score,
            "status": self.status.value,
            "is_game_over": self.is_game_over,
            "is_paused": self.is_paused,
            "has_started": self.has_started,
            "direction": self.direction.name,
            "snake": self.snake.to_dict(),
            "food": self.food.to_dict(),
        }


def initial_snake(config: GameConfig) -> Snake:
    """Centre a straight snake on the middle row, head to the right."""
    length = config.initial_snake_length
    mid = config.grid_size // 2
    head = Position(mid + (length - 1) // 2, mid)
    return Snake.spawn(head, Direction.RIGHT, length)


def new_game_state(config: GameConfig, spawner: FoodSpawner) -> GameState:
    """Build a fresh, not-yet-started game."""
    snake = initial_snake(config)
    food = spawner.spawn(set(snake))
    assert food is not None  # noqa: S101
    return GameState(snake=snake, food=food, direction=Direction.RIGHT)
