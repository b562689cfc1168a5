"""Grid Snake: rules engine for a single-player grid snake game."""

from grid_snake.config import CollisionRule, GameConfig
from grid_snake.engine import GameEngine
from grid_snake.food import Food, FoodSpawner, FoodType
from grid_snake.grid import Grid, Position
from grid_snake.snake import Direction, Snake, direction_between
from grid_snake.state import GameState, GameStatus, new_game_state

__all__ = [
    "CollisionRule",
    "Direction",
    "Food",
    "FoodSpawner",
    "FoodType",
    "GameConfig",
    "GameEngine",
    "GameState",
    "GameStatus",
    "Grid",
    "Position",
    "Snake",
    "direction_between",
    "new_game_state",
]
