"""Tests for the game state aggregate."""

import json

import numpy as np

from grid_snake.config import GameConfig
from grid_snake.food import Food, FoodSpawner, FoodType
from grid_snake.grid import Position
from grid_snake.snake import Direction, Snake
from grid_snake.state import GameState, GameStatus, initial_snake, new_game_state


def _state(**kwargs) -> GameState:
    defaults = {
        "snake": Snake([(5, 5), (4, 5), (3, 5)]),
        "food": Food(Position(0, 0)),
    }
    defaults.update(kwargs)
    return GameState(**defaults)


class TestInitialLayout:
    def test_default_snake_centered(self):
        snake = initial_snake(GameConfig())
        assert list(snake) == [(11, 10), (10, 10), (9, 10)]

    def test_even_length(self):
        snake = initial_snake(GameConfig(initial_snake_length=4))
        assert list(snake) == [(11, 10), (10, 10), (9, 10), (8, 10)]

    def test_full_row_fits(self):
        snake = initial_snake(GameConfig(grid_size=6, teleport_clearance=2,
                                         initial_snake_length=6))
        assert snake.head == Position(5, 3)
        assert snake.tail == Position(0, 3)


class TestNewGameState:
    def test_fresh_flags(self):
        config = GameConfig()
        spawner = FoodSpawner.from_config(config, np.random.default_rng(0))
        state = new_game_state(config, spawner)
        assert state.direction is Direction.RIGHT
        assert not state.is_game_over
        assert not state.is_paused
        assert not state.has_started
        assert state.score == 0
        assert state.tick == 0
        assert state.status is GameStatus.NOT_STARTED

    def test_food_not_on_snake(self):
        config = GameConfig(teleport_probability=0.4, reverse_probability=0.4)
        for seed in range(50):
            spawner = FoodSpawner.from_config(config, np.random.default_rng(seed))
            state = new_game_state(config, spawner)
            assert not state.snake.occupies(state.food.position)


class TestStatus:
    def test_running(self):
        assert _state(has_started=True).status is GameStatus.RUNNING

    def test_paused(self):
        assert _state(has_started=True, is_paused=True).status is GameStatus.PAUSED

    def test_game_over_wins(self):
        state = _state(has_started=True, is_paused=True, is_game_over=True)
        assert state.status is GameStatus.GAME_OVER


class TestCopy:
    def test_copy_equal(self):
        state = _state(score=4)
        assert state.copy() == state

    def test_copy_does_not_alias_snake(self):
        state = _state()
        clone = state.copy()
        clone.snake.body.pop()
        clone.score = 9
        assert len(state.snake) == 3
        assert state.score == 0


class TestSerialization:
    def test_to_dict(self):
        state = _state(food=Food(Position(1, 2), FoodType.TELEPORT), score=2)
        d = state.to_dict()
        assert d["score"] == 2
        assert d["status"] == "not_started"
        assert d["direction"] == "RIGHT"
        assert d["food"] == {"x": 1, "y": 2, "type": "teleport"}
        assert d["snake"]["length"] == 3
        assert isinstance(json.dumps(d), str)
