"""Tick-based transition engine over a single owned game state."""

from __future__ import annotations

import logging

import numpy as np

from grid_snake.config import CollisionRule, GameConfig
from grid_snake.food import FoodSpawner, FoodType, RandomSource
from grid_snake.grid import Grid, Position
from grid_snake.snake import Direction, Snake, direction_between, is_reversal
from grid_snake.state import GameState, new_game_state

logger = logging.getLogger(__name__)


class GameEngine:
    """Single-snake, tick-based rules engine.

    The engine owns one :class:`GameState` and mutates it only through
    :meth:`advance_tick`, :meth:`request_direction_change`,
    :meth:`toggle_pause` and :meth:`reset`. Each of them returns a detached
    snapshot of the resulting state and never raises.

    A pre-built *state* may be injected, and all randomness flows through
    *rng* (a seeded NumPy generator unless one is supplied).
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
        state: GameState | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(self.config.grid_size)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.spawner = FoodSpawner.from_config(self.config, self.rng)
        self._state = (
            state if state is not None
            else new_game_state(self.config, self.spawner)
        )

    @property
    def state(self) -> GameState:
        """The live, engine-owned state. Prefer :meth:`snapshot` for reads."""
        return self._state

    def snapshot(self) -> GameState:
        return self._state.copy()

    def request_direction_change(self, direction: Direction) -> GameState:
        """Face *direction* from the next tick on.

        The first accepted request starts the game. Once started, a
        request for the exact reversal of the current direction is ignored.
        """
        state = self._state
        if state.is_game_over:
            return self.snapshot()

        if not state.has_started:
            state.direction = direction
            state.has_started = True
            logger.info("Game started heading %s.", direction.name)
        elif not is_reversal(state.direction, direction):
            state.direction = direction
        return self.snapshot()

    def advance_tick(self) -> GameState:
        """Advance the game by one tick.

        Moves the snake one cell, ends the game on a wall or body hit, and
        grows the snake and applies the food effect when food is eaten.
        """
        state = self._state
        if state.is_game_over or not state.has_started or state.is_paused:
            return self.snapshot()
        if len(state.snake) == 0:
            logger.error("Snake body is empty; refusing to advance.")
            return self.snapshot()

        snake = state.snake
        candidate = snake.next_head(state.direction)

        # --- boundary check ---
        if not self.grid.in_bounds(candidate):
            self._end_game("wall", candidate)
            return self.snapshot()

        # --- self-collision check (look-ahead) ---
        will_eat = candidate == state.food.position
        blocked = snake.blocking_cells(
            lenient=self.config.collision_rule is CollisionRule.LENIENT,
            growing=will_eat,
        )
        if candidate in blocked:
            self._end_game("itself", candidate)
            return self.snapshot()

        # --- move ---
        # Work on a copy and commit every field together at the end.
        moved = snake.copy()
        moved.body.appendleft(candidate)
        direction = state.direction
        food = state.food
        score = state.score
        game_over = False

        if will_eat:
            direction = self._apply_effect(state.food.type, moved, direction)
            score += 1
            new_food = self.spawner.spawn(set(moved))
            logger.debug(
                "Ate %s food at %s; score %d.",
                state.food.type.value, candidate, score,
            )
            if new_food is None:
                logger.info("Board is full at score %d; game over.", score)
                game_over = True
            else:
                food = new_food
        else:
            moved.body.pop()

        state.snake = moved
        state.direction = direction
        state.food = food
        state.score = score
        state.is_game_over = game_over
        state.tick += 1
        return self.snapshot()

    def toggle_pause(self) -> GameState:
        """Flip the paused flag."""
        self._state.is_paused = not self._state.is_paused
        return self.snapshot()

    def reset(self) -> GameState:
        """Discard the current game and start a fresh, not-started one."""
        self._state = new_game_state(self.config, self.spawner)
        logger.info("Game reset.")
        return self.snapshot()

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        data = self._state.to_dict()
        data["grid"] = self.grid.to_dict()
        return data

    def _apply_effect(
        self, food_type: FoodType, snake: Snake, direction: Direction,
    ) -> Direction:
        """Apply a food effect to the grown *snake*; return the new direction."""
        if food_type is FoodType.TELEPORT:
            target = self.spawner.clear_cell(set(list(snake.body)[1:]))
            if target is not None:
                logger.debug("Teleporting head from %s to %s.", snake.head, target)
                snake.body[0] = target
        elif food_type is FoodType.REVERSE:
            snake.reverse()
            turned = direction_between(snake.body[0], snake.body[1])
            if turned is not None:
                direction = turned
        return direction

    def _end_game(self, cause: str, pos: Position) -> None:
        """Mark the game as over."""
        state = self._state
        state.is_game_over = True
        state.tick += 1
        logger.info(
            "Snake hit %s at %s on tick %d with score %d.",
            cause, pos, state.tick, state.score,
        )
