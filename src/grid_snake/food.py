"""Food type selection and placement."""

from __future__ import annotations

import enum
import logging
from collections.abc import Collection
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from grid_snake.grid import Grid, Position, chebyshev

if TYPE_CHECKING:
    from grid_snake.config import GameConfig

logger = logging.getLogger(__name__)


class FoodType(str, enum.Enum):
    """Effect applied when the food is eaten."""

    REGULAR = "regular"
    TELEPORT = "teleport"
    REVERSE = "reverse"


@dataclass(frozen=True)
class Food:
    """A food item: a cell tagged with its type."""

    position: Position
    type: FoodType = FoodType.REGULAR

    def to_dict(self) -> dict:
        return {
            "x": self.position.x,
            "y": self.position.y,
            "type": self.type.value,
        }


class RandomSource(Protocol):
    """Supplier of random indices and floats.

    ``numpy.random.Generator`` satisfies this protocol.
    """

    def integers(self, low: int, high: int) -> int: ...

    def random(self) -> float: ...


class FoodSpawner:
    """Chooses food types and free cells using an injected random source."""

    def __init__(
        self,
        grid: Grid,
        rng: RandomSource,
        teleport_probability: float = 0.0,
        reverse_probability: float = 0.0,
        clearance: int = 3,
        max_attempts: int = 100,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        if clearance < 1 or 2 * clearance >= grid.size:
            raise ValueError("clearance leaves no room on the grid.")
        self.grid = grid
        self.rng = rng
        self.teleport_probability = teleport_probability
        self.reverse_probability = reverse_probability
        self.clearance = clearance
        self.max_attempts = max_attempts

    @classmethod
    def from_config(cls, config: GameConfig, rng: RandomSource) -> FoodSpawner:
        return cls(
            Grid(config.grid_size),
            rng,
            teleport_probability=config.teleport_probability,
            reverse_probability=config.reverse_probability,
            clearance=config.teleport_clearance,
            max_attempts=config.max_spawn_attempts,
        )

    def choose_type(self) -> FoodType:
        """Draw a food type; whatever is not teleport or reverse is regular."""
        roll = float(self.rng.random())
        if roll < self.teleport_probability:
            return FoodType.TELEPORT
        if roll < self.teleport_probability + self.reverse_probability:
            return FoodType.REVERSE
        return FoodType.REGULAR

    def _sample(self, low: int, high: int) -> Position:
        return Position(
            int(self.rng.integers(low, high)),
            int(self.rng.integers(low, high)),
        )

    def free_cell(self, occupied: Collection[Position]) -> Position | None:
        """Pick a uniformly random cell outside *occupied*.

        Rejection-samples the whole grid; once the attempt bound is spent
        the choice is made from the exact list of free cells.
        """
        for _ in range(self.max_attempts):
            pos = self._sample(0, self.grid.size)
            if pos not in occupied:
                return pos
        free = self.grid.free_cells(occupied)
        if not free:
            return None
        return free[int(self.rng.integers(0, len(free)))]

    def clear_cell(self, occupied: Collection[Position]) -> Position | None:
        """Pick a cell at least ``clearance`` away from *occupied* and the border.

        After ``max_attempts`` failed samples the last sample is returned even
        if it is too close. It is only replaced when it lies on *occupied*.
        """
        low, high = self.clearance, self.grid.size - self.clearance
        pos = None
        for _ in range(self.max_attempts):
            pos = self._sample(low, high)
            if all(chebyshev(pos, seg) >= self.clearance for seg in occupied):
                return pos
        logger.warning(
            "No cell with clearance %d found after %d attempts; using %s.",
            self.clearance, self.max_attempts, pos,
        )
        if pos in occupied:
            return self.free_cell(occupied)
        return pos

    def spawn(self, occupied: Collection[Position]) -> Food | None:
        """Create the next food item, or ``None`` if the board is full."""
        food_type = self.choose_type()
        if food_type is FoodType.TELEPORT:
            pos = self.clear_cell(occupied)
        else:
            pos = self.free_cell(occupied)
        if pos is None:
            logger.warning("No free cell available for food.")
            return None
        return Food(pos, food_type)
