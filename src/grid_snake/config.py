"""Game rule configuration."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


class CollisionRule(str, enum.Enum):
    """Which body segments a moving head is allowed to enter.

    ``STRICT`` only tolerates the tail cell vacated this tick.
    ``LENIENT`` ignores the two segments directly behind the head.
    """

    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True)
class GameConfig:
    """Rule parameters for a single game.

    Supports JSON serialization so a rule set can be shared between the
    server and the CLI.
    """

    # Board
    grid_size: int = 20
    initial_snake_length: int = 3

    # Clock
    tick_rate_ms: int = 150

    # Food
    teleport_probability: float = 0.1
    reverse_probability: float = 0.1
    teleport_clearance: int = 3
    max_spawn_attempts: int = 100

    # Collisions
    collision_rule: CollisionRule = CollisionRule.STRICT

    def __post_init__(self) -> None:
        if self.grid_size < 4:
            raise ValueError("grid_size must be at least 4.")
        if not 1 <= self.initial_snake_length <= self.grid_size:
            raise ValueError(
                "initial_snake_length must be between 1 and grid_size."
            )
        if self.tick_rate_ms <= 0:
            raise ValueError("tick_rate_ms must be positive.")
        for name in ("teleport_probability", "reverse_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1].")
        if self.teleport_probability + self.reverse_probability > 1.0:
            raise ValueError("Food type probabilities must sum to at most 1.")
        if self.teleport_clearance < 1:
            raise ValueError("teleport_clearance must be at least 1.")
        if 2 * self.teleport_clearance >= self.grid_size:
            raise ValueError("teleport_clearance leaves no room on the grid.")
        if self.max_spawn_attempts < 1:
            raise ValueError("max_spawn_attempts must be at least 1.")
        # Accept plain strings from JSON and request bodies.
        object.__setattr__(
            self, "collision_rule", CollisionRule(self.collision_rule),
        )

    @property
    def regular_probability(self) -> float:
        return 1.0 - self.teleport_probability - self.reverse_probability

    @property
    def tick_interval(self) -> float:
        """Tick period in seconds."""
        return self.tick_rate_ms / 1000.0

    def to_dict(self) -> dict:
        """Serialize to a plain dict (enums become their values)."""
        d = asdict(self)
        d["collision_rule"] = self.collision_rule.value
        return d

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
