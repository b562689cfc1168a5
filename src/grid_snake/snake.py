"""Snake body representation and direction logic."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable, Iterator

from grid_snake.grid import Position


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def is_reversal(current: Direction, requested: Direction) -> bool:
    """Return True if *requested* points straight back along *current*."""
    return _OPPOSITES[current] is requested


def direction_between(head: Position, second: Position) -> Direction | None:
    """Infer the travel direction of a body whose first two cells are given.

    The head is assumed to have moved away from *second*. A horizontal
    difference wins over a vertical one; identical cells give ``None``.
    """
    if head.x != second.x:
        return Direction.RIGHT if head.x > second.x else Direction.LEFT
    if head.y != second.y:
        return Direction.DOWN if head.y > second.y else Direction.UP
    return None


class Snake:
    """A snake represented as an ordered deque of body segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(self, body: Iterable[Position]) -> None:
        self.body: deque[Position] = deque(Position(*seg) for seg in body)
        if not self.body:
            raise ValueError("Snake length must be at least 1.")

    @classmethod
    def spawn(
        cls,
        head: Position,
        direction: Direction = Direction.RIGHT,
        length: int = 3,
    ) -> Snake:
        """Lay out a straight snake with its body trailing behind *head*."""
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        return cls(head.shifted(-dx * i, -dy * i) for i in range(length))

    @property
    def head(self) -> Position:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Position:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.body)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snake):
            return NotImplemented
        return self.body == other.body

    def __repr__(self) -> str:
        return f"Snake({list(self.body)!r})"

    def next_head(self, direction: Direction) -> Position:
        """Compute the next head position without moving."""
        dx, dy = direction.value
        return self.head.shifted(dx, dy)

    def occupies(self, pos: Position) -> bool:
        """Check whether the snake occupies a given cell."""
        return pos in self.body

    def blocking_cells(self, lenient: bool = False, growing: bool = False) -> set[Position]:
        """Cells a head moving this tick may not enter.

        Strict: every segment except the tail, which moves away unless the
        snake is about to grow. Lenient: every segment except the two
        directly behind the head.
        """
        segments = list(self.body)
        if lenient:
            return set(segments[:1] + segments[3:])
        if not growing:
            segments = segments[:-1]
        return set(segments)

    def reverse(self) -> None:
        """Swap head and tail ends in place."""
        self.body.reverse()

    def copy(self) -> Snake:
        # Bypasses __init__ so that even an invalid (empty) body can be copied.
        clone = Snake.__new__(Snake)
        clone.body = deque(self.body)
        return clone

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [{"x": seg.x, "y": seg.y} for seg in self.body],
            "length": len(self.body),
        }
