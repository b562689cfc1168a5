"""Mapping of raw player input to directions."""

from __future__ import annotations

from grid_snake.snake import Direction

_KEY_MAP: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "KeyW": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "KeyS": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "KeyA": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "KeyD": Direction.RIGHT,
}

_NAME_MAP: dict[str, Direction] = {d.name.lower(): d for d in Direction}
# Single-letter shorthands: u, d, l, r.
_NAME_MAP.update({d.name[0].lower(): d for d in Direction})


def direction_for_key(code: str) -> Direction | None:
    """Map a keyboard event code (arrows or WASD) to a direction."""
    return _KEY_MAP.get(code)


def direction_for_swipe(
    dx: float, dy: float, threshold: float = 30.0,
) -> Direction | None:
    """Map a swipe delta in screen coordinates to a direction.

    The dominant axis wins; swipes shorter than *threshold* are ignored.
    """
    if max(abs(dx), abs(dy)) < threshold:
        return None
    if abs(dx) >= abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


def parse_direction(text: str) -> Direction | None:
    """Accept a direction name (any case) or a key code."""
    return _NAME_MAP.get(text.strip().lower()) or direction_for_key(text.strip())
