"""In-memory session registry, intents, and async tick clocks."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from grid_snake.config import GameConfig
from grid_snake.engine import GameEngine
from grid_snake.server.models import GameSummary
from grid_snake.snake import Direction
from grid_snake.state import GameState

logger = logging.getLogger(__name__)

_MAX_FINISHED_GAMES = 100


@dataclass
class GameSession:
    """A single-player game and the sockets watching it."""

    game_id: str
    engine: GameEngine
    subscribers: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def tick_rate_ms(self) -> int:
        return self.engine.config.tick_rate_ms

    @property
    def ticking(self) -> bool:
        return self._task is not None and not self._task.done()

    def summary(self) -> GameSummary:
        state = self.engine.state
        return GameSummary(
            game_id=self.game_id,
            status=state.status,
            score=state.score,
            tick=state.tick,
            tick_rate_ms=self.tick_rate_ms,
        )


class GameManager:
    """Central registry managing all game sessions.

    Every session gets its own clock task calling ``advance_tick`` once per
    ``tick_rate_ms``. The clock stops at game over, restarts on reset, and
    is cancelled when the session is deleted or the app shuts down.
    """

    def __init__(self, max_finished_games: int = _MAX_FINISHED_GAMES) -> None:
        if max_finished_games < 0:
            raise ValueError("max_finished_games must be >= 0.")
        self._games: dict[str, GameSession] = {}
        self._max_finished_games = max_finished_games

    def create_game(
        self, config: GameConfig | None = None, seed: int | None = None,
    ) -> GameSession:
        """Create a new session and start its clock."""
        engine = GameEngine(config=config, seed=seed)
        game_id = uuid.uuid4().hex[:12]
        session = GameSession(game_id=game_id, engine=engine)
        self._games[game_id] = session
        self._start_clock(session)
        logger.info(
            "Game %s created (grid=%d, tick=%dms).",
            game_id, engine.config.grid_size, session.tick_rate_ms,
        )
        return session

    def get_game(self, game_id: str) -> GameSession | None:
        return self._games.get(game_id)

    def _require(self, game_id: str) -> GameSession:
        session = self._games.get(game_id)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        return session

    def list_games(self) -> list[GameSummary]:
        """Return summaries of all retained sessions."""
        return [s.summary() for s in self._games.values()]

    async def change_direction(
        self, game_id: str, direction: Direction,
    ) -> GameState:
        session = self._require(game_id)
        async with session.lock:
            state = session.engine.request_direction_change(direction)
        await self._broadcast(session)
        return state

    async def toggle_pause(self, game_id: str) -> GameState:
        session = self._require(game_id)
        async with session.lock:
            state = session.engine.toggle_pause()
        await self._broadcast(session)
        return state

    async def reset_game(self, game_id: str) -> GameState:
        """Replace the session's game with a fresh one and restart its clock."""
        session = self._require(game_id)
        async with session.lock:
            state = session.engine.reset()
            session.finished_at = None
        if not session.ticking:
            self._start_clock(session)
        await self._broadcast(session)
        return state

    async def delete_game(self, game_id: str) -> None:
        """Stop the clock, close sockets, and forget the session."""
        session = self._games.pop(game_id, None)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        await self._stop_clock(session)
        await self._close_connections(session)
        logger.info("Game %s deleted.", game_id)

    def _start_clock(self, session: GameSession) -> None:
        session._task = asyncio.create_task(self._tick_loop(session))

    async def _stop_clock(self, session: GameSession) -> None:
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    async def _tick_loop(self, session: GameSession) -> None:
        """Tick the engine at a fixed cadence until the game ends."""
        interval = session.engine.config.tick_interval
        try:
            while True:
                await asyncio.sleep(interval)
                async with session.lock:
                    before = session.engine.state.tick
                    state = session.engine.advance_tick()
                    if state.is_game_over:
                        self._mark_finished(session, state)
                if state.tick != before:
                    await self._broadcast(session)
                # A reset may have replaced the game during the broadcast.
                if session.engine.state.is_game_over:
                    break
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for game %s.", session.game_id)
        except Exception:
            logger.exception("Tick loop error in game %s.", session.game_id)
            session.finished_at = time.monotonic()
        finally:
            if session.finished_at is not None:
                self._prune_finished_games()

    def _mark_finished(self, session: GameSession, state: GameState) -> None:
        """Record the end of a game exactly once."""
        if session.finished_at is None:
            session.finished_at = time.monotonic()
            logger.info(
                "Game %s over at tick %d with score %d.",
                session.game_id, state.tick, state.score,
            )

    def _prune_finished_games(self) -> None:
        """Bound retained finished sessions to avoid unbounded registry growth."""
        finished = [
            s for s in self._games.values()
            if s.engine.state.is_game_over and not s.subscribers
        ]
        overflow = len(finished) - self._max_finished_games
        if overflow <= 0:
            return

        finished.sort(
            key=lambda s: s.finished_at if s.finished_at is not None else s.created_at,
        )
        for stale in finished[:overflow]:
            self._games.pop(stale.game_id, None)
        logger.info(
            "Pruned %d finished games (retaining up to %d).",
            overflow,
            self._max_finished_games,
        )

    async def _close_connections(self, session: GameSession) -> None:
        for ws in list(session.subscribers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Game closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in game %s.", session.game_id,
                )
        session.subscribers.clear()

    async def _broadcast(self, session: GameSession) -> None:
        """Send the current state to every subscribed socket."""
        if not session.subscribers:
            return
        payload = json.dumps(session.engine.get_state(), separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.subscribers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.subscribers:
                session.subscribers.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        for session in self._games.values():
            if session._task and not session._task.done():
                session._task.cancel()
        tasks = [
            s._task for s in self._games.values()
            if s._task and not s._task.done()
        ]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("GameManager cleanup complete.")
