from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional

import numpy as np

from .events import GameEvent, GameOver, Listener
from .factory import PieceFactory
from .grid import GameGrid
from .pieces import Piece, rotate_cw
from .rules import ScoringRules
from .scheduler import ManualScheduler, Scheduler


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


class Phase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None


@dataclass
class GameState:
    grid: GameGrid
    current: Optional[Piece] = None
    next: Optional[Piece] = None
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    drop_interval_ms: int = 1000
    over: bool = False
    paused: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only copy of the engine state for renderers and agents."""

    grid: np.ndarray
    current: Optional[Piece]
    next: Optional[Piece]
    score: int
    level: int
    lines_cleared: int
    drop_interval_ms: int
    over: bool
    paused: bool
    phase: Phase
    ghost_y: Optional[int] = None
    width: int = field(init=False)
    height: int = field(init=False)

    def __post_init__(self) -> None:
        h, w = self.grid.shape
        object.__setattr__(self, "width", int(w))
        object.__setattr__(self, "height", int(h))

    def board_with_piece(self) -> np.ndarray:
        """Grid copy with the falling piece drawn in as its color tag."""
        board = self.grid.copy()
        if self.current is not None and not self.over:
            for x, y in self.current.cells():
                if 0 <= y < self.height and 0 <= x < self.width:
                    board[y, x] = int(self.current.kind)
        return board


class FallingBlocksGame:
    """Game-state engine: spawn, gravity, lock, clear and respawn.

    All mutation happens inside a command call or a scheduler tick, each of
    which runs to completion. Readers use ``snapshot()``.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.factory = PieceFactory(self.config.width, self.config.random_seed)
        self.state = GameState(
            grid=GameGrid(self.config.width, self.config.height),
            drop_interval_ms=self.rules.base_interval_ms,
        )
        self._listeners: List[Listener] = []
        self._started = False

    # ------------------------------------------------------------------
    # Queries
    @property
    def grid(self) -> GameGrid:
        return self.state.grid

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def over(self) -> bool:
        return self.state.over

    @property
    def paused(self) -> bool:
        return self.state.paused

    @property
    def phase(self) -> Phase:
        if not self._started:
            return Phase.IDLE
        if self.state.over:
            return Phase.GAME_OVER
        if self.state.paused:
            return Phase.PAUSED
        return Phase.RUNNING

    def snapshot(self) -> GameSnapshot:
        s = self.state
        current = s.current.copy() if s.current is not None else None
        ghost_y = None
        if current is not None and not s.over:
            ghost_y = current.y + s.grid.drop_distance(current)
        return GameSnapshot(
            grid=s.grid.clone_state(),
            current=current,
            next=s.next.copy() if s.next is not None else None,
            score=s.score,
            level=s.level,
            lines_cleared=s.lines_cleared,
            drop_interval_ms=s.drop_interval_ms,
            over=s.over,
            paused=s.paused,
            phase=self.phase,
            ghost_y=ghost_y,
        )

    # ------------------------------------------------------------------
    # Events
    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------------------
    # Lifecycle
    def start(self) -> None:
        s = self.state
        s.grid.reset()
        s.current = None
        s.next = None
        s.score = 0
        s.level = 1
        s.lines_cleared = 0
        s.over = False
        s.paused = False
        s.drop_interval_ms = self.rules.base_interval_ms
        self._started = True
        logger.debug("Starting game (%dx%d)", s.grid.width, s.grid.height)
        self._spawn()
        if not s.over:
            self.scheduler.arm(s.drop_interval_ms, self.tick)

    def reset(self, seed: Optional[int] = None) -> None:
        """Reseed the piece sequence (when given) and restart."""
        if seed is not None:
            self.factory.reseed(seed)
        self.start()

    def set_paused(self, paused: bool) -> None:
        phase = self.phase
        if paused and phase is Phase.RUNNING:
            self.state.paused = True
            self.scheduler.cancel()
            logger.debug("Paused")
        elif not paused and phase is Phase.PAUSED:
            self.state.paused = False
            self.scheduler.rearm(self.state.drop_interval_ms)
            logger.debug("Resumed")

    def _spawn(self) -> None:
        s = self.state
        s.current = s.next if s.next is not None else self.factory.create()
        s.next = self.factory.create()
        logger.debug("Spawned %s at (%d, %d)", s.current.kind.name, s.current.x, s.current.y)
        if s.grid.collides(s.current):
            s.over = True
            self.scheduler.cancel()
            logger.info("Game over with score %d (level %d, %d lines)", s.score, s.level, s.lines_cleared)
            self._emit(GameOver(score=s.score))

    # ------------------------------------------------------------------
    # Gravity and commands
    def _can_command(self) -> bool:
        return self.state.current is not None and not self.state.over

    def tick(self) -> None:
        if self.state.paused or not self._can_command():
            return
        self._step_down()

    def soft_drop(self) -> None:
        if not self._can_command():
            return
        self._step_down()

    def _step_down(self) -> None:
        s = self.state
        assert s.current is not None
        if not s.grid.collides(s.current, 0, 1):
            s.current.y += 1
        else:
            self._settle()

    def move(self, dx: int) -> None:
        if dx not in (-1, 1):
            raise ValueError(f"dx must be -1 or +1, got {dx}")
        if not self._can_command():
            return
        s = self.state
        assert s.current is not None
        if not s.grid.collides(s.current, dx, 0):
            s.current.x += dx

    def rotate(self) -> None:
        if not self._can_command():
            return
        s = self.state
        piece = s.current
        assert piece is not None
        previous = piece.shape
        piece.shape = rotate_cw(previous)
        if not s.grid.collides(piece):
            return
        for kick in (-1, 1):
            if not s.grid.collides(piece, kick, 0):
                piece.x += kick
                return
        piece.shape = previous

    def hard_drop(self) -> None:
        if not self._can_command():
            return
        s = self.state
        assert s.current is not None
        s.current.y += s.grid.drop_distance(s.current)
        self._settle()

    def step(self, action: Action) -> None:
        action = Action(action)
        if action == Action.LEFT:
            self.move(-1)
        elif action == Action.RIGHT:
            self.move(1)
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.HARD_DROP:
            self.hard_drop()

    # ------------------------------------------------------------------
    # Lock, clear, respawn
    def _settle(self) -> None:
        s = self.state
        assert s.current is not None
        dropped = s.grid.lock(s.current)
        if dropped:
            logger.warning("Locked %s with %d cell(s) above the top row", s.current.kind.name, dropped)
        else:
            logger.debug("Locked %s at (%d, %d)", s.current.kind.name, s.current.x, s.current.y)
        lines = s.grid.clear_full_rows(self._emit)
        if lines > 0:
            self._apply_clear(lines)
        self._spawn()

    def _apply_clear(self, lines: int) -> None:
        s = self.state
        s.score += self.rules.score_for_lines(lines, s.level)
        s.lines_cleared += lines
        level = self.rules.level_for_score(s.score)
        if level != s.level:
            logger.info("Level up: %d -> %d", s.level, level)
        s.level = level
        logger.info("Cleared %d row(s); score=%d level=%d", lines, s.score, s.level)
        interval = self.rules.drop_interval_ms(s.level)
        if interval != s.drop_interval_ms:
            s.drop_interval_ms = interval
            if not s.paused:
                self.scheduler.rearm(interval)
