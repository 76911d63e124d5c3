from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional, Protocol, Tuple

import numpy as np

from .actions import Action
from .bbs import BlumBlumShub
from .board import BOARD_HEIGHT, BOARD_WIDTH, Board, BoardSnapshot
from .collision import move_piece
from .pieces import Color, Tetromino, TetrominoType, spawn
from .rules import DEFAULT_RULES, LockStatus, ScoringRules, resolve_lock

logger = logging.getLogger(__name__)

# one pixel per frame at 60 fps with 25 px cells
DEFAULT_GRAVITY_INTERVAL = 25 / 60


class Phase(IntEnum):
    START = 0
    PLAYING = 1
    PAUSED = 2
    GAME_OVER = 3


@dataclass
class GameConfig:
    random_seed: Optional[int] = None
    gravity_interval: float = DEFAULT_GRAVITY_INTERVAL


@dataclass(frozen=True)
class PieceSnapshot:
    kind: TetrominoType
    rotation: int
    x: int
    y: int
    color: Color
    cells: Tuple[Tuple[int, int], ...]


@dataclass
class TickResult:
    phase: Phase
    ok: bool = True
    locked: bool = False
    rows_cleared: int = 0
    points: int = 0
    error: Optional[str] = None


class Renderer(Protocol):
    def render_board(self, board: BoardSnapshot) -> None: ...

    def render_active_piece(self, piece: PieceSnapshot) -> None: ...

    def render_start_screen(self) -> None: ...

    def render_end_screen(self) -> None: ...


class TetrisGame:
    """Phase machine driving one falling-block game per START->GAME_OVER cycle."""

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or DEFAULT_RULES
        self.rng = BlumBlumShub(self.config.random_seed)
        self.phase = Phase.START
        self.board: Optional[Board] = None
        self.active: Optional[Tetromino] = None
        self.highscore = 0
        self._gravity_elapsed = 0.0

    def reseed(self, seed: Optional[int]) -> None:
        self.rng = BlumBlumShub(seed)

    def start_game(self) -> TickResult:
        try:
            self.board = Board(highscore=self.highscore)
        except MemoryError as exc:
            return self._abort(exc)
        self.active = None
        self._gravity_elapsed = 0.0
        self.phase = Phase.PLAYING
        logger.info("new game, highscore %d", self.highscore)
        return TickResult(self.phase)

    def restart(self) -> TickResult:
        """Drop whatever game is running and begin a fresh one."""
        self._end_game()
        return self.start_game()

    def advance(self) -> TickResult:
        """Leave the title or game-over screen, as a key press does there."""
        if self.phase is Phase.START:
            return self.start_game()
        if self.phase is Phase.GAME_OVER:
            self._end_game()
        return TickResult(self.phase)

    def tick(self, action: Any = Action.NONE, dt: float = 0.0) -> TickResult:
        action = Action.coerce(action)
        if self.phase in (Phase.START, Phase.GAME_OVER):
            if action is not Action.NONE:
                return self.advance()
            return TickResult(self.phase)
        if self.phase is Phase.PLAYING:
            return self._tick_playing(action, dt)
        if action is Action.PAUSE:
            self.phase = Phase.PLAYING
        return TickResult(self.phase)

    def _tick_playing(self, action: Action, dt: float) -> TickResult:
        assert self.board is not None
        if action is Action.PAUSE:
            self.phase = Phase.PAUSED
            return TickResult(self.phase)

        if self.active is None:
            try:
                self.active = spawn(self.rng)
            except MemoryError as exc:
                return self._abort(exc)
            self._gravity_elapsed = 0.0
            return TickResult(self.phase)

        result = move_piece(self.board, self.active, action, self._gravity_rows(dt))
        if not result.locked:
            self.active = result.piece
            return TickResult(self.phase)

        self.active = None
        outcome = resolve_lock(self.board, self.rules)
        if outcome.status is LockStatus.GAME_OVER:
            self.phase = Phase.GAME_OVER
            logger.debug("final board:\n%s", self.board)
        return TickResult(
            self.phase,
            locked=True,
            rows_cleared=outcome.rows_cleared,
            points=outcome.points,
        )

    def _gravity_rows(self, dt: float) -> int:
        interval = self.config.gravity_interval
        if interval <= 0:
            return 0
        self._gravity_elapsed += max(0.0, float(dt))
        rows = int(self._gravity_elapsed // interval)
        self._gravity_elapsed -= rows * interval
        return rows

    def _end_game(self) -> None:
        if self.board is not None:
            self.highscore = max(self.highscore, self.board.highscore)
        self.board = None
        self.active = None
        self.phase = Phase.START

    def _abort(self, exc: BaseException) -> TickResult:
        logger.error("game aborted: %r", exc)
        self._end_game()
        return TickResult(self.phase, ok=False, error=f"out of memory: {exc}")

    @property
    def score(self) -> int:
        return self.board.score if self.board is not None else 0

    def board_snapshot(self) -> Optional[BoardSnapshot]:
        return self.board.snapshot() if self.board is not None else None

    def piece_snapshot(self) -> Optional[PieceSnapshot]:
        piece = self.active
        if piece is None:
            return None
        return PieceSnapshot(
            kind=piece.kind,
            rotation=piece.rotation,
            x=piece.x,
            y=piece.y,
            color=piece.color,
            cells=tuple(piece.cells()),
        )

    def render(self, renderer: Renderer) -> None:
        if self.phase is Phase.START:
            renderer.render_start_screen()
            return
        if self.phase is Phase.GAME_OVER:
            renderer.render_end_screen()
            return
        board = self.board_snapshot()
        if board is not None:
            renderer.render_board(board)
        piece = self.piece_snapshot()
        if piece is not None:
            renderer.render_active_piece(piece)

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        if self.board is None:
            return np.zeros((BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8)
        state = self.board.cells.astype(np.int8)
        if self.active is not None:
            for x, y in self.active.cells():
                if self.board.is_inside(x, y):
                    state[y, x] = -(int(self.active.kind) + 1)
        return state
