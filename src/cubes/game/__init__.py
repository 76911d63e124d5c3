"""Game module for Cubes.

Exports the core game engine and supporting classes:
- BlumBlumShub: Seeded pseudo-random stream used to pick pieces
- Board: Grid representation, line clearing and score counters
- Tetromino: Falling piece with precomputed rotation masks
- TetrominoType: Enum of available piece types
- Action: Logical input actions consumed each tick
- move_piece / check_collision: Movement and collision resolution
- ScoringRules / resolve_lock: Line clearing, scoring and game-over check
- TetrisGame: Phase machine and per-tick update
"""

from .actions import Action
from .bbs import BlumBlumShub, bbs_step, seed_init
from .board import BOARD_HEIGHT, BOARD_WIDTH, Board, BoardSnapshot
from .collision import Collision, MoveResult, check_collision, move_piece
from .core import GameConfig, Phase, PieceSnapshot, Renderer, TetrisGame, TickResult
from .pieces import CATALOG, Tetromino, TetrominoType, spawn
from .rules import LockOutcome, LockStatus, ScoringRules, resolve_lock

__all__ = [
    "Action",
    "BlumBlumShub",
    "bbs_step",
    "seed_init",
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "Board",
    "BoardSnapshot",
    "Collision",
    "MoveResult",
    "check_collision",
    "move_piece",
    "GameConfig",
    "Phase",
    "PieceSnapshot",
    "Renderer",
    "TetrisGame",
    "TickResult",
    "CATALOG",
    "Tetromino",
    "TetrominoType",
    "spawn",
    "LockOutcome",
    "LockStatus",
    "ScoringRules",
    "resolve_lock",
]
