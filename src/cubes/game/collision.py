from __future__ import annotations

"""
Movement and collision resolution for the falling piece.

Everything here works in board cells. A move is resolved in two stages: first
the sideways or rotational change at the current row, then the downward
descent one row at a time so the piece slides to rest against irregular
stacks instead of jumping past them.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import numpy as np

from .actions import Action
from .board import BOARD_HEIGHT, Board
from .pieces import Tetromino, rotation_grid

logger = logging.getLogger(__name__)

SOFT_DROP_STEPS = 15
HARD_DROP_STEPS = BOARD_HEIGHT


class Collision(IntEnum):
    NONE = 0
    BLOCKED_BOTTOM_OR_STACK = 1
    BLOCKED_SIDE = 2
    # the new orientation overlaps the stack while the current one still fits
    BLOCKED_ROTATION = 3


@dataclass(frozen=True)
class MoveResult:
    piece: Tetromino
    locked: bool = False


def _overlaps_stack(board: Board, xs: np.ndarray, ys: np.ndarray) -> bool:
    inside = (ys >= 0) & (ys < board.height) & (xs >= 0) & (xs < board.width)
    return bool(np.any(board.cells[ys[inside], xs[inside]]))


def check_collision(board: Board, piece: Tetromino, x: int, y: int, rotation: int) -> Collision:
    """Classify the pose (x, y, rotation) of ``piece`` against ``board``."""
    rows, cols = np.nonzero(rotation_grid(piece.kind, rotation))
    xs = cols + x
    ys = rows + y

    # side pass runs over every cell before the floor or the stack is looked at
    if np.any((xs < 0) | (xs >= board.width)):
        return Collision.BLOCKED_SIDE

    if np.any(ys >= board.height):
        return Collision.BLOCKED_BOTTOM_OR_STACK

    if not _overlaps_stack(board, xs, ys):
        return Collision.NONE

    if rotation == piece.rotation:
        return Collision.BLOCKED_BOTTOM_OR_STACK

    cur_rows, cur_cols = np.nonzero(piece.shape())
    if _overlaps_stack(board, cur_cols + x, cur_rows + y):
        return Collision.BLOCKED_BOTTOM_OR_STACK
    return Collision.BLOCKED_ROTATION


def _rotate(board: Board, piece: Tetromino, delta: int) -> Tetromino:
    new_rotation = (piece.rotation + delta) % 4
    hit = check_collision(board, piece, piece.x, piece.y, new_rotation)
    if hit is not Collision.NONE:
        logger.debug("rotation %d -> %d rejected: %s", piece.rotation, new_rotation, hit.name)
        return piece
    return piece.moved(rotation=new_rotation)


def _shift(board: Board, piece: Tetromino, dx: int) -> Tetromino:
    new_x = piece.x + dx
    hit = check_collision(board, piece, new_x, piece.y, piece.rotation)
    if hit is Collision.BLOCKED_SIDE:
        # bounce off the wall
        new_x -= dx
    elif hit is not Collision.NONE:
        new_x = piece.x
    return piece.moved(dx=new_x - piece.x)


def _lock(board: Board, piece: Tetromino) -> MoveResult:
    board.place(piece)
    logger.debug("locked %s at (%d, %d) rotation %d", piece.kind.name, piece.x, piece.y, piece.rotation)
    return MoveResult(piece, locked=True)


def _descend(board: Board, piece: Tetromino, steps: int) -> MoveResult:
    # the row below is probed every tick, even when no descent is owed,
    # so a piece resting on the stack locks at once
    for step in range(max(1, steps)):
        hit = check_collision(board, piece, piece.x, piece.y + 1, piece.rotation)
        if hit is Collision.NONE:
            if step < steps:
                piece = piece.moved(dy=1)
            continue
        if hit is Collision.BLOCKED_SIDE:
            break
        return _lock(board, piece)
    return MoveResult(piece, locked=False)


def move_piece(board: Board, piece: Tetromino, action: Any, gravity_rows: int = 0) -> MoveResult:
    """Apply one tick worth of input and gravity to ``piece``.

    Returns the new pose, or the final pose with ``locked=True`` once the piece
    has been written into ``board``.
    """
    action = Action.coerce(action)
    descent = max(0, int(gravity_rows))

    # a pose already inside the stack (a blocked spawn) locks before any input
    if check_collision(board, piece, piece.x, piece.y, piece.rotation) is Collision.BLOCKED_BOTTOM_OR_STACK:
        return _lock(board, piece)

    if action == Action.ROTATE_CW:
        piece = _rotate(board, piece, 1)
    elif action == Action.ROTATE_CCW:
        piece = _rotate(board, piece, -1)
    elif action == Action.LEFT:
        piece = _shift(board, piece, -1)
    elif action == Action.RIGHT:
        piece = _shift(board, piece, 1)
    elif action == Action.SOFT_DROP:
        descent += SOFT_DROP_STEPS
    elif action == Action.HARD_DROP:
        descent += HARD_DROP_STEPS

    return _descend(board, piece, descent)
