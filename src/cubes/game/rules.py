from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

from .board import Board

logger = logging.getLogger(__name__)


class LockStatus(IntEnum):
    CONTINUE = 0
    GAME_OVER = 1


@dataclass(frozen=True)
class ScoringRules:
    row_points: int = 100
    level_step: int = 1000
    sentinel_row: int = 2

    def points_for_row(self, rows_cleared: int) -> int:
        # the n-th row cleared by the same lock is worth n times the base
        return self.row_points * rows_cleared

    def level_threshold(self, level: int) -> int:
        return self.level_step * level


DEFAULT_RULES = ScoringRules()


@dataclass
class LockOutcome:
    status: LockStatus
    rows_cleared: int = 0
    points: int = 0

    @property
    def game_over(self) -> bool:
        return self.status is LockStatus.GAME_OVER


def resolve_lock(board: Board, rules: ScoringRules = DEFAULT_RULES) -> LockOutcome:
    """Settle the board after a lock: game-over check, row clears, score and level."""
    if board.top_row_has_block(rules.sentinel_row):
        logger.info("sentinel row %d reached, game over at score %d", rules.sentinel_row, board.score)
        return LockOutcome(LockStatus.GAME_OVER)

    rows_cleared = 0
    points = 0
    row = 0
    while row < board.height:
        if board.is_row_full(row):
            board.clear_row_and_shift(row)
            rows_cleared += 1
            gained = rules.points_for_row(rows_cleared)
            board.score += gained
            points += gained
            # the row above has dropped into this index, look at it again
            continue
        row += 1

    if board.score >= rules.level_threshold(board.level):
        board.level += 1
        logger.info("level up: %d", board.level)

    if board.score > board.highscore:
        board.highscore = board.score

    if rows_cleared:
        logger.debug("cleared %d row(s) for %d points", rows_cleared, points)
    return LockOutcome(LockStatus.CONTINUE, rows_cleared=rows_cleared, points=points)
