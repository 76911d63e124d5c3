from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .pieces import Tetromino


BOARD_WIDTH = 10
BOARD_HEIGHT = 24


@dataclass(frozen=True, eq=False)
class BoardSnapshot:
    """Read-only copy of the board handed to renderers."""

    cells: np.ndarray
    score: int
    level: int
    highscore: int

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])


class Board:
    """Fixed grid of settled cells plus the score counters of one game.

    ``cells[y, x]`` is True when the cell at column ``x``, row ``y`` is taken.
    Row 0 is the top of the board.
    """

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT, highscore: int = 0) -> None:
        self.width = int(width)
        self.height = int(height)
        self.cells = np.zeros((self.height, self.width), dtype=np.bool_)
        self.score = 0
        self.level = 1
        self.highscore = int(highscore)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        return bool(self.cells[y, x])

    def is_row_full(self, row: int) -> bool:
        return bool(np.all(self.cells[row, :]))

    def clear_row_and_shift(self, row: int) -> None:
        # everything above `row` falls by one, the top row comes in empty
        self.cells[1 : row + 1, :] = self.cells[0:row, :].copy()
        self.cells[0, :] = False

    def place(self, piece: "Tetromino") -> None:
        """Write the piece's active rotation into the grid.

        Bounds are not checked here; the collision engine only locks legal poses.
        """
        shape = piece.shape()
        for i, j in zip(*np.nonzero(shape)):
            self.cells[piece.y + i, piece.x + j] = True

    def top_row_has_block(self, sentinel_row: int) -> bool:
        return bool(np.any(self.cells[sentinel_row, :]))

    def copy(self) -> "Board":
        new_board = Board(self.width, self.height, self.highscore)
        new_board.cells = self.cells.copy()
        new_board.score = self.score
        new_board.level = self.level
        return new_board

    def snapshot(self) -> BoardSnapshot:
        cells = self.cells.copy()
        cells.setflags(write=False)
        return BoardSnapshot(cells=cells, score=self.score, level=self.level, highscore=self.highscore)

    def __str__(self) -> str:
        return "\n".join("".join("█" if cell else "·" for cell in row) for row in self.cells)
