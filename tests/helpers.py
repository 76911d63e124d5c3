from __future__ import annotations

from typing import Iterable, List, Tuple

from cubes.game import Board, BoardSnapshot, PieceSnapshot


def fill_row(board: Board, row: int, skip: Iterable[int] = ()) -> None:
    """Occupy every cell of ``row`` except the columns in ``skip``."""
    board.cells[row, :] = True
    for x in skip:
        board.cells[row, x] = False


def occupied(board: Board) -> List[Tuple[int, int]]:
    """Occupied cells as sorted (x, y) pairs."""
    ys, xs = board.cells.nonzero()
    return sorted((int(x), int(y)) for x, y in zip(xs, ys))


class RecordingRenderer:
    """Render contract stand-in that remembers what it was asked to draw."""

    def __init__(self) -> None:
        self.calls: List[str] = []
        self.boards: List[BoardSnapshot] = []
        self.pieces: List[PieceSnapshot] = []

    def render_board(self, board: BoardSnapshot) -> None:
        self.calls.append("board")
        self.boards.append(board)

    def render_active_piece(self, piece: PieceSnapshot) -> None:
        self.calls.append("piece")
        self.pieces.append(piece)

    def render_start_screen(self) -> None:
        self.calls.append("start")

    def render_end_screen(self) -> None:
        self.calls.append("end")
