from __future__ import annotations

from typing import Optional, Tuple

import pygame

from cubes.game import BoardSnapshot, PieceSnapshot

BACKGROUND = (255, 255, 255)
FOREGROUND = (0, 0, 0)
SETTLED = (192, 192, 192)


class Renderer:
    """Draws engine snapshots onto a pygame surface.

    Board cells are converted to pixels here and nowhere else: cell (x, y)
    lands at ``origin + (x, y) * cell_size``.
    """

    def __init__(self, screen: pygame.Surface, cell_size: int = 25, board_size: Tuple[int, int] = (10, 24),
                 top_margin: int = 100, font_name: Optional[str] = None) -> None:
        self.screen = screen
        self.cell_size = cell_size
        self.board_w, self.board_h = board_size
        self.top_margin = top_margin
        self.origin_x = (screen.get_width() - self.board_w * cell_size) // 2
        self.origin_y = top_margin
        self.font_text = pygame.font.SysFont(font_name, 20)
        self.font_headline = pygame.font.SysFont(font_name, 80)

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(
            self.origin_x + x * self.cell_size,
            self.origin_y + y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _text_center(self, font: pygame.font.Font, text: str, y_padding: int) -> pygame.Rect:
        # y_padding is a percentage of the window height, relative to its middle
        img = font.render(text, True, FOREGROUND)
        height = self.screen.get_height()
        rect = img.get_rect(center=(self.screen.get_width() // 2, height // 2 + y_padding * height // 100))
        self.screen.blit(img, rect)
        return rect

    def render_board(self, board: BoardSnapshot) -> None:
        self.screen.fill(BACKGROUND)
        h, w = board.cells.shape
        for y in range(h):
            for x in range(w):
                if board.cells[y, x]:
                    pygame.draw.rect(self.screen, SETTLED, self._cell_rect(x, y))

        outline = pygame.Rect(self.origin_x, self.origin_y, w * self.cell_size, h * self.cell_size)
        pygame.draw.rect(self.screen, FOREGROUND, outline, 2)

        text_x = outline.right + self.cell_size
        labels = [
            f"score: {board.score}",
            f"highscore: {board.highscore}",
            f"level: {board.level}",
        ]
        for i, label in enumerate(labels):
            img = self.font_text.render(label, True, FOREGROUND)
            self.screen.blit(img, (text_x, self.origin_y + (i + 1) * self.cell_size))

    def render_active_piece(self, piece: PieceSnapshot) -> None:
        for x, y in piece.cells:
            if 0 <= x < self.board_w and 0 <= y < self.board_h:
                pygame.draw.rect(self.screen, piece.color, self._cell_rect(x, y))

    def render_start_screen(self) -> None:
        self.screen.fill(BACKGROUND)
        self._text_center(self.font_text, "Press any key to start", 20)
        title = self._text_center(self.font_headline, "Cubes", -29)
        self._draw_t_cube(title.bottom + 10, 100)

    def render_end_screen(self) -> None:
        self.screen.fill(BACKGROUND)
        self._text_center(self.font_text, "Press any key to play again", 20)
        self._text_center(self.font_headline, "Game Over", -20)

    def _draw_t_cube(self, y: int, size: int) -> None:
        # outline of a T piece centered under the title, with a drop shadow
        x = (self.screen.get_width() - size * 3) // 2
        points = [
            (x + size, y), (x + 3 * size, y), (x + 3 * size, y + size),
            (x + 2 * size, y + size), (x + 2 * size, y + 2 * size), (x + size, y + 2 * size),
            (x + size, y + size), (x, y + size), (x, y), (x + size, y),
        ]
        shadow = [(px + 4, py + 4) for px, py in points]
        pygame.draw.lines(self.screen, SETTLED, False, shadow, 2)
        pygame.draw.lines(self.screen, FOREGROUND, False, points, 2)
