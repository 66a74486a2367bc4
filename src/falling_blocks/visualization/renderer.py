from __future__ import annotations

from typing import Optional, Tuple

import pygame

from falling_blocks.game import GameSnapshot, Piece
from .palette import color_for_value as _color_for_value


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        side_panel = 6 * self.cell_size
        return (
            width * self.cell_size + side_panel + self.margin * 3,
            height * self.cell_size + self.margin * 2,
        )

    def _cell_rect(self, x: int, y: int, x0: int = 0, y0: int = 0) -> pygame.Rect:
        return pygame.Rect(
            x0 + x * self.cell_size,
            y0 + y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _grid_surface(self, snapshot: GameSnapshot) -> pygame.Surface:
        board = snapshot.board_with_piece()
        h, w = board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(surf, _color_for_value(int(board[y, x])), self._cell_rect(x, y))
        piece = snapshot.current
        if piece is not None and snapshot.ghost_y is not None and snapshot.ghost_y != piece.y:
            dy = snapshot.ghost_y - piece.y
            color = _color_for_value(int(piece.kind))
            for x, y in piece.cells(0, dy):
                if 0 <= y < h and 0 <= x < w and board[y, x] == 0:
                    pygame.draw.rect(surf, color, self._cell_rect(x, y), 2)
        return surf

    def _draw_preview(self, screen: pygame.Surface, piece: Piece, x0: int, y0: int) -> None:
        # Centre the piece in a 4x4 box
        off_x = (4 - piece.width) // 2
        off_y = (4 - piece.height) // 2
        color = _color_for_value(int(piece.kind))
        for py in range(piece.height):
            for px in range(piece.width):
                if piece.shape[py, px]:
                    pygame.draw.rect(screen, color, self._cell_rect(px + off_x, py + off_y, x0, y0))

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(snapshot), (self.margin, self.margin))

        x0 = self.margin * 2 + snapshot.width * self.cell_size
        y0 = self.margin
        lines = [
            f"Score: {snapshot.score}",
            f"Level: {snapshot.level}",
            f"Lines: {snapshot.lines_cleared}",
            "Next:",
        ]
        for i, text in enumerate(lines):
            screen.blit(self._font.render(text, True, (230, 230, 230)), (x0, y0 + i * 26))
        if snapshot.next is not None:
            self._draw_preview(screen, snapshot.next, x0, y0 + len(lines) * 26 + 6)

        banner = None
        if snapshot.over:
            banner = f"Game Over - {snapshot.score} - R to restart"
        elif snapshot.paused:
            banner = "Paused - P to resume"
        elif snapshot.current is None:
            banner = "Press Enter to start"
        if banner is not None:
            text = self._font.render(banner, True, (255, 255, 255))
            rect = text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
            screen.blit(text, rect)
        pygame.display.flip()
