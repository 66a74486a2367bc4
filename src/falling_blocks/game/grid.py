from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from .events import RowCleared
from .pieces import Piece


EMPTY = 0


class GameGrid:
    """Fixed-size grid of locked cells.

    The grid uses 0 for empty cells and the piece identifier (1..7) as the
    color tag of a locked cell. Row 0 is the top row. Cells above the top
    (y < 0) are legal for a falling piece: they never collide with the grid
    but are still checked against the side walls.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def collides(self, piece: Piece, dx: int = 0, dy: int = 0) -> bool:
        for x, y in piece.cells(dx, dy):
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if y >= 0 and self.grid[y, x] != EMPTY:
                return True
        return False

    def lock(self, piece: Piece) -> int:
        """Write the piece into the grid; returns how many cells fell off the top."""
        dropped = 0
        value = int(piece.kind)
        for x, y in piece.cells():
            if y < 0:
                dropped += 1
                continue
            self.grid[y, x] = value
        return dropped

    def drop_distance(self, piece: Piece) -> int:
        distance = 0
        while not self.collides(piece, 0, distance + 1):
            distance += 1
        return distance

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != EMPTY))

    def clear_full_rows(self, on_row_cleared: Optional[Callable[[RowCleared], None]] = None) -> int:
        cleared = 0
        y = self.height - 1
        while y >= 0:
            if not self.is_row_full(y):
                y -= 1
                continue
            if on_row_cleared is not None:
                cells = tuple((x, int(v)) for x, v in enumerate(self.grid[y].tolist()))
                on_row_cleared(RowCleared(row=y, cells=cells))
            # Rows 0..y-1 fall by one; row y is checked again.
            self.grid[1 : y + 1] = self.grid[0:y].copy()
            self.grid[0].fill(EMPTY)
            cleared += 1
        return cleared

    def is_empty(self) -> bool:
        return not bool(np.any(self.grid != EMPTY))

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
