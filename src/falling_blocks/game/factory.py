from __future__ import annotations

import random
from typing import Optional, Sequence

from .pieces import Piece, TetrominoType


class PieceFactory:
    """Draws pieces uniformly and independently from the catalog.

    No bag or anti-repeat logic: the same piece may come up several times in
    a row. ``kinds`` narrows the pool (all seven by default).
    """

    def __init__(self, width: int, seed: Optional[int] = None,
                 kinds: Optional[Sequence[TetrominoType]] = None) -> None:
        self.width = int(width)
        self.rng = random.Random(seed)
        self.kinds = [TetrominoType(k) for k in kinds] if kinds else list(TetrominoType)

    def reseed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def create(self) -> Piece:
        kind = self.rng.choice(self.kinds)
        piece = Piece.from_catalog(kind)
        piece.x = self.width // 2 - piece.width // 2
        piece.y = 0
        return piece
