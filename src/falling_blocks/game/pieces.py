from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterator, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray


def _mask(rows) -> Shape:
    shape = np.array(rows, dtype=np.bool_)
    shape.setflags(write=False)
    return shape


# Canonical rotation-0 masks. Read-only: pieces always work on a copy.
BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _mask([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
    TetrominoType.J: _mask([[1, 0, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.L: _mask([[0, 0, 1], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.O: _mask([[1, 1], [1, 1]]),
    TetrominoType.S: _mask([[0, 1, 1], [1, 1, 0], [0, 0, 0]]),
    TetrominoType.T: _mask([[0, 1, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.Z: _mask([[1, 1, 0], [0, 1, 1], [0, 0, 0]]),
}

COLOR_TAGS: Dict[TetrominoType, str] = {kind: f"type-{kind.name}" for kind in TetrominoType}


def base_shape(kind: TetrominoType) -> Shape:
    return BASE_SHAPES[TetrominoType(kind)]


def color_tag(kind: TetrominoType) -> str:
    return COLOR_TAGS[TetrominoType(kind)]


def rotate_cw(shape: Shape) -> Shape:
    """Quarter turn clockwise (transpose, then reverse each row) as a new array."""
    return np.rot90(shape, 1, axes=(1, 0)).copy()


@dataclass
class Piece:
    """Active piece: a private shape copy plus its top-left origin on the grid."""

    kind: TetrominoType
    shape: Shape
    x: int = 0
    y: int = 0

    @classmethod
    def from_catalog(cls, kind: TetrominoType, x: int = 0, y: int = 0) -> "Piece":
        return cls(TetrominoType(kind), base_shape(kind).copy(), x, y)

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def cells(self, dx: int = 0, dy: int = 0) -> Iterator[Tuple[int, int]]:
        """Absolute (x, y) of every occupied sub-cell, shifted by (dx, dy).

        All grid lookups for a piece go through here.
        """
        ys, xs = np.nonzero(self.shape)
        for sy, sx in zip(ys.tolist(), xs.tolist()):
            yield self.x + sx + dx, self.y + sy + dy

    def copy(self) -> "Piece":
        return Piece(self.kind, self.shape.copy(), self.x, self.y)
