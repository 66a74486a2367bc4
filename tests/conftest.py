from __future__ import annotations

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from falling_blocks.game import (  # noqa: E402
    FallingBlocksGame,
    GameConfig,
    ManualScheduler,
    Piece,
    PieceFactory,
    TetrominoType,
    rotate_cw,
)


def make_piece(kind: TetrominoType, x: int, y: int, rotations: int = 0) -> Piece:
    piece = Piece.from_catalog(kind, x, y)
    for _ in range(rotations):
        piece.shape = rotate_cw(piece.shape)
    return piece


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def game(scheduler: ManualScheduler) -> FallingBlocksGame:
    return FallingBlocksGame(GameConfig(random_seed=1234), scheduler=scheduler)


@pytest.fixture
def o_game(scheduler: ManualScheduler) -> FallingBlocksGame:
    """Started game that only ever spawns O pieces."""
    g = FallingBlocksGame(GameConfig(), scheduler=scheduler)
    g.factory = PieceFactory(g.grid.width, seed=0, kinds=[TetrominoType.O])
    g.start()
    return g
