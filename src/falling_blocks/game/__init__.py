"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- GameGrid: Grid representation, collision, locking and row clearing
- Piece: Tetromino piece with its own shape copy and origin
- TetrominoType: Enum of available piece types
- PieceFactory: Uniform random piece source
- ScoringRules: Score, level and gravity interval formulas
- Scheduler / ManualScheduler: Gravity timer abstraction
- FallingBlocksGame: Main game state machine
"""

from .grid import GameGrid
from .pieces import BASE_SHAPES, Piece, TetrominoType, color_tag, rotate_cw
from .factory import PieceFactory
from .rules import ScoringRules
from .events import GameOver, RowCleared
from .scheduler import ManualScheduler, Scheduler
from .core import Action, FallingBlocksGame, GameConfig, GameSnapshot, GameState, Phase

__all__ = [
    "GameGrid",
    "BASE_SHAPES",
    "Piece",
    "TetrominoType",
    "color_tag",
    "rotate_cw",
    "PieceFactory",
    "ScoringRules",
    "GameOver",
    "RowCleared",
    "ManualScheduler",
    "Scheduler",
    "Action",
    "FallingBlocksGame",
    "GameConfig",
    "GameSnapshot",
    "GameState",
    "Phase",
]
