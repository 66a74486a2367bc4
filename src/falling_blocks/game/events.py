from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple, Union


@dataclass(frozen=True)
class RowCleared:
    """A full row about to be removed, with the color tag of every cell."""

    row: int
    cells: Tuple[Tuple[int, int], ...]


@dataclass(frozen=True)
class GameOver:
    score: int


GameEvent = Union[RowCleared, GameOver]
Listener = Callable[[GameEvent], None]
