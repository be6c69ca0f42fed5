from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Mark(Enum):
    """The two player symbols. FIRST always opens the game."""
    FIRST = 'X'
    SECOND = 'O'

    def next(self) -> 'Mark':
        """Returns the mark that plays after this one."""
        return Mark.SECOND if self is Mark.FIRST else Mark.FIRST

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Mark':
        """Parses 'X' or 'O' (any case) into a Mark."""
        text = str(symbol).strip().upper()
        for mark in cls:
            if mark.value == text:
                return mark
        raise ValueError(f'Unknown mark symbol: {symbol!r}')

    def __str__(self) -> str:
        return self.value


class Status(Enum):
    IN_PROGRESS = 'in_progress'
    WON = 'won'
    DRAW = 'draw'


@dataclass(frozen=True)
class Outcome:
    """Classification of a game: still running, won by a mark, or drawn."""
    status: Status
    winner: Optional[Mark] = None  # only set when status is WON

    @classmethod
    def in_progress(cls) -> 'Outcome':
        return cls(Status.IN_PROGRESS)

    @classmethod
    def won(cls, mark: Mark) -> 'Outcome':
        return cls(Status.WON, mark)

    @classmethod
    def draw(cls) -> 'Outcome':
        return cls(Status.DRAW)

    @property
    def is_over(self) -> bool:
        return self.status is not Status.IN_PROGRESS
