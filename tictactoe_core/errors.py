from __future__ import annotations


class MoveError(Exception):
    """Base class for every rejected move. State is never changed when raised."""


class GameAlreadyOver(MoveError):
    def __init__(self) -> None:
        super().__init__('Game is already over')


class CellOccupied(MoveError):
    def __init__(self, row: int, col: int) -> None:
        super().__init__(f'Cell ({row}, {col}) is already occupied')
        self.row = row
        self.col = col


class IndexOutOfBounds(MoveError, IndexError):
    """Raised for coordinates outside the 3x3 grid. Callers should filter these out."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f'Coordinate ({row}, {col}) is outside the 3x3 board')
        self.row = row
        self.col = col
