from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from .errors import IndexOutOfBounds
from .marks import Mark

SIZE = 3  # rules are written for 3x3 only
Coord = Tuple[int, int]


@dataclass(frozen=True)
class Cell:
    """One board position and whoever holds it. Compared by value."""
    row: int
    col: int
    occupant: Optional[Mark] = None  # None means empty

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    def is_empty(self) -> bool:
        return self.occupant is None


Line = Tuple[Cell, Cell, Cell]


class Board:
    """The 3x3 grid of cells. A storage primitive: occupancy rules live in the engine."""

    def __init__(self) -> None:
        self._cells: List[List[Cell]] = [[Cell(r, c) for c in range(SIZE)] for r in range(SIZE)]

    def at(self, row: int, col: int) -> Cell:
        """Gets the cell at a given row and column. No wrap-around for negative indices."""
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            raise IndexOutOfBounds(row, col)
        return self._cells[row][col]

    def is_empty(self, row: int, col: int) -> bool:
        return self.at(row, col).is_empty()

    def place(self, row: int, col: int, mark: Mark) -> None:
        # Occupancy is checked by the caller; only the range is enforced here.
        cell = self.at(row, col)
        self._cells[row][col] = replace(cell, occupant=mark)

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates on the board, row-major."""
        for r in range(SIZE):
            for c in range(SIZE):
                yield (r, c)

    def cells(self) -> Iterator[Cell]:
        for r, c in self.coords():
            yield self._cells[r][c]

    def is_full(self) -> bool:
        return all(not cell.is_empty() for cell in self.cells())

    def rows(self) -> List[Line]:
        return [(self.at(r, 0), self.at(r, 1), self.at(r, 2)) for r in range(SIZE)]

    def columns(self) -> List[Line]:
        return [(self.at(0, c), self.at(1, c), self.at(2, c)) for c in range(SIZE)]

    def diagonals(self) -> List[Line]:
        return [
            (self.at(0, 0), self.at(1, 1), self.at(2, 2)),
            (self.at(0, 2), self.at(1, 1), self.at(2, 0)),
        ]

    def lines(self) -> List[Line]:
        """All 8 candidate lines: rows, then columns, then the two diagonals."""
        return self.rows() + self.columns() + self.diagonals()

    def closed_lines(self) -> List[Line]:
        """
        Returns the candidate lines whose three cells hold the same mark.
        Evaluated fresh on every call; the order follows lines().
        """
        closed: List[Line] = []
        for line in self.lines():
            pivot = line[0].occupant
            if pivot is None:
                continue
            if all(cell.occupant is pivot for cell in line):
                closed.append(line)
        return closed

    def snapshot(self) -> Tuple[Tuple[Cell, ...], ...]:
        """Immutable copy of the grid for renderers."""
        return tuple(tuple(row) for row in self._cells)

    def pretty(self, highlight: Optional[Iterable[Coord]] = None) -> str:
        """Generates a human-readable grid. Highlighted cells are wrapped in brackets."""
        marked: Set[Coord] = set(highlight or ())
        lines: List[str] = []
        for r in range(SIZE):
            row: List[str] = []
            for c in range(SIZE):
                cell = self._cells[r][c]
                sym = '.' if cell.occupant is None else str(cell.occupant)
                row.append(f'[{sym}]' if (r, c) in marked else f' {sym} ')
            lines.append(''.join(row).rstrip())
        return '\n'.join(lines)
