from __future__ import annotations

import logging
from typing import List, Set, Tuple

from .board import Board, Cell, Coord, Line
from .errors import CellOccupied, GameAlreadyOver
from .marks import Mark, Outcome, Status

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Turn and outcome state machine over a single Board.

    The engine is single-writer: callers must serialize apply_move calls.
    A move either completes fully or raises a MoveError leaving state untouched.
    """

    def __init__(self) -> None:
        self._board = Board()
        self._current_mark = Mark.FIRST
        self._outcome = Outcome.in_progress()
        self._moves: List[Coord] = []

    @property
    def current_mark(self) -> Mark:
        """The mark to move next, or the winner once the game is won."""
        return self._current_mark

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def moves(self) -> Tuple[Coord, ...]:
        return tuple(self._moves)

    @property
    def move_count(self) -> int:
        return len(self._moves)

    def board_snapshot(self) -> Tuple[Tuple[Cell, ...], ...]:
        return self._board.snapshot()

    def closed_lines(self) -> List[Line]:
        return self._board.closed_lines()

    def winning_cells(self) -> List[Cell]:
        """Cells of every closed line, in line order, without duplicates."""
        seen: Set[Coord] = set()
        out: List[Cell] = []
        for line in self._board.closed_lines():
            for cell in line:
                if cell.coord not in seen:
                    seen.add(cell.coord)
                    out.append(cell)
        return out

    def status_message(self) -> str:
        if self._outcome.status is Status.WON:
            return f"Player {self._outcome.winner} won!"
        if self._outcome.status is Status.DRAW:
            return "It's a draw!"
        return f"Player {self._current_mark}'s turn"

    def pretty(self) -> str:
        return self._board.pretty(highlight=[cell.coord for cell in self.winning_cells()])

    def apply_move(self, row: int, col: int) -> None:
        """
        Places the current mark at (row, col) and advances the game.
        Raises GameAlreadyOver, IndexOutOfBounds or CellOccupied on rejection.
        """
        if self._outcome.is_over:
            raise GameAlreadyOver()
        # Board.is_empty raises IndexOutOfBounds before anything is mutated.
        if not self._board.is_empty(row, col):
            raise CellOccupied(row, col)

        mover = self._current_mark
        self._board.place(row, col, mover)
        self._moves.append((row, col))
        logger.debug("move %d: %s at (%d, %d)", len(self._moves), mover, row, col)

        # Win is checked before draw: a board-filling line is still a win.
        if self._board.closed_lines():
            self._outcome = Outcome.won(mover)
            logger.debug("player %s won", mover)
        elif self._board.is_full():
            self._outcome = Outcome.draw()
            logger.debug("board full, draw")
        else:
            self._current_mark = mover.next()


def new_game() -> GameEngine:
    """Creates a fresh game: empty board, X to move, in progress."""
    return GameEngine()
