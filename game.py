from __future__ import annotations

# Facade module that re-exports the tic-tac-toe core.
# The Flask app, the CLI entry point and the tests import from here.
# Single-responsibility modules live under tictactoe_core/*.

from tictactoe_core.marks import Mark, Outcome, Status
from tictactoe_core.board import SIZE, Board, Cell, Coord, Line
from tictactoe_core.errors import (
    CellOccupied,
    GameAlreadyOver,
    IndexOutOfBounds,
    MoveError,
)
from tictactoe_core.engine import GameEngine, new_game
from tictactoe_core.cli import parse_move


def main() -> None:
    # CLI driver delegated to tictactoe_core.cli
    from tictactoe_core.cli import main as _main
    raise SystemExit(_main())


if __name__ == '__main__':
    main()
