"""
Tic-tac-toe core Python package.

This package holds the game-state engine as pure-logic modules so the CLI
and the Flask app stay thin and the rules stay easy to test.
Modules:
- marks.py: Mark, Status, Outcome
- board.py: Board, Cell, Coord, Line
- errors.py: MoveError and its subclasses
- engine.py: GameEngine, new_game
- cli.py: terminal driver
"""
