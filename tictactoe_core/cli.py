from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

from .board import Coord
from .engine import GameEngine, new_game
from .errors import MoveError


def _debug_enabled() -> bool:
    return os.getenv('TICTACTOE_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')


def parse_move(text: str) -> Coord:
    """Parses 'r,c' or 'r c' into a coordinate pair. Range is not checked here."""
    text = text.strip()
    sep = ',' if ',' in text else ' '
    parts = [t for t in text.split(sep) if t.strip() != '']
    if len(parts) != 2:
        raise ValueError(f'expected two numbers, got {text!r}')
    return (int(parts[0]), int(parts[1]))


def _print_state(game: GameEngine) -> None:
    print(game.pretty())
    print(game.status_message())


def play_scripted(game: GameEngine, moves: List[Coord]) -> int:
    """Applies a fixed list of moves. Returns 0, or 2 at the first rejected move."""
    for row, col in moves:
        try:
            game.apply_move(row, col)
        except MoveError as e:
            print(f"error: move ({row}, {col}) rejected: {e}")
            _print_state(game)
            return 2
    _print_state(game)
    return 0


def play_interactive(game: GameEngine) -> int:
    print('Initial board:')
    _print_state(game)
    while not game.outcome.is_over:
        try:
            text = input(f'Player {game.current_mark}, enter your move as r,c or r c: ')
        except EOFError:
            print()
            return 0
        try:
            row, col = parse_move(text)
        except ValueError:
            print('Could not parse. Try again.')
            continue
        try:
            game.apply_move(row, col)
        except MoveError as e:
            print(f'Illegal move: {e}. Try again.')
            continue
        _print_state(game)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Two-player tic-tac-toe in the terminal')
    parser.add_argument('--moves', default=None, help='Scripted moves, e.g. "0,0 1,1 0,1"')
    parser.add_argument('--verbose', action='store_true', help='Log every move at debug level')
    args = parser.parse_args(argv)

    if args.verbose or _debug_enabled():
        logging.basicConfig(level=logging.DEBUG, format='[%(name)s] %(message)s')

    game = new_game()
    if args.moves is not None:
        try:
            moves = [parse_move(tok) for tok in args.moves.split()]
        except ValueError as e:
            parser.error(f'bad --moves: {e}')
        return play_scripted(game, moves)
    return play_interactive(game)
