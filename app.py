from __future__ import annotations

import logging
import os
import threading
import uuid
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from flask import Flask, jsonify, request

from game import (
    Board,
    Cell,
    CellOccupied,
    GameAlreadyOver,
    GameEngine,
    IndexOutOfBounds,
    Line,
    MoveError,
    new_game,
)

DEBUG = os.getenv("TICTACTOE_DEBUG", "0").lower() in ("1", "true", "yes", "on")
MAX_GAMES = max(1, int(os.getenv("TICTACTOE_MAX_GAMES", "1000")))

app = Flask(__name__)
if DEBUG:
    app.logger.setLevel(logging.DEBUG)

# Games live only in memory. The dev server is threaded, so every access to the
# registry and every apply_move runs under this lock.
_games: "OrderedDict[str, GameEngine]" = OrderedDict()
_games_lock = threading.Lock()


def _cell_to_json(cell: Cell) -> Optional[str]:
    return None if cell.occupant is None else str(cell.occupant)


def board_to_json(rows: Union[Board, Sequence[Sequence[Cell]]]) -> List[List[Optional[str]]]:
    """Accepts a Board or a board snapshot (rows of cells)."""
    if isinstance(rows, Board):
        rows = rows.snapshot()
    return [[_cell_to_json(cell) for cell in row] for row in rows]


def _line_to_json(line: Line) -> List[List[int]]:
    return [[cell.row, cell.col] for cell in line]


def state_to_json(g: GameEngine) -> Dict[str, Any]:
    outcome = g.outcome
    return {
        "board": board_to_json(g.board_snapshot()),
        "currentMark": str(g.current_mark),
        "status": outcome.status.value,
        "winner": None if outcome.winner is None else str(outcome.winner),
        "closedLines": [_line_to_json(line) for line in g.closed_lines()],
        "message": g.status_message(),
        "moveCount": g.move_count,
    }


def _error(kind: str, message: str, status: int, g: Optional[GameEngine] = None) -> Any:
    body: Dict[str, Any] = {"ok": False, "error": kind, "message": message}
    if g is not None:
        body["state"] = state_to_json(g)
    return jsonify(body), status


def _register(g: GameEngine) -> str:
    game_id = uuid.uuid4().hex
    with _games_lock:
        _games[game_id] = g
        # the game just registered is never evicted
        while len(_games) > max(1, MAX_GAMES):
            evicted, _ = _games.popitem(last=False)
            app.logger.info("evicted game %s (registry full)", evicted)
    return game_id


def _parse_move(raw: Any) -> Tuple[int, int]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError("move must be a [row, col] pair")
    # bool is an int subclass; floats and numeric strings are not coordinates
    if any(type(v) is not int for v in raw):
        raise ValueError("move coordinates must be integers")
    return raw[0], raw[1]


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    g = new_game()
    game_id = _register(g)
    app.logger.debug("new game %s", game_id)
    return jsonify({"ok": True, "gameId": game_id, "state": state_to_json(g)})


@app.get("/api/state/<game_id>")
def api_state(game_id: str) -> Any:
    with _games_lock:
        g = _games.get(game_id)
        if g is None:
            return _error("unknown_game", f"no game with id {game_id}", 404)
        return jsonify({"ok": True, "gameId": game_id, "state": state_to_json(g)})


@app.post("/api/move")
def api_move() -> Any:
    body = request.get_json(force=True, silent=True)
    if body is None:
        body = {}
    if not isinstance(body, dict):
        return _error("bad_request", "JSON object required", 400)
    game_id = body.get("gameId")
    if not isinstance(game_id, str) or not game_id:
        return _error("bad_request", "gameId required", 400)
    try:
        row, col = _parse_move(body.get("move"))
    except (TypeError, ValueError) as e:
        return _error("bad_request", f"bad move: {e}", 400)

    with _games_lock:
        g = _games.get(game_id)
        if g is None:
            return _error("unknown_game", f"no game with id {game_id}", 404)
        try:
            g.apply_move(row, col)
        except IndexOutOfBounds as e:
            return _error("index_out_of_bounds", str(e), 400, g)
        except CellOccupied as e:
            return _error("cell_occupied", str(e), 409, g)
        except GameAlreadyOver as e:
            return _error("game_already_over", str(e), 409, g)
        except MoveError as e:
            return _error("illegal_move", str(e), 400, g)
        app.logger.debug("game %s: move (%d, %d) -> %s", game_id, row, col, g.outcome.status.value)
        return jsonify({"ok": True, "gameId": game_id, "state": state_to_json(g)})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
