import json
import unittest

import app as app_mod
from app import app as flask_app
from app import board_to_json, state_to_json
from game import Board, Mark, new_game


class TestJsonHelpers(unittest.TestCase):
    def test_given_board_when_serialized_then_symbols_and_nulls(self):
        board = Board()
        board.place(0, 0, Mark.FIRST)
        board.place(2, 1, Mark.SECOND)
        bj = board_to_json(board)
        self.assertEqual(bj, [['X', None, None], [None, None, None], [None, 'O', None]])
        self.assertEqual(board_to_json(board.snapshot()), bj)

    def test_given_won_game_when_serialized_then_winner_and_closed_lines(self):
        g = new_game()
        for r, c in [(0, 0), (1, 1), (0, 1), (1, 0), (0, 2)]:
            g.apply_move(r, c)
        sj = state_to_json(g)
        self.assertEqual(sj["status"], "won")
        self.assertEqual(sj["winner"], "X")
        self.assertEqual(sj["currentMark"], "X")
        self.assertEqual(sj["closedLines"], [[[0, 0], [0, 1], [0, 2]]])
        self.assertEqual(sj["moveCount"], 5)
        self.assertEqual(sj["message"], "Player X won!")


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        self.client = flask_app.test_client()

    def _post(self, path, payload):
        return self.client.post(path, data=json.dumps(payload), content_type="application/json")

    def _new(self):
        r = self._post("/api/new", {})
        self.assertEqual(r.status_code, 200)
        return r.get_json()

    def test_given_new_game_when_posted_then_returns_id_and_fresh_state(self):
        d = self._new()
        self.assertTrue(d["ok"])
        state = d["state"]
        self.assertEqual(state["board"], [[None] * 3 for _ in range(3)])
        self.assertEqual(state["currentMark"], "X")
        self.assertEqual(state["status"], "in_progress")
        self.assertIsNone(state["winner"])
        self.assertEqual(state["closedLines"], [])

        r = self.client.get(f"/api/state/{d['gameId']}")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.get_json()["state"], state)

    def test_given_moves_when_posted_then_turn_alternates_and_win_reported(self):
        game_id = self._new()["gameId"]
        marks = []
        for mv in [[0, 0], [1, 1], [0, 1], [1, 0], [0, 2]]:
            r = self._post("/api/move", {"gameId": game_id, "move": mv})
            self.assertEqual(r.status_code, 200)
            marks.append(r.get_json()["state"]["currentMark"])
        self.assertEqual(marks, ["O", "X", "O", "X", "X"])
        state = r.get_json()["state"]
        self.assertEqual(state["status"], "won")
        self.assertEqual(state["winner"], "X")

        r2 = self._post("/api/move", {"gameId": game_id, "move": [2, 2]})
        self.assertEqual(r2.status_code, 409)
        d2 = r2.get_json()
        self.assertFalse(d2["ok"])
        self.assertEqual(d2["error"], "game_already_over")
        self.assertIsNone(d2["state"]["board"][2][2])

    def test_given_occupied_cell_when_posted_then_409_and_state_unchanged(self):
        game_id = self._new()["gameId"]
        self._post("/api/move", {"gameId": game_id, "move": [0, 0]})
        r = self._post("/api/move", {"gameId": game_id, "move": [0, 0]})
        self.assertEqual(r.status_code, 409)
        d = r.get_json()
        self.assertEqual(d["error"], "cell_occupied")
        self.assertEqual(d["state"]["currentMark"], "O")
        self.assertEqual(d["state"]["moveCount"], 1)

    def test_given_out_of_range_move_when_posted_then_400(self):
        game_id = self._new()["gameId"]
        r = self._post("/api/move", {"gameId": game_id, "move": [5, 0]})
        self.assertEqual(r.status_code, 400)
        d = r.get_json()
        self.assertEqual(d["error"], "index_out_of_bounds")
        self.assertEqual(d["state"]["moveCount"], 0)

    def test_given_malformed_bodies_when_posted_then_400(self):
        game_id = self._new()["gameId"]
        for payload in [
            {},
            {"gameId": game_id},
            {"gameId": game_id, "move": [1]},
            {"gameId": game_id, "move": ["a", "b"]},
            {"gameId": game_id, "move": [True, 0]},
            {"gameId": game_id, "move": [0.9, 2.7]},
            {"gameId": game_id, "move": [float("inf"), 0]},
            {"gameId": game_id, "move": ["1", "1"]},
        ]:
            r = self._post("/api/move", payload)
            self.assertEqual(r.status_code, 400, payload)
            self.assertEqual(r.get_json()["error"], "bad_request")

        for raw in ["[1, 2]", "\"x\"", "0"]:
            r = self.client.post("/api/move", data=raw, content_type="application/json")
            self.assertEqual(r.status_code, 400, raw)
            self.assertEqual(r.get_json()["error"], "bad_request")

        # nothing was placed by any rejected request
        state = self.client.get(f"/api/state/{game_id}").get_json()["state"]
        self.assertEqual(state["moveCount"], 0)
        self.assertEqual(state["board"], [[None] * 3 for _ in range(3)])

    def test_given_unknown_game_when_requested_then_404(self):
        r = self.client.get("/api/state/nope")
        self.assertEqual(r.status_code, 404)
        r2 = self._post("/api/move", {"gameId": "nope", "move": [0, 0]})
        self.assertEqual(r2.status_code, 404)
        self.assertEqual(r2.get_json()["error"], "unknown_game")

    def test_given_registry_cap_when_exceeded_then_oldest_evicted(self):
        orig = app_mod.MAX_GAMES
        app_mod.MAX_GAMES = 2
        try:
            first = self._new()["gameId"]
            self._new()
            self._new()
            r = self.client.get(f"/api/state/{first}")
            self.assertEqual(r.status_code, 404)
        finally:
            app_mod.MAX_GAMES = orig

    def test_given_non_positive_registry_cap_when_new_game_then_still_reachable(self):
        orig = app_mod.MAX_GAMES
        app_mod.MAX_GAMES = 0
        try:
            game_id = self._new()["gameId"]
            r = self.client.get(f"/api/state/{game_id}")
            self.assertEqual(r.status_code, 200)
            r2 = self._post("/api/move", {"gameId": game_id, "move": [1, 1]})
            self.assertEqual(r2.status_code, 200)
        finally:
            app_mod.MAX_GAMES = orig


if __name__ == "__main__":
    unittest.main(verbosity=2)
