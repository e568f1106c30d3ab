"""Tests for the local game engine and arena CLI."""

import itertools
import logging
import random

import pytest

from food_snake import arena, engine
from food_snake.snake import make_decider


def always(move):
    def decide(data):
        return move
    return decide


def circle():
    moves = itertools.cycle(["up", "right", "down", "left"])
    return lambda data: next(moves)


def crash(data):
    raise RuntimeError("boom")


class TestSetup:
    def test_create_snake_is_stacked(self) -> None:
        snake = engine.create_snake("a", 1, 1)
        assert snake["body"] == [{"x": 1, "y": 1}] * 3
        assert snake["head"] == {"x": 1, "y": 1}
        assert snake["health"] == 100
        assert snake["length"] == 3

    def test_spawn_food_avoids_occupied_cells(self) -> None:
        board = {"width": 2, "height": 2, "food": [{"x": 0, "y": 0}],
                 "snakes": [engine.create_snake("a", 1, 1)]}
        engine.spawn_food(board, random.Random(1), count=5)
        assert sorted((f["x"], f["y"]) for f in board["food"]) == [(0, 0), (0, 1), (1, 0)]

    def test_game_state_is_a_copy(self) -> None:
        board = {"width": 11, "height": 11, "food": [], "snakes": [engine.create_snake("a", 1, 1)]}
        state = engine.make_game_state(board, board["snakes"][0], turn=4)
        state["board"]["snakes"].clear()
        assert state["turn"] == 4
        assert state["you"]["id"] == "a"
        assert board["snakes"]


class TestRunGame:
    def test_wall_collision(self) -> None:
        result = engine.run_game({"a": always("left"), "b": always("down")}, seed=1)
        assert result["winner"] == "b"
        assert result["death_reasons"]["a"] == "wall collision (turn 1)"
        assert result["turns"] == 2

    def test_strategy_errors_become_up(self) -> None:
        result = engine.run_game({"a": crash, "b": always("right")}, seed=1)
        assert result["turn_log"][0]["moves"]["a"] == "up"
        assert result["winner"] == "a"

    def test_invalid_move_becomes_up(self) -> None:
        result = engine.run_game({"a": always("north"), "b": always("down")}, seed=1, max_turns=1)
        assert result["turn_log"][0]["moves"] == {"a": "up", "b": "down"}

    def test_turn_limit_longest_wins(self) -> None:
        result = engine.run_game(
            {"a": make_decider("heuristic"), "b": make_decider("heuristic")},
            max_turns=3, seed=5,
        )
        assert result["turns"] == 3
        assert result["winner"] in ("a", "b")
        assert set(result["final_snakes"]) == {"a", "b"}

    def test_head_to_head_tie_kills_both(self) -> None:
        # on a 3x3 board both snakes spawn on (1,1)
        result = engine.run_game({"a": always("up"), "b": always("up")}, width=3, height=3, seed=0)
        assert result["winner"] is None
        assert "head-to-head tie" in result["death_reasons"]["a"]

    def test_starvation(self) -> None:
        # both circle in a corner, away from the only (centre) food
        result = engine.run_game(
            {"a": circle(), "b": circle()},
            max_turns=200, food_spawn_chance=0.0, initial_food=0, seed=3,
        )
        assert result["death_reasons"] == {
            "a": "starvation (turn 99)",
            "b": "starvation (turn 99)",
        }
        assert result["turns"] == 100
        assert result["winner"] is None

    def test_seeded_games_are_reproducible(self) -> None:
        strategies = {"a": make_decider("heuristic"), "b": make_decider("heuristic")}
        first = engine.run_game(strategies, seed=42, max_turns=100)
        second = engine.run_game(strategies, seed=42, max_turns=100)
        assert first == second

    def test_verbose_logs_turns(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="food_snake.engine"):
            engine.run_game({"a": always("left"), "b": always("down")}, seed=1, verbose=True)
        assert "Turn 0:" in caplog.text


class TestRunMatch:
    def test_counts_wins(self) -> None:
        result = engine.run_match({"a": always("left"), "b": always("down")}, games=3, seed_base=0)
        assert result["wins"] == {"a": 0, "b": 3}
        assert result["match_winner"] == "b"
        assert result["total_games"] == 3
        assert len(result["games"]) == 3

    def test_heuristic_outlives_wall_runner(self) -> None:
        result = engine.run_match(
            {"heuristic": make_decider("heuristic"), "runner": always("right")},
            games=2, seed_base=7,
        )
        assert result["match_winner"] == "heuristic"


class TestArenaCli:
    def test_match(self, caplog) -> None:
        with caplog.at_level(logging.INFO):
            arena.main(["--games", "2", "--seed", "3", "--max-turns", "60"])
        assert "vs random" in caplog.text
        assert "heuristic wins:" in caplog.text

    def test_ffa(self, caplog) -> None:
        with caplog.at_level(logging.INFO):
            arena.main(["--ffa", "--games", "1", "--seed", "3", "--max-turns", "30"])
        assert "Game 1:" in caplog.text

    def test_rejects_tiny_board(self) -> None:
        with pytest.raises(SystemExit):
            arena.main(["--width", "2"])
