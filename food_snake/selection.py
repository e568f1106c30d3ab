"""
Move selection strategies.

A strategy takes the game state and a non-empty SafeMoves and returns one
Direction. `select` handles the empty case itself, so strategies never
see it.
"""

import random
from typing import Callable

from food_snake.board import Coord, Direction, GameState, manhattan
from food_snake.safety import SafeMoves

Strategy = Callable[[GameState, SafeMoves], Direction]

FALLBACK_MOVE = Direction.DOWN


def distance_to_closest_food(cell: Coord, state: GameState) -> int:
    """Manhattan distance from `cell` to the nearest food.

    With no food on the board every cell gets width + height, so all
    candidate moves tie.
    """
    board = state.board
    result = board.width + board.height
    for food in board.food:
        result = min(result, manhattan(cell, food))
    return result


# ── Strategy 1: Food seeking ──────────────────────────────────────
# Steps towards the nearest food. Ties go to the first direction in
# up, down, left, right order.

def food_seeking(state: GameState, safe: SafeMoves) -> Direction:
    head = state.you.head
    best_move = None
    best_distance = None
    for move in safe:
        distance = distance_to_closest_food(head.step(move), state)
        if best_distance is None or distance < best_distance:
            best_move, best_distance = move, distance
    return best_move


# ── Strategy 2: Uniform random ────────────────────────────────────

def uniform_random(state: GameState, safe: SafeMoves, rng: random.Random | None = None) -> Direction:
    return (rng or random).choice(list(safe))


STRATEGIES: dict[str, Strategy] = {
    "heuristic": food_seeking,
    "random": uniform_random,
}


def get_strategy(name: str) -> Strategy:
    try:
        return STRATEGIES[name]
    except KeyError:
        known = ", ".join(sorted(STRATEGIES))
        raise ValueError(f"unknown selection strategy {name!r} (choose from: {known})") from None


def select(state: GameState, safe: SafeMoves, strategy: Strategy = food_seeking) -> Direction:
    """Pick one move; falls back to `down` when nothing is safe."""
    if not safe:
        return FALLBACK_MOVE
    return strategy(state, safe)
