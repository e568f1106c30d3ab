"""
Battlesnake turn handlers.

These sit between the HTTP transport and the pure decision code: they
decode the request, run the safety classifier and the selector, and do
all the logging. Nothing is kept between calls.
"""

import logging

from food_snake.board import GameState, InvalidGameState
from food_snake.config import Settings
from food_snake.safety import classify
from food_snake.selection import FALLBACK_MOVE, Strategy, food_seeking, get_strategy, select

logger = logging.getLogger(__name__)


def info(settings: Settings) -> dict:
    """Appearance and API version, shown when the snake is registered."""
    logger.info("INFO")
    return {
        "apiversion": "1",
        "author": settings.author,
        "color": settings.color,
        "head": settings.head,
        "tail": settings.tail,
    }


def start(data: dict) -> None:
    logger.info("GAME START %s", _game_id(data))


def end(data: dict) -> None:
    logger.info("GAME OVER %s", _game_id(data))


def move(data: dict, strategy: Strategy = food_seeking) -> dict:
    """Handle a /move request and return the response body."""
    try:
        state = GameState.from_dict(data)
    except InvalidGameState as e:
        logger.error("Bad game state (%s), moving %s", e, FALLBACK_MOVE.value)
        return {"move": FALLBACK_MOVE.value}

    safe = classify(state)
    logger.debug("MOVE %d: safe moves %s", state.turn, safe.names())

    if not safe:
        logger.warning("MOVE %d: No safe moves detected! Moving %s", state.turn, FALLBACK_MOVE.value)
        return {"move": FALLBACK_MOVE.value}

    next_move = select(state, safe, strategy)
    logger.info("MOVE %d: %s", state.turn, next_move.value)
    return {"move": next_move.value}


def decide_move(data: dict, strategy: str = "heuristic") -> str:
    """Dict in, move string out: the shape the local arena drives."""
    return move(data, get_strategy(strategy))["move"]


def make_decider(strategy: str):
    """Bind `decide_move` to one named strategy."""
    chosen = get_strategy(strategy)

    def decider(data: dict) -> str:
        return move(data, chosen)["move"]

    decider.__name__ = f"decide_move_{strategy}"
    return decider


def _game_id(data) -> str:
    game = data.get("game") if isinstance(data, dict) else None
    return str(game.get("id", "")) if isinstance(game, dict) else ""
