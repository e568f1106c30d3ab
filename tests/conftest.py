"""Shared game-state builders for the test suite."""

import pytest

from food_snake.board import GameState


def snake_dict(snake_id: str, body: list[tuple[int, int]], health: int = 90) -> dict:
    segments = [{"x": x, "y": y} for x, y in body]
    return {
        "id": snake_id,
        "name": snake_id,
        "health": health,
        "body": segments,
        "head": dict(segments[0]),
        "length": len(segments),
    }


def state_dict(
    body: list[tuple[int, int]],
    width: int = 11,
    height: int = 11,
    food: list[tuple[int, int]] = (),
    others: list[list[tuple[int, int]]] = (),
    turn: int = 7,
    include_self: bool = True,
) -> dict:
    """A /move request body with `body` as our snake."""
    you = snake_dict("you", body)
    snakes = [you] if include_self else []
    snakes += [snake_dict(f"other-{i}", b) for i, b in enumerate(others)]
    return {
        "game": {"id": "game-1", "timeout": 500},
        "turn": turn,
        "board": {
            "width": width,
            "height": height,
            "food": [{"x": x, "y": y} for x, y in food],
            "hazards": [],
            "snakes": snakes,
        },
        "you": you,
    }


def make_state(body, **kwargs) -> GameState:
    return GameState.from_dict(state_dict(body, **kwargs))


@pytest.fixture
def example_state() -> GameState:
    """11x11, head (5,5) came up from (5,4), food at (8,5) and (1,1)."""
    return make_state([(5, 5), (5, 4), (5, 3)], food=[(8, 5), (1, 1)])
