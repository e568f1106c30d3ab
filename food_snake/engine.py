"""
Local Battlesnake game engine for trying strategies offline.

Simulates the standard rules on the same JSON-shaped dicts the real
engine posts to /move:
- 11x11 board by default, (0,0) = bottom-left
- Snakes start stacked three segments deep on a spawn point
- Health starts at 100, decreases by 1 per turn
- Eating food restores health to 100 and grows the snake
- Death on wall collision, starvation, body collision, or head-to-head
  with a longer/equal snake
- Last snake alive wins; on the turn limit the longest survivor wins
"""

import copy
import logging
import random
from typing import Callable

from food_snake.board import Direction

logger = logging.getLogger(__name__)

MoveFunc = Callable[[dict], str]

MAX_HEALTH = 100
START_LENGTH = 3
TIMEOUT_MOVE = "up"

_MOVES = {d.value: d.delta for d in Direction}


def create_snake(snake_id: str, x: int, y: int) -> dict:
    """A fresh snake, all segments stacked on (x, y)."""
    return {
        "id": snake_id,
        "name": snake_id,
        "health": MAX_HEALTH,
        "body": [{"x": x, "y": y} for _ in range(START_LENGTH)],
        "head": {"x": x, "y": y},
        "length": START_LENGTH,
        "shout": "",
    }


def spawn_points(width: int, height: int) -> list[tuple[int, int]]:
    return [
        (1, 1), (width - 2, height - 2),
        (1, height - 2), (width - 2, 1),
        (width // 2, 1), (width // 2, height - 2),
        (1, height // 2), (width - 2, height // 2),
    ]


def spawn_food(board: dict, rng: random.Random, count: int = 1) -> None:
    """Drop up to `count` food on free cells."""
    taken = {(f["x"], f["y"]) for f in board["food"]}
    for snake in board["snakes"]:
        taken.update((seg["x"], seg["y"]) for seg in snake["body"])
    free = [
        (x, y)
        for x in range(board["width"])
        for y in range(board["height"])
        if (x, y) not in taken
    ]
    for x, y in rng.sample(free, min(count, len(free))):
        board["food"].append({"x": x, "y": y})


def make_game_state(board: dict, snake: dict, turn: int, game_id: str = "local") -> dict:
    """The /move request body as `snake` would receive it."""
    return {
        "game": {"id": game_id, "timeout": 500},
        "turn": turn,
        "board": copy.deepcopy(board),
        "you": copy.deepcopy(snake),
    }


def _ask(strategy: MoveFunc, state: dict, snake_id: str, verbose: bool) -> str:
    try:
        move = strategy(state)
    except Exception as e:  # a crashing snake just times out
        if verbose:
            logger.warning("[%s] strategy error: %s", snake_id, e)
        return TIMEOUT_MOVE
    return move if move in _MOVES else TIMEOUT_MOVE


def _advance(snakes: list[dict], moves: dict[str, str]) -> None:
    for snake in snakes:
        dx, dy = _MOVES[moves[snake["id"]]]
        head = {"x": snake["head"]["x"] + dx, "y": snake["head"]["y"] + dy}
        snake["body"].insert(0, head)
        snake["head"] = dict(head)
        snake["health"] -= 1


def _feed(board: dict, snakes: list[dict]) -> bool:
    """Grow snakes that reached food, shrink the rest. True if anything was eaten."""
    food = {(f["x"], f["y"]) for f in board["food"]}
    eaten = set()
    for snake in snakes:
        pos = (snake["head"]["x"], snake["head"]["y"])
        if pos in food:
            snake["health"] = MAX_HEALTH
            snake["length"] += 1
            eaten.add(pos)
        else:
            snake["body"].pop()
    board["food"] = [f for f in board["food"] if (f["x"], f["y"]) not in eaten]
    return bool(eaten)


def _eliminate(board: dict, snakes: list[dict], turn: int) -> dict[str, str]:
    """Death reasons for this turn, keyed by snake id."""
    dead = {}
    w, h = board["width"], board["height"]

    for snake in snakes:
        hx, hy = snake["head"]["x"], snake["head"]["y"]
        if not (0 <= hx < w and 0 <= hy < h):
            dead[snake["id"]] = f"wall collision (turn {turn})"
        elif snake["health"] <= 0:
            dead[snake["id"]] = f"starvation (turn {turn})"

    for snake in snakes:
        if snake["id"] in dead:
            continue
        head = (snake["head"]["x"], snake["head"]["y"])
        for other in snakes:
            if head in {(seg["x"], seg["y"]) for seg in other["body"][1:]}:
                dead[snake["id"]] = f"body collision with {other['id']} (turn {turn})"
                break

    by_head: dict[tuple[int, int], list[dict]] = {}
    for snake in snakes:
        if snake["id"] not in dead:
            by_head.setdefault((snake["head"]["x"], snake["head"]["y"]), []).append(snake)
    for clash in by_head.values():
        if len(clash) < 2:
            continue
        longest = max(s["length"] for s in clash)
        winners = [s for s in clash if s["length"] == longest]
        for snake in clash:
            if snake["length"] < longest:
                dead[snake["id"]] = f"head-to-head loss vs longer snake (turn {turn})"
            elif len(winners) > 1:
                dead[snake["id"]] = f"head-to-head tie (turn {turn})"
    return dead


def run_game(
    strategies: dict[str, MoveFunc],
    width: int = 11,
    height: int = 11,
    max_turns: int = 500,
    seed: int | None = None,
    food_spawn_chance: float = 0.15,
    initial_food: int = 1,
    verbose: bool = False,
) -> dict:
    """
    Play one game to the end.

    Args:
        strategies: snake_id -> decide_move function
        width, height: board dimensions
        max_turns: turn limit
        seed: seed for food placement, for reproducible games
        food_spawn_chance: probability of spawning food each turn
        initial_food: food spawned at random besides the centre one
        verbose: log every turn's moves

    Returns:
        dict with winner, turns, death_reasons, turn_log, final_snakes
    """
    rng = random.Random(seed)
    points = spawn_points(width, height)
    board = {
        "width": width,
        "height": height,
        "food": [{"x": width // 2, "y": height // 2}],
        "hazards": [],
        "snakes": [
            create_snake(sid, *points[i % len(points)])
            for i, sid in enumerate(strategies)
        ],
    }
    spawn_food(board, rng, initial_food)

    death_reasons: dict[str, str] = {}
    turn_log = []

    for turn in range(max_turns):
        alive = board["snakes"]
        if len(alive) <= 1:
            break

        moves = {
            s["id"]: _ask(strategies[s["id"]], make_game_state(board, s, turn), s["id"], verbose)
            for s in alive
        }
        if verbose:
            logger.info("Turn %d: %s", turn, moves)

        _advance(alive, moves)
        ate = _feed(board, alive)
        deaths = _eliminate(board, alive, turn)
        death_reasons.update(deaths)
        board["snakes"] = [s for s in alive if s["id"] not in deaths]

        if ate or rng.random() < food_spawn_chance:
            spawn_food(board, rng)

        turn_log.append({
            "turn": turn,
            "moves": moves,
            "alive": [s["id"] for s in board["snakes"]],
            "deaths": deaths,
        })

    survivors = board["snakes"]
    if len(survivors) == 1:
        winner = survivors[0]["id"]
    elif survivors:
        winner = max(survivors, key=lambda s: s["length"])["id"]
    else:
        winner = None

    return {
        "winner": winner,
        "turns": len(turn_log),
        "death_reasons": death_reasons,
        "turn_log": turn_log,
        "final_snakes": {s["id"]: {"length": s["length"], "health": s["health"]} for s in survivors},
    }


def run_match(
    strategies: dict[str, MoveFunc],
    games: int = 5,
    seed_base: int | None = None,
    verbose: bool = False,
    **kwargs,
) -> dict:
    """Best-of-N: per-strategy win counts, game results and match winner."""
    wins = {sid: 0 for sid in strategies}
    results = []

    for i in range(games):
        seed = (seed_base + i) if seed_base is not None else None
        result = run_game(strategies, seed=seed, verbose=verbose, **kwargs)
        results.append(result)
        if result["winner"]:
            wins[result["winner"]] += 1

    match_winner = max(wins, key=wins.get) if any(wins.values()) else None
    return {
        "match_winner": match_winner,
        "wins": wins,
        "games": results,
        "total_games": games,
    }
