"""
Board model for a single Battlesnake turn.

The engine posts the whole game state as JSON every turn. These frozen
value types are decoded from that payload once and then only read:
(0,0) is bottom-left, y grows upwards.
"""

from dataclasses import dataclass, field
from enum import Enum


class InvalidGameState(ValueError):
    """Raised when a request payload can't be decoded into a GameState."""


class Direction(Enum):
    """The four moves, declared in tie-break priority order."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    @property
    def bit(self) -> int:
        return 1 << _INDEX[self]


_DELTAS = {
    Direction.UP: (0, 1),
    Direction.DOWN: (0, -1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_INDEX = {d: i for i, d in enumerate(Direction)}


@dataclass(frozen=True)
class Coord:
    x: int
    y: int

    def step(self, direction: Direction) -> "Coord":
        """Neighboring cell one move away."""
        dx, dy = direction.delta
        return Coord(self.x + dx, self.y + dy)

    def neighbors(self) -> dict[Direction, "Coord"]:
        return {d: self.step(d) for d in Direction}


def manhattan(a: Coord, b: Coord) -> int:
    """Manhattan distance between two cells."""
    return abs(a.x - b.x) + abs(a.y - b.y)


@dataclass(frozen=True)
class Battlesnake:
    id: str
    name: str
    health: int
    body: tuple[Coord, ...]
    head: Coord

    @property
    def length(self) -> int:
        return len(self.body)

    @property
    def neck(self) -> Coord | None:
        return self.body[1] if len(self.body) > 1 else None

    @property
    def occupied(self) -> frozenset[Coord]:
        """Every cell this snake covers this turn, head included."""
        return frozenset(self.body) | {self.head}


@dataclass(frozen=True)
class Board:
    width: int
    height: int
    food: frozenset[Coord] = frozenset()
    snakes: tuple[Battlesnake, ...] = ()


@dataclass(frozen=True)
class GameState:
    board: Board
    you: Battlesnake
    turn: int = 0
    game_id: str = field(default="", compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> "GameState":
        """Decode the JSON body of a /move (or /start, /end) request."""
        if not isinstance(data, dict):
            raise InvalidGameState("game state must be a JSON object")
        board = _require(data, "board")
        if not isinstance(board, dict):
            raise InvalidGameState("board must be a JSON object")
        you = _parse_snake(_require(data, "you"), "you")
        if not you.body:
            raise InvalidGameState("you.body must not be empty")

        snakes = tuple(
            _parse_snake(s, f"board.snakes[{i}]")
            for i, s in enumerate(_as_list(board.get("snakes", []), "board.snakes"))
        )
        food = frozenset(
            _parse_coord(f, f"board.food[{i}]")
            for i, f in enumerate(_as_list(board.get("food", []), "board.food"))
        )
        game = data.get("game")
        return cls(
            board=Board(
                width=_parse_int(_require(board, "width", "board"), "board.width"),
                height=_parse_int(_require(board, "height", "board"), "board.height"),
                food=food,
                snakes=snakes,
            ),
            you=you,
            turn=_parse_int(data.get("turn", 0), "turn"),
            game_id=str(game.get("id", "")) if isinstance(game, dict) else "",
        )


# ── Wire decoding helpers ─────────────────────────────────────────

def _require(obj: dict, key: str, where: str = ""):
    if not isinstance(obj, dict) or key not in obj:
        path = f"{where}.{key}" if where else key
        raise InvalidGameState(f"missing field {path!r}")
    return obj[key]


def _as_list(value, path: str) -> list:
    if not isinstance(value, list):
        raise InvalidGameState(f"{path} must be a list, got {type(value).__name__}")
    return value


def _parse_int(value, path: str) -> int:
    # bool is an int subclass but never a valid coordinate
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidGameState(f"{path} must be an integer, got {value!r}")
    return value


def _parse_coord(obj, path: str) -> Coord:
    return Coord(
        _parse_int(_require(obj, "x", path), f"{path}.x"),
        _parse_int(_require(obj, "y", path), f"{path}.y"),
    )


def _parse_snake(obj: dict, path: str) -> Battlesnake:
    body = tuple(
        _parse_coord(seg, f"{path}.body[{i}]")
        for i, seg in enumerate(_as_list(_require(obj, "body", path), f"{path}.body"))
    )
    if "head" in obj:
        head = _parse_coord(obj["head"], f"{path}.head")
    elif body:
        head = body[0]
    else:
        raise InvalidGameState(f"{path} has neither head nor body")
    return Battlesnake(
        id=str(obj.get("id", "")),
        name=str(obj.get("name", "")),
        health=_parse_int(obj.get("health", 0), f"{path}.health"),
        body=body,
        head=head,
    )
