"""
Safety classifier: which of the four moves don't kill us this turn.

Rules only ever remove directions, starting from all four:
  1. no reversal onto the neck
  2. no stepping off the board
  3. no stepping onto our own body (tail included)
  4. no stepping onto any snake on the board, head included
"""

from typing import Iterable, Iterator

from food_snake.board import Coord, Direction, GameState

_ALL_BITS = sum(d.bit for d in Direction)


class SafeMoves:
    """Fixed-size set of Directions backed by a 4-bit mask.

    Iterates in Direction declaration order (up, down, left, right),
    which is the tie-break priority the selectors rely on.
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: int = _ALL_BITS):
        self._bits = bits & _ALL_BITS

    @classmethod
    def all(cls) -> "SafeMoves":
        return cls(_ALL_BITS)

    @classmethod
    def none(cls) -> "SafeMoves":
        return cls(0)

    @classmethod
    def of(cls, *directions: Direction) -> "SafeMoves":
        bits = 0
        for d in directions:
            bits |= d.bit
        return cls(bits)

    def without(self, direction: Direction) -> "SafeMoves":
        return SafeMoves(self._bits & ~direction.bit)

    def names(self) -> list[str]:
        return [d.value for d in self]

    def __contains__(self, direction: object) -> bool:
        return isinstance(direction, Direction) and bool(self._bits & direction.bit)

    def __iter__(self) -> Iterator[Direction]:
        return (d for d in Direction if self._bits & d.bit)

    def __len__(self) -> int:
        return bin(self._bits).count("1")

    def __bool__(self) -> bool:
        return self._bits != 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeMoves):
            return self._bits == other._bits
        if isinstance(other, (set, frozenset)):
            return set(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._bits)

    def __repr__(self) -> str:
        return f"SafeMoves({', '.join(self.names())})"


def _remove_hits(safe: SafeMoves, head: Coord, cells: Iterable[Coord]) -> SafeMoves:
    """Drop every direction whose neighbor cell is in `cells`."""
    cells = set(cells)
    for direction, cell in head.neighbors().items():
        if cell in cells:
            safe = safe.without(direction)
    return safe


def classify(state: GameState) -> SafeMoves:
    """Return the moves that avoid walls, reversal and every snake body."""
    you = state.you
    board = state.board
    head = you.head
    safe = SafeMoves.all()

    # 1. don't move back onto the neck
    neck = you.neck
    if neck is not None:
        for direction, cell in head.neighbors().items():
            if cell == neck:
                safe = safe.without(direction)

    # 2. walls
    if head.x == 0:
        safe = safe.without(Direction.LEFT)
    if head.x == board.width - 1:
        safe = safe.without(Direction.RIGHT)
    if head.y == 0:
        safe = safe.without(Direction.DOWN)
    if head.y == board.height - 1:
        safe = safe.without(Direction.UP)

    # 3. our own body
    safe = _remove_hits(safe, head, you.body)

    # 4. every snake on the board, ourselves included
    for snake in board.snakes:
        safe = _remove_hits(safe, head, snake.occupied)

    return safe
