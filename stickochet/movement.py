"""Slide-until-blocked movement, checkpoint collection and win detection."""

from dataclasses import dataclass
from enum import Enum

from stickochet.board import Board, CellKind, Pos


class Direction(Enum):
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP = (0, -1)
    DOWN = (0, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


# Random walks pick from this tuple by index, so its order is part of the
# generator's deterministic output for a given seed.
DIRECTIONS = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)


@dataclass(frozen=True)
class MoveResult:
    """Outcome of one move: where the token came to rest and what it hit."""

    position: Pos
    distance: int
    collected: bool
    won: bool


def slide(board: Board, start: Pos, direction: Direction) -> Pos:
    """Return the cell a token at *start* comes to rest on.

    The token keeps going while the next cell is not a wall, and stops on
    the first sticky cell it enters.
    """
    x, y = start
    dx, dy = direction.value
    while board[x + dx, y + dy] != CellKind.WALL:
        x += dx
        y += dy
        if board[x, y] == CellKind.STICKY:
            break
    return x, y


def move(board: Board, token: Pos, direction: Direction) -> MoveResult:
    """Slide the token and apply the effects of the cell it lands on.

    A checkpoint under the resting cell becomes collected. Collecting is
    reported once per cell since the cell is no longer tagged as a
    checkpoint afterwards. The caller keeps the checkpoint counter.
    """
    end = slide(board, token, direction)

    collected = False
    if board[end] == CellKind.CHECKPOINT:
        board[end] = CellKind.CHECKPOINT_COLLECTED
        collected = True

    distance = abs(end[0] - token[0]) + abs(end[1] - token[1])
    return MoveResult(
        position=end,
        distance=distance,
        collected=collected,
        won=board[end] == CellKind.GOAL,
    )
