"""Procedural board generator.

Boards are built in a fixed order: a walled rectangle with an open
interior, a handful of random walls, a few sticky "goop" cells, and then a
chain of objectives. Each objective is chosen among the cells that a random
player starting from the previous objective rarely lands on, so the chain
gets placed on spots that are hard to stumble into but are known to be
reachable with slide moves. The last objective of the chain is the goal.

All randomness comes from the ``random.Random`` handed to the generator.
The same stream position always yields the same board.
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from stickochet.board import Board, CellKind, Pos
from stickochet.errors import GenerationError
from stickochet.movement import DIRECTIONS, slide

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
BOARD_SIZE = (10, 10)
WALL_RANGE = (2, 9)        # inclusive
STICKY_RANGE = (0, 3)      # inclusive
OBJECTIVES = 2             # checkpoints + the final goal
WALKS = 100
WALK_STEPS = 20
QUANTILE = 4               # pick from the hardest quarter of candidates
MAX_ATTEMPTS = 1000

# Cells that can never receive a new objective.
_OCCUPIED = (CellKind.CHECKPOINT, CellKind.GOAL, CellKind.STICKY)


@dataclass(frozen=True)
class GeneratorConfig:
    width: int = BOARD_SIZE[0]
    height: int = BOARD_SIZE[1]
    wall_range: Tuple[int, int] = WALL_RANGE
    sticky_range: Tuple[int, int] = STICKY_RANGE
    objectives: int = OBJECTIVES
    walks: int = WALKS
    walk_steps: int = WALK_STEPS
    quantile: int = QUANTILE
    max_attempts: int = MAX_ATTEMPTS

    def __post_init__(self) -> None:
        if self.width < 3 or self.height < 3:
            raise ValueError(f"board must be at least 3x3, got {self.width}x{self.height}")
        for name in ("wall_range", "sticky_range"):
            lo, hi = getattr(self, name)
            if lo < 0 or hi < lo:
                raise ValueError(f"{name} must be a non-negative (low, high) pair, got {(lo, hi)}")
        if self.objectives < 1:
            raise ValueError("objectives must be at least 1")
        if self.quantile < 1 or self.max_attempts < 1:
            raise ValueError("quantile and max_attempts must be positive")

    @property
    def center(self) -> Pos:
        return self.width // 2, self.height // 2


@dataclass
class Generated:
    board: Board
    token: Pos
    goal_count: int


# ---------------------------------------------------------------------------
# Difficulty estimation
# ---------------------------------------------------------------------------
def simulate_visits(
    board: Board,
    origin: Pos,
    rng: random.Random,
    walks: int = WALKS,
    steps: int = WALK_STEPS,
) -> np.ndarray:
    """Run random slide-walks from *origin* and count where they rest.

    Returns a ``(height, width)`` array; every step of every walk adds one
    to the cell the walk stopped on.
    """
    counts = np.zeros((board.height, board.width), dtype=np.int64)
    for _ in range(walks):
        at = origin
        for _ in range(steps):
            at = slide(board, at, DIRECTIONS[rng.randrange(4)])
            counts[at[1], at[0]] += 1
    return counts


def pick_difficult(
    candidates: Sequence[Pos],
    counts: np.ndarray,
    rng: random.Random,
    quantile: int = QUANTILE,
) -> Pos:
    """Pick uniformly among the least-visited ``1/quantile`` of *candidates*.

    Candidates are stable-sorted by visit count, and the cutoff is pushed
    forward so it never splits a group of equal counts.
    """
    ranked = sorted(candidates, key=lambda p: counts[p[1], p[0]])
    limit = max(1, len(ranked) // quantile)
    while limit < len(ranked) and _count(counts, ranked[limit]) == _count(counts, ranked[limit - 1]):
        limit += 1
    return ranked[rng.randrange(limit)]


def _count(counts: np.ndarray, pos: Pos) -> int:
    return int(counts[pos[1], pos[0]])


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
class BoardGenerator:
    """Builds fresh boards from a continuously advancing random stream."""

    def __init__(self, config: Optional[GeneratorConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or GeneratorConfig()
        self.rng = rng if rng is not None else random.Random()

    def generate(self, token: Optional[Pos] = None) -> Generated:
        """Generate a board for a token resting at *token*.

        Attempts that place no objective at all are thrown away and the
        whole board is rebuilt from the same stream. Raises
        :class:`GenerationError` once ``max_attempts`` have failed.
        """
        cfg = self.config
        if token is None:
            token = cfg.center

        for attempt in range(1, cfg.max_attempts + 1):
            board = Board(cfg.width, cfg.height)
            self._place_terrain(board, token)
            placed = self._place_objectives(board, token)
            if placed:
                goal = placed[-1]
                board[goal] = CellKind.GOAL
                logger.debug(
                    "Generated %dx%d board on attempt %d: %d objective(s), goal at %s",
                    cfg.width, cfg.height, attempt, len(placed), goal,
                )
                return Generated(board=board, token=token, goal_count=len(placed))
            logger.warning("Attempt %d placed no objectives, regenerating", attempt)

        raise GenerationError(
            f"no board with a reachable objective after {cfg.max_attempts} attempts "
            f"({cfg.width}x{cfg.height}, token at {token})"
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def _random_interior(self, board: Board) -> Pos:
        return (
            self.rng.randint(1, board.width - 2),
            self.rng.randint(1, board.height - 2),
        )

    def _place_terrain(self, board: Board, token: Pos) -> None:
        cfg = self.config
        board.clear_interior()

        # Walls may land on each other; only the token's cell is spared.
        for _ in range(self.rng.randint(*cfg.wall_range)):
            pos = self._random_interior(board)
            if pos == token:
                continue
            board[pos] = CellKind.WALL

        for _ in range(self.rng.randint(*cfg.sticky_range)):
            pos = self._random_interior(board)
            if board[pos] != CellKind.WALL:
                board[pos] = CellKind.STICKY

    def _candidates(self, board: Board, counts: np.ndarray, token: Pos) -> List[Pos]:
        return [
            pos
            for pos in board.interior()
            if pos != token
            and board[pos] not in _OCCUPIED
            and counts[pos[1], pos[0]] > 0
        ]

    def _place_objectives(self, board: Board, token: Pos) -> List[Pos]:
        cfg = self.config
        placed: List[Pos] = []
        origin = token
        while len(placed) < cfg.objectives:
            counts = simulate_visits(board, origin, self.rng, cfg.walks, cfg.walk_steps)
            candidates = self._candidates(board, counts, token)
            if not candidates:
                logger.debug("No candidate cells left after %d objective(s)", len(placed))
                break
            pos = pick_difficult(candidates, counts, self.rng, cfg.quantile)
            board[pos] = CellKind.CHECKPOINT
            placed.append(pos)
            origin = pos
        return placed
