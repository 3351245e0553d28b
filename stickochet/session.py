"""Level lifecycle for one player: moves, give-ups and level advances."""

import logging
import random
from typing import Optional

from stickochet.board import Board, CellKind, Pos
from stickochet.generator import BoardGenerator, GeneratorConfig
from stickochet.movement import Direction, MoveResult, move

logger = logging.getLogger(__name__)

DEFAULT_SEED = 0xBEAD1234


class GameSession:
    """Owns the board, the token, the checkpoint counter and the RNG.

    The random stream is seeded once and then only ever advanced, so
    successive levels differ while a given seed replays the same game.
    The checkpoint counter survives regeneration: giving up costs one
    checkpoint, advancing after a win leaves it alone.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        seed: int = DEFAULT_SEED,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.generator = BoardGenerator(self.config, self.rng)

        self._token: Pos = self.config.center
        self._checkpoints = 0
        self._level = 1
        self._won = False
        self._board: Optional[Board] = None
        self._goal_count = 0
        self._regenerate()

    # ------------------------------------------------------------------
    # State read by the renderer
    # ------------------------------------------------------------------
    @property
    def board(self) -> Board:
        return self._board

    @property
    def token(self) -> Pos:
        return self._token

    @property
    def won(self) -> bool:
        return self._won

    @property
    def checkpoints(self) -> int:
        return self._checkpoints

    @property
    def level(self) -> int:
        return self._level

    @property
    def goal_count(self) -> int:
        """Objectives placed on the current board, goal included."""
        return self._goal_count

    @property
    def remaining_checkpoints(self) -> int:
        return self._board.count(CellKind.CHECKPOINT)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def move(self, direction: Direction) -> MoveResult:
        result = move(self._board, self._token, direction)
        self._token = result.position
        if result.collected:
            self._checkpoints += 1
            logger.info("Collected checkpoint at %s (total %d)", result.position, self._checkpoints)
        self._won = result.won
        if result.won:
            logger.info("Level %d cleared at %s", self._level, result.position)
        return result

    def give_up(self) -> None:
        if self._checkpoints > 0:
            self._checkpoints -= 1
        logger.info("Gave up on level %d, checkpoints now %d", self._level, self._checkpoints)
        self._regenerate()

    def advance(self) -> bool:
        """Start the next level; only allowed while standing on the goal."""
        if not self._won:
            logger.info("Advance ignored: level %d not cleared", self._level)
            return False
        self._level += 1
        self._regenerate()
        return True

    def restart(self) -> None:
        """Go back to level 1 with the stream reseeded, as a fresh session."""
        self.rng.seed(self.seed)
        self._token = self.config.center
        self._checkpoints = 0
        self._level = 1
        self._regenerate()

    def load(self, board: Board, token: Pos) -> None:
        """Replace the current level with a prepared board.

        The board must match the configured size and the token must sit
        inside the border, since later levels are generated around it.
        """
        if board.shape != (self.config.width, self.config.height):
            raise ValueError(
                f"board is {board.width}x{board.height}, "
                f"expected {self.config.width}x{self.config.height}"
            )
        x, y = token
        if not (0 <= x < board.width and 0 <= y < board.height) or board.is_border(token):
            raise ValueError(f"token {token} is not inside the board")
        if board[token] == CellKind.WALL:
            raise ValueError(f"token {token} is inside a wall")
        self._board = board
        self._token = token
        self._goal_count = board.count(CellKind.CHECKPOINT) + board.count(CellKind.GOAL)
        self._won = board[token] == CellKind.GOAL

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _regenerate(self) -> None:
        generated = self.generator.generate(self._token)
        self._board = generated.board
        self._token = generated.token
        self._goal_count = generated.goal_count
        self._won = False
        logger.info(
            "Level %d: %dx%d board, %d objective(s), token at %s",
            self._level, self._board.width, self._board.height,
            self._goal_count, self._token,
        )
