"""
SK01 - Stickochet: slide across generated boards for ARC-AGI-3.

You SLIDE until the next cell is a wall. Purple goop stops you the moment
you touch it. Yellow checkpoints are collected by coming to rest on them;
the green goal clears the level. Every board is generated from the seed,
so a given seed always deals the same sequence of boards.

Controls:
    ACTION1 = Up     ACTION2 = Down     ACTION3 = Left     ACTION4 = Right
    ACTION5 = Next level (only while standing on the goal)
    ACTION7 = Give up (new board, costs one checkpoint)
"""

from typing import Optional

import numpy as np
from arcengine import (
    ARCBaseGame,
    Camera,
    GameAction,
    Level,
    RenderableUserDisplay,
    Sprite,
)
from arcengine.enums import BlockingMode

from stickochet.generator import GeneratorConfig
from stickochet.movement import Direction
from stickochet.render import board_pixels, palette_assets
from stickochet.session import GameSession


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
BACKGROUND_COLOR = 0
PADDING_COLOR = 5

C_COUNTER = 11      # yellow: one pip per collected checkpoint
C_COUNTER_OFF = 3   # dark gray: empty pip slot
C_WON = 14          # green bar while standing on the goal

LEVEL_COUNT = 8
MAX_PIPS = 16

# Resolved at import time: a missing asset name is a startup failure.
ASSETS = palette_assets()

_DIRECTIONS = {
    GameAction.ACTION1: Direction.UP,
    GameAction.ACTION2: Direction.DOWN,
    GameAction.ACTION3: Direction.LEFT,
    GameAction.ACTION4: Direction.RIGHT,
}


# ---------------------------------------------------------------------------
# HUD
# ---------------------------------------------------------------------------
class CheckpointDisplay(RenderableUserDisplay):
    """Checkpoint pips along the top row, win bar along the bottom row."""

    def __init__(self) -> None:
        self.checkpoints = 0
        self.won = False

    def render_interface(self, frame: np.ndarray) -> np.ndarray:
        for i in range(MAX_PIPS):
            x = 1 + i * 4
            color = C_COUNTER if i < self.checkpoints else C_COUNTER_OFF
            frame[0, x: x + 2] = color
        if self.won:
            frame[63, :] = C_WON
        return frame


# ---------------------------------------------------------------------------
# Main game class
# ---------------------------------------------------------------------------
class Sk01(ARCBaseGame):
    """Stickochet — generated slide puzzles, arrow keys plus two actions."""

    def __init__(self, seed: int = 0, config: Optional[GeneratorConfig] = None) -> None:
        self._config = config or GeneratorConfig()
        self._session = GameSession(self._config, seed=seed)
        self._hud = CheckpointDisplay()
        self._board_sprite: Optional[Sprite] = None

        w, h = self._config.width, self._config.height
        levels = [
            Level(sprites=[], grid_size=(w, h), name=f"Board {i + 1}")
            for i in range(LEVEL_COUNT)
        ]

        camera = Camera(
            background=BACKGROUND_COLOR,
            letter_box=PADDING_COLOR,
            width=w,
            height=h,
            interfaces=[self._hud],
        )

        super().__init__(
            game_id="sk01",
            levels=levels,
            camera=camera,
            available_actions=[1, 2, 3, 4, 5, 7],
            seed=seed,
        )

    @property
    def session(self) -> GameSession:
        return self._session

    # ------------------------------------------------------------------
    # Level lifecycle
    # ------------------------------------------------------------------
    def _get_level_index(self) -> int:
        for i, lev in enumerate(self._levels):
            if lev is self.current_level:
                return i
        return 0

    def on_set_level(self, level: Level) -> None:
        # Level 0 is only re-entered on an engine reset: start the run over.
        if self._get_level_index() == 0:
            self._session.restart()
        self._board_sprite = Sprite(
            pixels=self._pixels().tolist(),
            name="board",
            x=0,
            y=0,
            layer=0,
            blocking=BlockingMode.NOT_BLOCKED,
            collidable=False,
        )
        level.add_sprite(self._board_sprite)
        self._sync_hud()

    # ------------------------------------------------------------------
    # Core game loop
    # ------------------------------------------------------------------
    def step(self) -> None:
        aid = self.action.id
        session = self._session

        if aid in _DIRECTIONS:
            session.move(_DIRECTIONS[aid])
        elif aid == GameAction.ACTION5:
            if session.advance():
                self.next_level()
                self.complete_action()
                return
        elif aid == GameAction.ACTION7:
            session.give_up()

        self._refresh_board()
        self._sync_hud()
        self.complete_action()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _pixels(self) -> np.ndarray:
        return board_pixels(self._session.board, self._session.token, ASSETS)

    def _refresh_board(self) -> None:
        if self._board_sprite is None:
            return
        self._board_sprite.pixels[:, :] = self._pixels()

    def _sync_hud(self) -> None:
        self._hud.checkpoints = self._session.checkpoints
        self._hud.won = self._session.won
