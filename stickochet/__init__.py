"""Stickochet: a sliding-token puzzle with generated boards."""

from stickochet.assets import AssetIndex, CellAssets
from stickochet.board import Board, CellKind
from stickochet.errors import AssetError, GenerationError, StickochetError
from stickochet.generator import BoardGenerator, Generated, GeneratorConfig
from stickochet.movement import Direction, MoveResult, move, slide
from stickochet.session import DEFAULT_SEED, GameSession

__all__ = [
    "AssetError",
    "AssetIndex",
    "Board",
    "BoardGenerator",
    "CellAssets",
    "CellKind",
    "DEFAULT_SEED",
    "Direction",
    "GameSession",
    "Generated",
    "GenerationError",
    "GeneratorConfig",
    "MoveResult",
    "StickochetError",
    "move",
    "slide",
]
