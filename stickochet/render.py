"""Turn board state into an ARC palette grid.

Pure read-only helpers: nothing here mutates the board or the session.
"""

from typing import Dict, List, Optional

import numpy as np

from stickochet.assets import AssetIndex, CellAssets
from stickochet.board import Board, CellKind, Pos

FRAME_PX = 64


# ---------------------------------------------------------------------------
# ARC palette indices per asset name
# ---------------------------------------------------------------------------
# 0=white 2=gray 4=charcoal 9=blue 11=yellow 14=green 15=purple
ARC_COLORS: Dict[str, int] = {
    "Wall": 4,
    "Floor": 0,
    "Player": 9,
    "Goop": 15,
    "Checkpoint": 11,
    "CheckpointCollected": 2,
    "Goal": 14,
}


def palette_assets(colors: Optional[Dict[str, int]] = None) -> CellAssets:
    """Resolve the palette into per-kind colours; raises ``AssetError`` on gaps."""
    return CellAssets.resolve(AssetIndex.from_pairs((colors or ARC_COLORS).items()))


def board_pixels(board: Board, token: Optional[Pos], assets: CellAssets) -> np.ndarray:
    """One palette index per cell, ``(height, width)``, token drawn on top."""
    lut = np.zeros(max(CellKind) + 1, dtype=np.int8)
    for kind in CellKind:
        lut[kind] = assets.for_kind(kind)
    pixels = lut[board.cells]
    if token is not None:
        pixels[token[1], token[0]] = assets.player
    return pixels


def cell_edges(cells: int, frame: int = FRAME_PX) -> List[int]:
    """Frame-pixel offsets of the cell boundaries of a ``cells``-wide board.

    The camera scales the board by a whole factor and centres it, so an
    uneven fit leaves a letterbox pad on both sides.
    """
    size = frame // cells
    pad = (frame - size * cells) // 2
    return [pad + i * size for i in range(cells + 1)]
