"""Grid model: cell kinds on a fixed-size board with a wall border."""

from enum import IntEnum
from typing import Iterator, List, Sequence, Tuple

import numpy as np

Pos = Tuple[int, int]


class CellKind(IntEnum):
    WALL = 0
    EMPTY = 1
    STICKY = 2
    CHECKPOINT = 3
    CHECKPOINT_COLLECTED = 4
    GOAL = 5


# ---------------------------------------------------------------------------
# ASCII layout legend (used by tests and the scripted demo)
# ---------------------------------------------------------------------------
#   # = wall   . = empty   ~ = sticky (goop)
#   c = checkpoint   x = collected checkpoint   G = goal
_CHAR_TO_KIND = {
    "#": CellKind.WALL,
    ".": CellKind.EMPTY,
    "~": CellKind.STICKY,
    "c": CellKind.CHECKPOINT,
    "x": CellKind.CHECKPOINT_COLLECTED,
    "G": CellKind.GOAL,
}
_KIND_TO_CHAR = {kind: ch for ch, kind in _CHAR_TO_KIND.items()}

OBJECTIVES = (CellKind.CHECKPOINT, CellKind.CHECKPOINT_COLLECTED, CellKind.GOAL)


class Board:
    """Dense ``width x height`` grid of :class:`CellKind` tags.

    Indexed as ``board[x, y]`` with ``y`` growing downward. Coordinates are
    trusted: every caller stays inside the wall border, so there is no
    bounds checking here.
    """

    def __init__(self, width: int, height: int, fill: CellKind = CellKind.WALL) -> None:
        if width < 3 or height < 3:
            raise ValueError(f"board must be at least 3x3, got {width}x{height}")
        self.width = width
        self.height = height
        self._cells = np.full((height, width), int(fill), dtype=np.int8)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def __getitem__(self, pos: Pos) -> CellKind:
        x, y = pos
        return CellKind(int(self._cells[y, x]))

    def __setitem__(self, pos: Pos, kind: CellKind) -> None:
        x, y = pos
        self._cells[y, x] = int(kind)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height})"

    @property
    def shape(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def cells(self) -> np.ndarray:
        """Read-only ``(height, width)`` view of the raw tags."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone.width = self.width
        clone.height = self.height
        clone._cells = self._cells.copy()
        return clone

    # ------------------------------------------------------------------
    # Iteration / queries
    # ------------------------------------------------------------------
    def positions(self) -> Iterator[Pos]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def interior(self) -> Iterator[Pos]:
        """Interior coordinates, row by row."""
        for y in range(1, self.height - 1):
            for x in range(1, self.width - 1):
                yield x, y

    def is_border(self, pos: Pos) -> bool:
        x, y = pos
        return x in (0, self.width - 1) or y in (0, self.height - 1)

    def border_intact(self) -> bool:
        c = self._cells
        wall = int(CellKind.WALL)
        return bool(
            (c[0, :] == wall).all()
            and (c[-1, :] == wall).all()
            and (c[:, 0] == wall).all()
            and (c[:, -1] == wall).all()
        )

    def count(self, kind: CellKind) -> int:
        return int(np.count_nonzero(self._cells == int(kind)))

    def find(self, kind: CellKind) -> List[Pos]:
        ys, xs = np.nonzero(self._cells == int(kind))
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    # ------------------------------------------------------------------
    # Mutators used by the generator
    # ------------------------------------------------------------------
    def clear_interior(self) -> None:
        """Walls everywhere, then an open interior."""
        self._cells[:, :] = int(CellKind.WALL)
        self._cells[1:-1, 1:-1] = int(CellKind.EMPTY)

    # ------------------------------------------------------------------
    # ASCII layouts
    # ------------------------------------------------------------------
    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Parse an ASCII layout (see legend above) into a board."""
        if isinstance(rows, str):
            rows = rows.strip().split("\n")
        height = len(rows)
        width = max(len(row) for row in rows)
        board = cls(width, height)
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                try:
                    board[x, y] = _CHAR_TO_KIND[ch]
                except KeyError:
                    raise ValueError(f"unknown cell character {ch!r} at ({x}, {y})") from None
        return board

    def to_rows(self) -> List[str]:
        return [
            "".join(_KIND_TO_CHAR[CellKind(int(v))] for v in row)
            for row in self._cells
        ]
