"""Name-keyed asset lookup for the seven things a board is drawn with."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple

from stickochet.board import CellKind
from stickochet.errors import AssetError

REQUIRED_NAMES = (
    "Wall",
    "Floor",
    "Player",
    "Goop",
    "Checkpoint",
    "CheckpointCollected",
    "Goal",
)

_KIND_NAMES = {
    CellKind.WALL: "Wall",
    CellKind.EMPTY: "Floor",
    CellKind.STICKY: "Goop",
    CellKind.CHECKPOINT: "Checkpoint",
    CellKind.CHECKPOINT_COLLECTED: "CheckpointCollected",
    CellKind.GOAL: "Goal",
}


class AssetIndex:
    """Maps asset names to opaque handles (sprites, colours, meshes...)."""

    def __init__(self) -> None:
        self._handles: Dict[str, Any] = {}

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Any]]) -> "AssetIndex":
        index = cls()
        for name, handle in pairs:
            index.add(name, handle)
        return index

    def add(self, name: str, handle: Any) -> None:
        if not name:
            raise AssetError("asset name must not be empty")
        if name in self._handles:
            raise AssetError(f"duplicate name in index: {name!r}")
        self._handles[name] = handle

    def lookup(self, name: str) -> Any:
        try:
            return self._handles[name]
        except KeyError:
            raise AssetError(f"asset named {name!r} does not appear in index") from None

    def __contains__(self, name: str) -> bool:
        return name in self._handles

    def __len__(self) -> int:
        return len(self._handles)


@dataclass(frozen=True)
class CellAssets:
    """Handles resolved once at startup, one per cell kind plus the player."""

    cells: Dict[CellKind, Any]
    player: Any

    @classmethod
    def resolve(cls, index: AssetIndex) -> "CellAssets":
        # Look everything up first so a broken index fails before any drawing.
        handles = {name: index.lookup(name) for name in REQUIRED_NAMES}
        return cls(
            cells={kind: handles[name] for kind, name in _KIND_NAMES.items()},
            player=handles["Player"],
        )

    def for_kind(self, kind: CellKind) -> Any:
        return self.cells[kind]
