# ================================
# file: mapping/tile_belief.py
# ================================
from __future__ import annotations
from typing import Optional
from enum import Enum

from core.types import ObservedTile
from core.config import WALL_TILE_NAME


class TileKind(Enum):
    FREE = "FREE"
    WALL = "WALL"
    TRAP = "TRAP"
    EXIT = "EXIT"


class TileBelief:
    """What the car believes about one tile: Unknown, or Known(kind).

    Unknown tiles are treated as blocking, never a trap and never the exit.
    A Known belief is derived once from an observation and never re-derived.
    """
    __slots__ = ("_kind",)

    def __init__(self, kind: Optional[TileKind] = None) -> None:
        self._kind = kind

    @classmethod
    def from_observation(cls, tile: ObservedTile) -> "TileBelief":
        if tile.trap:
            kind = TileKind.TRAP
        elif tile.exit:
            kind = TileKind.EXIT
        elif tile.name == WALL_TILE_NAME:
            kind = TileKind.WALL
        else:
            kind = TileKind.FREE
        return _KNOWN[kind]

    @property
    def kind(self) -> Optional[TileKind]:
        return self._kind

    def known(self) -> bool:
        return self._kind is not None

    def blocking(self) -> bool:
        """Not known to be drivable (FREE or EXIT)."""
        return self._kind not in (TileKind.FREE, TileKind.EXIT)

    def is_trap(self) -> bool:
        return self._kind == TileKind.TRAP

    def is_exit(self) -> bool:
        return self._kind == TileKind.EXIT

    def __eq__(self, other) -> bool:
        if not isinstance(other, TileBelief):
            return NotImplemented
        return self._kind == other._kind

    def __hash__(self) -> int:
        return hash(self._kind)

    def __repr__(self) -> str:
        if self._kind is None:
            return "Unknown"
        return f"Known({self._kind.value})"


UNKNOWN = TileBelief()
_KNOWN = {kind: TileBelief(kind) for kind in TileKind}


def known(kind: TileKind) -> TileBelief:
    """Shared Known(kind) instance."""
    return _KNOWN[kind]
