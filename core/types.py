# ================================
# file: core/types.py
# ================================
"""Shared data structures for grid positions, headings and sensed tiles.
Use minimal typing: Tuple/Optional only.
"""
from __future__ import annotations
from typing import Tuple
from enum import Enum


class Coordinate:
    """Integer tile position in the maze.

    Attributes
    -----------
    x, y : tiles, +y is NORTH
    """
    __slots__ = ("x", "y")

    def __init__(self, x: int, y: int) -> None:
        object.__setattr__(self, "x", int(x))
        object.__setattr__(self, "y", int(y))

    def __setattr__(self, name, value):
        raise AttributeError("Coordinate is immutable")

    @classmethod
    def parse(cls, text: str) -> "Coordinate":
        """Read the "x,y" form produced by str()."""
        parts = text.split(",")
        if len(parts) != 2:
            raise ValueError(f"not a coordinate: {text!r}")
        return cls(int(parts[0].strip()), int(parts[1].strip()))

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __add__(self, other: "Coordinate") -> "Coordinate":
        return Coordinate(self.x + other.x, self.y + other.y)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"{self.x},{self.y}"

    def __repr__(self) -> str:
        return f"Coordinate({self.x}, {self.y})"


class Direction(Enum):
    NORTH = "NORTH"
    EAST = "EAST"
    SOUTH = "SOUTH"
    WEST = "WEST"


class RelativeDirection(Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class ObservedTile:
    """Tile classification as reported by the environment's view.

    Parameters
    ----------
    name : str
        Tile name, "Wall" for walls.
    trap : bool
        True for trap tiles (lava, mud, ...).
    exit : bool
        True for the utility tile flagged as the exit.
    """
    __slots__ = ("name", "trap", "exit")

    def __init__(self, name: str, trap: bool = False, exit: bool = False) -> None:
        self.name = name
        self.trap = bool(trap)
        self.exit = bool(exit)

    def __repr__(self) -> str:
        return f"ObservedTile({self.name!r}, trap={self.trap}, exit={self.exit})"
