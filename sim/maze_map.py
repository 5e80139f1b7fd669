# ================================
# file: sim/maze_map.py
# ================================
from __future__ import annotations
from typing import Dict, List, Optional, Sequence
import json
import numpy as np

from core.types import Coordinate, Direction, ObservedTile
from core.config import (
    WALL_TILE_NAME, ROAD_TILE_NAME, TRAP_TILE_NAME, EXIT_TILE_NAME,
    MAZE_WALL_CHAR, MAZE_ROAD_CHAR, MAZE_TRAP_CHAR, MAZE_EXIT_CHAR, MAZE_START_CHAR,
    CAR_START_HEADING,
)

# Cell codes of the ground-truth grid
ROAD = 0
WALL = 1
TRAP = 2
EXIT = 3

_CHAR_CODES = {
    MAZE_ROAD_CHAR: ROAD,
    MAZE_START_CHAR: ROAD,
    MAZE_WALL_CHAR: WALL,
    MAZE_TRAP_CHAR: TRAP,
    MAZE_EXIT_CHAR: EXIT,
}

_TILES = {
    ROAD: ObservedTile(ROAD_TILE_NAME),
    WALL: ObservedTile(WALL_TILE_NAME),
    TRAP: ObservedTile(TRAP_TILE_NAME, trap=True),
    EXIT: ObservedTile(EXIT_TILE_NAME, exit=True),
}


class MazeMap:
    """Ground-truth tile maze.

    The grid is a numpy array indexed grid[y, x] with +y pointing NORTH, so
    the first ASCII row is the northernmost one. Everything outside the grid
    reads as wall.
    """
    def __init__(self, grid: np.ndarray, start: Coordinate,
                 start_heading: Direction = Direction[CAR_START_HEADING]) -> None:
        self.grid: np.ndarray = grid
        self.height, self.width = grid.shape
        self.start: Coordinate = start
        self.start_heading: Direction = start_heading
        exits = np.argwhere(grid == EXIT)
        # argwhere yields (y, x) rows
        self.exits: List[Coordinate] = [Coordinate(int(x), int(y)) for y, x in exits]
        if not self.in_bounds(start) or self.is_wall(start):
            raise ValueError(f"start {start} is not a drivable tile")

    @classmethod
    def from_rows(cls, rows: Sequence[str], start: Optional[Coordinate] = None,
                  start_heading: Optional[str] = None) -> "MazeMap":
        """Build from ASCII rows, north first. 'S' marks the start unless `start` is given."""
        if not rows:
            raise ValueError("maze has no rows")
        width = len(rows[0])
        if width == 0 or any(len(r) != width for r in rows):
            raise ValueError("maze rows must be non-empty and of equal length")

        height = len(rows)
        grid = np.zeros((height, width), dtype=np.uint8)
        found_start: Optional[Coordinate] = None
        for r, row in enumerate(rows):
            y = height - 1 - r
            for x, ch in enumerate(row):
                if ch not in _CHAR_CODES:
                    raise ValueError(f"unknown maze character {ch!r} at row {r}, column {x}")
                grid[y, x] = _CHAR_CODES[ch]
                if ch == MAZE_START_CHAR:
                    found_start = Coordinate(x, y)

        if start is None:
            start = found_start
        if start is None:
            raise ValueError("maze has no start point")

        heading = Direction[start_heading.upper()] if start_heading else Direction[CAR_START_HEADING]
        return cls(grid, start, heading)

    @classmethod
    def load_from_json(cls, path: str) -> "MazeMap":
        """Load a maze file.

        JSON expected keys:
        - "rows": ["#####", "#S.E#", "#####"] (north first)
        - "start_point": [x, y] (optional, overrides 'S')
        - "start_heading": "EAST" (optional)
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if "rows" not in data:
            raise ValueError(f"{path}: missing 'rows'")
        start = None
        if data.get("start_point") is not None:
            sx, sy = data["start_point"]
            start = Coordinate(sx, sy)
        heading = data.get("start_heading")
        if heading is not None and heading.upper() not in Direction.__members__:
            raise ValueError(f"{path}: bad start_heading {heading!r}")
        return cls.from_rows(data["rows"], start=start, start_heading=heading)

    # --------- queries ---------
    def in_bounds(self, pos: Coordinate) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def cell(self, pos: Coordinate) -> int:
        if not self.in_bounds(pos):
            return WALL
        return int(self.grid[pos.y, pos.x])

    def tile_at(self, pos: Coordinate) -> ObservedTile:
        return _TILES[self.cell(pos)]

    def is_wall(self, pos: Coordinate) -> bool:
        return self.cell(pos) == WALL

    def is_exit(self, pos: Coordinate) -> bool:
        return self.cell(pos) == EXIT

    def view(self, center: Coordinate, radius: int) -> Dict[Coordinate, ObservedTile]:
        """Square window of (2*radius+1)^2 tiles around `center`."""
        out: Dict[Coordinate, ObservedTile] = {}
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                pos = Coordinate(center.x + dx, center.y + dy)
                out[pos] = self.tile_at(pos)
        return out
