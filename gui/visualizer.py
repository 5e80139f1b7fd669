# ================================
# file: gui/visualizer.py
# ================================
from __future__ import annotations
from typing import Optional, Sequence, Tuple
import numpy as np
import matplotlib.pyplot as plt

from core.types import Coordinate
from core.config import (
    GUI_UNKNOWN_VALUE, GUI_FREE_VALUE, GUI_WALL_VALUE, GUI_TRAP_VALUE, GUI_EXIT_VALUE,
)
from mapping import BeliefMap, TileKind
from sim.maze_map import MazeMap, ROAD, WALL, TRAP, EXIT

_KIND_VALUES = {
    TileKind.FREE: GUI_FREE_VALUE,
    TileKind.WALL: GUI_WALL_VALUE,
    TileKind.TRAP: GUI_TRAP_VALUE,
    TileKind.EXIT: GUI_EXIT_VALUE,
}

_CELL_VALUES = {
    ROAD: GUI_FREE_VALUE,
    WALL: GUI_WALL_VALUE,
    TRAP: GUI_TRAP_VALUE,
    EXIT: GUI_EXIT_VALUE,
}


def belief_image(belief_map: BeliefMap,
                 bounds: Optional[Tuple[int, int, int, int]] = None) -> np.ndarray:
    """Grey-level image of the belief map indexed [y - ymin, x - xmin].

    `bounds` is (xmin, xmax, ymin, ymax), inclusive; defaults to the extent
    of every recorded coordinate. Unknown and unrecorded tiles share one
    grey level.
    """
    if bounds is None:
        bounds = belief_map.bounds()
    if bounds is None:
        return np.full((1, 1), GUI_UNKNOWN_VALUE, dtype=float)
    xmin, xmax, ymin, ymax = bounds
    img = np.full((ymax - ymin + 1, xmax - xmin + 1), GUI_UNKNOWN_VALUE, dtype=float)
    for y in range(ymin, ymax + 1):
        for x in range(xmin, xmax + 1):
            tile = belief_map.lookup(Coordinate(x, y))
            if tile is not None and tile.known():
                img[y - ymin, x - xmin] = _KIND_VALUES[tile.kind]
    return img


def maze_image(maze: MazeMap) -> np.ndarray:
    """Ground-truth grid in the same grey levels as belief_image."""
    img = np.full(maze.grid.shape, GUI_UNKNOWN_VALUE, dtype=float)
    for code, value in _CELL_VALUES.items():
        img[maze.grid == code] = value
    return img


class Visualizer:
    """Matplotlib-based 2-pane viewer: ground truth and the car's belief."""

    def __init__(self, maze_map: Optional[MazeMap] = None, logger_func=None, log_file=None) -> None:
        self.maze_map = maze_map
        self.logger_func = logger_func
        self.log_file = log_file
        self._update_count = 0

        self.fig, (self.axL, self.axR) = plt.subplots(1, 2, figsize=(12, 6))
        plt.ion()

        # Left: ground truth
        if maze_map is not None:
            self.bounds: Optional[Tuple[int, int, int, int]] = (0, maze_map.width - 1, 0, maze_map.height - 1)
            self.imL = self.axL.imshow(maze_image(maze_map), cmap="gray", origin="lower",
                                       vmin=0.0, vmax=1.0, extent=self._extent(self.bounds))
            self.axL.set_title(f"Ground Truth - Maze {maze_map.width}x{maze_map.height}",
                               fontsize=12, fontweight='bold')
        else:
            self.bounds = None
            self.imL = None
            self.axL.set_title("Ground Truth", fontsize=12, fontweight='bold')

        # Right: belief map, extent follows the explored area when there is no maze
        self.imR = self.axR.imshow(np.full((1, 1), GUI_UNKNOWN_VALUE), cmap="gray", origin="lower",
                                   vmin=0.0, vmax=1.0)
        self.axR.set_title("Belief Map", fontsize=12, fontweight='bold')

        self.carL, = self.axL.plot([], [], 'ro', ms=6)
        self.carR, = self.axR.plot([], [], 'ro', ms=6)
        self.pathR, = self.axR.plot([], [], 'b-', lw=2, alpha=0.7)
        self.exitR, = self.axR.plot([], [], 'g*', ms=12)

    @staticmethod
    def _extent(bounds: Tuple[int, int, int, int]):
        # tile centres sit on integers
        xmin, xmax, ymin, ymax = bounds
        return [xmin - 0.5, xmax + 0.5, ymin - 0.5, ymax + 0.5]

    def update(self, belief_map: BeliefMap, car_xy: Tuple[float, float],
               path: Optional[Sequence[Coordinate]] = None, mode: str = "") -> None:
        """Redraw the belief map, the car and the planned route."""
        self._update_count += 1
        bounds = self.bounds or belief_map.bounds()
        if bounds is not None:
            self.imR.set_data(belief_image(belief_map, bounds))
            self.imR.set_extent(self._extent(bounds))

        cx, cy = car_xy
        self.carL.set_data([cx], [cy])
        self.carR.set_data([cx], [cy])

        if path:
            self.pathR.set_data([p.x for p in path], [p.y for p in path])
        else:
            self.pathR.set_data([], [])

        exit_pos = belief_map.get_exit()
        if exit_pos is not None:
            self.exitR.set_data([exit_pos.x], [exit_pos.y])

        self.axR.set_title(f"Belief Map [{mode}] - {len(belief_map.known_coordinates())} tiles known",
                           fontsize=12, fontweight='bold')
        self.fig.canvas.draw()
        self.fig.canvas.flush_events()

    def save(self, path: str) -> None:
        self.fig.savefig(path, dpi=100)

    def close(self) -> None:
        plt.close(self.fig)
