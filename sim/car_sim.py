# ================================
# file: sim/car_sim.py
# ================================
from __future__ import annotations
from typing import Tuple
import math

from core.types import Coordinate
from core.coords import angle_of
from core.config import MAX_SPEED, CAR_ACCELERATION, CAR_BRAKE, CAR_TURN_DEG_PER_S
from .maze_map import MazeMap


def _tile_index(value: float) -> int:
    # round half up, tile centres sit on integers
    return int(math.floor(value + 0.5))


class CarSim:
    """Kinematic tile-maze car.

    This class is a SIMULATION INTERFACE. Actuation calls only latch a
    request; `step(dt)` integrates them once and clears them, so at most one
    of forward/reverse/brake acts per tick. Steering changes the heading
    immediately at a fixed yaw rate, so the radius of a turn grows with the
    speed it is driven at. Thread-safety: assume single-threaded calls from main loop.
    """
    def __init__(self, maze: MazeMap) -> None:
        self.maze = maze
        self.x: float = float(maze.start.x)
        self.y: float = float(maze.start.y)
        self.angle: float = angle_of(maze.start_heading)
        # signed: > 0 along the heading, < 0 backwards
        self.velocity: float = 0.0
        self._forward = False
        self._reverse = False
        self._brake = False
        self.collisions: int = 0

    # --------- actuation ---------
    def apply_forward_acceleration(self) -> None:
        self._forward = True

    def apply_reverse_acceleration(self) -> None:
        self._reverse = True

    def apply_brake(self) -> None:
        self._brake = True

    def turn_left(self, delta: float) -> None:
        self.angle = (self.angle + CAR_TURN_DEG_PER_S * delta) % 360.0

    def turn_right(self, delta: float) -> None:
        self.angle = (self.angle - CAR_TURN_DEG_PER_S * delta) % 360.0

    # --------- telemetry ---------
    def position(self) -> Coordinate:
        return Coordinate(_tile_index(self.x), _tile_index(self.y))

    def pose(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.angle)

    def speed(self) -> float:
        return abs(self.velocity)

    # --------- integration ---------
    def step(self, dt: float) -> None:
        v = self.velocity
        if self._forward:
            v = v + CAR_ACCELERATION * dt
        elif self._reverse:
            new_v = v - CAR_ACCELERATION * dt
            # reverse thrust stops a forward roll before it drives backwards
            v = 0.0 if v > 0.0 and new_v < 0.0 else new_v
        elif self._brake:
            if v > 0.0:
                v = max(0.0, v - CAR_BRAKE * dt)
            elif v < 0.0:
                v = min(0.0, v + CAR_BRAKE * dt)
        self.velocity = max(-MAX_SPEED, min(MAX_SPEED, v))
        self._forward = self._reverse = self._brake = False

        if self.velocity == 0.0:
            return

        rad = math.radians(self.angle)
        dx = math.cos(rad)
        dy = math.sin(rad)
        nx = self.x + self.velocity * dx * dt
        ny = self.y + self.velocity * dy * dt

        # pull back into the middle of the lane while driving along an axis
        pull = abs(self.velocity) * dt
        if abs(dy) < 0.05:
            ny += max(-pull, min(pull, _tile_index(ny) - ny))
        elif abs(dx) < 0.05:
            nx += max(-pull, min(pull, _tile_index(nx) - nx))

        if self.maze.is_wall(Coordinate(_tile_index(nx), _tile_index(ny))):
            self.velocity = 0.0
            self.collisions += 1
            return
        self.x, self.y = nx, ny
