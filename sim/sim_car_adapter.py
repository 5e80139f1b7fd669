# ================================
# file: sim/sim_car_adapter.py
# ================================
from typing import Dict

from core.car_adapter import CarAdapter
from core.types import Coordinate, ObservedTile
from core.config import VIEW_RADIUS
from sim.car_sim import CarSim


class SimCarAdapter(CarAdapter):
    """Simulated car adapter - wraps CarSim and its maze"""

    def __init__(self, car_sim: CarSim, view_radius: int = VIEW_RADIUS):
        super().__init__()
        self.car_sim = car_sim
        self.view_radius = view_radius

    def get_view(self) -> Dict[Coordinate, ObservedTile]:
        return self.car_sim.maze.view(self.car_sim.position(), self.view_radius)

    def get_position(self) -> Coordinate:
        return self.car_sim.position()

    def get_angle(self) -> float:
        return self.car_sim.angle

    def get_velocity(self) -> float:
        return self.car_sim.speed()

    def apply_forward_acceleration(self) -> None:
        self.car_sim.apply_forward_acceleration()

    def apply_reverse_acceleration(self) -> None:
        self.car_sim.apply_reverse_acceleration()

    def apply_brake(self) -> None:
        self.car_sim.apply_brake()

    def turn_left(self, delta: float) -> None:
        self.car_sim.turn_left(delta)

    def turn_right(self, delta: float) -> None:
        self.car_sim.turn_right(delta)

    def step(self, dt: float) -> None:
        """Advance the simulated physics by one tick."""
        self.car_sim.step(dt)

    @property
    def maze(self):
        return self.car_sim.maze
