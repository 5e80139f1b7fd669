# ================================
# file: core/car_adapter.py
# ================================
from abc import ABC, abstractmethod
from typing import Dict

from core.types import Coordinate, Direction, ObservedTile
from core.coords import orientation_from_angle


class CarAdapter(ABC):
    """Car adapter base class - the only seam between the controller and the
    environment (telemetry, bounded view, actuation).

    All actuation is rate limited by the environment's physics.
    """

    @abstractmethod
    def get_view(self) -> Dict[Coordinate, ObservedTile]:
        """Bounded window of observed tiles centred on the car."""
        pass

    @abstractmethod
    def get_position(self) -> Coordinate:
        """Current discrete grid position."""
        pass

    @abstractmethod
    def get_angle(self) -> float:
        """Current continuous heading in degrees (EAST=0, NORTH=90)."""
        pass

    @abstractmethod
    def get_velocity(self) -> float:
        """Current speed (magnitude, never negative)."""
        pass

    @abstractmethod
    def apply_forward_acceleration(self) -> None:
        pass

    @abstractmethod
    def apply_reverse_acceleration(self) -> None:
        pass

    @abstractmethod
    def apply_brake(self) -> None:
        pass

    @abstractmethod
    def turn_left(self, delta: float) -> None:
        pass

    @abstractmethod
    def turn_right(self, delta: float) -> None:
        pass

    def get_orientation(self) -> Direction:
        """Cardinal heading of the car body (ignores reverse mode)."""
        return orientation_from_angle(self.get_angle())
