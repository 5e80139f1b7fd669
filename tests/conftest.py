from typing import Dict, List, Sequence, Tuple

import pytest

from core.car_adapter import CarAdapter
from core.coords import opposite
from core.types import Coordinate, Direction, ObservedTile
from mapping import BeliefMap

_LEGEND = {
    "#": ObservedTile("Wall"),
    ".": ObservedTile("Road"),
    "S": ObservedTile("Road"),
    "T": ObservedTile("Lava", trap=True),
    "E": ObservedTile("Finish", exit=True),
}


def observed_rows(rows: Sequence[str]) -> Dict[Coordinate, ObservedTile]:
    """ASCII rows (north first) to a view; '?' cells are left out."""
    height = len(rows)
    view: Dict[Coordinate, ObservedTile] = {}
    for r, row in enumerate(rows):
        y = height - 1 - r
        for x, ch in enumerate(row):
            if ch in _LEGEND:
                view[Coordinate(x, y)] = _LEGEND[ch]
    return view


class FakeController:
    """Records the intents a strategy issues."""

    def __init__(self, position: Coordinate, orientation: Direction) -> None:
        self.position = position
        self.body_orientation = orientation
        self.reversing = False
        self.speed_target = 2.0
        self.previous_speed_target = 2.0
        self.intents: List[Tuple[str, object]] = []

    def get_position(self) -> Coordinate:
        return self.position

    def get_orientation(self) -> Direction:
        if self.reversing:
            return opposite(self.body_orientation)
        return self.body_orientation

    def get_reverse_mode(self) -> bool:
        return self.reversing

    def toggle_reverse_mode(self) -> None:
        self.reversing = not self.reversing
        self.intents.append(("TOGGLE_REVERSE", self.reversing))

    def perform_turn(self, direction) -> None:
        self.intents.append(("TURN", direction))

    def perform_uturn(self, direction) -> None:
        self.intents.append(("UTURN", direction))

    def perform_spin(self, direction) -> None:
        self.intents.append(("SPIN", direction))

    def perform_three_point_turn(self, direction) -> None:
        self.intents.append(("THREE_POINT", direction))

    def set_speed_target(self, speed: float) -> None:
        self.previous_speed_target = self.speed_target
        self.speed_target = speed
        self.intents.append(("SPEED", speed))

    def reset_speed_target(self) -> None:
        self.speed_target = self.previous_speed_target
        self.intents.append(("RESET_SPEED", self.speed_target))


class FakeCar(CarAdapter):
    """Scripted car: telemetry is set by the test, actuation is recorded."""

    def __init__(self, position: Coordinate = Coordinate(0, 0), angle: float = 0.0,
                 velocity: float = 0.0, view: Dict[Coordinate, ObservedTile] = None) -> None:
        self.position = position
        self.angle = angle
        self.velocity = velocity
        self.view = view or {}
        self.calls: List[Tuple[str, float]] = []

    def get_view(self) -> Dict[Coordinate, ObservedTile]:
        return dict(self.view)

    def get_position(self) -> Coordinate:
        return self.position

    def get_angle(self) -> float:
        return self.angle

    def get_velocity(self) -> float:
        return self.velocity

    def apply_forward_acceleration(self) -> None:
        self.calls.append(("forward", 0.0))

    def apply_reverse_acceleration(self) -> None:
        self.calls.append(("reverse", 0.0))

    def apply_brake(self) -> None:
        self.calls.append(("brake", 0.0))

    def turn_left(self, delta: float) -> None:
        self.calls.append(("left", delta))

    def turn_right(self, delta: float) -> None:
        self.calls.append(("right", delta))

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def belief_from_rows():
    def _build(rows: Sequence[str]) -> BeliefMap:
        belief = BeliefMap()
        belief.update(observed_rows(rows))
        return belief
    return _build


@pytest.fixture
def make_controller():
    return FakeController


@pytest.fixture
def make_car():
    return FakeCar


@pytest.fixture
def view_from_rows():
    return observed_rows
