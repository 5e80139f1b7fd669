# ================================
# file: core/coords.py
# ================================
from __future__ import annotations
from typing import Optional

from core.types import Coordinate, Direction, RelativeDirection
from core.config import (
    EAST_DEGREE_MIN, NORTH_DEGREE, WEST_DEGREE, SOUTH_DEGREE, EAST_DEGREE_MAX
)

# Unit step for each heading, +y is NORTH
_STEPS = {
    Direction.NORTH: Coordinate(0, 1),
    Direction.EAST: Coordinate(1, 0),
    Direction.SOUTH: Coordinate(0, -1),
    Direction.WEST: Coordinate(-1, 0),
}

_LEFT_OF = {
    Direction.NORTH: Direction.WEST,
    Direction.WEST: Direction.SOUTH,
    Direction.SOUTH: Direction.EAST,
    Direction.EAST: Direction.NORTH,
}
_RIGHT_OF = {v: k for k, v in _LEFT_OF.items()}

_HEADING_ANGLES = {
    Direction.EAST: EAST_DEGREE_MIN,
    Direction.NORTH: NORTH_DEGREE,
    Direction.WEST: WEST_DEGREE,
    Direction.SOUTH: SOUTH_DEGREE,
}

_CARDINAL_ANGLES = (
    (EAST_DEGREE_MIN, Direction.EAST),
    (NORTH_DEGREE, Direction.NORTH),
    (WEST_DEGREE, Direction.WEST),
    (SOUTH_DEGREE, Direction.SOUTH),
    (EAST_DEGREE_MAX, Direction.EAST),
)


def step_of(direction: Direction) -> Coordinate:
    """Unit offset of one tile travelled in `direction`."""
    return _STEPS[direction]


def left_of(direction: Direction) -> Direction:
    return _LEFT_OF[direction]


def right_of(direction: Direction) -> Direction:
    return _RIGHT_OF[direction]


def opposite(direction: Direction) -> Direction:
    return _LEFT_OF[_LEFT_OF[direction]]


def rotate_to_orientation(pos: Coordinate, orientation: Direction) -> Coordinate:
    """Rotate an offset given with respect to NORTH into `orientation`.

    Relative (0, 1) is always one tile straight ahead and (-1, 0) one tile
    to the left of a car facing `orientation`.
    """
    x, y = pos.x, pos.y
    if orientation == Direction.EAST:
        return Coordinate(y, -x)
    if orientation == Direction.SOUTH:
        return Coordinate(-x, -y)
    if orientation == Direction.WEST:
        return Coordinate(-y, x)
    return Coordinate(x, y)


def direction_between(a: Coordinate, b: Coordinate) -> Optional[Direction]:
    """Heading of the unit step a -> b, None if the tiles are not 4-neighbours."""
    dx = b.x - a.x
    dy = b.y - a.y
    for direction, step in _STEPS.items():
        if step.x == dx and step.y == dy:
            return direction
    return None


def turn_direction(current: Direction, target: Direction) -> Optional[RelativeDirection]:
    """Relative turn that takes `current` to `target` with one 90 degree rotation."""
    if left_of(current) == target:
        return RelativeDirection.LEFT
    if left_of(target) == current:
        return RelativeDirection.RIGHT
    return None


def behind(pos: Coordinate, orientation: Direction) -> Coordinate:
    """Tile directly behind a car at `pos` facing `orientation`."""
    return pos + step_of(opposite(orientation))


def orientation_from_angle(angle_deg: float) -> Direction:
    """Closest cardinal heading for an angle (EAST=0, NORTH=90, counter-clockwise)."""
    angle = angle_deg % 360.0
    best = Direction.EAST
    best_err = 360.0
    for cardinal, direction in _CARDINAL_ANGLES:
        err = abs(cardinal - angle)
        if err < best_err:
            best, best_err = direction, err
    return best


def degrees_misaligned(angle_deg: float) -> float:
    """Signed degrees from the current angle to the closest cardinal.

    Positive means the car has to rotate counter-clockwise (left).
    """
    current = angle_deg % 360.0
    misaligned = EAST_DEGREE_MAX
    for cardinal, _ in _CARDINAL_ANGLES:
        if abs(cardinal - current) < abs(misaligned):
            misaligned = cardinal - current
    return misaligned


def angle_of(direction: Direction) -> float:
    """Angle in degrees of a cardinal heading."""
    return _HEADING_ANGLES[direction]


def degrees_to(angle_deg: float, direction: Direction) -> float:
    """Signed degrees from `angle_deg` to the heading of `direction`, in (-180, 180].

    Positive means a counter-clockwise (left) rotation.
    """
    diff = (angle_of(direction) - angle_deg) % 360.0
    if diff > 180.0:
        diff -= 360.0
    return diff
