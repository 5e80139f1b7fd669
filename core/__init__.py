# ================================
# file: core/__init__.py
# ================================
"""
Core Package

Exports fundamental types, configurations, and utilities.
"""
from core.types import Coordinate, Direction, RelativeDirection, ObservedTile
from core.coords import (
    step_of, left_of, right_of, opposite, behind,
    rotate_to_orientation, direction_between, turn_direction,
    orientation_from_angle, degrees_misaligned, angle_of, degrees_to,
)
from core.config import (
    # Maze & sensor configuration
    VIEW_RADIUS, WALL_TILE_NAME,

    # Motion configuration
    MAX_SPEED, UTURN_SPEED, SPIN_SPEED, THREE_POINT_SPEED,

    # Strategy configuration
    WALL_THRESHOLD, TRAP_SPEED, FORWARD_SPEED, REVERSE_SPEED,

    # Loop configuration
    CONTROL_HZ, LOG_LEVEL,
)
from core.car_adapter import CarAdapter

__all__ = [
    # Types
    'Coordinate', 'Direction', 'RelativeDirection', 'ObservedTile',

    # Coordinates
    'step_of', 'left_of', 'right_of', 'opposite', 'behind',
    'rotate_to_orientation', 'direction_between', 'turn_direction',
    'orientation_from_angle', 'degrees_misaligned', 'angle_of', 'degrees_to',

    # Configuration
    'VIEW_RADIUS', 'WALL_TILE_NAME',
    'MAX_SPEED', 'UTURN_SPEED', 'SPIN_SPEED', 'THREE_POINT_SPEED',
    'WALL_THRESHOLD', 'TRAP_SPEED', 'FORWARD_SPEED', 'REVERSE_SPEED',
    'CONTROL_HZ', 'LOG_LEVEL',

    # Adapters
    'CarAdapter',
]
