# ================================
# file: sim/__init__.py
# ================================
"""Simulation world: ground-truth tile maze and a kinematic car.
NOTE: All classes here are SIMULATION INTERFACES. A real car plugs in by
implementing core.car_adapter.CarAdapter with the same method signatures.
"""
from .maze_map import MazeMap
from .car_sim import CarSim
from .sim_car_adapter import SimCarAdapter


__all__ = ["MazeMap", "CarSim", "SimCarAdapter"]
