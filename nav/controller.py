# ================================
# file: nav/controller.py
# ================================
from __future__ import annotations
from typing import List, Optional
from enum import Enum

from core.types import Coordinate
from core.car_adapter import CarAdapter
from mapping import BeliefMap
from planning import find_path, path_turns
from explore import ExplorerStrategy
from nav.motion_controller import MotionController
from nav.path_follower import PathFollowerStrategy
from appio.logger import EventLog, EventKind


class ControlMode(Enum):
    EXPLORING = "EXPLORING"
    EXITING = "EXITING"


class CarController:
    """
    Per-tick entry point of the car.

    One tick:
    1. merge the current view into the belief map
    2. while the car is idle, let the active strategy decide
    3. when exploring, the exit is known and the explorer left the car
       idle, try to plan a route and start following it at once
    4. run the motion controller
    """
    def __init__(self, car: CarAdapter, event_log: Optional[EventLog] = None) -> None:
        self.car = car
        self.events = event_log if event_log is not None else EventLog()
        self.belief_map = BeliefMap()
        self.motion = MotionController(car, self.events)
        self.explorer = ExplorerStrategy(self.belief_map, self.events)
        self.follower: Optional[PathFollowerStrategy] = None
        self.mode = ControlMode.EXPLORING
        self.path: Optional[List[Coordinate]] = None
        self._exit_reported = False
        self._unreachable_reported = False

    def update(self, delta: float) -> None:
        self.belief_map.update(self.car.get_view())

        if self.motion.is_idle():
            if self.mode == ControlMode.EXPLORING:
                self.explorer.update(self.motion)
                # plan only while the car holds its heading
                if self.motion.is_idle() and self.explorer.should_change_strategy():
                    self._try_switch_to_exit()
            else:
                self.follower.update(self.motion)

        self.motion.update(delta)

    def is_done(self) -> bool:
        return self.follower is not None and self.follower.done

    @property
    def strategy(self):
        if self.mode == ControlMode.EXITING:
            return self.follower
        return self.explorer

    def _try_switch_to_exit(self) -> None:
        position = self.motion.get_position()
        exit_pos = self.belief_map.get_exit()
        if not self._exit_reported:
            self._exit_reported = True
            self.events.record("CTRL", EventKind.EXIT_FOUND, f"exit at {exit_pos}")

        path = find_path(position, exit_pos, self.belief_map)
        if path is None:
            # known tiles do not connect yet, keep exploring and retry
            self.events.record("CTRL", EventKind.EXIT_UNREACHABLE,
                               f"no route {position} -> {exit_pos}",
                               level="DEBUG" if self._unreachable_reported else "INFO")
            self._unreachable_reported = True
            return

        self.path = path
        self.follower = PathFollowerStrategy(path, self.events)
        self.mode = ControlMode.EXITING
        self.events.record("CTRL", EventKind.STRATEGY_SWITCH,
                           f"EXPLORING -> EXITING, {len(path)} tiles, {path_turns(path)} turns")
        self.follower.update(self.motion)
