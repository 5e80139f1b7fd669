# ================================
# file: nav/path_follower.py
# ================================
from __future__ import annotations
from typing import List, Optional, Sequence

from core.types import Coordinate
from core.coords import direction_between, turn_direction, behind
from core.config import FORWARD_SPEED, REVERSE_SPEED
from appio.logger import EventLog, EventKind


class PathFollowerStrategy:
    """Drive along a fixed tile path to its last waypoint and stop there.

    Decisions are made only when the car enters a new tile. A car that does
    not face the first leg reverses; when the tile behind it is not the next
    waypoint it backs up one tile first so there is room to turn.
    """
    def __init__(self, path: Sequence[Coordinate], event_log: Optional[EventLog] = None) -> None:
        self.path: List[Coordinate] = list(path)
        self.events = event_log if event_log is not None else EventLog()

        self.path_index: int = 0
        self.current_position: Optional[Coordinate] = None
        self.initialised: bool = False
        self.backing_up: bool = False
        self.backing_up_target: Optional[Coordinate] = None
        self.done_target: Optional[Coordinate] = self.path[-1] if self.path else None
        self.done: bool = len(self.path) < 2

    def update(self, controller) -> None:
        if self.done:
            return
        if not self.initialised:
            self._initialise_with_controller(controller)
            return

        if not self._position_changed(controller):
            return

        if self.backing_up:
            if self.current_position == self.backing_up_target:
                controller.toggle_reverse_mode()
                self._regulate_speed(controller)
                self.backing_up = False
            return

        if self.current_position == self.done_target:
            controller.set_speed_target(0)
            self.done = True
            self.events.record("EXIT", EventKind.PATH_DONE, f"reached {self.current_position}")
            return

        if self.current_position == self._peek():
            self.path_index += 1
        self._follow(controller)

    def should_change_strategy(self) -> bool:
        return False

    # --------- internals ---------
    def _initialise_with_controller(self, controller) -> None:
        self.initialised = True
        self.current_position = controller.get_position()

        current_dir = controller.get_orientation()
        start_dir = direction_between(self.path[0], self.path[1])
        if start_dir is None:
            self._report_malformed(self.path[0], self.path[1])
        elif current_dir != start_dir:
            self.backing_up_target = behind(self.current_position, current_dir)
            controller.toggle_reverse_mode()
            # reversing the whole way when the next waypoint is right behind
            if self.backing_up_target != self.path[1]:
                self.backing_up = True

        self._regulate_speed(controller)

        if self.current_position != self.path[0]:
            self.events.record("EXIT", EventKind.NOT_ON_PATH_START,
                               f"car at {self.current_position}, path starts at {self.path[0]}",
                               level="ERROR")

    def _follow(self, controller) -> None:
        """Turn onto the next leg when the car stands on the current waypoint."""
        if self.backing_up or self.path_index + 1 >= len(self.path):
            return
        here = self.path[self.path_index]
        if self.current_position != here:
            return

        required = direction_between(here, self.path[self.path_index + 1])
        if required is None:
            self._report_malformed(here, self.path[self.path_index + 1])
            return

        current = controller.get_orientation()
        if current == required:
            return
        turn = turn_direction(current, required)
        if turn is None:
            self.events.record("EXIT", EventKind.BAD_TURN,
                               f"can't turn from {current.value} to {required.value}",
                               level="ERROR")
            return
        controller.perform_turn(turn)

    def _position_changed(self, controller) -> bool:
        new_position = controller.get_position()
        if new_position != self.current_position:
            self.current_position = new_position
            return True
        return False

    def _regulate_speed(self, controller) -> None:
        if controller.get_reverse_mode():
            controller.set_speed_target(REVERSE_SPEED)
        else:
            controller.set_speed_target(FORWARD_SPEED)

    def _peek(self) -> Optional[Coordinate]:
        if self.path_index + 1 < len(self.path):
            return self.path[self.path_index + 1]
        return None

    def _report_malformed(self, a: Coordinate, b: Coordinate) -> None:
        self.events.record("EXIT", EventKind.MALFORMED_PATH,
                           f"no unit step between {a} and {b}", level="ERROR")
