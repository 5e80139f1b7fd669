# ================================
# file: nav/motion_controller.py
# ================================
from __future__ import annotations
from typing import Dict, List, Optional
from enum import Enum

from core.types import Coordinate, Direction, RelativeDirection, ObservedTile
from core.coords import opposite, left_of, right_of, degrees_misaligned, degrees_to
from core.car_adapter import CarAdapter
from core.config import (
    MAX_SPEED, SPEED_MULTIPLE, SPEED_BUFFER, UTURN_SPEED, SPIN_SPEED,
    THREE_POINT_SPEED, MISALIGNED_THRESHOLD, CAR_TURN_DEG_PER_S,
)
from appio.logger import EventLog, EventKind


class ActionKind(Enum):
    STOP = "STOP"
    GO = "GO"
    TURN = "TURN"
    UTURN = "UTURN"
    THREE_POINT = "THREE_POINT"


class SuspendedAction:
    """An action put aside by a nested one, resumed at the same stage."""
    __slots__ = ("action", "stage")

    def __init__(self, action: ActionKind, stage: int) -> None:
        self.action = action
        self.stage = stage

    def __repr__(self) -> str:
        return f"SuspendedAction({self.action.value}, {self.stage})"


class MotionController:
    """
    Low-level action machine on top of the car's actuation primitives.

    - STOP / GO hold the car straight on a cardinal heading
    - TURN / UTURN / THREE_POINT span many ticks; each compound action
      pushes the running action and pops it back when it completes
    - strategies only get to decide while the car is in STOP or GO
    """
    def __init__(self, car: CarAdapter, event_log: Optional[EventLog] = None) -> None:
        self.car = car
        self.events = event_log if event_log is not None else EventLog()

        self.reversing: bool = False
        self.current_action: ActionKind = ActionKind.GO
        self.action_stack: List[SuspendedAction] = []
        self.action_stage: int = 0
        self.action_direction: Optional[RelativeDirection] = None
        # orientation when the last turn started
        self.previous_orientation: Optional[Direction] = None

        self.current_max_speed: float = MAX_SPEED
        self.previous_max_speed: float = MAX_SPEED

    # --------- telemetry seen by the strategies ---------
    def get_view(self) -> Dict[Coordinate, ObservedTile]:
        return self.car.get_view()

    def get_position(self) -> Coordinate:
        return self.car.get_position()

    def get_velocity(self) -> float:
        return self.car.get_velocity()

    def get_orientation(self) -> Direction:
        """Heading of travel: the opposite of the body heading while reversing."""
        direction = self.car.get_orientation()
        if self.reversing:
            return opposite(direction)
        return direction

    def get_reverse_mode(self) -> bool:
        return self.reversing

    def toggle_reverse_mode(self) -> None:
        self.reversing = not self.reversing

    def is_idle(self) -> bool:
        return self.current_action in (ActionKind.STOP, ActionKind.GO)

    # --------- speed targets ---------
    @property
    def speed_target(self) -> float:
        return self.current_max_speed

    def set_speed_target(self, speed: float) -> None:
        self.previous_max_speed = self.current_max_speed
        self.current_max_speed = min(speed, MAX_SPEED)

    def reset_speed_target(self) -> None:
        self.current_max_speed = self.previous_max_speed

    # --------- intents ---------
    def perform_turn(self, direction: RelativeDirection) -> None:
        """90 degree turn in `direction`, done once the car is square to the next cardinal."""
        self.previous_orientation = self.get_orientation()
        self.action_direction = direction
        self._set_action(ActionKind.TURN)

    def perform_uturn(self, direction: RelativeDirection) -> None:
        """180 degree u-turn made of two turns."""
        self.previous_orientation = self.get_orientation()
        self.action_direction = direction
        self._set_action(ActionKind.UTURN)
        self.set_speed_target(UTURN_SPEED)
        self.action_stage = 0

    def perform_spin(self, direction: RelativeDirection) -> None:
        """A slow u-turn, used to swing around a single isolated obstacle."""
        self.previous_orientation = self.get_orientation()
        self.action_direction = direction
        self._set_action(ActionKind.UTURN)
        self.set_speed_target(SPIN_SPEED)
        self.action_stage = 0

    def perform_three_point_turn(self, direction: RelativeDirection) -> None:
        """180 degree turn: reverse, turn, stop, drive forward, turn."""
        self.previous_orientation = self.get_orientation()
        self.action_direction = direction
        self._set_action(ActionKind.THREE_POINT)
        self.action_stage = 0
        self.set_speed_target(THREE_POINT_SPEED)
        self.toggle_reverse_mode()

    # --------- per tick ---------
    def update(self, delta: float) -> None:
        if self.current_action == ActionKind.STOP:
            self._update_stop(delta)
        elif self.current_action == ActionKind.GO:
            self._update_go(delta)
        elif self.current_action == ActionKind.TURN:
            self._update_turn(delta)
        elif self.current_action == ActionKind.UTURN:
            self._update_uturn(delta)
        elif self.current_action == ActionKind.THREE_POINT:
            self._update_three_point_turn(delta)

    def _update_stop(self, delta: float) -> None:
        self._readjust(delta)
        if self.get_velocity() > 0:
            self.car.apply_brake()

    def _update_go(self, delta: float) -> None:
        self._readjust(delta)
        if self.get_velocity() < self.current_max_speed:
            self._accelerate()
        else:
            self.car.apply_brake()

    def _update_turn(self, delta: float) -> None:
        if self.get_velocity() < self.current_max_speed:
            self._accelerate()
        remaining = degrees_to(self.car.get_angle(), self._turn_target())
        if abs(remaining) <= MISALIGNED_THRESHOLD:
            self._action_done()
            return
        # the last step lands on the cardinal instead of sweeping past it
        self._turn(self.action_direction, min(delta, abs(remaining) / CAR_TURN_DEG_PER_S))

    def _turn_target(self) -> Direction:
        """Body heading that completes the running quarter turn."""
        if self.action_direction == RelativeDirection.LEFT:
            target = left_of(self.previous_orientation)
        else:
            target = right_of(self.previous_orientation)
        return opposite(target) if self.reversing else target

    def _update_uturn(self, delta: float) -> None:
        stage = self.action_stage
        if stage == 0:
            if self.get_velocity() > self.current_max_speed:
                self.car.apply_brake()
            else:
                self.action_stage += 1
        elif stage in (1, 2):
            self.action_stage += 1
            self.perform_turn(self.action_direction)
        elif stage == 3:
            self.reset_speed_target()
            self._action_done()

    def _update_three_point_turn(self, delta: float) -> None:
        stage = self.action_stage
        velocity = self.get_velocity()
        if stage == 0:
            # reverse thrust first cancels the forward roll
            if velocity == 0:
                self.action_stage += 1
            self._accelerate()
        elif stage == 1:
            # reversed far enough once close to the target speed
            if velocity > self.current_max_speed - SPEED_BUFFER:
                self.action_stage += 1
            self._accelerate()
        elif stage == 2:
            if velocity > self.current_max_speed:
                self.car.apply_brake()
            elif velocity < self.current_max_speed * SPEED_MULTIPLE:
                self._accelerate()
            else:
                self.action_stage += 1
                self.perform_turn(self.action_direction)
        elif stage == 3:
            if velocity > 0:
                self.car.apply_brake()
            else:
                self.action_stage += 1
                self.toggle_reverse_mode()
        elif stage == 4:
            if velocity < self.current_max_speed:
                self._accelerate()
            else:
                self.action_stage += 1
        elif stage == 5:
            self.action_stage += 1
            self.perform_turn(self.action_direction)
        elif stage == 6:
            self.reset_speed_target()
            self._action_done()

    # --------- action stack ---------
    def _set_action(self, new_action: ActionKind) -> None:
        self.action_stack.append(SuspendedAction(self.current_action, self.action_stage))
        self.current_action = new_action
        self.events.record("MOTION", EventKind.ACTION,
                           f"{new_action.value} {self.action_direction.value if self.action_direction else ''}".strip(),
                           level="DEBUG")

    def _action_done(self) -> None:
        if not self.action_stack:
            self.current_action = ActionKind.STOP
            return
        resumed = self.action_stack.pop()
        self.current_action = resumed.action
        self.action_stage = resumed.stage

    # --------- actuation helpers ---------
    def _readjust(self, delta: float) -> None:
        """Steer back onto the closest cardinal heading without overshooting."""
        misaligned = degrees_misaligned(self.car.get_angle())
        if abs(misaligned) <= MISALIGNED_THRESHOLD:
            return
        step = min(delta, abs(misaligned) / CAR_TURN_DEG_PER_S)
        if misaligned > 0:
            self.car.turn_left(step)
        else:
            self.car.turn_right(step)

    def _turn(self, direction: Optional[RelativeDirection], delta: float) -> None:
        if direction == RelativeDirection.LEFT:
            self.car.turn_left(delta)
        elif direction == RelativeDirection.RIGHT:
            self.car.turn_right(delta)

    def _accelerate(self) -> None:
        if not self.reversing:
            self.car.apply_forward_acceleration()
        else:
            self.car.apply_reverse_acceleration()
