# ================================
# file: explore/wall_follower.py
# ================================
from __future__ import annotations
from typing import Optional
from enum import Enum

from core.types import Coordinate, Direction, RelativeDirection
from core.config import WALL_THRESHOLD, TRAP_SPEED
from mapping import BeliefMap
from appio.logger import EventLog, EventKind


class ExplorerState(Enum):
    NORMAL = "NORMAL"                      # looking for a wall to the north
    WALL_FOLLOWING = "WALL_FOLLOWING"      # wall kept on the left
    JUST_TURNED_LEFT = "JUST_TURNED_LEFT"  # waiting to leave the turning tile
    PASSING_TRAP = "PASSING_TRAP"          # driving fast over a single trap


class ExplorerStrategy:
    """
    Left-hand wall follower used until the exit has been seen.

    The strategy never stops on its own; the car controller swaps it for a
    path follower once `should_change_strategy()` reports the exit. The
    belief map is owned and updated by the controller, this class only reads
    it.
    """
    def __init__(self, belief_map: BeliefMap, event_log: Optional[EventLog] = None) -> None:
        self.belief_map = belief_map
        self.events = event_log if event_log is not None else EventLog()
        self.state = ExplorerState.NORMAL
        self.just_reversed: bool = False
        self.previous_position: Optional[Coordinate] = None

    def update(self, controller) -> None:
        """Decide on the next intent. Called only while the car is idle."""
        pos = controller.get_position()
        orientation = controller.get_orientation()

        if self.state == ExplorerState.NORMAL:
            self._update_normal(controller, pos, orientation)
        elif self.state == ExplorerState.WALL_FOLLOWING:
            self._update_wall_following(controller, pos, orientation)
        elif self.state == ExplorerState.JUST_TURNED_LEFT:
            self._update_just_turned_left(controller, pos, orientation)
        elif self.state == ExplorerState.PASSING_TRAP:
            self._update_passing_trap(controller, pos, orientation)

    def should_change_strategy(self) -> bool:
        return self.belief_map.exit_found()

    # --------- checks ---------
    def check_in_direction(self, pos: Coordinate, direction: Direction) -> bool:
        """Blocking tile within WALL_THRESHOLD tiles straight ahead in `direction`."""
        for i in range(1, WALL_THRESHOLD + 1):
            if self.belief_map.tile_at_relative(pos, direction, 0, i).blocking():
                return True
        return False

    def check_following_wall(self, pos: Coordinate, orientation: Direction) -> bool:
        """Blocking tile within WALL_THRESHOLD tiles on the left.

        A trap on the left with open space behind it is not a wall.
        """
        if (self.belief_map.tile_at_relative(pos, orientation, -1, 0).is_trap() and
                not self.belief_map.tile_at_relative(pos, orientation, -2, 0).blocking()):
            return False

        for i in range(1, WALL_THRESHOLD + 1):
            if self.belief_map.tile_at_relative(pos, orientation, -i, 0).blocking():
                return True
        return False

    def deal_with_dead_end(self, controller) -> None:
        """Pick the tightest manoeuvre that fits: u-turn, three-point turn or reverse out."""
        pos = controller.get_position()
        orientation = controller.get_orientation()

        space_right = self.belief_map.space_in_direction(pos, orientation, RelativeDirection.RIGHT)
        space_left = self.belief_map.space_in_direction(pos, orientation, RelativeDirection.LEFT)
        self.events.record("EXPLORE", EventKind.DEAD_END,
                           f"at {pos} facing {orientation.value} (left={space_left}, right={space_right})")

        if space_right > 1:
            controller.perform_uturn(RelativeDirection.RIGHT)
            self.previous_position = pos
            self._set_state(ExplorerState.JUST_TURNED_LEFT)
        elif space_right >= 0 and space_left >= 1:
            controller.perform_three_point_turn(RelativeDirection.RIGHT)
            self.previous_position = pos
            self._set_state(ExplorerState.JUST_TURNED_LEFT)
        else:
            self.just_reversed = True
            controller.toggle_reverse_mode()

    # --------- states ---------
    def _update_normal(self, controller, pos: Coordinate, orientation: Direction) -> None:
        if self.check_in_direction(pos, Direction.NORTH):
            # wall ahead to the north: face EAST so it ends up on the left
            if orientation != Direction.EAST:
                controller.perform_turn(RelativeDirection.RIGHT)
            else:
                self._set_state(ExplorerState.WALL_FOLLOWING)
        elif orientation != Direction.NORTH:
            controller.perform_turn(RelativeDirection.LEFT)

    def _update_wall_following(self, controller, pos: Coordinate, orientation: Direction) -> None:
        if self.check_following_wall(pos, orientation):
            if (self.belief_map.traps_ahead(pos, orientation) and
                    self.belief_map.traps_traversable(pos, orientation)):
                controller.set_speed_target(TRAP_SPEED)
                self._set_state(ExplorerState.PASSING_TRAP)
            elif self.belief_map.dead_end_ahead(pos, orientation):
                self.deal_with_dead_end(controller)
            elif self.check_in_direction(pos, orientation):
                controller.perform_turn(RelativeDirection.RIGHT)
        elif self.just_reversed:
            controller.perform_spin(RelativeDirection.LEFT)
            self.just_reversed = False
            controller.toggle_reverse_mode()
        else:
            controller.perform_turn(RelativeDirection.LEFT)
            self.previous_position = pos
            self._set_state(ExplorerState.JUST_TURNED_LEFT)

    def _update_just_turned_left(self, controller, pos: Coordinate, orientation: Direction) -> None:
        if pos != self.previous_position and self.check_following_wall(pos, orientation):
            self._set_state(ExplorerState.WALL_FOLLOWING)

    def _update_passing_trap(self, controller, pos: Coordinate, orientation: Direction) -> None:
        # speed stays raised until nothing is left ahead or underneath
        if not self.belief_map.traps_ahead(pos, orientation) and not self.belief_map.tile_at(pos).is_trap():
            controller.reset_speed_target()
            self._set_state(ExplorerState.WALL_FOLLOWING)

    def _set_state(self, new_state: ExplorerState) -> None:
        if new_state != self.state:
            self.events.record("EXPLORE", EventKind.STATE_CHANGE,
                               f"{self.state.value} -> {new_state.value}")
        self.state = new_state
