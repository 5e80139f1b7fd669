# ================================
# file: mapping/belief_map.py
# ================================
"""
Incremental Tile Map - the car's persistent belief about the maze

Accumulates the bounded view supplied every tick into a mapping from
Coordinate to TileBelief and answers the directional queries the
strategies are built on. Relative queries use the car frame where +y is
straight ahead and -x is to the left.
"""
from __future__ import annotations
from typing import Dict, List, Mapping, Optional, Tuple

from core.types import Coordinate, Direction, RelativeDirection, ObservedTile
from core.coords import rotate_to_orientation
from mapping.tile_belief import TileBelief, UNKNOWN


class BeliefMap:
    """Append-only belief map with exit tracking."""

    def __init__(self) -> None:
        self._tiles: Dict[Coordinate, TileBelief] = {}
        self._exit_found: bool = False
        self._exit: Optional[Coordinate] = None

    # --------- observation ---------
    def update(self, view: Mapping[Coordinate, ObservedTile]) -> None:
        """Integrate the current view.

        Coordinates that are already Known keep their belief. The first exit
        tile ever classified becomes the exit, later sightings are ignored.
        """
        for pos, observed in view.items():
            current = self._tiles.get(pos)
            if current is not None and current.known():
                continue
            tile = TileBelief.from_observation(observed)
            self._tiles[pos] = tile
            if tile.is_exit() and not self._exit_found:
                self._exit_found = True
                self._exit = pos

    # --------- point queries ---------
    def lookup(self, pos: Coordinate) -> Optional[TileBelief]:
        """Belief at `pos` without side effects, None if never recorded."""
        return self._tiles.get(pos)

    def touch(self, pos: Coordinate) -> TileBelief:
        """Belief at `pos`, recording it as Unknown if it was never seen."""
        tile = self._tiles.get(pos)
        if tile is None:
            tile = UNKNOWN
            self._tiles[pos] = tile
        return tile

    def tile_at(self, pos: Coordinate) -> TileBelief:
        return self.touch(pos)

    def tile_at_relative(self, car_pos: Coordinate, orientation: Direction,
                         rel_x: int, rel_y: int) -> TileBelief:
        """Tile at an offset from the car, +y being in front of the car."""
        rotated = rotate_to_orientation(Coordinate(rel_x, rel_y), orientation)
        return self.tile_at(car_pos + rotated)

    def known_coordinates(self) -> List[Coordinate]:
        """All coordinates that have been observed."""
        return [pos for pos, tile in self._tiles.items() if tile.known()]

    # --------- spatial scans ---------
    def space_in_direction(self, car_pos: Coordinate, orientation: Direction,
                           direction: RelativeDirection) -> int:
        """Clear tiles ahead-and-to-the-side of the car, scanning the row one
        tile ahead outward until the first blocking tile."""
        step = -1 if direction == RelativeDirection.LEFT else 1
        space = 0
        while not self.tile_at_relative(car_pos, orientation, (space + 1) * step, 1).blocking():
            space += 1
        return space

    def dead_end_ahead(self, car_pos: Coordinate, orientation: Direction) -> bool:
        """Dead end for a car following the wall on its left: something
        blocking within 2 tiles ahead, at most 2 tiles of room to the left
        and less than 2 to the right."""
        one_ahead = self.tile_at_relative(car_pos, orientation, 0, 1)
        two_ahead = self.tile_at_relative(car_pos, orientation, 0, 2)
        if not one_ahead.blocking() and not two_ahead.blocking():
            return False

        room_left = self.space_in_direction(car_pos, orientation, RelativeDirection.LEFT)
        room_right = self.space_in_direction(car_pos, orientation, RelativeDirection.RIGHT)
        return room_left <= 2 and room_right < 2

    def traps_ahead(self, car_pos: Coordinate, orientation: Direction) -> bool:
        return (self.tile_at_relative(car_pos, orientation, 0, 1).is_trap() or
                self.tile_at_relative(car_pos, orientation, 0, 2).is_trap())

    def traps_traversable(self, car_pos: Coordinate, orientation: Direction) -> bool:
        """A single trap with a non-trap tile right after it."""
        first = self.tile_at_relative(car_pos, orientation, 0, 1).is_trap()
        second = self.tile_at_relative(car_pos, orientation, 0, 2).is_trap()
        third = self.tile_at_relative(car_pos, orientation, 0, 3).is_trap()
        return (first and not second) or (not first and second and not third)

    # --------- exit ---------
    def exit_found(self) -> bool:
        return self._exit_found

    def get_exit(self) -> Optional[Coordinate]:
        return self._exit

    # --------- misc ---------
    def bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """(xmin, xmax, ymin, ymax) over every recorded coordinate."""
        if not self._tiles:
            return None
        xs = [p.x for p in self._tiles]
        ys = [p.y for p in self._tiles]
        return (min(xs), max(xs), min(ys), max(ys))

    def __contains__(self, pos: Coordinate) -> bool:
        return pos in self._tiles

    def __len__(self) -> int:
        return len(self._tiles)
