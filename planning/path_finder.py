# ================================
# file: planning/path_finder.py
# ================================
from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Set
from collections import deque

from core.types import Coordinate, Direction
from core.coords import step_of, direction_between
from mapping import BeliefMap

# Neighbour discovery order, also the BFS tie-break
_NEIGHBOUR_ORDER = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)


def find_path(start: Coordinate, end: Coordinate,
              belief_map: BeliefMap) -> Optional[List[Coordinate]]:
    """Shortest known route start -> end (both inclusive).

    Tries a route that avoids traps first and only falls back to driving
    over traps when that fails. None means the exit cannot be reached over
    the tiles known so far.
    """
    path = breadth_first_search(start, end, belief_map, include_traps=False)
    if path is None:
        path = breadth_first_search(start, end, belief_map, include_traps=True)
    return path


def breadth_first_search(start: Coordinate, end: Coordinate, belief_map: BeliefMap,
                         include_traps: bool = False) -> Optional[List[Coordinate]]:
    """Unweighted BFS over the known coordinates of the map with 4-neighbour
    adjacency. A blocking tile is reached but never expanded, unless it is a
    trap and traps are included."""
    known: Set[Coordinate] = set(belief_map.known_coordinates())

    searched: Set[Coordinate] = {start}
    queue = deque([start])
    # parent of each reached coordinate, start has none
    parents: Dict[Coordinate, Coordinate] = {}

    while queue:
        coordinate = queue.popleft()
        if coordinate == end:
            return _path_from_parents(parents, end)

        tile = belief_map.tile_at(coordinate)
        if not (include_traps and tile.is_trap()) and tile.blocking():
            continue

        for neighbour in _neighbours(coordinate, known):
            if neighbour not in searched:
                searched.add(neighbour)
                queue.append(neighbour)
                parents[neighbour] = coordinate

    return None


def _neighbours(current: Coordinate, known: Set[Coordinate]) -> List[Coordinate]:
    """Known coordinates adjacent to `current` (no diagonals)."""
    out = []
    for direction in _NEIGHBOUR_ORDER:
        candidate = current + step_of(direction)
        if candidate in known:
            out.append(candidate)
    return out


def _path_from_parents(parents: Dict[Coordinate, Coordinate], end: Coordinate) -> List[Coordinate]:
    path = [end]
    current = end
    while current in parents:
        current = parents[current]
        path.append(current)
    path.reverse()
    return path


def path_turns(path: Sequence[Coordinate]) -> int:
    """Number of heading changes along a path of unit steps."""
    turns = 0
    previous = None
    for a, b in zip(path, path[1:]):
        heading = direction_between(a, b)
        if previous is not None and heading != previous:
            turns += 1
        previous = heading
    return turns
