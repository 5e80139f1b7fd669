# ================================
# file: mapping/__init__.py
# ================================
"""
Mapping Package

Exports:
- BeliefMap: incremental tile map built from the bounded view
- TileBelief / TileKind: Unknown | Known(FREE, WALL, TRAP, EXIT)
"""
from mapping.tile_belief import TileBelief, TileKind, UNKNOWN, known
from mapping.belief_map import BeliefMap

__all__ = [
    'BeliefMap',
    'TileBelief',
    'TileKind',
    'UNKNOWN',
    'known',
]
