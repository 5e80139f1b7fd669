# ================================
# file: core/config.py
# ================================
"""
Global configuration for the tile-maze car controller.
Speeds are in tiles per second, angles in degrees, time in seconds.

Organization:
1. Maze & Sensor
2. Car Motion Targets
3. Exploration Strategy
4. Path Following
5. Simulation Physics
6. Control Loop
7. GUI & Logging
"""
from __future__ import annotations

# ================================
# 1. MAZE & SENSOR
# ================================
VIEW_RADIUS: int = 4                    # View window is (2*r+1)^2 tiles centred on the car
WALL_TILE_NAME: str = "Wall"            # Name the environment gives to wall tiles
ROAD_TILE_NAME: str = "Road"            # Name of a plain drivable tile
TRAP_TILE_NAME: str = "Lava"            # Traps are drivable but flagged
EXIT_TILE_NAME: str = "Finish"

# ASCII maze legend used by sim.MazeMap
MAZE_WALL_CHAR: str = "#"
MAZE_ROAD_CHAR: str = "."
MAZE_TRAP_CHAR: str = "T"
MAZE_EXIT_CHAR: str = "E"
MAZE_START_CHAR: str = "S"

# ================================
# 2. CAR MOTION TARGETS
# ================================
MAX_SPEED: float = 2.0                  # Maximum speed target
SPEED_MULTIPLE: float = 0.8             # Fraction of target considered "up to speed" for a turn
SPEED_BUFFER: float = 0.3               # Margin below target that ends the reversing leg
UTURN_SPEED: float = 0.8                # Speed for a u-turn
SPIN_SPEED: float = 0.1                 # Speed for a spin (slow u-turn)
THREE_POINT_SPEED: float = 0.4          # Speed for a three point turn
MISALIGNED_THRESHOLD: float = 1.0       # Degrees of drift tolerated before readjusting

# ================================
# 3. EXPLORATION STRATEGY
# ================================
WALL_THRESHOLD: int = 2                 # Tiles between car and wall before applying decision logic
TRAP_SPEED: float = 3.0                 # Requested speed while crossing traps (clamped to MAX_SPEED)

# ================================
# 4. PATH FOLLOWING
# ================================
FORWARD_SPEED: float = 0.8              # Speed when traversing the path forwards
REVERSE_SPEED: float = 0.5              # Speed when traversing the path in reverse

# ================================
# 5. SIMULATION PHYSICS
# ================================
CAR_ACCELERATION: float = 2.0           # tiles/s^2 for forward and reverse acceleration
CAR_BRAKE: float = 4.0                  # tiles/s^2 deceleration when braking
CAR_TURN_DEG_PER_S: float = 72.0        # Yaw rate; a quarter turn at MAX_SPEED sweeps a ~1.6 tile radius
CAR_START_HEADING: str = "EAST"         # Default start heading if the maze file has none

# Angle convention (counter-clockwise, EAST = 0)
EAST_DEGREE_MIN: float = 0.0
NORTH_DEGREE: float = 90.0
WEST_DEGREE: float = 180.0
SOUTH_DEGREE: float = 270.0
EAST_DEGREE_MAX: float = 360.0

# ================================
# 6. CONTROL LOOP
# ================================
CONTROL_HZ: float = 20.0                # Tick frequency of the simulation loop
DEFAULT_MAX_STEPS: int = 6000           # Tick budget for one simulated run

# ================================
# 7. GUI & LOGGING
# ================================
LOG_LEVEL: str = "INFO"                 # Console echo level (DEBUG, INFO, WARNING, ERROR)
LOG_DIR: str = "logs"                   # Default directory for run logs and trajectories
EVENT_LOG_CAPACITY: int = 5000          # Diagnostic events kept in memory, oldest dropped first
GUI_UPDATE_EVERY: int = 5               # Redraw the GUI every N ticks
GUI_UNKNOWN_VALUE: float = 0.5          # Grey level of unknown tiles
GUI_FREE_VALUE: float = 1.0
GUI_WALL_VALUE: float = 0.0
GUI_TRAP_VALUE: float = 0.25
GUI_EXIT_VALUE: float = 0.75
