# ================================
# file: core/system_initializer.py
# ================================
from __future__ import annotations
"""System initialization module for the maze car.
Handles maze loading, car simulation, controller wiring and the optional GUI.
"""
from typing import Optional, Tuple

from core.config import VIEW_RADIUS, LOG_LEVEL
from sim import MazeMap, CarSim, SimCarAdapter
from nav import CarController
from appio import DataLogger, EventLog


class SystemInitializer:
    """Builds the car, its controller and the loggers for one run."""

    def __init__(self, logger_func=None):
        self.logger_func = logger_func
        self.log_file = None

    def _log(self, message: str, module: str = "INIT") -> None:
        """Log message using the provided logger function"""
        if self.logger_func and self.log_file:
            self.logger_func(self.log_file, message, module)

    def initialize(self, json_map_path: str, use_gui: bool = False, log_file=None,
                   log_level: str = LOG_LEVEL) -> Tuple:
        """Initialize the complete system.

        Parameters
        ----------
        json_map_path : str
            Path to the maze JSON
        use_gui : bool
            If True, create the matplotlib Visualizer
        log_file : file
            Log file handle for logging

        Returns
        -------
        Tuple
            (car, maze, controller, events, gui, logger)
        """
        self.log_file = log_file

        self._log("=" * 60)
        self._log("System initialization")
        self._log(f"Map file: {json_map_path}")
        self._log("=" * 60)

        maze = MazeMap.load_from_json(json_map_path)
        self._log(f"Maze: {maze.width} x {maze.height}, start {maze.start} facing {maze.start_heading.value}")
        self._log(f"Exits: {', '.join(str(e) for e in maze.exits) if maze.exits else 'none'}")

        car = SimCarAdapter(CarSim(maze), view_radius=VIEW_RADIUS)
        events = EventLog(logger_func=self.logger_func, log_file=log_file, level=log_level)
        controller = CarController(car, events)
        logger = DataLogger()

        gui = self._initialize_gui(maze) if use_gui else None

        self._log("System initialization complete")
        self._log("=" * 60)
        return car, maze, controller, events, gui, logger

    def _initialize_gui(self, maze: MazeMap) -> Optional[object]:
        # matplotlib is only pulled in when a window is wanted
        from gui import Visualizer
        self._log("GUI: matplotlib")
        return Visualizer(maze_map=maze, logger_func=self.logger_func, log_file=self.log_file)
