# ================================
# file: appio/logger.py
# ================================
from __future__ import annotations
from typing import Deque, List, Optional
from collections import deque
from datetime import datetime
from enum import Enum
import time
import numpy as np

from core.config import LOG_LEVEL, EVENT_LOG_CAPACITY

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}


def log_to_file(log_file, message, module="MAIN"):
    """Write message to log file with timestamp and module"""
    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    log_entry = f"[{timestamp}] [{module}] {message}\n"
    log_file.write(log_entry)
    log_file.flush()  # Ensure immediate write
    print(log_entry.strip())  # Also print to console


class EventKind(Enum):
    STATE_CHANGE = "STATE_CHANGE"
    DEAD_END = "DEAD_END"
    EXIT_FOUND = "EXIT_FOUND"
    EXIT_UNREACHABLE = "EXIT_UNREACHABLE"
    STRATEGY_SWITCH = "STRATEGY_SWITCH"
    ACTION = "ACTION"
    PATH_DONE = "PATH_DONE"
    # invariant violations: reported, never raised
    NOT_ON_PATH_START = "NOT_ON_PATH_START"
    MALFORMED_PATH = "MALFORMED_PATH"
    BAD_TURN = "BAD_TURN"


class DiagnosticEvent:
    """One structured entry of the event log."""
    __slots__ = ("t", "module", "kind", "level", "message")

    def __init__(self, t: float, module: str, kind: EventKind, level: str, message: str) -> None:
        self.t = t
        self.module = module
        self.kind = kind
        self.level = level
        self.message = message

    def __repr__(self) -> str:
        return f"DiagnosticEvent({self.module}, {self.kind.value}, {self.level}, {self.message!r})"


class EventLog:
    """Injected diagnostic sink shared by the controller components.

    The latest `capacity` events are kept in memory; events at or above
    `level` are echoed to the console and, when a `logger_func`/`log_file`
    pair is supplied, to the run log as well.
    """
    def __init__(self, logger_func=None, log_file=None, level: str = LOG_LEVEL,
                 echo: bool = True, capacity: int = EVENT_LOG_CAPACITY) -> None:
        self.logger_func = logger_func
        self.log_file = log_file
        self.level = level
        self.echo = echo
        self.t0 = time.time()
        self._events: Deque[DiagnosticEvent] = deque(maxlen=capacity)
        # invariant violations are rare and never dropped
        self._errors: List[DiagnosticEvent] = []

    def record(self, module: str, kind: EventKind, message: str,
               level: str = "INFO") -> DiagnosticEvent:
        event = DiagnosticEvent(time.time() - self.t0, module, kind, level, message)
        self._events.append(event)
        if level == "ERROR":
            self._errors.append(event)
        if _LEVELS.get(level, 20) >= _LEVELS.get(self.level, 20):
            text = f"{kind.value}: {message}"
            if self.logger_func and self.log_file:
                self.logger_func(self.log_file, text, module)
            elif self.echo:
                print(f"[{module}] {text}")
        return event

    def events(self, kind: Optional[EventKind] = None) -> List[DiagnosticEvent]:
        if kind is None:
            return list(self._events)
        return [e for e in self._events if e.kind == kind]

    def errors(self) -> List[DiagnosticEvent]:
        return list(self._errors)

    def clear(self) -> None:
        self._events.clear()
        self._errors.clear()

    def __len__(self) -> int:
        return len(self._events)


class DataLogger:
    """Simple NPZ logger for car trajectory, actions and events."""
    def __init__(self) -> None:
        self.t0 = time.time()
        self.poses = []
        self.actions = []
        self.tiles = []

    def log_pose(self, x: float, y: float, angle: float, velocity: float) -> None:
        self.poses.append((time.time()-self.t0, float(x), float(y), float(angle), float(velocity)))

    def log_action(self, action: str, stage: int) -> None:
        self.actions.append((time.time()-self.t0, action, int(stage)))

    def log_tile(self, x: int, y: int) -> None:
        # consecutive duplicates are dropped, the list is the tile-level route
        if not self.tiles or self.tiles[-1] != (x, y):
            self.tiles.append((int(x), int(y)))

    def save(self, path: str) -> None:
        actions_array = np.array(self.actions, dtype=object)
        np.savez_compressed(path,
                            poses=np.asarray(self.poses, dtype=float).reshape(-1, 5),
                            actions=actions_array,
                            tiles=np.asarray(self.tiles, dtype=int).reshape(-1, 2))
