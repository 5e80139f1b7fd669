# ================================
# file: nav/__init__.py
# ================================
"""
Navigation Package

Exports:
- CarController: per-tick entry point (map update, strategy, actuation)
- MotionController: low-level STOP/GO/TURN/UTURN/THREE_POINT actions
- PathFollowerStrategy: drives a planned route to the exit
"""
from nav.motion_controller import MotionController, ActionKind, SuspendedAction
from nav.path_follower import PathFollowerStrategy
from nav.controller import CarController, ControlMode

__all__ = [
    'CarController',
    'ControlMode',
    'MotionController',
    'ActionKind',
    'SuspendedAction',
    'PathFollowerStrategy',
]
