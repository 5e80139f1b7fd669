# ================================
# file: appio/__init__.py
# ================================
from appio.logger import DataLogger, EventLog, EventKind, DiagnosticEvent, log_to_file

__all__ = ["DataLogger", "EventLog", "EventKind", "DiagnosticEvent", "log_to_file"]
