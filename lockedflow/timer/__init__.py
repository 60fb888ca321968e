"""Timer package."""

from .clock import Clock, ManualClock, MonotonicClock
from .engine import TimerEngine, TimerState, UpdateCallback
from .readout import (
    TimerReadout,
    format_duration,
    progress_bar_width,
    progress_label,
    read_engine,
    state_label,
)

__all__ = [
    "Clock",
    "ManualClock",
    "MonotonicClock",
    "TimerEngine",
    "TimerState",
    "UpdateCallback",
    "TimerReadout",
    "format_duration",
    "progress_bar_width",
    "progress_label",
    "read_engine",
    "state_label",
]
