"""Display-ready text derived from a ``TimerEngine``.

Nothing here draws anything.  A window, a menu-bar item or a terminal
line can all build their view from the same ``TimerReadout``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .engine import TimerEngine, TimerState


STATE_LABELS: dict[TimerState, str] = {
    TimerState.RUNNING: "Running",
    TimerState.PAUSED: "Paused",
    TimerState.STOPPED: "Stopped",
}

NO_TARGET_TEXT = "No target set"


@dataclass(frozen=True)
class TimerReadout:
    """Snapshot of everything a timer display shows."""

    time_text: str
    state_text: str
    progress_text: str
    progress_percent: float
    remaining_text: str | None


def format_duration(milliseconds: int) -> str:
    """``HH:MM:SS`` with the sub-second part dropped.

    Hours are not wrapped, so 100 hours reads ``100:00:00``.
    """
    total_seconds = max(0, int(milliseconds)) // 1000
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def state_label(state: TimerState) -> str:
    return STATE_LABELS[state]


def progress_label(engine: TimerEngine) -> str:
    if engine.get_target_duration() is None:
        return NO_TARGET_TEXT
    return f"Progress: {int(engine.get_progress_percent())}%"


def progress_bar_width(percent: float, full_width: float) -> float:
    """Width of the filled part of a bar ``full_width`` wide."""
    percent = max(0.0, min(100.0, percent))
    return full_width * percent / 100.0


def read_engine(engine: TimerEngine) -> TimerReadout:
    """Snapshot *engine* for display.

    Call ``engine.update()`` first so the snapshot reflects this tick.
    """
    remaining = engine.get_remaining_time()
    return TimerReadout(
        time_text=format_duration(engine.get_elapsed()),
        state_text=state_label(engine.get_state()),
        progress_text=progress_label(engine),
        progress_percent=engine.get_progress_percent(),
        remaining_text=None if remaining is None else format_duration(remaining),
    )
