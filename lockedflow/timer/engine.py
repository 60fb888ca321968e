"""Timer state machine for Locked and Flow.

States
------
STOPPED   Initial state.  Elapsed time is whatever has been banked.
RUNNING   Counting up from the last ``start()``.
PAUSED    Frozen; elapsed time is banked and ``start()`` resumes.

Transitions
-----------
STOPPED → RUNNING          (start)
PAUSED  → RUNNING          (start)
RUNNING → PAUSED           (pause)
RUNNING | PAUSED → STOPPED (stop, or a tick that reaches the target)
Any     → STOPPED          (reset, elapsed back to zero)

Commands that do not apply to the current state are silent no-ops.

Time accounting
---------------
All durations are integer milliseconds.  ``accumulated`` holds time from
finished sessions; while RUNNING the live session (``now - session_start``)
is added on every read, so the engine never caches an elapsed value.

Notifications
-------------
One optional callback slot.  It is called with the elapsed milliseconds
after every real state change and on every ``update()`` tick while
RUNNING.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from .clock import Clock, MonotonicClock


logger = logging.getLogger(__name__)

UpdateCallback = Callable[[int], None]


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine:
    """Start/pause/stop/reset stopwatch with an optional countdown target.

    Drive it by calling ``update()`` once per loop iteration of whatever
    owns it; that is where the live callback fires and where reaching the
    target stops the clock.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock if clock is not None else MonotonicClock()

        self._state: TimerState = TimerState.STOPPED
        self._session_start: float = 0.0
        self._accumulated: int = 0
        self._target: int | None = None
        self._callback: UpdateCallback | None = None

    # ══════════════════════════════════════════════════════════════════
    #  STATE QUERIES
    # ══════════════════════════════════════════════════════════════════

    def get_state(self) -> TimerState:
        return self._state

    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    def is_paused(self) -> bool:
        return self._state == TimerState.PAUSED

    def is_stopped(self) -> bool:
        return self._state == TimerState.STOPPED

    # ══════════════════════════════════════════════════════════════════
    #  TIME QUERIES
    # ══════════════════════════════════════════════════════════════════

    def get_elapsed(self) -> int:
        """Total elapsed milliseconds, including the live session."""
        if self._state == TimerState.RUNNING:
            return self._accumulated + self._current_session()
        return self._accumulated

    def get_total_elapsed(self) -> int:
        """Milliseconds banked from finished sessions.

        Equal to ``get_elapsed()`` whenever the timer is not RUNNING.
        """
        return self._accumulated

    def get_target_duration(self) -> int | None:
        return self._target

    def get_remaining_time(self) -> int | None:
        """Milliseconds left before the target, or ``None`` with no target."""
        if self._target is None:
            return None
        return max(0, self._target - self.get_elapsed())

    def get_progress_percent(self) -> float:
        """0.0 → 100.0 progress towards the target."""
        if not self._target:
            return 0.0
        progress = 100.0 * self.get_elapsed() / self._target
        return max(0.0, min(100.0, progress))

    # ══════════════════════════════════════════════════════════════════
    #  CONFIGURATION
    # ══════════════════════════════════════════════════════════════════

    def set_target_duration(self, duration: int | None) -> None:
        """Set the countdown target in milliseconds (``None`` clears it).

        Negative values clamp to 0.  Takes effect immediately, even while
        running; the next ``update()`` stops the timer if it is already
        past the new target.
        """
        if duration is not None:
            duration = _non_negative(duration, "target duration")
        self._target = duration

    def set_update_callback(self, callback: UpdateCallback | None) -> None:
        """Install (or with ``None``, remove) the single update callback."""
        self._callback = callback

    def get_update_callback(self) -> UpdateCallback | None:
        return self._callback

    def save_elapsed(self, duration: int) -> None:
        """Overwrite the banked elapsed time, e.g. from a saved session.

        Does not change state or notify.
        """
        self._accumulated = _non_negative(duration, "saved elapsed time")

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin or resume counting.  No-op while already running."""
        if self._state == TimerState.RUNNING:
            return
        self._session_start = self._clock.now()
        self._set_state(TimerState.RUNNING)

    def stop(self) -> None:
        """Bank the live session (if any) and go to STOPPED."""
        if self._state == TimerState.STOPPED:
            return
        if self._state == TimerState.RUNNING:
            self._accumulated += self._current_session()
        self._set_state(TimerState.STOPPED)

    def pause(self) -> None:
        """Bank the live session and freeze.  Only valid while running."""
        if self._state != TimerState.RUNNING:
            return
        self._accumulated += self._current_session()
        self._set_state(TimerState.PAUSED)

    def reset(self) -> None:
        """Zero the elapsed time and go to STOPPED, discarding any session."""
        self._accumulated = 0
        self._set_state(TimerState.STOPPED)

    def update(self) -> None:
        """One tick: notify while running, then auto-stop at the target."""
        if self._state != TimerState.RUNNING:
            return

        if self._callback is not None:
            self._callback(self.get_elapsed())

        # The callback may have paused or stopped us.
        if (
            self._state == TimerState.RUNNING
            and self._target is not None
            and self.get_elapsed() >= self._target
        ):
            logger.info(
                "Target of %d ms reached, stopping timer", self._target
            )
            self.stop()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _current_session(self) -> int:
        seconds = self._clock.now() - self._session_start
        return max(0, round(seconds * 1000))

    def _set_state(self, new_state: TimerState) -> None:
        if new_state == self._state:
            return
        logger.debug(
            "Timer %s → %s (elapsed %d ms)",
            self._state.value, new_state.value, self._accumulated,
        )
        self._state = new_state
        if self._callback is not None:
            self._callback(self.get_elapsed())


def _non_negative(duration: int, what: str) -> int:
    if duration < 0:
        logger.warning("Negative %s (%d ms) clamped to 0", what, duration)
        return 0
    return duration
