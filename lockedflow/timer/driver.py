"""Qt event-loop driver for a ``TimerEngine``.

The engine has no loop of its own.  ``TimerDriver`` supplies one: a
``QTimer`` that calls ``engine.update()`` every ``interval_ms`` while the
engine is running, and Qt signals that any number of widgets can
connect to.

The driver takes the engine's single update-callback slot.  Commands can
still go straight to the engine (``engine.start()`` and so on); the
driver sees the resulting state change through that callback and starts
or stops polling to match.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .engine import TimerEngine, TimerState


logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL_MS = 100


class TimerDriver(QObject):
    """Polls a ``TimerEngine`` from the Qt event loop.

    Signals
    -------
    elapsed_changed(elapsed_ms: int)
        Emitted on every engine notification: each tick while running
        and each state change.
    state_changed(new_state: TimerState)
        Emitted only when the engine's state actually differs from the
        last one seen.
    target_reached(elapsed_ms: int)
        Emitted when a tick stopped the engine because it reached its
        target.
    """

    elapsed_changed = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    target_reached = pyqtSignal(int)

    def __init__(
        self,
        engine: TimerEngine,
        parent: QObject | None = None,
        *,
        interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._last_state: TimerState = engine.get_state()

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(max(1, interval_ms))
        self._qt_timer.timeout.connect(self._on_tick)

        engine.set_update_callback(self._on_engine_update)
        if engine.is_running():
            self._qt_timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    @interval_ms.setter
    def interval_ms(self, value: int) -> None:
        self._qt_timer.setInterval(max(1, value))

    @property
    def is_polling(self) -> bool:
        return self._qt_timer.isActive()

    def detach(self) -> None:
        """Stop polling and hand the engine's callback slot back.

        A callback installed by someone else since is left in place.
        """
        self._qt_timer.stop()
        if self._engine.get_update_callback() == self._on_engine_update:
            self._engine.set_update_callback(None)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        engine = self._engine
        was_running = engine.is_running()
        engine.update()
        if not (was_running and engine.is_stopped()):
            return
        target = engine.get_target_duration()
        elapsed = engine.get_elapsed()
        # A slot connected to elapsed_changed may have stopped it instead.
        if target is not None and elapsed >= target:
            logger.debug("Tick stopped engine at %d ms (target %d ms)", elapsed, target)
            self.target_reached.emit(elapsed)

    def _on_engine_update(self, elapsed: int) -> None:
        state = self._engine.get_state()
        if state != self._last_state:
            self._last_state = state
            if state == TimerState.RUNNING:
                self._qt_timer.start()
            else:
                self._qt_timer.stop()
            self.state_changed.emit(state)
        self.elapsed_changed.emit(elapsed)
