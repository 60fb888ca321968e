"""Tests for the Qt tick driver.

Ticks are mostly delivered by calling ``_on_tick()`` directly; one test
spins the event loop to check the QTimer wiring.
"""

import pytest

from PyQt6.QtTest import QTest

from lockedflow.timer.driver import DEFAULT_TICK_INTERVAL_MS, TimerDriver
from lockedflow.timer.engine import TimerState

from helpers import SignalCollector


@pytest.fixture
def driver(qapp, engine):
    d = TimerDriver(engine)
    yield d
    d.detach()


class TestPolling:

    def test_idle_until_engine_runs(self, driver):
        assert not driver.is_polling
        assert driver.interval_ms == DEFAULT_TICK_INTERVAL_MS

    def test_engine_start_begins_polling(self, driver, engine):
        engine.start()
        assert driver.is_polling

    def test_pause_and_stop_end_polling(self, driver, engine):
        engine.start()
        engine.pause()
        assert not driver.is_polling
        engine.start()
        engine.stop()
        assert not driver.is_polling

    def test_attaching_to_running_engine_polls(self, qapp, engine):
        engine.start()
        d = TimerDriver(engine)
        assert d.is_polling
        d.detach()

    def test_interval_clamped(self, qapp, engine):
        d = TimerDriver(engine, interval_ms=0)
        assert d.interval_ms == 1
        d.interval_ms = 250
        assert d.interval_ms == 250
        d.detach()

    def test_detach_releases_callback(self, driver, engine):
        engine.start()
        driver.detach()
        assert not driver.is_polling
        assert engine.get_update_callback() is None

    def test_detach_leaves_foreign_callback(self, driver, engine):
        other = SignalCollector()
        engine.set_update_callback(other)
        driver.detach()
        assert engine.get_update_callback() is other
        engine.start()
        assert len(other) == 1

    def test_event_loop_delivers_ticks(self, qapp, engine, clock):
        d = TimerDriver(engine, interval_ms=1)
        c = SignalCollector()
        engine.start()
        d.elapsed_changed.connect(c)
        clock.advance_ms(500)

        QTest.qWait(50)

        assert len(c) >= 1
        assert c.last == 500
        d.detach()


class TestSignals:

    def test_state_changed(self, driver, engine):
        c = SignalCollector()
        driver.state_changed.connect(c)

        engine.start()
        engine.pause()
        engine.reset()

        assert c.items == [TimerState.RUNNING, TimerState.PAUSED, TimerState.STOPPED]

    def test_tick_emits_elapsed(self, driver, engine, clock):
        c = SignalCollector()
        driver.elapsed_changed.connect(c)
        engine.start()
        c.clear()

        clock.advance_ms(300)
        driver._on_tick()

        assert c.items == [300]

    def test_tick_does_not_repeat_state_changed(self, driver, engine, clock):
        c = SignalCollector()
        engine.start()
        driver.state_changed.connect(c)

        clock.advance_ms(100)
        driver._on_tick()
        driver._on_tick()

        assert len(c) == 0

    def test_target_reached(self, driver, engine, clock):
        reached = SignalCollector()
        states = SignalCollector()
        driver.target_reached.connect(reached)
        driver.state_changed.connect(states)

        engine.set_target_duration(30_000)
        engine.start()
        clock.advance_ms(31_000)
        driver._on_tick()

        assert reached.items == [31_000]
        assert states.last == TimerState.STOPPED
        assert not driver.is_polling

    def test_target_not_reached_below_target(self, driver, engine, clock):
        reached = SignalCollector()
        driver.target_reached.connect(reached)

        engine.set_target_duration(30_000)
        engine.start()
        clock.advance_ms(10_000)
        driver._on_tick()

        assert len(reached) == 0
        assert driver.is_polling

    def test_slot_stopping_engine_is_not_target_reached(self, driver, engine, clock):
        reached = SignalCollector()
        driver.target_reached.connect(reached)
        engine.set_target_duration(30_000)
        engine.start()

        def stop_on_tick(ms):
            if engine.is_running():
                engine.stop()

        driver.elapsed_changed.connect(stop_on_tick)
        clock.advance_ms(1000)
        driver._on_tick()

        assert engine.is_stopped()
        assert len(reached) == 0


class TestFromSettings:

    def test_interval_from_settings(self, qapp, engine):
        from lockedflow.settings import Settings, apply_settings

        settings = Settings(target_minutes=1, tick_interval_ms=16)
        apply_settings(engine, settings)
        d = TimerDriver(engine, interval_ms=settings.tick_interval_ms)
        assert d.interval_ms == 16
        assert d.engine.get_target_duration() == 60_000
        d.detach()
