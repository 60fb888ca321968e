"""Shared test helpers for Locked and Flow."""

from lockedflow.timer.engine import TimerEngine


class SignalCollector:
    """Capture engine callbacks or pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def run_for(engine: TimerEngine, clock, milliseconds: int) -> None:
    """Start *engine*, let *milliseconds* pass, then pause it."""
    engine.start()
    clock.advance_ms(milliseconds)
    engine.pause()
