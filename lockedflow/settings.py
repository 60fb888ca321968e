"""Timer settings with JSON persistence.

Settings are stored at:
    ~/.lockedflow/settings.json

Usage::

    settings = load_settings()
    apply_settings(engine, settings)
    driver = TimerDriver(engine, interval_ms=settings.tick_interval_ms)
    ...
    remember_elapsed(settings, engine)
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .timer.engine import TimerEngine


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / ".lockedflow"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

MAX_TARGET_MINUTES = 10**6


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    target_minutes: float | None = 25      # None = plain stopwatch
    tick_interval_ms: int = 100

    # ── session restore ───────────────────────────────────────────────
    restore_elapsed: bool = True
    saved_elapsed_ms: int = 0

    @property
    def target_ms(self) -> int | None:
        if self.target_minutes is None:
            return None
        return round(self.target_minutes * 60_000)


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
    except (OSError, ValueError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", SETTINGS_PATH, exc)
        return Settings()
    return Settings(**_well_typed(filtered))


def _well_typed(values: dict) -> dict:
    """Drop values of the wrong type or range; those fields keep their defaults."""
    kept = {}
    for key, value in values.items():
        if _FIELD_CHECKS[key](value):
            kept[key] = value
        else:
            logger.warning(
                "Ignoring invalid setting %s=%r in %s", key, value, SETTINGS_PATH
            )
    return kept


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )


def apply_settings(engine: TimerEngine, settings: Settings) -> None:
    """Push the target and, if enabled, the saved elapsed time into *engine*."""
    engine.set_target_duration(settings.target_ms)
    if settings.restore_elapsed:
        engine.save_elapsed(settings.saved_elapsed_ms)


def remember_elapsed(settings: Settings, engine: TimerEngine) -> None:
    """Copy the engine's banked elapsed time into *settings* for saving.

    Pause or stop the engine first; a live session is not banked yet.
    """
    settings.saved_elapsed_ms = engine.get_total_elapsed()


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return _is_int(value) or isinstance(value, float)


# bool is an int subclass, so it is rejected explicitly for numeric fields.
_FIELD_CHECKS = {
    "target_minutes": lambda v: v is None or (_is_number(v) and 0 <= v < MAX_TARGET_MINUTES),
    "tick_interval_ms": lambda v: _is_int(v) and v > 0,
    "restore_elapsed": lambda v: isinstance(v, bool),
    "saved_elapsed_ms": lambda v: _is_int(v) and v >= 0,
}
