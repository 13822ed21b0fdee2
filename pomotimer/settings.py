"""Timer configuration and application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/PomoTimer/settings.json

``TimerConfig`` is the validated, immutable record the timer engine runs
on.  ``Settings`` is the mutable bag of preferences the app persists; it
carries the same timer fields plus the floating widget position.

Usage::

    settings = load_settings()
    settings.work_duration = 50
    engine.update_configuration(settings.timer_config())
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "PomoTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


# ── limits (minutes / count, inclusive) ───────────────────────────────────

WORK_DURATION_RANGE = (1, 60)
SHORT_BREAK_RANGE = (1, 30)
LONG_BREAK_RANGE = (5, 60)
SESSIONS_RANGE = (2, 10)

_INT_LIMITS: dict[str, tuple[int, int]] = {
    "work_duration": WORK_DURATION_RANGE,
    "short_break": SHORT_BREAK_RANGE,
    "long_break": LONG_BREAK_RANGE,
    "sessions_before_long_break": SESSIONS_RANGE,
}

_FLAGS = (
    "auto_start_breaks",
    "auto_start_pomodoros",
    "show_notifications",
    "play_sound",
)


class ConfigError(ValueError):
    """Raised when a configuration value is outside its allowed range."""


@dataclass(frozen=True)
class TimerConfig:
    """Durations (minutes), long-break cadence and behaviour flags."""

    work_duration: int = 25
    short_break: int = 5
    long_break: int = 15
    sessions_before_long_break: int = 4
    auto_start_breaks: bool = False
    auto_start_pomodoros: bool = False
    show_notifications: bool = True
    play_sound: bool = True

    def __post_init__(self) -> None:
        for name, (low, high) in _INT_LIMITS.items():
            value = getattr(self, name)
            # bool is an int subclass; a checkbox value here is a bug
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
            if not low <= value <= high:
                raise ConfigError(
                    f"{name} must be between {low} and {high}, got {value}"
                )
        for name in _FLAGS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(f"{name} must be a boolean, got {value!r}")

    @classmethod
    def from_dict(cls, data: dict) -> TimerConfig:
        """Build a config from a mapping, ignoring unknown keys."""
        valid_keys = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in valid_keys})

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer (minutes) ───────────────────────────────────────────────
    work_duration: int = 25
    short_break: int = 5
    long_break: int = 15
    sessions_before_long_break: int = 4
    auto_start_breaks: bool = False
    auto_start_pomodoros: bool = False

    # ── notifications ─────────────────────────────────────────────────
    show_notifications: bool = True
    play_sound: bool = True

    # ── floating widget ───────────────────────────────────────────────
    widget_x: int = 100
    widget_y: int = 100

    def timer_config(self) -> TimerConfig:
        """Validated engine configuration.  Raises ``ConfigError``."""
        return TimerConfig.from_dict(asdict(self))

    def apply_timer_config(self, config: TimerConfig) -> None:
        """Copy every timer field from *config* onto these settings."""
        for key, value in config.to_dict().items():
            setattr(self, key, value)

    def check_position(self) -> None:
        """Raise ``ConfigError`` unless the widget position is two ints."""
        for name in ("widget_x", "widget_y"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        settings = Settings(**{k: v for k, v in data.items() if k in valid_keys})
        settings.timer_config()
        settings.check_position()
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        # ConfigError and JSONDecodeError are both ValueErrors
        logger.warning("Ignoring unusable settings file %s: %s", SETTINGS_PATH, exc)
        return Settings()
    return settings


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
