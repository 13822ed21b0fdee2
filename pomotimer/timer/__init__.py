"""Timer package."""

from .engine import (
    TimerEngine,
    Mode,
    PeriodCompleted,
    EngineState,
    TICK_INTERVAL_MS,
    AUTO_START_DELAY_MS,
)

__all__ = [
    "TimerEngine",
    "Mode",
    "PeriodCompleted",
    "EngineState",
    "TICK_INTERVAL_MS",
    "AUTO_START_DELAY_MS",
]
