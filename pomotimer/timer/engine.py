"""Timer state machine for PomoTimer.

Modes
-----
WORK          Focus period.
SHORT_BREAK   Break after a regular work period.
LONG_BREAK    Break after every ``sessions_before_long_break``-th work period.

Transitions (only when a period completes, naturally or via ``skip``)
---------------------------------------------------------------------
WORK → SHORT_BREAK      completed count is not a multiple of the cadence
WORK → LONG_BREAK       completed count is a multiple of the cadence
SHORT_BREAK → WORK
LONG_BREAK → WORK

Every transition stops the countdown.  If the entered mode's auto-start
flag is set, ``start()`` runs after ``AUTO_START_DELAY_MS`` so the
completion notification gets the screen first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..settings import TimerConfig


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Mode(Enum):
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self is not Mode.WORK


# ── constants ─────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 1000
AUTO_START_DELAY_MS = 2000


# ── value objects ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PeriodCompleted:
    """Payload of ``TimerEngine.period_completed``."""

    previous_mode: Mode
    next_mode: Mode
    is_long_break: bool
    completed_work_sessions: int
    auto_start: bool


@dataclass
class EngineState:
    """Plain snapshot of the engine's mutable state.

    The engine never persists this; callers may store it however they like
    and hand it back to ``TimerEngine.restore``.
    """

    mode: Mode = Mode.WORK
    time_remaining: int = 0
    total_time: int = 0
    is_running: bool = False
    completed_work_sessions: int = 0


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt-based Pomodoro timer driven by a single one-second ``QTimer``.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted every second while the countdown runs.
    running_changed(is_running: bool)
        Emitted whenever the countdown starts or stops.
    mode_changed(mode: Mode)
        Emitted when a new mode is entered.
    timer_reset()
        Emitted after ``reset()`` restored the current period.
    period_completed(event: PeriodCompleted)
        Emitted once per transition, after the new mode is in place.
    """

    tick = pyqtSignal(int)
    running_changed = pyqtSignal(bool)
    mode_changed = pyqtSignal(object)
    timer_reset = pyqtSignal()
    period_completed = pyqtSignal(object)

    def __init__(
        self,
        config: TimerConfig | None = None,
        parent: QObject | None = None,
        *,
        auto_start_delay_ms: int = AUTO_START_DELAY_MS,
    ) -> None:
        super().__init__(parent)

        # ── configuration ─────────────────────────────────────────────
        self._config: TimerConfig = config or TimerConfig()

        # ── period state ──────────────────────────────────────────────
        self._mode: Mode = Mode.WORK
        self._total_time: int = self.duration_for(Mode.WORK)
        self._remaining: int = self._total_time
        self._completed_work_sessions: int = 0

        # ── countdown driver ──────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

        # ── deferred auto-start ───────────────────────────────────────
        self._auto_start_timer = QTimer(self)
        self._auto_start_timer.setSingleShot(True)
        self._auto_start_timer.setInterval(auto_start_delay_ms)
        self._auto_start_timer.timeout.connect(self._on_auto_start)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def time_remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def total_time(self) -> int:
        """Configured length of the current period, in seconds."""
        return self._total_time

    @property
    def is_running(self) -> bool:
        """True while the one-second driver is active."""
        return self._qt_timer.isActive()

    @property
    def completed_work_sessions(self) -> int:
        return self._completed_work_sessions

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def is_long_break_due(self) -> bool:
        """Whether a break derived from the current count is the long one."""
        cadence = self._config.sessions_before_long_break
        return self._completed_work_sessions % cadence == 0

    @property
    def auto_start_pending(self) -> bool:
        return self._auto_start_timer.isActive()

    def duration_for(self, mode: Mode) -> int:
        """Configured length of *mode* in seconds."""
        minutes = {
            Mode.WORK: self._config.work_duration,
            Mode.SHORT_BREAK: self._config.short_break,
            Mode.LONG_BREAK: self._config.long_break,
        }[mode]
        return minutes * 60

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start (or resume) the countdown.  No-op while running."""
        self._auto_start_timer.stop()
        if self.is_running:
            return
        self._qt_timer.start()
        logger.debug("Started %s with %ds left", self._mode.value, self._remaining)
        self.running_changed.emit(True)

    def pause(self) -> None:
        """Stop the countdown, keeping the elapsed time.

        Also cancels a pending auto-start, even when already stopped.
        """
        self._auto_start_timer.stop()
        if not self.is_running:
            return
        self._qt_timer.stop()
        logger.debug("Paused %s with %ds left", self._mode.value, self._remaining)
        self.running_changed.emit(False)

    def toggle(self) -> None:
        """Pause when running, start otherwise."""
        if self.is_running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Pause and restore the full length of the current period.

        In a break, short vs. long is re-derived from the current
        completed-session count, so the counter is never touched here.
        """
        self.pause()
        mode = self._mode
        if mode.is_break:
            mode = Mode.LONG_BREAK if self.is_long_break_due else Mode.SHORT_BREAK
        self._enter_mode(mode)
        self.tick.emit(self._remaining)
        self.timer_reset.emit()

    def skip(self) -> None:
        """Finish the current period now, exactly as if it ran out."""
        self._complete()

    def update_configuration(self, config: TimerConfig) -> None:
        """Replace the configuration.

        A period that has not started counting (stopped, untouched) is
        resized to the new duration.  A running or partly elapsed period
        keeps its length; new durations apply from the next mode entry or
        ``reset()``.
        """
        fresh = not self.is_running and self._remaining == self._total_time
        self._config = config
        logger.info("Configuration updated: %s", config)
        if fresh:
            self._total_time = self.duration_for(self._mode)
            self._remaining = self._total_time
            self.tick.emit(self._remaining)

    def snapshot(self) -> EngineState:
        return EngineState(
            mode=self._mode,
            time_remaining=self._remaining,
            total_time=self._total_time,
            is_running=self.is_running,
            completed_work_sessions=self._completed_work_sessions,
        )

    def restore(self, state: EngineState) -> None:
        """Load a snapshot.  The countdown is left stopped."""
        self.pause()
        self._mode = Mode(state.mode)
        self._total_time = self.duration_for(self._mode)
        self._remaining = max(0, min(state.time_remaining, self._total_time))
        self._completed_work_sessions = max(0, state.completed_work_sessions)
        self.mode_changed.emit(self._mode)
        self.tick.emit(self._remaining)

    def shutdown(self) -> None:
        """Stop every timer the engine owns, emitting nothing.  Idempotent."""
        self._auto_start_timer.stop()
        self._qt_timer.stop()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        self._remaining = max(0, self._remaining - 1)
        self.tick.emit(self._remaining)
        if self._remaining <= 0:
            self._complete()

    def _complete(self) -> None:
        self.pause()
        previous = self._mode

        if previous is Mode.WORK:
            self._completed_work_sessions += 1
            next_mode = (
                Mode.LONG_BREAK if self.is_long_break_due else Mode.SHORT_BREAK
            )
            auto_start = self._config.auto_start_breaks
        else:
            next_mode = Mode.WORK
            auto_start = self._config.auto_start_pomodoros

        self._enter_mode(next_mode)
        logger.info(
            "%s complete → %s (%d work sessions done)",
            previous.value, next_mode.value, self._completed_work_sessions,
        )

        if auto_start:
            self._auto_start_timer.start()
            logger.debug(
                "Auto-start scheduled in %dms",
                self._auto_start_timer.interval(),
            )

        self.period_completed.emit(PeriodCompleted(
            previous_mode=previous,
            next_mode=next_mode,
            is_long_break=next_mode is Mode.LONG_BREAK,
            completed_work_sessions=self._completed_work_sessions,
            auto_start=auto_start,
        ))

    def _enter_mode(self, mode: Mode) -> None:
        changed = mode is not self._mode
        self._mode = mode
        self._total_time = self.duration_for(mode)
        self._remaining = self._total_time
        if changed:
            self.mode_changed.emit(mode)

    def _on_auto_start(self) -> None:
        logger.debug("Auto-starting %s", self._mode.value)
        self.start()
