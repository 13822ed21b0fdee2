"""Completion notices and sounds driven by timer engine signals.

The engine never shows anything itself.  ``CompletionNotifier`` listens to
it, chooses the text, and honours the ``show_notifications`` and
``play_sound`` flags of the engine's current configuration.  Anything the
sink or the sound player raises is logged and dropped.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject

from .timer.engine import TimerEngine, Mode, PeriodCompleted


logger = logging.getLogger(__name__)

NotifySink = Callable[[str, str, int], None]

TITLE = "Pomodoro Timer"

WORK_COMPLETE_MESSAGE = "\U0001f345 Work session complete! Time for a break."
BREAK_COMPLETE_MESSAGE = "☕ Break complete! Ready to focus?"
STARTED_MESSAGE = "Pomodoro started!"
PAUSED_MESSAGE = "Pomodoro paused"
RESET_MESSAGE = "Timer reset"

COMPLETION_DURATION_MS = 5000
STATUS_DURATION_MS = 2000


def completion_message(event: PeriodCompleted) -> str:
    if event.previous_mode is Mode.WORK:
        return WORK_COMPLETE_MESSAGE
    return BREAK_COMPLETE_MESSAGE


class CompletionNotifier(QObject):
    """Turns engine signals into notices and sounds.

    *sink* receives ``(title, message, duration_ms)``; *play_sound* is a
    no-argument callable, typically ``SoundManager.play``.
    """

    def __init__(
        self,
        engine: TimerEngine,
        sink: NotifySink,
        play_sound: Callable[[], None] | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._sink = sink
        self._play_sound = play_sound

        engine.period_completed.connect(self._on_period_completed)
        engine.running_changed.connect(self._on_running_changed)
        engine.timer_reset.connect(self._on_timer_reset)

    def _on_period_completed(self, event: PeriodCompleted) -> None:
        config = self._engine.config
        if config.show_notifications:
            self._notify(completion_message(event), COMPLETION_DURATION_MS)
        if config.play_sound and self._play_sound is not None:
            try:
                self._play_sound()
            except Exception:
                logger.exception("Sound playback failed")

    def _on_running_changed(self, running: bool) -> None:
        self._notify(STARTED_MESSAGE if running else PAUSED_MESSAGE)

    def _on_timer_reset(self) -> None:
        self._notify(RESET_MESSAGE)

    def _notify(self, message: str, duration_ms: int = STATUS_DURATION_MS) -> None:
        try:
            self._sink(TITLE, message, duration_ms)
        except Exception:
            logger.exception("Notification failed: %s", message)
