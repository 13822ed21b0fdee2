"""Tests for the completion notifier: message choice, flags, failure isolation."""

import pytest

from pomotimer.notifications import (
    CompletionNotifier, completion_message,
    WORK_COMPLETE_MESSAGE, BREAK_COMPLETE_MESSAGE,
    STARTED_MESSAGE, PAUSED_MESSAGE, RESET_MESSAGE,
    COMPLETION_DURATION_MS, TITLE,
)
from pomotimer.settings import TimerConfig
from pomotimer.timer.engine import TimerEngine, Mode, PeriodCompleted

from helpers import complete_period


class Recorder:
    def __init__(self):
        self.messages: list[tuple[str, str, int]] = []
        self.sounds = 0

    def notify(self, title, message, duration_ms):
        self.messages.append((title, message, duration_ms))

    def play(self):
        self.sounds += 1

    @property
    def texts(self):
        return [m for _, m, _ in self.messages]


def _make(config: TimerConfig | None = None):
    engine = TimerEngine(config or TimerConfig())
    rec = Recorder()
    notifier = CompletionNotifier(engine, rec.notify, rec.play)
    return engine, rec, notifier


class TestCompletionMessage:

    def test_after_work(self):
        event = PeriodCompleted(Mode.WORK, Mode.SHORT_BREAK, False, 1, False)
        assert completion_message(event) == WORK_COMPLETE_MESSAGE

    @pytest.mark.parametrize("mode", [Mode.SHORT_BREAK, Mode.LONG_BREAK])
    def test_after_break(self, mode):
        event = PeriodCompleted(mode, Mode.WORK, False, 4, False)
        assert completion_message(event) == BREAK_COMPLETE_MESSAGE


class TestCompletionNotifier:

    def test_work_completion_notifies_and_plays(self):
        engine, rec, _n = _make()
        complete_period(engine)
        assert (TITLE, WORK_COMPLETE_MESSAGE, COMPLETION_DURATION_MS) in rec.messages
        assert rec.sounds == 1
        engine.shutdown()

    def test_break_completion_message(self):
        engine, rec, _n = _make()
        engine.skip()
        engine.skip()
        assert rec.texts[-1] == BREAK_COMPLETE_MESSAGE
        assert rec.sounds == 2
        engine.shutdown()

    def test_notifications_disabled(self):
        engine, rec, _n = _make(TimerConfig(show_notifications=False))
        engine.skip()
        assert WORK_COMPLETE_MESSAGE not in rec.texts
        assert rec.sounds == 1
        engine.shutdown()

    def test_sound_disabled(self):
        engine, rec, _n = _make(TimerConfig(play_sound=False))
        engine.skip()
        assert WORK_COMPLETE_MESSAGE in rec.texts
        assert rec.sounds == 0
        engine.shutdown()

    def test_flags_read_at_event_time(self):
        engine, rec, _n = _make()
        engine.update_configuration(TimerConfig(play_sound=False))
        engine.skip()
        assert rec.sounds == 0
        engine.shutdown()

    def test_status_notices(self):
        engine, rec, _n = _make()
        engine.start()
        engine.pause()
        engine.reset()
        assert rec.texts == [STARTED_MESSAGE, PAUSED_MESSAGE, RESET_MESSAGE]
        engine.shutdown()

    def test_shutdown_sends_no_notice(self):
        engine, rec, _n = _make()
        engine.start()
        engine.shutdown()
        assert rec.texts == [STARTED_MESSAGE]

    def test_sink_failure_does_not_reach_engine(self, caplog):
        engine = TimerEngine()

        def broken_sink(title, message, duration_ms):
            raise RuntimeError("notification daemon gone")

        notifier = CompletionNotifier(engine, broken_sink)
        engine.start()
        complete_period(engine)

        assert engine.mode == Mode.SHORT_BREAK
        assert engine.completed_work_sessions == 1
        assert "Notification failed" in caplog.text
        engine.shutdown()

    def test_sound_failure_does_not_reach_engine(self, caplog):
        engine = TimerEngine()
        rec = Recorder()

        def broken_sound():
            raise OSError("no audio device")

        notifier = CompletionNotifier(engine, rec.notify, broken_sound)
        engine.skip()

        assert engine.mode == Mode.SHORT_BREAK
        assert WORK_COMPLETE_MESSAGE in rec.texts
        assert "Sound playback failed" in caplog.text
        engine.shutdown()

    def test_without_sound_player(self):
        engine = TimerEngine()
        rec = Recorder()
        notifier = CompletionNotifier(engine, rec.notify)
        engine.skip()
        assert WORK_COMPLETE_MESSAGE in rec.texts
        engine.shutdown()
