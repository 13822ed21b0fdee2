"""Settings dialog for PomoTimer.

A modal dialog for timer durations, auto-start behaviour and completion
notices.  Every change is validated into a ``TimerConfig``, saved to disk
immediately and handed to the caller so the engine picks it up.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QCheckBox, QPushButton, QFrame, QWidget,
)

from ..settings import (
    Settings, TimerConfig, ConfigError, save_settings,
    WORK_DURATION_RANGE, SHORT_BREAK_RANGE, LONG_BREAK_RANGE, SESSIONS_RANGE,
)


logger = logging.getLogger(__name__)


class SettingsDialog(QDialog):
    """Modal dialog for all user preferences."""

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        on_config_changed: Callable[[TimerConfig], None] | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Pomodoro Timer Settings")
        self.setMinimumWidth(380)
        self.setModal(True)

        self._settings = settings
        self._on_config_changed = on_config_changed
        self._populating = False

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        # ── Durations section ────────────────────────────────────────
        root.addWidget(self._section_label("Pomodoro Timer Settings"))
        timer_form = QFormLayout()
        timer_form.setHorizontalSpacing(20)
        timer_form.setVerticalSpacing(10)

        self._work_spin = self._spin(WORK_DURATION_RANGE, " min")
        timer_form.addRow("Work duration:", self._work_spin)

        self._short_spin = self._spin(SHORT_BREAK_RANGE, " min")
        timer_form.addRow("Short break:", self._short_spin)

        self._long_spin = self._spin(LONG_BREAK_RANGE, " min")
        timer_form.addRow("Long break:", self._long_spin)

        self._sessions_spin = self._spin(SESSIONS_RANGE)
        timer_form.addRow("Sessions before long break:", self._sessions_spin)

        root.addLayout(timer_form)
        root.addWidget(self._separator())

        # ── Behavior section ─────────────────────────────────────────
        root.addWidget(self._section_label("Behavior"))
        self._auto_breaks_cb = self._checkbox("Auto-start breaks")
        self._auto_work_cb = self._checkbox("Auto-start pomodoros")
        root.addWidget(self._auto_breaks_cb)
        root.addWidget(self._auto_work_cb)

        root.addWidget(self._separator())

        # ── Notifications section ────────────────────────────────────
        root.addWidget(self._section_label("Notifications"))
        self._notif_cb = self._checkbox("Show notifications")
        self._sound_cb = self._checkbox("Play sound")
        root.addWidget(self._notif_cb)
        root.addWidget(self._sound_cb)

        # ── close button ─────────────────────────────────────────────
        root.addStretch()
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    # ── helpers ──────────────────────────────────────────────────────

    def _spin(self, limits: tuple[int, int], suffix: str = "") -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(*limits)
        spin.setSuffix(suffix)
        spin.valueChanged.connect(self._on_changed)
        return spin

    def _checkbox(self, text: str) -> QCheckBox:
        cb = QCheckBox(text)
        cb.toggled.connect(self._on_changed)
        return cb

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        return lbl

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        return line

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE FROM SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        s = self._settings
        self._populating = True
        try:
            self._work_spin.setValue(s.work_duration)
            self._short_spin.setValue(s.short_break)
            self._long_spin.setValue(s.long_break)
            self._sessions_spin.setValue(s.sessions_before_long_break)
            self._auto_breaks_cb.setChecked(s.auto_start_breaks)
            self._auto_work_cb.setChecked(s.auto_start_pomodoros)
            self._notif_cb.setChecked(s.show_notifications)
            self._sound_cb.setChecked(s.play_sound)
        finally:
            self._populating = False

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLER — save immediately
    # ══════════════════════════════════════════════════════════════════

    def _on_changed(self) -> None:
        if self._populating:
            return
        try:
            config = TimerConfig(
                work_duration=self._work_spin.value(),
                short_break=self._short_spin.value(),
                long_break=self._long_spin.value(),
                sessions_before_long_break=self._sessions_spin.value(),
                auto_start_breaks=self._auto_breaks_cb.isChecked(),
                auto_start_pomodoros=self._auto_work_cb.isChecked(),
                show_notifications=self._notif_cb.isChecked(),
                play_sound=self._sound_cb.isChecked(),
            )
        except ConfigError:
            logger.warning("Rejected settings change", exc_info=True)
            return

        self._settings.apply_timer_config(config)
        try:
            save_settings(self._settings)
        except OSError:
            logger.exception("Could not save settings")
        if self._on_config_changed is not None:
            self._on_config_changed(config)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> Settings:
        return self._settings
