"""Host integration for PomoTimer: tray icon, commands and the widget.

``PomodoroApp`` owns the one ``TimerEngine`` and wires every collaborator
to it.  Nothing here touches engine internals.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, Qt, QTimer
from PyQt6.QtGui import QAction, QIcon, QImage, QPainter, QColor, QPen, QPixmap
from PyQt6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

from .audio.sounds import SoundManager
from .notifications import CompletionNotifier
from .settings import Settings, TimerConfig, load_settings, save_settings
from .timer.engine import TimerEngine, Mode
from .ui.settings_dialog import SettingsDialog
from .ui.styles import MODE_COLORS
from .ui.timer_widget import PomodoroWidget, format_time


logger = logging.getLogger(__name__)

IDLE_TOOLTIP = "Pomodoro Timer"
TOOLTIP_REFRESH_MS = 1000


# ── tray‑icon image generation ────────────────────────────────────────────


def _make_tray_icon(mode: Mode, running: bool) -> QIcon:
    """Generate a clock-face tray icon tinted for *mode*.

    - running:  filled circle
    - stopped:  circle outline
    """
    size = 64
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(MODE_COLORS[mode])

    cx, cy, r = size // 2, size // 2, size // 2 - 4
    if running:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
    else:
        p.setPen(QPen(colour, 4))
        p.setBrush(Qt.BrushStyle.NoBrush)
    p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
    p.end()

    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


def tray_tooltip(engine: TimerEngine) -> str:
    if engine.is_running:
        return f"Pomodoro: {format_time(engine.time_remaining)}"
    return IDLE_TOOLTIP


class PomodoroApp(QObject):
    """Composes the engine with its tray icon, widget, notices and sound."""

    def __init__(
        self,
        settings: Settings | None = None,
        parent: QObject | None = None,
        *,
        sound_manager: SoundManager | None = None,
    ) -> None:
        super().__init__(parent)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()

        # ── engine ────────────────────────────────────────────────────
        self._engine = TimerEngine(self._settings.timer_config(), self)

        # ── tray ──────────────────────────────────────────────────────
        self._tray_icon = QSystemTrayIcon(self)
        self._tray_icon.setToolTip(IDLE_TOOLTIP)
        self._build_tray_menu()
        self._update_tray_icon()
        self._tray_icon.activated.connect(self._on_tray_activated)

        # ── collaborators ─────────────────────────────────────────────
        self._sound_manager = sound_manager or SoundManager(parent=self)
        self._notifier = CompletionNotifier(
            self._engine,
            self._show_message,
            self._sound_manager.play,
            parent=self,
        )
        self._widget: PomodoroWidget | None = None
        self._shut_down = False

        # ── tooltip refresh (once per second, like the countdown) ─────
        self._tooltip_timer = QTimer(self)
        self._tooltip_timer.setInterval(TOOLTIP_REFRESH_MS)
        self._tooltip_timer.timeout.connect(self._refresh_tooltip)
        self._tooltip_timer.start()

        self._engine.running_changed.connect(self._on_running_changed)
        self._engine.mode_changed.connect(self._on_mode_changed)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def widget(self) -> PomodoroWidget | None:
        return self._widget

    def show_tray(self) -> None:
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon.show()
        else:
            logger.warning("No system tray available; opening the widget instead")
            self.open_timer()

    def open_timer(self) -> None:
        """Show the floating widget at its saved position."""
        if self._widget is None:
            self._widget = PomodoroWidget(self._engine)
            self._widget.move(self._settings.widget_x, self._settings.widget_y)
            self._widget.position_changed.connect(self._on_widget_moved)
        self._widget.show()
        self._widget.raise_()

    def open_settings(self) -> None:
        dialog = SettingsDialog(
            self._settings, on_config_changed=self._apply_config,
        )
        dialog.exec()

    def quit(self) -> None:
        """Tear down every timer, persist settings and leave the event loop."""
        self.shutdown()
        app = QApplication.instance()
        if app is not None:
            app.quit()

    def shutdown(self) -> None:
        if self._shut_down:
            return
        self._shut_down = True
        self._tooltip_timer.stop()
        self._engine.shutdown()
        self._tray_icon.hide()
        if self._widget is not None:
            self._widget.close()
        self._save_settings()

    # ══════════════════════════════════════════════════════════════════
    #  SYSTEM TRAY
    # ══════════════════════════════════════════════════════════════════

    def _build_tray_menu(self) -> None:
        """Create the context menu holding every command."""
        menu = QMenu()
        self._tray_menu = menu

        open_action = menu.addAction("Open Pomodoro Timer")
        open_action.triggered.connect(self.open_timer)

        menu.addSeparator()

        self._toggle_action: QAction = menu.addAction("Start/Pause Timer")
        self._toggle_action.triggered.connect(self._engine.toggle)

        reset_action = menu.addAction("Reset Timer")
        reset_action.triggered.connect(self._engine.reset)

        skip_action = menu.addAction("Skip")
        skip_action.triggered.connect(self._engine.skip)

        menu.addSeparator()

        settings_action = menu.addAction("Settings…")
        settings_action.triggered.connect(self.open_settings)

        quit_action = menu.addAction("Quit")
        quit_action.triggered.connect(self.quit)

        self._tray_icon.setContextMenu(menu)

    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        """Left-click on tray icon → open the widget."""
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self.open_timer()

    def _show_message(self, title: str, message: str, duration_ms: int) -> None:
        self._tray_icon.showMessage(
            title, message, QSystemTrayIcon.MessageIcon.Information, duration_ms,
        )

    def _refresh_tooltip(self) -> None:
        self._tray_icon.setToolTip(tray_tooltip(self._engine))

    def _update_tray_icon(self) -> None:
        self._tray_icon.setIcon(
            _make_tray_icon(self._engine.mode, self._engine.is_running)
        )

    def _on_running_changed(self, running: bool) -> None:
        self._update_tray_icon()
        self._refresh_tooltip()

    def _on_mode_changed(self, mode: Mode) -> None:
        self._update_tray_icon()

    # ══════════════════════════════════════════════════════════════════
    #  SETTINGS / WIDGET PERSISTENCE
    # ══════════════════════════════════════════════════════════════════

    def _apply_config(self, config: TimerConfig) -> None:
        self._engine.update_configuration(config)
        if self._widget is not None:
            self._widget.refresh()

    def _on_widget_moved(self, x: int, y: int) -> None:
        self._settings.widget_x = x
        self._settings.widget_y = y
        self._save_settings()

    def _save_settings(self) -> None:
        try:
            save_settings(self._settings)
        except OSError:
            logger.exception("Could not save settings")
