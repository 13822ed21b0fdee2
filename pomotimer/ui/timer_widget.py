"""Floating timer widget.

Layout (top → bottom):
    - Header: 🍅 title + close button (drag here to move the window)
    - Session counter ("Session 2 of 4")
    - Large MM:SS countdown
    - ▶ / ⏸ / ↻ buttons
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QEvent, QObject, QPoint, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
)

from ..timer.engine import TimerEngine, Mode
from .styles import widget_stylesheet


def format_time(seconds: int) -> str:
    """``MM:SS`` for a non-negative number of seconds."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def session_text(completed: int, sessions_before_long_break: int) -> str:
    return f"Session {completed + 1} of {sessions_before_long_break}"


class PomodoroWidget(QWidget):
    """Small always-on-top window showing and controlling the engine.

    The widget only reads engine state and calls its public operations.
    """

    position_changed = pyqtSignal(int, int)

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._drag_offset: QPoint | None = None

        self.setWindowTitle("Pomodoro Timer")
        self.setWindowFlags(
            Qt.WindowType.Tool
            | Qt.WindowType.FramelessWindowHint
            | Qt.WindowType.WindowStaysOnTopHint
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)

        self._build_ui()
        self._connect_signals()
        self.refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        container = QFrame(self)
        container.setObjectName("container")
        root.addWidget(container)

        layout = QVBoxLayout(container)
        layout.setContentsMargins(12, 8, 12, 12)
        layout.setSpacing(6)

        # ── header (draggable) ───────────────────────────────────────
        self._header = QFrame(container)
        self._header.setObjectName("header")
        self._header.setCursor(Qt.CursorShape.SizeAllCursor)
        self._header.installEventFilter(self)
        header_row = QHBoxLayout(self._header)
        header_row.setContentsMargins(0, 0, 0, 0)

        self._title_label = QLabel("\U0001f345", self._header)
        self._title_label.setObjectName("title")
        header_row.addWidget(self._title_label)
        header_row.addStretch()

        self._close_btn = QPushButton("×", self._header)
        self._close_btn.setObjectName("close")
        header_row.addWidget(self._close_btn)
        layout.addWidget(self._header)

        # ── session counter ──────────────────────────────────────────
        self._session_label = QLabel(container)
        self._session_label.setObjectName("session")
        self._session_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._session_label)

        # ── countdown ────────────────────────────────────────────────
        self._timer_label = QLabel(container)
        self._timer_label.setObjectName("timer")
        self._timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._timer_label)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(8)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_btn = QPushButton("▶", container)
        self._start_btn.setToolTip("Start")
        self._pause_btn = QPushButton("⏸", container)
        self._pause_btn.setToolTip("Pause")
        self._reset_btn = QPushButton("↻", container)
        self._reset_btn.setToolTip("Reset")

        btn_row.addWidget(self._start_btn)
        btn_row.addWidget(self._pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_btn.clicked.connect(self._engine.start)
        self._pause_btn.clicked.connect(self._engine.pause)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._close_btn.clicked.connect(self.close)

        self._engine.tick.connect(self._on_tick)
        self._engine.running_changed.connect(self._on_running_changed)
        self._engine.mode_changed.connect(self._on_mode_changed)
        self._engine.period_completed.connect(self._on_period_completed)

    # ── slots ─────────────────────────────────────────────────────────────

    def refresh(self) -> None:
        """Redraw everything from the engine's current state."""
        self._on_tick(self._engine.time_remaining)
        self._on_running_changed(self._engine.is_running)
        self._on_mode_changed(self._engine.mode)

    def _on_period_completed(self, _event) -> None:
        self.refresh()

    def _on_tick(self, remaining: int) -> None:
        self._timer_label.setText(format_time(remaining))
        self._session_label.setText(session_text(
            self._engine.completed_work_sessions,
            self._engine.config.sessions_before_long_break,
        ))

    def _on_running_changed(self, running: bool) -> None:
        self._start_btn.setEnabled(not running)
        self._pause_btn.setEnabled(running)

    def _on_mode_changed(self, mode: Mode) -> None:
        self.setStyleSheet(widget_stylesheet(mode))

    # ── dragging ──────────────────────────────────────────────────────────

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if obj is self._header:
            kind = event.type()
            if (
                kind == QEvent.Type.MouseButtonPress
                and event.button() == Qt.MouseButton.LeftButton
            ):
                self._drag_offset = (
                    event.globalPosition().toPoint() - self.frameGeometry().topLeft()
                )
                return True
            if kind == QEvent.Type.MouseMove and self._drag_offset is not None:
                self.move(event.globalPosition().toPoint() - self._drag_offset)
                return True
            if kind == QEvent.Type.MouseButtonRelease and self._drag_offset is not None:
                self._drag_offset = None
                self.position_changed.emit(self.x(), self.y())
                return True
        return super().eventFilter(obj, event)
