"""UI package."""

from .timer_widget import PomodoroWidget, format_time
from .settings_dialog import SettingsDialog

__all__ = [
    "PomodoroWidget",
    "format_time",
    "SettingsDialog",
]
