"""QSS stylesheet and mode colors for the floating timer widget."""

from __future__ import annotations

from ..timer.engine import Mode

# ── mode colors (timer text + widget border) ────────────────────────────

WORK_COLOR = "#e74c3c"
BREAK_COLOR = "#2ecc71"

MODE_COLORS: dict[Mode, str] = {
    Mode.WORK:        WORK_COLOR,
    Mode.SHORT_BREAK: BREAK_COLOR,
    Mode.LONG_BREAK:  BREAK_COLOR,
}

# ── widget stylesheet ───────────────────────────────────────────────────

_WIDGET_QSS = """
QFrame#container {{
    background-color: #1e1e1e;
    border: 2px solid {border};
    border-radius: 10px;
}}
QFrame#header {{
    background: transparent;
    border: none;
}}
QLabel {{
    color: #dcddde;
    background: transparent;
    border: none;
}}
QLabel#title {{
    font-size: 16px;
}}
QLabel#session {{
    font-size: 11px;
    color: #999999;
}}
QLabel#timer {{
    font-size: 32px;
    font-weight: 700;
    color: {border};
}}
QPushButton {{
    background-color: #2b2b2b;
    color: #dcddde;
    border: 1px solid #3a3a3a;
    border-radius: 6px;
    min-width: 32px;
    min-height: 28px;
    font-size: 14px;
}}
QPushButton:disabled {{
    color: #666666;
}}
QPushButton#close {{
    background: transparent;
    border: none;
    min-width: 20px;
    min-height: 20px;
}}
"""


def widget_stylesheet(mode: Mode) -> str:
    """Stylesheet for the floating widget tinted for *mode*."""
    return _WIDGET_QSS.format(border=MODE_COLORS[mode])
