"""Completion beep synthesis and playback using numpy + QSoundEffect.

The beep is generated programmatically as a WAV file: an 800 Hz sine
whose gain starts at 0.3 and decays exponentially to 0.01 over half a
second.  The file is cached to disk so later launches skip synthesis.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect


logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "PomoTimer"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

BEEP_NAME = "complete"

SAMPLE_RATE = 44100
BEEP_FREQUENCY = 800.0
BEEP_DURATION = 0.5
BEEP_START_GAIN = 0.3
BEEP_END_GAIN = 0.01


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _exponential_ramp(length: int, start: float, end: float) -> np.ndarray:
    """Gain curve from *start* to *end*, linear in log space."""
    return np.geomspace(start, end, length)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def generate_beep() -> bytes:
    """The period-complete beep as WAV bytes."""
    tone = _sine(BEEP_FREQUENCY, BEEP_DURATION)
    gain = _exponential_ramp(len(tone), BEEP_START_GAIN, BEEP_END_GAIN)
    return _to_wav_bytes(tone * gain)


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Caches the beep on disk and plays it.

    Playback problems (no audio device, unwritable cache dir) are logged
    and swallowed so the timer keeps running.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.play()
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effect: QSoundEffect | None = None

        try:
            self._ensure_wav_file()
            self._load_effect()
        except OSError:
            logger.exception("Could not prepare the completion sound")

    # ── public API ────────────────────────────────────────────────────

    def play(self) -> None:
        """Play the beep.  No-op if the sound failed to load."""
        if self._effect is None:
            return
        try:
            self._effect.play()
        except Exception:
            logger.exception("Failed to play sound")

    @property
    def path(self) -> Path:
        return self._sounds_dir / f"{BEEP_NAME}.wav"

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_file(self) -> None:
        """Generate the WAV file if it is not cached yet."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.write_bytes(generate_beep())

    def _load_effect(self) -> None:
        effect = QSoundEffect(self)
        effect.setSource(QUrl.fromLocalFile(str(self.path)))
        effect.setVolume(1.0)
        self._effect = effect
