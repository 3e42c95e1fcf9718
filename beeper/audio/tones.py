"""Beep tone rendering and gapless playback on a pygame mixer channel."""

from __future__ import annotations

import importlib
import logging
import os
import queue
import threading
import time
from dataclasses import dataclass
from typing import Any

import numpy as np

from beeper.workout.model import BeepLevel

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

_pygame: Any
try:
    _pygame = importlib.import_module("pygame")
except ImportError:  # pragma: no cover - runtime dependency guard
    _pygame = None

logger = logging.getLogger(__name__)

_POLL_SEC = 0.005


class AudioDeviceError(RuntimeError):
    """Raised when the audio output cannot be opened."""


@dataclass(frozen=True)
class AudioSettings:
    sample_rate: int = 44100
    volume: float = 0.5
    beep_sec: float = 0.5
    fade_in_sec: float = 0.1
    fade_out_sec: float = 0.1


def render_tone(frequency_hz: float, settings: AudioSettings | None = None) -> np.ndarray:
    """Render a mono int16 sine beep with a fade-in and a tail fade to silence."""
    cfg = settings or AudioSettings()
    total = int(round(cfg.sample_rate * cfg.beep_sec))
    t = np.arange(total, dtype=np.float64) / cfg.sample_rate
    wave = np.sin(2.0 * np.pi * frequency_hz * t)

    envelope = np.ones(total, dtype=np.float64)
    fade_in = min(total, int(round(cfg.sample_rate * cfg.fade_in_sec)))
    if fade_in > 0:
        envelope[:fade_in] = np.linspace(0.0, 1.0, fade_in)
    fade_out = min(total, int(round(cfg.sample_rate * cfg.fade_out_sec)))
    if fade_out > 0:
        envelope[total - fade_out:] *= np.linspace(1.0, 0.0, fade_out)

    volume = max(0.0, min(1.0, cfg.volume))
    return (wave * envelope * volume * 32767).astype(np.int16)


def _ensure_pygame_available() -> None:
    if _pygame is None:
        raise AudioDeviceError("pygame is not installed. Run: pip install pygame")


class BeepQueue:
    """Pre-rendered beep clips fed back to back onto one mixer channel.

    ``beep`` never blocks; a feeder thread owns the channel and uses its
    single-slot queue so consecutive clips play without gaps.
    """

    def __init__(self, settings: AudioSettings | None = None) -> None:
        self._settings = settings or AudioSettings()
        self._pending: queue.Queue[BeepLevel | None] = queue.Queue()
        self._clips: dict[BeepLevel, Any] = {}
        self._channel: Any = None
        self._feeder: threading.Thread | None = None
        self._stopping = threading.Event()

    @property
    def is_open(self) -> bool:
        return self._feeder is not None and self._feeder.is_alive()

    def open(self) -> None:
        if self.is_open:
            return
        _ensure_pygame_available()
        try:
            _pygame.mixer.init(
                frequency=self._settings.sample_rate, size=-16, channels=1, buffer=512
            )
        except _pygame.error as exc:
            raise AudioDeviceError(f"Unable to open audio output: {exc}") from exc

        _, _, channels = _pygame.mixer.get_init()
        try:
            for level in BeepLevel:
                samples = render_tone(level.frequency_hz, self._settings)
                if channels > 1:
                    samples = np.repeat(samples.reshape(-1, 1), channels, axis=1)
                self._clips[level] = _pygame.sndarray.make_sound(np.ascontiguousarray(samples))
            self._channel = _pygame.mixer.Channel(0)
        except (_pygame.error, ValueError) as exc:
            _pygame.mixer.quit()
            self._clips.clear()
            raise AudioDeviceError(f"Unable to prepare beep clips: {exc}") from exc

        self._stopping.clear()
        self._feeder = threading.Thread(
            target=self._feed, args=(self._channel,), name="beep-feeder", daemon=True
        )
        self._feeder.start()
        logger.debug("Audio output opened (%d Hz, %d channels)", self._settings.sample_rate, channels)

    def beep(self, level: BeepLevel) -> None:
        if not self.is_open:
            raise AudioDeviceError("Audio output is not open")
        self._pending.put(level)

    def close(self, drain_timeout_sec: float = 3.0) -> None:
        if self._feeder is None:
            return
        self._pending.put(None)
        self._feeder.join(timeout=drain_timeout_sec)
        if self._feeder.is_alive():
            logger.warning("Beep feeder did not drain in %.1fs, dropping pending beeps", drain_timeout_sec)
            self._stopping.set()
            self._feeder.join(timeout=drain_timeout_sec)
        deadline = time.monotonic() + drain_timeout_sec
        while self._channel.get_busy() and time.monotonic() < deadline:
            time.sleep(_POLL_SEC)
        _pygame.mixer.quit()
        self._feeder = None
        self._channel = None
        self._pending = queue.Queue()
        logger.debug("Audio output closed")

    def __enter__(self) -> BeepQueue:
        self.open()
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def _feed(self, channel: Any) -> None:
        while not self._stopping.is_set():
            level = self._pending.get()
            if level is None:
                return
            clip = self._clips[level]
            while channel.get_queue() is not None:
                if self._stopping.is_set():
                    return
                time.sleep(_POLL_SEC)
            if channel.get_busy():
                channel.queue(clip)
            else:
                channel.play(clip)
