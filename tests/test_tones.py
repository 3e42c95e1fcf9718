from __future__ import annotations

import numpy as np
import pytest

from beeper.audio import tones
from beeper.audio.tones import AudioDeviceError, AudioSettings, BeepQueue, render_tone
from beeper.workout.model import BeepLevel


def test_render_tone_shape_and_envelope() -> None:
    settings = AudioSettings(sample_rate=8000, volume=0.5)

    samples = render_tone(BeepLevel.MID.frequency_hz, settings)

    assert samples.dtype == np.int16
    assert samples.shape == (4000,)
    assert samples[0] == 0
    assert samples[-1] == 0
    peak = int(np.abs(samples).max())
    assert 0.45 * 32767 < peak <= 0.5 * 32767


def test_render_tone_fades_in_and_out() -> None:
    settings = AudioSettings(sample_rate=8000, volume=1.0)

    samples = np.abs(render_tone(450.0, settings).astype(np.int32))

    body = samples[1600:2400].max()
    assert samples[:80].max() < body / 5
    assert samples[-80:].max() < body / 5


def test_render_tone_clamps_volume() -> None:
    loud = render_tone(750.0, AudioSettings(sample_rate=8000, volume=3.0))
    mute = render_tone(750.0, AudioSettings(sample_rate=8000, volume=-1.0))

    assert int(np.abs(loud.astype(np.int32)).max()) <= 32767
    assert not mute.any()


def test_beep_requires_open_queue() -> None:
    audio = BeepQueue()

    assert not audio.is_open
    with pytest.raises(AudioDeviceError):
        audio.beep(BeepLevel.HIGH)


def test_close_without_open_is_noop() -> None:
    BeepQueue().close()


def test_open_beep_close_on_dummy_driver(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    audio = BeepQueue(AudioSettings(sample_rate=22050))

    audio.open()
    assert audio.is_open
    for level in (BeepLevel.HIGH, BeepLevel.MID, BeepLevel.LOW):
        audio.beep(level)
    audio.close()

    assert not audio.is_open
    with pytest.raises(AudioDeviceError):
        audio.beep(BeepLevel.HIGH)


def test_open_reports_mixer_init_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def no_device(*_args: object, **_kwargs: object) -> None:
        raise tones._pygame.error("no audio device")

    monkeypatch.setattr(tones._pygame.mixer, "init", no_device)

    with pytest.raises(AudioDeviceError, match="no audio device"):
        BeepQueue().open()


def test_open_releases_mixer_when_clips_fail(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    def broken_sound(*_args: object) -> None:
        raise tones._pygame.error("bad sample format")

    monkeypatch.setattr(tones._pygame.mixer, "init", lambda **_kwargs: calls.append("init"))
    monkeypatch.setattr(tones._pygame.mixer, "get_init", lambda: (44100, -16, 1))
    monkeypatch.setattr(tones._pygame.mixer, "quit", lambda: calls.append("quit"))
    monkeypatch.setattr(tones._pygame.sndarray, "make_sound", broken_sound)
    audio = BeepQueue()

    with pytest.raises(AudioDeviceError, match="bad sample format"):
        audio.open()

    assert calls == ["init", "quit"]
    assert not audio.is_open


class StuckChannel:
    def __init__(self) -> None:
        self.played: list[object] = []

    def get_queue(self) -> object:
        return object()

    def get_busy(self) -> bool:
        return False

    def queue(self, clip: object) -> None:
        self.played.append(clip)

    def play(self, clip: object) -> None:
        self.played.append(clip)


def test_close_stops_feeder_that_cannot_drain(monkeypatch: pytest.MonkeyPatch) -> None:
    channel = StuckChannel()
    monkeypatch.setattr(tones._pygame.mixer, "init", lambda **_kwargs: None)
    monkeypatch.setattr(tones._pygame.mixer, "get_init", lambda: (44100, -16, 1))
    monkeypatch.setattr(tones._pygame.mixer, "quit", lambda: None)
    monkeypatch.setattr(tones._pygame.mixer, "Channel", lambda _index: channel)
    monkeypatch.setattr(tones._pygame.sndarray, "make_sound", lambda samples: samples)
    audio = BeepQueue()
    audio.open()
    feeder = audio._feeder
    assert feeder is not None

    audio.beep(BeepLevel.HIGH)
    audio.close(drain_timeout_sec=0.05)

    feeder.join(timeout=1.0)
    assert not feeder.is_alive()
    assert not audio.is_open
    assert channel.played == []
