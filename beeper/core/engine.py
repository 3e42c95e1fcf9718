"""Runtime engine wiring audio output, playback and console narration."""

from __future__ import annotations

import logging

from beeper.audio.tones import BeepQueue
from beeper.core.state import PlaybackState
from beeper.ui.console import ConsoleProgress
from beeper.workout.model import BeepLevel, StartPosition, Workout
from beeper.workout.player import (
    Clock,
    ConfirmCallback,
    PlayerTimings,
    ProgressSink,
    WorkoutPlayer,
)

logger = logging.getLogger(__name__)


class BeeperEngine:
    def __init__(
        self,
        audio: BeepQueue | None = None,
        *,
        clock: Clock | None = None,
        progress: ProgressSink | None = None,
        confirm: ConfirmCallback | None = None,
        timings: PlayerTimings | None = None,
    ) -> None:
        self._audio = audio
        self.state = PlaybackState()
        self._player = WorkoutPlayer(
            self._beep,
            clock=clock,
            progress=progress or ConsoleProgress(),
            confirm=confirm,
            timings=timings,
            state=self.state,
        )

    def run(self, workout: Workout, start: StartPosition | None = None) -> None:
        if self._audio is not None:
            self._audio.open()
        try:
            self._player.play(workout, start or StartPosition())
        finally:
            if self._audio is not None:
                self._audio.close()

    def _beep(self, level: BeepLevel) -> None:
        if self._audio is None:
            logger.debug("Beep %s (silent)", level.name)
            return
        self._audio.beep(level)
