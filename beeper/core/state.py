"""Mutable playback cursor shared between the player and the CLI."""

from __future__ import annotations

from dataclasses import dataclass

from beeper.workout.model import StartPosition


@dataclass
class PlaybackState:
    set_index: int = 0
    repetition_index: int = 0
    exercise_index: int = 0
    completed: bool = False

    def enter_repetition(self, set_index: int, repetition_index: int) -> None:
        self.set_index = set_index
        self.repetition_index = repetition_index
        self.exercise_index = 0

    def resume_position(self) -> StartPosition:
        return StartPosition(
            set_index=self.set_index,
            repetition_index=self.repetition_index,
            exercise_index=self.exercise_index,
        )
