"""Real-time workout playback driven by blocking sleeps and beep cues."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Protocol

from beeper.core.state import PlaybackState
from beeper.workout.model import (
    BeepLevel,
    Exercise,
    RepsAmount,
    SetElement,
    StartPosition,
    Workout,
    WorkoutSet,
)

logger = logging.getLogger(__name__)

BeepCallback = Callable[[BeepLevel], None]
ConfirmCallback = Callable[[], None]

OPENING_FANFARE: tuple[BeepLevel, ...] = (BeepLevel.HIGH, BeepLevel.MID, BeepLevel.LOW)
CLOSING_FANFARE: tuple[BeepLevel, ...] = tuple(reversed(OPENING_FANFARE))


class PlaybackError(RuntimeError):
    """Raised when a workout cannot be played to the end."""


class StartPositionOutOfBoundsError(PlaybackError):
    pass


class ConfirmationError(PlaybackError):
    pass


class Clock(Protocol):
    def sleep(self, seconds: float) -> None: ...


class SystemClock:
    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class ProgressSink(Protocol):
    def workout_started(self, workout: Workout) -> None: ...

    def resume_point(self, workout_set: WorkoutSet, start: StartPosition) -> None: ...

    def section_started(self, workout_set: WorkoutSet, set_index: int) -> None: ...

    def repetition_started(self, workout_set: WorkoutSet, repetition_index: int) -> None: ...

    def element_started(self, element: SetElement) -> None: ...

    def midpoint_reached(self, exercise: Exercise) -> None: ...

    def next_up(self, exercise: Exercise) -> None: ...

    def awaiting_confirmation(self, exercise: Exercise) -> None: ...

    def set_rest_started(self, workout_set: WorkoutSet, rest_sec: int) -> None: ...

    def rest_warning(self, seconds_left: float) -> None: ...

    def workout_completed(self, workout: Workout) -> None: ...


class NullProgress:
    """Progress sink that discards every event."""

    def __getattr__(self, name: str) -> Callable[..., None]:
        return _ignore


def _ignore(*_args: object, **_kwargs: object) -> None:
    return None


@dataclass(frozen=True)
class PlayerTimings:
    pre_section_wait_sec: float = 2.0
    warning_window_sec: float = 5.0
    lead_in_sec: float = 6.0
    finish_pause_sec: float = 2.0


def read_confirmation() -> None:
    try:
        input()
    except EOFError as exc:
        raise ConfirmationError("Input closed while waiting for confirmation") from exc
    except OSError as exc:
        raise ConfirmationError(f"Unable to read confirmation: {exc}") from exc


def resolve_start_element(workout: Workout, start: StartPosition) -> int:
    """Return the element index of the exercise ``start`` points at."""
    if start.set_index >= len(workout.sets):
        raise StartPositionOutOfBoundsError(
            f"Starting set {start.set_index + 1} is out of bounds "
            f"(workout has {len(workout.sets)} sets)"
        )
    workout_set = workout.sets[start.set_index]
    if start.repetition_index >= workout_set.reps:
        raise StartPositionOutOfBoundsError(
            f"Starting repetition {start.repetition_index + 1} is out of bounds "
            f"(set repeats {workout_set.reps} times)"
        )

    seen = 0
    for index, element in enumerate(workout_set.elements):
        if not isinstance(element, Exercise):
            continue
        if seen == start.exercise_index:
            return index
        seen += 1
    raise StartPositionOutOfBoundsError(
        f"Starting exercise {start.exercise_index + 1} is out of bounds "
        f"(set has {seen} exercises)"
    )


class WorkoutPlayer:
    def __init__(
        self,
        beep: BeepCallback,
        *,
        clock: Clock | None = None,
        progress: ProgressSink | None = None,
        confirm: ConfirmCallback | None = None,
        timings: PlayerTimings | None = None,
        state: PlaybackState | None = None,
    ) -> None:
        self._beep = beep
        self._clock = clock or SystemClock()
        self._progress: ProgressSink = progress or NullProgress()
        self._confirm = confirm or read_confirmation
        self._timings = timings or PlayerTimings()
        self.state = state or PlaybackState()

    def play(self, workout: Workout, start: StartPosition = StartPosition()) -> None:
        resume_element = 0
        if not start.is_beginning:
            resume_element = resolve_start_element(workout, start)
        self.state.enter_repetition(start.set_index, start.repetition_index)
        self.state.exercise_index = start.exercise_index

        self._progress.workout_started(workout)
        self._fanfare(OPENING_FANFARE)

        if not start.is_beginning:
            logger.info("Resuming at %s (element %d)", start, resume_element)
            self._progress.resume_point(workout.sets[start.set_index], start)

        first = True
        for set_index in range(start.set_index, len(workout.sets)):
            workout_set = workout.sets[set_index]
            self._progress.section_started(workout_set, set_index)

            first_repetition = 0
            if first:
                self._clock.sleep(self._timings.lead_in_sec)
                first_repetition = start.repetition_index

            for repetition in range(first_repetition, workout_set.reps):
                self.state.enter_repetition(set_index, repetition)
                if first:
                    self.state.exercise_index = start.exercise_index
                if repetition > 0:
                    self._progress.repetition_started(workout_set, repetition)

                self._beep(BeepLevel.MID)
                self._beep(BeepLevel.MID)
                self._clock.sleep(self._timings.pre_section_wait_sec)

                first_element = resume_element if first else 0
                first = False
                for element_index in range(first_element, len(workout_set.elements)):
                    self._play_element(workout_set, element_index)

                if repetition < workout_set.reps - 1 and workout_set.set_rest_sec is not None:
                    self._progress.set_rest_started(workout_set, workout_set.set_rest_sec)
                    self._rest_with_warning(
                        max(0.0, workout_set.set_rest_sec - self._timings.pre_section_wait_sec)
                    )

        self.state.completed = True
        self._progress.workout_completed(workout)
        self._clock.sleep(self._timings.finish_pause_sec)
        self._fanfare(CLOSING_FANFARE)
        self._clock.sleep(self._timings.finish_pause_sec)

    def _fanfare(self, levels: tuple[BeepLevel, ...]) -> None:
        for level in levels:
            self._beep(level)

    def _play_element(self, workout_set: WorkoutSet, index: int) -> None:
        element = workout_set.elements[index]
        self._progress.element_started(element)

        if isinstance(element, Exercise):
            self.state.exercise_index = sum(
                1 for prior in workout_set.elements[:index] if isinstance(prior, Exercise)
            )
            self._play_exercise(element)
            return

        following = workout_set.elements[index + 1] if index + 1 < len(workout_set.elements) else None
        if isinstance(following, Exercise):
            self._progress.next_up(following)
        self._rest_with_warning(element.duration_sec)

    def _play_exercise(self, exercise: Exercise) -> None:
        self._beep(BeepLevel.HIGH)

        amount = exercise.amount
        if isinstance(amount, RepsAmount):
            self._progress.awaiting_confirmation(exercise)
            self._confirm()
            return

        if amount.midbeep:
            half = amount.duration_sec / 2
            self._clock.sleep(half)
            self._progress.midpoint_reached(exercise)
            self._beep(BeepLevel.MID)
            self._clock.sleep(half)
        else:
            self._clock.sleep(amount.duration_sec)
        self._beep(BeepLevel.LOW)

    def _rest_with_warning(self, total_sec: float) -> None:
        window = self._timings.warning_window_sec
        if total_sec > window:
            self._clock.sleep(total_sec - window)
            self._progress.rest_warning(window)
            self._beep(BeepLevel.MID)
            self._clock.sleep(window)
        else:
            self._clock.sleep(total_sec)


def play_workout(
    workout: Workout,
    start: StartPosition,
    beep: BeepCallback,
    *,
    clock: Clock | None = None,
    progress: ProgressSink | None = None,
    confirm: ConfirmCallback | None = None,
    timings: PlayerTimings | None = None,
) -> PlaybackState:
    player = WorkoutPlayer(
        beep, clock=clock, progress=progress, confirm=confirm, timings=timings
    )
    player.play(workout, start)
    return player.state
