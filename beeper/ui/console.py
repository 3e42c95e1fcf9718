"""Console narration for workout playback."""

from __future__ import annotations

from typing import TextIO

from beeper.workout.model import (
    Exercise,
    SetElement,
    StartPosition,
    Workout,
    WorkoutSet,
    format_duration,
)


class ConsoleProgress:
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def workout_started(self, workout: Workout) -> None:
        self._print(f"Beginning {workout.summary}")

    def resume_point(self, workout_set: WorkoutSet, start: StartPosition) -> None:
        line = f"Starting from set {workout_set.name or '[UNKNOWN]'}"
        if start.repetition_index != 0:
            line += f" ({start.repetition_index + 1} / {workout_set.reps})"
        self._print(f"{line} {start.exercise_index + 1}. exercise")

    def section_started(self, workout_set: WorkoutSet, set_index: int) -> None:
        self._print(f"\nSection {workout_set.label}")

    def repetition_started(self, workout_set: WorkoutSet, repetition_index: int) -> None:
        self._print(f"\nRepeating section ({repetition_index + 1} / {workout_set.reps})")

    def element_started(self, element: SetElement) -> None:
        self._print(f"  {element}")

    def midpoint_reached(self, exercise: Exercise) -> None:
        self._print("    Reached midpoint")

    def next_up(self, exercise: Exercise) -> None:
        self._print(f"    next: {exercise.name}")

    def awaiting_confirmation(self, exercise: Exercise) -> None:
        self._print("    Press enter to continue! ", end="")

    def set_rest_started(self, workout_set: WorkoutSet, rest_sec: int) -> None:
        self._print(f"[REST]: {format_duration(rest_sec)}")

    def rest_warning(self, seconds_left: float) -> None:
        self._print(f"    {seconds_left:.0f}s left")

    def workout_completed(self, workout: Workout) -> None:
        self._print("Reached the end. Good job!")

    def _print(self, text: str, end: str = "\n") -> None:
        print(text, end=end, file=self._stream, flush=True)


def print_outline(workout: Workout, stream: TextIO | None = None) -> None:
    print(workout.summary, file=stream)
    for index, workout_set in enumerate(workout.sets, start=1):
        line = f"{index}. {workout_set.label}"
        if workout_set.set_rest_sec is not None and workout_set.reps > 1:
            line += f" (rest {format_duration(workout_set.set_rest_sec)})"
        print(line, file=stream)
        for element in workout_set.elements:
            print(f"  {element}", file=stream)
