"""Workout domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BeepLevel(Enum):
    HIGH = 750.0
    MID = 600.0
    LOW = 450.0

    @property
    def frequency_hz(self) -> float:
        return self.value


@dataclass(frozen=True)
class TimedAmount:
    duration_sec: int
    midbeep: bool = False

    def __str__(self) -> str:
        text = format_duration(self.duration_sec)
        return f'{text}"' if self.midbeep else text


@dataclass(frozen=True)
class RepsAmount:
    count: int

    def __str__(self) -> str:
        return f"x{self.count}"


ExerciseAmount = TimedAmount | RepsAmount


@dataclass(frozen=True)
class Exercise:
    name: str
    amount: ExerciseAmount

    @property
    def is_timed(self) -> bool:
        return isinstance(self.amount, TimedAmount)

    @property
    def duration_sec(self) -> int:
        # Rep-based exercises are operator confirmed and never timed.
        if isinstance(self.amount, TimedAmount):
            return self.amount.duration_sec
        return 0

    def __str__(self) -> str:
        return f"[EXERCISE]: {self.name} {self.amount}"


@dataclass(frozen=True)
class Rest:
    duration_sec: int

    def __str__(self) -> str:
        return f"[REST]: {format_duration(self.duration_sec)}"


SetElement = Exercise | Rest


@dataclass(frozen=True)
class WorkoutSet:
    name: str | None
    elements: tuple[SetElement, ...]
    reps: int = 1
    set_rest_sec: int | None = None

    @property
    def exercise_count(self) -> int:
        return sum(1 for element in self.elements if isinstance(element, Exercise))

    @property
    def duration_sec(self) -> int:
        parts = sum(element.duration_sec for element in self.elements)
        rests = (self.set_rest_sec or 0) * (self.reps - 1)
        return rests + parts * self.reps

    @property
    def label(self) -> str:
        label = self.name or "[UNKNOWN]"
        if self.reps > 1:
            label += f" x{self.reps}"
        return label


@dataclass(frozen=True)
class Workout:
    name: str
    sets: tuple[WorkoutSet, ...]

    @property
    def total_duration_sec(self) -> int:
        """Estimated length; rep-based exercises count as zero."""
        return sum(workout_set.duration_sec for workout_set in self.sets)

    @property
    def summary(self) -> str:
        return f"{self.name} [~{self.total_duration_sec / 60:.1f} mins]"


@dataclass(frozen=True)
class StartPosition:
    """Zero-based (set, set repetition, exercise) resume point."""

    set_index: int = 0
    repetition_index: int = 0
    exercise_index: int = 0

    @property
    def is_beginning(self) -> bool:
        return self == StartPosition()


def format_duration(seconds: float) -> str:
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def parse_start_position(raw: str) -> StartPosition:
    """Parse ``SET[/SET_REP].EXERCISE`` (1-based) into a StartPosition.

    Each component is decremented with saturation, so ``0`` and an empty
    component both map to index 0.
    """
    head, sep, exercise = raw.strip().partition(".")
    if not sep:
        raise ValueError("Starting position format: SET[/SET_REP].EXERCISE")
    set_part, _, rep_part = head.partition("/")
    return StartPosition(
        set_index=_saturating_index(set_part, "SET"),
        repetition_index=_saturating_index(rep_part, "SET_REP"),
        exercise_index=_saturating_index(exercise, "EXERCISE"),
    )


def format_start_position(position: StartPosition) -> str:
    return (
        f"{position.set_index + 1}/{position.repetition_index + 1}"
        f".{position.exercise_index + 1}"
    )


def _saturating_index(raw: str, field_name: str) -> int:
    text = raw.strip()
    if text == "":
        return 0
    if not (text.isascii() and text.isdigit()):
        raise ValueError(f"Starting position {field_name} must be a number, got '{raw}'")
    return max(0, int(text) - 1)
