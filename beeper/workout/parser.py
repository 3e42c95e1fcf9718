"""Plain-text workout file parser.

A workout file looks like::

    Workout Morning
    Set Warmup
      Exercise Jumping jacks 00:30
      Rest 00:10
    Set Core x3
      Exercise Plank 01:00"
      Exercise Push ups x15
    Set rest 01:00

Blank lines and leading indentation are ignored.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from beeper.workout.model import (
    Exercise,
    ExerciseAmount,
    RepsAmount,
    Rest,
    SetElement,
    TimedAmount,
    Workout,
    WorkoutSet,
)

logger = logging.getLogger(__name__)

_EXERCISE_KEYWORDS = frozenset({"Exercise", "Excercise"})
_REST_KEYWORD = "Rest"
_SET_REST_PREFIX = "Set rest "
_DURATION_TOKEN_LEN = 5
_TWO_DIGITS = re.compile(r"[0-9]{2}")
_REPS_TOKEN = re.compile(r"x([0-9]+)")

_Line = tuple[int, str]


class WorkoutParseError(ValueError):
    """Raised when a workout file is invalid."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        super().__init__(f"Line {line}: {message}" if line is not None else message)


class MissingWorkoutNameError(WorkoutParseError):
    pass


class ExpectedSetError(WorkoutParseError):
    pass


class MissingAmountError(WorkoutParseError):
    pass


class BadRepsError(WorkoutParseError):
    pass


class BadDurationError(WorkoutParseError):
    pass


class MalformedDurationTokenError(BadDurationError):
    """Duration token shorter than the fixed ``MM:SS`` width."""


class EmptyWorkoutError(WorkoutParseError):
    pass


def load_workout(path: str | Path) -> Workout:
    file_path = Path(path)
    workout = parse_workout(file_path.read_text(encoding="utf-8"))
    logger.debug(
        "Loaded workout '%s' from %s (%d sets)", workout.name, file_path, len(workout.sets)
    )
    return workout


def parse_workout(text: str) -> Workout:
    lines: list[_Line] = [
        (number, raw.strip())
        for number, raw in enumerate(text.splitlines(), start=1)
        if raw.strip()
    ]
    if not lines:
        raise MissingWorkoutNameError("Didn't provide workout name")

    first_number, first_line = lines[0]
    keyword, _, name = first_line.partition(" ")
    if keyword != "Workout" or not name.strip():
        raise MissingWorkoutNameError("Didn't provide workout name", first_number)

    sets: list[WorkoutSet] = []
    cursor = 1
    while cursor < len(lines):
        workout_set, cursor = _parse_set(lines, cursor)
        sets.append(workout_set)

    if not sets:
        raise EmptyWorkoutError("Workout must contain at least one set", first_number)
    return Workout(name=name.strip(), sets=tuple(sets))


def parse_duration(token: str, *, line: int | None = None) -> int:
    """Parse a fixed-width ``MM:SS`` token into seconds.

    Only the first five characters are read; anything after them (such as
    the midpoint marker ``"``) is ignored.
    """
    if len(token) < _DURATION_TOKEN_LEN:
        raise MalformedDurationTokenError(
            f"Duration '{token}' is too short, expected MM:SS", line
        )
    minutes, separator, seconds = token[:2], token[2], token[3:5]
    if separator != ":" or not _TWO_DIGITS.fullmatch(minutes) or not _TWO_DIGITS.fullmatch(seconds):
        raise BadDurationError(f"Couldn't parse duration '{token}', expected MM:SS", line)
    return int(minutes) * 60 + int(seconds)


def _parse_set(lines: list[_Line], cursor: int) -> tuple[WorkoutSet, int]:
    number, line = lines[cursor]
    if not line.startswith("Set") or line[3:4] not in ("", " ", "\t"):
        raise ExpectedSetError("Expected start of set", number)
    name, reps = _parse_set_header(line[3:].strip(), number)
    cursor += 1

    elements: list[SetElement] = []
    while cursor < len(lines):
        element = _parse_element(*lines[cursor])
        if element is None:
            break
        elements.append(element)
        cursor += 1

    set_rest_sec: int | None = None
    if cursor < len(lines) and lines[cursor][1].startswith(_SET_REST_PREFIX):
        rest_number, rest_line = lines[cursor]
        token = rest_line[len(_SET_REST_PREFIX):].strip()
        try:
            set_rest_sec = parse_duration(token, line=rest_number)
        except BadDurationError:
            logger.debug("Line %d: ignoring unparsable set rest '%s'", rest_number, token)
        cursor += 1

    return (
        WorkoutSet(name=name, elements=tuple(elements), reps=reps, set_rest_sec=set_rest_sec),
        cursor,
    )


def _parse_set_header(remainder: str, number: int) -> tuple[str | None, int]:
    if not remainder:
        return None, 1

    head, _, last = remainder.rpartition(" ")
    match = _REPS_TOKEN.fullmatch(last)
    if match is None:
        return remainder, 1

    reps = int(match.group(1))
    if reps < 1:
        raise BadRepsError("Set repetitions must be >= 1", number)
    return head.strip() or None, reps


def _parse_element(number: int, line: str) -> SetElement | None:
    keyword, _, rest = line.partition(" ")
    rest = rest.strip()
    if not rest:
        return None

    if keyword in _EXERCISE_KEYWORDS:
        name, _, amount = rest.rpartition(" ")
        if not name.strip():
            raise MissingAmountError("No amount provided for exercise", number)
        return Exercise(name=name.strip(), amount=_parse_amount(amount, number))

    if keyword == _REST_KEYWORD:
        return Rest(duration_sec=parse_duration(rest, line=number))

    return None


def _parse_amount(token: str, number: int) -> ExerciseAmount:
    if token.startswith("x"):
        match = _REPS_TOKEN.fullmatch(token)
        if match is None or int(match.group(1)) < 1:
            raise BadRepsError(f"Couldn't parse exercise reps '{token}'", number)
        return RepsAmount(count=int(match.group(1)))

    return TimedAmount(
        duration_sec=parse_duration(token, line=number),
        midbeep=token.endswith('"'),
    )
