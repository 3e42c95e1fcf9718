from __future__ import annotations

import pytest

from beeper.workout.model import (
    BeepLevel,
    Exercise,
    RepsAmount,
    Rest,
    StartPosition,
    TimedAmount,
    Workout,
    WorkoutSet,
    format_duration,
    format_start_position,
    parse_start_position,
)


def test_length_counts_set_rest_between_repetitions_only() -> None:
    repeated = Workout(name="W", sets=(WorkoutSet(name=None, elements=(), reps=3, set_rest_sec=10),))
    single = Workout(name="W", sets=(WorkoutSet(name=None, elements=(), reps=1, set_rest_sec=300),))

    assert repeated.total_duration_sec == 20
    assert single.total_duration_sec == 0


def test_length_skips_rep_based_exercises() -> None:
    workout_set = WorkoutSet(
        name="Core",
        elements=(
            Exercise(name="Plank", amount=TimedAmount(duration_sec=60, midbeep=True)),
            Exercise(name="Push ups", amount=RepsAmount(count=15)),
            Rest(duration_sec=30),
        ),
        reps=2,
        set_rest_sec=60,
    )
    workout = Workout(name="Core day", sets=(workout_set,))

    assert workout.total_duration_sec == 60 + 90 * 2
    assert workout.summary == "Core day [~4.0 mins]"
    assert workout_set.exercise_count == 2


def test_labels_and_descriptions() -> None:
    assert WorkoutSet(name=None, elements=()).label == "[UNKNOWN]"
    assert WorkoutSet(name="Legs", elements=(), reps=4).label == "Legs x4"
    assert str(Exercise(name="Plank", amount=TimedAmount(90, midbeep=True))) == (
        '[EXERCISE]: Plank 01:30"'
    )
    assert str(Exercise(name="Squats", amount=RepsAmount(12))) == "[EXERCISE]: Squats x12"
    assert str(Rest(duration_sec=45)) == "[REST]: 00:45"


def test_beep_levels_carry_pitch() -> None:
    assert BeepLevel.HIGH.frequency_hz == 750.0
    assert BeepLevel.MID.frequency_hz == 600.0
    assert BeepLevel.LOW.frequency_hz == 450.0


def test_format_duration() -> None:
    assert format_duration(5) == "00:05"
    assert format_duration(754) == "12:34"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1.1", StartPosition(0, 0, 0)),
        ("2.3", StartPosition(1, 0, 2)),
        ("2/3.4", StartPosition(1, 2, 3)),
        ("0/0.0", StartPosition(0, 0, 0)),
        ("/.", StartPosition(0, 0, 0)),
    ],
)
def test_parse_start_position(raw: str, expected: StartPosition) -> None:
    assert parse_start_position(raw) == expected


@pytest.mark.parametrize("raw", ["3", "a.1", "1/x.2", "-1.1"])
def test_parse_start_position_rejects_bad_input(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_start_position(raw)


def test_format_start_position_is_one_based() -> None:
    position = StartPosition(set_index=1, repetition_index=2, exercise_index=0)

    assert format_start_position(position) == "2/3.1"
    assert parse_start_position(format_start_position(position)) == position


def test_default_start_is_beginning() -> None:
    assert StartPosition().is_beginning
    assert not StartPosition(exercise_index=1).is_beginning
