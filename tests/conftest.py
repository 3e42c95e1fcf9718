from __future__ import annotations

from typing import Any, Callable

import pytest

from beeper.workout.model import BeepLevel


class FakeClock:
    def __init__(self, timeline: list[tuple[Any, ...]]) -> None:
        self._timeline = timeline

    def sleep(self, seconds: float) -> None:
        self._timeline.append(("sleep", seconds))


class RecordingProgress:
    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def __getattr__(self, name: str) -> Callable[..., None]:
        if name.startswith("_"):
            raise AttributeError(name)

        def record(*args: Any) -> None:
            self.events.append((name, *args))

        return record

    def names(self) -> list[str]:
        return [event[0] for event in self.events]


@pytest.fixture
def timeline() -> list[tuple[Any, ...]]:
    return []


@pytest.fixture
def clock(timeline: list[tuple[Any, ...]]) -> FakeClock:
    return FakeClock(timeline)


@pytest.fixture
def beep(timeline: list[tuple[Any, ...]]) -> Callable[[BeepLevel], None]:
    def _beep(level: BeepLevel) -> None:
        timeline.append(("beep", level))

    return _beep


@pytest.fixture
def confirm(timeline: list[tuple[Any, ...]]) -> Callable[[], None]:
    def _confirm() -> None:
        timeline.append(("confirm",))

    return _confirm


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()
