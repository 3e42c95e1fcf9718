"""Environment-variable-based defaults for the beeper CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

_T = TypeVar("_T", int, float)


class ConfigError(ValueError):
    """Raised when an environment override cannot be parsed."""


@dataclass(frozen=True)
class Defaults:
    volume: float = 0.5
    sample_rate: int = 44100
    lead_in_sec: float = 6.0


def load_defaults() -> Defaults:
    return Defaults(
        volume=_env_number("BEEPER_VOLUME", "0.5", float),
        sample_rate=_env_number("BEEPER_SAMPLE_RATE", "44100", int),
        lead_in_sec=_env_number("BEEPER_LEAD_IN", "6", float),
    )


def _env_number(name: str, default: str, cast: Callable[[str], _T]) -> _T:
    raw = os.environ.get(name, default)
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got '{raw}'") from exc
