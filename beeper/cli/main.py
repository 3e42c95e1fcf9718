"""Terminal CLI entrypoint for the workout beeper."""

from __future__ import annotations

import argparse
import logging
import sys

from beeper.audio.tones import AudioDeviceError, AudioSettings, BeepQueue
from beeper.core import config
from beeper.core.engine import BeeperEngine
from beeper.ui.console import print_outline
from beeper.workout.model import (
    StartPosition,
    format_start_position,
    parse_start_position,
)
from beeper.workout.parser import WorkoutParseError, load_workout
from beeper.workout.player import PlaybackError, PlayerTimings


def _start_position_arg(raw: str) -> StartPosition:
    try:
        return parse_start_position(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser(defaults: config.Defaults | None = None) -> argparse.ArgumentParser:
    defaults = defaults or config.Defaults()
    parser = argparse.ArgumentParser(description="Interval beeper for plain-text workouts")
    parser.add_argument("workout", help="Path to the workout file")
    parser.add_argument(
        "start",
        nargs="?",
        type=_start_position_arg,
        default=StartPosition(),
        help="Resume position SET[/SET_REP].EXERCISE (1-based)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the workout outline and estimated length without playing it",
    )
    parser.add_argument("--silent", action="store_true", help="Play without audio output")
    parser.add_argument(
        "--volume",
        type=float,
        default=defaults.volume,
        help="Beep volume between 0 and 1",
    )
    parser.add_argument(
        "--lead-in",
        type=float,
        default=defaults.lead_in_sec,
        help="Seconds to wait before the first section starts",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    try:
        defaults = config.load_defaults()
    except config.ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    parser = build_parser(defaults)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        workout = load_workout(args.workout)
    except (OSError, WorkoutParseError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.list:
        print_outline(workout)
        return 0

    audio = None
    if not args.silent:
        audio = BeepQueue(AudioSettings(sample_rate=defaults.sample_rate, volume=args.volume))
    engine = BeeperEngine(audio, timings=PlayerTimings(lead_in_sec=max(0.0, args.lead_in)))

    try:
        engine.run(workout, args.start)
    except KeyboardInterrupt:
        resume = format_start_position(engine.state.resume_position())
        print(f"\nStopped. Resume with: {args.workout} {resume}")
        return 130
    except (PlaybackError, AudioDeviceError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
