"""Command-line interface for replaying recorded pose traces.

Usage:
    repcoach replay trace.jsonl --exercise pushups [--fps 30]
    repcoach check trace.jsonl --exercise situps

``replay`` runs the trace through an :class:`~repcoach.session.ExerciseSession`
with a clock derived from the frame rate and prints the session summary as
JSON. ``check`` prints the main form feedback for every frame.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from repcoach.config import ExerciseType, SessionConfig
from repcoach.quality.form import no_pose_validation, select_main_feedback, validate
from repcoach.session import ExerciseSession
from repcoach.vision.trace import PoseTraceError, load_poses

logger = logging.getLogger(__name__)


def eprint(*args: object) -> None:
    print(*args, file=sys.stderr)


class FrameClock:
    """Clock advanced by the replay loop, one frame at a time."""

    def __init__(self, fps: float) -> None:
        self.frame_index = 0
        self.fps = fps

    def __call__(self) -> float:
        return self.frame_index / self.fps


def replay(trace: Path, exercise: str, fps: float, config: SessionConfig = SessionConfig()) -> dict:
    """Replay ``trace`` and return the session summary as a dict."""
    clock = FrameClock(fps)
    session = ExerciseSession(exercise, config=config, clock=clock)
    session.start()
    frames = 0
    for pose in load_poses(trace):
        if session.is_finished:
            logger.info("Session time elapsed after %d frames; ignoring the rest", frames)
            break
        session.process(pose)
        frames += 1
        clock.frame_index += 1
    summary = asdict(session.summary())
    summary["frames"] = frames
    return summary


def check(trace: Path, exercise: str) -> int:
    for index, pose in enumerate(load_poses(trace)):
        validation = validate(exercise, pose) if pose is not None else no_pose_validation()
        main = select_main_feedback(validation.feedback)
        status = "ok" if validation.is_valid_rep else "invalid"
        issue = main.issue if main is not None else "-"
        severity = main.severity.value if main is not None else "-"
        print(f"{index:6d} {status:8s} {severity:8s} {issue}")
    return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="repcoach", description="Replay pose traces through form checks and rep detection.")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Logging verbosity (default: WARNING)")
    sub = p.add_subparsers(dest="command", required=True)

    exercises = [e.value for e in ExerciseType]

    rp = sub.add_parser("replay", help="Count reps and score form for a recorded trace")
    rp.add_argument("trace", type=Path, help="JSONL pose trace")
    rp.add_argument("--exercise", required=True, choices=exercises)
    rp.add_argument("--fps", type=float, default=30.0, help="Frame rate the trace was recorded at")
    rp.add_argument("--duration", type=float, default=SessionConfig.duration,
                    help="Session length in seconds")

    cp = sub.add_parser("check", help="Print per-frame form feedback for a recorded trace")
    cp.add_argument("trace", type=Path, help="JSONL pose trace")
    cp.add_argument("--exercise", required=True, choices=exercises)
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    try:
        if args.command == "replay":
            if args.fps <= 0:
                raise ValueError("--fps must be positive.")
            summary = replay(args.trace, args.exercise, args.fps, SessionConfig(duration=args.duration))
            print(json.dumps(summary, indent=2))
            return 0
        return check(args.trace, args.exercise)
    except (OSError, PoseTraceError, ValueError) as ex:
        eprint(f"Error: {ex}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
