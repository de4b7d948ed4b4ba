"""JSON-lines recordings of pose streams.

A trace stores one pose per line so a session captured from the live
estimator can be replayed offline through the form validator and rep
detector. The format is intentionally simple to ease inspection::

    {"score": 0.91, "keypoints": [{"name": "nose", "x": 1.0, "y": 2.0, "score": 0.9}]}

A line holding ``null`` marks a frame in which the estimator found no pose.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Iterable, Iterator, Optional

from repcoach.vision.keypoints import Keypoint, Pose


class PoseTraceError(ValueError):
    """Raised when a trace line cannot be decoded into a pose."""


def _pose_to_json(pose: Optional[Pose]) -> str:
    if pose is None:
        return "null"
    payload = {
        "score": pose.score,
        "keypoints": [asdict(kp) for kp in pose.keypoints],
    }
    return json.dumps(payload)


def _pose_from_obj(obj: Optional[dict]) -> Optional[Pose]:
    if obj is None:
        return None
    keypoints = [Keypoint(**kp) for kp in obj["keypoints"]]
    return Pose(keypoints=tuple(keypoints), score=obj.get("score", 1.0))


def save_poses(trace_file: Path, poses: Iterable[Optional[Pose]], *, overwrite: bool = True) -> Path:
    """Write poses (or None for empty frames) to a JSONL trace file.

    Args:
        trace_file: Destination path for the JSONL file.
        poses: Iterable of Pose instances or None.
        overwrite: Whether to overwrite an existing file.
    """

    trace_file.parent.mkdir(parents=True, exist_ok=True)
    if trace_file.exists() and not overwrite:
        raise FileExistsError(f"Trace already exists: {trace_file}")

    with trace_file.open("w", encoding="utf-8") as fh:
        for pose in poses:
            fh.write(_pose_to_json(pose))
            fh.write("\n")
    return trace_file


def load_poses(trace_file: Path) -> Iterator[Optional[Pose]]:
    """Read poses from a JSONL trace file, skipping blank lines."""
    with trace_file.open("r", encoding="utf-8") as fh:
        for lineno, line in enumerate(fh, start=1):
            if not line.strip():
                continue
            try:
                yield _pose_from_obj(json.loads(line))
            except (json.JSONDecodeError, KeyError, TypeError) as exc:
                raise PoseTraceError(f"{trace_file}:{lineno}: invalid pose record ({exc})") from exc
