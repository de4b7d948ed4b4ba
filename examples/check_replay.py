"""Quick check for trace replay.

Synthesizes a pushup trace (plank seen from the side, left elbow bending to
80 degrees and straightening again three times), writes it as JSONL and
replays it through the CLI, printing the session summary.
"""

import math
from pathlib import Path

from repcoach.cli import main
from repcoach.vision.keypoints import Pose
from repcoach.vision.trace import save_poses


def plank(elbow_angle: float) -> Pose:
    wrist_bearing = math.radians(elbow_angle - 90.0)
    return Pose.from_points(
        {
            "left_shoulder": (100, 50),
            "left_elbow": (100, 100),
            "left_wrist": (100 + 50 * math.cos(wrist_bearing), 100 + 50 * math.sin(wrist_bearing)),
            "right_shoulder": (100, 55),
            "right_elbow": (100, 105),
            "right_wrist": (100, 155),
            "left_hip": (200, 50),
            "right_hip": (200, 55),
            "left_knee": (300, 50),
            "right_knee": (300, 55),
            "left_ankle": (400, 50),
            "right_ankle": (400, 55),
        },
        score=0.9,
        keypoint_score=0.9,
    )


def main_check() -> None:
    trace = Path("examples/_tmp_pushups.jsonl")
    cycle = [170.0] * 10 + [150.0, 120.0, 95.0, 80.0, 80.0, 95.0, 120.0, 150.0] + [170.0] * 10
    save_poses(trace, (plank(angle) for angle in cycle * 3))
    main(["--log-level", "INFO", "replay", str(trace), "--exercise", "pushups", "--fps", "10"])


if __name__ == "__main__":
    main_check()
