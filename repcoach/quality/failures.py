"""Pose coverage checks that gate the geometric form rules.

A frame is only judged when every keypoint an exercise relies on is present
and above the confidence floor; otherwise the validator degrades to a single
"cannot see" warning for that frame.
"""

from __future__ import annotations

from typing import Dict, Tuple

from repcoach.config import ExerciseType
from repcoach.vision import keypoints as kp
from repcoach.vision.keypoints import Pose

REQUIRED_KEYPOINTS: Dict[ExerciseType, Tuple[str, ...]] = {
    ExerciseType.PUSHUPS: (
        kp.LEFT_SHOULDER,
        kp.RIGHT_SHOULDER,
        kp.LEFT_ELBOW,
        kp.RIGHT_ELBOW,
        kp.LEFT_WRIST,
        kp.RIGHT_WRIST,
        kp.LEFT_HIP,
        kp.RIGHT_HIP,
        kp.LEFT_KNEE,
        kp.RIGHT_KNEE,
        kp.LEFT_ANKLE,
        kp.RIGHT_ANKLE,
    ),
    ExerciseType.PULLUPS: (
        kp.LEFT_SHOULDER,
        kp.RIGHT_SHOULDER,
        kp.LEFT_ELBOW,
        kp.RIGHT_ELBOW,
        kp.LEFT_WRIST,
        kp.RIGHT_WRIST,
        kp.NOSE,
    ),
    # Ankles are optional; the knee rule is skipped when either is absent,
    # whatever its score.
    ExerciseType.SITUPS: (
        kp.LEFT_SHOULDER,
        kp.RIGHT_SHOULDER,
        kp.LEFT_HIP,
        kp.RIGHT_HIP,
        kp.LEFT_KNEE,
        kp.RIGHT_KNEE,
        kp.NOSE,
    ),
}


def missing_required_keypoints(exercise: ExerciseType, pose: Pose, floor: float) -> Tuple[str, ...]:
    """Required keypoints for ``exercise`` that are absent or below ``floor``."""
    return pose.missing(REQUIRED_KEYPOINTS.get(exercise, ()), floor)
