"""Synthetic pose builders with known joint angles and distances.

Image coordinates: x to the right, y downwards, distances in pixels.
"""

import math
from typing import Dict, Tuple

from repcoach.vision.keypoints import Keypoint, Pose


def _offset(origin: Tuple[float, float], length: float, bearing_deg: float) -> Tuple[float, float]:
    rad = math.radians(bearing_deg)
    return (origin[0] + length * math.cos(rad), origin[1] + length * math.sin(rad))


def pushup_pose(elbow_angle: float = 90.0, upper_arm: float = 50.0, knee_drop: float = 0.0) -> Pose:
    """Plank seen from the side.

    ``elbow_angle`` is the left shoulder-elbow-wrist angle, ``upper_arm`` the
    shoulder-to-elbow distance on both sides and ``knee_drop`` lowers the knees
    to bend the shoulder-hip-knee line.
    """
    l_elbow = (100.0, 100.0)
    l_shoulder = (100.0, 100.0 - upper_arm)
    sy = l_shoulder[1]
    r_shoulder = (100.0, sy + 5.0)
    r_elbow = (100.0, sy + 5.0 + upper_arm)
    points: Dict[str, Tuple[float, float]] = {
        "left_shoulder": l_shoulder,
        "left_elbow": l_elbow,
        # bearing measured from the upward shoulder ray
        "left_wrist": _offset(l_elbow, 50.0, elbow_angle - 90.0),
        "right_shoulder": r_shoulder,
        "right_elbow": r_elbow,
        "right_wrist": (100.0, r_elbow[1] + 50.0),
        "left_hip": (200.0, sy),
        "right_hip": (200.0, sy + 5.0),
        "left_knee": (300.0, sy + knee_drop),
        "right_knee": (300.0, sy + 5.0 + knee_drop),
        "left_ankle": (400.0, sy + knee_drop),
        "right_ankle": (400.0, sy + 5.0 + knee_drop),
    }
    return Pose.from_points(points, score=0.9, keypoint_score=0.9)


def pullup_pose(chin_to_bar: float = 60.0, elbow_angle: float = 180.0) -> Pose:
    """Hanging from a bar at y=100; ``chin_to_bar`` is nose.y - 100."""
    l_elbow = (80.0, 150.0)
    r_elbow = (120.0, 150.0)
    points = {
        "nose": (100.0, 100.0 + chin_to_bar),
        "left_wrist": (80.0, 100.0),
        "right_wrist": (120.0, 100.0),
        "left_elbow": l_elbow,
        "right_elbow": r_elbow,
        "left_shoulder": _offset(l_elbow, 50.0, elbow_angle - 90.0),
        "right_shoulder": (120.0, 200.0),
    }
    return Pose.from_points(points, score=0.9, keypoint_score=0.9)


def situp_pose(upper_body_angle: float = 75.0, knee_angle: float = 90.0, with_ankles: bool = True) -> Pose:
    """Side view with hips to the right of the shoulders.

    ``upper_body_angle`` is nose-shoulder-hip, ``knee_angle`` hip-knee-ankle
    on both sides.
    """
    l_shoulder = (100.0, 100.0)
    l_knee = (250.0, 50.0)
    r_knee = (250.0, 55.0)
    points = {
        "nose": _offset(l_shoulder, 50.0, -upper_body_angle),
        "left_shoulder": l_shoulder,
        "right_shoulder": (100.0, 105.0),
        "left_hip": (200.0, 100.0),
        "right_hip": (200.0, 105.0),
        "left_knee": l_knee,
        "right_knee": r_knee,
    }
    if with_ankles:
        points["left_ankle"] = _offset(l_knee, 70.0, 135.0 - knee_angle)
        points["right_ankle"] = _offset(r_knee, 70.0, 135.0 - knee_angle)
    return Pose.from_points(points, score=0.9, keypoint_score=0.9)


def with_keypoint_score(pose: Pose, name: str, score: float) -> Pose:
    return Pose(
        keypoints=tuple(
            Keypoint(kp.name, kp.x, kp.y, score) if kp.name == name else kp for kp in pose.keypoints
        ),
        score=pose.score,
    )


def without_keypoint(pose: Pose, name: str) -> Pose:
    return Pose(keypoints=tuple(kp for kp in pose.keypoints if kp.name != name), score=pose.score)
