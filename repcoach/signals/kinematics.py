"""Per-pose scalar signals used by the rep detector.

Each signal falls back to a fixed default when the keypoints it needs are
missing. The elbow angle also treats keypoints below the confidence floor as
missing. The defaults sit at the "resting" end of the movement (arm straight,
chin far below the bar, torso flat) so an unreadable frame can never be
mistaken for the bottom of a rep.
"""

from __future__ import annotations

from repcoach.config import DEFAULT_REP_THRESHOLDS, RepThresholds
from repcoach.signals.geometry import calculate_angle
from repcoach.vision.keypoints import (
    LEFT_ELBOW,
    LEFT_HIP,
    LEFT_SHOULDER,
    LEFT_WRIST,
    NOSE,
    RIGHT_WRIST,
    Pose,
)


def elbow_angle(pose: Pose, thresholds: RepThresholds = DEFAULT_REP_THRESHOLDS) -> float:
    """Left shoulder-elbow-wrist angle in degrees."""
    floor = thresholds.confidence_floor
    shoulder = pose.confident_keypoint(LEFT_SHOULDER, floor)
    elbow = pose.confident_keypoint(LEFT_ELBOW, floor)
    wrist = pose.confident_keypoint(LEFT_WRIST, floor)
    if shoulder is None or elbow is None or wrist is None:
        return thresholds.pushup_default_angle
    return calculate_angle(shoulder, elbow, wrist)


def chin_to_bar_distance(pose: Pose, thresholds: RepThresholds = DEFAULT_REP_THRESHOLDS) -> float:
    """Vertical nose offset from the mean wrist height.

    Negative when the chin is above the hands (over the bar). Keypoint scores
    are not checked here; only absent keypoints fall back to the default.
    """
    nose = pose.keypoint(NOSE)
    left = pose.keypoint(LEFT_WRIST)
    right = pose.keypoint(RIGHT_WRIST)
    if nose is None or left is None or right is None:
        return thresholds.pullup_default_distance
    return nose.y - (left.y + right.y) / 2


def upper_body_angle(pose: Pose, thresholds: RepThresholds = DEFAULT_REP_THRESHOLDS) -> float:
    """Nose-shoulder-hip angle in degrees, measured on the left side.

    Like :func:`chin_to_bar_distance`, only absent keypoints use the default.
    """
    nose = pose.keypoint(NOSE)
    shoulder = pose.keypoint(LEFT_SHOULDER)
    hip = pose.keypoint(LEFT_HIP)
    if nose is None or shoulder is None or hip is None:
        return thresholds.situp_default_angle
    return calculate_angle(nose, shoulder, hip)
