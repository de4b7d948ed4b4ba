"""Per-frame exercise form validation.

Each exercise is judged by a short list of geometric rules. Every rule yields
one :class:`FormFeedback` (an ``info`` entry when it passes) and the frame is a
valid rep position only if all of them pass. Nothing here raises: unknown
exercises and unreadable poses come back as ordinary results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Union

from repcoach.config import (
    DEFAULT_FORM_THRESHOLDS,
    ExerciseType,
    FormThresholds,
    Severity,
    coerce_exercise,
)
from repcoach.quality.failures import missing_required_keypoints
from repcoach.signals.geometry import calculate_angle, calculate_distance
from repcoach.vision import keypoints as kp
from repcoach.vision.keypoints import Pose

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormFeedback:
    """One judgment about one form rule."""

    issue: str
    severity: Severity
    is_valid: bool


@dataclass(frozen=True)
class ExerciseValidation:
    """Verdict for a single frame.

    Attributes:
        is_valid_rep: True only if every evaluated rule passed.
        feedback: One entry per evaluated rule, in evaluation order.
    """

    is_valid_rep: bool
    feedback: List[FormFeedback] = field(default_factory=list)


def _passed(issue: str) -> FormFeedback:
    return FormFeedback(issue=issue, severity=Severity.INFO, is_valid=True)


def _failed(issue: str, severity: Severity) -> FormFeedback:
    return FormFeedback(issue=issue, severity=severity, is_valid=False)


def _single(feedback: FormFeedback) -> ExerciseValidation:
    return ExerciseValidation(is_valid_rep=feedback.is_valid, feedback=[feedback])


def _from_rules(feedback: List[FormFeedback]) -> ExerciseValidation:
    return ExerciseValidation(is_valid_rep=all(f.is_valid for f in feedback), feedback=feedback)


def no_pose_validation() -> ExerciseValidation:
    """Result callers report for a frame in which no pose was detected."""
    return _single(_failed("No pose detected", Severity.ERROR))


def _validate_pushup(pose: Pose, limits: FormThresholds) -> ExerciseValidation:
    l_shoulder = pose.keypoint(kp.LEFT_SHOULDER)
    r_shoulder = pose.keypoint(kp.RIGHT_SHOULDER)
    l_elbow = pose.keypoint(kp.LEFT_ELBOW)
    r_elbow = pose.keypoint(kp.RIGHT_ELBOW)
    l_wrist = pose.keypoint(kp.LEFT_WRIST)
    l_hip = pose.keypoint(kp.LEFT_HIP)
    l_knee = pose.keypoint(kp.LEFT_KNEE)

    feedback: List[FormFeedback] = []

    elbow = calculate_angle(l_shoulder, l_elbow, l_wrist)
    if limits.elbow_min <= elbow <= limits.elbow_max:
        feedback.append(_passed("Good elbow angle"))
    else:
        feedback.append(_failed("Improper elbow angle", Severity.WARNING))

    back = calculate_angle(l_shoulder, l_hip, l_knee)
    if back >= limits.back_min:
        feedback.append(_passed("Good back alignment"))
    else:
        feedback.append(_failed("Back not straight", Severity.WARNING))

    # Shallow on both sides invalidates the whole rep.
    left_depth = calculate_distance(l_shoulder, l_elbow)
    right_depth = calculate_distance(r_shoulder, r_elbow)
    if left_depth < limits.depth_distance and right_depth < limits.depth_distance:
        feedback.append(_failed("Not going low enough", Severity.ERROR))
    else:
        feedback.append(_passed("Good depth"))

    return _from_rules(feedback)


def _validate_pullup(pose: Pose, limits: FormThresholds) -> ExerciseValidation:
    nose = pose.keypoint(kp.NOSE)
    l_shoulder = pose.keypoint(kp.LEFT_SHOULDER)
    l_elbow = pose.keypoint(kp.LEFT_ELBOW)
    l_wrist = pose.keypoint(kp.LEFT_WRIST)
    r_wrist = pose.keypoint(kp.RIGHT_WRIST)

    feedback: List[FormFeedback] = []

    avg_wrist_y = (l_wrist.y + r_wrist.y) / 2
    if nose.y > avg_wrist_y:
        feedback.append(_failed("Chin not over bar", Severity.ERROR))
    else:
        feedback.append(_passed("Good chin position"))

    elbow = calculate_angle(l_shoulder, l_elbow, l_wrist)
    if elbow < limits.pullup_extension_min:
        feedback.append(_failed("Arms not fully extended", Severity.WARNING))
    else:
        feedback.append(_passed("Good arm extension"))

    return _from_rules(feedback)


def _validate_situp(pose: Pose, limits: FormThresholds) -> ExerciseValidation:
    nose = pose.keypoint(kp.NOSE)
    l_shoulder = pose.keypoint(kp.LEFT_SHOULDER)
    l_hip = pose.keypoint(kp.LEFT_HIP)
    r_hip = pose.keypoint(kp.RIGHT_HIP)
    l_knee = pose.keypoint(kp.LEFT_KNEE)
    r_knee = pose.keypoint(kp.RIGHT_KNEE)
    l_ankle = pose.keypoint(kp.LEFT_ANKLE)
    r_ankle = pose.keypoint(kp.RIGHT_ANKLE)

    feedback: List[FormFeedback] = []

    upright = calculate_angle(nose, l_shoulder, l_hip)
    if upright < limits.situp_upright_min:
        feedback.append(_failed("Not sitting up enough", Severity.ERROR))
    else:
        feedback.append(_passed("Good upright position"))

    if l_ankle is not None and r_ankle is not None:
        left_knee = calculate_angle(l_hip, l_knee, l_ankle)
        right_knee = calculate_angle(r_hip, r_knee, r_ankle)
        if left_knee > limits.situp_knee_max or right_knee > limits.situp_knee_max:
            feedback.append(_failed("Knees not bent properly", Severity.WARNING))
        else:
            feedback.append(_passed("Good knee position"))
    else:
        logger.debug("Ankles not detected; skipping knee check")

    return _from_rules(feedback)


_VALIDATORS: Dict[ExerciseType, Callable[[Pose, FormThresholds], ExerciseValidation]] = {
    ExerciseType.PUSHUPS: _validate_pushup,
    ExerciseType.PULLUPS: _validate_pullup,
    ExerciseType.SITUPS: _validate_situp,
}


def validate(
    exercise: Union[ExerciseType, str],
    pose: Pose,
    thresholds: FormThresholds = DEFAULT_FORM_THRESHOLDS,
) -> ExerciseValidation:
    """Judge one frame's pose against the form rules of ``exercise``.

    Args:
        exercise: Exercise enum member or its string value.
        pose: Pose for the frame. Callers handle "no pose at all" themselves
            (see :func:`no_pose_validation`).
        thresholds: Rule limits; defaults reproduce the documented behaviour.

    Returns:
        ``ExerciseValidation`` with one feedback entry per evaluated rule, or
        a single entry when the exercise is unknown or the pose unreadable.
    """
    exercise_type = coerce_exercise(exercise)
    validator = _VALIDATORS.get(exercise_type) if exercise_type is not None else None
    if validator is None:
        logger.debug("No form rules for exercise %r", exercise)
        return _single(_failed("Unknown exercise type", Severity.ERROR))

    missing = missing_required_keypoints(exercise_type, pose, thresholds.confidence_floor)
    if missing:
        logger.debug("Skipping %s form check, unreliable keypoints: %s", exercise_type.value, ", ".join(missing))
        return _single(_failed("Cannot see all body parts clearly", Severity.WARNING))

    return validator(pose, thresholds)


def select_main_feedback(feedback: Sequence[FormFeedback]) -> Optional[FormFeedback]:
    """Pick the entry worth surfacing: first error, else warning, else info."""
    for severity in (Severity.ERROR, Severity.WARNING, Severity.INFO):
        for item in feedback:
            if item.severity == severity:
                return item
    return None
