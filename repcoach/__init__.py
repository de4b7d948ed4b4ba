"""repcoach: exercise form validation and rep detection from pose keypoints.

The core is two pure functions evaluated once per video frame:
:func:`repcoach.quality.form.validate` judges a pose against an exercise's
form rules and :func:`repcoach.repdetect.baseline.detect_rep` decides from a
short rolling history whether a rep just completed. Session bookkeeping lives
in :mod:`repcoach.session`.
"""

from repcoach.config import ExerciseType, Severity
from repcoach.quality.form import ExerciseValidation, FormFeedback, validate
from repcoach.repdetect.baseline import detect_rep
from repcoach.signals.geometry import calculate_angle, calculate_distance
from repcoach.vision.keypoints import Keypoint, Pose

__all__ = [
    "ExerciseType",
    "ExerciseValidation",
    "FormFeedback",
    "Keypoint",
    "Pose",
    "Severity",
    "calculate_angle",
    "calculate_distance",
    "detect_rep",
    "validate",
]

__version__ = "0.1.0"
