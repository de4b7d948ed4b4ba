"""Shared configuration and enumerations used across the analysis core."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ExerciseType(str, Enum):
    """Exercises known to the wider application.

    Only pushups, pullups and situps carry geometric rules; ``run`` is timed
    and has nothing to analyse in a pose.
    """

    PUSHUPS = "pushups"
    PULLUPS = "pullups"
    SITUPS = "situps"
    RUN = "run"


POSE_EXERCISES = frozenset({ExerciseType.PUSHUPS, ExerciseType.PULLUPS, ExerciseType.SITUPS})


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def coerce_exercise(exercise: Union[ExerciseType, str, None]) -> Optional[ExerciseType]:
    """Return the enum member for ``exercise`` or None if it is not recognised."""
    if isinstance(exercise, ExerciseType):
        return exercise
    try:
        return ExerciseType(exercise)
    except ValueError:
        return None


@dataclass(frozen=True)
class FormThresholds:
    """Per-frame form rule limits.

    Attributes:
        confidence_floor: Keypoints scoring below this are treated as absent.
        elbow_min / elbow_max: Inclusive pushup elbow angle range (degrees).
        back_min: Minimum shoulder-hip-knee angle for a straight pushup body.
        depth_distance: Shoulder-to-elbow distance (pixels) that must be
            reached on at least one side to count as going low enough.
        pullup_extension_min: Minimum elbow angle for extended pullup arms.
        situp_upright_min: Minimum nose-shoulder-hip angle when sitting up.
        situp_knee_max: Maximum hip-knee-ankle angle for bent knees.
    """

    confidence_floor: float = 0.3
    elbow_min: float = 70.0
    elbow_max: float = 110.0
    back_min: float = 160.0
    depth_distance: float = 30.0
    pullup_extension_min: float = 150.0
    situp_upright_min: float = 60.0
    situp_knee_max: float = 130.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence_floor <= 1.0:
            raise ValueError("confidence_floor must be within [0, 1]")
        if self.elbow_min > self.elbow_max:
            raise ValueError("elbow_min must not exceed elbow_max")


@dataclass(frozen=True)
class RepThresholds:
    """Windowed rep detection constants.

    The defaults substituted for missing keypoints describe the "safe" end of
    each movement so that an unreadable frame never looks like the bottom of a
    rep.
    """

    confidence_floor: float = 0.3
    min_history: int = 5
    window: int = 5

    pushup_default_angle: float = 180.0
    pushup_down_below: float = 90.0
    pushup_up_above: float = 150.0

    pullup_default_distance: float = 100.0
    pullup_over_bar_below: float = 0.0
    pullup_extended_above: float = 50.0

    situp_default_angle: float = 0.0
    situp_down_below: float = 30.0
    situp_up_above: float = 70.0

    def __post_init__(self) -> None:
        if self.window < 1:
            raise ValueError("window must be at least 1")
        if self.min_history < 1:
            raise ValueError("min_history must be at least 1")


@dataclass(frozen=True)
class SessionConfig:
    """Caller-side aggregation settings for a timed exercise session."""

    history_size: int = 10
    initial_score: float = 100.0
    invalid_frame_penalty: float = 0.5
    rep_cooldown: float = 1.0
    duration: float = 120.0

    def __post_init__(self) -> None:
        if self.history_size < 1:
            raise ValueError("history_size must be positive")
        if self.invalid_frame_penalty < 0:
            raise ValueError("invalid_frame_penalty must be non-negative")
        if self.rep_cooldown < 0:
            raise ValueError("rep_cooldown must be non-negative")
        if self.duration <= 0:
            raise ValueError("duration must be positive")


DEFAULT_FORM_THRESHOLDS = FormThresholds()
DEFAULT_REP_THRESHOLDS = RepThresholds()
