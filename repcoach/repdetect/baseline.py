"""Windowed rep detection for pushups, pullups and situps.

A rep is reported when the most recent ``window`` history poses contain the
bottom of the movement (the window minimum of a per-pose signal crosses the
"down" threshold) and the current pose is back at the top (its signal crosses
the "up" threshold).

No state is kept between calls: the implicit AWAITING_DOWN / DOWN_SEEN state
is re-derived from the history on every frame, which tolerates isolated
dropped frames inside the window. The flip side is that the detector keeps
returning True while the exerciser stays up and the bottom is still inside the
window; debouncing is left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Union

from repcoach.config import DEFAULT_REP_THRESHOLDS, ExerciseType, RepThresholds, coerce_exercise
from repcoach.signals import kinematics
from repcoach.vision.keypoints import Pose

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepRule:
    """Signal and thresholds describing one exercise's down -> up cycle."""

    signal: Callable[[Pose, RepThresholds], float]
    down_below: Callable[[RepThresholds], float]
    up_above: Callable[[RepThresholds], float]


REP_RULES: Dict[ExerciseType, RepRule] = {
    ExerciseType.PUSHUPS: RepRule(
        signal=kinematics.elbow_angle,
        down_below=lambda t: t.pushup_down_below,
        up_above=lambda t: t.pushup_up_above,
    ),
    ExerciseType.PULLUPS: RepRule(
        signal=kinematics.chin_to_bar_distance,
        down_below=lambda t: t.pullup_over_bar_below,
        up_above=lambda t: t.pullup_extended_above,
    ),
    ExerciseType.SITUPS: RepRule(
        signal=kinematics.upper_body_angle,
        down_below=lambda t: t.situp_down_below,
        up_above=lambda t: t.situp_up_above,
    ),
}


def rep_rule(exercise: Union[ExerciseType, str]) -> Optional[RepRule]:
    exercise_type = coerce_exercise(exercise)
    if exercise_type is None:
        return None
    return REP_RULES.get(exercise_type)


def window_signal(
    exercise: Union[ExerciseType, str],
    history: Sequence[Pose],
    thresholds: RepThresholds = DEFAULT_REP_THRESHOLDS,
) -> List[float]:
    """Signal values for the trailing detection window, oldest first."""
    rule = rep_rule(exercise)
    if rule is None:
        return []
    return [rule.signal(pose, thresholds) for pose in list(history)[-thresholds.window:]]


def detect_rep(
    exercise: Union[ExerciseType, str],
    current: Pose,
    history: Sequence[Pose],
    thresholds: RepThresholds = DEFAULT_REP_THRESHOLDS,
) -> bool:
    """Return True if ``current`` completes a rep given the recent ``history``.

    Args:
        exercise: Exercise enum member or its string value.
        current: Pose of the frame being evaluated. It is not expected to be
            in ``history`` yet.
        history: Caller-owned poses ordered oldest to newest. Only the
            trailing window is read; the sequence is never modified.
        thresholds: Detection constants; defaults are the tuned contract.

    Returns:
        False when the history is shorter than ``thresholds.min_history`` or
        the exercise has no rep rule.
    """
    if len(history) < thresholds.min_history:
        return False

    rule = rep_rule(exercise)
    if rule is None:
        logger.debug("No rep rule for exercise %r", exercise)
        return False

    was_down = min(window_signal(exercise, history, thresholds)) < rule.down_below(thresholds)
    is_up = rule.signal(current, thresholds) > rule.up_above(thresholds)

    if was_down and is_up:
        logger.debug("Rep boundary detected for %s", coerce_exercise(exercise).value)
        return True
    return False
