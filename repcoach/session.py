"""Caller-side aggregation of per-frame results into a timed exercise session.

The core functions are pure; this module owns everything they leave to the
caller: the rolling pose history, the form score that decays on invalid
frames, the rep counter and its cool-down, and the countdown timer.
"""

from __future__ import annotations

import logging
import math
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Optional, Union

from repcoach.config import ExerciseType, SessionConfig, coerce_exercise
from repcoach.quality.form import (
    ExerciseValidation,
    FormFeedback,
    no_pose_validation,
    select_main_feedback,
    validate,
)
from repcoach.repdetect.baseline import detect_rep
from repcoach.vision.keypoints import Pose

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameResult:
    """What the session derived from one frame."""

    validation: ExerciseValidation
    main_feedback: Optional[FormFeedback]
    rep_counted: bool
    rep_count: int
    form_score: float


@dataclass(frozen=True)
class SessionSummary:
    exercise: str
    rep_count: int
    form_score: int


class ExerciseSession:
    """Accumulates reps and form score for one exercise over a timed session.

    Args:
        exercise: Exercise being performed (enum member or string value).
        config: Aggregation settings.
        clock: Monotonic time source in seconds; injectable for replay/tests.
    """

    def __init__(
        self,
        exercise: Union[ExerciseType, str],
        config: SessionConfig = SessionConfig(),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.exercise = exercise
        self.config = config
        self._clock = clock
        self.history: Deque[Pose] = deque(maxlen=config.history_size)
        self.rep_count = 0
        self.form_score = config.initial_score
        self.current_feedback: Optional[FormFeedback] = None
        self.is_started = False
        self.is_paused = False
        self._last_rep_at: Optional[float] = None
        self._elapsed = 0.0
        self._running_since: Optional[float] = None

    def start(self) -> None:
        """(Re)start the session from a clean slate."""
        self.history.clear()
        self.rep_count = 0
        self.form_score = self.config.initial_score
        self.current_feedback = None
        self._last_rep_at = None
        self._elapsed = 0.0
        self.is_started = True
        self.is_paused = False
        self._running_since = self._clock()
        logger.info("Session started for %s", self._exercise_name)

    def toggle_pause(self) -> bool:
        """Pause or resume; returns the new paused state."""
        if not self.is_started:
            return self.is_paused
        now = self._clock()
        if self.is_paused:
            self._running_since = now
        else:
            if self._running_since is not None:
                self._elapsed += now - self._running_since
            self._running_since = None
        self.is_paused = not self.is_paused
        return self.is_paused

    @property
    def elapsed(self) -> float:
        if self._running_since is None:
            return self._elapsed
        return self._elapsed + (self._clock() - self._running_since)

    @property
    def time_remaining(self) -> float:
        return max(self.config.duration - self.elapsed, 0.0)

    @property
    def is_finished(self) -> bool:
        return self.is_started and self.time_remaining <= 0.0

    @property
    def _exercise_name(self) -> str:
        exercise_type = coerce_exercise(self.exercise)
        return exercise_type.value if exercise_type is not None else str(self.exercise)

    def process(self, pose: Optional[Pose]) -> Optional[FrameResult]:
        """Feed one frame; returns None unless the session is running.

        Rep detection runs against the history as it stood before this frame,
        and the pose is appended afterwards.
        """
        if not self.is_started or self.is_paused or self.is_finished:
            return None

        validation = validate(self.exercise, pose) if pose is not None else no_pose_validation()
        if not validation.is_valid_rep:
            self.form_score = max(self.form_score - self.config.invalid_frame_penalty, 0.0)

        main_feedback = select_main_feedback(validation.feedback)
        if main_feedback is not None:
            self.current_feedback = main_feedback

        rep_counted = False
        if pose is not None:
            if detect_rep(self.exercise, pose, self.history):
                rep_counted = self._count_rep()
            self.history.append(pose)

        return FrameResult(
            validation=validation,
            main_feedback=main_feedback,
            rep_counted=rep_counted,
            rep_count=self.rep_count,
            form_score=self.form_score,
        )

    def _count_rep(self) -> bool:
        now = self._clock()
        if self._last_rep_at is not None and now - self._last_rep_at < self.config.rep_cooldown:
            logger.debug("Rep ignored during cool-down (%.2fs since last)", now - self._last_rep_at)
            return False
        self._last_rep_at = now
        self.rep_count += 1
        logger.info("Rep %d counted for %s", self.rep_count, self._exercise_name)
        return True

    def summary(self) -> SessionSummary:
        return SessionSummary(
            exercise=self._exercise_name,
            rep_count=self.rep_count,
            form_score=math.floor(self.form_score + 0.5),
        )
