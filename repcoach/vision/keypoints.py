"""Keypoint and pose value types handed over by the upstream estimator.

Keypoint names follow the 17-point COCO/MoveNet convention (``nose``,
``left_shoulder``, ...). Coordinates are image pixels with y growing downwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Tuple

NOSE = "nose"
LEFT_SHOULDER = "left_shoulder"
RIGHT_SHOULDER = "right_shoulder"
LEFT_ELBOW = "left_elbow"
RIGHT_ELBOW = "right_elbow"
LEFT_WRIST = "left_wrist"
RIGHT_WRIST = "right_wrist"
LEFT_HIP = "left_hip"
RIGHT_HIP = "right_hip"
LEFT_KNEE = "left_knee"
RIGHT_KNEE = "right_knee"
LEFT_ANKLE = "left_ankle"
RIGHT_ANKLE = "right_ankle"


@dataclass(frozen=True)
class Keypoint:
    """Single named landmark with a detection confidence in [0, 1]."""

    name: str
    x: float
    y: float
    score: float


@dataclass(frozen=True)
class Pose:
    """All keypoints detected in one frame plus the overall pose score."""

    keypoints: Tuple[Keypoint, ...]
    score: float = 1.0

    def __post_init__(self) -> None:
        # Normalised to a tuple so poses stay hashable.
        if not isinstance(self.keypoints, tuple):
            object.__setattr__(self, "keypoints", tuple(self.keypoints))

    @classmethod
    def from_points(
        cls,
        points: Mapping[str, Tuple[float, float]],
        *,
        score: float = 1.0,
        keypoint_score: float = 1.0,
    ) -> "Pose":
        """Build a pose from ``{name: (x, y)}`` with a uniform keypoint score."""
        return cls(
            keypoints=tuple(
                Keypoint(name=name, x=float(x), y=float(y), score=keypoint_score)
                for name, (x, y) in points.items()
            ),
            score=score,
        )

    def keypoint(self, name: str) -> Optional[Keypoint]:
        """Return the first keypoint called ``name``, or None if absent."""
        for kp in self.keypoints:
            if kp.name == name:
                return kp
        return None

    def confident_keypoint(self, name: str, floor: float) -> Optional[Keypoint]:
        """Like :meth:`keypoint` but treats scores below ``floor`` as absent."""
        kp = self.keypoint(name)
        if kp is None or kp.score < floor:
            return None
        return kp

    def missing(self, names: Iterable[str], floor: float) -> Tuple[str, ...]:
        """Names from ``names`` that are absent or below the confidence floor."""
        return tuple(name for name in names if self.confident_keypoint(name, floor) is None)
