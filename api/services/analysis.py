"""
Service helpers translating API payloads into core types and back.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Iterable, List

from api.schemas import (
    DetectRepRequest,
    DetectRepResponse,
    FeedbackModel,
    PoseModel,
    ValidateRequest,
    ValidateResponse,
)
from repcoach.quality.form import validate
from repcoach.repdetect.baseline import detect_rep
from repcoach.vision.keypoints import Keypoint, Pose


def to_pose(model: PoseModel) -> Pose:
    return Pose(
        keypoints=tuple(Keypoint(name=kp.name, x=kp.x, y=kp.y, score=kp.score) for kp in model.keypoints),
        score=model.score,
    )


def to_poses(models: Iterable[PoseModel]) -> List[Pose]:
    return [to_pose(m) for m in models]


def run_validation(payload: ValidateRequest) -> ValidateResponse:
    result = validate(payload.exercise, to_pose(payload.pose))
    return ValidateResponse(
        is_valid_rep=result.is_valid_rep,
        feedback=[FeedbackModel(**asdict(f)) for f in result.feedback],
    )


def run_rep_detection(payload: DetectRepRequest) -> DetectRepResponse:
    detected = detect_rep(payload.exercise, to_pose(payload.pose), to_poses(payload.history))
    return DetectRepResponse(rep_detected=detected)
