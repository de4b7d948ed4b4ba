from typing import List

from pydantic import BaseModel, Field, field_validator

from repcoach.config import Severity


class KeypointModel(BaseModel):
    name: str = Field(..., min_length=1, description="Landmark name, e.g. 'left_shoulder'.")
    x: float
    y: float
    score: float = Field(..., ge=0.0, le=1.0, description="Detection confidence in [0, 1].")


class PoseModel(BaseModel):
    keypoints: List[KeypointModel] = Field(default_factory=list)
    score: float = Field(1.0, ge=0.0, le=1.0, description="Overall pose confidence.")


class ValidateRequest(BaseModel):
    """
    Unrecognised exercise names are accepted here on purpose: the core reports them as an
    ``error`` feedback entry rather than the request being rejected.
    """
    exercise: str = Field(..., description="pushups | pullups | situps")
    pose: PoseModel

    @field_validator("exercise")
    def exercise_normalized(cls, v: str) -> str:
        return v.strip().lower()


class FeedbackModel(BaseModel):
    issue: str
    severity: Severity
    is_valid: bool


class ValidateResponse(BaseModel):
    is_valid_rep: bool
    feedback: List[FeedbackModel]


class DetectRepRequest(BaseModel):
    exercise: str = Field(..., description="pushups | pullups | situps")
    pose: PoseModel = Field(..., description="Current frame's pose.")
    history: List[PoseModel] = Field(
        default_factory=list,
        description="Recent poses, oldest first, not including the current one.",
    )

    @field_validator("exercise")
    def exercise_normalized(cls, v: str) -> str:
        return v.strip().lower()


class DetectRepResponse(BaseModel):
    rep_detected: bool
