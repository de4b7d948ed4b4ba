from __future__ import annotations

from fastapi import APIRouter

from api.schemas import DetectRepRequest, DetectRepResponse, ValidateRequest, ValidateResponse
from api.services.analysis import run_rep_detection, run_validation

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.post("/validate", response_model=ValidateResponse)
async def validate_pose(payload: ValidateRequest) -> ValidateResponse:
    """
    Judge a single pose against the form rules of the requested exercise. Unreadable poses and
    unknown exercises are reported in the feedback list, never as HTTP errors.
    """
    return run_validation(payload)


@router.post("/detect-rep", response_model=DetectRepResponse)
async def detect_rep_boundary(payload: DetectRepRequest) -> DetectRepResponse:
    """
    Decide whether the current pose completes a rep given the caller's rolling history. Repeated
    positives while the exerciser stays at the top are expected; debouncing is the caller's job.
    """
    return run_rep_detection(payload)
