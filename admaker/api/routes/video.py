"""
Video generation endpoints (Minimax video-01 on Replicate).
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from admaker.services.gateway import ProviderGateway

from ..dependencies import get_gateway
from ..relay import relay_status, relay_submission
from ..schemas import PredictionResponse, SubmissionResponse, VideoRequest

router = APIRouter(prefix="/api", tags=["Video"])


@router.post("/video", response_model=SubmissionResponse, summary="Submit video generation")
async def submit_video(
    payload: VideoRequest,
    gateway: ProviderGateway = Depends(get_gateway),
) -> SubmissionResponse:
    return await relay_submission(
        gateway.submit_video(payload.prompt),
        "Video generation failed to start",
    )


@router.get("/video", response_model=PredictionResponse, summary="Poll video generation")
async def poll_video(
    id: Optional[str] = Query(default=None),
    gateway: ProviderGateway = Depends(get_gateway),
) -> PredictionResponse:
    return await relay_status(gateway.fetch_video_status(id))
