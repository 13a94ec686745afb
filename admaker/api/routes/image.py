"""
Image generation endpoints: storyboard panels, life decisions, valentine scenes.

Each resource has a POST that submits a prediction and a GET that polls it
by ``?id=``.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from admaker.services.gateway import ProviderGateway

from ..dependencies import get_gateway
from ..relay import relay_status, relay_submission
from ..schemas import (
    DecisionImageRequest,
    ImageRequest,
    PredictionResponse,
    SubmissionResponse,
    ValentineRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Images"])

IMAGE_START_FAILED = "Image generation failed to start"


@router.post("/image", response_model=SubmissionResponse, summary="Submit storyboard panel image")
async def submit_panel_image(
    payload: ImageRequest,
    gateway: ProviderGateway = Depends(get_gateway),
) -> SubmissionResponse:
    """Ink-style storyboard panel with the chosen character and brand."""
    return await relay_submission(
        gateway.submit_panel_image(payload.scene, payload.character, payload.brand),
        IMAGE_START_FAILED,
    )


@router.get("/image", response_model=PredictionResponse, summary="Poll storyboard panel image")
async def poll_panel_image(
    id: Optional[str] = Query(default=None),
    gateway: ProviderGateway = Depends(get_gateway),
) -> PredictionResponse:
    return await relay_status(gateway.fetch_image_status(id))


@router.post("/decision-image", response_model=SubmissionResponse, summary="Submit life decision image")
async def submit_decision_image(
    payload: DecisionImageRequest,
    gateway: ProviderGateway = Depends(get_gateway),
) -> SubmissionResponse:
    """Fixed prompt for one of: porsche, save, sushi."""
    return await relay_submission(
        gateway.submit_decision_image(payload.decision),
        IMAGE_START_FAILED,
    )


@router.get("/decision-image", response_model=PredictionResponse, summary="Poll life decision image")
async def poll_decision_image(
    id: Optional[str] = Query(default=None),
    gateway: ProviderGateway = Depends(get_gateway),
) -> PredictionResponse:
    return await relay_status(gateway.fetch_image_status(id))


@router.post("/valentine", response_model=SubmissionResponse, summary="Submit valentine scene image")
async def submit_valentine_image(
    payload: ValentineRequest,
    gateway: ProviderGateway = Depends(get_gateway),
) -> SubmissionResponse:
    return await relay_submission(
        gateway.submit_valentine_image(payload.scene),
        IMAGE_START_FAILED,
    )


@router.get("/valentine", response_model=PredictionResponse, summary="Poll valentine scene image")
async def poll_valentine_image(
    id: Optional[str] = Query(default=None),
    gateway: ProviderGateway = Depends(get_gateway),
) -> PredictionResponse:
    return await relay_status(gateway.fetch_image_status(id))
