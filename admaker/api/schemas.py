"""
Pydantic schemas for API requests and responses.

Required request fields are Optional here on purpose: the gateway reports a
missing field as a 400 with a specific message instead of FastAPI's 422.
"""
from pydantic import BaseModel, Field
from typing import Any, List, Optional


class ImageRequest(BaseModel):
    """POST /api/image request body."""
    scene: Optional[str] = None
    character: Optional[str] = None
    brand: Optional[str] = None


class DecisionImageRequest(BaseModel):
    """POST /api/decision-image request body."""
    decision: Optional[str] = None


class ValentineRequest(BaseModel):
    """POST /api/valentine request body."""
    scene: Optional[str] = None


class VideoRequest(BaseModel):
    """POST /api/video request body."""
    prompt: Optional[str] = None


class VoiceRequest(BaseModel):
    """POST /api/voice request body."""
    text: Optional[str] = None
    character: Optional[str] = None


class SubmissionResponse(BaseModel):
    """Submit endpoints response."""
    id: Optional[str] = None
    status: Optional[str] = None


class PredictionResponse(BaseModel):
    """Poll endpoints response."""
    id: Optional[str] = None
    status: Optional[str] = None
    output: Any = None
    error: Optional[str] = None


# =============================================================================
# Studio sessions
# =============================================================================

class AdSessionRequest(BaseModel):
    """POST /api/studio/ad request body."""
    brand: Optional[str] = None
    character: Optional[str] = None
    slogan: str = ""
    storyboard: List[str] = Field(default_factory=list)


class DecisionSessionRequest(BaseModel):
    """POST /api/studio/decision request body."""
    decision: Optional[str] = None


class ValentineSessionRequest(BaseModel):
    """POST /api/studio/valentine request body."""
    scenes: Optional[List[str]] = None


class ZoomRequest(BaseModel):
    url: Optional[str] = None


class HealthResponse(BaseModel):
    """GET /health response."""
    status: str
    service: str
    version: str
    replicate_configured: bool
    elevenlabs_configured: bool
