"""
Voice endpoint - returns raw MP3 bytes from ElevenLabs.
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from admaker.providers.exceptions import ProviderError
from admaker.services.gateway import MissingInputError, ProviderGateway

from ..dependencies import get_gateway
from ..exceptions import InternalError, ValidationError
from ..schemas import VoiceRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Voice"])


@router.post(
    "/voice",
    response_class=Response,
    responses={200: {"content": {"audio/mpeg": {}}}},
    summary="Synthesize narration",
)
async def synthesize_voice(
    payload: VoiceRequest,
    gateway: ProviderGateway = Depends(get_gateway),
) -> Response:
    """
    Narrate ``text``. The voice is picked from ``character`` by keyword
    (e.g. "Darth Vader" -> deep) or by preset name ("energetic").
    """
    try:
        audio = await gateway.synthesize_voice(payload.text, payload.character)
    except MissingInputError as e:
        raise ValidationError(e.message)
    except ProviderError as e:
        logger.error(f"Voice generation failed: {e}")
        raise InternalError("Voice generation failed")

    return Response(content=audio, media_type="audio/mpeg")
