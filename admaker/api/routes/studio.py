"""
Studio session endpoints - server-side flows behind the HTML pages.

A POST starts a flow in the background and returns the session snapshot at
once; the page then polls GET /api/studio/sessions/{id}.
"""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from admaker.studio import (
    AdSession,
    DecisionSession,
    FlowBusyError,
    FlowNotReadyError,
    Selection,
    SessionNotFoundError,
    SessionStore,
    Studio,
    ValentineSession,
)

from ..dependencies import get_session_store, get_studio
from ..exceptions import AudioNotFoundError, ConflictError, SessionNotFoundError as SessionNotFoundAPIError, ValidationError
from ..schemas import (
    AdSessionRequest,
    DecisionSessionRequest,
    ValentineSessionRequest,
    ZoomRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/studio", tags=["Studio"])


def _lookup(store: SessionStore, session_id: str, kind: type = None):
    try:
        return store.get(session_id, kind)
    except SessionNotFoundError:
        raise SessionNotFoundAPIError(session_id)


def _start(start, *args):
    try:
        start(*args)
    except FlowNotReadyError as e:
        raise ValidationError(e.message)
    except FlowBusyError as e:
        raise ConflictError(str(e))


# =============================================================================
# Flow starts
# =============================================================================

@router.post("/ad", status_code=status.HTTP_202_ACCEPTED, summary="Generate ad")
async def start_ad(
    payload: AdSessionRequest,
    studio: Studio = Depends(get_studio),
    store: SessionStore = Depends(get_session_store),
) -> dict:
    """Storyboard images (groups of 3), narration, then video."""
    selection = Selection(brand=payload.brand, character=payload.character, slogan=payload.slogan)
    session = AdSession(selection, payload.storyboard)
    _start(studio.start_ad, session)
    store.add(session)
    return session.snapshot()


@router.post("/sessions/{session_id}/ad", summary="Regenerate ad")
async def restart_ad(
    session_id: str,
    studio: Studio = Depends(get_studio),
    store: SessionStore = Depends(get_session_store),
) -> dict:
    session = _lookup(store, session_id, AdSession)
    _start(studio.start_ad, session)
    return session.snapshot()


@router.post("/sessions/{session_id}/tiktok", summary="Generate TikTok")
async def start_tiktok(
    session_id: str,
    studio: Studio = Depends(get_studio),
    store: SessionStore = Depends(get_session_store),
) -> dict:
    """Reaction voiceover and vertical video for an ad with storyboard images."""
    session = _lookup(store, session_id, AdSession)
    _start(studio.start_tiktok, session)
    return session.snapshot()


@router.post("/decision", status_code=status.HTTP_202_ACCEPTED, summary="Choose a life decision")
async def start_decision(
    payload: DecisionSessionRequest,
    studio: Studio = Depends(get_studio),
    store: SessionStore = Depends(get_session_store),
) -> dict:
    session = DecisionSession()
    _start(studio.start_decision, session, payload.decision)
    store.add(session)
    return session.snapshot()


@router.post("/sessions/{session_id}/decision", summary="Choose again")
async def choose_decision(
    session_id: str,
    payload: DecisionSessionRequest,
    studio: Studio = Depends(get_studio),
    store: SessionStore = Depends(get_session_store),
) -> dict:
    session = _lookup(store, session_id, DecisionSession)
    _start(studio.start_decision, session, payload.decision)
    return session.snapshot()


@router.post("/sessions/{session_id}/reset", summary="Start over")
async def reset_decision(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> dict:
    session = _lookup(store, session_id, DecisionSession)
    session.reset()
    return session.snapshot()


@router.post("/valentine", status_code=status.HTTP_202_ACCEPTED, summary="Generate valentine scenes")
async def start_valentine(
    payload: ValentineSessionRequest,
    studio: Studio = Depends(get_studio),
    store: SessionStore = Depends(get_session_store),
) -> dict:
    """Three images per scene; the slideshow starts when all scenes are done."""
    session = ValentineSession(payload.scenes)
    _start(studio.start_valentine, session)
    store.add(session)
    return session.snapshot()


@router.post("/sessions/{session_id}/valentine", summary="Regenerate valentine scenes")
async def restart_valentine(
    session_id: str,
    payload: ValentineSessionRequest,
    studio: Studio = Depends(get_studio),
    store: SessionStore = Depends(get_session_store),
) -> dict:
    session = _lookup(store, session_id, ValentineSession)
    _start(studio.start_valentine, session, payload.scenes)
    return session.snapshot()


# =============================================================================
# Session state
# =============================================================================

@router.get("/sessions/{session_id}", summary="Session snapshot")
async def get_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> dict:
    return _lookup(store, session_id).snapshot()


@router.delete("/sessions/{session_id}", summary="Discard session")
async def discard_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> dict:
    """Stops in-flight polls for this session and forgets it."""
    try:
        store.discard(session_id)
    except SessionNotFoundError:
        raise SessionNotFoundAPIError(session_id)
    return {"id": session_id, "discarded": True}


@router.get("/sessions/{session_id}/audio/{name}", response_class=Response, summary="Narration audio")
async def get_audio(
    session_id: str,
    name: str,
    store: SessionStore = Depends(get_session_store),
) -> Response:
    session = _lookup(store, session_id, AdSession)
    audio = session.audio.get(name)
    if audio is None:
        raise AudioNotFoundError(name)
    return Response(content=audio, media_type="audio/mpeg")


# =============================================================================
# Slideshow
# =============================================================================

@router.get("/sessions/{session_id}/slideshow", summary="Current slideshow frame")
async def get_slideshow(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> dict:
    session = _lookup(store, session_id, ValentineSession)
    return session.slideshow.to_dict()


@router.post("/sessions/{session_id}/slideshow/start", summary="Play movie")
async def start_slideshow(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> dict:
    session = _lookup(store, session_id, ValentineSession)
    if not session.start_slideshow():
        raise ValidationError("No images to play")
    return session.slideshow.to_dict()


@router.post("/sessions/{session_id}/slideshow/stop", summary="Stop movie")
async def stop_slideshow(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> dict:
    session = _lookup(store, session_id, ValentineSession)
    session.stop_slideshow()
    return session.slideshow.to_dict()


@router.post("/sessions/{session_id}/zoom", summary="Zoom an image")
async def zoom_image(
    session_id: str,
    payload: ZoomRequest,
    store: SessionStore = Depends(get_session_store),
) -> dict:
    session = _lookup(store, session_id, ValentineSession)
    session.zoom(payload.url)
    return session.snapshot()


@router.post("/sessions/{session_id}/keys/{key}", summary="Key press")
async def press_key(
    session_id: str,
    key: str,
    store: SessionStore = Depends(get_session_store),
) -> dict:
    """Escape leaves the slideshow or the zoomed image."""
    session = _lookup(store, session_id, ValentineSession)
    consumed = session.handle_key(key)
    return {"consumed": consumed, "slideshow": session.slideshow.to_dict(), "zoomed": session.zoomed}
