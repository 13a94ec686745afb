"""
Studio sessions - per-page in-memory state for the generation flows.

Nothing is persisted. A session lives until it is discarded or evicted by the
store. Closing a session sets its cancellation event so its flows stop
calling providers.
"""
import asyncio
import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable, Coroutine, Dict, List, Optional, Set

from admaker.catalog import PANEL_COUNT, VALENTINE_SCENES

from .models import Panel, Scene, Selection
from .slideshow import Slideshow
from .state import FlowState

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """Raised for unknown or discarded session ids."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(session_id)


class StudioSession:
    """Base session: id, flow state, cancellation event and background tasks."""

    kind = "studio"

    def __init__(self, session_id: Optional[str] = None):
        self.id = session_id or uuid.uuid4().hex
        self.state = FlowState()
        self.cancel = asyncio.Event()
        self._tasks: Set[asyncio.Task] = set()

    @property
    def cancelled(self) -> bool:
        return self.cancel.is_set()

    def spawn(self, coro: Coroutine) -> asyncio.Task:
        """Run ``coro`` in the background, keeping a reference until it ends."""
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def close(self) -> None:
        self.cancel.set()

    def snapshot(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind,
            "state": self.state.to_dict(),
        }


class AdSession(StudioSession):
    """Ad maker page: selections, 9 panels, narration and video (+ TikTok)."""

    kind = "ad"

    def __init__(self, selection: Selection, panels: Optional[List[str]] = None, session_id: Optional[str] = None):
        super().__init__(session_id)
        self.selection = selection
        texts = list(panels or [])[:PANEL_COUNT]
        texts += [""] * (PANEL_COUNT - len(texts))
        self.panels = [Panel(text=text) for text in texts]
        self.audio: Dict[str, bytes] = {}
        self.video_url: Optional[str] = None
        self.tiktok_state = FlowState()
        self.tiktok_video_url: Optional[str] = None

    @property
    def scenes(self) -> List[str]:
        return [panel.scene(i) for i, panel in enumerate(self.panels)]

    @property
    def has_images(self) -> bool:
        return any(panel.image is not None for panel in self.panels)

    def audio_url(self, name: str) -> Optional[str]:
        if name not in self.audio:
            return None
        return f"/api/studio/sessions/{self.id}/audio/{name}"

    def snapshot(self) -> dict:
        data = super().snapshot()
        data.update({
            "brand": self.selection.brand,
            "character": self.selection.character,
            "slogan": self.selection.slogan,
            "panels": [{"text": p.text, "image": p.image} for p in self.panels],
            "audio_url": self.audio_url("ad"),
            "video_url": self.video_url,
            "tiktok": {
                "state": self.tiktok_state.to_dict(),
                "audio_url": self.audio_url("tiktok"),
                "video_url": self.tiktok_video_url,
            },
        })
        return data


class DecisionSession(StudioSession):
    """Life decisions page: one decision, one image."""

    kind = "decision"

    def __init__(self, session_id: Optional[str] = None):
        super().__init__(session_id)
        self.decision: Optional[str] = None
        self.image_url: Optional[str] = None
        # Bumped on every start and reset so a stale poll can tell it lost.
        self.generation = 0

    def reset(self) -> None:
        self.decision = None
        self.image_url = None
        self.generation += 1
        self.state.reset()

    def snapshot(self) -> dict:
        data = super().snapshot()
        data.update({"decision": self.decision, "image_url": self.image_url})
        return data


class ValentineSession(StudioSession):
    """Valentine page: scenes with 3 images each and the slideshow."""

    kind = "valentine"

    def __init__(self, scenes: Optional[List[str]] = None, session_id: Optional[str] = None):
        super().__init__(session_id)
        self.scenes = [Scene(text=text) for text in (scenes or VALENTINE_SCENES)]
        self.slideshow = Slideshow()
        self.zoomed: Optional[str] = None
        self._player: Optional[asyncio.Task] = None
        self.generation = 0

    @property
    def all_images(self) -> List[str]:
        return [image for scene in self.scenes for image in scene.images if image is not None]

    def start_slideshow(self) -> bool:
        if not self.slideshow.start(self.all_images):
            return False
        if self._player is None or self._player.done():
            self._player = self.spawn(self.slideshow.play())
        return True

    def stop_slideshow(self) -> None:
        self.slideshow.stop()

    def zoom(self, url: Optional[str]) -> None:
        self.zoomed = url

    def handle_key(self, key: str) -> bool:
        """Escape leaves the slideshow and closes the zoomed image."""
        consumed = self.slideshow.handle_key(key)
        if key == "Escape" and self.zoomed:
            self.zoomed = None
            consumed = True
        return consumed

    def close(self) -> None:
        super().close()
        self.slideshow.stop()

    def snapshot(self) -> dict:
        data = super().snapshot()
        data.update({
            "scenes": [{"text": s.text, "images": list(s.images)} for s in self.scenes],
            "slideshow": self.slideshow.to_dict(),
            "zoomed": self.zoomed,
        })
        return data


SESSION_TTL = 3600.0
MAX_SESSIONS = 500


class SessionStore:
    """
    Process-local registry of studio sessions.

    Sessions idle for longer than ``ttl`` seconds are evicted, and the store
    never holds more than ``max_sessions``; the least recently used session
    goes first. Evicted sessions are closed like discarded ones.
    """

    def __init__(
        self,
        ttl: float = SESSION_TTL,
        max_sessions: int = MAX_SESSIONS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.ttl = ttl
        self.max_sessions = max_sessions
        self.clock = clock
        # Ordered oldest-used first
        self._sessions: "OrderedDict[str, StudioSession]" = OrderedDict()
        self._last_seen: Dict[str, float] = {}

    def add(self, session: StudioSession) -> StudioSession:
        self.evict_expired()
        while len(self._sessions) >= self.max_sessions:
            oldest = next(iter(self._sessions))
            self._evict(oldest, "capacity")

        self._sessions[session.id] = session
        self._last_seen[session.id] = self.clock()
        logger.info(f"[STUDIO] Session opened: {session.kind} {session.id}")
        return session

    def get(self, session_id: str, kind: Optional[type] = None) -> StudioSession:
        self.evict_expired()
        session = self._sessions.get(session_id)
        if session is None or (kind is not None and not isinstance(session, kind)):
            raise SessionNotFoundError(session_id)
        self._sessions.move_to_end(session_id)
        self._last_seen[session_id] = self.clock()
        return session

    def discard(self, session_id: str) -> StudioSession:
        session = self._pop(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        session.close()
        logger.info(f"[STUDIO] Session discarded: {session_id}")
        return session

    def evict_expired(self) -> int:
        """Close sessions idle for longer than the TTL. Returns how many were evicted."""
        cutoff = self.clock() - self.ttl
        expired = [sid for sid in self._sessions if self._last_seen[sid] <= cutoff]
        for session_id in expired:
            self._evict(session_id, "idle")
        return len(expired)

    def _evict(self, session_id: str, reason: str) -> None:
        session = self._pop(session_id)
        session.close()
        logger.info(f"[STUDIO] Session evicted ({reason}): {session_id}")

    def _pop(self, session_id: str) -> Optional[StudioSession]:
        self._last_seen.pop(session_id, None)
        return self._sessions.pop(session_id, None)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
