"""
Studio flows - what each page does when the user presses "generate".

Flows run as background tasks on the event loop. They fan out image jobs
through the batch orchestrator, poll each job, then narrate and render video.
Voice and video failures are logged and skipped; anything unexpected puts the
flow in its error state so the user can start again.
"""
import asyncio
import functools
import logging
from typing import Awaitable, Callable, List, Optional

from admaker.catalog import IMAGES_PER_SCENE, PANEL_COUNT
from admaker.jobs import IMAGE_POLL, VIDEO_POLL, BatchOrchestrator, GenerationJob, JobPoller, PollPolicy
from admaker.prompts import (
    DECISION_PROMPTS,
    build_ad_script,
    build_ad_video_prompt,
    build_tiktok_script,
    build_tiktok_video_prompt,
)
from admaker.providers.exceptions import ProviderError
from admaker.services.gateway import ProviderGateway

from .sessions import AdSession, DecisionSession, ValentineSession
from .state import FlowState, FlowStatus

logger = logging.getLogger(__name__)

TIKTOK_VOICE = "energetic"
AUTOPLAY_DELAY = 0.5


class FlowNotReadyError(Exception):
    """Raised when a flow is started without the selections it needs."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class Studio:
    """
    Orchestrates the ad, TikTok, decision and valentine flows.

    Usage:
        studio = Studio(ProviderGateway())
        studio.start_ad(session)          # returns the background task
    """

    def __init__(
        self,
        gateway: ProviderGateway,
        image_policy: PollPolicy = IMAGE_POLL,
        video_policy: PollPolicy = VIDEO_POLL,
        group_size: int = 3,
        autoplay_delay: float = AUTOPLAY_DELAY,
    ):
        self.gateway = gateway
        self.image_poller = JobPoller(gateway.fetch_image_status, image_policy)
        self.video_poller = JobPoller(gateway.fetch_video_status, video_policy)
        self.batch = BatchOrchestrator(group_size)
        self.scene_batch = BatchOrchestrator(IMAGES_PER_SCENE)
        self.autoplay_delay = autoplay_delay

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------

    async def generate_image(
        self,
        submit: Callable[[], Awaitable[GenerationJob]],
        cancel: Optional[asyncio.Event] = None,
    ) -> Optional[str]:
        """Submit one image job and wait for its URL. Nothing is submitted once ``cancel`` is set."""
        if cancel is not None and cancel.is_set():
            return None
        job = await submit()
        if not job.id:
            logger.warning("Image submission returned no id")
            return None
        return await self.image_poller.poll(job.id, cancel=cancel)

    async def generate_video(
        self,
        prompt: str,
        state: FlowState,
        label: str,
        cancel: Optional[asyncio.Event] = None,
    ) -> Optional[str]:
        """Submit a video job and poll it, reporting elapsed seconds on ``state``."""
        try:
            job = await self.gateway.submit_video(prompt)
        except ProviderError as e:
            logger.warning(f"Video submission failed: {e}")
            return None

        interval = self.video_poller.policy.interval

        def on_attempt(attempt: int) -> None:
            state.update(f"{label}... ({int(attempt * interval)}s)")

        return await self.video_poller.poll(job.id, cancel=cancel, on_attempt=on_attempt)

    async def narrate(self, text: str, character: Optional[str]) -> Optional[bytes]:
        try:
            return await self.gateway.synthesize_voice(text, character)
        except ProviderError as e:
            logger.warning(f"Voice generation failed: {e}")
            return None

    # ------------------------------------------------------------------
    # Ad
    # ------------------------------------------------------------------

    def start_ad(self, session: AdSession) -> asyncio.Task:
        if not session.selection.is_complete:
            raise FlowNotReadyError("Brand, character and slogan are required")
        session.state.begin("Generating storyboard images...")
        session.audio.pop("ad", None)
        session.video_url = None
        return session.spawn(self.generate_ad(session))

    async def generate_ad(self, session: AdSession) -> None:
        state = session.state
        selection = session.selection

        try:
            def store(index: int, image: Optional[str]) -> None:
                if not session.cancelled:
                    session.panels[index].image = image

            tasks = [functools.partial(self._generate_panel, session, i) for i in range(PANEL_COUNT)]
            await self.batch.run(tasks, on_slot=store)
            if session.cancelled:
                return

            state.update("Generating voice...")
            script = build_ad_script(selection.brand, selection.character, selection.slogan)
            audio = await self.narrate(script, selection.character)
            if audio:
                session.audio["ad"] = audio
            if session.cancelled:
                return

            state.update("Generating video (this takes ~2 min)...")
            prompt = build_ad_video_prompt(selection.brand, selection.character, selection.slogan, session.scenes)
            session.video_url = await self.generate_video(prompt, state, "Generating video", session.cancel)
            if session.cancelled:
                return

            state.finish("Done!")
        except Exception as e:
            logger.exception(f"Ad generation failed: {e}")
            state.fail("Error generating ad")

    async def _generate_panel(self, session: AdSession, index: int) -> Optional[str]:
        session.state.update(f"Generating panel {index + 1}/{PANEL_COUNT}...")
        scene = session.panels[index].scene(index)
        selection = session.selection
        return await self.generate_image(
            lambda: self.gateway.submit_panel_image(scene, selection.character, selection.brand),
            session.cancel,
        )

    # ------------------------------------------------------------------
    # TikTok
    # ------------------------------------------------------------------

    def start_tiktok(self, session: AdSession) -> asyncio.Task:
        if not session.has_images:
            raise FlowNotReadyError("Generate storyboard images first")
        session.tiktok_state.begin("Generating TikTok...")
        session.audio.pop("tiktok", None)
        session.tiktok_video_url = None
        return session.spawn(self.generate_tiktok(session))

    async def generate_tiktok(self, session: AdSession) -> None:
        state = session.tiktok_state
        selection = session.selection
        scenes = session.scenes

        try:
            if session.cancelled:
                return

            state.update("Generating TikTok voiceover...")
            script = build_tiktok_script(selection.brand, selection.character, selection.slogan, scenes)
            audio = await self.narrate(script, TIKTOK_VOICE)
            if audio:
                session.audio["tiktok"] = audio
            if session.cancelled:
                return

            state.update("Generating TikTok video (~2 min)...")
            prompt = build_tiktok_video_prompt(selection.brand, selection.character, scenes)
            session.tiktok_video_url = await self.generate_video(
                prompt, state, "Generating TikTok video", session.cancel
            )
            if session.cancelled:
                return

            state.finish("TikTok done!")
        except Exception as e:
            logger.exception(f"TikTok generation failed: {e}")
            state.fail("Error generating TikTok")

    # ------------------------------------------------------------------
    # Life decisions
    # ------------------------------------------------------------------

    def start_decision(self, session: DecisionSession, decision: Optional[str]) -> asyncio.Task:
        if not decision or decision not in DECISION_PROMPTS:
            raise FlowNotReadyError("Valid decision is required")
        session.state.begin("")
        session.decision = decision
        session.image_url = None
        session.generation += 1
        return session.spawn(self.generate_decision(session, session.generation))

    async def generate_decision(self, session: DecisionSession, generation: int) -> None:
        decision = session.decision
        try:
            url = await self.generate_image(
                lambda: self.gateway.submit_decision_image(decision),
                session.cancel,
            )
        except Exception as e:
            logger.error(f"Error generating image: {e}")
            url = None

        if session.generation != generation or session.cancelled:
            # The page was reset while polling; drop the result.
            return

        if url:
            session.image_url = url
            session.state.finish()
        else:
            session.state.fail()

    # ------------------------------------------------------------------
    # Valentine
    # ------------------------------------------------------------------

    def start_valentine(self, session: ValentineSession, scenes: Optional[List[str]] = None) -> asyncio.Task:
        if scenes is not None:
            for scene, text in zip(session.scenes, scenes):
                scene.text = text
        session.state.begin("Starting generation...")
        session.stop_slideshow()
        session.generation += 1
        return session.spawn(self.generate_valentine(session, session.generation))

    async def generate_valentine(self, session: ValentineSession, generation: int) -> None:
        state = session.state
        total = len(session.scenes)

        try:
            def announce(group: int, group_count: int) -> None:
                state.update(f"Generating scene {group + 1}/{total}...")

            def store(index: int, image: Optional[str]) -> None:
                if not session.cancelled:
                    scene_index, image_index = divmod(index, IMAGES_PER_SCENE)
                    session.scenes[scene_index].images[image_index] = image

            tasks = [
                functools.partial(self._generate_scene_image, session, scene.text)
                for scene in session.scenes
                for _ in range(IMAGES_PER_SCENE)
            ]
            await self.scene_batch.run(tasks, on_slot=store, on_group=announce)
            if session.cancelled:
                return

            state.finish("Done!")
        except Exception as e:
            logger.exception(f"Valentine generation failed: {e}")
            state.fail("Error generating images")
            return

        await asyncio.sleep(self.autoplay_delay)
        # A regeneration started during the delay owns the slideshow now.
        if session.cancelled or session.generation != generation or state.status != FlowStatus.DONE:
            return
        session.start_slideshow()

    async def _generate_scene_image(self, session: ValentineSession, text: str) -> Optional[str]:
        return await self.generate_image(
            lambda: self.gateway.submit_valentine_image(text),
            session.cancel,
        )
