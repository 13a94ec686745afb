"""
Provider Gateway - request translators between the app and the providers.

Each submit method validates its input, assembles the provider payload and
issues exactly one outbound call. Missing input raises MissingInputError
before anything leaves the process.
"""
import logging
from typing import Optional

from admaker.config import config
from admaker.jobs.models import GenerationJob, JobKind
from admaker.prompts import (
    DECISION_PROMPTS,
    build_panel_prompt,
    build_valentine_prompt,
)
from admaker.providers import ElevenLabsProvider, ReplicateClient

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base exception for gateway errors."""
    pass


class MissingInputError(GatewayError):
    """Raised when a required field is absent or empty."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def _require(value: Optional[str], message: str) -> str:
    if not value:
        raise MissingInputError(message)
    return value


class ProviderGateway:
    """
    Stateless translators for image, video and voice generation.

    Image payloads always request webp output; panels are square at quality
    80, decisions square at 90 and valentine scenes 16:9 at 90.
    """

    def __init__(
        self,
        replicate: Optional[ReplicateClient] = None,
        voice: Optional[ElevenLabsProvider] = None,
        image_model: Optional[str] = None,
        video_model: Optional[str] = None,
    ):
        self.replicate = replicate or ReplicateClient()
        self.voice = voice or ElevenLabsProvider()
        self.image_model = image_model or config.providers.image_model
        self.video_model = video_model or config.providers.video_model

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------

    async def submit_panel_image(
        self,
        scene: Optional[str],
        character: Optional[str] = None,
        brand: Optional[str] = None,
    ) -> GenerationJob:
        scene = _require(scene, "Scene is required")
        return await self._submit_image(
            build_panel_prompt(scene, character, brand),
            aspect_ratio="1:1",
            quality=80,
        )

    async def submit_decision_image(self, decision: Optional[str]) -> GenerationJob:
        if not decision or decision not in DECISION_PROMPTS:
            raise MissingInputError("Valid decision is required")
        return await self._submit_image(
            DECISION_PROMPTS[decision],
            aspect_ratio="1:1",
            quality=90,
        )

    async def submit_valentine_image(self, scene: Optional[str]) -> GenerationJob:
        scene = _require(scene, "Scene is required")
        return await self._submit_image(
            build_valentine_prompt(scene),
            aspect_ratio="16:9",
            quality=90,
        )

    async def submit_video(self, prompt: Optional[str]) -> GenerationJob:
        prompt = _require(prompt, "Prompt is required")
        return await self.replicate.create_prediction(
            self.video_model,
            {"prompt": prompt, "prompt_optimizer": True},
            kind=JobKind.VIDEO,
        )

    async def _submit_image(self, prompt: str, aspect_ratio: str, quality: int) -> GenerationJob:
        return await self.replicate.create_prediction(
            self.image_model,
            {
                "prompt": prompt,
                "aspect_ratio": aspect_ratio,
                "output_format": "webp",
                "output_quality": quality,
            },
            kind=JobKind.IMAGE,
        )

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    async def fetch_status(self, job_id: Optional[str], kind: JobKind = JobKind.IMAGE) -> GenerationJob:
        """Fetch a job by the exact id returned at submission."""
        job_id = _require(job_id, "ID is required")
        return await self.replicate.get_prediction(job_id, kind=kind)

    async def fetch_image_status(self, job_id: Optional[str]) -> GenerationJob:
        return await self.fetch_status(job_id, JobKind.IMAGE)

    async def fetch_video_status(self, job_id: Optional[str]) -> GenerationJob:
        return await self.fetch_status(job_id, JobKind.VIDEO)

    # ------------------------------------------------------------------
    # Voice
    # ------------------------------------------------------------------

    async def synthesize_voice(self, text: Optional[str], character: Optional[str] = None) -> bytes:
        """Narrate ``text`` with the voice matched to ``character``."""
        text = _require(text, "Text is required")
        return await self.voice.synthesize(text, character)

    async def close(self):
        await self.replicate.close()
        await self.voice.close()
