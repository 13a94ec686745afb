"""
ElevenLabs voice provider.
"""
import logging
from typing import Optional

import httpx

from admaker.config import config

from .exceptions import ProviderRequestError, ProviderUnavailable
from .voices import select_voice

logger = logging.getLogger(__name__)


class ElevenLabsProvider:
    """ElevenLabs TTS API provider. Returns MP3 bytes in a single call."""

    ENV_KEY = "ELEVENLABS_API_KEY"
    PROVIDER = "elevenlabs"

    VOICE_SETTINGS = {
        "stability": 0.5,
        "similarity_boost": 0.75,
    }

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_id: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key if api_key is not None else (config.providers.elevenlabs_api_key or "")
        self.base_url = (base_url or config.providers.elevenlabs_base_url).rstrip("/")
        self.model_id = model_id or config.providers.tts_model
        self.client = httpx.AsyncClient(
            timeout=timeout or config.providers.http_timeout,
            transport=transport,
        )

    @property
    def name(self) -> str:
        return self.PROVIDER

    @property
    def is_available(self) -> bool:
        return bool(self._api_key)

    async def synthesize(self, text: str, character: Optional[str] = None) -> bytes:
        """
        Synthesize speech from text.

        Args:
            text: Text to synthesize
            character: Character name or preset name used to pick the voice

        Returns:
            Raw audio/mpeg bytes
        """
        voice_id = select_voice(character)
        url = f"{self.base_url}/text-to-speech/{voice_id}"

        logger.info(f"[ELEVENLABS] Synthesizing {len(text)} chars with voice {voice_id}")

        try:
            response = await self.client.post(
                url,
                headers={
                    "Content-Type": "application/json",
                    "xi-api-key": self._api_key,
                },
                json={
                    "text": text,
                    "model_id": self.model_id,
                    "voice_settings": self.VOICE_SETTINGS,
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"[ELEVENLABS] Request failed: {e}")
            raise ProviderUnavailable(self.name, str(e)) from e

        if response.is_error:
            logger.error(f"[ELEVENLABS] HTTP {response.status_code}: {response.text}")
            raise ProviderRequestError(self.name, response.status_code, response.text)

        return response.content

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
