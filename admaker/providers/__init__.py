"""
Providers Layer.

Clients for the external generative media providers:
- Replicate (image and video predictions)
- ElevenLabs (text-to-speech)
"""
from .exceptions import ProviderError, ProviderRequestError, ProviderUnavailable
from .replicate import ReplicateClient
from .elevenlabs import ElevenLabsProvider
from .voices import VOICE_PRESETS, select_preset, select_voice

__all__ = [
    # Exceptions
    "ProviderError",
    "ProviderRequestError",
    "ProviderUnavailable",

    # Clients
    "ReplicateClient",
    "ElevenLabsProvider",

    # Voices
    "VOICE_PRESETS",
    "select_preset",
    "select_voice",
]
