"""
Voice presets and character-to-voice selection for ElevenLabs.
"""
from types import MappingProxyType
from typing import Optional

# ElevenLabs premade voices
VOICE_PRESETS = MappingProxyType({
    "narrator": "21m00Tcm4TlvDq8ikWAM",   # Rachel
    "deep": "29vD33N1CtxCmqQRPOHJ",       # Drew
    "energetic": "ErXwobaYiN019PkySvjV",  # Antoni
    "wise": "VR6AewLTigWG4xSOukaG",       # Arnold
    "friendly": "pNInz6obpgDQGcFmaJgB",   # Adam
})

DEFAULT_PRESET = "narrator"

# Checked in order; the first preset with a matching substring wins.
VOICE_KEYWORDS = (
    ("deep", ("rock", "vader", "batman")),
    ("friendly", ("snoop", "kevin")),
    ("energetic", ("beyoncé", "taylor")),
    ("wise", ("martha", "yoda", "groot")),
)


def select_preset(character: Optional[str]) -> str:
    """
    Pick a voice preset name for a character.

    A character equal to a preset name ("energetic") selects that preset
    directly; otherwise keywords are matched as substrings of the lowercased
    character, first match wins.
    """
    character_lower = (character or "").strip().lower()

    if character_lower in VOICE_PRESETS:
        return character_lower

    for preset, keywords in VOICE_KEYWORDS:
        if any(keyword in character_lower for keyword in keywords):
            return preset

    return DEFAULT_PRESET


def select_voice(character: Optional[str]) -> str:
    """Voice id for a character."""
    return VOICE_PRESETS[select_preset(character)]
