"""
Application Configuration - Environment Variable Management.
Loads provider credentials and endpoints from the .env file.
"""
import os
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env from project root
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"

if ENV_FILE.exists():
    load_dotenv(ENV_FILE)
    logger.info(f"Loaded environment from {ENV_FILE}")
else:
    logger.warning(f".env file not found at {ENV_FILE}")


@dataclass
class ProviderConfig:
    """Generative media provider configuration."""
    replicate_api_token: Optional[str] = None
    elevenlabs_api_key: Optional[str] = None
    replicate_base_url: str = "https://api.replicate.com/v1"
    elevenlabs_base_url: str = "https://api.elevenlabs.io/v1"
    image_model: str = "black-forest-labs/flux-schnell"
    video_model: str = "minimax/video-01"
    tts_model: str = "eleven_monolingual_v1"
    http_timeout: float = 60.0

    @property
    def has_replicate(self) -> bool:
        return bool(self.replicate_api_token and not self.replicate_api_token.startswith("PASTE_"))

    @property
    def has_elevenlabs(self) -> bool:
        return bool(self.elevenlabs_api_key and not self.elevenlabs_api_key.startswith("PASTE_"))


@dataclass
class AppConfig:
    """Main Application Configuration."""
    providers: ProviderConfig
    debug: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    session_ttl: float = 3600.0
    max_sessions: int = 500

    def validate(self) -> dict:
        """Validate configuration and return status."""
        return {
            "providers": {
                "replicate_configured": self.providers.has_replicate,
                "elevenlabs_configured": self.providers.has_elevenlabs,
            },
            "ready_for_images": self.providers.has_replicate,
            "ready_for_video": self.providers.has_replicate,
            "ready_for_voice": self.providers.has_elevenlabs,
        }

    def log_status(self):
        """Log configuration status (without exposing keys)."""
        status = self.validate()

        logger.info("=" * 50)
        logger.info("Configuration Status:")
        logger.info(f"  Replicate API: {'OK' if status['providers']['replicate_configured'] else 'NOT CONFIGURED'}")
        logger.info(f"  ElevenLabs API: {'OK' if status['providers']['elevenlabs_configured'] else 'NOT CONFIGURED'}")
        logger.info(f"  Image model: {self.providers.image_model}")
        logger.info(f"  Video model: {self.providers.video_model}")
        logger.info("=" * 50)

        # Tokens are not enforced: a missing one fails at provider auth time.
        if not status["providers"]["replicate_configured"]:
            logger.warning("REPLICATE_API_TOKEN not set - image and video calls will be rejected by the provider")
        if not status["providers"]["elevenlabs_configured"]:
            logger.warning("ELEVENLABS_API_KEY not set - voice calls will be rejected by the provider")


def load_config() -> AppConfig:
    """Load configuration from environment variables."""
    providers = ProviderConfig(
        replicate_api_token=os.getenv("REPLICATE_API_TOKEN"),
        elevenlabs_api_key=os.getenv("ELEVENLABS_API_KEY"),
        replicate_base_url=os.getenv("REPLICATE_BASE_URL", "https://api.replicate.com/v1"),
        elevenlabs_base_url=os.getenv("ELEVENLABS_BASE_URL", "https://api.elevenlabs.io/v1"),
        http_timeout=float(os.getenv("HTTP_TIMEOUT", "60")),
    )

    origins = os.getenv("CORS_ORIGINS", "*")

    return AppConfig(
        providers=providers,
        debug=os.getenv("DEBUG", "false").lower() == "true",
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        session_ttl=float(os.getenv("SESSION_TTL", "3600")),
        max_sessions=int(os.getenv("MAX_SESSIONS", "500")),
    )


# Global config instance
config = load_config()
