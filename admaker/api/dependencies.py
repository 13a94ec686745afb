"""
Shared dependencies for API routes.
"""
import logging
from functools import lru_cache

from admaker.config import config
from admaker.services.gateway import ProviderGateway
from admaker.studio import SessionStore, Studio

logger = logging.getLogger(__name__)


@lru_cache()
def get_gateway() -> ProviderGateway:
    """Get cached ProviderGateway instance."""
    return ProviderGateway()


@lru_cache()
def get_studio() -> Studio:
    """Get cached Studio bound to the shared gateway."""
    return Studio(get_gateway())


@lru_cache()
def get_session_store() -> SessionStore:
    """Get the process-wide studio session registry."""
    return SessionStore(ttl=config.session_ttl, max_sessions=config.max_sessions)


async def close_gateway() -> None:
    """Close provider HTTP clients if the gateway was ever created."""
    if get_gateway.cache_info().currsize:
        await get_gateway().close()
        get_gateway.cache_clear()
        logger.info("Provider gateway closed")
