"""
API Routes.
"""
from .health import router as health_router
from .image import router as image_router
from .video import router as video_router
from .voice import router as voice_router
from .studio import router as studio_router

__all__ = [
    "health_router",
    "image_router",
    "video_router",
    "voice_router",
    "studio_router",
]
