"""
UI Module - HTML pages for the studio flows.
"""
from .routes import router as ui_router

__all__ = ["ui_router"]
