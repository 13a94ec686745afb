"""
Studio: page sessions, flow state machines, slideshow and generation flows.
"""
from .flows import FlowNotReadyError, Studio
from .models import Panel, Scene, Selection
from .sessions import (
    AdSession,
    DecisionSession,
    SessionNotFoundError,
    SessionStore,
    StudioSession,
    ValentineSession,
)
from .slideshow import SLIDESHOW_TICK, Slideshow
from .state import FlowBusyError, FlowState, FlowStatus

__all__ = [
    "Studio",
    "FlowNotReadyError",
    "Panel",
    "Scene",
    "Selection",
    "StudioSession",
    "AdSession",
    "DecisionSession",
    "ValentineSession",
    "SessionStore",
    "SessionNotFoundError",
    "Slideshow",
    "SLIDESHOW_TICK",
    "FlowState",
    "FlowStatus",
    "FlowBusyError",
]
