"""
Slideshow - flashes images with a blank frame between each one.

Every tick toggles the blank phase; leaving the blank phase advances to the
next image, wrapping to the first after the last.
"""
import asyncio
import logging
from typing import Callable, List, Optional, Sequence

logger = logging.getLogger(__name__)

SLIDESHOW_TICK = 0.2
EXIT_KEY = "Escape"


class Slideshow:
    """Display/blank state machine over a list of media URLs."""

    def __init__(self, frames: Sequence[str] = (), tick: float = SLIDESHOW_TICK):
        self.frames: List[str] = list(frames)
        self.tick_interval = tick
        self.playing = False
        self.index = 0
        self.blank = False

    @property
    def current(self) -> Optional[str]:
        """URL on screen, or None while blank or stopped."""
        if not self.playing or self.blank or not self.frames:
            return None
        return self.frames[self.index]

    def start(self, frames: Optional[Sequence[str]] = None) -> bool:
        """Begin on frame 0 with the blank phase off. False if there is nothing to show."""
        if frames is not None:
            self.frames = list(frames)
        if not self.frames:
            return False
        self.playing = True
        self.index = 0
        self.blank = False
        return True

    def stop(self) -> None:
        self.playing = False

    def tick(self) -> None:
        if not self.playing or not self.frames:
            return
        if self.blank:
            self.index = (self.index + 1) % len(self.frames)
            self.blank = False
        else:
            self.blank = True

    def handle_key(self, key: str) -> bool:
        """Stop on Escape. True if the key was consumed."""
        if key == EXIT_KEY and self.playing:
            self.stop()
            return True
        return False

    async def play(self, on_frame: Optional[Callable[["Slideshow"], None]] = None) -> None:
        """Tick until stopped."""
        while self.playing:
            await asyncio.sleep(self.tick_interval)
            if not self.playing:
                break
            self.tick()
            if on_frame:
                on_frame(self)

    def to_dict(self) -> dict:
        return {
            "playing": self.playing,
            "index": self.index,
            "blank": self.blank,
            "frame": self.current,
            "total": len(self.frames),
        }
