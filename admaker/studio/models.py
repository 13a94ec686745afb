"""
In-memory studio data: storyboard panels, valentine scenes and selections.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from admaker.catalog import IMAGES_PER_SCENE, STORYBOARD_PLACEHOLDERS


@dataclass
class Panel:
    """One storyboard panel; ``image`` is filled in when its job completes."""
    text: str = ""
    image: Optional[str] = None

    def scene(self, index: int) -> str:
        """Panel text, or the default placeholder for this slot."""
        return self.text.strip() or STORYBOARD_PLACEHOLDERS[index]


@dataclass
class Scene:
    """One valentine scene and its generated images."""
    text: str
    images: List[Optional[str]] = field(default_factory=lambda: [None] * IMAGES_PER_SCENE)


@dataclass
class Selection:
    """Current ad selections. One active value per category."""
    brand: Optional[str] = None
    character: Optional[str] = None
    slogan: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.brand and self.character and self.slogan)
