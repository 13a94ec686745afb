"""
Prompt templates and builders.

Templates are module constants and the decision table is a read-only
mapping; builders only interpolate user fields into them.
"""
from types import MappingProxyType
from typing import Optional, Sequence

INK_STYLE_PROMPT = (
    "High-contrast monochrome ink look: heavy blacks carved out of bright white space, minimal midtones. "
    "Expressive, scratchy linework: dry-brush streaks, jittery hatching, and visible stroke direction. "
    "Strong line-weight variation: thick-to-thin contours that snap between delicate detail and bold outline. "
    "Graphic poster sensibility: simplified shapes, readable silhouettes, and flat shadow masses. "
    "Comic/storyboard finish: confident panel-border geometry, bold framing language, and print-ready clarity. "
    "Analog/print imperfections: uneven fills, rough edges, slight bleed/ghosting like photocopy or risograph. "
    "Controlled limited-palette feel: primarily black/white with restrained gray/blue wash and rare accent hits. "
    "Cinematic contrast design: dramatic cropping, deep blacks for depth, and lighting implied via negative space. "
    "Texture-forward surfaces: layered hatching, scumbled blacks, and paper grain showing through. "
    "Overall mood: stark, gritty, dystopian tone created purely through contrast, density, and abrasion."
)

VALENTINE_STYLE_PROMPT = """Hazy, motion-blurred, memory-fragment realism. Half-remembered moment mid-movement.
Handheld, imperfect, incidental vantage. Smear, rolling-shutter wobble, accidental framing.
Human presence implied not shown. Partially silhouetted. Face unreadable. Mid-motion. Ambiguous.
Overexposed center, dirty shadows, vignette into murk.
Harsh light bleeding in. Veiling glare. Lifted blacks. Bloom around highlights.
Washed out. Nicotine-tinted. Desaturated. Muted greens yellows grays.
Murky. Dreamlike. Raw. Unpolished.
Background streaks and smears. Unreadable details.
Grit. Soft focus. Film noise. No sharp edges.
Do: overexposure, motion blur, ambiguous figures, grime, grain.
Avoid: clean lighting, sharp focus, vivid color, clarity, polish."""

DECISION_PROMPTS = MappingProxyType({
    "porsche": (
        "A person sitting alone in a beautiful Porsche 911, parked in a driveway of a modest house. "
        "The car is gleaming but the person looks stressed, staring at bills and bank statements scattered "
        "on the passenger seat. Empty wallet visible. The contrast between the luxury car and financial "
        "stress is palpable. Realistic photography style, cinematic lighting, melancholic mood."
    ),
    "save": (
        "A middle-aged person sitting alone in a sparse, minimalist apartment, staring at a computer screen "
        "showing a large bank balance. They look healthy but lonely. No decorations, no photos of friends or "
        "family, just bare walls and a single plant. A stack of untouched travel brochures gathering dust. "
        "The person has never lived, only saved. Realistic photography style, cold blue lighting, isolated "
        "atmosphere."
    ),
    "sushi": (
        "A joyful person at a sushi restaurant surrounded by empty plates, chopsticks in hand, laughing with "
        "friends. Photos on the wall behind them show the same person at different sushi restaurants around "
        "the world - Tokyo, LA, NYC. They look genuinely happy and fulfilled, with a slightly rounder figure "
        "and the biggest smile. Warm golden lighting, vibrant colors, sense of community and joy. Realistic "
        "photography style."
    ),
})

DEFAULT_CHARACTER = "mysterious figure"
DEFAULT_BRAND = "product"


def build_panel_prompt(scene: str, character: Optional[str] = None, brand: Optional[str] = None) -> str:
    """Storyboard panel prompt in the ink style."""
    return (
        f"{scene}. Character: {character or DEFAULT_CHARACTER}. "
        f"Brand: {brand or DEFAULT_BRAND} visible in scene. {INK_STYLE_PROMPT}"
    )


def build_valentine_prompt(scene: str) -> str:
    return f"{scene}. {VALENTINE_STYLE_PROMPT}"


def build_ad_script(brand: str, character: str, slogan: str) -> str:
    """Narration read by the character's voice."""
    return (
        f"{character} here. Listen up. {brand} changed my life. "
        f"You know what I always say? {slogan}. "
        f"{brand}. Get some."
    )


def build_ad_video_prompt(brand: str, character: str, slogan: str, scenes: Sequence[str]) -> str:
    storyboard_text = " → ".join(scenes)
    return (
        f"Cinematic Super Bowl commercial. {character} as spokesperson for {brand}. "
        f"Storyboard: {storyboard_text} "
        f"Style: High production value, dramatic lighting, epic feel. "
        f'Slogan: "{slogan}"'
    )


def build_tiktok_script(brand: str, character: str, slogan: str, scenes: Sequence[str]) -> str:
    """'Okay hear me out' reaction voiceover. Uses panels 1, 2 and 5."""
    return (
        f"Okay hear me out. So {brand} drops this Super Bowl ad right? And it's got {character} in it. "
        f"So it starts with {scenes[0]}. "
        f"Then boom, {scenes[1]}. "
        f"And get this - {scenes[4]}. "
        f"The whole vibe is just... {slogan}. "
        f"I'm telling you this would break the internet. Like actually viral. Thoughts?"
    )


def build_tiktok_video_prompt(brand: str, character: str, scenes: Sequence[str]) -> str:
    return (
        "Vertical 9:16 TikTok reaction video format. Main content takes up most of screen showing a dramatic "
        f"black and white storyboard illustration for a {brand} commercial featuring {character}. "
        "Small circular facecam bubble in bottom right corner showing a young excited person reacting and "
        "explaining. The person has ring light catchlights, casual clothes, animated expressions, pointing at "
        "the main image. Gen-z TikTok creator energy, \"okay hear me out\" vibes. "
        f"The storyboard shows: {scenes[0]}. Split screen layout - art dominates, reactor in corner."
    )
