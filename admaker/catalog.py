"""
Selection catalogues shown by the pages: brands, characters, storyboard
placeholders, valentine scenes and life decisions.
"""
from dataclasses import dataclass

BRANDS = (
    "Doritos",
    "Budweiser",
    "Pepsi",
    "Coca-Cola",
    "Nike",
    "Apple",
    "Amazon",
    "Google",
    "Toyota",
    "Hyundai",
    "T-Mobile",
    "Verizon",
    "McDonald's",
    "Uber Eats",
    "DraftKings",
    "Squarespace",
)

CHARACTERS = (
    "The Rock",
    "Beyoncé",
    "Tom Brady",
    "Serena Williams",
    "Shrek",
    "SpongeBob",
    "Darth Vader",
    "Batman",
    "Kevin Hart",
    "Taylor Swift",
    "Martha Stewart",
    "Snoop Dogg",
    "Mickey Mouse",
    "Groot",
    "Pikachu",
    "Mario",
)

STORYBOARD_PLACEHOLDERS = (
    "WIDE SHOT: Industrial warehouse. Rows of workers stare at screens.",
    "CLOSE UP: A single chip falls in slow motion.",
    "MEDIUM: Character turns dramatically toward camera.",
    "POV: Walking through a crowd of confused onlookers.",
    "WIDE: Character stands alone on mountaintop, holding product.",
    "CLOSE UP: A single tear rolls down cheek.",
    "ACTION: Explosion of color and confetti behind character.",
    "MEDIUM: Character takes a bite / sip / uses product.",
    "FINAL: Logo appears. Slogan fades in. Character winks.",
)

PANEL_COUNT = len(STORYBOARD_PLACEHOLDERS)

VALENTINE_SCENES = (
    "Sitting in a parked car at night, engine off, streetlight bleeding through the windshield",
    "Walking through a gas station parking lot, fluorescent lights overhead, late night",
    "Leaning against a chain link fence, city in the background, smoking",
    "Riding in the back of an uber, face lit by phone glow, buildings streaking past",
    "Standing alone at a crosswalk, waiting, headlights washing over",
    "Sitting on the curb outside a liquor store, looking at nothing",
)

IMAGES_PER_SCENE = 3


@dataclass(frozen=True)
class Decision:
    id: str
    title: str
    description: str
    icon: str


DECISIONS = (
    Decision("porsche", "Buy a Porsche", "Spend it all on a dream car", "🚗"),
    Decision("save", "Save It", "Put the money away for the future", "🏦"),
    Decision("sushi", "1000 Sushi Dinners", "Enjoy life one roll at a time", "🍣"),
)
