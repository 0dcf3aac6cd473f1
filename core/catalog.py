"""Static lookup tables for layouts, styles and subscription tiers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class VisionBoardLayout(str, Enum):
    GRID_3X3 = "3x3"
    COLLAGE = "collage"
    SINGLE_POSTER = "poster"

    @property
    def info(self) -> "LayoutInfo":
        return LAYOUTS[self]

    @property
    def display_name(self) -> str:
        return LAYOUTS[self].display_name

    @property
    def image_count(self) -> int:
        return LAYOUTS[self].image_count


class VisionBoardStyle(str, Enum):
    CINEMATIC = "cinematic"
    LUXURIOUS = "luxurious"
    MINIMALIST = "minimalist"
    NATURAL = "natural"
    FUTURISTIC = "futuristic"
    ARTISTIC = "artistic"

    @property
    def info(self) -> "StyleInfo":
        return STYLES[self]

    @property
    def display_name(self) -> str:
        return STYLES[self].display_name

    @property
    def prompt_prefix(self) -> str:
        return STYLES[self].prompt_prefix


class SubscriptionTier(str, Enum):
    FREE = "free"
    PRO = "pro"
    PREMIUM = "premium"

    @property
    def info(self) -> "TierInfo":
        return TIERS[self]

    @property
    def display_name(self) -> str:
        return TIERS[self].display_name

    @property
    def max_boards(self) -> Optional[int]:
        """Board limit for the tier. None means unbounded."""
        return TIERS[self].max_boards


@dataclass(frozen=True)
class LayoutInfo:
    display_name: str
    description: str
    image_count: int
    icon: str


@dataclass(frozen=True)
class StyleInfo:
    display_name: str
    description: str
    prompt_prefix: str
    primary_color: str
    gradient_colors: tuple[str, str]
    affirmation: str


@dataclass(frozen=True)
class TierInfo:
    display_name: str
    monthly_price: str
    max_boards: Optional[int]
    features: tuple[str, ...]


LAYOUTS: dict[VisionBoardLayout, LayoutInfo] = {
    VisionBoardLayout.GRID_3X3: LayoutInfo(
        display_name="3×3 Grid",
        description="9 personalized images in a classic grid",
        image_count=9,
        icon="grid",
    ),
    VisionBoardLayout.COLLAGE: LayoutInfo(
        display_name="Collage",
        description="6 images in an artistic collage layout",
        image_count=6,
        icon="rectangle.3.group",
    ),
    VisionBoardLayout.SINGLE_POSTER: LayoutInfo(
        display_name="Single Poster",
        description="1 large inspirational poster",
        image_count=1,
        icon="photo",
    ),
}

STYLES: dict[VisionBoardStyle, StyleInfo] = {
    VisionBoardStyle.CINEMATIC: StyleInfo(
        display_name="Cinematic",
        description="Movie-like scenes with dramatic lighting",
        prompt_prefix="Cinematic, dramatic lighting,",
        primary_color="blue",
        gradient_colors=("blue", "purple"),
        affirmation="My life unfolds like an inspiring movie with perfect timing",
    ),
    VisionBoardStyle.LUXURIOUS: StyleInfo(
        display_name="Luxurious",
        description="High-end lifestyle with elegant aesthetics",
        prompt_prefix="Luxurious, high-end, elegant,",
        primary_color="cosmicGold",
        gradient_colors=("cosmicGold", "orange"),
        affirmation="I live in luxury and abundance flows to me effortlessly",
    ),
    VisionBoardStyle.MINIMALIST: StyleInfo(
        display_name="Minimalist",
        description="Clean, simple designs with focus",
        prompt_prefix="Minimalist, clean, simple,",
        primary_color="gray",
        gradient_colors=("gray", "white"),
        affirmation="I find peace and clarity in simplicity and focus",
    ),
    VisionBoardStyle.NATURAL: StyleInfo(
        display_name="Natural",
        description="Organic, earth-toned environments",
        prompt_prefix="Natural, organic, earth-toned,",
        primary_color="green",
        gradient_colors=("green", "brown"),
        affirmation="I am in harmony with nature and my authentic self",
    ),
    VisionBoardStyle.FUTURISTIC: StyleInfo(
        display_name="Futuristic",
        description="Modern, tech-inspired visuals",
        prompt_prefix="Futuristic, modern, tech-inspired,",
        primary_color="cyan",
        gradient_colors=("cyan", "blue"),
        affirmation="I embrace innovation and create my future with technology",
    ),
    VisionBoardStyle.ARTISTIC: StyleInfo(
        display_name="Artistic",
        description="Creative, abstract interpretations",
        prompt_prefix="Artistic, creative, abstract,",
        primary_color="cosmicPink",
        gradient_colors=("cosmicPink", "purple"),
        affirmation="My creativity flows freely and inspires others",
    ),
}

TIERS: dict[SubscriptionTier, TierInfo] = {
    SubscriptionTier.FREE: TierInfo(
        display_name="Free",
        monthly_price="$0",
        max_boards=1,
        features=(
            "1 personalized vision board",
            "Basic AI affirmations",
            "Standard resolution",
            "Watermarked exports",
        ),
    ),
    SubscriptionTier.PRO: TierInfo(
        display_name="Pro",
        monthly_price="$9.99",
        max_boards=50,
        features=(
            "50 personalized vision boards",
            "Advanced AI features",
            "HD exports without watermarks",
            "Priority processing",
            "Audio affirmations",
        ),
    ),
    SubscriptionTier.PREMIUM: TierInfo(
        display_name="Premium",
        monthly_price="$19.99",
        max_boards=None,
        features=(
            "Unlimited vision boards",
            "Premium AI models",
            "4K exports",
            "Advanced personalization",
            "Video manifestations",
            "Personal coach AI",
        ),
    ),
}

# Generic affirmations appended after goal and style affirmations
BASE_AFFIRMATIONS: tuple[str, ...] = (
    "I am living my dream life with confidence and joy",
    "Every day brings me closer to my manifestation goals",
    "I attract abundance and success in all areas of my life",
    "My vision is becoming my reality through focused intention",
    "I am worthy of all the success and happiness I desire",
)

# Formatted with the style prefix
BASE_PROMPT_TEMPLATES: tuple[str, ...] = (
    "{prefix} person achieving their dreams",
    "{prefix} successful lifestyle scene",
    "{prefix} person in their ideal environment",
    "{prefix} manifestation of abundance",
    "{prefix} person living their best life",
    "{prefix} achievement and celebration scene",
    "{prefix} person in their dream location",
    "{prefix} success and prosperity visualization",
    "{prefix} person embodying their goals",
)

GOAL_AFFIRMATION_TEMPLATE = "I am successfully achieving my goal of {goal}"
GOAL_PROMPT_TEMPLATE = "{prefix} person successfully {goal}"

MAX_AFFIRMATIONS = 5
MAX_GOAL_AFFIRMATIONS = 3
