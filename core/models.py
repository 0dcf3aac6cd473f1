"""
Pydantic models for users and vision boards.

Field names are snake_case in Python and camelCase on disk, which keeps the
persisted payloads compatible with the key-value layout described in
core.persistence.
"""

from __future__ import annotations

import base64
from datetime import datetime, timedelta, timezone
from typing import Annotated, Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from core.catalog import SubscriptionTier, VisionBoardLayout, VisionBoardStyle

SHARE_FOOTER = "Created with XVisionBoard AI - See yourself living your dreams!"


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def _decode_base64(value):
    if isinstance(value, str):
        return base64.b64decode(value)
    return value


# Raw bytes in Python, base64 text in JSON
ImageBytes = Annotated[
    bytes,
    BeforeValidator(_decode_base64),
    PlainSerializer(
        lambda v: base64.b64encode(v).decode("ascii"),
        return_type=str,
        when_used="json",
    ),
]


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("*", mode="after")
    @classmethod
    def _aware_datetimes(cls, value):
        # Older payloads may carry naive timestamps; treat them as UTC
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_json_dict(self) -> dict:
        """Dump using the persisted (camelCase, JSON-safe) representation."""
        return self.model_dump(mode="json", by_alias=True)


class UserPreferences(_Model):
    notifications_enabled: bool = True
    daily_affirmations_enabled: bool = True
    preferred_vision_board_style: VisionBoardStyle = VisionBoardStyle.CINEMATIC
    preferred_layout: VisionBoardLayout = VisionBoardLayout.GRID_3X3
    manifestation_reminders: bool = True
    share_analytics: bool = False


class User(_Model):
    """A signed-up user and their usage counters."""

    id: UUID = Field(default_factory=uuid4)
    email: str
    username: str
    profile_image_data: Optional[ImageBytes] = None
    subscription_type: SubscriptionTier = SubscriptionTier.FREE
    created_at: datetime = Field(default_factory=utcnow)
    last_login_at: datetime = Field(default_factory=utcnow)
    vision_board_count: int = Field(default=0, ge=0)
    manifestation_goals: list[str] = Field(default_factory=list)
    preferences: UserPreferences = Field(default_factory=UserPreferences)

    @property
    def max_vision_boards(self) -> Optional[int]:
        return self.subscription_type.max_boards


class VisionBoardImage(_Model):
    """One generated image slot within a board."""

    id: UUID = Field(default_factory=uuid4)
    image_data: Optional[ImageBytes] = None
    image_url: Optional[str] = None
    prompt: str
    is_personalized: bool = True
    position: int = Field(ge=0)
    aspect_ratio: float = Field(default=1.0, gt=0)


class VisionBoard(_Model):
    """A generated vision board owned by a single user."""

    id: UUID = Field(default_factory=uuid4)
    title: str
    description: str
    user_image_data: ImageBytes
    layout: VisionBoardLayout = VisionBoardLayout.GRID_3X3
    style: VisionBoardStyle = VisionBoardStyle.CINEMATIC
    images: list[VisionBoardImage] = Field(default_factory=list)
    affirmations: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    is_personalized: bool = True
    manifestation_goals: list[str] = Field(default_factory=list)
    view_count: int = Field(default=0, ge=0)
    is_favorite: bool = False
    owner_id: Optional[UUID] = None

    @model_validator(mode="after")
    def _check_invariants(self) -> "VisionBoard":
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not be earlier than created_at")
        positions = [image.position for image in self.images]
        if positions != list(range(len(positions))):
            raise ValueError(f"image positions must be contiguous from 0, got {positions}")
        return self

    @property
    def is_complete(self) -> bool:
        return len(self.images) == self.layout.image_count

    def touch(self) -> None:
        """Bump updated_at, strictly increasing it even if the clock has not moved."""
        now = utcnow()
        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

    def toggle_favorite(self) -> None:
        self.is_favorite = not self.is_favorite
        self.touch()

    def increment_view_count(self) -> None:
        self.view_count += 1
        self.touch()

    def matches(self, query: str) -> bool:
        """Case-insensitive search over title, description and goals."""
        needle = query.strip().casefold()
        if not needle:
            return True
        haystacks = [self.title, self.description, *self.manifestation_goals]
        return any(needle in text.casefold() for text in haystacks)

    def affirmation_at(self, index: int) -> Optional[str]:
        """Affirmation for a rotating index; wraps around the list."""
        if not self.affirmations:
            return None
        return self.affirmations[index % len(self.affirmations)]

    def share_text(self) -> str:
        lines = [
            f"Check out my personalized vision board: {self.title}",
            "",
            self.description,
            "",
            "My affirmations:",
        ]
        lines.extend(f"• {affirmation}" for affirmation in self.affirmations)
        lines.extend(["", SHARE_FOOTER])
        return "\n".join(lines)
