"""Core shared infrastructure."""

from core.catalog import SubscriptionTier, VisionBoardLayout, VisionBoardStyle
from core.models import User, UserPreferences, VisionBoard, VisionBoardImage
from core.state import GenerationStage, GenerationState
from core.persistence import JsonKeyValueStore, open_store
from core.ledger import EntitlementLedger
from core.repository import BoardRepository

__all__ = [
    "SubscriptionTier",
    "VisionBoardLayout",
    "VisionBoardStyle",
    "User",
    "UserPreferences",
    "VisionBoard",
    "VisionBoardImage",
    "GenerationStage",
    "GenerationState",
    "JsonKeyValueStore",
    "open_store",
    "EntitlementLedger",
    "BoardRepository",
]
