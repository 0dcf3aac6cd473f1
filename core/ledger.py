"""User account and entitlement tracking."""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING, Optional

from pydantic import ValidationError

from core.catalog import SubscriptionTier
from core.errors import InvalidInputError, PersistenceError, PersistenceWarning
from core.models import User, utcnow
from core.persistence import CURRENT_USER_KEY, ONBOARDING_KEY, JsonKeyValueStore

if TYPE_CHECKING:
    from integrations.billing.store import BillingProvider

logger = logging.getLogger(__name__)


def max_boards_for_tier(tier: SubscriptionTier) -> Optional[int]:
    """Maximum number of boards for a tier. None means unbounded."""
    return tier.max_boards


def can_create_board(user: User) -> bool:
    """True if the user's board count is below their tier's limit."""
    limit = max_boards_for_tier(user.subscription_type)
    return limit is None or user.vision_board_count < limit


def remaining_boards(user: User) -> Optional[int]:
    """Boards left before the tier limit. None means unbounded."""
    limit = max_boards_for_tier(user.subscription_type)
    if limit is None:
        return None
    return max(0, limit - user.vision_board_count)


class EntitlementLedger:
    """
    Holds the signed-in user, their subscription tier and usage counters.

    State is persisted under the `currentUser` and `hasCompletedOnboarding`
    keys. Writes are best-effort: a failed write is logged and the in-memory
    user is kept.
    """

    def __init__(self, store: JsonKeyValueStore):
        self.store = store
        self._user: Optional[User] = None
        self.has_completed_onboarding = store.get_bool(ONBOARDING_KEY)
        self._load_user()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load_user(self) -> None:
        data = self.store.get(CURRENT_USER_KEY)
        if data is None:
            return
        try:
            self._user = User.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Failed to load user data: {e}")
            self._user = None

    def _write(self, key: str, value) -> None:
        try:
            if value is None:
                self.store.remove(key)
            else:
                self.store.set(key, value)
        except PersistenceError as e:
            logger.warning(f"Failed to save {key}: {e}")
            warnings.warn(str(e), PersistenceWarning, stacklevel=3)

    def _save_user(self) -> None:
        if self._user is not None:
            self._write(CURRENT_USER_KEY, self._user.to_json_dict())

    # ------------------------------------------------------------------
    # Account lifecycle
    # ------------------------------------------------------------------

    @property
    def current_user(self) -> Optional[User]:
        """A copy of the signed-in user, or None."""
        if self._user is None:
            return None
        return self._user.model_copy(deep=True)

    @property
    def is_logged_in(self) -> bool:
        return self._user is not None

    def sign_up(self, email: str, username: str) -> User:
        if not email.strip() or not username.strip():
            raise InvalidInputError("Email and username are required")
        self._user = User(email=email.strip(), username=username.strip())
        self._save_user()
        logger.info(f"Signed up user {self._user.id}")
        return self.current_user

    def sign_in(self, email: str) -> User:
        """Sign in with an email. The username is the email's local part."""
        email = email.strip()
        if not email:
            raise InvalidInputError("Email is required")
        if self._user is not None and self._user.email == email:
            self._user.last_login_at = utcnow()
        else:
            username = email.split("@")[0] or "User"
            self._user = User(email=email, username=username)
        self._save_user()
        logger.info(f"Signed in user {self._user.id}")
        return self.current_user

    def sign_out(self) -> None:
        self._user = None
        self._write(CURRENT_USER_KEY, None)

    def delete_account(self) -> None:
        """Drop the user and clear their persisted record."""
        if self._user is not None:
            logger.info(f"Deleting account {self._user.id}")
        self.sign_out()

    def update_profile(
        self,
        username: Optional[str] = None,
        profile_image_data: Optional[bytes] = None,
    ) -> None:
        if self._user is None:
            return
        if username is not None:
            self._user.username = username
        if profile_image_data is not None:
            self._user.profile_image_data = profile_image_data
        self._save_user()

    # ------------------------------------------------------------------
    # Entitlements
    # ------------------------------------------------------------------

    def update_tier(self, tier: SubscriptionTier) -> None:
        if self._user is None:
            return
        self._user.subscription_type = tier
        self._save_user()
        logger.info(f"Subscription tier set to {tier.value}")

    def sync_tier(self, billing: "BillingProvider") -> SubscriptionTier:
        """Set the tier from the billing provider's purchased products."""
        from integrations.billing.store import tier_for_products

        tier = tier_for_products(billing.purchased_product_ids())
        self.update_tier(tier)
        return tier

    def increment_board_count(self) -> None:
        if self._user is None:
            return
        self._user.vision_board_count += 1
        self._save_user()

    def can_create_board(self) -> bool:
        if self._user is None:
            return False
        return can_create_board(self._user)

    def remaining_boards(self) -> Optional[int]:
        if self._user is None:
            return 0
        return remaining_boards(self._user)

    @property
    def is_pro_user(self) -> bool:
        return self._user is not None and self._user.subscription_type in (
            SubscriptionTier.PRO,
            SubscriptionTier.PREMIUM,
        )

    @property
    def is_premium_user(self) -> bool:
        return self._user is not None and self._user.subscription_type == SubscriptionTier.PREMIUM

    # ------------------------------------------------------------------
    # Goals and onboarding
    # ------------------------------------------------------------------

    def add_goal(self, goal: str) -> None:
        if self._user is None or goal in self._user.manifestation_goals:
            return
        self._user.manifestation_goals = [*self._user.manifestation_goals, goal]
        self._save_user()

    def remove_goal(self, goal: str) -> None:
        if self._user is None:
            return
        self._user.manifestation_goals = [g for g in self._user.manifestation_goals if g != goal]
        self._save_user()

    def complete_onboarding(self) -> None:
        self.has_completed_onboarding = True
        self._write(ONBOARDING_KEY, True)

    def reset_onboarding(self) -> None:
        self.has_completed_onboarding = False
        self._write(ONBOARDING_KEY, False)
