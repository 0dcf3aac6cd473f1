"""
Billing / entitlement provider interface.

The platform store is outside this project; it only has to report which
product identifiers the user currently owns. This module maps those
identifiers to a subscription tier and provides the pricing helpers the
subscription screen relies on.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Protocol

from core.catalog import SubscriptionTier

PRO_MONTHLY = "com.xvisionboardai.pro.monthly"
PRO_YEARLY = "com.xvisionboardai.pro.yearly"
PREMIUM_MONTHLY = "com.xvisionboardai.premium.monthly"
PREMIUM_YEARLY = "com.xvisionboardai.premium.yearly"
CREDITS_SMALL = "com.xvisionboardai.credits.small"
CREDITS_MEDIUM = "com.xvisionboardai.credits.medium"
CREDITS_LARGE = "com.xvisionboardai.credits.large"

PRODUCT_IDENTIFIERS = frozenset({
    PRO_MONTHLY,
    PRO_YEARLY,
    PREMIUM_MONTHLY,
    PREMIUM_YEARLY,
    CREDITS_SMALL,
    CREDITS_MEDIUM,
    CREDITS_LARGE,
})

# Highest tier first
TIER_PRODUCTS: tuple[tuple[SubscriptionTier, frozenset], ...] = (
    (SubscriptionTier.PREMIUM, frozenset({PREMIUM_MONTHLY, PREMIUM_YEARLY})),
    (SubscriptionTier.PRO, frozenset({PRO_MONTHLY, PRO_YEARLY})),
)


@dataclass(frozen=True)
class Product:
    """A purchasable store product."""
    id: str
    display_name: str
    price: Decimal

    @property
    def is_subscription(self) -> bool:
        return "monthly" in self.id or "yearly" in self.id

    @property
    def is_credits(self) -> bool:
        return "credits" in self.id

    @property
    def display_price(self) -> str:
        return f"${self.price.quantize(Decimal('0.01'))}"


class BillingProvider(Protocol):
    def purchased_product_ids(self) -> set[str]:
        ...


class StaticBillingProvider:
    """Billing provider backed by a fixed set of owned product ids."""

    def __init__(self, purchased: Iterable[str] = ()):
        self._purchased = set(purchased)

    def purchased_product_ids(self) -> set[str]:
        return set(self._purchased)

    def record_purchase(self, product_id: str) -> None:
        if product_id not in PRODUCT_IDENTIFIERS:
            raise ValueError(f"Unknown product: {product_id}")
        self._purchased.add(product_id)


def tier_for_products(product_ids: Iterable[str]) -> SubscriptionTier:
    """Map owned products to a tier: premium beats pro beats free."""
    owned = set(product_ids)
    for tier, products in TIER_PRODUCTS:
        if owned & products:
            return tier
    return SubscriptionTier.FREE


def subscription_products(products: Iterable[Product]) -> list[Product]:
    return [p for p in products if p.is_subscription]


def credit_products(products: Iterable[Product]) -> list[Product]:
    return [p for p in products if p.is_credits]


def monthly_price(product: Product) -> str:
    """Display price per month; yearly plans are divided by twelve."""
    if "yearly" in product.id:
        monthly = (product.price / 12).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        return f"${monthly}"
    return product.display_price


def can_export_hd(tier: SubscriptionTier) -> bool:
    return tier != SubscriptionTier.FREE


def can_use_advanced_ai(tier: SubscriptionTier) -> bool:
    return tier == SubscriptionTier.PREMIUM
