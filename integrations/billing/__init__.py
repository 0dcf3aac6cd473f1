"""Store / billing integration."""

from integrations.billing.store import (
    BillingProvider,
    Product,
    StaticBillingProvider,
    tier_for_products,
)

__all__ = ["BillingProvider", "Product", "StaticBillingProvider", "tier_for_products"]
