"""
Domain models and value objects.

Contains the pricing entities: Money, LineItem, PricingRule, CommissionConfig,
ListingSnapshot, OrderData.
"""

from src.core.domain.commission import CommissionConfig
from src.core.domain.line_item import (
    BOTH_PARTIES,
    LINE_ITEM_CUSTOMER_COMMISSION,
    LINE_ITEM_PROVIDER_COMMISSION,
    LINE_ITEM_SHIPPING_FEE,
    WELL_KNOWN_CODES,
    LineItem,
    Party,
    is_valid_line_item_code,
    is_well_known_code,
    serialize_line_items,
)
from src.core.domain.listing import (
    AvailabilityPlan,
    ListingPublicData,
    ListingSnapshot,
    PriceVariant,
    UnitType,
)
from src.core.domain.money import Money, round_half_up, to_decimal
from src.core.domain.order import OrderData
from src.core.domain.pricing_rule import MAX_PRICING_RULES, PricingRule, RuleType

__all__ = [
    # Money
    "Money",
    "round_half_up",
    "to_decimal",
    # Line items
    "LineItem",
    "Party",
    "BOTH_PARTIES",
    "LINE_ITEM_CUSTOMER_COMMISSION",
    "LINE_ITEM_PROVIDER_COMMISSION",
    "LINE_ITEM_SHIPPING_FEE",
    "WELL_KNOWN_CODES",
    "is_valid_line_item_code",
    "is_well_known_code",
    "serialize_line_items",
    # Pricing rules
    "PricingRule",
    "RuleType",
    "MAX_PRICING_RULES",
    # Commission
    "CommissionConfig",
    # Listing / order
    "ListingSnapshot",
    "ListingPublicData",
    "PriceVariant",
    "AvailabilityPlan",
    "UnitType",
    "OrderData",
]
