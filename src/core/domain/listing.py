"""
ListingSnapshot — the part of a listing record the pricing engine reads

Read-only view over the platform's listing (price, publicData,
availability plan). Accepts the platform's camelCase keys.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.core.domain.money import Money
from src.core.domain.pricing_rule import PricingRule, number_or_none, whole_number_or_none


# =============================================================================
# ENUMS
# =============================================================================


class UnitType(str, Enum):
    """Listing unit types tied to the payment processes."""

    DAY = "day"
    NIGHT = "night"
    HOUR = "hour"
    WEEK = "week"
    MONTH = "month"
    FIXED = "fixed"
    ITEM = "item"
    OFFER = "offer"
    REQUEST = "request"

    @classmethod
    def parse(cls, value: Any) -> "UnitType | None":
        try:
            return cls(value)
        except ValueError:
            return None


BOOKABLE_UNIT_TYPES = frozenset(
    {UnitType.DAY, UnitType.NIGHT, UnitType.HOUR, UnitType.FIXED, UnitType.WEEK, UnitType.MONTH}
)
DATE_RANGE_UNIT_TYPES = frozenset({UnitType.DAY, UnitType.NIGHT, UnitType.WEEK, UnitType.MONTH})
NEGOTIATION_UNIT_TYPES = frozenset({UnitType.OFFER, UnitType.REQUEST})


# =============================================================================
# NESTED MODELS
# =============================================================================


class PriceVariant(BaseModel):
    """Alternate price selectable by name (e.g. weekend pricing)."""

    name: str | None = None
    price_in_subunits: Any = Field(None, alias="priceInSubunits")

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @property
    def has_valid_price(self) -> bool:
        price = self.price_in_subunits
        return isinstance(price, int) and not isinstance(price, bool) and price >= 0


class AvailabilityPlan(BaseModel):
    timezone: str | None = None

    model_config = {"frozen": True, "extra": "ignore"}


class ListingPublicData(BaseModel):
    """Listing publicData fields consumed by the engine."""

    unit_type: str | None = Field(None, alias="unitType")
    price_variants: list[PriceVariant] | None = Field(None, alias="priceVariants")
    price_variations_enabled: bool | None = Field(False, alias="priceVariationsEnabled")

    shipping_price_in_subunits_one_item: int | None = Field(
        None, alias="shippingPriceInSubunitsOneItem"
    )
    shipping_price_in_subunits_additional_items: int | None = Field(
        None, alias="shippingPriceInSubunitsAdditionalItems"
    )

    pricing_rules: list[PricingRule] | None = Field(None, alias="pricingRules")
    # Legacy single-rule configuration
    evening_surcharge_per_hour_subunits: int | None = Field(
        None, alias="eveningSurchargePerHourSubunits"
    )
    business_hours_end: float | None = Field(None, alias="businessHoursEnd")

    listing_timezone: str | None = Field(None, alias="listingTimezone")

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @field_validator("pricing_rules", mode="before")
    @classmethod
    def drop_malformed_rules(cls, v: Any) -> list | None:
        """A non-list configuration is absent; non-object entries are skipped."""
        if not isinstance(v, (list, tuple)):
            return None
        return [rule for rule in v if isinstance(rule, (Mapping, PricingRule))]

    @field_validator("evening_surcharge_per_hour_subunits", mode="before")
    @classmethod
    def drop_non_integer_surcharge(cls, v: Any) -> int | None:
        return whole_number_or_none(v)

    @field_validator("business_hours_end", mode="before")
    @classmethod
    def drop_non_numeric_hour(cls, v: Any) -> float | None:
        return number_or_none(v)

    def find_price_variant(self, name: str | None) -> PriceVariant | None:
        if not self.price_variants:
            return None
        return next((pv for pv in self.price_variants if pv.name == name), None)


# =============================================================================
# LISTING SNAPSHOT
# =============================================================================


class ListingSnapshot(BaseModel):
    """Listing record as supplied by the caller."""

    price: Money | None = None
    public_data: ListingPublicData = Field(default_factory=ListingPublicData, alias="publicData")
    availability_plan: AvailabilityPlan | None = Field(None, alias="availabilityPlan")

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @property
    def unit_type(self) -> UnitType | None:
        return UnitType.parse(self.public_data.unit_type)

    @property
    def availability_plan_timezone(self) -> str | None:
        return self.availability_plan.timezone if self.availability_plan else None
