"""
Transaction assembler — line items for one transaction

Single pass, no retries:
    1. unit price: price variant → negotiated offer → listing price
    2. quantity shape by unit type (registry of handlers):
         item                  stock quantity (+ shipping fee line item)
         fixed                 1, or units=1 × seats
         hour                  hours, or hours × seats   (+ pricing rules)
         day/night/week/month  calendar days, or days × seats
         offer/request         1
    3. commissions over the commissionable set (base + surcharges)

Output order is fixed:
    [base, delivery/extra..., surcharges..., provider commission?, customer commission?]
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from src.core.config import PricingConfig
from src.core.contracts import validate_line_items_payload
from src.core.domain.commission import CommissionConfig
from src.core.domain.line_item import (
    BOTH_PARTIES,
    LINE_ITEM_SHIPPING_FEE,
    LineItem,
    Party,
    serialize_line_items,
)
from src.core.domain.listing import (
    BOOKABLE_UNIT_TYPES,
    DATE_RANGE_UNIT_TYPES,
    NEGOTIATION_UNIT_TYPES,
    ListingSnapshot,
    UnitType,
)
from src.core.domain.money import Money
from src.core.domain.order import OrderData
from src.core.errors import MinimumExceedsPayin, MissingQuantityInformation
from src.core.math.line_item_math import (
    calculate_shipping_fee,
    calculate_total_from_line_items,
    construct_valid_line_items,
)
from src.core.math.quantities import calculate_quantity_from_dates, calculate_quantity_from_hours
from src.pricing.commission import get_customer_commission_maybe, get_provider_commission_maybe
from src.pricing.rules import get_pricing_rule_line_items


logger = logging.getLogger(__name__)

DELIVERY_SHIPPING = "shipping"


# =============================================================================
# QUANTITY SHAPES
# =============================================================================


@dataclass(frozen=True)
class Quantity:
    """Plain quantity (nights, hours, items, ...)."""

    value: int | float

    def pricing_fields(self) -> dict[str, Any]:
        return {"quantity": self.value}


@dataclass(frozen=True)
class UnitsAndSeats:
    """Quantity split into units × seats (3 nights × 4 seats)."""

    units: int | float
    seats: int

    def pricing_fields(self) -> dict[str, Any]:
        return {"units": self.units, "seats": self.seats}


QuantityShape = Quantity | UnitsAndSeats


@dataclass(frozen=True)
class QuantityAndExtras:
    """
    Raw handler output, possibly incomplete.

    ``shape()`` turns it into a Quantity or UnitsAndSeats, or reports the
    missing fields. Zero counts as missing.
    """

    quantity: int | float | None = None
    units: int | float | None = None
    seats: int | None = None
    extra_line_items: tuple[LineItem, ...] = field(default_factory=tuple)

    def shape(self) -> QuantityShape:
        if self.units and self.seats:
            return UnitsAndSeats(self.units, self.seats)
        if self.quantity:
            return Quantity(self.quantity)

        missing = [
            name
            for name, value in (
                ("quantity", self.quantity),
                ("units", self.units),
                ("seats", self.seats),
            )
            if not value
        ]
        raise MissingQuantityInformation(missing)


def _split_seats(units: int | float | None, seats: int | None) -> QuantityAndExtras:
    if seats:
        return QuantityAndExtras(units=units, seats=seats)
    return QuantityAndExtras(quantity=units)


# =============================================================================
# UNIT TYPE REGISTRY
# =============================================================================

QuantityHandler = Callable[[UnitType, OrderData, ListingSnapshot, str], QuantityAndExtras]

QUANTITY_HANDLERS: dict[UnitType, QuantityHandler] = {}


def register_unit_type(*unit_types: UnitType) -> Callable[[QuantityHandler], QuantityHandler]:
    """Register a quantity handler ``(unit_type, order_data, listing, currency)``."""

    def decorator(handler: QuantityHandler) -> QuantityHandler:
        for unit_type in unit_types:
            QUANTITY_HANDLERS[unit_type] = handler
        return handler

    return decorator


@register_unit_type(UnitType.ITEM)
def item_quantity(
    unit_type: UnitType, order_data: OrderData, listing: ListingSnapshot, currency: str
) -> QuantityAndExtras:
    """Stock quantity; shipping adds one fee line item. Pickup is free."""
    quantity = order_data.stock_reservation_quantity
    public_data = listing.public_data

    shipping_fee = None
    if order_data.delivery_method == DELIVERY_SHIPPING:
        shipping_fee = calculate_shipping_fee(
            public_data.shipping_price_in_subunits_one_item,
            public_data.shipping_price_in_subunits_additional_items,
            currency,
            quantity,
        )

    extra_line_items = ()
    if shipping_fee is not None:
        extra_line_items = (
            LineItem(
                code=LINE_ITEM_SHIPPING_FEE,
                unit_price=shipping_fee,
                quantity=1,
                include_for=BOTH_PARTIES,
            ),
        )
    return QuantityAndExtras(quantity=quantity, extra_line_items=extra_line_items)


@register_unit_type(UnitType.FIXED)
def fixed_quantity(
    unit_type: UnitType, order_data: OrderData, listing: ListingSnapshot, currency: str
) -> QuantityAndExtras:
    return _split_seats(1, order_data.seats)


@register_unit_type(UnitType.HOUR)
def hour_quantity(
    unit_type: UnitType, order_data: OrderData, listing: ListingSnapshot, currency: str
) -> QuantityAndExtras:
    units = None
    if order_data.has_booking_window:
        units = calculate_quantity_from_hours(order_data.booking_start, order_data.booking_end)
    return _split_seats(units, order_data.seats)


@register_unit_type(*DATE_RANGE_UNIT_TYPES)
def date_range_quantity(
    unit_type: UnitType, order_data: OrderData, listing: ListingSnapshot, currency: str
) -> QuantityAndExtras:
    units = None
    if order_data.has_booking_window:
        units = calculate_quantity_from_dates(
            order_data.booking_start, order_data.booking_end, f"line-item/{unit_type.value}"
        )
    return _split_seats(units, order_data.seats)


@register_unit_type(*NEGOTIATION_UNIT_TYPES)
def negotiation_quantity(
    unit_type: UnitType, order_data: OrderData, listing: ListingSnapshot, currency: str
) -> QuantityAndExtras:
    return QuantityAndExtras(quantity=1)


# =============================================================================
# UNIT PRICE
# =============================================================================


def resolve_unit_price(
    listing: ListingSnapshot, order_data: OrderData, currency: str | None
) -> Money | None:
    """
    Price of one unit.

    1. selected price variant, for bookable unit types with variations enabled
       and a non-negative integer variant price
    2. negotiated offer, for offer/request unit types
    3. listing price (may be None)
    """
    unit_type = listing.unit_type
    public_data = listing.public_data

    if unit_type in BOOKABLE_UNIT_TYPES and public_data.price_variations_enabled:
        variant = public_data.find_price_variant(order_data.price_variant_name)
        if variant is not None and variant.has_valid_price:
            return Money(variant.price_in_subunits, currency)

    if unit_type in NEGOTIATION_UNIT_TYPES and order_data.offer is not None:
        return order_data.offer

    return listing.price


# =============================================================================
# ASSEMBLER
# =============================================================================


class TransactionPricer:
    """
    Computes the ordered line items of a transaction.

    Stateless apart from its configuration; one instance can serve
    concurrent callers.
    """

    def __init__(self, config: PricingConfig | None = None):
        """
        Args:
            config: engine defaults (timezone, surcharge window)
        """
        self.config = config or PricingConfig()

    def line_items(
        self,
        listing: ListingSnapshot | Mapping[str, Any],
        order_data: OrderData | Mapping[str, Any] | None,
        provider_commission: CommissionConfig | Mapping[str, Any] | None = None,
        customer_commission: CommissionConfig | Mapping[str, Any] | None = None,
    ) -> list[LineItem]:
        """
        Line items for one transaction.

        Args:
            listing: listing snapshot (model or platform-shaped mapping)
            order_data: order parameters (model or mapping)
            provider_commission: provider CommissionConfig or mapping
            customer_commission: customer CommissionConfig or mapping

        Returns:
            [base, extras..., surcharges..., provider commission?, customer commission?]

        Raises:
            MissingQuantityInformation: no quantity and no units + seats
            MinimumExceedsPayin: fixed provider minimum above the customer pay-in
            NonNumericCommissionField: malformed commission config
        """
        listing = (
            listing if isinstance(listing, ListingSnapshot) else ListingSnapshot.model_validate(listing)
        )
        order_data = (
            order_data
            if isinstance(order_data, OrderData)
            else OrderData.model_validate(order_data or {})
        )

        unit_type = listing.unit_type
        currency = listing.price.currency if listing.price is not None else order_data.currency
        unit_price = resolve_unit_price(listing, order_data, currency)

        handler = QUANTITY_HANDLERS.get(unit_type)
        quantity_and_extras = (
            handler(unit_type, order_data, listing, currency) if handler else QuantityAndExtras()
        )
        shape = quantity_and_extras.shape()
        logger.debug(
            "Pricing %s listing: unit price %s, %s", listing.public_data.unit_type, unit_price, shape
        )

        order = LineItem(
            code=f"line-item/{listing.public_data.unit_type}",
            unit_price=unit_price,
            include_for=BOTH_PARTIES,
            **shape.pricing_fields(),
        )

        surcharge_line_items = []
        if unit_type is UnitType.HOUR:
            surcharge_line_items = get_pricing_rule_line_items(
                order_data, listing, currency, self.config
            )

        commissionable_line_items = [order, *surcharge_line_items]
        provider_commission_items = get_provider_commission_maybe(
            provider_commission, commissionable_line_items, currency
        )
        customer_commission_items = get_customer_commission_maybe(
            customer_commission, commissionable_line_items, currency
        )

        line_items = [
            order,
            *quantity_and_extras.extra_line_items,
            *surcharge_line_items,
            *provider_commission_items,
            *customer_commission_items,
        ]
        self._check_minimum_commission(line_items, provider_commission_items, currency)
        return line_items

    @staticmethod
    def _check_minimum_commission(
        line_items: list[LineItem], provider_commission_items: list[LineItem], currency: str
    ) -> None:
        """A fixed provider minimum cannot exceed what the customer pays in."""
        fixed_items = [item for item in provider_commission_items if item.quantity is not None]
        if not fixed_items:
            return

        payin_total = calculate_total_from_line_items(
            (item for item in line_items if item.is_included_for(Party.CUSTOMER)), currency
        )
        for item in fixed_items:
            if item.unit_price.amount > payin_total.amount:
                raise MinimumExceedsPayin(item.unit_price.amount, payin_total.amount)


def transaction_line_items(
    listing: ListingSnapshot | Mapping[str, Any],
    order_data: OrderData | Mapping[str, Any] | None,
    provider_commission: CommissionConfig | Mapping[str, Any] | None = None,
    customer_commission: CommissionConfig | Mapping[str, Any] | None = None,
    config: PricingConfig | None = None,
) -> list[LineItem]:
    """Functional entry point; see TransactionPricer.line_items."""
    return TransactionPricer(config).line_items(
        listing, order_data, provider_commission, customer_commission
    )


def transaction_price_payload(line_items: list[LineItem]) -> list[dict[str, Any]]:
    """
    Validated payment-backend payload for computed line items.

    Attaches line totals, serializes in the given order and checks the
    line_items contract.

    Raises:
        InvalidLineItemCode: code outside the line-item/ namespace
        jsonschema.ValidationError: payload violates the contract
    """
    payload = serialize_line_items(construct_valid_line_items(line_items))
    validate_line_items_payload(payload)
    return payload
