"""
Line-item math — totals per line item and per counterparty

lineTotal by pricing mode:
    quantity:        unit_price × quantity
    percentage:      unit_price × percentage / 100   (sign-preserving)
    seats + units:   unit_price × units × seats

All non-integer products are rounded half-up to a whole minor unit
(see src.core.domain.money).
"""

from typing import Iterable, Sequence

from src.core.domain.line_item import LineItem, Party, is_valid_line_item_code
from src.core.domain.money import Money, to_decimal
from src.core.errors import InvalidLineItemCode, InvalidSeats, MissingPricingParameters


# =============================================================================
# PER-MODE TOTALS
# =============================================================================


def calculate_total_price_from_quantity(unit_price: Money, quantity) -> Money:
    """unit_price × quantity; quantity may be fractional (hours)."""
    return unit_price.multiply(quantity)


def calculate_total_price_from_percentage(unit_price: Money, percentage) -> Money:
    """unit_price × percentage / 100; a negative percentage gives a negative total."""
    return unit_price.multiply(percentage, 100)


def calculate_total_price_from_seats(unit_price: Money, unit_count, seats) -> Money:
    """
    unit_price × unit_count × seats.

    Raises:
        InvalidSeats: if seats < 0
    """
    if seats < 0:
        raise InvalidSeats(seats)
    return unit_price.multiply(to_decimal(unit_count) * to_decimal(seats))


def calculate_line_total(line_item: LineItem) -> Money:
    """
    lineTotal of a single line item, dispatched on its pricing mode.

    percentage == 0 is a valid mode and yields a zero total.

    Raises:
        MissingPricingParameters: no complete mode, or no unit price
    """
    code = line_item.code
    unit_price = line_item.unit_price

    has_mode = (
        line_item.quantity is not None
        or line_item.percentage is not None
        or line_item.has_units_and_seats
    )
    if not has_mode:
        raise MissingPricingParameters(code)
    if unit_price is None:
        raise MissingPricingParameters(
            code, f"Can't calculate the lineTotal of lineItem: {code}. unitPrice is missing"
        )

    if line_item.quantity is not None:
        return calculate_total_price_from_quantity(unit_price, line_item.quantity)
    if line_item.percentage is not None:
        return calculate_total_price_from_percentage(unit_price, line_item.percentage)
    return calculate_total_price_from_seats(unit_price, line_item.units, line_item.seats)


# =============================================================================
# COLLECTION TOTALS
# =============================================================================


def calculate_total_from_line_items(
    line_items: Iterable[LineItem], currency: str | None = None
) -> Money:
    """
    Sum of line totals.

    Args:
        line_items: items of one currency
        currency: currency of the zero total when ``line_items`` is empty

    Raises:
        CurrencyMismatch: items in different currencies
        ValueError: empty collection without ``currency``
    """
    total: Money | None = None
    for item in line_items:
        line_total = item.line_total if item.line_total is not None else calculate_line_total(item)
        total = line_total if total is None else total.add(line_total)

    if total is None:
        if currency is None:
            raise ValueError("Can't sum an empty line item collection without a currency")
        return Money.zero(currency)
    return total


def construct_valid_line_items(line_items: Iterable[LineItem]) -> list[LineItem]:
    """
    Validate codes and attach ``line_total`` and ``reversal=False`` to every item.

    Raises:
        InvalidLineItemCode: code outside the line-item/ namespace
        MissingPricingParameters: see calculate_line_total
    """
    valid_items = []
    for item in line_items:
        if not is_valid_line_item_code(item.code):
            raise InvalidLineItemCode(item.code)
        valid_items.append(
            item.model_copy(update={"line_total": calculate_line_total(item), "reversal": False})
        )
    return valid_items


def _total_for_party(line_items: Sequence[LineItem], party: Party) -> Money:
    valid_items = construct_valid_line_items(line_items)
    currency = valid_items[0].line_total.currency if valid_items else None
    return calculate_total_from_line_items(
        (item for item in valid_items if item.is_included_for(party)), currency
    )


def calculate_total_for_provider(line_items: Sequence[LineItem]) -> Money:
    """Payout total: items included for the provider."""
    return _total_for_party(line_items, Party.PROVIDER)


def calculate_total_for_customer(line_items: Sequence[LineItem]) -> Money:
    """Payin total: items included for the customer."""
    return _total_for_party(line_items, Party.CUSTOMER)


# =============================================================================
# SHIPPING
# =============================================================================


def calculate_shipping_fee(
    price_one_item: int | None,
    price_additional_items: int | None,
    currency: str | None,
    quantity: int | None,
) -> Money | None:
    """
    Shipping fee for ``quantity`` items.

    fee = price_one_item + price_additional_items × (quantity − 1)

    Returns:
        Money (a zero fee included), or None when there is nothing to
        charge: both prices non-positive or unset, no currency,
        quantity < 1, or a negative resulting fee.
    """
    if (price_one_item or 0) <= 0 and (price_additional_items or 0) <= 0:
        return None
    if not currency or quantity is None or quantity < 1:
        return None

    fee = (price_one_item or 0) + (price_additional_items or 0) * (quantity - 1)
    if fee < 0:
        return None
    return Money(fee, currency)
