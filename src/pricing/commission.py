"""
Commission resolver — percentage vs minimum commission per party

Commission is taken from the commissionable subtotal (base order line item
plus surcharge line items, never delivery fees):

    percentage_amount = subtotal × percentage / 100
    minimum > |percentage_amount|  →  fixed item:      unit_price = minimum, quantity = ±1
    otherwise                      →  percentage item: unit_price = subtotal, percentage = ±p

Provider commission is a deduction (negative sign), customer commission an
addition. The minimum is always a positive Money; the sign lives in the
quantity. A value is "absent" when it is None, zero, negative or NaN.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal
from numbers import Real
from typing import Any, Sequence

from src.core.domain.commission import CommissionConfig
from src.core.domain.line_item import (
    LINE_ITEM_CUSTOMER_COMMISSION,
    LINE_ITEM_PROVIDER_COMMISSION,
    LineItem,
    Party,
)
from src.core.domain.money import Money, round_half_up, to_decimal
from src.core.errors import NonNumericCommissionField
from src.core.math.line_item_math import (
    calculate_total_from_line_items,
    calculate_total_price_from_percentage,
)


logger = logging.getLogger(__name__)

CommissionInput = CommissionConfig | Mapping[str, Any] | None


# =============================================================================
# FIELD CHECKS
# =============================================================================


def _is_positive_number(field: str, value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, Decimal):
        return not value.is_nan() and value > 0
    if isinstance(value, bool) or not isinstance(value, Real):
        raise NonNumericCommissionField(field, value)
    return value > 0


def _plain_number(value: Any) -> int | float:
    """Decimal as int or float for the line item payload."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def has_commission_percentage(commission: CommissionInput) -> bool:
    """
    True iff ``percentage`` is present, numeric and > 0.

    Raises:
        NonNumericCommissionField: percentage present but not a number
    """
    return _is_positive_number("percentage", CommissionConfig.coerce(commission).percentage)


def has_minimum_commission(commission: CommissionInput) -> bool:
    """
    True iff ``minimum_amount`` is present, numeric and > 0.

    Raises:
        NonNumericCommissionField: minimum_amount present but not a number
    """
    return _is_positive_number("minimum_amount", CommissionConfig.coerce(commission).minimum_amount)


# =============================================================================
# RESOLVER
# =============================================================================


def _get_commission_maybe(
    commission: CommissionInput,
    commissionable_items: Sequence[LineItem],
    currency: str,
    party: Party,
) -> list[LineItem]:
    config = CommissionConfig.coerce(commission)
    # Both checks run first so a non-numeric field fails even if the other is absent
    has_percentage = has_commission_percentage(config)
    has_minimum = has_minimum_commission(config)

    if not has_percentage and not has_minimum:
        return []

    sign = -1 if party is Party.PROVIDER else 1
    code = (
        LINE_ITEM_PROVIDER_COMMISSION if party is Party.PROVIDER else LINE_ITEM_CUSTOMER_COMMISSION
    )
    subtotal = calculate_total_from_line_items(commissionable_items, currency)

    percentage_amount = 0
    if has_percentage:
        percentage_amount = calculate_total_price_from_percentage(
            subtotal, config.percentage
        ).amount

    minimum_amount = round_half_up(to_decimal(config.minimum_amount)) if has_minimum else 0

    if has_minimum and (not has_percentage or minimum_amount > abs(percentage_amount)):
        logger.debug(
            "%s commission: minimum %s %s overrides percentage amount %s",
            party.value,
            minimum_amount,
            currency,
            percentage_amount,
        )
        return [
            LineItem(
                code=code,
                unit_price=Money(minimum_amount, currency),
                quantity=sign,
                include_for=(party,),
            )
        ]

    logger.debug("%s commission: %s%% of %s", party.value, config.percentage, subtotal)
    return [
        LineItem(
            code=code,
            unit_price=subtotal,
            percentage=sign * _plain_number(config.percentage),
            include_for=(party,),
        )
    ]


def get_provider_commission_maybe(
    commission: CommissionInput,
    commissionable_items: Sequence[LineItem],
    currency: str,
) -> list[LineItem]:
    """
    Provider commission line item (negative), or [] when no commission is configured.

    Args:
        commission: provider CommissionConfig or mapping
        commissionable_items: base order + surcharge line items
        currency: transaction currency

    Raises:
        NonNumericCommissionField: percentage/minimum present but not numeric
    """
    return _get_commission_maybe(commission, commissionable_items, currency, Party.PROVIDER)


def get_customer_commission_maybe(
    commission: CommissionInput,
    commissionable_items: Sequence[LineItem],
    currency: str,
) -> list[LineItem]:
    """Customer commission line item (positive), or [] when none is configured."""
    return _get_commission_maybe(commission, commissionable_items, currency, Party.CUSTOMER)
