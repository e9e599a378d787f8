"""
Pricing errors — typed validation failures of the line-item engine

Every failure is local and deterministic: nothing here is retried.
The host application maps them to a 400-class response via ``status``.
"""

from typing import Iterable


class PricingError(ValueError):
    """Base class for all pricing engine failures."""

    status: int = 400


class CurrencyMismatch(PricingError):
    """Arithmetic between Money values of different currencies."""

    def __init__(self, left: str, right: str):
        super().__init__(f"Currency mismatch: {left} vs {right}")
        self.left = left
        self.right = right


class InvalidSeats(PricingError):
    """Negative seat count."""

    def __init__(self, seats):
        super().__init__("Value of seats can't be negative")
        self.seats = seats


class UnsupportedUnitType(PricingError):
    """Date-based quantity requested for a code without day granularity."""

    def __init__(self, code: str):
        super().__init__(f"Can't calculate quantity from dates to unit type: {code}")
        self.code = code


class MissingPricingParameters(PricingError):
    """Line item has no complete pricing mode (or no unit price)."""

    def __init__(self, code: str, reason: str | None = None):
        message = reason or (
            f"Can't calculate the lineTotal of lineItem: {code}. "
            "Make sure the lineItem has quantity, percentage or both seats and units"
        )
        super().__init__(message)
        self.code = code


class InvalidLineItemCode(PricingError):
    """Line item code outside the ``line-item/<slug>`` namespace."""

    def __init__(self, code):
        super().__init__(f"Invalid line item code: {code}")
        self.code = code


class NonNumericCommissionField(PricingError):
    """Commission percentage or minimum present but not a number."""

    def __init__(self, field: str, value):
        super().__init__(f"{value} is not a number.")
        self.field = field
        self.value = value


class MissingQuantityInformation(PricingError):
    """Order data yields neither a quantity nor a units + seats pair."""

    def __init__(self, missing_fields: Iterable[str]):
        self.missing_fields = tuple(missing_fields)
        super().__init__(
            "Error: orderData is missing the following information: "
            f"{', '.join(self.missing_fields)}. "
            "Quantity or either units & seats is required."
        )


class MinimumExceedsPayin(PricingError):
    """Fixed minimum commission is larger than what the customer pays in."""

    def __init__(self, minimum_amount: int, payin_amount: int):
        super().__init__(
            "Minimum commission amount is greater than the amount of money paid in "
            f"({minimum_amount} > {payin_amount})"
        )
        self.minimum_amount = minimum_amount
        self.payin_amount = payin_amount
