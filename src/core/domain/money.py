"""
Money — exact amount in minor units + ISO 4217 currency

Immutable Pydantic model. Amounts are always integers (cents, Rappen, ...);
every operation returns a new instance.

ROUNDING:
    Multiplication by a non-integer factor (fractional hours, percentages)
    goes through Decimal and is rounded to a whole minor unit with
    ROUND_HALF_UP, i.e. half away from zero:
        2.5 → 3,  2.4 → 2,  -2.5 → -3
    Float factors are converted via repr() so 0.1 stays 0.1.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Final

from pydantic import BaseModel, Field, StrictInt

from src.core.errors import CurrencyMismatch


CURRENCY_PATTERN: Final[str] = r"^[A-Z]{3}$"


# =============================================================================
# DECIMAL HELPERS
# =============================================================================


def to_decimal(value) -> Decimal:
    """
    Exact Decimal for an int, float or Decimal factor.

    Raises:
        TypeError: for booleans and non-numeric values
        ValueError: for NaN/Inf
    """
    if isinstance(value, bool):
        raise TypeError(f"Expected a number, got bool: {value!r}")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Factor is not finite: {value}")
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, Real):
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"Factor is not finite: {value}")
        return Decimal(repr(value))
    raise TypeError(f"Expected a number, got {type(value).__name__}: {value!r}")


def round_half_up(value: Decimal) -> int:
    """Round a Decimal to the nearest integer, halves away from zero."""
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


# =============================================================================
# MONEY MODEL
# =============================================================================


class Money(BaseModel):
    """
    Amount in minor units of ``currency``.

    Negative amounts are allowed (provider deductions, reversals).
    """

    amount: StrictInt = Field(..., description="Amount in minor units")
    currency: str = Field(..., pattern=CURRENCY_PATTERN, description="ISO 4217 code")

    model_config = {"frozen": True}

    def __init__(self, amount: int, currency: str, **data):
        super().__init__(amount=amount, currency=currency, **data)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    @classmethod
    def zero(cls, currency: str) -> "Money":
        return cls(0, currency)

    def is_same_currency(self, other: "Money") -> bool:
        return self.currency == other.currency

    def _require_same_currency(self, other: "Money") -> None:
        if not self.is_same_currency(other):
            raise CurrencyMismatch(self.currency, other.currency)

    def add(self, other: "Money") -> "Money":
        self._require_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: "Money") -> "Money":
        self._require_same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def negate(self) -> "Money":
        return Money(-self.amount, self.currency)

    def multiply(self, factor, divisor=1) -> "Money":
        """
        ``amount × factor / divisor`` rounded half-up to a whole minor unit.

        Args:
            factor: int, float or Decimal (quantity, hours, percentage, ...)
            divisor: optional exact divisor (100 for percentages)
        """
        scaled = Decimal(self.amount) * to_decimal(factor) / to_decimal(divisor)
        return Money(round_half_up(scaled), self.currency)


# =============================================================================
# FUNCTIONAL API
# =============================================================================


def add(a: Money, b: Money) -> Money:
    return a.add(b)


def subtract(a: Money, b: Money) -> Money:
    return a.subtract(b)


def multiply(money: Money, factor, divisor=1) -> Money:
    return money.multiply(factor, divisor)


def is_same_currency(a: Money, b: Money) -> bool:
    return a.is_same_currency(b)
