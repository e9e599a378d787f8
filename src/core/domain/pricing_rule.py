"""
PricingRule — configured surcharge rule from listing publicData

Externally supplied configuration; the engine never rejects a rule, it
only decides whether the rule is active. A rule with a non-positive or
non-numeric surcharge is kept but inactive, a reversed window simply
never overlaps.
"""

from enum import Enum
from numbers import Real
from typing import Any, Final

from pydantic import BaseModel, Field, field_validator


MAX_PRICING_RULES: Final[int] = 10


def whole_number_or_none(value: Any) -> int | None:
    """Integer value of an integral number; None for anything else."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    if isinstance(value, int):
        return value
    if float(value).is_integer():
        return int(value)
    return None


def number_or_none(value: Any) -> Real | None:
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    return value


class RuleType(str, Enum):
    """Known rule types."""

    TIME_OF_DAY = "time-of-day"


class PricingRule(BaseModel):
    """
    Surcharge rule.

    ``type`` stays a plain string so rules of types unknown to this engine
    version pass through and are ignored by the rule registry.
    """

    id: str | None = None
    type: str | None = None
    label: str | None = None
    surcharge_per_hour_subunits: int | None = Field(None, alias="surchargePerHourSubunits")
    from_hour: float | None = Field(None, alias="fromHour")
    to_hour: float | None = Field(None, alias="toHour")

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @field_validator("id", "type", "label", mode="before")
    @classmethod
    def drop_non_string(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None

    @field_validator("surcharge_per_hour_subunits", mode="before")
    @classmethod
    def drop_non_integer_surcharge(cls, v: Any) -> int | None:
        """Non-numeric or fractional amounts make the rule inactive instead of invalid."""
        return whole_number_or_none(v)

    @field_validator("from_hour", "to_hour", mode="before")
    @classmethod
    def drop_non_numeric_hour(cls, v: Any) -> float | None:
        return number_or_none(v)

    @property
    def is_active(self) -> bool:
        return self.surcharge_per_hour_subunits is not None and self.surcharge_per_hour_subunits > 0
