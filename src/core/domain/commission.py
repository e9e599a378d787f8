"""
CommissionConfig — commission settings for one party

Values are kept raw: type checking belongs to the commission resolver,
which reports non-numeric values as NonNumericCommissionField.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CommissionConfig:
    """Percentage and/or minimum amount (minor units) for one party."""

    percentage: Any = None
    minimum_amount: Any = None

    @classmethod
    def coerce(cls, value: "CommissionConfig | Mapping[str, Any] | None") -> "CommissionConfig":
        """Accept a config, a plain mapping (``{"percentage": 10}``) or None."""
        if value is None:
            return cls()
        if isinstance(value, CommissionConfig):
            return value
        if isinstance(value, Mapping):
            return cls(
                percentage=value.get("percentage"),
                minimum_amount=value.get("minimum_amount"),
            )
        raise TypeError(f"Unsupported commission config: {type(value).__name__}")
