"""
PricingConfig — explicit defaults for the pricing engine

No module-level mutable state: every default the calculators need is
carried here and passed in by the caller.
"""

from dataclasses import dataclass
from typing import Final


DEFAULT_TIMEZONE: Final[str] = "Europe/Zurich"
DEFAULT_FROM_HOUR: Final[float] = 17
DEFAULT_TO_HOUR: Final[float] = 24
DEFAULT_BUSINESS_HOURS_END: Final[float] = 17
LEGACY_RULE_LABEL: Final[str] = "evening-surcharge"


@dataclass(frozen=True)
class PricingConfig:
    """Engine configuration.

    Defaults used when a listing or a rule leaves a value unset.
    """

    default_timezone: str = DEFAULT_TIMEZONE
    default_from_hour: float = DEFAULT_FROM_HOUR
    default_to_hour: float = DEFAULT_TO_HOUR
    default_business_hours_end: float = DEFAULT_BUSINESS_HOURS_END
    legacy_rule_label: str = LEGACY_RULE_LABEL
