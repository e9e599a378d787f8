"""
Pricing-rule engine — configured surcharges for hourly bookings

Flow:
    1. resolve_pricing_rules: explicit publicData.pricingRules, else one
       rule migrated from the legacy evening-surcharge fields, else none
    2. each rule goes to the handler registered for its type
       (unknown types are ignored)
    3. rule line items get unique codes (line-item/<slug>, -2, -3, ...)

Surcharges are evaluated for unit type "hour" only; the assembler decides that.
"""

import logging
import re
import secrets
import string
import time
import unicodedata
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Final

from src.core.config import PricingConfig
from src.core.contracts import validate_pricing_rules
from src.core.domain.line_item import BOTH_PARTIES, LineItem
from src.core.domain.listing import ListingPublicData, ListingSnapshot
from src.core.domain.money import Money
from src.core.domain.order import OrderData
from src.core.domain.pricing_rule import PricingRule, RuleType
from src.core.math.quantities import calculate_overlapping_hours


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

SLUG_MAX_LENGTH: Final[int] = 50
SLUG_FALLBACK: Final[str] = "surcharge"

# Letters NFKD does not decompose into base letter + combining mark
_TRANSLITERATION: Final[dict[int, str]] = str.maketrans(
    {
        "ß": "ss",
        "æ": "ae",
        "œ": "oe",
        "ø": "o",
        "đ": "d",
        "ð": "d",
        "ł": "l",
        "þ": "th",
        "ı": "i",
    }
)
_NON_SLUG_CHARS: Final[re.Pattern] = re.compile(r"[^a-z0-9\s-]")
_SEPARATOR_RUNS: Final[re.Pattern] = re.compile(r"[\s-]+")

_RULE_ID_ALPHABET: Final[str] = string.ascii_lowercase + string.digits


# =============================================================================
# SLUGS
# =============================================================================


def slugify_label(label: Any) -> str:
    """
    URL-safe slug of a rule label for use in a line item code.

    Examples:
        >>> slugify_label("Supplément soirée")
        'supplement-soiree'
        >>> slugify_label("Straße")
        'strasse'
        >>> slugify_label("@#$%")
        'surcharge'
    """
    if not isinstance(label, str) or not label:
        return SLUG_FALLBACK

    text = label.lower().translate(_TRANSLITERATION)
    text = unicodedata.normalize("NFKD", text)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = _NON_SLUG_CHARS.sub("", text)
    text = _SEPARATOR_RUNS.sub("-", text).strip("-")
    text = text[:SLUG_MAX_LENGTH].rstrip("-")

    return text or SLUG_FALLBACK


def deduplicate_line_item_codes(line_items: Iterable[LineItem]) -> list[LineItem]:
    """
    Make codes unique by suffixing later duplicates with -2, -3, ...

    The first occurrence keeps the bare code.
    """
    seen: set[str] = set()
    unique = []
    for item in line_items:
        code = item.code
        if code in seen:
            counter = 2
            while f"{code}-{counter}" in seen:
                counter += 1
            code = f"{code}-{counter}"
        seen.add(code)
        unique.append(item if code == item.code else item.model_copy(update={"code": code}))
    return unique


# =============================================================================
# RULE TYPE REGISTRY
# =============================================================================

RuleHandler = Callable[[PricingRule, OrderData, str, str, PricingConfig], LineItem | None]

RULE_TYPE_HANDLERS: dict[str, RuleHandler] = {}


def register_rule_type(rule_type: str) -> Callable[[RuleHandler], RuleHandler]:
    """Register a handler ``(rule, order_data, timezone, currency, config) -> LineItem | None``."""

    def decorator(handler: RuleHandler) -> RuleHandler:
        RULE_TYPE_HANDLERS[rule_type] = handler
        return handler

    return decorator


@register_rule_type(RuleType.TIME_OF_DAY.value)
def time_of_day_line_item(
    rule: PricingRule,
    order_data: OrderData,
    timezone: str,
    currency: str,
    config: PricingConfig,
) -> LineItem | None:
    """Surcharge per hour booked inside [from_hour, to_hour) local time."""
    if not rule.is_active or not order_data.has_booking_window:
        return None

    from_hour = rule.from_hour if rule.from_hour is not None else config.default_from_hour
    to_hour = rule.to_hour if rule.to_hour is not None else config.default_to_hour
    hours = calculate_overlapping_hours(
        order_data.booking_start, order_data.booking_end, timezone, from_hour, to_hour
    )
    if hours <= 0:
        return None

    return LineItem(
        code=f"line-item/{slugify_label(rule.label)}",
        unit_price=Money(rule.surcharge_per_hour_subunits, currency),
        quantity=hours,
        include_for=BOTH_PARTIES,
    )


# =============================================================================
# RULE RESOLUTION
# =============================================================================


def resolve_listing_timezone(listing: ListingSnapshot, config: PricingConfig) -> str:
    """listingTimezone → availability plan timezone → configured default."""
    return (
        listing.public_data.listing_timezone
        or listing.availability_plan_timezone
        or config.default_timezone
    )


def resolve_pricing_rules(public_data: ListingPublicData, config: PricingConfig) -> list[PricingRule]:
    """
    Rules configured for a listing.

    Explicit ``pricingRules`` win; otherwise a positive legacy
    ``eveningSurchargePerHourSubunits`` becomes one time-of-day rule
    [businessHoursEnd, 24).
    """
    if public_data.pricing_rules:
        return list(public_data.pricing_rules)

    legacy_surcharge = public_data.evening_surcharge_per_hour_subunits
    if legacy_surcharge is None or legacy_surcharge <= 0:
        return []

    business_hours_end = public_data.business_hours_end
    return [
        PricingRule(
            type=RuleType.TIME_OF_DAY.value,
            label=config.legacy_rule_label,
            surcharge_per_hour_subunits=legacy_surcharge,
            from_hour=(
                business_hours_end
                if business_hours_end is not None and business_hours_end > 0
                else config.default_business_hours_end
            ),
            to_hour=config.default_to_hour,
        )
    ]


def get_pricing_rule_line_items(
    order_data: OrderData,
    listing: ListingSnapshot,
    currency: str,
    config: PricingConfig | None = None,
) -> list[LineItem]:
    """
    Surcharge line items in rule-declaration order, codes deduplicated.
    """
    config = config or PricingConfig()
    timezone = resolve_listing_timezone(listing, config)

    line_items = []
    for rule in resolve_pricing_rules(listing.public_data, config):
        handler = RULE_TYPE_HANDLERS.get(rule.type)
        if handler is None:
            logger.debug("Ignoring pricing rule %s of unknown type %r", rule.id, rule.type)
            continue
        line_item = handler(rule, order_data, timezone, currency, config)
        if line_item is not None:
            line_items.append(line_item)

    return deduplicate_line_item_codes(line_items)


# =============================================================================
# RULE CONFIGURATION (write path)
# =============================================================================


def generate_rule_id() -> str:
    """``rule-<epoch ms>-<6 random chars>``."""
    suffix = "".join(secrets.choice(_RULE_ID_ALPHABET) for _ in range(6))
    return f"rule-{int(time.time() * 1000)}-{suffix}"


def _whole_hour(value: float | None, default: float) -> float:
    hour = default if value is None else value
    return int(hour) if float(hour).is_integer() else hour


def pricing_rules_to_public_data(
    rules: Iterable[PricingRule | Mapping[str, Any]],
    config: PricingConfig | None = None,
) -> dict[str, Any]:
    """
    publicData update for a saved rule configuration.

    Rules without type or label are dropped, missing ids generated.
    Legacy evening-surcharge fields are always cleared.

    Raises:
        jsonschema.ValidationError: result violates the pricing_rules contract
            (more than MAX_PRICING_RULES rules, hour outside 0–24, unknown type)
    """
    config = config or PricingConfig()
    serialized = []
    for raw in rules:
        rule = raw if isinstance(raw, PricingRule) else PricingRule.model_validate(raw)
        if not rule.type or not rule.label:
            continue
        serialized.append(
            {
                "id": rule.id or generate_rule_id(),
                "type": rule.type,
                "label": rule.label,
                "surchargePerHourSubunits": rule.surcharge_per_hour_subunits or 0,
                "fromHour": _whole_hour(rule.from_hour, config.default_from_hour),
                "toHour": _whole_hour(rule.to_hour, config.default_to_hour),
            }
        )

    validate_pricing_rules(serialized)
    return {
        "pricingRules": serialized or None,
        "eveningSurchargePerHourSubunits": None,
        "businessHoursEnd": None,
    }
