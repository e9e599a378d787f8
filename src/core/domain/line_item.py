"""
LineItem — one priced component of a transaction

Immutable Pydantic model. A line item carries exactly one pricing mode:
    - quantity
    - percentage
    - seats + units
The mode is checked when the line total is computed
(src.core.math.line_item_math), the code namespace when the collection is
validated (construct_valid_line_items), so that malformed input can be held
and rejected with a typed error.
"""

import re
from enum import Enum
from typing import Any, Final, Iterable

from pydantic import BaseModel, Field

from src.core.domain.money import Money


# =============================================================================
# CODES
# =============================================================================

LINE_ITEM_CODE_MAX_LENGTH: Final[int] = 64
LINE_ITEM_CODE_PATTERN: Final[re.Pattern] = re.compile(r"^line-item/[A-Za-z0-9_-]+$")

LINE_ITEM_DAY: Final[str] = "line-item/day"
LINE_ITEM_NIGHT: Final[str] = "line-item/night"
LINE_ITEM_HOUR: Final[str] = "line-item/hour"
LINE_ITEM_WEEK: Final[str] = "line-item/week"
LINE_ITEM_MONTH: Final[str] = "line-item/month"
LINE_ITEM_FIXED: Final[str] = "line-item/fixed"
LINE_ITEM_ITEM: Final[str] = "line-item/item"
LINE_ITEM_OFFER: Final[str] = "line-item/offer"
LINE_ITEM_REQUEST: Final[str] = "line-item/request"
LINE_ITEM_SHIPPING_FEE: Final[str] = "line-item/shipping-fee"
LINE_ITEM_PROVIDER_COMMISSION: Final[str] = "line-item/provider-commission"
LINE_ITEM_CUSTOMER_COMMISSION: Final[str] = "line-item/customer-commission"

# Codes with dedicated formatting in the display layer
WELL_KNOWN_CODES: Final[frozenset[str]] = frozenset(
    {
        LINE_ITEM_DAY,
        LINE_ITEM_NIGHT,
        LINE_ITEM_HOUR,
        LINE_ITEM_WEEK,
        LINE_ITEM_MONTH,
        LINE_ITEM_FIXED,
        LINE_ITEM_ITEM,
        LINE_ITEM_OFFER,
        LINE_ITEM_REQUEST,
        LINE_ITEM_SHIPPING_FEE,
        LINE_ITEM_PROVIDER_COMMISSION,
        LINE_ITEM_CUSTOMER_COMMISSION,
    }
)


def is_valid_line_item_code(code: Any) -> bool:
    """True for strings in the ``line-item/<slug>`` namespace, at most 64 chars."""
    return (
        isinstance(code, str)
        and len(code) <= LINE_ITEM_CODE_MAX_LENGTH
        and LINE_ITEM_CODE_PATTERN.match(code) is not None
    )


def is_well_known_code(code: Any) -> bool:
    """True for codes the display layer formats itself; others render generically."""
    return isinstance(code, str) and code in WELL_KNOWN_CODES


# =============================================================================
# ENUMS
# =============================================================================


class Party(str, Enum):
    """Counterparty a line item is included for."""

    CUSTOMER = "customer"
    PROVIDER = "provider"


BOTH_PARTIES: Final[tuple[Party, ...]] = (Party.CUSTOMER, Party.PROVIDER)


# =============================================================================
# LINE ITEM MODEL
# =============================================================================


class LineItem(BaseModel):
    """
    Priced component of a transaction.

    ``line_total`` is derived; it is filled in by construct_valid_line_items.
    """

    code: str = Field(..., description="line-item/<slug>")
    unit_price: Money | None = Field(None, alias="unitPrice")
    line_total: Money | None = Field(None, alias="lineTotal")

    quantity: int | float | None = None
    percentage: int | float | None = None
    seats: int | None = None
    units: int | float | None = None

    include_for: tuple[Party, ...] = Field(BOTH_PARTIES, alias="includeFor")
    reversal: bool = False

    model_config = {"frozen": True, "populate_by_name": True}

    def is_included_for(self, party: Party) -> bool:
        return party in self.include_for

    @property
    def has_units_and_seats(self) -> bool:
        return self.units is not None and self.seats is not None

    def to_payload(self) -> dict[str, Any]:
        """
        Serialize for the payment backend.

        Only the active pricing mode is emitted; ``lineTotal`` only when derived.
        """
        payload: dict[str, Any] = {
            "code": self.code,
            "unitPrice": _money_payload(self.unit_price),
        }
        if self.quantity is not None:
            payload["quantity"] = self.quantity
        elif self.percentage is not None:
            payload["percentage"] = self.percentage
        elif self.has_units_and_seats:
            payload["units"] = self.units
            payload["seats"] = self.seats

        payload["includeFor"] = [party.value for party in self.include_for]
        if self.line_total is not None:
            payload["lineTotal"] = _money_payload(self.line_total)
        payload["reversal"] = self.reversal
        return payload


def _money_payload(money: Money | None) -> dict[str, Any] | None:
    if money is None:
        return None
    return {"amount": money.amount, "currency": money.currency}


def serialize_line_items(line_items: Iterable[LineItem]) -> list[dict[str, Any]]:
    """Payload list in the given (fixed) order."""
    return [item.to_payload() for item in line_items]
