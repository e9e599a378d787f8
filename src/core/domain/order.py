"""
OrderData — order parameters supplied with a pricing request
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.core.domain.money import Money


class OrderData(BaseModel):
    """
    Order parameters.

    Booking instants accept ISO 8601 strings ("2025-06-15T16:00:00.000Z").
    """

    booking_start: datetime | None = Field(None, alias="bookingStart")
    booking_end: datetime | None = Field(None, alias="bookingEnd")
    seats: int | None = None

    stock_reservation_quantity: int | None = Field(None, alias="stockReservationQuantity")
    delivery_method: str | None = Field(None, alias="deliveryMethod")

    price_variant_name: str | None = Field(None, alias="priceVariantName")
    offer: Money | None = None
    currency: str | None = None

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @property
    def has_booking_window(self) -> bool:
        return self.booking_start is not None and self.booking_end is not None
