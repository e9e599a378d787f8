"""
Core math modules for the pricing engine

Quantity derivation from booking windows and line-item totals.
"""

# Quantities
from src.core.math.quantities import (
    calculate_non_business_hours,
    calculate_overlapping_hours,
    calculate_quantity_from_dates,
    calculate_quantity_from_hours,
)

# Line-item totals
from src.core.math.line_item_math import (
    calculate_line_total,
    calculate_shipping_fee,
    calculate_total_for_customer,
    calculate_total_for_provider,
    calculate_total_from_line_items,
    calculate_total_price_from_percentage,
    calculate_total_price_from_quantity,
    calculate_total_price_from_seats,
    construct_valid_line_items,
)

__all__ = [
    # Quantities
    "calculate_quantity_from_dates",
    "calculate_quantity_from_hours",
    "calculate_overlapping_hours",
    "calculate_non_business_hours",
    # Line-item totals
    "calculate_total_price_from_quantity",
    "calculate_total_price_from_percentage",
    "calculate_total_price_from_seats",
    "calculate_line_total",
    "calculate_total_from_line_items",
    "construct_valid_line_items",
    "calculate_total_for_provider",
    "calculate_total_for_customer",
    "calculate_shipping_fee",
]
