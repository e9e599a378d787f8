"""
Pricing — commission resolver, pricing-rule engine, transaction assembler.
"""

from src.pricing.assembler import (
    TransactionPricer,
    transaction_line_items,
    transaction_price_payload,
)
from src.pricing.commission import get_customer_commission_maybe, get_provider_commission_maybe
from src.pricing.rules import (
    get_pricing_rule_line_items,
    pricing_rules_to_public_data,
    slugify_label,
)

__all__ = [
    "TransactionPricer",
    "transaction_line_items",
    "transaction_price_payload",
    "get_provider_commission_maybe",
    "get_customer_commission_maybe",
    "get_pricing_rule_line_items",
    "pricing_rules_to_public_data",
    "slugify_label",
]
