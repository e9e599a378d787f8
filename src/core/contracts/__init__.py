"""
Contract Validation Module

JSON Schema contracts for payloads crossing the engine boundary.
"""

from .validators import (
    ContractValidator,
    LineItemsPayloadValidator,
    PricingRulesValidator,
    SchemaLoader,
    ValidationError,
    validate_line_items_payload,
    validate_pricing_rules,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "LineItemsPayloadValidator",
    "PricingRulesValidator",
    "ValidationError",
    # Functions
    "validate_line_items_payload",
    "validate_pricing_rules",
]
