"""
JSON Schema Contract Validators

Validates payloads that cross the engine boundary against formal JSON Schema
contracts (Draft 2020-12), using the jsonschema library.

Schemas (src/core/contracts/schema/):
- line_items.json     — transaction price payload sent to the payment backend
- pricing_rules.json  — listing publicData.pricingRules configuration
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    JSON Schema file loader.

    Schemas ship inside the package, next to this module.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: schema name without extension (e.g. 'line_items')

        Returns:
            Parsed schema

        Raises:
            FileNotFoundError: schema file missing
            ValueError: file is not a valid JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Base contract validator.

    Wraps a Draft 2020-12 validator for one schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            ValidationError: data does not match the schema
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any):
        """Yield every ValidationError found in ``data``."""
        return self.validator.iter_errors(data)


class LineItemsPayloadValidator(ContractValidator):
    """Validator for the transaction price payload."""

    def __init__(self):
        super().__init__("line_items")


class PricingRulesValidator(ContractValidator):
    """Validator for the pricingRules configuration."""

    def __init__(self):
        super().__init__("pricing_rules")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_line_items_payload(data: List[Dict[str, Any]]) -> None:
    """
    Validate a serialized line-item list.

    Raises:
        ValidationError: payload does not match line_items.json
    """
    LineItemsPayloadValidator().validate(data)


def validate_pricing_rules(data: List[Dict[str, Any]]) -> None:
    """
    Validate a pricingRules list.

    Raises:
        ValidationError: rules do not match pricing_rules.json
    """
    PricingRulesValidator().validate(data)

