"""
Tests for the commission resolver

Checked invariants:
1. No percentage and no minimum → no commission line item
2. Minimum wins only when strictly larger than |percentage amount|
3. Provider commission is negative, customer commission positive
4. Non-numeric percentage/minimum → NonNumericCommissionField
5. includeFor is the commission's own party only
6. Decimal values are numbers
"""

from decimal import Decimal

import pytest

from src.core.domain.commission import CommissionConfig
from src.core.domain.line_item import LineItem, Party
from src.core.domain.money import Money
from src.core.errors import NonNumericCommissionField
from src.pricing.commission import (
    get_customer_commission_maybe,
    get_provider_commission_maybe,
    has_commission_percentage,
    has_minimum_commission,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def commissionable_items():
    """Three nights at 100.00 EUR: subtotal 30000."""
    return [LineItem(code="line-item/night", unit_price=Money(10000, "EUR"), quantity=3)]


@pytest.fixture
def single_day_items():
    """One day at 200.00 EUR: subtotal 20000."""
    return [LineItem(code="line-item/day", unit_price=Money(20000, "EUR"), quantity=1)]


# =============================================================================
# FIELD CHECKS
# =============================================================================


class TestCommissionFieldChecks:
    """has_commission_percentage / has_minimum_commission."""

    @pytest.mark.parametrize("percentage", [10, 0.5, 12.5, Decimal("7.5")])
    def test_positive_percentage(self, percentage):
        """Positive numbers count as configured."""
        assert has_commission_percentage({"percentage": percentage})

    @pytest.mark.parametrize(
        "percentage", [None, 0, -5, float("nan"), Decimal("0"), Decimal("NaN")]
    )
    def test_absent_percentage(self, percentage):
        """None, zero, negative and NaN count as absent."""
        assert not has_commission_percentage({"percentage": percentage})

    def test_absent_config(self):
        """No config at all."""
        assert not has_commission_percentage(None)
        assert not has_minimum_commission(None)

    @pytest.mark.parametrize("value", ["10", True, [10]])
    def test_non_numeric_percentage(self, value):
        """Strings, booleans and lists are not numbers."""
        with pytest.raises(NonNumericCommissionField) as exc_info:
            has_commission_percentage({"percentage": value})

        assert exc_info.value.field == "percentage"
        assert exc_info.value.status == 400

    def test_non_numeric_minimum(self):
        """Message names the offending value."""
        with pytest.raises(NonNumericCommissionField, match="abc is not a number."):
            has_minimum_commission({"minimum_amount": "abc"})

    def test_decimal_minimum(self):
        """A Decimal minimum is a number."""
        assert has_minimum_commission({"minimum_amount": Decimal("500")})

    def test_dataclass_config(self):
        """CommissionConfig is accepted as-is."""
        assert has_minimum_commission(CommissionConfig(minimum_amount=500))

    def test_unsupported_config_type(self):
        """A bare number is not a config."""
        with pytest.raises(TypeError):
            has_commission_percentage(10)


# =============================================================================
# RESOLVER
# =============================================================================


class TestProviderCommission:
    """Provider commission: deduction from the payout."""

    def test_no_commission(self, commissionable_items):
        """Nothing configured → []."""
        assert get_provider_commission_maybe(None, commissionable_items, "EUR") == []
        assert get_provider_commission_maybe({}, commissionable_items, "EUR") == []
        assert get_provider_commission_maybe({"percentage": 0}, commissionable_items, "EUR") == []

    def test_percentage(self, commissionable_items):
        """Percentage item over the subtotal, negative percentage."""
        [item] = get_provider_commission_maybe({"percentage": 10}, commissionable_items, "EUR")

        assert item.code == "line-item/provider-commission"
        assert item.unit_price == Money(30000, "EUR")
        assert item.percentage == -10
        assert item.quantity is None
        assert item.include_for == (Party.PROVIDER,)

    def test_fractional_percentage(self, commissionable_items):
        """12.5 % keeps its fraction."""
        [item] = get_provider_commission_maybe({"percentage": 12.5}, commissionable_items, "EUR")
        assert item.percentage == -12.5

    def test_minimum_wins(self, commissionable_items):
        """1 % of 30000 = 300 < 500."""
        [item] = get_provider_commission_maybe(
            {"percentage": 1, "minimum_amount": 500}, commissionable_items, "EUR"
        )

        assert item.unit_price == Money(500, "EUR")
        assert item.quantity == -1
        assert item.percentage is None

    def test_minimum_wins_over_five_percent(self, single_day_items):
        """5 % of 20000 = 1000 < 3000: fixed item of 3000, quantity −1."""
        [item] = get_provider_commission_maybe(
            {"percentage": 5, "minimum_amount": 3000}, single_day_items, "EUR"
        )

        assert item.unit_price == Money(3000, "EUR")
        assert item.quantity == -1
        assert item.percentage is None

    def test_percentage_wins(self, commissionable_items):
        """10 % of 30000 = 3000 > 500."""
        [item] = get_provider_commission_maybe(
            {"percentage": 10, "minimum_amount": 500}, commissionable_items, "EUR"
        )

        assert item.percentage == -10
        assert item.unit_price == Money(30000, "EUR")

    def test_fifteen_percent_over_small_minimum(self, single_day_items):
        """15 % of 20000 = 3000 > 100."""
        [item] = get_provider_commission_maybe(
            {"percentage": 15, "minimum_amount": 100}, single_day_items, "EUR"
        )
        assert item.percentage == -15

    def test_equal_amounts_keep_percentage(self, commissionable_items):
        """Minimum must be strictly larger to win."""
        [item] = get_provider_commission_maybe(
            {"percentage": 10, "minimum_amount": 3000}, commissionable_items, "EUR"
        )
        assert item.percentage == -10

    def test_minimum_only(self, commissionable_items):
        """Minimum without percentage → fixed item."""
        [item] = get_provider_commission_maybe(
            {"minimum_amount": 750}, commissionable_items, "EUR"
        )

        assert item.unit_price == Money(750, "EUR")
        assert item.quantity == -1

    def test_decimal_percentage(self, commissionable_items):
        """Decimal("5") → percentage −5 as a plain number."""
        [item] = get_provider_commission_maybe(
            {"percentage": Decimal("5")}, commissionable_items, "EUR"
        )

        assert item.percentage == -5
        assert not isinstance(item.percentage, Decimal)

    def test_decimal_fractional_percentage(self, commissionable_items):
        """Decimal("7.5") → −7.5."""
        [item] = get_provider_commission_maybe(
            {"percentage": Decimal("7.5")}, commissionable_items, "EUR"
        )
        assert item.percentage == -7.5

    def test_decimal_minimum_wins(self, commissionable_items):
        """Decimal minimum 500 beats 1 % of 30000."""
        [item] = get_provider_commission_maybe(
            {"percentage": 1, "minimum_amount": Decimal("500")}, commissionable_items, "EUR"
        )

        assert item.unit_price == Money(500, "EUR")
        assert item.quantity == -1

    def test_decimal_nan_is_absent(self, commissionable_items):
        """Decimal NaN on both fields → []."""
        assert (
            get_provider_commission_maybe(
                {"percentage": Decimal("NaN"), "minimum_amount": Decimal("NaN")},
                commissionable_items,
                "EUR",
            )
            == []
        )

    def test_non_numeric_minimum_fails_even_with_percentage(self, commissionable_items):
        """A string minimum fails although the percentage is fine."""
        with pytest.raises(NonNumericCommissionField):
            get_provider_commission_maybe(
                {"percentage": 10, "minimum_amount": "500"}, commissionable_items, "EUR"
            )

    def test_subtotal_spans_all_commissionable_items(self):
        """Base and surcharge items both count."""
        items = [
            LineItem(code="line-item/hour", unit_price=Money(30000, "CHF"), quantity=3),
            LineItem(code="line-item/evening", unit_price=Money(10000, "CHF"), quantity=3),
        ]
        [item] = get_provider_commission_maybe({"percentage": 10}, items, "CHF")
        assert item.unit_price == Money(120000, "CHF")


class TestCustomerCommission:
    """Customer commission: addition to the payin."""

    def test_percentage_is_positive(self, commissionable_items):
        """Positive percentage, customer only."""
        [item] = get_customer_commission_maybe({"percentage": 5}, commissionable_items, "EUR")

        assert item.code == "line-item/customer-commission"
        assert item.percentage == 5
        assert item.include_for == (Party.CUSTOMER,)

    def test_minimum_is_positive(self, commissionable_items):
        """Fixed item with quantity +1."""
        [item] = get_customer_commission_maybe(
            CommissionConfig(percentage=1, minimum_amount=1000), commissionable_items, "EUR"
        )

        assert item.unit_price == Money(1000, "EUR")
        assert item.quantity == 1

    def test_minimum_wins_over_five_percent(self, single_day_items):
        """5 % of 20000 = 1000 < 3000: fixed item of 3000, quantity +1."""
        [item] = get_customer_commission_maybe(
            {"percentage": 5, "minimum_amount": 3000}, single_day_items, "EUR"
        )

        assert item.unit_price == Money(3000, "EUR")
        assert item.quantity == 1

    def test_negative_percentage_is_absent(self, commissionable_items):
        """A negative customer percentage is not configured."""
        assert get_customer_commission_maybe({"percentage": -5}, commissionable_items, "EUR") == []
