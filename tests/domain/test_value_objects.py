"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from stockflow.domain.exceptions import ValidationError
from stockflow.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("twelve")

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)  # type: ignore[arg-type]

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_non_finite_amount_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            Money(Decimal("NaN"))

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5  # type: ignore[operator]

    def test_no_drift_across_many_additions(self):
        """0.10 summed a thousand times is exactly 100.00, unlike binary floats."""
        total = Money.zero()
        for _ in range(1000):
            total = total + Money.of("0.10")
        assert total.amount == Decimal("100.00")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_str_formatting(self):
        assert str(Money.of("15")) == "$15.00"
        assert str(Money.of("9.5")) == "$9.50"
        assert str(Money.of("1234.5")) == "$1,234.50"

    def test_fractional_cents_rejected(self):
        with pytest.raises(ValidationError, match="more than two decimal places"):
            Money.of("0.125")

    def test_amount_normalised_to_cents(self):
        assert str(Money(Decimal("7")).amount) == "7.00"

    def test_total_of_many(self):
        assert Money.total([Money.of("1.10"), Money.of("2.20")]) == Money.of("3.30")
        assert Money.total([]) == Money.zero()

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") <= Money.of("10")
        assert Money.of("12") > Money.of("10")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity("3")  # type: ignore[arg-type]

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)

    def test_str_and_int(self):
        assert str(Quantity(7)) == "7"
        assert int(Quantity(7)) == 7
