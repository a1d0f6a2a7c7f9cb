"""Fixed-point money parsing."""

from decimal import Decimal

import pytest

from parrotwings.core.money import MoneyFormatError, from_cents, parse_decimal, to_cents, try_parse_cents


class TestToCents:
    """Conversion of external amounts into integer cents"""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("10", 1000),
            ("10.5", 1050),
            ("0.01", 1),
            (" 125.50 ", 12550),
            (Decimal("99.99"), 9999),
            (7, 700),
            ("-3.25", -325),
        ],
    )
    def test_valid_amounts(self, value, expected: int) -> None:
        assert to_cents(value) == expected

    @pytest.mark.parametrize("value", ["1.001", "0.005", Decimal("2.999")])
    def test_rejects_more_than_two_decimals(self, value) -> None:
        with pytest.raises(MoneyFormatError, match="two decimal places"):
            to_cents(value)

    @pytest.mark.parametrize("value", [1.5, True, None, ["1"]])
    def test_rejects_unsupported_types(self, value) -> None:
        with pytest.raises(MoneyFormatError, match="unsupported amount type"):
            to_cents(value)

    @pytest.mark.parametrize("value", ["NaN", "Infinity", Decimal("-Infinity")])
    def test_rejects_non_finite(self, value) -> None:
        with pytest.raises(MoneyFormatError, match="finite"):
            to_cents(value)

    def test_rejects_garbage_text(self) -> None:
        with pytest.raises(MoneyFormatError, match="not a decimal"):
            to_cents("ten dollars")

    def test_format_error_is_value_error(self) -> None:
        assert issubclass(MoneyFormatError, ValueError)


class TestFromCents:
    def test_two_decimal_places(self) -> None:
        assert from_cents(12550) == Decimal("125.50")
        assert str(from_cents(1)) == "0.01"
        assert str(from_cents(50000)) == "500.00"

    def test_parse_decimal_keeps_value(self) -> None:
        assert parse_decimal("42.10") == Decimal("42.10")


class TestTryParseCents:
    """Lenient parsing used by the history filter"""

    def test_amount_text(self) -> None:
        assert try_parse_cents("20.5") == 2050

    def test_email_text(self) -> None:
        assert try_parse_cents("bob@example.com") is None

    def test_too_precise(self) -> None:
        assert try_parse_cents("1.234") is None
