"""
Rounding Helper Unit Tests
"""

from decimal import Decimal

import pytest

from engines.services.rounding import round_half_up


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2.345", "2.35"),
        ("-2.345", "-2.35"),
        ("2.344", "2.34"),
        ("7", "7.00"),
    ],
)
def test_rounds_half_away_from_zero(value, expected):
    result = round_half_up(Decimal(value))

    assert result == Decimal(expected)
    assert str(result) == expected


def test_whole_number_exponent():
    assert round_half_up(Decimal("7.5"), Decimal("1")) == Decimal("8")


def test_value_beyond_default_precision():
    result = round_half_up(Decimal("123456789012345678901234567890.125"))

    assert str(result) == "123456789012345678901234567890.13"


def test_non_finite_is_rejected():
    with pytest.raises(ValueError):
        round_half_up(Decimal("NaN"))
