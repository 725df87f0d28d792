import math

import pytest

from swapform.core.swap.formatting import format_amount


@pytest.mark.parametrize(
    "value,digits,expected",
    [
        (100000.0, 6, "100,000"),
        (1234.5, 6, "1,234.5"),
        (0.00001, 6, "0.00001"),
        (1.23456789, 6, "1.234568"),
        (1.23456789, 8, "1.23456789"),
        (0.0000001, 6, "0"),
        (5.0, 0, "5"),
        (12.0, 2, "12"),
    ],
)
def test_format_amount(value, digits, expected):
    assert format_amount(value, digits) == expected


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_non_finite_renders_zero(value):
    assert format_amount(value) == "0"
