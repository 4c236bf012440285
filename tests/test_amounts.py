import pytest

from payments_engine.amounts import format_amount, parse_amount
from payments_engine.models import AMOUNT_MAX


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("5", 50_000),
        ("5.0", 50_000),
        ("1.5", 15_000),
        ("0.0001", 1),
        ("  2.25 ", 22_500),
        # Digits past the fourth decimal are truncated, never rounded.
        ("1.23456", 12_345),
        ("0.00009", 0),
        ("1e2", 1_000_000),
        ("0e999999999", 0),
        ("1e-999999999", 0),
        ("0.99999999999999999999999999999", 9_999),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_parse_amount_blank_is_absent(raw):
    assert parse_amount(raw) is None


@pytest.mark.parametrize("raw", ["abc", "1.2.3", "NaN", "Infinity", "-1.0", "1e30"])
def test_parse_amount_rejects_invalid(raw):
    with pytest.raises(ValueError):
        parse_amount(raw)


@pytest.mark.parametrize("raw", ["1e999999999", "1E+999999999", "9" * 40, "18446744073709551616"])
def test_parse_amount_rejects_huge_values_as_value_error(raw):
    with pytest.raises(ValueError, match="out of range"):
        parse_amount(raw)


def test_parse_amount_upper_bound():
    max_text = f"{AMOUNT_MAX // 10_000}.{AMOUNT_MAX % 10_000:04d}"
    assert parse_amount(max_text) == AMOUNT_MAX


@pytest.mark.parametrize(
    ("units", "expected"),
    [
        (0, "0.0000"),
        (1, "0.0001"),
        (15_000, "1.5000"),
        (12_345, "1.2345"),
        (AMOUNT_MAX, "1844674407370955.1615"),
    ],
)
def test_format_amount(units, expected):
    assert format_amount(units) == expected
