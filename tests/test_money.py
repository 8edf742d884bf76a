"""
Tests for amount normalization and formatting.
"""

from billscan.utils.money import (
    MAX_AMOUNT,
    extract_amounts,
    find_amount_tokens,
    first_amount,
    format_money,
    is_valid_amount,
    normalize_amount,
    parse_amount,
    parse_loose_amount,
)


class TestNormalizeAmount:
    """Separator stripping for receipt tokens."""

    def test_dot_thousands(self):
        assert normalize_amount("45.000") == 45000

    def test_comma_thousands(self):
        assert normalize_amount("1,250,000") == 1250000

    def test_plain_digits(self):
        assert normalize_amount("150000") == 150000

    def test_empty_or_garbage(self):
        assert normalize_amount("") is None
        assert normalize_amount("abc") is None
        assert normalize_amount(None) is None


class TestRangeValidation:
    """Amounts outside (0, 100_000_000) are rejected."""

    def test_zero_rejected(self):
        assert not is_valid_amount(0)
        assert parse_amount("0") is None

    def test_upper_bound_exclusive(self):
        assert is_valid_amount(MAX_AMOUNT - 1)
        assert not is_valid_amount(MAX_AMOUNT)
        assert parse_amount("99.999.999") == 99_999_999
        assert parse_amount("100.000.000") is None

    def test_above_bound_rejected(self):
        assert parse_amount("100.000.001") is None
        assert parse_amount("999999999") is None


class TestTokenizer:
    """Numeric token grammar."""

    def test_grouped_tokens_stay_whole(self):
        tokens = [m.group(0) for m in find_amount_tokens("Cơm tấm 1 x 45.000 45.000")]
        assert tokens == ["1", "45.000", "45.000"]

    def test_long_plain_run_is_one_token(self):
        tokens = [m.group(0) for m in find_amount_tokens("Phở 45000")]
        assert tokens == ["45000"]

    def test_date_splits_into_parts(self):
        tokens = [m.group(0) for m in find_amount_tokens("12/05/2024")]
        assert tokens == ["12", "05", "2024"]

    def test_first_amount(self):
        assert first_amount("VAT 10%: 13.636") == 10
        assert first_amount("Tổng cộng: 75.000") == 75000
        assert first_amount("không có số") is None

    def test_extract_amounts_filters_range(self):
        text = "Cafe 35.000\nBanh mi 20.000\nMa 0\nSo 123456789012"
        assert extract_amounts(text) == [35000, 20000]

    def test_extract_amounts_empty(self):
        assert extract_amounts("") == []


class TestLooseAmount:
    """Amounts written by the generative service."""

    def test_us_style(self):
        assert parse_loose_amount("1,000.50") == 1001

    def test_european_style(self):
        assert parse_loose_amount("1.000,50") == 1001

    def test_comma_thousands(self):
        assert parse_loose_amount("50,000") == 50000

    def test_comma_decimal(self):
        assert parse_loose_amount("12,5") == 13

    def test_dot_thousands(self):
        assert parse_loose_amount("50.000") == 50000

    def test_numbers_pass_through(self):
        assert parse_loose_amount(150000) == 150000
        assert parse_loose_amount(150000.0) == 150000

    def test_garbage_is_zero(self):
        assert parse_loose_amount("abc") == 0
        assert parse_loose_amount("") == 0
        assert parse_loose_amount(None) == 0


class TestFormatMoney:

    def test_vietnamese_grouping(self):
        assert format_money(50000) == "50.000 VND"
        assert format_money(1250000) == "1.250.000 VND"

    def test_small_amount(self):
        assert format_money(500) == "500 VND"

    def test_none(self):
        assert format_money(None) == "N/A"
