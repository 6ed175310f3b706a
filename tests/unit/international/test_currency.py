"""Test rupee parsing and canonical formatting."""
import pytest
from aqi_advisor.international.currency import (
    coerce_count,
    format_indian_grouping,
    normalize_currency,
    parse_amount,
    strip_currency_markers,
)


class TestFormatIndianGrouping:
    @pytest.mark.parametrize("value,expected", [
        (0, "0"),
        (999, "999"),
        (1000, "1,000"),
        (100000, "1,00,000"),
        (5000000, "50,00,000"),
        (30000000, "3,00,00,000"),
        (1234567.5, "12,34,567.50"),
        (-250000, "-2,50,000"),
    ])
    def test_grouping(self, value, expected):
        assert format_indian_grouping(value) == expected

    def test_float_integral_has_no_decimals(self):
        assert format_indian_grouping(5000.0) == "5,000"


class TestParseAmount:
    @pytest.mark.parametrize("raw,expected", [
        ("₹50,00,000", 5_000_000),
        ("$5,000,000", 5_000_000),
        ("INR 250000", 250_000),
        ("5000 USD", 5_000),
        ("Rs. 1,50,000/-", 150_000),
        ("₹1.2 crore", 12_000_000),
        ("50 lakh", 5_000_000),
        ("USD 2.5 million", 2_500_000),
        ("40k", 40_000),
        ("3,00,000 rupees", 300_000),
        (7500, 7500),
    ])
    def test_amounts(self, raw, expected):
        assert parse_amount(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", [None, "", "N/A", "to be decided", "5 bananas", True])
    def test_not_amounts(self, raw):
        assert parse_amount(raw) is None


class TestCoerceCount:
    def test_trailing_words(self):
        assert coerce_count("7,500 trees") == 7500

    def test_range_takes_first_number(self):
        assert coerce_count("between 6000 and 9000") == 6000

    def test_lakh(self):
        assert coerce_count("1.5 lakh") == pytest.approx(150_000)

    def test_missing(self):
        assert coerce_count(None) is None
        assert coerce_count("many") is None


class TestNormalizeCurrency:
    def test_foreign_marker_replaced(self):
        assert normalize_currency("$5000") == "₹5,000"

    def test_code_replaced(self):
        assert normalize_currency("USD 1,200,000") == "₹12,00,000"

    def test_double_marker_collapsed(self):
        assert normalize_currency("₹$5000") == "₹5,000"

    def test_canonical_unchanged(self):
        assert normalize_currency("₹50,00,000") == "₹50,00,000"

    def test_number_input(self):
        assert normalize_currency(250000) == "₹2,50,000"

    @pytest.mark.parametrize("raw", [None, "", "N/A", "₹N/A"])
    def test_not_available(self, raw):
        assert normalize_currency(raw) == "N/A"

    def test_text_gets_single_marker(self):
        assert normalize_currency("USD to be decided") == "₹to be decided"

    @pytest.mark.parametrize("raw", [
        "$5000",
        "₹50,00,000",
        "INR 2.5 lakh",
        "Rs. 1,50,000/-",
        "€ 1.234",
        "₹12,34,567.50",
        "approximately ₹5 crore",
        "1000000",
    ])
    def test_idempotent(self, raw):
        once = normalize_currency(raw)
        assert normalize_currency(once) == once
        assert once.count("₹") == 1


class TestStripCurrencyMarkers:
    def test_strips_all(self):
        assert strip_currency_markers("INR ₹ 500 USD") == "500"

    def test_keeps_words_containing_codes(self):
        assert strip_currency_markers("Europe") == "Europe"


class TestNonFiniteAmounts:
    @pytest.mark.parametrize("raw", [float("nan"), float("inf"), float("-inf"), 10**400, "9" * 400])
    def test_parse_amount_rejects(self, raw):
        assert parse_amount(raw) is None

    @pytest.mark.parametrize("raw", [float("nan"), float("inf"), 10**400, "about " + "9" * 400 + " trees"])
    def test_coerce_count_rejects(self, raw):
        assert coerce_count(raw) is None

    @pytest.mark.parametrize("raw", [float("nan"), float("inf"), 10**400])
    def test_normalize_not_available(self, raw):
        assert normalize_currency(raw) == "N/A"


class TestCompoundDollarMarkers:
    @pytest.mark.parametrize("raw,expected", [
        ("C$ 100", "₹100"),
        ("A$2,500", "₹2,500"),
        ("US$ 1.5 million", "₹15,00,000"),
        ("NZ$40k", "₹40,000"),
    ])
    def test_prefix_letters_removed(self, raw, expected):
        assert normalize_currency(raw) == expected

    def test_text_keeps_no_prefix(self):
        assert normalize_currency("US$ to be confirmed") == "₹to be confirmed"
