"""Tests for display formatting helpers."""

import pytest

from wagecalc.sdk.formatting import (
    format_compact_currency,
    format_currency,
    format_number,
    format_percentage,
)


@pytest.mark.parametrize("amount,expected", [
    (52000, "52,000"),
    (52000.0, "52,000"),
    (1234.5, "1,234.5"),
    (14910.050000000001, "14,910.05"),
    (0.126, "0.13"),
    (0, "0"),
])
def test_format_number(amount, expected):
    assert format_number(amount) == expected


def test_format_number_minimum_fraction_digits():
    assert format_number(1500, 1) == "1,500.0"
    assert format_number(12.5, 2) == "12.50"


def test_format_number_maximum_fraction_digits():
    assert format_number(1234.5678, maximum_fraction_digits=3) == "1,234.568"
    assert format_number(14910.050000000001, maximum_fraction_digits=3) == "14,910.05"
    assert format_number(1234.5678, maximum_fraction_digits=0) == "1,235"


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.5"
    assert format_currency(-1234.5) == "-$1,234.5"


def test_format_percentage():
    assert format_percentage(12.5) == "12.5%"
    assert format_percentage(7) == "7.0%"


@pytest.mark.parametrize("amount,expected", [
    (1_500_000, "$1.5M"),
    (75_000, "$75.0K"),
    (999, "$999"),
])
def test_format_compact_currency(amount, expected):
    assert format_compact_currency(amount) == expected
