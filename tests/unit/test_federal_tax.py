"""Tests for the federal bracket tax evaluator."""

import pytest

from wagecalc.sdk import ConfigurationError, FilingStatus, InvalidInputError
from wagecalc.sdk.taxes import (
    TaxRules,
    calculate_federal_tax,
    federal_bracket_breakdown,
    get_marginal_rate,
)


def flat_rules(rate: float = 0.10) -> TaxRules:
    """Single-bracket rules for substituting a non-2024 table."""
    return TaxRules.model_validate({
        "year": 2099,
        "federal": {"single": [{"min": 0, "rate": rate}]},
        "social_security": {"wage_cap": 100000, "tax_rate": 0.05},
        "medicare": {
            "tax_rate": 0.01,
            "additional_rate": 0.01,
            "additional_threshold": {"single": 50000},
        },
        "401k": {"employee_elective_limit": 10000},
        "hsa": {"self_only_limit": 1000},
    })


class TestBracketMath:
    """Known values from the 2024 single brackets."""

    def test_zero_income_is_zero_for_every_status(self, rules_2024):
        for status in FilingStatus:
            assert calculate_federal_tax(0, status, rules_2024) == 0

    def test_within_first_bracket(self, rules_2024):
        assert calculate_federal_tax(10000, "single", rules_2024) == pytest.approx(1000.0)

    def test_at_first_boundary_stays_in_first_bracket(self, rules_2024):
        assert calculate_federal_tax(11600, "single", rules_2024) == pytest.approx(1160.0)

    def test_at_second_boundary(self, rules_2024):
        # 10% of 11,600 + 12% of 35,550
        assert calculate_federal_tax(47150, "single", rules_2024) == pytest.approx(5426.0)

    def test_52000_single(self, rules_2024):
        # 1,160 + 4,266 + 22% of 4,850
        assert calculate_federal_tax(52000, "single", rules_2024) == pytest.approx(6493.0)

    def test_married_jointly_uses_wider_brackets(self, rules_2024):
        # 10% of 23,200 + 12% of 28,800
        assert calculate_federal_tax(52000, "married_jointly", rules_2024) == pytest.approx(5776.0)

    def test_accepts_enum_or_string(self, rules_2024):
        assert calculate_federal_tax(80000, FilingStatus.HEAD_OF_HOUSEHOLD, rules_2024) == \
            calculate_federal_tax(80000, "head_of_household", rules_2024)


class TestBracketProperties:
    """Monotonic, piecewise-linear behaviour across the whole table."""

    @pytest.mark.parametrize("status", [s.value for s in FilingStatus])
    def test_monotonic_non_decreasing(self, rules_2024, status):
        previous = -1.0
        for income in range(0, 1_000_001, 2500):
            tax = calculate_federal_tax(income, status, rules_2024)
            assert tax >= previous
            previous = tax

    @pytest.mark.parametrize("status", [s.value for s in FilingStatus])
    def test_slope_equals_bracket_rate(self, rules_2024, status):
        for bracket in rules_2024.federal[status]:
            low = bracket.min + 100
            high = low + 1000
            if bracket.max is not None and high > bracket.max:
                continue
            delta = calculate_federal_tax(high, status, rules_2024) - calculate_federal_tax(low, status, rules_2024)
            assert delta == pytest.approx(1000 * bracket.rate)


class TestBreakdown:

    def test_slices_sum_to_tax(self, rules_2024):
        slices = federal_bracket_breakdown(250000, "single", rules_2024)
        assert sum(s.tax for s in slices) == pytest.approx(calculate_federal_tax(250000, "single", rules_2024))
        assert sum(s.taxable_amount for s in slices) == pytest.approx(250000)

    def test_stops_at_bracket_containing_income(self, rules_2024):
        slices = federal_bracket_breakdown(52000, "single", rules_2024)
        assert [s.rate for s in slices] == [0.10, 0.12, 0.22]
        assert slices[-1].taxable_amount == pytest.approx(4850)

    def test_boundary_income_does_not_enter_next_bracket(self, rules_2024):
        slices = federal_bracket_breakdown(11600, "single", rules_2024)
        assert len(slices) == 1

    def test_top_bracket_is_unbounded(self, rules_2024):
        slices = federal_bracket_breakdown(1_000_000, "single", rules_2024)
        assert len(slices) == 7
        assert slices[-1].max is None
        assert slices[-1].taxable_amount == pytest.approx(1_000_000 - 609350)

    def test_zero_income_has_no_slices(self, rules_2024):
        assert federal_bracket_breakdown(0, "single", rules_2024) == []


class TestMarginalRate:

    def test_below_boundary(self, rules_2024):
        assert get_marginal_rate(11599, "single", rules_2024) == 0.10

    def test_at_boundary_next_dollar_is_next_rate(self, rules_2024):
        assert get_marginal_rate(11600, "single", rules_2024) == 0.12

    def test_top_rate(self, rules_2024):
        assert get_marginal_rate(5_000_000, "single", rules_2024) == 0.37


class TestErrors:

    def test_unknown_filing_status(self, rules_2024):
        with pytest.raises(ConfigurationError, match="qualifying_widow"):
            calculate_federal_tax(50000, "qualifying_widow", rules_2024)

    def test_status_missing_from_substituted_table(self):
        with pytest.raises(ConfigurationError):
            calculate_federal_tax(50000, "married_jointly", flat_rules())

    def test_negative_income(self, rules_2024):
        with pytest.raises(InvalidInputError):
            calculate_federal_tax(-1, "single", rules_2024)


class TestSubstitutedRules:

    def test_flat_table(self):
        assert calculate_federal_tax(123456, "single", flat_rules(0.10)) == pytest.approx(12345.6)

    def test_defaults_to_configured_year(self, rules_2024):
        assert calculate_federal_tax(52000, "single") == calculate_federal_tax(52000, "single", rules_2024)
