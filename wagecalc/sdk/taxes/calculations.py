"""Federal, state and payroll tax calculations.

All functions are pure: they read the reference tables passed in (or the
configured defaults when omitted) and never modify them. Brackets are
applied to gross wages; deductions and credits are not modeled.
"""

import logging
from enum import Enum
from typing import Optional, Union

from ..errors import ConfigurationError, InvalidInputError, UnknownRegionError
from ..schemas import BracketSlice, TakeHomePay, TaxCalculationResult
from .rules import load_state_tax_table, load_tax_rules
from .schemas import StateTaxProfile, StateTaxTable, TaxBracket, TaxRules

logger = logging.getLogger(__name__)

FilingStatusLike = Union[str, Enum]

# Pay periods by frequency
PAY_PERIODS = {
    "monthly": 12,
    "biweekly": 26,
    "weekly": 52,
}


def _status_key(filing_status: FilingStatusLike) -> str:
    if isinstance(filing_status, Enum):
        return str(filing_status.value)
    return str(filing_status)


def _require_non_negative(name: str, value: float) -> None:
    if value < 0:
        raise InvalidInputError(f"{name} must be non-negative, got {value}")


def get_brackets(filing_status: FilingStatusLike, rules: Optional[TaxRules] = None) -> list[TaxBracket]:
    """Get the federal bracket table for a filing status.

    Raises:
        ConfigurationError: If the rules have no table for the filing status
    """
    rules = rules or load_tax_rules()
    status = _status_key(filing_status)
    brackets = rules.federal.get(status)
    if brackets is None:
        raise ConfigurationError(
            f"No {rules.year} federal brackets for filing status '{status}' "
            f"(known: {', '.join(sorted(rules.federal))})"
        )
    return brackets


def federal_bracket_breakdown(
    income: float,
    filing_status: FilingStatusLike,
    rules: Optional[TaxRules] = None,
) -> list[BracketSlice]:
    """Split income across the federal brackets it reaches.

    Brackets are walked in ascending order. Each bracket whose lower bound
    is below income taxes the part of income inside it; the walk stops at
    the bracket containing the top of income. Income exactly at a bracket
    boundary does not reach the next bracket.
    """
    _require_non_negative("income", income)
    brackets = get_brackets(filing_status, rules)

    slices = []
    for bracket in brackets:
        if income <= bracket.min:
            break

        upper = income if bracket.max is None else min(income, bracket.max)
        taxable = upper - bracket.min
        slices.append(BracketSlice(
            min=bracket.min,
            max=bracket.max,
            rate=bracket.rate,
            taxable_amount=taxable,
            tax=taxable * bracket.rate,
        ))

        if bracket.max is None or income <= bracket.max:
            break

    return slices


def calculate_federal_tax(
    income: float,
    filing_status: FilingStatusLike,
    rules: Optional[TaxRules] = None,
) -> float:
    """Calculate federal income tax on gross income using progressive brackets."""
    tax = 0.0
    for bracket_slice in federal_bracket_breakdown(income, filing_status, rules):
        tax += bracket_slice.tax
    return tax


def get_marginal_rate(
    income: float,
    filing_status: FilingStatusLike,
    rules: Optional[TaxRules] = None,
) -> float:
    """Rate applied to the next dollar of income."""
    _require_non_negative("income", income)
    for bracket in get_brackets(filing_status, rules):
        if bracket.max is None or income < bracket.max:
            return bracket.rate
    # Unreachable for validated tables: the last bracket is unbounded.
    raise ConfigurationError("Federal bracket table does not cover all incomes")


def get_state_profile(state_code: str, state_taxes: Optional[StateTaxTable] = None) -> StateTaxProfile:
    """Look up a state's tax profile by two-letter code (case-insensitive).

    Raises:
        UnknownRegionError: If the code is not in the table
    """
    state_taxes = state_taxes or load_state_tax_table()
    profile = state_taxes.states.get(state_code.strip().upper())
    if profile is None:
        raise UnknownRegionError(state_code, table="state tax")
    return profile


def calculate_state_tax(
    income: float,
    state_code: str,
    state_taxes: Optional[StateTaxTable] = None,
) -> float:
    """Flat-rate state income tax; zero for states without an income tax."""
    _require_non_negative("income", income)
    profile = get_state_profile(state_code, state_taxes)
    return income * profile.effective_rate


def calculate_social_security(income: float, rules: Optional[TaxRules] = None) -> float:
    """Social Security tax on wages up to the wage base."""
    _require_non_negative("income", income)
    ss = (rules or load_tax_rules()).social_security
    return min(income, ss.wage_cap) * ss.tax_rate


def calculate_medicare(
    income: float,
    filing_status: FilingStatusLike,
    rules: Optional[TaxRules] = None,
) -> float:
    """Medicare tax plus Additional Medicare Tax above the filing-status threshold.

    Raises:
        ConfigurationError: If no threshold is configured for the filing status
    """
    _require_non_negative("income", income)
    rules = rules or load_tax_rules()
    medicare = rules.medicare
    status = _status_key(filing_status)

    threshold = medicare.additional_threshold.get(status)
    if threshold is None:
        raise ConfigurationError(
            f"No {rules.year} Additional Medicare threshold for filing status '{status}'"
        )

    return income * medicare.tax_rate + max(0.0, income - threshold) * medicare.additional_rate


def calculate_total_tax(
    income: float,
    state_code: str,
    filing_status: FilingStatusLike = "single",
    rules: Optional[TaxRules] = None,
    state_taxes: Optional[StateTaxTable] = None,
) -> TaxCalculationResult:
    """Calculate the complete annual tax breakdown for a gross income.

    Args:
        income: Gross annual wages
        state_code: Two-letter state code
        filing_status: single, married_jointly, married_separately, head_of_household
        rules: Federal/payroll rules (defaults to configured tax year)
        state_taxes: State rate table (defaults to bundled table)

    Returns:
        TaxCalculationResult where total_tax is the exact sum of the four
        components and net_income = income - total_tax.
    """
    _require_non_negative("income", income)
    rules = rules or load_tax_rules()

    federal_tax = calculate_federal_tax(income, filing_status, rules)
    state_tax = calculate_state_tax(income, state_code, state_taxes)
    social_security = calculate_social_security(income, rules)
    medicare = calculate_medicare(income, filing_status, rules)

    total_tax = federal_tax + state_tax + social_security + medicare
    net_income = income - total_tax
    effective_rate = (total_tax / income) * 100 if income > 0 else 0.0

    logger.debug(
        f"{rules.year} {_status_key(filing_status)} {state_code}: gross={income:.2f} "
        f"fed={federal_tax:.2f} state={state_tax:.2f} ss={social_security:.2f} "
        f"medicare={medicare:.2f} total={total_tax:.2f}"
    )

    return TaxCalculationResult(
        gross_income=income,
        federal_tax=federal_tax,
        state_tax=state_tax,
        social_security=social_security,
        medicare=medicare,
        total_tax=total_tax,
        net_income=net_income,
        effective_tax_rate_percent=effective_rate,
    )


def hourly_to_annual(hourly_rate: float, hours_per_week: float = 40, weeks_per_year: float = 52) -> float:
    """Annual gross from an hourly rate. No range checks; callers bound hours/weeks."""
    return hourly_rate * hours_per_week * weeks_per_year


def annual_to_hourly(annual_salary: float, hours_per_week: float = 40, weeks_per_year: float = 52) -> float:
    """Hourly rate equivalent of an annual salary.

    Raises:
        InvalidInputError: If hours_per_week or weeks_per_year is not positive
    """
    if hours_per_week <= 0 or weeks_per_year <= 0:
        raise InvalidInputError(
            f"hours_per_week and weeks_per_year must be positive "
            f"(got {hours_per_week}, {weeks_per_year})"
        )
    return annual_salary / (hours_per_week * weeks_per_year)


def calculate_take_home(result: TaxCalculationResult) -> TakeHomePay:
    """Split net income across monthly, biweekly and weekly pay periods."""
    net = result.net_income
    return TakeHomePay(
        annual=net,
        monthly=net / PAY_PERIODS["monthly"],
        biweekly=net / PAY_PERIODS["biweekly"],
        weekly=net / PAY_PERIODS["weekly"],
    )


def tax_breakdown_shares(result: TaxCalculationResult) -> dict[str, float]:
    """Each tax component as a percent of gross income (0 when gross is 0)."""
    components = {
        "federal_tax": result.federal_tax,
        "state_tax": result.state_tax,
        "social_security": result.social_security,
        "medicare": result.medicare,
    }
    gross = result.gross_income
    return {
        key: (amount / gross) * 100 if gross > 0 else 0.0
        for key, amount in components.items()
    }
