"""taxes - Federal, state and payroll tax calculation.

Scope:
- Federal income tax from progressive brackets (per filing status)
- Flat-rate state income tax, zero for no-tax states
- Social Security (capped) and Medicare (with Additional Medicare Tax)
- Hourly/annual conversions and take-home per pay period

Constraints:
- Pure calculation - no settings writes, no network
- Year-specific rules loaded from tax-rules/{year}.yaml, state rates from
  tax-rules/states.yaml; both can be passed in explicitly

Usage:
    from wagecalc.sdk.taxes import calculate_total_tax, load_tax_rules

    rules = load_tax_rules("2024")
    result = calculate_total_tax(52000, "CA", "single", rules=rules)
"""

from .calculations import (
    PAY_PERIODS,
    annual_to_hourly,
    calculate_federal_tax,
    calculate_medicare,
    calculate_social_security,
    calculate_state_tax,
    calculate_take_home,
    calculate_total_tax,
    federal_bracket_breakdown,
    get_brackets,
    get_marginal_rate,
    get_state_profile,
    hourly_to_annual,
    tax_breakdown_shares,
)

from .rules import (
    available_tax_years,
    clear_cache,
    load_cost_of_living_table,
    load_state_tax_table,
    load_tax_rules,
)

from .schemas import (
    CostOfLivingRegion,
    CostOfLivingTable,
    StateTaxProfile,
    StateTaxTable,
    TaxBracket,
    TaxRules,
)

__all__ = [
    # Calculations
    "PAY_PERIODS",
    "annual_to_hourly",
    "calculate_federal_tax",
    "calculate_medicare",
    "calculate_social_security",
    "calculate_state_tax",
    "calculate_take_home",
    "calculate_total_tax",
    "federal_bracket_breakdown",
    "get_brackets",
    "get_marginal_rate",
    "get_state_profile",
    "hourly_to_annual",
    "tax_breakdown_shares",
    # Rules
    "available_tax_years",
    "clear_cache",
    "load_cost_of_living_table",
    "load_state_tax_table",
    "load_tax_rules",
    # Schemas
    "CostOfLivingRegion",
    "CostOfLivingTable",
    "StateTaxProfile",
    "StateTaxTable",
    "TaxBracket",
    "TaxRules",
]
