"""Wage Calc SDK - Core functionality for wage, tax and cost-of-living estimates."""

from .config import (
    DEFAULT_TAX_YEAR,
    KNOWN_SETTINGS,
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    get_tax_year,
    get_tax_rules_dir,
)

from .errors import (
    WageCalcError,
    ConfigurationError,
    UnknownRegionError,
    InvalidInputError,
)

from .schemas import (
    FilingStatus,
    TaxCalculationResult,
    TakeHomePay,
    BracketSlice,
    CostOfLivingComparison,
    RegionSummary,
    OptimizationRecommendation,
    OptimizationReport,
)

from .taxes import (
    annual_to_hourly,
    calculate_federal_tax,
    calculate_medicare,
    calculate_social_security,
    calculate_state_tax,
    calculate_take_home,
    calculate_total_tax,
    federal_bracket_breakdown,
    get_marginal_rate,
    hourly_to_annual,
    tax_breakdown_shares,
    load_tax_rules,
    load_state_tax_table,
    load_cost_of_living_table,
    available_tax_years,
)

from .cost_of_living import (
    compare_cost_of_living,
    get_cost_of_living_index,
    list_regions,
    most_expensive_regions,
    least_expensive_regions,
)

from .optimization import (
    generate_optimization_report,
    MAX_RECOMMENDATIONS,
)

__all__ = [
    # Config
    "DEFAULT_TAX_YEAR",
    "KNOWN_SETTINGS",
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "get_tax_year",
    "get_tax_rules_dir",
    # Errors
    "WageCalcError",
    "ConfigurationError",
    "UnknownRegionError",
    "InvalidInputError",
    # Schemas
    "FilingStatus",
    "TaxCalculationResult",
    "TakeHomePay",
    "BracketSlice",
    "CostOfLivingComparison",
    "RegionSummary",
    "OptimizationRecommendation",
    "OptimizationReport",
    # Tax
    "annual_to_hourly",
    "calculate_federal_tax",
    "calculate_medicare",
    "calculate_social_security",
    "calculate_state_tax",
    "calculate_take_home",
    "calculate_total_tax",
    "federal_bracket_breakdown",
    "get_marginal_rate",
    "hourly_to_annual",
    "tax_breakdown_shares",
    "load_tax_rules",
    "load_state_tax_table",
    "load_cost_of_living_table",
    "available_tax_years",
    # Cost of living
    "compare_cost_of_living",
    "get_cost_of_living_index",
    "list_regions",
    "most_expensive_regions",
    "least_expensive_regions",
    # Optimization
    "generate_optimization_report",
    "MAX_RECOMMENDATIONS",
]
