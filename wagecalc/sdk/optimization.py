"""Heuristic tax and income optimization recommendations.

Each rule is an independent function of the tax result and the caller's
context that either returns one recommendation or None. Rules run in a
fixed order; the results are sorted by priority then estimated savings and
the report keeps the top MAX_RECOMMENDATIONS.

The savings estimates are rough rules of thumb (an assumed 22% marginal
rate, an assumed 70% after-tax share of extra income), not tax-law
computations.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from .errors import InvalidInputError
from .formatting import format_number
from .schemas import OptimizationRecommendation, OptimizationReport, TaxCalculationResult
from .taxes.calculations import FilingStatusLike, get_state_profile
from .taxes.rules import load_state_tax_table, load_tax_rules
from .taxes.schemas import StateTaxTable, TaxRules

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 8
PRIORITY_WEIGHT = {"high": 3, "medium": 2, "low": 1}

ASSUMED_MARGINAL_RATE = 0.22
AFTER_TAX_SHARE = 0.7

RETIREMENT_CONTRIBUTION_SHARE = 0.15
RETIREMENT_MIN_SAVINGS = 1000
HSA_INCOME_FLOOR = 40000
NO_TAX_STATE_FLOOR = 3000
NO_TAX_STATE_HIGH_PRIORITY = 8000
NO_TAX_STATE_RETAINED_SHARE = 0.8
SIDE_INCOME_HOURS_CEILING = 50
SIDE_INCOME_INCOME_CEILING = 100000
SIDE_INCOME_EFFICIENCY = 0.5
NEGOTIATION_INCOME_CEILING = 150000
NEGOTIATION_RAISE = 0.1
HOME_OFFICE_INCOME_FLOOR = 30000
HOME_OFFICE_EXPENSES = 1500
YEAR_END_TAX_SHARE = 0.05

NO_TAX_STATES = ("FL", "TX", "WA", "NV", "TN", "NH", "SD", "AK", "WY")


@dataclass(frozen=True)
class OptimizationContext:
    """Inputs the rules need besides the tax result."""
    state_code: str
    filing_status: str
    hours_per_week: float
    weeks_per_year: float
    rules: TaxRules
    state_taxes: StateTaxTable


Rule = Callable[[TaxCalculationResult, OptimizationContext], Optional[OptimizationRecommendation]]


# =============================================================================
# Rules
# =============================================================================


def retirement_contribution_rule(result: TaxCalculationResult, ctx: OptimizationContext) -> Optional[OptimizationRecommendation]:
    limit = ctx.rules.retirement_401k.employee_elective_limit
    savings = min(result.gross_income * RETIREMENT_CONTRIBUTION_SHARE, limit) * ASSUMED_MARGINAL_RATE
    if savings <= RETIREMENT_MIN_SAVINGS:
        return None

    return OptimizationRecommendation(
        id="401k-optimization",
        category="tax_strategy",
        title="Maximize 401(k) Contributions",
        description="Increase your 401(k) contributions to reduce taxable income and build retirement wealth.",
        potential_savings=savings,
        effort="low",
        priority="high",
        action_items=[
            "Contact HR to increase 401(k) contribution percentage",
            "Aim for at least 10-15% of gross income",
            "Consider employer matching opportunities",
            "Review investment options within your 401(k)",
        ],
    )


def health_savings_account_rule(result: TaxCalculationResult, ctx: OptimizationContext) -> Optional[OptimizationRecommendation]:
    if result.gross_income <= HSA_INCOME_FLOOR:
        return None

    limit = ctx.rules.hsa.self_only_limit
    return OptimizationRecommendation(
        id="hsa-optimization",
        category="tax_strategy",
        title="Open a Health Savings Account (HSA)",
        description=(
            "HSAs offer triple tax advantages: deductible contributions, tax-free growth, "
            "and tax-free withdrawals for medical expenses."
        ),
        potential_savings=limit * ASSUMED_MARGINAL_RATE,
        effort="medium",
        priority="high",
        action_items=[
            "Switch to a high-deductible health plan if available",
            "Open an HSA account with a reputable provider",
            f"Contribute the maximum annual limit (${format_number(limit)} for {ctx.rules.year})",
            "Invest HSA funds for long-term growth",
        ],
    )


def no_tax_state_rule(result: TaxCalculationResult, ctx: OptimizationContext) -> Optional[OptimizationRecommendation]:
    profile = get_state_profile(ctx.state_code, ctx.state_taxes)
    if profile.has_no_tax or result.state_tax <= NO_TAX_STATE_FLOOR:
        return None

    return OptimizationRecommendation(
        id="no-tax-state",
        category="location",
        title="Consider Moving to a No-Tax State",
        description=(
            "Relocating to a state with no income tax could significantly increase your "
            "take-home pay."
        ),
        # Part of the saving is assumed lost to cost-of-living differences.
        potential_savings=result.state_tax * NO_TAX_STATE_RETAINED_SHARE,
        effort="high",
        priority="high" if result.state_tax > NO_TAX_STATE_HIGH_PRIORITY else "medium",
        action_items=[
            f"Research job opportunities in tax-free states ({', '.join(NO_TAX_STATES)})",
            "Compare cost of living differences",
            "Consider remote work opportunities",
            "Factor in property taxes and sales taxes",
        ],
    )


def side_income_rule(result: TaxCalculationResult, ctx: OptimizationContext) -> Optional[OptimizationRecommendation]:
    if ctx.hours_per_week >= SIDE_INCOME_HOURS_CEILING or result.gross_income >= SIDE_INCOME_INCOME_CEILING:
        return None

    hourly_rate = result.gross_income / (ctx.hours_per_week * ctx.weeks_per_year)
    extra_income = (
        (SIDE_INCOME_HOURS_CEILING - ctx.hours_per_week) * hourly_rate * 52 * SIDE_INCOME_EFFICIENCY
    )
    return OptimizationRecommendation(
        id="side-income",
        category="income",
        title="Develop Additional Income Streams",
        description="Diversify your income with freelancing, consulting, or passive income opportunities.",
        potential_savings=extra_income * AFTER_TAX_SHARE,
        effort="medium",
        priority="medium",
        action_items=[
            "Identify marketable skills for freelancing",
            "Set up profiles on freelancing platforms",
            "Consider creating digital products or courses",
            "Explore rental income opportunities",
        ],
    )


def salary_negotiation_rule(result: TaxCalculationResult, ctx: OptimizationContext) -> Optional[OptimizationRecommendation]:
    if result.gross_income >= NEGOTIATION_INCOME_CEILING:
        return None

    return OptimizationRecommendation(
        id="salary-negotiation",
        category="income",
        title="Negotiate Your Salary",
        description="Research market rates and prepare a case for a salary increase.",
        potential_savings=result.gross_income * NEGOTIATION_RAISE * AFTER_TAX_SHARE,
        effort="medium",
        priority="high",
        action_items=[
            "Research industry salary benchmarks",
            "Document your achievements and contributions",
            "Schedule a meeting with your manager",
            "Practice your negotiation points",
        ],
    )


def home_office_rule(result: TaxCalculationResult, ctx: OptimizationContext) -> Optional[OptimizationRecommendation]:
    if result.gross_income <= HOME_OFFICE_INCOME_FLOOR:
        return None

    return OptimizationRecommendation(
        id="home-office-deduction",
        category="deductions",
        title="Claim Home Office Deduction",
        description="If you work from home, you may be eligible for home office tax deductions.",
        potential_savings=HOME_OFFICE_EXPENSES * ASSUMED_MARGINAL_RATE,
        effort="low",
        priority="medium",
        action_items=[
            "Measure your dedicated home office space",
            "Keep records of home office expenses",
            "Use the simplified method or actual expense method",
            "Consult with a tax professional",
        ],
    )


def year_end_planning_rule(result: TaxCalculationResult, ctx: OptimizationContext) -> Optional[OptimizationRecommendation]:
    return OptimizationRecommendation(
        id="year-end-planning",
        category="timing",
        title="Optimize Year-End Tax Planning",
        description="Strategic timing of income and deductions can reduce your tax burden.",
        potential_savings=result.total_tax * YEAR_END_TAX_SHARE,
        effort="medium",
        priority="medium",
        action_items=[
            "Defer income to next year if beneficial",
            "Accelerate deductions into current year",
            "Harvest investment losses",
            "Make charitable contributions before year-end",
        ],
    )


RULES: tuple[Rule, ...] = (
    retirement_contribution_rule,
    health_savings_account_rule,
    no_tax_state_rule,
    side_income_rule,
    salary_negotiation_rule,
    home_office_rule,
    year_end_planning_rule,
)


# =============================================================================
# Report
# =============================================================================


def rank_recommendations(recommendations: list[OptimizationRecommendation]) -> list[OptimizationRecommendation]:
    """Sort by priority (high first), then potential savings (largest first).

    The sort is stable, so ties keep rule order.
    """
    return sorted(
        recommendations,
        key=lambda rec: (-PRIORITY_WEIGHT[rec.priority], -rec.potential_savings),
    )


def build_summary(
    result: TaxCalculationResult,
    total_potential_savings: float,
    recommendations: list[OptimizationRecommendation],
) -> str:
    """One-paragraph summary of the full (untruncated) recommendation list.

    Income and savings are grouped by thousands with at most three decimals,
    so 1234.5678 renders as "1,234.568".
    """
    gross = result.gross_income
    savings_percentage = (total_potential_savings / gross) * 100 if gross > 0 else 0.0
    high_priority_count = sum(1 for rec in recommendations if rec.priority == "high")

    income_text = format_number(gross, maximum_fraction_digits=3)
    savings_text = format_number(total_potential_savings, maximum_fraction_digits=3)

    return (
        f"Based on your {income_text} annual income, we've identified "
        f"{len(recommendations)} optimization opportunities that could potentially save you "
        f"${savings_text} annually ({savings_percentage:.1f}% increase "
        f"in take-home pay). Focus on the {high_priority_count} high-priority recommendations "
        f"first for maximum impact."
    )


def generate_optimization_report(
    result: TaxCalculationResult,
    state_code: str,
    filing_status: FilingStatusLike,
    hours_per_week: float,
    weeks_per_year: float,
    rules: Optional[TaxRules] = None,
    state_taxes: Optional[StateTaxTable] = None,
    generated_at: Optional[datetime] = None,
) -> OptimizationReport:
    """Run every rule against a tax result and assemble the report.

    total_potential_savings sums all generated recommendations before the
    list is cut to the top MAX_RECOMMENDATIONS, so it can exceed the sum of
    the recommendations shown.

    Args:
        result: Output of calculate_total_tax()
        state_code: State the result was computed for
        filing_status: Filing status the result was computed for
        hours_per_week: Weekly hours worked (must be positive)
        weeks_per_year: Weeks worked per year (must be positive)
        rules: Tax rules for contribution limits (defaults to configured year)
        state_taxes: State rate table (defaults to bundled table)
        generated_at: Report timestamp (defaults to now, UTC)

    Raises:
        InvalidInputError: If hours_per_week or weeks_per_year is not positive
        UnknownRegionError: If state_code is not in the state table
    """
    if hours_per_week <= 0 or weeks_per_year <= 0:
        raise InvalidInputError(
            f"hours_per_week and weeks_per_year must be positive "
            f"(got {hours_per_week}, {weeks_per_year})"
        )

    status = filing_status.value if hasattr(filing_status, "value") else str(filing_status)
    ctx = OptimizationContext(
        state_code=state_code,
        filing_status=status,
        hours_per_week=hours_per_week,
        weeks_per_year=weeks_per_year,
        rules=rules or load_tax_rules(),
        state_taxes=state_taxes or load_state_tax_table(),
    )

    recommendations = []
    for rule in RULES:
        recommendation = rule(result, ctx)
        if recommendation is not None:
            recommendations.append(recommendation)

    ranked = rank_recommendations(recommendations)
    total_potential_savings = sum(rec.potential_savings for rec in ranked)
    summary = build_summary(result, total_potential_savings, ranked)

    logger.debug(
        f"optimization: {len(ranked)} recommendation(s), "
        f"total potential savings {total_potential_savings:.2f}"
    )

    timestamp = generated_at or datetime.now(timezone.utc)
    return OptimizationReport(
        total_potential_savings=total_potential_savings,
        recommendations=ranked[:MAX_RECOMMENDATIONS],
        summary=summary,
        generated_at=timestamp.isoformat(),
    )
