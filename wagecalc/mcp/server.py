"""Wage Calc MCP Server - FastMCP implementation for wage and tax tools."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from wagecalc.sdk import (
    InvalidInputError,
    WageCalcError,
    calculate_take_home,
    calculate_total_tax,
    compare_cost_of_living,
    generate_optimization_report,
    hourly_to_annual,
    list_regions,
    load_state_tax_table,
    load_tax_rules,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("wage-calc")


def _annual_gross(hourly_rate: float | None, annual_salary: float | None,
                  hours_per_week: float, weeks_per_year: float) -> float:
    if (hourly_rate is None) == (annual_salary is None):
        raise InvalidInputError("Provide exactly one of hourly_rate or annual_salary")
    if hourly_rate is not None:
        return hourly_to_annual(hourly_rate, hours_per_week, weeks_per_year)
    return annual_salary


# --- Tools ---

@mcp.tool()
async def calculate_taxes(
    state: str = Field(description="Two-letter state code (e.g., 'CA')"),
    hourly_rate: float | None = Field(default=None, description="Hourly rate; give this or annual_salary"),
    annual_salary: float | None = Field(default=None, description="Annual gross salary"),
    hours_per_week: float = Field(default=40, description="Hours worked per week"),
    weeks_per_year: float = Field(default=52, description="Weeks worked per year"),
    filing_status: str = Field(default="single", description="single, married_jointly, married_separately, head_of_household"),
    year: str | None = Field(default=None, description="Tax year (default: configured year)"),
) -> dict[str, Any]:
    """Estimate federal, state, Social Security and Medicare tax plus take-home pay per period."""
    try:
        gross = _annual_gross(hourly_rate, annual_salary, hours_per_week, weeks_per_year)
        rules = load_tax_rules(year)
        result = calculate_total_tax(gross, state, filing_status, rules=rules)
        return {
            "year": rules.year,
            "result": result.model_dump(),
            "take_home": calculate_take_home(result).model_dump(),
        }
    except WageCalcError as e:
        logger.error(f"Error calculating taxes: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def compare_states_cost_of_living(
    current_state: str = Field(description="Two-letter code of the state the salary is earned in"),
    target_state: str = Field(description="Two-letter code of the state to compare against"),
    salary: float = Field(description="Current annual salary"),
) -> dict[str, Any]:
    """Salary needed in target_state to keep the same purchasing power.

    purchasing_power_change_percent > 0 means target_state is cheaper.
    """
    try:
        return {"comparison": compare_cost_of_living(current_state, target_state, salary).model_dump()}
    except WageCalcError as e:
        logger.error(f"Error comparing cost of living: {e}")
        return {"error": str(e), "comparison": None}


@mcp.tool()
async def optimize_taxes(
    state: str = Field(description="Two-letter state code"),
    hourly_rate: float | None = Field(default=None, description="Hourly rate; give this or annual_salary"),
    annual_salary: float | None = Field(default=None, description="Annual gross salary"),
    hours_per_week: float = Field(default=40, description="Hours worked per week"),
    weeks_per_year: float = Field(default=52, description="Weeks worked per year"),
    filing_status: str = Field(default="single", description="Filing status"),
) -> dict[str, Any]:
    """Heuristic recommendations to lower taxes or raise income, ranked by priority and savings."""
    try:
        gross = _annual_gross(hourly_rate, annual_salary, hours_per_week, weeks_per_year)
        rules = load_tax_rules()
        result = calculate_total_tax(gross, state, filing_status, rules=rules)
        report = generate_optimization_report(
            result, state, filing_status, hours_per_week, weeks_per_year, rules=rules
        )
        return {"report": report.model_dump()}
    except WageCalcError as e:
        logger.error(f"Error generating optimization report: {e}")
        return {"error": str(e), "report": None}


# --- Resources ---

@mcp.resource("wagecalc://states")
async def list_states_resource() -> str:
    """List states with cost-of-living index and income tax rate."""
    try:
        state_taxes = load_state_tax_table()
        states = []
        for region in list_regions():
            profile = state_taxes.states.get(region.code)
            states.append({
                **region.model_dump(),
                "income_tax_rate": profile.effective_rate if profile else None,
            })
        return json.dumps({"states": states}, indent=2)
    except WageCalcError as e:
        return json.dumps({"error": str(e)})


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
