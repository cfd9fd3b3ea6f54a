"""Wage Calc CLI - Command-line interface for wage and tax estimates."""

import json
import logging
import os

import click
from rich.console import Console

from wagecalc import __version__
from wagecalc.sdk import (
    FilingStatus,
    WageCalcError,
    calculate_take_home,
    calculate_total_tax,
    compare_cost_of_living,
    federal_bracket_breakdown,
    generate_optimization_report,
    get_setting,
    get_tax_year,
    hourly_to_annual,
    least_expensive_regions,
    list_regions,
    load_state_tax_table,
    load_tax_rules,
    most_expensive_regions,
    tax_breakdown_shares,
)

from .renderers.results_renderer import (
    render_comparison,
    render_regions,
    render_report,
    render_tax_result,
)
from .settings_commands import settings as settings_group

FILING_STATUSES = [status.value for status in FilingStatus]


def _configure_logging() -> None:
    """Configure logging based on LOG_LEVEL environment variable."""
    log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.version_option(version=__version__, prog_name="wage-calc")
def cli():
    """Wage Calc - Wage, payroll tax and cost-of-living estimates.

    Estimates federal income tax, flat-rate state tax, Social Security and
    Medicare from an hourly rate or salary, compares salaries across states
    and suggests ways to keep more of your pay.

    Defaults are loaded from (in order):

    \b
    1. Command-line options
    2. settings.json (see 'wage-calc settings show')
    3. Built-in defaults (2024 tax year, single filer)

    Set LOG_LEVEL=DEBUG to trace calculations.
    """
    _configure_logging()


cli.add_command(settings_group)


def _income_options(func):
    """Shared options describing pay, schedule, state and filing status."""
    options = [
        click.option("--hourly", "hourly_rate", type=float, help="Hourly rate (annualized with --hours/--weeks)"),
        click.option("--salary", "annual_salary", type=float, help="Annual gross salary"),
        click.option("--hours", "hours_per_week", type=click.FloatRange(1, 168), default=40,
                     show_default=True, help="Hours worked per week"),
        click.option("--weeks", "weeks_per_year", type=click.FloatRange(1, 52), default=52,
                     show_default=True, help="Weeks worked per year"),
        click.option("--state", "state_code", help="Two-letter state code (default: settings default_state)"),
        click.option("--filing-status", type=click.Choice(FILING_STATUSES),
                     help="Filing status (default: settings default_filing_status or single)"),
        click.option("--year", help="Tax year (default: settings tax_year or 2024)"),
        click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
                     help="Output format (default: table)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _resolve_inputs(hourly_rate, annual_salary, hours_per_week, weeks_per_year,
                    state_code, filing_status, year) -> dict:
    """Apply settings defaults and convert hourly pay to annual gross."""
    if (hourly_rate is None) == (annual_salary is None):
        raise click.UsageError("Provide exactly one of --hourly or --salary.")

    gross = annual_salary
    if hourly_rate is not None:
        gross = hourly_to_annual(hourly_rate, hours_per_week, weeks_per_year)

    state_code = state_code or get_setting("default_state")
    if not state_code:
        raise click.UsageError("No state given. Pass --state or run 'wage-calc settings set default_state XX'.")

    return {
        "gross": gross,
        "hourly_rate": hourly_rate,
        "state_code": state_code.upper(),
        "filing_status": filing_status or get_setting("default_filing_status", "single"),
        "year": year or get_tax_year(),
    }


@cli.command("tax")
@_income_options
def tax_cmd(hourly_rate, annual_salary, hours_per_week, weeks_per_year,
            state_code, filing_status, year, output_format):
    """Estimate annual taxes and take-home pay.

    \b
    Examples:
      wage-calc tax --hourly 25 --state CA
      wage-calc tax --salary 95000 --state NY --filing-status married_jointly
      wage-calc tax --salary 52000 --state TX --format json
    """
    inputs = _resolve_inputs(hourly_rate, annual_salary, hours_per_week, weeks_per_year,
                             state_code, filing_status, year)

    try:
        rules = load_tax_rules(inputs["year"])
        result = calculate_total_tax(inputs["gross"], inputs["state_code"], inputs["filing_status"], rules=rules)
        brackets = federal_bracket_breakdown(inputs["gross"], inputs["filing_status"], rules=rules)
    except WageCalcError as e:
        raise click.ClickException(str(e))

    take_home = calculate_take_home(result)
    shares = tax_breakdown_shares(result)

    if output_format == "json":
        output = {
            "year": rules.year,
            "state": inputs["state_code"],
            "filing_status": inputs["filing_status"],
            "hours_per_week": hours_per_week,
            "weeks_per_year": weeks_per_year,
            "result": result.model_dump(),
            "take_home": take_home.model_dump(),
            "federal_brackets": [b.model_dump() for b in brackets],
        }
        click.echo(json.dumps(output, indent=2))
        return

    status_label = inputs["filing_status"].replace("_", " ")
    title = f"{rules.year} Taxes: {inputs['state_code']}, {status_label}"
    render_tax_result(Console(), result, title, shares, brackets, take_home)


@cli.command("optimize")
@_income_options
def optimize_cmd(hourly_rate, annual_salary, hours_per_week, weeks_per_year,
                 state_code, filing_status, year, output_format):
    """Suggest ways to reduce taxes or grow income.

    \b
    Examples:
      wage-calc optimize --hourly 25 --state CA
      wage-calc optimize --salary 120000 --state NY --format json
    """
    inputs = _resolve_inputs(hourly_rate, annual_salary, hours_per_week, weeks_per_year,
                             state_code, filing_status, year)

    try:
        rules = load_tax_rules(inputs["year"])
        result = calculate_total_tax(inputs["gross"], inputs["state_code"], inputs["filing_status"], rules=rules)
        report = generate_optimization_report(
            result,
            inputs["state_code"],
            inputs["filing_status"],
            hours_per_week,
            weeks_per_year,
            rules=rules,
        )
    except WageCalcError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(report.model_dump(), indent=2))
        return

    render_report(Console(), report)


@cli.command("compare")
@click.argument("current_state")
@click.argument("target_state")
@click.argument("salary", type=click.FloatRange(min=0))
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def compare_cmd(current_state, target_state, salary, output_format):
    """Compare what SALARY is worth in TARGET_STATE versus CURRENT_STATE.

    \b
    Examples:
      wage-calc compare CA TX 75000
      wage-calc compare NY FL 120000 --format json
    """
    try:
        comparison = compare_cost_of_living(current_state, target_state, salary)
    except WageCalcError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(comparison.model_dump(), indent=2))
        return

    render_comparison(Console(), comparison)


@cli.command("states")
@click.option("--sort", "sort_by", type=click.Choice(["name", "index", "tax"]), default="name",
              help="Sort order (default: name)")
@click.option("--top", type=click.IntRange(min=1), help="Show only the N most expensive states")
@click.option("--least", is_flag=True, help="With --top, show the N least expensive states instead")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def states_cmd(sort_by, top, least, output_format):
    """List states with cost-of-living index and income tax rate."""
    try:
        state_taxes = load_state_tax_table()
        if top:
            regions = least_expensive_regions(top) if least else most_expensive_regions(top)
            title = f"{'Least' if least else 'Most'} Expensive States"
        else:
            regions = list_regions()
            title = "States"
    except WageCalcError as e:
        raise click.ClickException(str(e))

    if not top:
        if sort_by == "index":
            regions = sorted(regions, key=lambda r: r.index, reverse=True)
        elif sort_by == "tax":
            def tax_rate(region):
                profile = state_taxes.states.get(region.code)
                return profile.effective_rate if profile else 0.0
            regions = sorted(regions, key=tax_rate, reverse=True)
        else:
            regions = sorted(regions, key=lambda r: r.name)

    if output_format == "json":
        output = []
        for region in regions:
            entry = region.model_dump()
            profile = state_taxes.states.get(region.code)
            entry["income_tax_rate"] = profile.effective_rate if profile else None
            output.append(entry)
        click.echo(json.dumps(output, indent=2))
        return

    render_regions(Console(), regions, state_taxes, title=title)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
