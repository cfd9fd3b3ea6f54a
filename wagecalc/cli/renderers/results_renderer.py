"""Rich renderers for tax results, cost-of-living comparisons and reports.

Transforms SDK result models into formatted Rich tables.
"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from wagecalc.sdk.formatting import format_currency, format_percentage
from wagecalc.sdk.schemas import (
    BracketSlice,
    CostOfLivingComparison,
    OptimizationReport,
    RegionSummary,
    TakeHomePay,
    TaxCalculationResult,
)
from wagecalc.sdk.taxes.schemas import StateTaxTable

PRIORITY_STYLE = {"high": "red", "medium": "yellow", "low": "dim"}


def render_tax_result(
    console: Console,
    result: TaxCalculationResult,
    title: str,
    shares: dict,
    brackets: list[BracketSlice],
    take_home: TakeHomePay,
) -> None:
    """Render tax breakdown, federal bracket detail and take-home pay."""
    _render_breakdown(console, result, title, shares)
    if brackets:
        _render_brackets(console, brackets)
    _render_take_home(console, take_home)


def _render_breakdown(console: Console, result: TaxCalculationResult, title: str, shares: dict) -> None:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("", style="bold", min_width=22)
    table.add_column("Amount", justify="right", min_width=14)
    table.add_column("% of Gross", justify="right", min_width=10)

    table.add_row("Gross Income", _fmt(result.gross_income), "")
    table.add_row("", "", "")
    table.add_row("[bold]TAXES[/bold]", "", "")
    table.add_row("  Federal Income Tax", _fmt(result.federal_tax), _pct(shares["federal_tax"]))
    table.add_row("  State Income Tax", _fmt(result.state_tax), _pct(shares["state_tax"]))
    table.add_row("  Social Security", _fmt(result.social_security), _pct(shares["social_security"]))
    table.add_row("  Medicare", _fmt(result.medicare), _pct(shares["medicare"]))
    table.add_row(
        "  [dim]Total Tax[/dim]",
        f"[dim]{_fmt(result.total_tax)}[/dim]",
        f"[dim]{_pct(result.effective_tax_rate_percent)}[/dim]",
    )
    table.add_row("", "", "")
    table.add_row(
        "[bold green]NET INCOME[/bold green]",
        f"[bold green]{_fmt(result.net_income)}[/bold green]",
        "",
    )

    console.print(table)


def _render_brackets(console: Console, brackets: list[BracketSlice]) -> None:
    table = Table(title="Federal Brackets", box=box.SIMPLE)
    table.add_column("Rate", justify="right")
    table.add_column("Range", justify="right")
    table.add_column("Taxable", justify="right")
    table.add_column("Tax", justify="right")

    for bracket_slice in brackets:
        upper = _fmt(bracket_slice.max) if bracket_slice.max is not None else "and up"
        table.add_row(
            _pct(bracket_slice.rate * 100),
            f"{_fmt(bracket_slice.min)} - {upper}",
            _fmt(bracket_slice.taxable_amount),
            _fmt(bracket_slice.tax),
        )

    console.print(table)


def _render_take_home(console: Console, take_home: TakeHomePay) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("period", style="dim")
    table.add_column("amount", justify="right")

    table.add_row("Annual", _fmt(take_home.annual))
    table.add_row("Monthly", _fmt(take_home.monthly))
    table.add_row("Bi-weekly", _fmt(take_home.biweekly))
    table.add_row("Weekly", _fmt(take_home.weekly))

    console.print(Panel(table, title="Take-Home Pay", border_style="green", expand=False))


def render_comparison(console: Console, comparison: CostOfLivingComparison) -> None:
    """Render a cost-of-living comparison.

    Positive purchasing power change (target cheaper) is shown green.
    """
    table = Table(
        title=f"Cost of Living: {comparison.current_region} -> {comparison.target_region}",
        box=box.ROUNDED,
    )
    table.add_column("", style="bold", min_width=24)
    table.add_column(comparison.current_region, justify="right", min_width=14)
    table.add_column(comparison.target_region, justify="right", min_width=14)

    table.add_row("Cost-of-Living Index", f"{comparison.current_index:.1f}", f"{comparison.target_index:.1f}")
    table.add_row("Salary", _fmt(comparison.current_salary), _fmt(comparison.equivalent_salary))
    console.print(table)

    change = comparison.purchasing_power_change_percent
    color = "green" if change > 0 else "red" if change < 0 else "white"
    direction = "more" if change > 0 else "less"
    if change == 0:
        message = "Both states cost the same; your purchasing power is unchanged."
    else:
        message = (
            f"Your salary buys [{color}]{_pct(abs(change))} {direction}[/{color}] in "
            f"{comparison.target_region}. Equivalent salary differs by "
            f"[{color}]{format_currency(comparison.cost_difference, 2)}[/{color}]."
        )
    console.print(Panel(message, title="Purchasing Power", border_style=color))


def render_regions(
    console: Console,
    regions: list[RegionSummary],
    state_taxes: Optional[StateTaxTable] = None,
    title: str = "States",
) -> None:
    """Render states with cost-of-living index and (optionally) tax rate."""
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("Code", style="cyan")
    table.add_column("State")
    table.add_column("COL Index", justify="right")
    if state_taxes is not None:
        table.add_column("Income Tax", justify="right")

    for region in regions:
        row = [region.code, region.name, f"{region.index:.1f}"]
        if state_taxes is not None:
            profile = state_taxes.states.get(region.code)
            if profile is None:
                row.append("-")
            elif profile.has_no_tax:
                row.append("[green]none[/green]")
            else:
                row.append(_pct(profile.rate * 100))
        table.add_row(*row)

    console.print(table)


def render_report(console: Console, report: OptimizationReport) -> None:
    """Render the optimization report summary and recommendations."""
    console.print(Panel(report.summary, title="Optimization Summary", border_style="cyan"))

    table = Table(box=box.ROUNDED, show_lines=True)
    table.add_column("Priority", justify="center")
    table.add_column("Recommendation", min_width=30)
    table.add_column("Effort", justify="center")
    table.add_column("Est. Savings", justify="right")

    for rec in report.recommendations:
        style = PRIORITY_STYLE[rec.priority]
        actions = "\n".join(f"  - {item}" for item in rec.action_items)
        table.add_row(
            f"[{style}]{rec.priority}[/{style}]",
            f"[bold]{rec.title}[/bold]\n{rec.description}\n[dim]{actions}[/dim]",
            rec.effort,
            _fmt(rec.potential_savings),
        )

    console.print(table)
    console.print(
        f"Total potential savings: [bold green]{_fmt(report.total_potential_savings)}[/bold green]"
    )


def _fmt(amount: Optional[float]) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return f"${amount:,.2f}"


def _pct(value: float) -> str:
    return format_percentage(value, 1)
