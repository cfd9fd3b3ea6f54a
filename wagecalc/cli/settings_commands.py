"""Settings CLI commands for Wage Calc.

Manages settings.json - default tax year, state, filing status and an
alternate reference table directory.
"""

import click
from pathlib import Path

from wagecalc.sdk import (
    KNOWN_SETTINGS,
    FilingStatus,
    WageCalcError,
    load_settings,
    set_setting,
    unset_setting,
    get_settings_path,
    get_tax_year,
    get_tax_rules_dir,
    load_state_tax_table,
    load_tax_rules,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    \b
    Available settings:
    - tax_year: tax year for brackets and payroll limits
    - default_state: state code used when --state is omitted
    - default_filing_status: filing status used when --filing-status is omitted
    - tax_rules_dir: directory of alternate reference tables
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective values:")
    click.echo(f"  tax_year: {get_tax_year()}")
    click.echo(f"  tax_rules_dir: {get_tax_rules_dir()}")


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
@click.argument("value")
def settings_set(key, value):
    """Set a setting.

    Values are validated against the reference tables before saving.

    \b
    Examples:
        wage-calc settings set tax_year 2024
        wage-calc settings set default_state TX
        wage-calc settings set default_filing_status married_jointly
        wage-calc settings set tax_rules_dir ~/tax-tables
    """
    try:
        if key == "tax_year":
            load_tax_rules(value)
        elif key == "default_state":
            value = value.strip().upper()
            if value not in load_state_tax_table().states:
                raise click.BadParameter(f"Unknown state code '{value}'", param_hint="VALUE")
        elif key == "default_filing_status":
            valid = [status.value for status in FilingStatus]
            if value not in valid:
                raise click.BadParameter(
                    f"Must be one of: {', '.join(valid)}", param_hint="VALUE"
                )
        elif key == "tax_rules_dir":
            rules_path = Path(value).expanduser().resolve()
            if not rules_path.is_dir():
                raise click.BadParameter(f"Not a directory: {rules_path}", param_hint="VALUE")
            value = str(rules_path)
    except WageCalcError as e:
        raise click.ClickException(str(e))

    set_setting(key, value)
    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {get_settings_path()}")


@settings.command("unset")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
def settings_unset(key):
    """Clear a setting, reverting to its default."""
    if unset_setting(key):
        click.echo(f"Cleared {key} setting.")
    else:
        click.echo(f"{key} was not set.")
