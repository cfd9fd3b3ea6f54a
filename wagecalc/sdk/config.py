"""Configuration management for Wage Calc.

Settings live in settings.json inside the config directory:
   - tax_year: tax year used when a command does not pass one
   - default_state: two-letter state code used by default
   - default_filing_status: filing status used by default
   - tax_rules_dir: alternate directory of reference tables

Config directory resolution:
1. WAGE_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/wage-calc/ (XDG_CONFIG_HOME fallback)

Reference tables (federal brackets, payroll taxes, state rates,
cost-of-living indices) ship with the package under wagecalc/tax-rules/.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional


APP_NAME = "wage-calc"
SETTINGS_FILENAME = "settings.json"
DEFAULT_TAX_YEAR = "2024"

KNOWN_SETTINGS = {
    "tax_year": "Tax year for federal brackets and payroll limits (e.g. 2024)",
    "default_state": "Two-letter state code used when --state is omitted",
    "default_filing_status": "Filing status used when --filing-status is omitted",
    "tax_rules_dir": "Directory holding alternate YYYY.yaml / states.yaml / cost_of_living.yaml",
}


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. WAGE_CALC_CONFIG_PATH environment variable
    2. ~/.config/wage-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("WAGE_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "tax_year", "default_state")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json."""
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if the key was present."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_tax_year() -> str:
    """Effective tax year: settings.json 'tax_year' or DEFAULT_TAX_YEAR."""
    return str(get_setting("tax_year", DEFAULT_TAX_YEAR))


def get_default_tax_rules_dir() -> Path:
    """Directory of reference tables bundled with the package."""
    return Path(__file__).parent.parent / "tax-rules"  # sdk -> wagecalc


def get_tax_rules_dir() -> Path:
    """Effective reference table directory.

    Uses settings.json 'tax_rules_dir' when set, otherwise the bundled
    tables.
    """
    custom_dir: Optional[str] = get_setting("tax_rules_dir")
    if custom_dir:
        return Path(custom_dir).expanduser()
    return get_default_tax_rules_dir()
