"""Shared fixtures.

Every test runs against an empty config directory (WAGE_CALC_CONFIG_PATH)
so a developer's settings.json never leaks into results.
"""

import json

import pytest

from wagecalc.sdk.taxes import (
    clear_cache,
    load_cost_of_living_table,
    load_state_tax_table,
    load_tax_rules,
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the SDK at an isolated, empty config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("WAGE_CALC_CONFIG_PATH", str(config_dir))
    clear_cache()
    yield config_dir
    clear_cache()


@pytest.fixture
def write_settings(isolated_config):
    """Write settings.json into the isolated config directory."""
    def _write(settings: dict):
        (isolated_config / "settings.json").write_text(json.dumps(settings))
    return _write


@pytest.fixture
def rules_2024():
    return load_tax_rules("2024")


@pytest.fixture
def state_taxes():
    return load_state_tax_table()


@pytest.fixture
def col_table():
    return load_cost_of_living_table()
