"""Tests for reference table loading and validation.

Uses isolated tax-rules directories via tmp_path and the tax_rules_dir
setting to avoid depending on the bundled tables.
"""

import pytest
import yaml
from click.testing import CliRunner
from pydantic import ValidationError

from wagecalc.cli.__main__ import cli
from wagecalc.sdk import ConfigurationError, FilingStatus, calculate_federal_tax
from wagecalc.sdk.taxes import (
    TaxRules,
    available_tax_years,
    load_cost_of_living_table,
    load_state_tax_table,
    load_tax_rules,
)


def rules_dict(year=2030, brackets=None):
    """Minimal valid rules for one filing status."""
    return {
        "year": year,
        "federal": {
            "single": brackets or [
                {"min": 0, "max": 10000, "rate": 0.05},
                {"min": 10000, "rate": 0.25},
            ],
        },
        "social_security": {"wage_cap": 200000, "tax_rate": 0.062},
        "medicare": {
            "tax_rate": 0.0145,
            "additional_rate": 0.009,
            "additional_threshold": {"single": 200000},
        },
        "401k": {"employee_elective_limit": 25000},
        "hsa": {"self_only_limit": 5000},
    }


class TestBundledTables:

    def test_2024_rules(self, rules_2024):
        assert rules_2024.year == 2024
        assert rules_2024.social_security.wage_cap == 168600
        assert rules_2024.retirement_401k.employee_elective_limit == 23000
        assert rules_2024.hsa.self_only_limit == 4300

    def test_every_filing_status_has_brackets_and_threshold(self, rules_2024):
        for status in FilingStatus:
            assert len(rules_2024.federal[status.value]) == 7
            assert status.value in rules_2024.medicare.additional_threshold

    def test_state_tables_cover_same_states(self):
        states = load_state_tax_table().states
        col = load_cost_of_living_table().states
        assert len(states) == 51
        assert set(states) == set(col)

    def test_indices_are_positive(self, col_table):
        assert col_table.base_index == 100
        assert all(region.index > 0 for region in col_table.states.values())

    def test_available_years(self):
        assert 2024 in available_tax_years()

    def test_load_once(self):
        assert load_tax_rules("2024") is load_tax_rules("2024")


class TestErrors:

    def test_missing_year(self):
        with pytest.raises(ConfigurationError, match="1999"):
            load_tax_rules("1999")

    def test_non_numeric_year(self):
        with pytest.raises(ConfigurationError):
            load_tax_rules("latest")

    def test_gap_between_brackets_is_rejected(self):
        with pytest.raises(ValidationError, match="not followed"):
            TaxRules.model_validate(rules_dict(brackets=[
                {"min": 0, "max": 10000, "rate": 0.05},
                {"min": 12000, "rate": 0.25},
            ]))

    def test_first_bracket_must_start_at_zero(self):
        with pytest.raises(ValidationError, match="start at 0"):
            TaxRules.model_validate(rules_dict(brackets=[{"min": 500, "rate": 0.1}]))

    def test_last_bracket_must_be_unbounded(self):
        with pytest.raises(ValidationError, match="unbounded"):
            TaxRules.model_validate(rules_dict(brackets=[{"min": 0, "max": 500, "rate": 0.1}]))

    def test_bracket_running_backwards_is_rejected(self):
        with pytest.raises(ValidationError, match="must end above it"):
            TaxRules.model_validate(rules_dict(brackets=[
                {"min": 0, "max": 100, "rate": 0.1},
                {"min": 100, "max": 50, "rate": 0.2},
                {"min": 50, "rate": 0.3},
            ]))

    def test_empty_bracket_is_rejected(self):
        with pytest.raises(ValidationError, match="must end above it"):
            TaxRules.model_validate(rules_dict(brackets=[
                {"min": 0, "max": 0, "rate": 0.1},
                {"min": 0, "rate": 0.2},
            ]))

    def test_malformed_yaml_becomes_configuration_error(self, tmp_path):
        (tmp_path / "2030.yaml").write_text("federal: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_tax_rules("2030", rules_dir=tmp_path)

    def test_malformed_yaml_in_cli(self, tmp_path, write_settings):
        (tmp_path / "2024.yaml").write_text("federal: [unclosed\n")
        write_settings({"tax_rules_dir": str(tmp_path)})

        result = CliRunner().invoke(cli, ["tax", "--salary", "52000", "--state", "CA"])
        assert result.exit_code == 1
        assert "Invalid YAML in reference table 2024.yaml" in result.output

    def test_invalid_file_becomes_configuration_error(self, tmp_path):
        bad = rules_dict(brackets=[{"min": 0, "max": 100, "rate": 0.1}, {"min": 200, "rate": 0.2}])
        (tmp_path / "2030.yaml").write_text(yaml.dump(bad))
        with pytest.raises(ConfigurationError, match="2030.yaml"):
            load_tax_rules("2030", rules_dir=tmp_path)

    def test_year_mismatch(self, tmp_path):
        (tmp_path / "2031.yaml").write_text(yaml.dump(rules_dict(year=2030)))
        with pytest.raises(ConfigurationError, match="declares year 2030"):
            load_tax_rules("2031", rules_dir=tmp_path)


class TestAlternateDirectory:

    def test_explicit_directory(self, tmp_path):
        (tmp_path / "2030.yaml").write_text(yaml.dump(rules_dict()))
        rules = load_tax_rules(2030, rules_dir=tmp_path)
        # 5% of 10,000 + 25% of 10,000
        assert calculate_federal_tax(20000, "single", rules) == pytest.approx(3000)

    def test_settings_select_directory_and_year(self, tmp_path, write_settings):
        rules_dir = tmp_path / "tables"
        rules_dir.mkdir()
        (rules_dir / "2030.yaml").write_text(yaml.dump(rules_dict()))
        write_settings({"tax_rules_dir": str(rules_dir), "tax_year": "2030"})

        assert load_tax_rules().year == 2030
        assert available_tax_years() == [2030]
        assert calculate_federal_tax(20000, "single") == pytest.approx(3000)
