"""Tests for the wage-calc CLI commands."""

import json

import pytest
from click.testing import CliRunner

from wagecalc import __version__
from wagecalc.cli.__main__ import cli
from wagecalc.sdk import get_setting


@pytest.fixture
def runner():
    return CliRunner()


def invoke_json(runner, args):
    result = runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestTaxCommand:

    def test_hourly_json(self, runner):
        output = invoke_json(runner, ["tax", "--hourly", "25", "--state", "CA", "--format", "json"])

        assert output["year"] == 2024
        assert output["state"] == "CA"
        assert output["filing_status"] == "single"
        assert output["result"]["gross_income"] == 52000
        assert output["result"]["total_tax"] == pytest.approx(14241.0)
        assert output["take_home"]["monthly"] == pytest.approx(37759.0 / 12)
        assert sum(b["tax"] for b in output["federal_brackets"]) == pytest.approx(6493.0)

    def test_salary_lowercase_state(self, runner):
        output = invoke_json(runner, ["tax", "--salary", "52000", "--state", "tx", "--format", "json"])
        assert output["state"] == "TX"
        assert output["result"]["state_tax"] == 0

    def test_table(self, runner):
        result = runner.invoke(cli, ["tax", "--hourly", "25", "--state", "CA"])
        assert result.exit_code == 0, result.output
        assert "NET INCOME" in result.output
        assert "Take-Home Pay" in result.output

    @pytest.mark.parametrize("args", [
        ["tax", "--state", "CA"],
        ["tax", "--hourly", "25", "--salary", "52000", "--state", "CA"],
    ])
    def test_requires_exactly_one_pay_option(self, runner, args):
        result = runner.invoke(cli, args)
        assert result.exit_code == 2
        assert "exactly one of --hourly or --salary" in result.output

    def test_requires_state(self, runner):
        result = runner.invoke(cli, ["tax", "--salary", "52000"])
        assert result.exit_code == 2
        assert "No state given" in result.output

    def test_unknown_state(self, runner):
        result = runner.invoke(cli, ["tax", "--salary", "52000", "--state", "ZZ"])
        assert result.exit_code == 1
        assert "Unknown state code 'ZZ'" in result.output

    def test_unknown_year(self, runner):
        result = runner.invoke(cli, ["tax", "--salary", "52000", "--state", "CA", "--year", "1999"])
        assert result.exit_code == 1
        assert "No tax rules for year 1999" in result.output

    def test_hours_out_of_range(self, runner):
        result = runner.invoke(cli, ["tax", "--hourly", "25", "--hours", "0", "--state", "CA"])
        assert result.exit_code == 2

    def test_settings_defaults(self, runner, write_settings):
        write_settings({"default_state": "ny", "default_filing_status": "married_jointly"})
        output = invoke_json(runner, ["tax", "--salary", "90000", "--format", "json"])
        assert output["state"] == "NY"
        assert output["filing_status"] == "married_jointly"


class TestOptimizeCommand:

    def test_json(self, runner):
        output = invoke_json(runner, ["optimize", "--hourly", "25", "--state", "CA", "--format", "json"])
        assert output["total_potential_savings"] == pytest.approx(14910.05)
        assert output["recommendations"][0]["id"] == "salary-negotiation"
        assert len(output["recommendations"]) == 7

    def test_table(self, runner):
        result = runner.invoke(cli, ["optimize", "--salary", "52000", "--state", "CA"])
        assert result.exit_code == 0, result.output
        assert "Optimization Summary" in result.output


class TestCompareCommand:

    def test_json(self, runner):
        output = invoke_json(runner, ["compare", "CA", "TX", "75000", "--format", "json"])
        assert output["current_region"] == "California"
        assert output["target_region"] == "Texas"
        assert output["equivalent_salary"] == pytest.approx(75000 * 92.1 / 138.5)
        assert output["purchasing_power_change_percent"] > 0

    def test_table(self, runner):
        result = runner.invoke(cli, ["compare", "CA", "TX", "75000"])
        assert result.exit_code == 0, result.output
        assert "Purchasing Power" in result.output

    def test_unknown_state(self, runner):
        result = runner.invoke(cli, ["compare", "CA", "XX", "75000"])
        assert result.exit_code == 1
        assert "Unknown state code 'XX'" in result.output


class TestStatesCommand:

    def test_top(self, runner):
        output = invoke_json(runner, ["states", "--top", "3", "--format", "json"])
        assert len(output) == 3
        assert output[0]["code"] == "HI"

    def test_least(self, runner):
        output = invoke_json(runner, ["states", "--top", "3", "--least", "--format", "json"])
        assert [entry["code"] for entry in output] == ["MS", "OK", "AL"]

    def test_all_with_tax_rates(self, runner):
        output = invoke_json(runner, ["states", "--format", "json"])
        by_code = {entry["code"]: entry for entry in output}
        assert len(by_code) == 51
        assert by_code["TX"]["income_tax_rate"] == 0
        assert by_code["CA"]["income_tax_rate"] == pytest.approx(0.0725)


class TestSettingsCommands:

    def test_set_state_uppercases(self, runner):
        result = runner.invoke(cli, ["settings", "set", "default_state", "tx"])
        assert result.exit_code == 0, result.output
        assert get_setting("default_state") == "TX"

    def test_set_unknown_state(self, runner):
        result = runner.invoke(cli, ["settings", "set", "default_state", "zz"])
        assert result.exit_code == 2
        assert get_setting("default_state") is None

    def test_set_invalid_filing_status(self, runner):
        result = runner.invoke(cli, ["settings", "set", "default_filing_status", "widowed"])
        assert result.exit_code == 2

    def test_set_unknown_year(self, runner):
        result = runner.invoke(cli, ["settings", "set", "tax_year", "1999"])
        assert result.exit_code == 1

    def test_show_and_unset(self, runner):
        runner.invoke(cli, ["settings", "set", "tax_year", "2024"])
        shown = runner.invoke(cli, ["settings", "show"])
        assert "tax_year: 2024" in shown.output

        result = runner.invoke(cli, ["settings", "unset", "tax_year"])
        assert "Cleared tax_year" in result.output
        assert get_setting("tax_year") is None


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
