"""Exceptions raised by the Wage Calc SDK.

The SDK never suppresses these; callers (CLI, MCP server) decide how to
present them.
"""


class WageCalcError(Exception):
    """Base class for all SDK errors."""
    pass


class ConfigurationError(WageCalcError):
    """Reference data is missing or malformed (tax year, filing status, tables)."""
    pass


class UnknownRegionError(WageCalcError):
    """A state code is not present in the state tax or cost-of-living table."""

    def __init__(self, code: str, table: str = "state"):
        self.code = code
        self.table = table
        super().__init__(f"Unknown state code '{code}' (not in {table} table)")


class InvalidInputError(WageCalcError):
    """Caller-supplied value is out of range (negative income, zero divisor)."""
    pass
