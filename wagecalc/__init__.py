"""Wage Calc - wage, payroll tax and cost-of-living estimation tools."""

__version__ = "0.3.0"
