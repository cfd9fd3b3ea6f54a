"""Wage Calc command-line interface."""
