"""Wage Calc MCP server."""
