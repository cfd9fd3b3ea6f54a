"""Display formatting for amounts and percentages (en-US style)."""


def format_number(amount: float, minimum_fraction_digits: int = 0,
                  maximum_fraction_digits: int = 2) -> str:
    """Group thousands and round to maximum_fraction_digits, dropping trailing zeros.

    Example: 52000 -> "52,000", 1234.5 -> "1,234.5", 0.126 -> "0.13"
    """
    if maximum_fraction_digits <= 0:
        return f"{amount:,.0f}"
    whole, fraction = f"{amount:,.{maximum_fraction_digits}f}".split(".")
    fraction = fraction.rstrip("0").ljust(minimum_fraction_digits, "0")
    return f"{whole}.{fraction}" if fraction else whole


def format_currency(amount: float, minimum_fraction_digits: int = 0) -> str:
    """Format as US dollars, e.g. -1234.5 -> "-$1,234.5"."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${format_number(abs(amount), minimum_fraction_digits)}"


def format_percentage(percentage: float, minimum_fraction_digits: int = 1) -> str:
    """Format a percent value (12.5 means 12.5%)."""
    return f"{format_number(percentage, minimum_fraction_digits)}%"


def format_compact_currency(amount: float) -> str:
    """Abbreviate large amounts: 1500000 -> "$1.5M", 75000 -> "$75.0K"."""
    if amount >= 1_000_000:
        return f"{format_currency(amount / 1_000_000, 1)}M"
    if amount >= 1_000:
        return f"{format_currency(amount / 1_000, 1)}K"
    return format_currency(amount)
