"""Fixed-payment mortgage math.

Pure functions: Decimal in, Decimal out. No I/O, no rounding.
"""

from decimal import Decimal

MONTHS_PER_YEAR = 12


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    """Annual percentage (6.5 == 6.5%) to a monthly decimal rate."""
    return annual_rate_percent / 100 / MONTHS_PER_YEAR


def monthly_payment(principal: Decimal, annual_rate_percent: Decimal, term_years: int) -> Decimal:
    """Calculate the fixed monthly payment that amortizes `principal` over `term_years`.

    Args:
        principal: Loan amount
        annual_rate_percent: Annual interest rate in percent units (e.g. 6.5 for 6.5%)
        term_years: Loan term in years, must be positive
    """
    if principal <= 0:
        return Decimal("0")

    n = term_years * MONTHS_PER_YEAR
    r = monthly_rate(annual_rate_percent)
    if r == 0:
        return principal / n

    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    return principal * (r * factor) / (factor - 1)
