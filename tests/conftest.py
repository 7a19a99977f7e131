"""Canonical test fixtures used across engine and API tests.

Fixture: $350K single-family home, 20% down, 6.5% rate, 30yr fixed,
$150 HOA, $50 CDD, 1.2% property tax. No incentives elected.
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from incentive_calc.models.inputs import CalculationInput


@pytest.fixture
def canonical_input() -> CalculationInput:
    """$350K home with no incentives elected."""
    return CalculationInput(
        home_price=Decimal("350000"),
        down_payment_percent=Decimal("20"),
        interest_rate=Decimal("6.5"),
        loan_term_years=30,
        hoa_fee_monthly=Decimal("150"),
        cdd_fee_monthly=Decimal("50"),
        include_tax=True,
        tax_rate_annual_percent=Decimal("1.2"),
    )


@pytest.fixture
def with_incentives(canonical_input):
    """Factory: canonical input plus the given elections."""
    def _make(**elections) -> CalculationInput:
        return replace(canonical_input, **elections)
    return _make


@pytest.fixture
def canonical_payload() -> dict:
    """Form payload equivalent to `canonical_input`."""
    return {
        "home_price": 350000,
        "home_type": "single_family",
        "hoa_fee": 150,
        "cdd_fee": 50,
        "interest_rate": 6.5,
        "loan_term_years": 30,
        "down_payment_percent": 20,
        "include_tax": True,
        "tax_rate": 1.2,
    }
