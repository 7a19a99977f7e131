from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from incentive_calc.models.inputs import FlexCashTarget


@dataclass
class ScenarioFigures:
    home_price: Decimal = Decimal("0")
    down_payment: Decimal = Decimal("0")
    loan_amount: Decimal = Decimal("0")
    interest_rate: Decimal = Decimal("0")  # Annual, percent units

    # Monthly cost stack
    monthly_mortgage_payment: Decimal = Decimal("0")
    monthly_tax: Decimal = Decimal("0")
    monthly_hoa: Decimal = Decimal("0")  # Zero when the builder covers HOA
    monthly_cdd: Decimal = Decimal("0")
    total_monthly: Decimal = Decimal("0")


@dataclass
class AdjustedScenarioFigures(ScenarioFigures):
    # Incentive breakdown
    flex_cash_used: Decimal = Decimal("0")
    flex_cash_target: Optional[FlexCashTarget] = None
    price_reduction: Decimal = Decimal("0")
    rate_buy_down_applied: Decimal = Decimal("0")  # Percentage points
    hoa_years_covered: int = 0
    hoa_savings_total: Decimal = Decimal("0")
    other_incentive_amount: Decimal = Decimal("0")


@dataclass
class SavingsSummary:
    monthly: Decimal = Decimal("0")
    yearly: Decimal = Decimal("0")
    lifetime: Decimal = Decimal("0")  # Monthly over the full term + HOA coverage


@dataclass
class ComparisonResult:
    """Side-by-side comparison of costs with and without builder incentives."""

    baseline: ScenarioFigures = field(default_factory=ScenarioFigures)
    adjusted: AdjustedScenarioFigures = field(default_factory=AdjustedScenarioFigures)
    savings: SavingsSummary = field(default_factory=SavingsSummary)
    loan_term_years: int = 0
