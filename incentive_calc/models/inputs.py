"""Calculator input record and incentive elections."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class HomeType(Enum):
    SINGLE_FAMILY = "single_family"
    TOWNHOUSE = "townhouse"
    CONDO = "condo"
    VILLA = "villa"


class FlexCashTarget(Enum):
    """Where the builder's flex cash is routed. Never both."""
    PRICE_REDUCTION = "price_reduction"
    RATE_BUY_DOWN = "rate_buy_down"


@dataclass(frozen=True)
class FlexCash:
    amount: Decimal
    applies_to: FlexCashTarget = FlexCashTarget.PRICE_REDUCTION


@dataclass(frozen=True)
class RateBuyDown:
    amount: Decimal  # Percentage points off the quoted rate, e.g. Decimal("1.0")


@dataclass(frozen=True)
class BuilderPaidHoa:
    years_covered: int


@dataclass(frozen=True)
class OtherIncentive:
    amount: Decimal  # Credit applied straight to loan principal


@dataclass(frozen=True)
class CalculationInput:
    home_price: Decimal
    down_payment_percent: Decimal = Decimal("20")
    interest_rate: Decimal = Decimal("6.5")  # Annual, percent units
    loan_term_years: int = 30

    # Recurring costs (monthly)
    hoa_fee_monthly: Decimal = Decimal("0")
    cdd_fee_monthly: Decimal = Decimal("0")

    # Property tax
    include_tax: bool = True
    tax_rate_annual_percent: Decimal = Decimal("0")

    home_type: HomeType = HomeType.SINGLE_FAMILY

    # Incentive elections: None means not elected
    flex_cash: Optional[FlexCash] = None
    rate_buy_down: Optional[RateBuyDown] = None
    builder_pays_hoa: Optional[BuilderPaidHoa] = None
    other_incentive: Optional[OtherIncentive] = None

    @property
    def loan_term_months(self) -> int:
        return self.loan_term_years * 12

    @property
    def has_incentives(self) -> bool:
        return any(
            e is not None
            for e in (self.flex_cash, self.rate_buy_down, self.builder_pays_hoa, self.other_incentive)
        )


class InvalidInput(ValueError):
    """Raised by the validation layer when a field violates its declared range or type.

    The engine never raises this; it is only defined over valid input.
    """

    def __init__(self, errors: list[tuple[str, str]]):
        self.errors = errors
        super().__init__("; ".join(f"{name}: {msg}" for name, msg in errors) or "Invalid input")
