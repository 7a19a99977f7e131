"""Request/response schemas. The request model is the calculator's validation layer."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from incentive_calc.models.inputs import (
    BuilderPaidHoa,
    CalculationInput,
    FlexCash,
    FlexCashTarget,
    HomeType,
    InvalidInput,
    OtherIncentive,
    RateBuyDown,
)


# ---- Request schemas ----

def _elected_range(value, elected, label, low, high=None):
    """Range-check an incentive amount, but only when its toggle is on."""
    if not elected:
        return value
    if value is None:
        raise ValueError(f"{label} is required when the incentive is elected")
    if value < low:
        raise ValueError(f"{label} must be at least {low}")
    if high is not None and value > high:
        raise ValueError(f"{label} cannot exceed {high}")
    return value


class CompareRequest(BaseModel):
    home_price: Decimal = Field(ge=50000)
    home_type: HomeType = HomeType.SINGLE_FAMILY
    hoa_fee: Decimal = Field(default=Decimal("0"), ge=0)
    cdd_fee: Decimal = Field(default=Decimal("0"), ge=0)
    interest_rate: Decimal = Field(ge=1, le=15)
    loan_term_years: int = Field(ge=5, le=30)
    down_payment_percent: Decimal = Field(ge=0, le=100)
    include_tax: bool = True
    tax_rate: Decimal = Field(default=Decimal("1.2"), ge=0, le=10)

    # Incentive toggles; each amount is only validated when its toggle is on.
    # Toggles must be declared before their amounts (validators read info.data).
    use_flex_cash: bool = False
    flex_cash_amount: Optional[Decimal] = Field(default=None, validate_default=True)
    flex_cash_target: FlexCashTarget = FlexCashTarget.PRICE_REDUCTION
    use_rate_buy_down: bool = False
    rate_buy_down_amount: Optional[Decimal] = Field(default=None, validate_default=True)
    builder_pays_hoa: bool = False
    hoa_payment_years: Optional[int] = Field(default=1, validate_default=True)
    use_other_incentives: bool = False
    other_incentives_amount: Optional[Decimal] = Field(default=None, validate_default=True)

    include_breakdown: bool = False

    @field_validator("flex_cash_amount")
    @classmethod
    def _check_flex_cash(cls, v, info: ValidationInfo):
        return _elected_range(v, info.data.get("use_flex_cash"), "Flex cash amount", low=0)

    @field_validator("rate_buy_down_amount")
    @classmethod
    def _check_rate_buy_down(cls, v, info: ValidationInfo):
        return _elected_range(v, info.data.get("use_rate_buy_down"), "Rate buy down",
                              low=Decimal("0.1"), high=Decimal("5"))

    @field_validator("hoa_payment_years")
    @classmethod
    def _check_hoa_years(cls, v, info: ValidationInfo):
        return _elected_range(v, info.data.get("builder_pays_hoa"), "HOA years covered", low=1, high=10)

    @field_validator("other_incentives_amount")
    @classmethod
    def _check_other(cls, v, info: ValidationInfo):
        return _elected_range(v, info.data.get("use_other_incentives"), "Other incentives amount", low=0)

    def to_calculation_input(self) -> CalculationInput:
        return CalculationInput(
            home_price=self.home_price,
            down_payment_percent=self.down_payment_percent,
            interest_rate=self.interest_rate,
            loan_term_years=self.loan_term_years,
            hoa_fee_monthly=self.hoa_fee,
            cdd_fee_monthly=self.cdd_fee,
            include_tax=self.include_tax,
            tax_rate_annual_percent=self.tax_rate,
            home_type=self.home_type,
            flex_cash=(
                FlexCash(amount=self.flex_cash_amount, applies_to=self.flex_cash_target)
                if self.use_flex_cash else None
            ),
            rate_buy_down=RateBuyDown(amount=self.rate_buy_down_amount) if self.use_rate_buy_down else None,
            builder_pays_hoa=BuilderPaidHoa(years_covered=self.hoa_payment_years) if self.builder_pays_hoa else None,
            other_incentive=(
                OtherIncentive(amount=self.other_incentives_amount) if self.use_other_incentives else None
            ),
        )


def parse_request(payload: dict) -> CompareRequest:
    """Validate a raw form payload, raising InvalidInput with per-field messages."""
    try:
        return CompareRequest.model_validate(payload)
    except ValidationError as e:
        errors = [
            (".".join(str(part) for part in err["loc"]) or "form", err["msg"])
            for err in e.errors()
        ]
        raise InvalidInput(errors) from e


# ---- Response schemas ----

class ScenarioResponse(BaseModel):
    home_price: float
    down_payment: float
    loan_amount: float
    interest_rate: float
    monthly_mortgage_payment: float
    monthly_tax: float
    monthly_hoa: float
    monthly_cdd: float
    total_monthly: float


class AdjustedScenarioResponse(ScenarioResponse):
    flex_cash_used: float
    flex_cash_target: Optional[str] = None
    price_reduction: float
    rate_buy_down_applied: float
    hoa_years_covered: int
    hoa_savings_total: float
    other_incentive_amount: float


class SavingsResponse(BaseModel):
    monthly: float
    yearly: float
    lifetime: float


class IncentiveImpactResponse(BaseModel):
    incentive: str
    value: str
    impact: str


class BreakdownStepResponse(BaseModel):
    number: int
    title: str
    formula: str
    detail: str
    notes: list[str] = []


class BreakdownSectionResponse(BaseModel):
    title: str
    steps: list[BreakdownStepResponse]


class CompareResponse(BaseModel):
    loan_term_years: int
    baseline: ScenarioResponse
    adjusted: AdjustedScenarioResponse
    savings: SavingsResponse
    incentives: list[IncentiveImpactResponse] = []
    breakdown: Optional[list[BreakdownSectionResponse]] = None


class DefaultsResponse(BaseModel):
    home_price: float
    home_type: str
    hoa_fee: float
    cdd_fee: float
    interest_rate: float
    loan_term_years: int
    down_payment_percent: float
    include_tax: bool
    tax_rate: float
    flex_cash_amount: float
    flex_cash_target: str
    rate_buy_down_amount: float
    hoa_payment_years: int
    other_incentives_amount: float
