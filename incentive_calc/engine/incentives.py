"""Incentive comparator: baseline vs incentive-adjusted cost of ownership.

Pure functions: CalculationInput in, dataclass out. No I/O.

Order of operations for the adjusted scenario:
    1. Flex cash routed to price reduction lowers the home price
    2. Down payment recomputed on the (possibly reduced) price
    3. Rate buy-down lowers the rate; flex cash routed to the buy-down
       leaves principal at the baseline loan amount
    4. Builder-paid HOA zeroes the monthly HOA and accrues a one-time total
    5. Other incentives come off principal last, whatever the flex-cash routing
"""

import logging
from decimal import Decimal

from incentive_calc.engine.mortgage import MONTHS_PER_YEAR, monthly_payment
from incentive_calc.models.inputs import CalculationInput, FlexCashTarget
from incentive_calc.models.results import (
    AdjustedScenarioFigures,
    ComparisonResult,
    SavingsSummary,
    ScenarioFigures,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def down_payment(home_price: Decimal, down_payment_percent: Decimal) -> Decimal:
    return home_price * down_payment_percent / 100


def monthly_property_tax(inputs: CalculationInput, home_price: Decimal) -> Decimal:
    """Flat annual percentage of the home price, spread over 12 months."""
    if not inputs.include_tax:
        return ZERO
    return home_price * inputs.tax_rate_annual_percent / 100 / MONTHS_PER_YEAR


def baseline_scenario(inputs: CalculationInput) -> ScenarioFigures:
    """Cost structure with no incentives applied."""
    dp = down_payment(inputs.home_price, inputs.down_payment_percent)
    loan = inputs.home_price - dp
    tax = monthly_property_tax(inputs, inputs.home_price)
    pmt = monthly_payment(loan, inputs.interest_rate, inputs.loan_term_years)

    return ScenarioFigures(
        home_price=inputs.home_price,
        down_payment=dp,
        loan_amount=loan,
        interest_rate=inputs.interest_rate,
        monthly_mortgage_payment=pmt,
        monthly_tax=tax,
        monthly_hoa=inputs.hoa_fee_monthly,
        monthly_cdd=inputs.cdd_fee_monthly,
        total_monthly=pmt + inputs.hoa_fee_monthly + inputs.cdd_fee_monthly + tax,
    )


def adjusted_scenario(inputs: CalculationInput, baseline: ScenarioFigures) -> AdjustedScenarioFigures:
    """Cost structure after every elected incentive is applied."""
    flex = inputs.flex_cash
    flex_cash_used = ZERO
    flex_target = None
    price_reduction = ZERO

    # 1. Price reduction
    if flex is not None and flex.amount:
        flex_cash_used = flex.amount
        flex_target = flex.applies_to
        if flex.applies_to == FlexCashTarget.PRICE_REDUCTION:
            price_reduction = flex.amount
    home_price = inputs.home_price - price_reduction

    # 2. Down payment on the adjusted price
    dp = down_payment(home_price, inputs.down_payment_percent)
    loan = home_price - dp

    # 3. Rate buy-down
    rate = inputs.interest_rate
    rate_buy_down = ZERO
    if inputs.rate_buy_down is not None and inputs.rate_buy_down.amount:
        rate_buy_down = inputs.rate_buy_down.amount
        rate = inputs.interest_rate - rate_buy_down
        if flex_target == FlexCashTarget.RATE_BUY_DOWN:
            # Flex cash funds the buy-down, not the principal
            loan = baseline.loan_amount

    # 4. Builder-paid HOA
    hoa_years = 0
    hoa_savings = ZERO
    if inputs.builder_pays_hoa is not None and inputs.builder_pays_hoa.years_covered > 0:
        hoa_years = inputs.builder_pays_hoa.years_covered
        hoa_savings = inputs.hoa_fee_monthly * MONTHS_PER_YEAR * hoa_years
    monthly_hoa = ZERO if hoa_years > 0 else inputs.hoa_fee_monthly

    # 5. Other incentives
    other = ZERO
    if inputs.other_incentive is not None and inputs.other_incentive.amount:
        other = inputs.other_incentive.amount
        loan -= other

    if loan < 0:
        logger.warning(
            "Incentives exceed financed amount by %s; clamping loan amount to zero", -loan
        )
        loan = ZERO

    # 6-8. Tax, payment, total
    tax = monthly_property_tax(inputs, home_price)
    pmt = monthly_payment(loan, rate, inputs.loan_term_years)

    return AdjustedScenarioFigures(
        home_price=home_price,
        down_payment=dp,
        loan_amount=loan,
        interest_rate=rate,
        monthly_mortgage_payment=pmt,
        monthly_tax=tax,
        monthly_hoa=monthly_hoa,
        monthly_cdd=inputs.cdd_fee_monthly,
        total_monthly=pmt + monthly_hoa + inputs.cdd_fee_monthly + tax,
        flex_cash_used=flex_cash_used,
        flex_cash_target=flex_target,
        price_reduction=price_reduction,
        rate_buy_down_applied=rate_buy_down,
        hoa_years_covered=hoa_years,
        hoa_savings_total=hoa_savings,
        other_incentive_amount=other,
    )


def savings_summary(
    baseline: ScenarioFigures,
    adjusted: AdjustedScenarioFigures,
    loan_term_years: int,
) -> SavingsSummary:
    """HOA coverage is added to lifetime savings once, never spread into the monthly figure."""
    monthly = baseline.total_monthly - adjusted.total_monthly
    return SavingsSummary(
        monthly=monthly,
        yearly=monthly * MONTHS_PER_YEAR,
        lifetime=monthly * loan_term_years * MONTHS_PER_YEAR + adjusted.hoa_savings_total,
    )


def compare(inputs: CalculationInput) -> ComparisonResult:
    """Run the baseline and incentive-adjusted scenarios side by side."""
    baseline = baseline_scenario(inputs)
    adjusted = adjusted_scenario(inputs, baseline)
    savings = savings_summary(baseline, adjusted, inputs.loan_term_years)

    logger.debug(
        "Compared $%s home: flex=%s buy_down=%s hoa=%s other=%s -> monthly savings %s",
        inputs.home_price,
        inputs.flex_cash,
        inputs.rate_buy_down,
        inputs.builder_pays_hoa,
        inputs.other_incentive,
        savings.monthly,
    )

    return ComparisonResult(
        baseline=baseline,
        adjusted=adjusted,
        savings=savings,
        loan_term_years=inputs.loan_term_years,
    )
