"""Incentive impact table and step-by-step math breakdown.

Pure rendering data over an existing ComparisonResult: nothing here computes
a figure the comparator has not already produced.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from incentive_calc.engine.mortgage import monthly_rate
from incentive_calc.models.inputs import CalculationInput, FlexCashTarget
from incentive_calc.models.results import ComparisonResult


@dataclass(frozen=True)
class IncentiveImpact:
    incentive: str
    value: str
    impact: str


@dataclass(frozen=True)
class BreakdownStep:
    number: int
    title: str
    formula: str
    detail: str
    notes: tuple[str, ...] = ()


@dataclass
class BreakdownSection:
    title: str
    steps: list[BreakdownStep] = field(default_factory=list)

    def add(self, title: str, formula: str, detail: str, notes: tuple[str, ...] = ()) -> None:
        self.steps.append(BreakdownStep(len(self.steps) + 1, title, formula, detail, notes))


def format_currency(value: Decimal, cents: bool = False) -> str:
    """$1,234 or $1,234.56; negatives as -$1,234."""
    places = 2 if cents else 0
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{places}f}"


def format_percent(value: Decimal) -> str:
    return f"{value:.3f}%"


def incentive_impacts(result: ComparisonResult) -> list[IncentiveImpact]:
    """One row per applied incentive, in the order the comparator applies them."""
    adj = result.adjusted
    rows: list[IncentiveImpact] = []

    if adj.price_reduction > 0:
        rows.append(IncentiveImpact(
            incentive="Flex Cash (Price Reduction)",
            value=format_currency(adj.price_reduction),
            impact="Reduced home price and loan amount",
        ))

    if adj.rate_buy_down_applied > 0:
        impact = "Lower interest rate"
        if adj.flex_cash_target == FlexCashTarget.RATE_BUY_DOWN and adj.flex_cash_used > 0:
            impact = f"Lower interest rate (using {format_currency(adj.flex_cash_used)} flex cash)"
        rows.append(IncentiveImpact(
            incentive="Interest Rate Buy Down",
            value=format_percent(adj.rate_buy_down_applied),
            impact=impact,
        ))

    if adj.hoa_years_covered > 0:
        rows.append(IncentiveImpact(
            incentive="Builder Pays HOA",
            value=f"{adj.hoa_years_covered} years",
            impact=f"Builder pays HOA fees ({format_currency(adj.hoa_savings_total)} total savings)",
        ))

    if adj.other_incentive_amount > 0:
        rows.append(IncentiveImpact(
            incentive="Other Incentives",
            value=format_currency(adj.other_incentive_amount),
            impact="Additional savings applied to loan amount",
        ))

    return rows


def _payment_notes(principal: Decimal, rate: Decimal, term_years: int, adjusted: bool) -> tuple[str, ...]:
    label = "Principal (adjusted loan amount)" if adjusted else "Principal (loan amount)"
    return (
        "M = Monthly payment",
        f"P = {label}: {format_currency(principal)}",
        f"r = Monthly interest rate: {monthly_rate(rate):.6f} ({rate}% ÷ 12 months)",
        f"n = Number of payments: {term_years * 12} ({term_years} years × 12 months)",
    )


def _monthly_total_detail(inputs: CalculationInput, payment: Decimal, hoa: Decimal,
                          tax: Decimal, total: Decimal) -> str:
    parts = [format_currency(payment, cents=True), format_currency(hoa, cents=True),
             format_currency(inputs.cdd_fee_monthly, cents=True)]
    if inputs.include_tax:
        parts.append(format_currency(tax, cents=True))
    return f"{' + '.join(parts)} = {format_currency(total, cents=True)}"


def _baseline_section(inputs: CalculationInput, result: ComparisonResult) -> BreakdownSection:
    base = result.baseline
    section = BreakdownSection("Without Incentives")

    section.add(
        "Calculate Down Payment",
        "Home Price × Down Payment % = Down Payment",
        f"{format_currency(base.home_price)} × {inputs.down_payment_percent}% = {format_currency(base.down_payment)}",
    )
    section.add(
        "Calculate Loan Amount",
        "Home Price - Down Payment = Loan Amount",
        f"{format_currency(base.home_price)} - {format_currency(base.down_payment)} = {format_currency(base.loan_amount)}",
    )
    section.add(
        "Calculate Monthly Mortgage Payment",
        "M = P × [r(1+r)^n] / [(1+r)^n - 1]",
        f"Result: {format_currency(base.monthly_mortgage_payment, cents=True)} per month",
        _payment_notes(base.loan_amount, base.interest_rate, inputs.loan_term_years, adjusted=False),
    )
    if inputs.include_tax:
        section.add(
            "Calculate Monthly Property Tax",
            "Home Price × Tax Rate ÷ 12 = Monthly Tax",
            f"{format_currency(base.home_price)} × {inputs.tax_rate_annual_percent}% ÷ 12 = "
            f"{format_currency(base.monthly_tax, cents=True)}",
        )
    tax_term = " + Property Tax" if inputs.include_tax else ""
    section.add(
        "Calculate Total Monthly Payment",
        f"Mortgage Payment + HOA Fee + CDD/Other Costs{tax_term} = Total Monthly",
        _monthly_total_detail(inputs, base.monthly_mortgage_payment, inputs.hoa_fee_monthly,
                              base.monthly_tax, base.total_monthly),
    )
    return section


def _adjusted_section(inputs: CalculationInput, result: ComparisonResult) -> BreakdownSection:
    base, adj = result.baseline, result.adjusted
    section = BreakdownSection("With Incentives")

    if adj.price_reduction > 0:
        section.add(
            "Apply Price Reduction",
            "Original Home Price - Flex Cash = Adjusted Home Price",
            f"{format_currency(base.home_price)} - {format_currency(adj.price_reduction)} = "
            f"{format_currency(adj.home_price)}",
        )
    section.add(
        "Calculate Down Payment",
        "Adjusted Home Price × Down Payment % = Down Payment",
        f"{format_currency(adj.home_price)} × {inputs.down_payment_percent}% = {format_currency(adj.down_payment)}",
    )

    other_term = " - Other Incentives" if adj.other_incentive_amount > 0 else ""
    other_value = f" - {format_currency(adj.other_incentive_amount)}" if adj.other_incentive_amount > 0 else ""
    section.add(
        "Calculate Loan Amount",
        f"Adjusted Home Price - Down Payment{other_term} = Loan Amount",
        f"{format_currency(adj.home_price)} - {format_currency(adj.down_payment)}{other_value} = "
        f"{format_currency(adj.loan_amount)}",
    )
    if adj.rate_buy_down_applied > 0:
        section.add(
            "Apply Interest Rate Buy Down",
            "Original Rate - Buy Down = Adjusted Rate",
            f"{format_percent(base.interest_rate)} - {format_percent(adj.rate_buy_down_applied)} = "
            f"{format_percent(adj.interest_rate)}",
        )
    section.add(
        "Calculate Monthly Mortgage Payment",
        "M = P × [r(1+r)^n] / [(1+r)^n - 1]",
        f"Result: {format_currency(adj.monthly_mortgage_payment, cents=True)} per month",
        _payment_notes(adj.loan_amount, adj.interest_rate, inputs.loan_term_years, adjusted=True),
    )
    if inputs.include_tax:
        section.add(
            "Calculate Monthly Property Tax",
            "Adjusted Home Price × Tax Rate ÷ 12 = Monthly Tax",
            f"{format_currency(adj.home_price)} × {inputs.tax_rate_annual_percent}% ÷ 12 = "
            f"{format_currency(adj.monthly_tax, cents=True)}",
        )
    hoa_term = "$0 HOA (covered)" if adj.hoa_years_covered > 0 else "HOA Fee"
    tax_term = " + Property Tax" if inputs.include_tax else ""
    section.add(
        "Calculate Total Monthly Payment",
        f"Mortgage Payment + {hoa_term} + CDD/Other Costs{tax_term} = Total Monthly",
        _monthly_total_detail(inputs, adj.monthly_mortgage_payment, adj.monthly_hoa,
                              adj.monthly_tax, adj.total_monthly),
    )
    return section


def _savings_section(inputs: CalculationInput, result: ComparisonResult) -> BreakdownSection:
    base, adj, savings = result.baseline, result.adjusted, result.savings
    section = BreakdownSection("Savings")

    section.add(
        "Monthly Savings",
        "Total Without Incentives - Total With Incentives = Monthly Savings",
        f"{format_currency(base.total_monthly, cents=True)} - {format_currency(adj.total_monthly, cents=True)} = "
        f"{format_currency(savings.monthly, cents=True)}",
    )
    section.add(
        "Yearly Savings",
        "Monthly Savings × 12 = Yearly Savings",
        f"{format_currency(savings.monthly, cents=True)} × 12 = {format_currency(savings.yearly)}",
    )
    hoa_term = " + HOA Savings" if adj.hoa_savings_total > 0 else ""
    hoa_value = f" + {format_currency(adj.hoa_savings_total)}" if adj.hoa_savings_total > 0 else ""
    section.add(
        "Lifetime Savings",
        f"Monthly Savings × Loan Term in Months{hoa_term} = Lifetime Savings",
        f"{format_currency(savings.monthly, cents=True)} × {inputs.loan_term_months} months{hoa_value} = "
        f"{format_currency(savings.lifetime)}",
    )
    return section


def math_breakdown(inputs: CalculationInput, result: ComparisonResult) -> list[BreakdownSection]:
    """Step-by-step narrative of how each figure in `result` was reached."""
    return [
        _baseline_section(inputs, result),
        _adjusted_section(inputs, result),
        _savings_section(inputs, result),
    ]
