"""Incentive comparison routes: the primary API entry point."""

import logging

from fastapi import APIRouter

from incentive_calc.api.schemas import (
    AdjustedScenarioResponse,
    BreakdownSectionResponse,
    BreakdownStepResponse,
    CompareRequest,
    CompareResponse,
    DefaultsResponse,
    IncentiveImpactResponse,
    SavingsResponse,
    ScenarioResponse,
)
from incentive_calc.config import settings
from incentive_calc.engine.breakdown import incentive_impacts, math_breakdown
from incentive_calc.engine.incentives import compare
from incentive_calc.models.inputs import CalculationInput
from incentive_calc.models.results import ComparisonResult, ScenarioFigures

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/incentives", tags=["incentives"])


def _scenario_fields(s: ScenarioFigures) -> dict:
    return {
        "home_price": float(s.home_price),
        "down_payment": float(s.down_payment),
        "loan_amount": float(s.loan_amount),
        "interest_rate": float(s.interest_rate),
        "monthly_mortgage_payment": float(s.monthly_mortgage_payment),
        "monthly_tax": float(s.monthly_tax),
        "monthly_hoa": float(s.monthly_hoa),
        "monthly_cdd": float(s.monthly_cdd),
        "total_monthly": float(s.total_monthly),
    }


def _result_to_response(inputs: CalculationInput, result: ComparisonResult, include_breakdown: bool) -> CompareResponse:
    """Convert engine ComparisonResult to API response."""
    adj = result.adjusted
    adjusted = AdjustedScenarioResponse(
        **_scenario_fields(adj),
        flex_cash_used=float(adj.flex_cash_used),
        flex_cash_target=adj.flex_cash_target.value if adj.flex_cash_target else None,
        price_reduction=float(adj.price_reduction),
        rate_buy_down_applied=float(adj.rate_buy_down_applied),
        hoa_years_covered=adj.hoa_years_covered,
        hoa_savings_total=float(adj.hoa_savings_total),
        other_incentive_amount=float(adj.other_incentive_amount),
    )

    breakdown = None
    if include_breakdown:
        breakdown = [
            BreakdownSectionResponse(
                title=section.title,
                steps=[
                    BreakdownStepResponse(
                        number=step.number,
                        title=step.title,
                        formula=step.formula,
                        detail=step.detail,
                        notes=list(step.notes),
                    )
                    for step in section.steps
                ],
            )
            for section in math_breakdown(inputs, result)
        ]

    return CompareResponse(
        loan_term_years=result.loan_term_years,
        baseline=ScenarioResponse(**_scenario_fields(result.baseline)),
        adjusted=adjusted,
        savings=SavingsResponse(
            monthly=float(result.savings.monthly),
            yearly=float(result.savings.yearly),
            lifetime=float(result.savings.lifetime),
        ),
        incentives=[
            IncentiveImpactResponse(incentive=row.incentive, value=row.value, impact=row.impact)
            for row in incentive_impacts(result)
        ],
        breakdown=breakdown,
    )


@router.post("/compare", response_model=CompareResponse)
async def compare_incentives(req: CompareRequest):
    """Compare monthly, yearly and lifetime costs with and without builder incentives."""
    inputs = req.to_calculation_input()
    result = compare(inputs)
    logger.info(
        "Comparison for $%s home: monthly savings %.2f",
        inputs.home_price,
        result.savings.monthly,
    )
    return _result_to_response(inputs, result, req.include_breakdown)


@router.get("/defaults", response_model=DefaultsResponse)
async def form_defaults():
    """Default form values, so every client starts from the same scenario."""
    return DefaultsResponse(
        home_price=float(settings.default_home_price),
        home_type=settings.default_home_type,
        hoa_fee=float(settings.default_hoa_fee),
        cdd_fee=float(settings.default_cdd_fee),
        interest_rate=float(settings.default_interest_rate),
        loan_term_years=settings.default_loan_term_years,
        down_payment_percent=float(settings.default_down_payment_percent),
        include_tax=settings.default_include_tax,
        tax_rate=float(settings.default_tax_rate),
        flex_cash_amount=float(settings.default_flex_cash_amount),
        flex_cash_target=settings.default_flex_cash_target,
        rate_buy_down_amount=float(settings.default_rate_buy_down),
        hoa_payment_years=settings.default_hoa_years,
        other_incentives_amount=float(settings.default_other_incentive_amount),
    )
