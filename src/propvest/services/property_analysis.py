# src/propvest/services/property_analysis.py
from __future__ import annotations

from typing import Any

from propvest.adapters.logging_utils import get_logger
from propvest.analysis.payment import (
    calculate_monthly_payment,
    calculate_pmi_payment,
    remaining_balance,
)
from propvest.analysis.projections import (
    annual_cash_flows,
    build_annual_projections,
    build_monthly_projections,
    monthly_operating_expenses,
)
from propvest.analysis.scoring import score_recommendation
from propvest.analysis.valuation import (
    breakeven_occupancy,
    cap_rate,
    cash_on_cash_return,
    debt_service_coverage_ratio,
    irr,
    npv,
    roi,
    total_cash_invested,
)
from propvest.domain.assumptions import ProjectionAssumptions
from propvest.domain.property import PropertyAnalysisInput
from propvest.domain.results import CalculationResults
from propvest.domain.units import MONTHS_PER_YEAR
from propvest.services.validation import parse_analysis_input

logger = get_logger(__name__)


def _round2(value: float | None) -> float | None:
    if value is None:
        return None
    return round(value, 2)


def calculate_property_analysis(
    inputs: PropertyAnalysisInput,
    assumptions: ProjectionAssumptions | None = None,
    *,
    projection_years: int | None = None,
) -> CalculationResults:
    """
    Main analysis entrypoint: payment -> projections -> ratios -> verdict.

    Pure and synchronous. `projection_years` overrides the annual horizon
    (5 by default, 30 for long-range views); NPV and IRR are taken over the
    same horizon.
    """
    assumptions = assumptions or ProjectionAssumptions.from_config()
    years = projection_years or assumptions.projection_years

    # --- financing ---
    loan_amount = inputs.loan_amount
    principal_and_interest = calculate_monthly_payment(loan_amount, inputs.interest_rate, inputs.loan_term)
    pmi_payment = calculate_pmi_payment(loan_amount, inputs.pmi_rate)
    monthly_debt_service = principal_and_interest + pmi_payment
    annual_debt_service = monthly_debt_service * MONTHS_PER_YEAR

    # --- income & operations (first year) ---
    gross_rent = inputs.income.monthly_gross_rent(assumptions.weeks_per_month)
    effective_monthly = gross_rent * (1 - inputs.vacancy_rate)
    opex_monthly = monthly_operating_expenses(inputs.expenses)

    noi_annual = (effective_monthly - opex_monthly) * MONTHS_PER_YEAR
    cash_flow_monthly = effective_monthly - opex_monthly - monthly_debt_service
    cash_flow_annual = cash_flow_monthly * MONTHS_PER_YEAR

    cash_in = total_cash_invested(
        inputs.down_payment,
        inputs.closing_costs,
        inputs.expenses.rehab_costs,
    )

    # --- projections ---
    monthly = build_monthly_projections(
        gross_rent=gross_rent,
        vacancy_rate=inputs.vacancy_rate,
        monthly_opex=opex_monthly,
        monthly_debt_service=monthly_debt_service,
    )
    annual = build_annual_projections(
        inputs,
        gross_rent=gross_rent,
        monthly_opex=opex_monthly,
        monthly_debt_service=monthly_debt_service,
        cash_invested=cash_in,
        assumptions=assumptions,
        years=years,
    )

    # --- valuation ---
    flows = annual_cash_flows(annual)
    terminal = 0.0
    if assumptions.include_terminal_value and annual:
        balance = remaining_balance(
            loan_amount, inputs.interest_rate, inputs.loan_term, len(annual) * MONTHS_PER_YEAR
        )
        terminal = annual[-1].property_value - balance

    npv_value = npv(cash_in, flows, assumptions.discount_rate, terminal_value=terminal)
    irr_flows = list(flows)
    if terminal and irr_flows:
        irr_flows[-1] += terminal
    irr_value = irr(
        cash_in,
        irr_flows,
        max_iterations=assumptions.irr_max_iterations,
        tolerance=assumptions.irr_tolerance,
    )

    roi_pct = _round2(roi(cash_flow_annual, cash_in))
    cap_pct = _round2(cap_rate(noi_annual, inputs.purchase_price))
    coc_pct = _round2(cash_on_cash_return(cash_flow_annual, cash_in))
    dscr = _round2(debt_service_coverage_ratio(noi_annual, annual_debt_service))
    npv_value = _round2(npv_value)

    verdict = score_recommendation(
        roi=roi_pct,
        cap_rate=cap_pct,
        monthly_cash_flow=cash_flow_monthly,
        dscr=dscr,
        npv=npv_value,
    )

    logger.debug(
        "property_analysis_complete",
        extra={
            "context": {
                "address": inputs.address,
                "years": years,
                "recommendation": verdict.recommendation,
                "score": verdict.score,
            }
        },
    )

    return CalculationResults(
        monthly_payment=_round2(monthly_debt_service),
        principal_and_interest=_round2(principal_and_interest),
        pmi_payment=_round2(pmi_payment),
        monthly_cash_flow=_round2(cash_flow_monthly),
        monthly_operating_expenses=_round2(opex_monthly),
        annual_cash_flow=_round2(cash_flow_annual),
        net_operating_income=_round2(noi_annual),
        effective_gross_income=_round2(effective_monthly * MONTHS_PER_YEAR),
        total_annual_expenses=_round2(opex_monthly * MONTHS_PER_YEAR),
        roi=roi_pct,
        cap_rate=cap_pct,
        cash_on_cash_return=coc_pct,
        debt_service_coverage_ratio=dscr,
        breakeven_occupancy=_round2(breakeven_occupancy(opex_monthly, monthly_debt_service, gross_rent)),
        total_cash_invested=_round2(cash_in),
        loan_amount=_round2(loan_amount),
        npv=npv_value,
        irr=_round2(irr_value),
        recommendation=verdict.recommendation,
        recommendation_score=verdict.score,
        recommendation_reasons=verdict.reasons,
        monthly_projections=monthly,
        annual_projections=annual,
    )


def analyze_payload(
    raw_payload: dict[str, Any],
    assumptions: ProjectionAssumptions | None = None,
    *,
    projection_years: int | None = None,
) -> CalculationResults:
    """Validate a loose JSON-style payload and run the analysis on it."""
    inputs = parse_analysis_input(raw_payload)
    return calculate_property_analysis(inputs, assumptions, projection_years=projection_years)
