# src/propvest/domain/results.py
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Recommendation = Literal["BUY", "CONSIDER", "FAIL"]


class MonthlyProjection(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: int
    year: int
    gross_rent: float
    vacancy_loss: float
    effective_gross_income: float
    operating_expenses: float
    net_operating_income: float
    debt_service: float
    cash_flow: float
    cumulative_cash_flow: float


class AnnualProjection(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    gross_rent: float
    vacancy_loss: float
    effective_gross_income: float
    operating_expenses: float
    net_operating_income: float
    debt_service: float
    cash_flow: float
    cumulative_cash_flow: float
    property_value: float   # appreciated, end of year
    equity: float           # principal paid down + appreciation gain
    total_return: float     # cumulative cash flow + equity
    roi: float              # cumulative total return / cash invested, percent


class CalculationResults(BaseModel):
    """
    Everything derived from one PropertyAnalysisInput.

    Currency values are rounded to cents and ratios to two decimals.
    None means "undefined" (no debt to cover, no IRR root).
    """

    model_config = ConfigDict(frozen=True)

    # monthly
    monthly_payment: float          # principal & interest + PMI
    principal_and_interest: float
    pmi_payment: float
    monthly_cash_flow: float
    monthly_operating_expenses: float

    # annual
    annual_cash_flow: float
    net_operating_income: float
    effective_gross_income: float
    total_annual_expenses: float

    # ratios (percent unless noted)
    roi: float
    cap_rate: float
    cash_on_cash_return: float
    debt_service_coverage_ratio: float | None   # plain ratio
    breakeven_occupancy: float                  # fraction of gross rent

    # investment
    total_cash_invested: float
    loan_amount: float
    npv: float
    irr: float | None = None

    recommendation: Recommendation
    recommendation_score: float = Field(..., ge=0, le=100)
    recommendation_reasons: list[str]

    monthly_projections: list[MonthlyProjection]
    annual_projections: list[AnnualProjection]
