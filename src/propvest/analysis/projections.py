# src/propvest/analysis/projections.py
from __future__ import annotations

import numpy as np

from propvest.analysis.payment import principal_paid
from propvest.analysis.valuation import roi
from propvest.domain.assumptions import ProjectionAssumptions
from propvest.domain.property import OperatingExpenses, PropertyAnalysisInput
from propvest.domain.results import AnnualProjection, MonthlyProjection
from propvest.domain.units import MONTHS_PER_YEAR, MonthlyAmount, to_monthly

MONTHS_IN_FIRST_YEAR = 12


def _cents(value: float) -> float:
    return round(float(value), 2)


def monthly_operating_expenses(expenses: OperatingExpenses) -> MonthlyAmount:
    """
    Operating expenses do NOT include the mortgage (that's financing, not operations).

    Taxes and insurance arrive as annual bills and are spread over 12 months;
    the remaining buckets are already monthly.
    """
    return MonthlyAmount(
        to_monthly(expenses.property_taxes)
        + to_monthly(expenses.insurance)
        + expenses.property_mgmt
        + expenses.maintenance
        + expenses.utilities
        + expenses.hoa_fees
        + expenses.equipment
    )


def build_monthly_projections(
    gross_rent: float,
    vacancy_rate: float,
    monthly_opex: float,
    monthly_debt_service: float,
    months: int = MONTHS_IN_FIRST_YEAR,
) -> list[MonthlyProjection]:
    """
    First-year month-by-month series. Rent is flat within the year.
    """
    projections: list[MonthlyProjection] = []
    cumulative = 0.0

    vacancy_loss = gross_rent * vacancy_rate
    effective = gross_rent - vacancy_loss
    noi = effective - monthly_opex
    cash_flow = noi - monthly_debt_service

    for month in range(1, months + 1):
        cumulative += cash_flow
        projections.append(
            MonthlyProjection(
                month=month,
                year=(month - 1) // MONTHS_PER_YEAR + 1,
                gross_rent=_cents(gross_rent),
                vacancy_loss=_cents(vacancy_loss),
                effective_gross_income=_cents(effective),
                operating_expenses=_cents(monthly_opex),
                net_operating_income=_cents(noi),
                debt_service=_cents(monthly_debt_service),
                cash_flow=_cents(cash_flow),
                cumulative_cash_flow=_cents(cumulative),
            )
        )
    return projections


def payment_months_by_year(loan_term_years: float, years: int) -> np.ndarray:
    """Scheduled loan payments falling in each projection year (0 once paid off)."""
    year_idx = np.arange(years, dtype=float)
    remaining = loan_term_years * MONTHS_PER_YEAR - year_idx * MONTHS_PER_YEAR
    return np.clip(remaining, 0.0, float(MONTHS_PER_YEAR))


def build_annual_projections(
    inputs: PropertyAnalysisInput,
    gross_rent: float,
    monthly_opex: float,
    monthly_debt_service: float,
    cash_invested: float,
    assumptions: ProjectionAssumptions,
    years: int | None = None,
) -> list[AnnualProjection]:
    """
    Year-by-year series over the projection horizon.

    Vectorized over years:
      rent_y     = 12 * rent * (1 + rent_growth)^(y-1)
      opex_y     = 12 * opex * (1 + expense_growth)^(y-1)
      debt_y     = payment * scheduled months in year y (0 after the term)
      value_y    = price * (1 + appreciation)^y      (end of year)
      equity_y   = principal paid through y + (value_y - price)
      return_y   = cumulative cash flow through y + equity_y
    """
    n_years = int(years or assumptions.projection_years)
    if n_years <= 0:
        return []

    year_no = np.arange(1, n_years + 1, dtype=float)
    elapsed = year_no - 1.0

    gross = gross_rent * MONTHS_PER_YEAR * np.power(1.0 + assumptions.rent_growth_rate, elapsed)
    vacancy = gross * inputs.vacancy_rate
    effective = gross - vacancy
    opex = monthly_opex * MONTHS_PER_YEAR * np.power(1.0 + assumptions.expense_growth_rate, elapsed)
    noi = effective - opex

    debt = monthly_debt_service * payment_months_by_year(inputs.loan_term, n_years)
    cash_flow = noi - debt
    cumulative = np.cumsum(cash_flow)

    purchase_price = inputs.purchase_price
    value = purchase_price * np.power(1.0 + assumptions.appreciation_rate, year_no)
    paid_down = principal_paid(
        inputs.loan_amount,
        inputs.interest_rate,
        inputs.loan_term,
        year_no * MONTHS_PER_YEAR,
    )
    equity = paid_down + (value - purchase_price)
    total_return = cumulative + equity

    return [
        AnnualProjection(
            year=int(year_no[i]),
            gross_rent=_cents(gross[i]),
            vacancy_loss=_cents(vacancy[i]),
            effective_gross_income=_cents(effective[i]),
            operating_expenses=_cents(opex[i]),
            net_operating_income=_cents(noi[i]),
            debt_service=_cents(debt[i]),
            cash_flow=_cents(cash_flow[i]),
            cumulative_cash_flow=_cents(cumulative[i]),
            property_value=_cents(value[i]),
            equity=_cents(equity[i]),
            total_return=_cents(total_return[i]),
            roi=_cents(roi(float(total_return[i]), cash_invested)),
        )
        for i in range(n_years)
    ]


def annual_cash_flows(projections: list[AnnualProjection]) -> list[float]:
    return [p.cash_flow for p in projections]
