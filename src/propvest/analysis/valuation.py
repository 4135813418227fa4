# src/propvest/analysis/valuation.py
from __future__ import annotations

from typing import Sequence

import numpy as np

IRR_MAX_ITERATIONS = 100
IRR_TOLERANCE = 1e-4

# bisection fallback bracket (annual rates)
_IRR_LOW = -0.99
_IRR_HIGH = 10.0
_BISECT_MAX_ITERATIONS = 200
_BISECT_RATE_TOLERANCE = 1e-7


def total_cash_invested(
    down_payment: float,
    closing_costs: float = 0.0,
    rehab_costs: float = 0.0,
    upfront_pmi: float = 0.0,
) -> float:
    """Cash out of pocket at acquisition."""
    return down_payment + closing_costs + rehab_costs + upfront_pmi


def cap_rate(net_operating_income: float, property_value: float) -> float:
    """
    Cap rate = NOI / Purchase Price, as a percent.
    Used to value income-producing property independent of financing.
    """
    if property_value <= 0:
        return 0.0
    return net_operating_income / property_value * 100.0


def roi(annual_cash_flow: float, cash_invested: float) -> float:
    """Annual cash flow over cash invested, as a percent. 0 when nothing is invested."""
    if cash_invested <= 0:
        return 0.0
    return annual_cash_flow / cash_invested * 100.0


def cash_on_cash_return(annual_cash_flow: float, cash_invested: float) -> float:
    # Same calculation as cash ROI; kept separate so callers can say what they mean.
    return roi(annual_cash_flow, cash_invested)


def debt_service_coverage_ratio(
    net_operating_income: float,
    annual_debt_service: float,
) -> float | None:
    """
    DSCR = NOI / Annual Debt Service.

    With no debt to cover the ratio is undefined; None rather than inf.
    """
    if annual_debt_service <= 0:
        return None
    return net_operating_income / annual_debt_service


def breakeven_occupancy(
    monthly_operating_expenses: float,
    monthly_debt_service: float,
    gross_rent_monthly: float,
) -> float:
    """Share of gross rent that must be collected to cover opex and debt."""
    if gross_rent_monthly <= 0:
        return 1.0
    return (monthly_operating_expenses + monthly_debt_service) / gross_rent_monthly


def _present_values(rate: float, cash_flows: np.ndarray) -> np.ndarray:
    periods = np.arange(1, cash_flows.shape[0] + 1, dtype=float)
    return cash_flows / np.power(1.0 + rate, periods)


def npv(
    initial_investment: float,
    cash_flows: Sequence[float],
    discount_rate: float = 0.08,
    terminal_value: float = 0.0,
) -> float:
    """
    NPV = -initial + sum(cf_y / (1+r)^y) for y = 1..N

    `terminal_value` (sale proceeds, equity) is discounted from year N.
    """
    flows = np.asarray(cash_flows, dtype=float)
    total = -initial_investment + float(_present_values(discount_rate, flows).sum())
    if terminal_value and flows.shape[0] > 0:
        total += terminal_value / (1.0 + discount_rate) ** flows.shape[0]
    return total


def _has_sign_change(values: np.ndarray) -> bool:
    return bool((values > 0).any() and (values < 0).any())


def _npv_at(rate: float, initial_investment: float, flows: np.ndarray) -> float:
    return -initial_investment + float(_present_values(rate, flows).sum())


def _newton(
    initial_investment: float,
    flows: np.ndarray,
    guess: float,
    max_iterations: int,
    tolerance: float,
) -> float | None:
    periods = np.arange(1, flows.shape[0] + 1, dtype=float)
    rate = guess
    for _ in range(max_iterations):
        if rate <= -1.0:
            return None
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            discount = np.power(1.0 + rate, periods)
            value = -initial_investment + float((flows / discount).sum())
            derivative = float((-periods * flows / (discount * (1.0 + rate))).sum())
        if not (np.isfinite(value) and np.isfinite(derivative)):
            return None
        if abs(value) < tolerance:
            return rate
        if derivative == 0:
            return None
        rate = rate - value / derivative
    return None


def _bisect(initial_investment: float, flows: np.ndarray, tolerance: float) -> float | None:
    low, high = _IRR_LOW, _IRR_HIGH
    with np.errstate(over="ignore", invalid="ignore"):
        f_low = _npv_at(low, initial_investment, flows)
        f_high = _npv_at(high, initial_investment, flows)
    if not (np.isfinite(f_low) and np.isfinite(f_high)) or f_low * f_high > 0:
        return None

    for _ in range(_BISECT_MAX_ITERATIONS):
        mid = (low + high) / 2.0
        with np.errstate(over="ignore", invalid="ignore"):
            f_mid = _npv_at(mid, initial_investment, flows)
        if abs(f_mid) < tolerance or (high - low) / 2.0 < _BISECT_RATE_TOLERANCE:
            return mid
        if f_low * f_mid < 0:
            high = mid
        else:
            low, f_low = mid, f_mid
    return None


def irr(
    initial_investment: float,
    cash_flows: Sequence[float],
    guess: float = 0.1,
    max_iterations: int = IRR_MAX_ITERATIONS,
    tolerance: float = IRR_TOLERANCE,
) -> float | None:
    """
    Internal rate of return, as a percent.

    Newton-Raphson from `guess`, falling back to bisection over a fixed bracket.
    Both loops are bounded. Returns None when the series has no sign change
    (no root exists) or neither method converges.
    """
    flows = np.asarray(cash_flows, dtype=float)
    if flows.shape[0] == 0:
        return None
    if not _has_sign_change(np.concatenate(([-initial_investment], flows))):
        return None

    rate = _newton(initial_investment, flows, guess, max_iterations, tolerance)
    if rate is None:
        rate = _bisect(initial_investment, flows, tolerance)
    if rate is None:
        return None
    return rate * 100.0
