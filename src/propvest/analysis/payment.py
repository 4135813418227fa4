# src/propvest/analysis/payment.py
from __future__ import annotations

import numpy as np

from propvest.domain.units import MONTHS_PER_YEAR


def _monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100.0 / MONTHS_PER_YEAR


def calculate_monthly_payment(
    loan_amount: float,
    annual_rate_percent: float,
    term_years: float,
) -> float:
    """
    Standard fixed-rate amortization formula:
    M = P * [ r(1+r)^n / ((1+r)^n - 1) ]
    P = loan principal
    r = monthly interest rate (annual percent / 100 / 12)
    n = number of payments (months)

    Full precision is returned; round to cents only where the figure is reported.
    """
    if loan_amount <= 0 or term_years <= 0 or annual_rate_percent < 0:
        return 0.0

    n = term_years * MONTHS_PER_YEAR

    # 0% loans amortize straight-line
    if annual_rate_percent == 0:
        return loan_amount / n

    r = _monthly_rate(annual_rate_percent)
    try:
        growth = (1 + r) ** n
    except OverflowError:
        # limit of the formula as n grows: interest-only
        return loan_amount * r
    if growth == 1:
        # rate too small to register in float precision
        return loan_amount / n
    return loan_amount * (r * growth) / (growth - 1)


def calculate_pmi_payment(loan_amount: float, pmi_rate_percent: float) -> float:
    """Monthly private mortgage insurance, quoted as an annual percent of the loan."""
    if loan_amount <= 0 or pmi_rate_percent <= 0:
        return 0.0
    return loan_amount * (pmi_rate_percent / 100.0) / MONTHS_PER_YEAR


def remaining_balance(
    loan_amount: float,
    annual_rate_percent: float,
    term_years: float,
    months_paid,
):
    """
    Outstanding principal after `months_paid` scheduled payments.

    Closed form of the amortization schedule:
    B_k = P * ((1+r)^n - (1+r)^k) / ((1+r)^n - 1)

    `months_paid` may be a scalar or an array; the result has the same shape.
    The balance is 0 once the term is over.
    """
    k = np.clip(np.asarray(months_paid, dtype=float), 0.0, None)

    if loan_amount <= 0:
        balance = np.zeros_like(k)
    elif calculate_monthly_payment(loan_amount, annual_rate_percent, term_years) <= 0:
        # no scheduled payments => nothing amortizes
        balance = np.full_like(k, loan_amount)
    else:
        n = term_years * MONTHS_PER_YEAR
        r = _monthly_rate(annual_rate_percent)
        with np.errstate(over="ignore"):
            growth_n = np.power(1 + r, n)
        if annual_rate_percent == 0 or growth_n == 1:
            balance = loan_amount * (n - k) / n
        else:
            with np.errstate(over="ignore", invalid="ignore"):
                growth_k = np.power(1 + r, k)
                balance = loan_amount * (growth_n - growth_k) / (growth_n - 1)
            balance = np.where(np.isfinite(balance), balance, loan_amount)
        balance = np.where(k >= n, 0.0, balance)
        balance = np.clip(balance, 0.0, loan_amount)

    if balance.ndim == 0:
        return float(balance)
    return balance


def principal_paid(
    loan_amount: float,
    annual_rate_percent: float,
    term_years: float,
    months_paid,
):
    """Cumulative principal retired after `months_paid` payments."""
    balance = remaining_balance(loan_amount, annual_rate_percent, term_years, months_paid)
    return max(loan_amount, 0.0) - balance
