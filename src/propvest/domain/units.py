# src/propvest/domain/units.py
"""
Currency amounts tagged with the period they are quoted in.

Property taxes and insurance are entered as yearly bills while every other
operating expense is a monthly figure. Keeping the two apart at the type level
makes the divide-by-12 explicit and greppable.
"""
from typing import NewType

AnnualAmount = NewType("AnnualAmount", float)
MonthlyAmount = NewType("MonthlyAmount", float)

MONTHS_PER_YEAR = 12


def to_monthly(amount: AnnualAmount) -> MonthlyAmount:
    return MonthlyAmount(amount / MONTHS_PER_YEAR)


def to_annual(amount: MonthlyAmount) -> AnnualAmount:
    return AnnualAmount(amount * MONTHS_PER_YEAR)
