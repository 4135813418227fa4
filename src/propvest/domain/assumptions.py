# src/propvest/domain/assumptions.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from propvest.adapters.config import AppConfig, config


class ProjectionAssumptions(BaseModel):
    """Market assumptions the projection engine compounds over the horizon."""

    model_config = ConfigDict(frozen=True)

    appreciation_rate: float = 0.03
    rent_growth_rate: float = 0.025
    expense_growth_rate: float = 0.025
    discount_rate: float = 0.08
    projection_years: int = Field(default=5, ge=1)
    weeks_per_month: float = 4.0
    include_terminal_value: bool = False
    irr_max_iterations: int = Field(default=100, ge=1)
    irr_tolerance: float = 1e-4

    @classmethod
    def from_config(cls, cfg: AppConfig | None = None) -> ProjectionAssumptions:
        cfg = cfg or config
        return cls(
            appreciation_rate=cfg.APPRECIATION_RATE,
            rent_growth_rate=cfg.RENT_GROWTH_RATE,
            expense_growth_rate=cfg.EXPENSE_GROWTH_RATE,
            discount_rate=cfg.DISCOUNT_RATE,
            projection_years=cfg.PROJECTION_YEARS,
            weeks_per_month=cfg.WEEKS_PER_MONTH,
            include_terminal_value=cfg.INCLUDE_TERMINAL_VALUE,
            irr_max_iterations=cfg.IRR_MAX_ITERATIONS,
            irr_tolerance=cfg.IRR_TOLERANCE,
        )
