# src/propvest/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # Income / market defaults
    VACANCY_RATE: float = Field(default=0.05)
    WEEKS_PER_MONTH: float = Field(default=4.0)
    APPRECIATION_RATE: float = Field(default=0.03)
    RENT_GROWTH_RATE: float = Field(default=0.025)
    EXPENSE_GROWTH_RATE: float = Field(default=0.025)

    # Valuation
    DISCOUNT_RATE: float = Field(default=0.08)
    INCLUDE_TERMINAL_VALUE: bool = Field(default=False)
    IRR_MAX_ITERATIONS: int = Field(default=100)
    IRR_TOLERANCE: float = Field(default=1e-4)

    # Projection horizons (years)
    PROJECTION_YEARS: int = Field(default=5)
    EXTENDED_PROJECTION_YEARS: int = Field(default=30)

    # -----------------------------
    # Recommendation cutoffs (score points, 0-100)
    # -----------------------------
    BUY_SCORE: float = Field(default=80.0)
    CONSIDER_SCORE: float = Field(default=60.0)

    model_config = SettingsConfigDict(
        env_prefix="PROPVEST_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "VACANCY_RATE",
        "APPRECIATION_RATE",
        "RENT_GROWTH_RATE",
        "EXPENSE_GROWTH_RATE",
        "DISCOUNT_RATE",
        mode="before",
    )
    @classmethod
    def _to_fraction(cls, v: Any) -> Any:
        if v is None:
            return v
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("rate must be numeric or percent-like") from err
        if f > 1.0:
            f = f / 100.0
        return f

    @field_validator("VACANCY_RATE")
    @classmethod
    def _vacancy_in_range(cls, v: float) -> float:
        if not (0.0 <= v <= 1.0):
            raise ValueError("VACANCY_RATE must be between 0 and 1")
        return v

    @field_validator("PROJECTION_YEARS", "EXTENDED_PROJECTION_YEARS", "IRR_MAX_ITERATIONS")
    @classmethod
    def _positive_int(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @field_validator("BUY_SCORE", "CONSIDER_SCORE")
    @classmethod
    def _cutoff_range(cls, v: float) -> float:
        if not (0.0 <= v <= 100.0):
            raise ValueError("score cutoffs must be within 0-100")
        return v


config = AppConfig()
