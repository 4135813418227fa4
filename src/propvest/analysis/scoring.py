# src/propvest/analysis/scoring.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable

from propvest.adapters.config import config
from propvest.domain.results import Recommendation

# =====================================================================
# Rule tables
#
# Each rule walks its tiers top-down and takes the first one whose floor
# the metric clears. Weights: ROI 40, cash flow 25, cap rate 20,
# DSCR 10, NPV 5 => 100 max.
# =====================================================================


@dataclass(frozen=True)
class Tier:
    floor: float
    points: int
    template: str
    strict: bool = False  # metric must be > floor rather than >=

    def matches(self, value: float) -> bool:
        return value > self.floor if self.strict else value >= self.floor


@dataclass(frozen=True)
class Rule:
    name: str
    tiers: tuple[Tier, ...]
    fmt: Callable[[float], str]

    def evaluate(self, value: float) -> tuple[int, str]:
        for tier in self.tiers:
            if tier.matches(value):
                return tier.points, tier.template.format(self.fmt(value))
        last = self.tiers[-1]
        return 0, last.template.format(self.fmt(value))


def _pct(v: float) -> str:
    return f"{v:.1f}%"


def _dollars(v: float) -> str:
    return f"${v:.2f}"


def _ratio(v: float) -> str:
    return f"{v:.2f}"


def _money(v: float) -> str:
    # en-US grouping, at most three decimals, trailing zeros dropped: $12,500 or $-1,234.5
    text = f"{v:,.3f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"${text}"


_FLOOR = -math.inf

ROI_RULE = Rule(
    name="roi",
    fmt=_pct,
    tiers=(
        Tier(12.0, 40, "Excellent ROI of {}"),
        Tier(8.0, 30, "Good ROI of {}"),
        Tier(6.0, 20, "Moderate ROI of {}"),
        Tier(0.0, 10, "Low ROI of {}", strict=True),
        Tier(_FLOOR, 0, "Negative ROI of {}"),
    ),
)

CASH_FLOW_RULE = Rule(
    name="cash_flow",
    fmt=_dollars,
    tiers=(
        Tier(200.0, 25, "Strong monthly cash flow of {}"),
        Tier(100.0, 20, "Good monthly cash flow of {}"),
        Tier(0.0, 15, "Positive cash flow of {}", strict=True),
        Tier(-50.0, 5, "Near break-even cash flow of {}"),
        Tier(_FLOOR, 0, "Negative cash flow of {}"),
    ),
)

CAP_RATE_RULE = Rule(
    name="cap_rate",
    fmt=_pct,
    tiers=(
        Tier(8.0, 20, "Excellent cap rate of {}"),
        Tier(6.0, 15, "Good cap rate of {}"),
        Tier(4.0, 10, "Moderate cap rate of {}"),
        Tier(0.0, 5, "Low cap rate of {}", strict=True),
        Tier(_FLOOR, 0, "Poor cap rate of {}"),
    ),
)

DSCR_RULE = Rule(
    name="dscr",
    fmt=_ratio,
    tiers=(
        Tier(1.5, 10, "Strong debt coverage ratio of {}"),
        Tier(1.25, 8, "Good debt coverage ratio of {}"),
        Tier(1.0, 5, "Adequate debt coverage ratio of {}"),
        Tier(_FLOOR, 0, "Poor debt coverage ratio of {}"),
    ),
)

NPV_RULE = Rule(
    name="npv",
    fmt=_money,
    tiers=(
        Tier(0.0, 5, "Positive NPV of {}", strict=True),
        Tier(_FLOOR, 0, "Negative NPV of {}"),
    ),
)


@dataclass
class RecommendationResult:
    recommendation: Recommendation
    score: int
    reasons: list[str] = field(default_factory=list)


def _label_from_score(score: float, buy_score: float, consider_score: float) -> Recommendation:
    if score >= buy_score:
        return "BUY"
    if score >= consider_score:
        return "CONSIDER"
    return "FAIL"


def _finite(value: float) -> float:
    # NaN compares False against every floor; treat it as the worst case.
    if value is None or math.isnan(value):
        return _FLOOR
    return value


def score_recommendation(
    roi: float,
    cap_rate: float,
    monthly_cash_flow: float,
    dscr: float | None,
    npv: float,
    *,
    buy_score: float | None = None,
    consider_score: float | None = None,
) -> RecommendationResult:
    """
    Weighted-rule verdict over the headline ratios.

    Rules run in a fixed order (ROI, cash flow, cap rate, DSCR, NPV) and the
    reasons list follows that order. dscr=None (no debt) scores as 0.00.
    """
    buy_score = config.BUY_SCORE if buy_score is None else buy_score
    consider_score = config.CONSIDER_SCORE if consider_score is None else consider_score

    score = 0
    reasons: list[str] = []

    for rule, value in (
        (ROI_RULE, roi),
        (CASH_FLOW_RULE, monthly_cash_flow),
        (CAP_RATE_RULE, cap_rate),
    ):
        points, reason = rule.evaluate(_finite(value))
        score += points
        reasons.append(reason)

    # no debt service scores as a zero ratio
    points, reason = DSCR_RULE.evaluate(0.0 if dscr is None else _finite(dscr))
    score += points
    reasons.append(reason)

    points, reason = NPV_RULE.evaluate(_finite(npv))
    score += points
    reasons.append(reason)

    score = max(min(score, 100), 0)

    return RecommendationResult(
        recommendation=_label_from_score(score, buy_score, consider_score),
        score=score,
        reasons=reasons,
    )
