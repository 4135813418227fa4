# src/propvest/analysis/frames.py
from __future__ import annotations

from typing import Sequence

import pandas as pd
from pydantic import BaseModel


def projections_to_frame(projections: Sequence[BaseModel]) -> pd.DataFrame:
    """
    Tabular view of a monthly or annual projection series for charts and reports.

    Indexed by `month` for monthly series and by `year` for annual ones.
    """
    if not projections:
        return pd.DataFrame()

    df = pd.DataFrame([p.model_dump() for p in projections])
    index_col = "month" if "month" in df.columns else "year"
    return df.set_index(index_col)


def summarize_projections(annual: pd.DataFrame) -> dict[str, float]:
    """Headline numbers at the end of the horizon."""
    if annual.empty:
        return {
            "years": 0,
            "total_cash_flow": 0.0,
            "final_property_value": 0.0,
            "final_equity": 0.0,
            "final_roi": 0.0,
        }
    last = annual.iloc[-1]
    return {
        "years": int(annual.shape[0]),
        "total_cash_flow": float(annual["cash_flow"].sum()),
        "final_property_value": float(last["property_value"]),
        "final_equity": float(last["equity"]),
        "final_roi": float(last["roi"]),
    }
