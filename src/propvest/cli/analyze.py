# src/propvest/cli/analyze.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import pandas as pd
import typer

from propvest.adapters.config import config
from propvest.analysis.frames import projections_to_frame, summarize_projections
from propvest.analysis.payment import calculate_monthly_payment
from propvest.services.property_analysis import analyze_payload

app = typer.Typer(help="Rental property analysis: cash flow, ratios, NPV/IRR and a verdict.")


def _load_payload(path: Path) -> dict:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Could not read payload {path}: {e}") from e
    if not isinstance(payload, dict):
        raise ValueError("Payload must be a JSON object")
    return payload


def _fmt_ratio(value: Optional[float], suffix: str = "") -> str:
    return "n/a" if value is None else f"{value:,.2f}{suffix}"


@app.command("analyze")
def analyze_cmd(
    payload: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with property inputs"),
    years: Optional[int] = typer.Option(
        None,
        "--years",
        min=1,
        help=f"Annual projection horizon (default {config.PROJECTION_YEARS}; "
        f"{config.EXTENDED_PROJECTION_YEARS} for a long-range view)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the full results as JSON"),
) -> None:
    """
    Analyze one property and print the summary, verdict and projection tables.
    """
    try:
        results = analyze_payload(_load_payload(payload), projection_years=years)
    except ValueError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1) from e

    if as_json:
        typer.echo(results.model_dump_json(indent=2))
        return

    typer.echo(f"Recommendation: {results.recommendation} (score {results.recommendation_score:.0f}/100)")
    for reason in results.recommendation_reasons:
        typer.echo(f"  - {reason}")

    typer.echo("")
    typer.echo(f"Monthly payment:      ${results.monthly_payment:,.2f}")
    typer.echo(f"Monthly cash flow:    ${results.monthly_cash_flow:,.2f}")
    typer.echo(f"NOI (annual):         ${results.net_operating_income:,.2f}")
    typer.echo(f"Cap rate:             {results.cap_rate:.2f}%")
    typer.echo(f"Cash-on-cash return:  {results.cash_on_cash_return:.2f}%")
    typer.echo(f"DSCR:                 {_fmt_ratio(results.debt_service_coverage_ratio)}")
    typer.echo(f"Total cash invested:  ${results.total_cash_invested:,.2f}")
    typer.echo(f"NPV:                  ${results.npv:,.2f}")
    typer.echo(f"IRR:                  {_fmt_ratio(results.irr, '%')}")

    annual = projections_to_frame(results.annual_projections)
    summary = summarize_projections(annual)

    with pd.option_context("display.width", 200, "display.max_columns", None):
        typer.echo("\nFirst-year monthly projection")
        typer.echo(projections_to_frame(results.monthly_projections).to_string())
        typer.echo(f"\n{summary['years']}-year annual projection")
        typer.echo(annual.to_string())


@app.command("payment")
def payment_cmd(
    loan_amount: float = typer.Argument(..., help="Loan principal"),
    rate: float = typer.Option(7.5, help="Annual interest rate, percent"),
    term: int = typer.Option(30, min=1, help="Loan term in years"),
) -> None:
    """
    Monthly principal & interest for a fixed-rate loan.
    """
    typer.echo(f"{calculate_monthly_payment(loan_amount, rate, term):.2f}")


if __name__ == "__main__":
    app()
