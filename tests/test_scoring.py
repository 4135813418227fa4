import pytest

from propvest.analysis.scoring import score_recommendation


def test_strong_deal_is_buy_with_ordered_reasons():
    res = score_recommendation(roi=14.2, cap_rate=9.1, monthly_cash_flow=450.0, dscr=1.62, npv=12_500.0)

    assert res.recommendation == "BUY"
    assert res.score == 100
    assert res.reasons == [
        "Excellent ROI of 14.2%",
        "Strong monthly cash flow of $450.00",
        "Excellent cap rate of 9.1%",
        "Strong debt coverage ratio of 1.62",
        "Positive NPV of $12,500",
    ]


def test_middle_band_is_consider():
    # 30 + 20 + 15 + 0 + 0 = 65
    res = score_recommendation(roi=9.0, cap_rate=6.5, monthly_cash_flow=150.0, dscr=0.95, npv=-1_000.0)
    assert res.score == 65
    assert res.recommendation == "CONSIDER"
    assert res.reasons[3] == "Poor debt coverage ratio of 0.95"
    assert res.reasons[4] == "Negative NPV of $-1,000"


def test_bad_deal_fails_and_score_stays_in_range():
    res = score_recommendation(roi=-25.0, cap_rate=-3.0, monthly_cash_flow=-900.0, dscr=0.4, npv=-80_000.0)
    assert res.recommendation == "FAIL"
    assert res.score == 0
    assert res.reasons[0] == "Negative ROI of -25.0%"
    assert res.reasons[1] == "Negative cash flow of $-900.00"
    assert res.reasons[2] == "Poor cap rate of -3.0%"


@pytest.mark.parametrize(
    "roi, points",
    [(12.0, 40), (11.99, 30), (8.0, 30), (6.0, 20), (0.01, 10), (0.0, 0), (-1.0, 0)],
)
def test_roi_tier_boundaries(roi, points):
    base = score_recommendation(roi=-1.0, cap_rate=0.0, monthly_cash_flow=-100.0, dscr=0.5, npv=0.0)
    res = score_recommendation(roi=roi, cap_rate=0.0, monthly_cash_flow=-100.0, dscr=0.5, npv=0.0)
    assert res.score - base.score == points


@pytest.mark.parametrize(
    "cash_flow, points, prefix",
    [
        (200.0, 25, "Strong monthly cash flow"),
        (100.0, 20, "Good monthly cash flow"),
        (0.5, 15, "Positive cash flow"),
        (0.0, 5, "Near break-even cash flow"),
        (-50.0, 5, "Near break-even cash flow"),
        (-50.01, 0, "Negative cash flow"),
    ],
)
def test_cash_flow_tier_boundaries(cash_flow, points, prefix):
    res = score_recommendation(roi=0.0, cap_rate=0.0, monthly_cash_flow=cash_flow, dscr=0.5, npv=0.0)
    assert res.score == points
    assert res.reasons[1].startswith(prefix)


def test_no_debt_scores_as_zero_coverage():
    res = score_recommendation(roi=0.0, cap_rate=0.0, monthly_cash_flow=-100.0, dscr=None, npv=0.0)
    assert res.score == 0
    assert res.reasons[3] == "Poor debt coverage ratio of 0.00"


def test_all_cash_deal_without_debt_points_is_consider():
    # 30 + 25 + 20 + 0 + 0 = 75
    res = score_recommendation(roi=10.0, cap_rate=10.0, monthly_cash_flow=833.33, dscr=None, npv=-58_184.98)
    assert res.score == 75
    assert res.recommendation == "CONSIDER"
    assert res.reasons[3:] == ["Poor debt coverage ratio of 0.00", "Negative NPV of $-58,184.98"]


@pytest.mark.parametrize(
    "npv, text",
    [
        (12_500.0, "$12,500"),
        (1_234.5, "$1,234.5"),
        (-58_184.98, "$-58,184.98"),
        (0.25, "$0.25"),
        (999.0, "$999"),
    ],
)
def test_npv_reason_uses_locale_style_amounts(npv, text):
    res = score_recommendation(roi=0.0, cap_rate=0.0, monthly_cash_flow=0.0, dscr=1.0, npv=npv)
    assert res.reasons[4].endswith(text)


def test_cutoffs_can_be_overridden():
    kwargs = dict(roi=9.0, cap_rate=6.5, monthly_cash_flow=150.0, dscr=0.95, npv=-1_000.0)
    assert score_recommendation(**kwargs, buy_score=65).recommendation == "BUY"
    assert score_recommendation(**kwargs, consider_score=70).recommendation == "FAIL"


def test_nan_metrics_score_as_worst_case():
    res = score_recommendation(roi=float("nan"), cap_rate=5.0, monthly_cash_flow=0.0, dscr=1.1, npv=1.0)
    assert 0 <= res.score <= 100
    assert res.reasons[0].startswith("Negative ROI")
