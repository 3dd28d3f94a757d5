"""
Trend Utils Tests

Tests for trend classification and score arithmetic, pinning the exact
+/-5 over three samples boundaries.

To run these tests:
    pytest tests/progress/utils/test_trend_utils.py -v
"""

import pytest

from core.constants import Trend
from progress.utils.trend_utils import (
    average_sub_scores,
    classify_percent_change,
    classify_trend,
    percent_change,
    score_description,
)


# =============================================================================
# TREND TESTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "scores,expected",
    [
        ([70, 72, 76], Trend.IMPROVING),
        ([70, 74, 76], Trend.IMPROVING),
        ([70, 73, 76], Trend.IMPROVING),
        ([70, 74, 75], Trend.STABLE),
        ([76, 72, 70], Trend.DECLINING),
        ([76, 74, 70], Trend.DECLINING),
        ([75, 74, 70], Trend.STABLE),
        ([80, 80, 80], Trend.STABLE),
    ],
)
def test_trend_boundaries(scores, expected):
    """
    Test the +/-5 threshold.

    A delta of exactly 5 is stable; 6 is movement.
    """
    assert classify_trend(scores) == expected


@pytest.mark.unit
@pytest.mark.parametrize("scores", [[], [90], [10, 90]])
def test_trend_needs_three_samples(scores):
    """
    Test that fewer than three samples is always stable.
    """
    assert classify_trend(scores) == Trend.STABLE


@pytest.mark.unit
def test_trend_uses_last_three_only():
    """
    Test that older samples in a five-score ring are ignored.

    [10, 90, 70, 74, 75]: last three deltas to +5, so stable.
    """
    assert classify_trend([10, 90, 70, 74, 75]) == Trend.STABLE
    assert classify_trend([90, 10, 70, 74, 76]) == Trend.IMPROVING


# =============================================================================
# PERCENT CHANGE TESTS
# =============================================================================


@pytest.mark.unit
def test_percent_change_rounding():
    """
    Test two-decimal rounding.
    """
    assert percent_change(80, 70) == 14.29
    assert percent_change(70, 80) == -12.5


@pytest.mark.unit
def test_percent_change_zero_previous():
    """
    Test that a zero baseline gives 0, not infinity.
    """
    assert percent_change(90, 0) == 0.0
    assert percent_change(0, 0) == 0.0


@pytest.mark.unit
@pytest.mark.parametrize(
    "improvement,expected",
    [(5.01, Trend.IMPROVING), (5.0, Trend.STABLE), (-5.0, Trend.STABLE), (-5.01, Trend.DECLINING)],
)
def test_classify_percent_change(improvement, expected):
    """
    Test the +/-5 % period rule.
    """
    assert classify_percent_change(improvement) == expected


# =============================================================================
# SUB-SCORE / DESCRIPTION TESTS
# =============================================================================


@pytest.mark.unit
def test_average_sub_scores_ignores_missing(make_record):
    """
    Test sub-score averages over sparse records.

    Should skip None values and report None where nothing was measured.
    """
    records = [
        make_record(70, posture=60, timing=80),
        make_record(75, posture=71),
        make_record(80),
    ]

    averages = average_sub_scores(records)

    assert averages == {
        "posture": 65.5,
        "timing": 80.0,
        "follow_through": None,
        "power": None,
    }


@pytest.mark.unit
@pytest.mark.parametrize(
    "score,label",
    [
        (100, "Excelente"),
        (90, "Excelente"),
        (89, "Muy bueno"),
        (80, "Muy bueno"),
        (70, "Bueno"),
        (60, "Regular"),
        (59, "Necesita mejora"),
        (0, "Necesita mejora"),
    ],
)
def test_score_description(score, label):
    """
    Test the score description bands.
    """
    assert score_description(score) == label
