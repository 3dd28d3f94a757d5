"""
Trend Utilities

Pure helpers for trend classification and score arithmetic.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from config.settings import (
    IMPROVEMENT_DECIMALS,
    PERIOD_TREND_THRESHOLD_PERCENT,
    TREND_THRESHOLD,
    TREND_WINDOW,
)
from core.constants import Trend
from progress.models.score_record import SUB_SCORE_FIELDS

# Lower bound of each band, highest first
SCORE_DESCRIPTIONS = (
    (90, "Excelente"),
    (80, "Muy bueno"),
    (70, "Bueno"),
    (60, "Regular"),
)
LOWEST_SCORE_DESCRIPTION = "Necesita mejora"


def classify_trend(
    scores: Sequence[int],
    window: int = TREND_WINDOW,
    threshold: float = TREND_THRESHOLD,
) -> Trend:
    """
    Classify the direction of the newest scores.

    Only the last `window` scores count. The delta between the newest
    and the oldest of them decides: above +threshold is improving, below
    -threshold is declining, anything else (including exactly +/-threshold)
    is stable. Fewer than `window` scores is stable.

    Args:
        scores: Overall scores, oldest first
        window: Number of trailing scores to consider
        threshold: Absolute score delta that counts as movement

    Returns:
        Trend
    """
    recent = list(scores)[-window:]
    if len(recent) < window:
        return Trend.STABLE

    delta = recent[-1] - recent[0]
    if delta > threshold:
        return Trend.IMPROVING
    if delta < -threshold:
        return Trend.DECLINING
    return Trend.STABLE


def classify_percent_change(
    improvement_percent: float,
    threshold_percent: float = PERIOD_TREND_THRESHOLD_PERCENT,
) -> Trend:
    """Classify a relative change between two periods"""
    if improvement_percent > threshold_percent:
        return Trend.IMPROVING
    if improvement_percent < -threshold_percent:
        return Trend.DECLINING
    return Trend.STABLE


def percent_change(
    current: float,
    previous: float,
    decimals: int = IMPROVEMENT_DECIMALS,
) -> float:
    """
    Relative change from previous to current, in percent.

    Returns 0.0 when previous is 0 (no baseline to compare against).
    """
    if previous == 0:
        return 0.0
    return round((current - previous) / previous * 100, decimals)


def mean(values: Iterable[Optional[float]]) -> Optional[float]:
    """Mean of the non-None values, or None if there are none"""
    present: List[float] = [v for v in values if v is not None]
    if not present:
        return None
    return sum(present) / len(present)


def average_sub_scores(records: Iterable) -> Dict[str, Optional[float]]:
    """
    Per sub-score mean over records, ignoring records without that score.

    Args:
        records: ScoreRecord objects

    Returns:
        {"posture": 72.5, "timing": None, ...} rounded to two decimals
    """
    columns: Dict[str, List[Optional[int]]] = {name: [] for name, _ in SUB_SCORE_FIELDS}
    for record in records:
        for name, value in record.sub_scores.items():
            columns[name].append(value)

    averages = {}
    for name, values in columns.items():
        value = mean(values)
        averages[name] = round(value, 2) if value is not None else None
    return averages


def score_description(score: float) -> str:
    """Human label for an overall score"""
    for lower_bound, label in SCORE_DESCRIPTIONS:
        if score >= lower_bound:
            return label
    return LOWEST_SCORE_DESCRIPTION
