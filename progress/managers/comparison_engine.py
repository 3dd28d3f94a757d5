"""
Comparison Engine

Compares a new score with the previous one of the same shot type, and
recent periods with the periods before them.
Single responsibility: Comparison math only.
"""

import logging
from typing import Optional, Sequence

from config.settings import (
    IMPROVEMENT_DECIMALS,
    PERIOD_COMPARISON_WINDOW,
    PERIOD_TREND_THRESHOLD_PERCENT,
    TREND_THRESHOLD,
    TREND_WINDOW,
)
from progress.models.comparison import Comparison, PeriodComparison
from progress.models.score_record import ScoreRecord
from progress.utils.trend_utils import (
    average_sub_scores,
    classify_percent_change,
    classify_trend,
    mean,
    percent_change,
)


class ComparisonEngine:
    """
    Builds Comparison and PeriodComparison values.

    Responsibilities:
    - Improvement percent against the previous score (0 when it is 0)
    - Trend over the trailing window of scores
    - Period-over-period comparison of averages and sub-scores
    """

    def __init__(
        self,
        trend_window: int = TREND_WINDOW,
        trend_threshold: float = TREND_THRESHOLD,
        decimals: int = IMPROVEMENT_DECIMALS,
    ):
        """
        Initialize comparison engine.

        Args:
            trend_window: Trailing scores used for the trend
            trend_threshold: Absolute delta that counts as movement
            decimals: Rounding for improvement percentages
        """
        if trend_window < 2:
            raise ValueError("trend_window must be at least 2")

        self.logger = logging.getLogger(__name__)
        self.trend_window = trend_window
        self.trend_threshold = trend_threshold
        self.decimals = decimals

    def compare(
        self,
        current: ScoreRecord,
        previous: Optional[ScoreRecord],
        history_scores: Optional[Sequence[int]] = None,
    ) -> Optional[Comparison]:
        """
        Compare a new record with the previous one.

        Args:
            current: Record being created
            previous: Latest earlier record for the same user and shot type
            history_scores: Earlier overall scores, oldest first, ending
                with previous (None = previous alone)

        Returns:
            Comparison, or None for the first record of its shot type

        Raises:
            ValueError: If previous belongs to another user or shot type
        """
        if previous is None:
            return None

        if previous.key != current.key:
            raise ValueError(
                f"Cannot compare {current.shot_type.value} record with "
                f"{previous.shot_type.value} record of another series"
            )

        if history_scores is None:
            history_scores = [previous.overall_score]

        improvement = percent_change(
            current.overall_score, previous.overall_score, self.decimals,
        )
        trend = classify_trend(
            list(history_scores) + [current.overall_score],
            window=self.trend_window,
            threshold=self.trend_threshold,
        )

        self.logger.debug(
            f"Compared {current.shot_type.value}: "
            f"{previous.overall_score} -> {current.overall_score} "
            f"({improvement:+.2f}%, {trend.value})"
        )

        return Comparison(
            previous_score=previous.overall_score,
            improvement_percent=improvement,
            trend=trend,
        )

    def compare_periods(
        self,
        records: Sequence[ScoreRecord],
        window: int = PERIOD_COMPARISON_WINDOW,
        threshold_percent: float = PERIOD_TREND_THRESHOLD_PERCENT,
    ) -> Optional[PeriodComparison]:
        """
        Compare the newest `window` records with the `window` before them.

        Args:
            records: Records, oldest first
            window: Records per period
            threshold_percent: Relative change that counts as movement

        Returns:
            PeriodComparison, or None when there is no earlier period
        """
        if window < 1:
            raise ValueError("window must be at least 1")

        if len(records) <= window:
            return None

        current_period = list(records[-window:])
        previous_period = list(records[-2 * window:-window])

        current_avg = mean(r.overall_score for r in current_period)
        previous_avg = mean(r.overall_score for r in previous_period)

        improvement = percent_change(current_avg, previous_avg, self.decimals)

        current_tech = average_sub_scores(current_period)
        previous_tech = average_sub_scores(previous_period)
        technical = {
            name: {"current": current_tech[name], "previous": previous_tech[name]}
            for name in current_tech
        }

        return PeriodComparison(
            current_average=current_avg,
            previous_average=previous_avg,
            improvement_percent=improvement,
            trend=classify_percent_change(improvement, threshold_percent),
            current_count=len(current_period),
            previous_count=len(previous_period),
            technical=technical,
        )
