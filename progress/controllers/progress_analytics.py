"""
Progress Analytics

Maintains per-user, per-shot-type aggregates over score history and
answers the questions the progress screens ask: summary, trend,
comparison and exports.
"""

import logging
import threading
import time
from collections import deque
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple, Union

from config.settings import PERIOD_COMPARISON_WINDOW, RECENT_SCORES_SIZE
from core.constants import ShotType, Trend
from progress.factory import create_history
from progress.interfaces.history_interface import ScoreHistoryInterface
from progress.managers.comparison_engine import ComparisonEngine
from progress.models.aggregate_stats import AggregateStats
from progress.models.comparison import PeriodComparison
from progress.models.score_record import ScoreRecord
from progress.utils.export_utils import records_to_csv, records_to_json, summary_to_json
from progress.utils.trend_utils import average_sub_scores, classify_trend

SeriesKey = Tuple[str, ShotType]


class ProgressAnalytics:
    """
    Score analytics over an append-only history.

    This class:
    - Attaches a comparison to each new record before it is stored
    - Keeps streaming aggregates (count, mean, best, recent ring)
    - Rebuilds aggregates from history on start and on demand

    Aggregates only change after the history append succeeds, so they
    always equal a fold over the stored records.

    Usage:
        analytics = ProgressAnalytics(history)
        record = analytics.record({"userId": "u1", "shotType": "derecha",
                                   "overallScore": 78})
        print(analytics.summary_for_user("u1"))
    """

    def __init__(
        self,
        history: Optional[ScoreHistoryInterface] = None,
        comparison_engine: Optional[ComparisonEngine] = None,
        recent_size: int = RECENT_SCORES_SIZE,
    ):
        """
        Initialize analytics.

        Args:
            history: Score history (None = create default, initialized)
            comparison_engine: ComparisonEngine (None = default settings)
            recent_size: Length of the recent-scores ring
        """
        self.logger = logging.getLogger(__name__)

        if history is None:
            history = create_history()
        self.score_history = history
        self.score_history.initialize()

        self.comparison_engine = comparison_engine or ComparisonEngine()
        self.recent_size = recent_size

        self._lock = threading.Lock()
        self._aggregates: Dict[SeriesKey, AggregateStats] = {}
        self._latest: Dict[SeriesKey, ScoreRecord] = {}

        count = self.recompute()
        self.logger.info(f"Progress analytics initialized ({count} records)")

    # =========================================================================
    # RECORDING
    # =========================================================================

    def record(self, score_record: Union[ScoreRecord, dict]) -> ScoreRecord:
        """
        Store a new score and fold it into the aggregates.

        Args:
            score_record: ScoreRecord, or a producer payload dict

        Returns:
            The stored record, with its comparison attached when an
            earlier record of the same shot type exists

        Raises:
            InvalidScoreRecord: If the payload fails validation
            HistoryError: If the history append fails (aggregates unchanged)
        """
        if isinstance(score_record, dict):
            score_record = ScoreRecord.from_dict(score_record)

        if score_record.comparison is not None:
            # Comparisons are only ever computed here, against stored history
            self.logger.debug(f"Discarding supplied comparison on record {score_record.id}")
            score_record = replace(score_record, comparison=None)

        key = score_record.key

        with self._lock:
            aggregate = self._aggregates.get(key)

            comparison = self.comparison_engine.compare(
                score_record,
                self._latest.get(key),
                list(aggregate.recent_scores) if aggregate else None,
            )
            if comparison is not None:
                score_record = score_record.with_comparison(comparison)

            self.score_history.append(score_record)

            if aggregate is None:
                aggregate = self._new_aggregate(key)
                self._aggregates[key] = aggregate
            aggregate.add(score_record.overall_score)
            self._latest[key] = score_record

        comparison = score_record.comparison
        self.logger.info(
            f"Recorded {score_record.shot_type.value} score {score_record.overall_score} "
            f"for {score_record.user_id}"
            + (
                f" ({comparison.improvement_percent:+.2f}%, {comparison.trend.value})"
                if comparison else ""
            )
        )
        return score_record

    # =========================================================================
    # QUERIES
    # =========================================================================

    @staticmethod
    def trend(recent_scores: Sequence[int]) -> Trend:
        """Classify the trend of recent scores (oldest first)"""
        return classify_trend(recent_scores)

    def aggregate(self, user_id: str, shot_type: ShotType) -> Optional[AggregateStats]:
        """Aggregate for one series, or None if it has no records"""
        key = (user_id, ShotType.parse(shot_type))
        with self._lock:
            aggregate = self._aggregates.get(key)
            return aggregate.copy() if aggregate else None

    def summary_for_user(self, user_id: str) -> List[AggregateStats]:
        """
        Per-shot-type aggregates for a user.

        Returns:
            AggregateStats list sorted by shot type (empty for unknown user)
        """
        with self._lock:
            summary = [
                aggregate.copy() for (owner, _), aggregate in self._aggregates.items()
                if owner == user_id
            ]
        summary.sort(key=lambda stats: stats.shot_type.value)
        return summary

    def trend_for(self, user_id: str, shot_type: ShotType) -> Trend:
        """Trend of one series (stable until it has three records)"""
        aggregate = self.aggregate(user_id, shot_type)
        if aggregate is None:
            return Trend.STABLE
        return self.trend(aggregate.recent_scores)

    def overall_trend(self, user_id: str) -> Trend:
        """Trend over all of a user's scores, every shot type together"""
        scores = [r.overall_score for r in self.score_history.list_records(user_id)]
        return self.trend(scores)

    def history(
        self,
        user_id: str,
        shot_type: Optional[ShotType] = None,
    ) -> List[ScoreRecord]:
        """A user's records in recording order"""
        return self.score_history.list_records(user_id, shot_type)

    def technical_averages(
        self,
        user_id: str,
        shot_type: Optional[ShotType] = None,
    ) -> Dict[str, Optional[float]]:
        """Mean of each sub-score over a user's records"""
        return average_sub_scores(self.history(user_id, shot_type))

    def compare_periods(
        self,
        user_id: str,
        shot_type: Optional[ShotType] = None,
        window: int = PERIOD_COMPARISON_WINDOW,
    ) -> Optional[PeriodComparison]:
        """
        Compare a user's newest `window` records with the ones before.

        Returns:
            PeriodComparison, or None without enough records
        """
        records = self.history(user_id, shot_type)
        return self.comparison_engine.compare_periods(records, window)

    # =========================================================================
    # RECOVERY
    # =========================================================================

    def recompute(self) -> int:
        """
        Rebuild every aggregate from history.

        Returns:
            Number of records folded
        """
        aggregates, latest, count = self._rebuild()
        with self._lock:
            self._aggregates = aggregates
            self._latest = latest
        self.logger.debug(f"Aggregates rebuilt from {count} records")
        return count

    def verify_consistency(self) -> bool:
        """
        Check that live aggregates equal a rebuild from history.

        Returns:
            True if they match
        """
        rebuilt, _, _ = self._rebuild()

        with self._lock:
            live = dict(self._aggregates)

        consistent = live.keys() == rebuilt.keys() and all(
            live[key].matches(rebuilt[key]) for key in live
        )
        if not consistent:
            self.logger.warning("Aggregates diverge from score history")
        return consistent

    def _rebuild(self) -> Tuple[Dict[SeriesKey, AggregateStats], Dict[SeriesKey, ScoreRecord], int]:
        """Fold history into fresh aggregates"""
        aggregates: Dict[SeriesKey, AggregateStats] = {}
        latest: Dict[SeriesKey, ScoreRecord] = {}

        records = self.score_history.list_records()
        for record in records:
            aggregate = aggregates.get(record.key)
            if aggregate is None:
                aggregate = self._new_aggregate(record.key)
                aggregates[record.key] = aggregate
            aggregate.add(record.overall_score)
            latest[record.key] = record

        return aggregates, latest, len(records)

    def _new_aggregate(self, key: SeriesKey) -> AggregateStats:
        user_id, shot_type = key
        stats = AggregateStats(user_id=user_id, shot_type=shot_type)
        stats.recent_scores = deque(maxlen=self.recent_size)
        return stats

    # =========================================================================
    # EXPORT
    # =========================================================================

    def export_csv(self, user_id: str) -> str:
        """A user's records as CSV"""
        return records_to_csv(self.history(user_id))

    def export_json(self, user_id: str) -> str:
        """A user's records as a JSON document"""
        return records_to_json(user_id, self.history(user_id), self._now_ms())

    def export_summary_json(self, user_id: str) -> str:
        """A user's per-shot-type summary as JSON"""
        return summary_to_json(user_id, self.summary_for_user(user_id), self._now_ms())

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000)

    # =========================================================================
    # CLEANUP
    # =========================================================================

    def cleanup(self) -> None:
        """Release history resources"""
        self.logger.info("Cleaning up progress analytics")
        self.score_history.cleanup()
