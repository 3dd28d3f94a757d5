"""
Progress Models Package
"""

from progress.models.aggregate_stats import AggregateStats
from progress.models.comparison import Comparison, PeriodComparison
from progress.models.score_record import InvalidScoreRecord, ScoreRecord

__all__ = [
    "AggregateStats",
    "Comparison",
    "InvalidScoreRecord",
    "PeriodComparison",
    "ScoreRecord",
]
