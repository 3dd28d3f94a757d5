"""
Progress Module

Score history and progress analytics per user and shot type.

Architecture mirrors the media module:
- interfaces/: Abstract base classes (contracts) and errors
- implementations/: Concrete histories (SQLite and in-memory)
- controllers/: High-level analytics API
- managers/: Comparison logic
- models/: Data structures
- utils/: Trend math and export helpers
"""

from progress.controllers.progress_analytics import ProgressAnalytics
from progress.factory import HistoryFactory, create_history
from progress.interfaces.history_interface import HistoryError, ScoreHistoryInterface
from progress.managers.comparison_engine import ComparisonEngine
from progress.models.aggregate_stats import AggregateStats
from progress.models.comparison import Comparison, PeriodComparison
from progress.models.score_record import InvalidScoreRecord, ScoreRecord

# Public API - what users import
__all__ = [
    "AggregateStats",
    "Comparison",
    "ComparisonEngine",
    # Factory for creating histories
    "HistoryError",
    "HistoryFactory",
    "InvalidScoreRecord",
    "PeriodComparison",
    # Main controller (primary API)
    "ProgressAnalytics",
    "ScoreHistoryInterface",
    # Models
    "ScoreRecord",
    "create_history",
]
