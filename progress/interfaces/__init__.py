"""
Progress Interfaces Package
"""

from progress.interfaces.history_interface import HistoryError, ScoreHistoryInterface

__all__ = [
    "HistoryError",
    "ScoreHistoryInterface",
]
