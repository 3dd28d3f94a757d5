"""
Progress Implementations Package
"""

from progress.implementations.memory_history import InMemoryScoreHistory
from progress.implementations.sqlite_history import SqliteScoreHistory

__all__ = [
    "InMemoryScoreHistory",
    "SqliteScoreHistory",
]
