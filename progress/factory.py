"""
Score History Factory

Factory pattern for creating score history implementations.
"""

import logging
from pathlib import Path
from typing import Literal, Optional

from progress.implementations.memory_history import InMemoryScoreHistory
from progress.implementations.sqlite_history import SqliteScoreHistory
from progress.interfaces.history_interface import ScoreHistoryInterface

HistoryMode = Literal["auto", "sqlite", "memory"]


class HistoryFactory:
    """
    Factory for creating score history implementations.

    Usage:
        history = HistoryFactory.create_history()
        history = HistoryFactory.create_history(mode="memory")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_history(
        cls,
        mode: HistoryMode = "auto",
        db_path: Optional[Path] = None,
    ) -> ScoreHistoryInterface:
        """
        Create a score history instance (not yet initialized).

        Args:
            mode: "auto" (SQLite, falling back to memory), "sqlite", "memory"
            db_path: Database file (None = settings default)

        Raises:
            RuntimeError: If mode="sqlite" but the database cannot be opened
        """
        if mode == "memory":
            cls._logger.info("Creating In-Memory Score History (forced)")
            return InMemoryScoreHistory()

        history = SqliteScoreHistory(db_path)

        if mode == "sqlite":
            try:
                history.initialize()
            except Exception as e:
                raise RuntimeError(f"SQLite score history not available: {e}") from e
            cls._logger.info("Creating SQLite Score History (forced)")
            return history

        try:
            history.initialize()
            cls._logger.info("Creating SQLite Score History (auto-detected)")
            return history
        except Exception as e:
            cls._logger.warning(
                f"SQLite score history not available ({e}), using In-Memory Score History"
            )

        return InMemoryScoreHistory()


def create_history(
    force_memory: bool = False,
    db_path: Optional[Path] = None,
) -> ScoreHistoryInterface:
    """Quick history creation with simple in-memory override"""
    mode = "memory" if force_memory else "auto"
    return HistoryFactory.create_history(mode=mode, db_path=db_path)
