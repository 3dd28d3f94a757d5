"""
Score History Interface

Abstract base class for append-only score history.
The analytics layer depends on this interface only.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from core.constants import ShotType
from progress.models.score_record import ScoreRecord


class HistoryError(Exception):
    """Score history could not be read or written"""


class ScoreHistoryInterface(ABC):
    """
    Abstract interface for score history implementations.

    Records are returned in the order they were appended, which is the
    order aggregates and trends are computed in.
    """

    @abstractmethod
    def initialize(self) -> None:
        """
        Prepare the history for use (create schema, open connections).

        Raises:
            HistoryError: If the history cannot be opened
        """

    @abstractmethod
    def append(self, record: ScoreRecord) -> None:
        """
        Append one record.

        Raises:
            HistoryError: If the record cannot be stored (including a
                duplicate id)
        """

    @abstractmethod
    def get(self, record_id: str) -> Optional[ScoreRecord]:
        """Get a record by id, or None"""

    @abstractmethod
    def list_records(
        self,
        user_id: Optional[str] = None,
        shot_type: Optional[ShotType] = None,
    ) -> List[ScoreRecord]:
        """
        List records in append order, optionally filtered.

        Raises:
            HistoryError: If the history cannot be read
        """

    @abstractmethod
    def count(self) -> int:
        """Total number of stored records"""

    @abstractmethod
    def cleanup(self) -> None:
        """Release resources"""
