"""
In-Memory Score History

Score history kept in a list, for tests and for sessions without a
database.
"""

import logging
import threading
from typing import Dict, List, Optional

from core.constants import ShotType
from progress.interfaces.history_interface import HistoryError, ScoreHistoryInterface
from progress.models.score_record import ScoreRecord


class InMemoryScoreHistory(ScoreHistoryInterface):
    """
    In-memory score history.

    Features:
    - Same ordering and duplicate-id rules as the SQLite history
    - Fault injection for append failures
    - Operation log for assertions
    """

    def __init__(self):
        """Initialize in-memory history"""
        self.logger = logging.getLogger(__name__)

        self._records: List[ScoreRecord] = []
        self._ids: Dict[str, ScoreRecord] = {}
        self._lock = threading.Lock()

        self._fail_appends = False
        self._operation_log: List[str] = []

    def initialize(self) -> None:
        """Nothing to prepare"""
        self._log_operation("initialize")
        self.logger.info("[MEMORY] Score history initialized")

    def append(self, record: ScoreRecord) -> None:
        """Append one record"""
        with self._lock:
            if self._fail_appends:
                self._log_operation(f"append_failed:{record.id}")
                raise HistoryError("[MEMORY] Simulated append failure")

            if record.id in self._ids:
                raise HistoryError(f"Score record already exists: {record.id}")

            self._records.append(record)
            self._ids[record.id] = record
            self._log_operation(f"append:{record.id}")

        self.logger.debug(f"[MEMORY] Appended score record: {record.id}")

    def get(self, record_id: str) -> Optional[ScoreRecord]:
        """Get record by id"""
        return self._ids.get(record_id)

    def list_records(
        self,
        user_id: Optional[str] = None,
        shot_type: Optional[ShotType] = None,
    ) -> List[ScoreRecord]:
        """List records in append order"""
        if shot_type is not None:
            shot_type = ShotType.parse(shot_type)

        with self._lock:
            return [
                record for record in self._records
                if (user_id is None or record.user_id == user_id)
                and (shot_type is None or record.shot_type == shot_type)
            ]

    def count(self) -> int:
        """Total number of stored records"""
        return len(self._records)

    def cleanup(self) -> None:
        """Nothing to release"""
        self._log_operation("cleanup")

    # =========================================================================
    # TEST HELPERS
    # =========================================================================

    def fail_appends(self, enabled: bool = True) -> None:
        """Make subsequent appends raise HistoryError"""
        self._fail_appends = enabled

    def get_operation_log(self) -> List[str]:
        """Get list of operations performed"""
        return self._operation_log.copy()

    def reset(self) -> None:
        """Drop all records and fault settings"""
        with self._lock:
            self._records.clear()
            self._ids.clear()
            self._fail_appends = False
            self._operation_log.clear()

    def _log_operation(self, operation: str) -> None:
        self._operation_log.append(operation)
