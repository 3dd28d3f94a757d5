"""
SQLite Score History

Persists score records in a single SQLite table.
"""

import logging
import sqlite3
import threading
from pathlib import Path
from typing import List, Optional

from config.settings import HISTORY_DB_PATH
from core.constants import ShotType
from progress.interfaces.history_interface import HistoryError, ScoreHistoryInterface
from progress.models.comparison import Comparison
from progress.models.score_record import InvalidScoreRecord, ScoreRecord

COLUMNS = (
    "id",
    "user_id",
    "shot_type",
    "overall_score",
    "posture",
    "timing",
    "follow_through",
    "power",
    "created_at_epoch_ms",
    "previous_score",
    "improvement_percent",
    "trend",
)


class SqliteScoreHistory(ScoreHistoryInterface):
    """
    SQLite-backed score history.

    Thread Safety:
    - WRITE operations (append) are serialized with threading.Lock
    - READ operations run without the lock; SQLite handles read/write
      conflicts at database level
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize SQLite history.

        Args:
            db_path: Database file (None = HISTORY_DB_PATH from settings)
        """
        self.logger = logging.getLogger(__name__)
        self.db_path = Path(db_path) if db_path is not None else HISTORY_DB_PATH
        self._connection: Optional[sqlite3.Connection] = None
        self._write_lock = threading.Lock()

    # =========================================================================
    # SETUP
    # =========================================================================

    def initialize(self) -> None:
        """Create database and table if they don't exist"""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise HistoryError(f"Cannot create history directory: {e}") from e

        try:
            conn = self._get_connection()
            cursor = conn.cursor()

            # rowid keeps append order
            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS score_records (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    shot_type TEXT NOT NULL,
                    overall_score INTEGER NOT NULL,
                    posture INTEGER,
                    timing INTEGER,
                    follow_through INTEGER,
                    power INTEGER,
                    created_at_epoch_ms INTEGER NOT NULL,
                    previous_score INTEGER,
                    improvement_percent REAL,
                    trend TEXT
                )
            """,
            )

            cursor.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_user_shot
                ON score_records(user_id, shot_type)
            """,
            )

            conn.commit()
            self.logger.info(f"Score history initialized (db: {self.db_path})")

        except sqlite3.Error as e:
            raise HistoryError(f"Failed to initialize database: {e}") from e

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection (reuses existing or creates new)"""
        if self._connection is None:
            try:
                # Shared by the UI thread and background analysis callbacks
                self._connection = sqlite3.connect(
                    str(self.db_path),
                    check_same_thread=False,
                )
                self._connection.row_factory = sqlite3.Row
            except sqlite3.Error as e:
                raise HistoryError(f"Failed to connect to database: {e}") from e

        return self._connection

    # =========================================================================
    # WRITES
    # =========================================================================

    def append(self, record: ScoreRecord) -> None:
        """Insert one record"""
        comparison = record.comparison

        with self._write_lock:
            try:
                conn = self._get_connection()
                conn.execute(
                    f"""
                    INSERT INTO score_records ({", ".join(COLUMNS)})
                    VALUES ({", ".join("?" for _ in COLUMNS)})
                """,
                    (
                        record.id,
                        record.user_id,
                        record.shot_type.value,
                        record.overall_score,
                        record.posture,
                        record.timing,
                        record.follow_through,
                        record.power,
                        record.created_at_epoch_ms,
                        comparison.previous_score if comparison else None,
                        comparison.improvement_percent if comparison else None,
                        comparison.trend.value if comparison else None,
                    ),
                )
                conn.commit()

                self.logger.debug(f"Inserted score record: {record.id}")

            except sqlite3.IntegrityError as e:
                raise HistoryError(f"Score record already exists: {record.id}") from e
            except sqlite3.Error as e:
                raise HistoryError(f"Failed to insert score record: {e}") from e

    # =========================================================================
    # READS
    # =========================================================================

    def get(self, record_id: str) -> Optional[ScoreRecord]:
        """Get record by id"""
        try:
            cursor = self._get_connection().execute(
                "SELECT * FROM score_records WHERE id = ?", (record_id,),
            )
            row = cursor.fetchone()
        except sqlite3.Error as e:
            raise HistoryError(f"Failed to get score record: {e}") from e

        return self._row_to_record(row) if row else None

    def list_records(
        self,
        user_id: Optional[str] = None,
        shot_type: Optional[ShotType] = None,
    ) -> List[ScoreRecord]:
        """List records in append order"""
        query = "SELECT * FROM score_records"
        clauses = []
        params: list = []

        if user_id is not None:
            clauses.append("user_id = ?")
            params.append(user_id)
        if shot_type is not None:
            clauses.append("shot_type = ?")
            params.append(ShotType.parse(shot_type).value)

        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY rowid ASC"

        try:
            rows = self._get_connection().execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise HistoryError(f"Failed to list score records: {e}") from e

        return [self._row_to_record(row) for row in rows]

    def count(self) -> int:
        """Total number of stored records"""
        try:
            row = self._get_connection().execute(
                "SELECT COUNT(*) AS total FROM score_records",
            ).fetchone()
        except sqlite3.Error as e:
            raise HistoryError(f"Failed to count score records: {e}") from e
        return row["total"]

    def _row_to_record(self, row: sqlite3.Row) -> ScoreRecord:
        """Convert a database row to a ScoreRecord"""
        data = dict(row)

        try:
            comparison = None
            if data["previous_score"] is not None:
                comparison = Comparison.from_dict(data)

            return ScoreRecord(
                id=data["id"],
                user_id=data["user_id"],
                shot_type=data["shot_type"],
                overall_score=data["overall_score"],
                posture=data["posture"],
                timing=data["timing"],
                follow_through=data["follow_through"],
                power=data["power"],
                created_at_epoch_ms=data["created_at_epoch_ms"],
                comparison=comparison,
            )
        except (InvalidScoreRecord, KeyError, TypeError, ValueError) as e:
            raise HistoryError(f"Invalid score record {data['id']} in database: {e}") from e

    # =========================================================================
    # CLEANUP
    # =========================================================================

    def cleanup(self) -> None:
        """Close database connection"""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            self.logger.debug("Score history connection closed")
