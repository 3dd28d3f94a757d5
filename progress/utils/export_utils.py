"""
Export Utilities

Render score history and summaries as CSV or JSON for sharing.
"""

import csv
import io
import json
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from progress.models.aggregate_stats import AggregateStats
from progress.models.score_record import ScoreRecord

CSV_HEADER = [
    "Date",
    "Shot Type",
    "Overall Score",
    "Posture",
    "Timing",
    "Follow Through",
    "Power",
]
MISSING_VALUE = "N/A"


def epoch_ms_to_iso(epoch_ms: int) -> str:
    """Format epoch milliseconds as an ISO-8601 UTC timestamp"""
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _cell(value: Optional[int]) -> str:
    return MISSING_VALUE if value is None else str(value)


def records_to_csv(records: Iterable[ScoreRecord]) -> str:
    """
    Render records as CSV, one row per record.

    Missing sub-scores are written as N/A.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for record in records:
        writer.writerow([
            epoch_ms_to_iso(record.created_at_epoch_ms),
            record.shot_type.value,
            record.overall_score,
            _cell(record.posture),
            _cell(record.timing),
            _cell(record.follow_through),
            _cell(record.power),
        ])

    return buffer.getvalue()


def records_to_json(
    user_id: str,
    records: List[ScoreRecord],
    exported_at_ms: int,
) -> str:
    """Render a user's records as a JSON export document"""
    document = {
        "user_id": user_id,
        "exported_at": epoch_ms_to_iso(exported_at_ms),
        "total_records": len(records),
        "records": [record.to_dict() for record in records],
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def summary_to_json(
    user_id: str,
    summary: List[AggregateStats],
    exported_at_ms: int,
) -> str:
    """Render a user's per-shot-type summary as JSON"""
    document = {
        "user_id": user_id,
        "exported_at": epoch_ms_to_iso(exported_at_ms),
        "shot_types": [stats.to_dict() for stats in summary],
    }
    return json.dumps(document, indent=2, ensure_ascii=False)
