"""
Progress Utilities Package
"""

from progress.utils.export_utils import records_to_csv, records_to_json, summary_to_json
from progress.utils.trend_utils import (
    average_sub_scores,
    classify_percent_change,
    classify_trend,
    percent_change,
    score_description,
)

__all__ = [
    "average_sub_scores",
    "classify_percent_change",
    "classify_trend",
    "percent_change",
    "records_to_csv",
    "records_to_json",
    "score_description",
    "summary_to_json",
]
