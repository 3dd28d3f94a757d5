"""
Comparison Models

Results of comparing a score with earlier scores of the same shot type.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from core.constants import Trend


@dataclass(frozen=True)
class Comparison:
    """
    Comparison attached to a ScoreRecord when it is created.

    improvement_percent is relative to previous_score, rounded to two
    decimals; it is 0.0 when previous_score is 0.
    """

    previous_score: int
    improvement_percent: float
    trend: Trend = Trend.STABLE

    def to_dict(self) -> dict:
        """Convert to dictionary for storage/export"""
        return {
            "previous_score": self.previous_score,
            "improvement_percent": self.improvement_percent,
            "trend": self.trend.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Comparison":
        """Create Comparison from dictionary (camelCase or snake_case)"""
        previous = data.get("previous_score", data.get("previousScore"))
        improvement = data.get(
            "improvement_percent",
            data.get("improvementPercent", data.get("improvement", 0.0)),
        )
        return cls(
            previous_score=int(previous),
            improvement_percent=float(improvement),
            trend=Trend(data.get("trend", Trend.STABLE.value)),
        )


@dataclass
class PeriodComparison:
    """
    Newest window of scores compared with the window before it.

    technical maps each sub-score name to {"current": avg, "previous": avg}
    (None where no record in the window carried that sub-score).
    """

    current_average: float
    previous_average: float
    improvement_percent: float
    trend: Trend
    current_count: int
    previous_count: int
    technical: Dict[str, Dict[str, Optional[float]]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for export"""
        return {
            "overall_score": {
                "current": round(self.current_average, 2),
                "previous": round(self.previous_average, 2),
                "improvement": self.improvement_percent,
                "trend": self.trend.value,
            },
            "technical_aspects": self.technical,
            "period": {
                "current": self.current_count,
                "previous": self.previous_count,
            },
        }
