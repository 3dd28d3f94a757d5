"""
Aggregate Stats Model

Running statistics for one (user, shot type) pair.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, Optional

from config.settings import RECENT_SCORES_SIZE
from core.constants import ShotType


def _recent_ring() -> Deque[int]:
    return deque(maxlen=RECENT_SCORES_SIZE)


@dataclass
class AggregateStats:
    """
    Streaming aggregate over overall scores.

    The exact integer total is kept instead of a running float mean, so
    rebuilding from history always gives the same average.
    """

    user_id: str
    shot_type: ShotType
    count: int = 0
    total_score: int = 0
    best_score: Optional[int] = None
    recent_scores: Deque[int] = field(default_factory=_recent_ring)

    @property
    def average_score(self) -> float:
        """Mean overall score (0.0 when empty)"""
        if self.count == 0:
            return 0.0
        return self.total_score / self.count

    @property
    def is_empty(self) -> bool:
        """Check if no score has been added"""
        return self.count == 0

    def add(self, score: int) -> None:
        """Fold one overall score into the aggregate"""
        self.count += 1
        self.total_score += score
        self.best_score = score if self.best_score is None else max(self.best_score, score)
        self.recent_scores.append(score)

    def copy(self) -> "AggregateStats":
        """Detached copy (callers cannot mutate the live aggregate)"""
        ring = deque(self.recent_scores, maxlen=self.recent_scores.maxlen)
        return AggregateStats(
            user_id=self.user_id,
            shot_type=self.shot_type,
            count=self.count,
            total_score=self.total_score,
            best_score=self.best_score,
            recent_scores=ring,
        )

    @classmethod
    def from_scores(
        cls,
        user_id: str,
        shot_type: ShotType,
        scores: Iterable[int],
    ) -> "AggregateStats":
        """Build an aggregate by folding scores in order"""
        stats = cls(user_id=user_id, shot_type=shot_type)
        for score in scores:
            stats.add(score)
        return stats

    def matches(self, other: "AggregateStats") -> bool:
        """Check if two aggregates hold the same state"""
        return (
            self.user_id == other.user_id
            and self.shot_type == other.shot_type
            and self.count == other.count
            and self.total_score == other.total_score
            and self.best_score == other.best_score
            and list(self.recent_scores) == list(other.recent_scores)
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for display/export"""
        return {
            "user_id": self.user_id,
            "shot_type": self.shot_type.value,
            "display_name": self.shot_type.display_name,
            "count": self.count,
            "average_score": round(self.average_score, 2),
            "best_score": self.best_score,
            "recent_scores": list(self.recent_scores),
        }

    def __repr__(self) -> str:
        """Human-readable representation"""
        return (
            f"AggregateStats(user='{self.user_id}', "
            f"shot_type={self.shot_type.value}, "
            f"count={self.count}, avg={self.average_score:.2f})"
        )
