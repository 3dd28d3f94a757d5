"""
Score Record Model

One completed analysis result for one shot type, owned by one user.
"""

import math
import time
from dataclasses import dataclass, field, replace
from numbers import Real
from typing import Any, Dict, Optional
from uuid import uuid4

from config.settings import SCORE_MAX, SCORE_MIN
from core.constants import ShotType
from progress.models.comparison import Comparison

# (attribute, camelCase key used by analysis producers)
SUB_SCORE_FIELDS = (
    ("posture", "posture"),
    ("timing", "timing"),
    ("follow_through", "followThrough"),
    ("power", "power"),
)


class InvalidScoreRecord(ValueError):
    """Score record failed validation at the boundary"""


def _now_epoch_ms() -> int:
    return int(time.time() * 1000)


def _new_record_id() -> str:
    return uuid4().hex


def _coerce_score(name: str, value: Any, required: bool) -> Optional[int]:
    """
    Validate one score and normalize it to int.

    Integral floats (e.g. 85.0 from JSON) are accepted; bools, strings,
    fractional values and out-of-range values are not.
    """
    if value is None:
        if required:
            raise InvalidScoreRecord(f"{name} is required")
        return None

    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidScoreRecord(f"{name} must be a number, got {value!r}")

    if not math.isfinite(value) or float(value) != int(value):
        raise InvalidScoreRecord(f"{name} must be a whole number, got {value!r}")

    score = int(value)
    if not SCORE_MIN <= score <= SCORE_MAX:
        raise InvalidScoreRecord(
            f"{name} must be between {SCORE_MIN} and {SCORE_MAX}, got {score}"
        )
    return score


@dataclass(frozen=True)
class ScoreRecord:
    """
    Append-only analysis result.

    The only change ever made after creation is attaching the comparison,
    once, through with_comparison().
    """

    user_id: str
    shot_type: ShotType
    overall_score: int

    # Sub-scores (each optional)
    posture: Optional[int] = None
    timing: Optional[int] = None
    follow_through: Optional[int] = None
    power: Optional[int] = None

    created_at_epoch_ms: int = field(default_factory=_now_epoch_ms)
    id: str = field(default_factory=_new_record_id)

    comparison: Optional[Comparison] = None

    def __post_init__(self):
        """Validate and normalize every field"""
        if self.user_id is None or not str(self.user_id).strip():
            raise InvalidScoreRecord("user_id is required")
        object.__setattr__(self, "user_id", str(self.user_id))

        try:
            object.__setattr__(self, "shot_type", ShotType.parse(self.shot_type))
        except ValueError as e:
            raise InvalidScoreRecord(str(e)) from e

        object.__setattr__(
            self,
            "overall_score",
            _coerce_score("overall_score", self.overall_score, required=True),
        )
        for attr, _ in SUB_SCORE_FIELDS:
            object.__setattr__(
                self,
                attr,
                _coerce_score(attr, getattr(self, attr), required=False),
            )

        if isinstance(self.created_at_epoch_ms, bool) or not isinstance(
            self.created_at_epoch_ms, int
        ):
            raise InvalidScoreRecord(
                f"created_at_epoch_ms must be an integer, got {self.created_at_epoch_ms!r}"
            )

    @property
    def key(self) -> tuple:
        """(user_id, shot_type) the record belongs to"""
        return (self.user_id, self.shot_type)

    @property
    def sub_scores(self) -> Dict[str, Optional[int]]:
        """Sub-scores by name (None where missing)"""
        return {attr: getattr(self, attr) for attr, _ in SUB_SCORE_FIELDS}

    def with_comparison(self, comparison: Comparison) -> "ScoreRecord":
        """
        Return a copy with the comparison attached.

        Raises:
            ValueError: If a comparison is already attached
        """
        if self.comparison is not None:
            raise ValueError(f"Comparison already attached to record {self.id}")
        return replace(self, comparison=comparison)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage/export"""
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "shot_type": self.shot_type.value,
            "overall_score": self.overall_score,
            "created_at_epoch_ms": self.created_at_epoch_ms,
            "comparison": self.comparison.to_dict() if self.comparison else None,
        }
        data.update(self.sub_scores)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreRecord":
        """
        Build a record from an analysis producer payload.

        Accepts the flat shape ({"overallScore": 80, "followThrough": 70})
        and the nested shape ({"results": {"overallScore": 80,
        "posture": {"score": 75}}}), in snake_case or camelCase. Unknown
        fields are ignored; required fields are validated.

        Raises:
            InvalidScoreRecord: If required fields are missing or invalid
        """
        if not isinstance(data, dict):
            raise InvalidScoreRecord(f"Score payload must be a mapping, got {type(data).__name__}")

        results = data.get("results") if isinstance(data.get("results"), dict) else data

        def pick(source: Dict[str, Any], *keys: str) -> Any:
            for key in keys:
                if source.get(key) is not None:
                    return source[key]
            return None

        def sub_score(attr: str, camel: str) -> Any:
            value = pick(results, attr, camel)
            if isinstance(value, dict):
                value = value.get("score")
            return value

        kwargs: Dict[str, Any] = {
            "user_id": pick(data, "user_id", "userId"),
            "shot_type": pick(data, "shot_type", "shotType"),
            "overall_score": pick(results, "overall_score", "overallScore"),
        }
        if kwargs["shot_type"] is None:
            raise InvalidScoreRecord("shot_type is required")

        for attr, camel in SUB_SCORE_FIELDS:
            kwargs[attr] = sub_score(attr, camel)

        created_at = pick(data, "created_at_epoch_ms", "createdAtEpochMs")
        if created_at is not None:
            if isinstance(created_at, bool) or not isinstance(created_at, Real):
                raise InvalidScoreRecord(f"created_at_epoch_ms must be a number, got {created_at!r}")
            kwargs["created_at_epoch_ms"] = int(created_at)

        record_id = pick(data, "id", "_id")
        if record_id is not None:
            kwargs["id"] = str(record_id)

        comparison = data.get("comparison")
        if isinstance(comparison, dict):
            try:
                kwargs["comparison"] = Comparison.from_dict(comparison)
            except (KeyError, TypeError, ValueError) as e:
                raise InvalidScoreRecord(f"Invalid comparison: {e}") from e

        return cls(**kwargs)

    def __repr__(self) -> str:
        """Human-readable representation"""
        return (
            f"ScoreRecord(user='{self.user_id}', "
            f"shot_type={self.shot_type.value}, "
            f"score={self.overall_score})"
        )
