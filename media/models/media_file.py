"""
Media File Models

Data classes representing stored practice videos and their metadata.
"""

import math
import time
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

from core.constants import ShotType

MS_PER_DAY = 24 * 60 * 60 * 1000


def now_epoch_ms() -> int:
    """Current wall-clock time in epoch milliseconds"""
    return int(time.time() * 1000)


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first key present in data (camelCase or snake_case)"""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass(frozen=True)
class MediaMetadata:
    """
    Capture metadata handed over by the camera screen.

    Unknown keys coming from the capture layer are ignored.
    """

    shot_type: ShotType
    captured_at_epoch_ms: int = field(default_factory=now_epoch_ms)
    duration_seconds: float = 0.0
    size_bytes: int = 0

    def __post_init__(self):
        """Coerce shot type and reject negative or non-finite measurements"""
        object.__setattr__(self, "shot_type", ShotType.parse(self.shot_type))

        if not math.isfinite(self.duration_seconds):
            raise ValueError(f"duration_seconds must be finite: {self.duration_seconds}")
        if self.duration_seconds < 0:
            raise ValueError(f"duration_seconds cannot be negative: {self.duration_seconds}")
        if self.size_bytes < 0:
            raise ValueError(f"size_bytes cannot be negative: {self.size_bytes}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MediaMetadata":
        """Create metadata from a capture payload"""
        shot_type = _pick(data, "shot_type", "shotType")
        if shot_type is None:
            raise ValueError("Capture metadata is missing shot type")

        return cls(
            shot_type=shot_type,
            captured_at_epoch_ms=int(
                _pick(
                    data,
                    "captured_at_epoch_ms",
                    "capturedAtEpochMs",
                    "timestamp",
                    default=now_epoch_ms(),
                ),
            ),
            duration_seconds=float(_pick(data, "duration_seconds", "durationSeconds", "duration", default=0)),
            size_bytes=int(_pick(data, "size_bytes", "sizeBytes", "size", default=0)),
        )


@dataclass(frozen=True)
class MediaFile:
    """
    Reference to one stored video plus its capture metadata.

    Instances are immutable; attaching an analysis result produces a new
    instance via with_score_record().
    """

    # Identification
    id: str  # <epoch_ms>-<hex>, sortable by recency
    storage_path: Path  # Owned by the media store

    # Capture information
    shot_type: ShotType
    captured_at_epoch_ms: int
    duration_seconds: float
    size_bytes: int

    # Weak back-reference to the analysis result (lookup only)
    score_record_id: Optional[str] = None

    def __post_init__(self):
        """Normalize path and shot type, reject non-finite durations"""
        if not isinstance(self.storage_path, Path):
            object.__setattr__(self, "storage_path", Path(self.storage_path))
        object.__setattr__(self, "shot_type", ShotType.parse(self.shot_type))
        if not math.isfinite(self.duration_seconds):
            raise ValueError(f"duration_seconds must be finite: {self.duration_seconds}")

    @property
    def file_name(self) -> str:
        """Just the file name: derecha_1718000000000-a1b2c3d4.mp4"""
        return self.storage_path.name

    @property
    def is_analyzed(self) -> bool:
        """Check if an analysis result has been attached"""
        return self.score_record_id is not None

    def age_ms(self, now_ms: Optional[int] = None) -> int:
        """Age of the capture in milliseconds"""
        if now_ms is None:
            now_ms = now_epoch_ms()
        return now_ms - self.captured_at_epoch_ms

    def age_days(self, now_ms: Optional[int] = None) -> float:
        """Age of the capture in days"""
        return self.age_ms(now_ms) / MS_PER_DAY

    def with_score_record(self, score_record_id: Optional[str]) -> "MediaFile":
        """Return a copy referencing the given analysis result"""
        return replace(self, score_record_id=score_record_id)

    def to_dict(self) -> dict:
        """Convert to dictionary for the persisted index"""
        return {
            "id": self.id,
            "storage_path": str(self.storage_path),
            "shot_type": self.shot_type.value,
            "captured_at_epoch_ms": self.captured_at_epoch_ms,
            "duration_seconds": self.duration_seconds,
            "size_bytes": self.size_bytes,
            "score_record_id": self.score_record_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MediaFile":
        """
        Create MediaFile from dictionary (index record).

        Raises:
            KeyError, TypeError, ValueError: If the record is malformed
        """
        return cls(
            id=str(data["id"]),
            storage_path=Path(data["storage_path"]),
            shot_type=ShotType(data["shot_type"]),
            captured_at_epoch_ms=int(data["captured_at_epoch_ms"]),
            duration_seconds=data["duration_seconds"],
            size_bytes=int(data["size_bytes"]),
            score_record_id=data.get("score_record_id"),
        )

    def __repr__(self) -> str:
        """Human-readable representation"""
        return (
            f"MediaFile(id='{self.id}', "
            f"shot_type={self.shot_type.value}, "
            f"size={self.size_bytes})"
        )


@dataclass
class MediaStats:
    """
    Storage statistics aggregated over the live index.

    Used by the history screen and the maintenance script.
    """

    total_count: int = 0
    total_size_bytes: int = 0
    oldest: Optional[MediaFile] = None
    newest: Optional[MediaFile] = None

    @property
    def total_size_mb(self) -> float:
        """Total size in megabytes"""
        return self.total_size_bytes / (1024**2)

    @property
    def is_empty(self) -> bool:
        """Check if nothing is stored"""
        return self.total_count == 0

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/display"""
        return {
            "total_count": self.total_count,
            "total_size_bytes": self.total_size_bytes,
            "total_size_mb": round(self.total_size_mb, 2),
            "oldest": self.oldest.to_dict() if self.oldest else None,
            "newest": self.newest.to_dict() if self.newest else None,
        }

    def __repr__(self) -> str:
        """Human-readable representation"""
        return (
            f"MediaStats(videos={self.total_count}, "
            f"size={self.total_size_mb:.1f}MB)"
        )
