"""
Retention Manager

Deletes stored videos older than the configured age threshold.
Single responsibility: Retention sweeps only.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from config.settings import RETENTION_DAYS, SWEEP_BATCH_SIZE
from media.interfaces.media_store_interface import MediaStoreInterface
from media.models.media_file import MS_PER_DAY, MediaFile, now_epoch_ms


@dataclass
class SweepReport:
    """Outcome of one retention sweep"""

    max_age_days: float
    candidates: int = 0
    deleted: int = 0
    errors: int = 0
    total_size_bytes: int = 0
    dry_run: bool = False

    @property
    def partial_failure(self) -> bool:
        """Check if some candidates could not be deleted"""
        return self.errors > 0

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/display"""
        return {
            "max_age_days": self.max_age_days,
            "candidates": self.candidates,
            "deleted": self.deleted,
            "errors": self.errors,
            "total_size_bytes": self.total_size_bytes,
            "total_size_mb": round(self.total_size_bytes / (1024**2), 2),
            "dry_run": self.dry_run,
        }


class RetentionPolicy:
    """
    Age-based retention for the media store.

    Responsibilities:
    - Select videos whose age exceeds the threshold
    - Delete them through the store, batch by batch
    - Keep going when a single delete fails, and count the failures

    The whole sweep holds the store's mutation lock, so it cannot
    interleave with a save or another delete.
    """

    def __init__(
        self,
        store: MediaStoreInterface,
        max_age_days: float = RETENTION_DAYS,
        batch_size: int = SWEEP_BATCH_SIZE,
    ):
        """
        Initialize retention policy.

        Args:
            store: Media store to sweep
            max_age_days: Default age threshold
            batch_size: Number of videos to delete per batch
        """
        if max_age_days < 0:
            raise ValueError("max_age_days cannot be negative")

        self.logger = logging.getLogger(__name__)
        self.store = store
        self.max_age_days = max_age_days
        self.batch_size = max(1, batch_size)

        self.logger.info(f"Retention policy initialized ({max_age_days} days)")

    def is_expired(
        self,
        media: MediaFile,
        max_age_days: float,
        now_ms: int,
    ) -> bool:
        """Check if a video's age strictly exceeds max_age_days"""
        return media.age_ms(now_ms) > max_age_days * MS_PER_DAY

    def plan(
        self,
        max_age_days: Optional[float] = None,
        now_ms: Optional[int] = None,
    ) -> List[MediaFile]:
        """
        List videos that a sweep would delete.

        Returns:
            Expired videos, oldest first
        """
        if max_age_days is None:
            max_age_days = self.max_age_days
        if now_ms is None:
            now_ms = now_epoch_ms()

        candidates = [
            media for media in self.store.list()
            if self.is_expired(media, max_age_days, now_ms)
        ]
        candidates.sort(key=lambda m: m.captured_at_epoch_ms)

        for media in candidates:
            self.logger.debug(
                f"Retention candidate: {media.file_name} "
                f"({media.age_days(now_ms):.1f} days old)"
            )

        return candidates

    def run(
        self,
        max_age_days: Optional[float] = None,
        dry_run: bool = False,
        now_ms: Optional[int] = None,
    ) -> SweepReport:
        """
        Execute a sweep and report what happened.

        Args:
            max_age_days: Age threshold (None = policy default)
            dry_run: If True, only count without deleting
            now_ms: Reference time (None = now)

        Returns:
            SweepReport with deleted / error counts
        """
        if max_age_days is None:
            max_age_days = self.max_age_days
        if max_age_days < 0:
            raise ValueError("max_age_days cannot be negative")

        report = SweepReport(max_age_days=max_age_days, dry_run=dry_run)

        with self.store.mutation_lock:
            candidates = self.plan(max_age_days, now_ms)
            report.candidates = len(candidates)

            if not candidates:
                self.logger.info("No videos exceed retention")
                return report

            if dry_run:
                self.logger.info(f"DRY RUN: Would delete {len(candidates)} videos")
            else:
                self.logger.info(f"Starting sweep: {len(candidates)} videos to delete")

            # Process in batches
            for i in range(0, len(candidates), self.batch_size):
                batch = candidates[i:i + self.batch_size]

                for media in batch:
                    try:
                        if not dry_run and not self.store.delete(media.id):
                            # Already removed by someone else
                            continue

                        report.deleted += 1
                        report.total_size_bytes += media.size_bytes or 0

                    except Exception as e:
                        report.errors += 1
                        self.logger.error(f"Failed to delete {media.file_name}: {e}")

        self.logger.info(
            f"Sweep {'(dry run) ' if dry_run else ''}complete: "
            f"{report.deleted}/{report.candidates} videos, {report.errors} errors"
        )
        return report

    def sweep(self, max_age_days: Optional[float] = None) -> int:
        """
        Delete every video older than max_age_days.

        Returns:
            Number of videos deleted (0 for an empty or fresh store)
        """
        return self.run(max_age_days).deleted
