"""
Media Controller

High-level media coordination following the same pattern as the store
implementations: a simple API for the capture and history screens, with
event callbacks for the application.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Union

from core.constants import ShotType
from media.config import MediaConfig
from media.interfaces.media_store_interface import (
    MediaStoreError,
    MediaStoreInterface,
)
from media.managers.retention_manager import RetentionPolicy, SweepReport
from media.models.media_file import MediaFile, MediaMetadata, MediaStats
from media.utils.path_utils import format_size


class MediaController:
    """
    High-level media controller.

    This class:
    - Provides simple API for storing and browsing practice videos
    - Runs a retention sweep before each save (when enabled)
    - Converts store errors into None/False results plus callbacks

    Usage:
        media = MediaController(store)
        media.on_error = lambda msg: show_toast(msg)

        video = media.save_recording("/tmp/capture.mp4", {"shotType": "derecha"})
    """

    def __init__(
        self,
        store: MediaStoreInterface,
        config: Optional[MediaConfig] = None,
        retention: Optional[RetentionPolicy] = None,
        auto_sweep: Optional[bool] = None,
    ):
        """
        Initialize media controller.

        Args:
            store: Media store implementation (injected)
            config: MediaConfig for retention defaults (None = load default)
            retention: RetentionPolicy (None = build one for store)
            auto_sweep: Override config.auto_sweep_on_save
        """
        self.logger = logging.getLogger(__name__)

        self.store = store
        self.store.initialize()

        if retention is None:
            config = config or MediaConfig()
            retention = RetentionPolicy(
                store,
                max_age_days=config.retention_days,
                batch_size=config.sweep_batch_size,
            )
            if auto_sweep is None:
                auto_sweep = config.auto_sweep_on_save

        self.retention = retention
        self.auto_sweep = True if auto_sweep is None else auto_sweep

        # Event callbacks
        self.on_saved: Optional[Callable[[MediaFile], None]] = None
        self.on_sweep_complete: Optional[Callable[[int], None]] = None  # passes count
        self.on_error: Optional[Callable[[str], None]] = None  # passes error message

        self.logger.info("Media controller initialized")

    # =========================================================================
    # VIDEO OPERATIONS
    # =========================================================================

    def save_recording(
        self,
        video_path: Path,
        metadata: Union[MediaMetadata, dict],
    ) -> Optional[MediaFile]:
        """
        Save a new recording to the store.

        Args:
            video_path: Temporary file produced by the camera
            metadata: Capture metadata

        Returns:
            MediaFile, or None if save failed
        """
        if self.auto_sweep:
            self.run_retention()

        try:
            video = self.store.save(Path(video_path), metadata)
        except (MediaStoreError, ValueError) as e:
            self.logger.error(f"Failed to save recording: {e}")
            self._trigger_error(str(e))
            return None

        self.logger.info(
            f"Recording saved: {video.file_name} ({format_size(video.size_bytes)})",
        )
        self._trigger_saved(video)
        return video

    def list_recordings(self, shot_type: Optional[ShotType] = None) -> List[MediaFile]:
        """
        List stored recordings, newest first.

        Returns:
            List of MediaFile (empty if the store could not be read)
        """
        try:
            return self.store.list(shot_type)
        except MediaStoreError as e:
            self.logger.error(f"Failed to list recordings: {e}")
            self._trigger_error(str(e))
            return []

    def delete_recording(self, media_id: str) -> bool:
        """
        Delete a recording.

        Returns:
            True if the recording is gone afterwards (including when it
            was never there)
        """
        try:
            self.store.delete(media_id)
            return True
        except MediaStoreError as e:
            self.logger.error(f"Failed to delete recording {media_id}: {e}")
            self._trigger_error(str(e))
            return False

    def link_analysis(self, media_id: str, score_record_id: str) -> Optional[MediaFile]:
        """Attach an analysis result to its recording"""
        try:
            return self.store.attach_score_record(media_id, score_record_id)
        except MediaStoreError as e:
            self.logger.error(f"Failed to link analysis to {media_id}: {e}")
            self._trigger_error(str(e))
            return None

    def get_share_path(self, media_id: str) -> Optional[Path]:
        """Payload location for sharing, or None if unavailable"""
        try:
            return self.store.get_path_for_sharing(media_id)
        except MediaStoreError as e:
            self.logger.error(f"Failed to resolve share path for {media_id}: {e}")
            return None

    def get_stats(self) -> MediaStats:
        """
        Get storage statistics.

        Returns:
            MediaStats (empty if the store could not be read)
        """
        try:
            return self.store.stats()
        except MediaStoreError as e:
            self.logger.error(f"Failed to get media stats: {e}")
            self._trigger_error(str(e))
            return MediaStats()

    # =========================================================================
    # RETENTION
    # =========================================================================

    def run_retention(
        self,
        max_age_days: Optional[float] = None,
        dry_run: bool = False,
    ) -> SweepReport:
        """
        Run a retention sweep.

        Failures are reported, never raised: retention is best-effort.
        """
        try:
            report = self.retention.run(max_age_days, dry_run=dry_run)
        except MediaStoreError as e:
            self.logger.error(f"Retention sweep failed: {e}")
            self._trigger_error(f"Retention sweep failed: {e}")
            return SweepReport(
                max_age_days=max_age_days if max_age_days is not None
                else self.retention.max_age_days,
                dry_run=dry_run,
            )

        if report.deleted and not dry_run:
            self._trigger_sweep_complete(report.deleted)

        return report

    # =========================================================================
    # STATUS
    # =========================================================================

    def get_status(self) -> dict:
        """Get store status for diagnostics"""
        stats = self.get_stats()

        return {
            "available": self.store.is_available(),
            "media_stats": stats.to_dict(),
            "retention_days": self.retention.max_age_days,
            "auto_sweep": self.auto_sweep,
        }

    def log_status(self) -> None:
        """Log current store status"""
        stats = self.get_stats()

        self.logger.info(
            f"Media Status: "
            f"Videos={stats.total_count}, "
            f"Size={format_size(stats.total_size_bytes)}",
        )

    # =========================================================================
    # EVENT TRIGGERS
    # =========================================================================

    def _trigger_saved(self, video: MediaFile) -> None:
        """Trigger saved event"""
        if self.on_saved:
            try:
                self.on_saved(video)
            except Exception as e:
                self.logger.error(f"Error in saved callback: {e}")

    def _trigger_sweep_complete(self, count: int) -> None:
        """Trigger sweep complete event"""
        if self.on_sweep_complete:
            try:
                self.on_sweep_complete(count)
            except Exception as e:
                self.logger.error(f"Error in sweep_complete callback: {e}")

    def _trigger_error(self, error_msg: str) -> None:
        """Trigger media error event"""
        if self.on_error:
            try:
                self.on_error(error_msg)
            except Exception as e:
                self.logger.error(f"Error in error callback: {e}")

    # =========================================================================
    # CLEANUP
    # =========================================================================

    def cleanup(self) -> None:
        """Clean up store resources"""
        self.logger.info("Cleaning up media controller")
        self.store.cleanup()
