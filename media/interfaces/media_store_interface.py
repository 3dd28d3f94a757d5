"""
Media Store Interface

Abstract interface for media storage following Dependency Inversion Principle.
Controllers and the retention policy depend on this interface, not on
concrete implementations.
"""

import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from core.constants import ShotType
from media.models.media_file import MediaFile, MediaMetadata, MediaStats


class MediaStoreInterface(ABC):
    """
    Abstract base class for media storage.

    Any implementation must keep its index consistent with the stored bytes:
    an index entry exists only while its payload exists.

    All index mutations are serialized through mutation_lock. The lock is
    re-entrant so the retention policy can hold it across a whole sweep
    while calling delete().
    """

    def __init__(self):
        self._mutation_lock = threading.RLock()

    @property
    def mutation_lock(self) -> threading.RLock:
        """Lock guarding every load -> mutate -> persist sequence"""
        return self._mutation_lock

    @abstractmethod
    def initialize(self) -> None:
        """
        Initialize storage (create directories, verify the index loads).

        Raises:
            MediaStoreError: If initialization fails
        """

    @abstractmethod
    def save(self, source_path: Path, metadata: MediaMetadata) -> MediaFile:
        """
        Copy a captured video into the store and index it.

        Bytes are copied first and indexed second, so a failed copy never
        leaves an index entry behind.

        Args:
            source_path: Temporary file produced by the camera
            metadata: Capture metadata

        Returns:
            The new MediaFile

        Raises:
            CopyFailed: If the payload could not be copied (index untouched)
            MediaStoreError: If the index could not be persisted
        """

    @abstractmethod
    def get(self, media_id: str) -> Optional[MediaFile]:
        """
        Look up a stored video by id.

        Returns:
            MediaFile or None if not indexed
        """

    @abstractmethod
    def list(self, shot_type: Optional[ShotType] = None) -> List[MediaFile]:
        """
        List stored videos, newest capture first.

        Entries whose payload has disappeared are dropped from the result
        and removed from the index before returning.

        Args:
            shot_type: Only return this shot type (None = all)
        """

    @abstractmethod
    def delete(self, media_id: str) -> bool:
        """
        Delete a stored video and its index entry.

        A payload that is already gone counts as deleted. Calling this twice
        for the same id is safe.

        Returns:
            True if an index entry was removed, False if id was unknown

        Raises:
            DeleteFailed: If the payload exists but could not be removed
                (the index entry is kept)
        """

    @abstractmethod
    def attach_score_record(self, media_id: str, score_record_id: str) -> MediaFile:
        """
        Record which analysis result belongs to a stored video.

        Raises:
            MediaStoreError: If media_id is not indexed
        """

    @abstractmethod
    def reconcile(self) -> int:
        """
        Drop every index entry whose payload is missing.

        Returns:
            Number of entries removed
        """

    @abstractmethod
    def payload_exists(self, media: MediaFile) -> bool:
        """Check whether the bytes behind an index entry are present"""

    @abstractmethod
    def find_orphans(self) -> List[Path]:
        """
        List payloads that no index entry points to.

        Report only; nothing is deleted.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if storage is available and functional.

        Returns:
            True if storage is ready, False otherwise
        """

    @abstractmethod
    def cleanup(self) -> None:
        """Release storage resources."""

    # =========================================================================
    # SHARED BEHAVIOUR
    # =========================================================================

    def stats(self) -> MediaStats:
        """Aggregate count, size and oldest/newest capture over list()"""
        videos = self.list()

        if not videos:
            return MediaStats()

        by_capture = sorted(videos, key=lambda v: v.captured_at_epoch_ms)

        return MediaStats(
            total_count=len(videos),
            total_size_bytes=sum(v.size_bytes or 0 for v in videos),
            oldest=by_capture[0],
            newest=by_capture[-1],
        )

    def get_path_for_sharing(self, media_id: str) -> Optional[Path]:
        """Return the payload location for the share sheet, if it is live"""
        media = self.get(media_id)
        if media is None or not self.payload_exists(media):
            return None
        return media.storage_path


class MediaStoreError(Exception):
    """
    Base exception for media storage errors.

    Makes it easy to catch storage-specific errors:
        except MediaStoreError as e:
            logger.error(f"Media store failed: {e}")
    """


class IndexCorrupt(MediaStoreError):
    """Persisted index cannot be parsed; the store must not be written to"""


class MediaMissing(MediaStoreError):
    """
    An index entry's payload is absent.

    Handled by reconciliation inside list()/reconcile(); never raised to
    callers of the store.
    """


class CopyFailed(MediaStoreError):
    """Copying a captured video into the store failed"""


class DeleteFailed(MediaStoreError):
    """Removing a stored payload failed for a reason other than absence"""
