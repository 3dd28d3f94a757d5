"""
In-Memory Media Store Implementation

Media store for environments without persistent storage (web preview,
tests). Simulates payloads in memory without touching the filesystem.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from core.constants import ShotType
from media.interfaces.media_store_interface import (
    CopyFailed,
    DeleteFailed,
    MediaMissing,
    MediaStoreError,
    MediaStoreInterface,
)
from media.models.media_file import MediaFile, MediaMetadata
from media.utils.path_utils import generate_media_id

SIMULATED_ROOT = Path("/memory/padeltech_videos")


class InMemoryMediaStore(MediaStoreInterface):
    """
    In-memory media store.

    The index is a dict that lives as long as the instance; "payloads" are
    recorded sizes keyed by media id. Same consistency rules as the local
    store: copy first, index second, reconcile on list.
    """

    def __init__(self, extension: str = ".mp4"):
        """
        Initialize in-memory store.

        Args:
            extension: Extension used for simulated file names
        """
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.extension = extension

        # id -> MediaFile
        self._index: Dict[str, MediaFile] = {}
        # id -> simulated payload size
        self._payloads: Dict[str, int] = {}

        # Fault injection for tests
        self._fail_next_copy = False
        self._fail_deletes = False

        # Track operations for test verification
        self.operation_log: List[str] = []

        self.logger.info("[MEMORY] Media store initialized (no persistence)")

    def _log_operation(self, operation: str) -> None:
        """Log operation for test verification"""
        self.operation_log.append(operation)
        self.logger.debug(f"[MEMORY] {operation}")

    def initialize(self) -> None:
        """Initialize in-memory store"""
        self._log_operation("initialize")

    def save(
        self,
        source_path: Path,
        metadata: Union[MediaMetadata, dict],
    ) -> MediaFile:
        """Save video (simulated - source is not read)"""
        if not isinstance(metadata, MediaMetadata):
            metadata = MediaMetadata.from_dict(metadata)

        media_id = generate_media_id()
        file_name = f"{metadata.shot_type.value}_{media_id}{self.extension}"

        if self._fail_next_copy:
            self._fail_next_copy = False
            self._log_operation(f"save failed: {file_name}")
            raise CopyFailed(f"Simulated copy failure for {source_path}")

        # "Copy" the payload first
        self._payloads[media_id] = metadata.size_bytes

        media = MediaFile(
            id=media_id,
            storage_path=SIMULATED_ROOT / file_name,
            shot_type=metadata.shot_type,
            captured_at_epoch_ms=metadata.captured_at_epoch_ms,
            duration_seconds=metadata.duration_seconds,
            size_bytes=metadata.size_bytes,
        )

        with self.mutation_lock:
            self._index[media.id] = media

        self._log_operation(f"save: {file_name}")
        return media

    def get(self, media_id: str) -> Optional[MediaFile]:
        """Get video by id"""
        return self._index.get(media_id)

    def list(self, shot_type: Optional[ShotType] = None) -> List[MediaFile]:
        """List live videos, newest capture first"""
        with self.mutation_lock:
            live = []
            for media in tuple(self._index.values()):
                try:
                    self._check_payload(media)
                    live.append(media)
                except MediaMissing as e:
                    self.logger.warning(f"[MEMORY] {e}, dropping from index")
                    del self._index[media.id]

        if shot_type is not None:
            shot_type = ShotType.parse(shot_type)
            live = [m for m in live if m.shot_type == shot_type]

        live.sort(key=lambda m: m.captured_at_epoch_ms, reverse=True)
        return live

    def delete(self, media_id: str) -> bool:
        """Delete video from memory"""
        with self.mutation_lock:
            media = self._index.get(media_id)
            if media is None:
                return False

            if self._fail_deletes and media_id in self._payloads:
                raise DeleteFailed(f"Simulated delete failure for {media.file_name}")

            self._payloads.pop(media_id, None)
            del self._index[media_id]

        self._log_operation(f"delete: {media.file_name}")
        return True

    def attach_score_record(self, media_id: str, score_record_id: str) -> MediaFile:
        """Store the analysis result id on the entry"""
        with self.mutation_lock:
            media = self._index.get(media_id)
            if media is None:
                raise MediaStoreError(f"Video not found: id={media_id}")

            updated = media.with_score_record(score_record_id)
            self._index[media_id] = updated

        self._log_operation(f"attach_score_record: {media_id} -> {score_record_id}")
        return updated

    def reconcile(self) -> int:
        """Drop entries whose simulated payload is gone"""
        with self.mutation_lock:
            missing = [
                media_id for media_id in self._index
                if media_id not in self._payloads
            ]
            for media_id in missing:
                del self._index[media_id]

        self._log_operation(f"reconcile: {len(missing)} removed")
        return len(missing)

    def _check_payload(self, media: MediaFile) -> None:
        """Raise MediaMissing if the simulated payload is gone"""
        if not self.payload_exists(media):
            raise MediaMissing(f"Video payload no longer exists: {media.file_name}")

    def payload_exists(self, media: MediaFile) -> bool:
        """Check whether the simulated payload is present"""
        return media.id in self._payloads

    def find_orphans(self) -> List[Path]:
        """List simulated payloads with no index entry"""
        return [
            SIMULATED_ROOT / f"{media_id}{self.extension}"
            for media_id in self._payloads
            if media_id not in self._index
        ]

    def is_available(self) -> bool:
        """In-memory store is always available"""
        return True

    def cleanup(self) -> None:
        """Clean up in-memory store"""
        self._log_operation("cleanup")

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    def add_media(self, media: MediaFile) -> MediaFile:
        """Insert a prepared entry (with payload) for testing"""
        with self.mutation_lock:
            self._payloads[media.id] = media.size_bytes
            self._index[media.id] = media
        return media

    def simulate_external_delete(self, media_id: str) -> None:
        """Remove a payload behind the store's back"""
        self._payloads.pop(media_id, None)
        self._log_operation(f"simulate_external_delete: {media_id}")

    def fail_next_copy(self) -> None:
        """Make the next save() raise CopyFailed"""
        self._fail_next_copy = True

    def fail_deletes(self, enabled: bool = True) -> None:
        """Make delete() raise DeleteFailed while enabled"""
        self._fail_deletes = enabled

    def get_operation_log(self) -> List[str]:
        """Get list of all operations for test verification"""
        return self.operation_log.copy()

    def reset(self) -> None:
        """Reset store to initial state"""
        self._index.clear()
        self._payloads.clear()
        self.operation_log.clear()
        self._log_operation("reset")
