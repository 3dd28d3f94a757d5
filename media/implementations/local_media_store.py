"""
Local Media Store Implementation

Concrete implementation of MediaStoreInterface using the local filesystem.
Coordinates the file manager and the storage index.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from core.constants import ShotType
from media.config import MediaConfig
from media.interfaces.media_store_interface import (
    MediaMissing,
    MediaStoreError,
    MediaStoreInterface,
)
from media.managers.file_manager import FileManager
from media.managers.index_manager import StorageIndex
from media.models.media_file import MediaFile, MediaMetadata
from media.utils.path_utils import generate_media_id


class LocalMediaStore(MediaStoreInterface):
    """
    Local filesystem media store.

    This is the "real" store that copies payloads into the app's videos
    directory and keeps the JSON index in step with them.

    Every index mutation runs as load -> mutate -> persist under
    mutation_lock. Payload copies happen before the lock is taken.
    """

    def __init__(
        self,
        config: Optional[MediaConfig] = None,
        index: Optional[StorageIndex] = None,
    ):
        """
        Initialize local media store.

        Args:
            config: MediaConfig (None = load default config)
            index: StorageIndex to write through (None = build from config)
        """
        super().__init__()
        self.logger = logging.getLogger(__name__)

        self.config = config or MediaConfig()

        self.file_manager = FileManager(
            self.config.videos_dir,
            extension=self.config.video_extension,
        )
        self.index = index or StorageIndex(self.config.index_path)

        self.logger.info(
            f"Local media store initialized (videos: {self.config.videos_dir})",
        )

    def initialize(self) -> None:
        """Verify the videos directory is writable and the index loads"""
        if not self.file_manager.validate_storage_writable():
            raise MediaStoreError("Videos directory is not writable")

        # Raises IndexCorrupt before anything gets written over it
        entries = self.index.load()

        leftovers = self.file_manager.list_partials()
        if leftovers:
            self.logger.warning(
                f"Found {len(leftovers)} partial file(s) from interrupted saves",
            )

        self.logger.info(f"Media store ready ({len(entries)} indexed videos)")

    # =========================================================================
    # SAVE / LOOKUP
    # =========================================================================

    def save(
        self,
        source_path: Path,
        metadata: Union[MediaMetadata, dict],
    ) -> MediaFile:
        """
        Copy a captured video into the store and index it.

        Process:
        1. Generate id and destination name from (shot type, id)
        2. Copy bytes (CopyFailed leaves the index untouched)
        3. Load index, insert entry, persist index

        If step 3 fails the copied payload stays on disk as an orphan;
        find_orphans() reports it.
        """
        if not isinstance(metadata, MediaMetadata):
            metadata = MediaMetadata.from_dict(metadata)

        media_id = generate_media_id()
        dest_path = self.file_manager.destination_for(metadata.shot_type, media_id)

        self.file_manager.copy_in(Path(source_path), dest_path)

        size_bytes = metadata.size_bytes or self.file_manager.get_file_size(dest_path)

        media = MediaFile(
            id=media_id,
            storage_path=dest_path,
            shot_type=metadata.shot_type,
            captured_at_epoch_ms=metadata.captured_at_epoch_ms,
            duration_seconds=metadata.duration_seconds,
            size_bytes=size_bytes,
        )

        with self.mutation_lock:
            entries = self.index.load()
            entries[media.id] = media
            self.index.save(entries)

        self.logger.info(
            f"Video saved: {media.file_name} "
            f"(id={media.id}, size={size_bytes/(1024**2):.2f}MB)",
        )
        return media

    def get(self, media_id: str) -> Optional[MediaFile]:
        """Get video by id"""
        return self.index.load().get(media_id)

    def list(self, shot_type: Optional[ShotType] = None) -> List[MediaFile]:
        """List live videos, newest capture first, healing the index"""
        with self.mutation_lock:
            entries = self.index.load()
            live = self._reconcile_entries(entries)

        if shot_type is not None:
            shot_type = ShotType.parse(shot_type)
            live = [m for m in live if m.shot_type == shot_type]

        live.sort(key=lambda m: m.captured_at_epoch_ms, reverse=True)
        return live

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def delete(self, media_id: str) -> bool:
        """
        Delete video payload, then its index entry.

        DeleteFailed from the file manager propagates with the index entry
        still in place.
        """
        with self.mutation_lock:
            entries = self.index.load()
            media = entries.get(media_id)

            if media is None:
                self.logger.debug(f"Delete ignored, id not indexed: {media_id}")
                return False

            self.file_manager.delete_file(media.storage_path)

            del entries[media_id]
            self.index.save(entries)

        self.logger.info(f"Deleted video: {media.file_name}")
        return True

    def attach_score_record(self, media_id: str, score_record_id: str) -> MediaFile:
        """Store the analysis result id on the index entry"""
        with self.mutation_lock:
            entries = self.index.load()
            media = entries.get(media_id)

            if media is None:
                raise MediaStoreError(f"Video not found: id={media_id}")

            updated = media.with_score_record(score_record_id)
            entries[media_id] = updated
            self.index.save(entries)

        self.logger.info(
            f"Attached analysis {score_record_id} to video {media.file_name}",
        )
        return updated

    def reconcile(self) -> int:
        """Drop index entries whose payload has vanished"""
        with self.mutation_lock:
            entries = self.index.load()
            before = len(entries)
            self._reconcile_entries(entries)
            removed = before - len(entries)

        if removed:
            self.logger.info(f"Reconciliation removed {removed} missing video(s)")
        return removed

    def _reconcile_entries(self, entries: Dict[str, MediaFile]) -> List[MediaFile]:
        """
        Remove missing-payload entries from entries (in place) and persist.

        Caller must hold mutation_lock.

        Returns:
            The live entries
        """
        live = []
        missing = []

        for media in entries.values():
            try:
                self._check_payload(media)
                live.append(media)
            except MediaMissing as e:
                self.logger.warning(f"{e}, dropping from index")
                missing.append(media.id)

        if missing:
            for media_id in missing:
                del entries[media_id]
            self.index.save(entries)

        return live

    def _check_payload(self, media: MediaFile) -> None:
        """Raise MediaMissing if the payload is gone"""
        if not self.payload_exists(media):
            raise MediaMissing(f"Video file no longer exists: {media.file_name}")

    # =========================================================================
    # DIAGNOSTICS
    # =========================================================================

    def payload_exists(self, media: MediaFile) -> bool:
        """Check whether the bytes behind an index entry are present"""
        return self.file_manager.file_exists(media.storage_path)

    def find_orphans(self) -> List[Path]:
        """
        List payloads with no index entry.

        These come from saves whose index write failed, or interrupted
        copies (.partial files). Report only; nothing is deleted.
        """
        indexed = {m.storage_path.name for m in self.index.load().values()}

        orphans = [
            path for path in self.file_manager.list_payloads()
            if path.name not in indexed
        ]
        orphans.extend(self.file_manager.list_partials())

        return orphans

    def is_available(self) -> bool:
        """Check if storage system is available"""
        try:
            return (
                self.config.videos_dir.exists()
                and self.file_manager.validate_storage_writable()
            )
        except OSError:
            return False

    def cleanup(self) -> None:
        """Clean up resources (nothing is held open between calls)"""
        self.logger.debug("Local media store cleanup complete")
