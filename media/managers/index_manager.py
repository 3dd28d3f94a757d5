"""
Index Manager

Persists the media index (media id -> MediaFile) as a JSON file.
Single responsibility: index file I/O only.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict

from config.settings import INDEX_FORMAT_VERSION
from media.interfaces.media_store_interface import IndexCorrupt, MediaStoreError
from media.models.media_file import MediaFile


class StorageIndex:
    """
    Persisted mapping from media id to MediaFile.

    Responsibilities:
    - Load the index, refusing to half-build a corrupt one
    - Replace the index atomically on save

    File format:
        {"version": 1, "media": [MediaFile.to_dict(), ...]}

    Thread Safety:
    - Not locked here. The owning media store serializes every
      load -> mutate -> save sequence behind its mutation lock.
    """

    def __init__(self, index_path: Path):
        """
        Initialize index manager.

        Args:
            index_path: Location of the JSON index file
        """
        self.logger = logging.getLogger(__name__)
        self.index_path = Path(index_path)
        self.tmp_path = self.index_path.with_suffix(self.index_path.suffix + ".tmp")

        self.logger.info(f"Storage index initialized (file: {self.index_path})")

    @property
    def exists(self) -> bool:
        """Check if an index has ever been persisted"""
        return self.index_path.exists()

    def load(self) -> Dict[str, MediaFile]:
        """
        Load the persisted index.

        Returns:
            Mapping of media id to MediaFile (empty on first run)

        Raises:
            IndexCorrupt: If the file cannot be parsed or any record is invalid
            MediaStoreError: If the file exists but cannot be read
        """
        if not self.index_path.exists():
            self.logger.debug("No index file yet, starting empty")
            return {}

        try:
            raw = self.index_path.read_text(encoding="utf-8")
        except OSError as e:
            raise MediaStoreError(f"Failed to read index: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise IndexCorrupt(f"Index is not valid JSON: {self.index_path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("media"), list):
            raise IndexCorrupt(f"Index has unexpected structure: {self.index_path}")

        version = data.get("version")
        if version != INDEX_FORMAT_VERSION:
            raise IndexCorrupt(f"Unsupported index version: {version!r}")

        # Build the whole mapping before returning anything
        media: Dict[str, MediaFile] = {}
        for position, record in enumerate(data["media"]):
            if not isinstance(record, dict):
                raise IndexCorrupt(f"Index record #{position} is not an object")
            try:
                entry = MediaFile.from_dict(record)
            except (KeyError, TypeError, ValueError) as e:
                raise IndexCorrupt(f"Index record #{position} is invalid: {e}") from e

            if entry.id in media:
                raise IndexCorrupt(f"Duplicate media id in index: {entry.id}")
            media[entry.id] = entry

        self.logger.debug(f"Loaded index with {len(media)} entries")
        return media

    def save(self, media: Dict[str, MediaFile]) -> None:
        """
        Atomically replace the persisted index.

        Writes to a temp file, fsyncs it, then renames it over the index,
        so a crash mid-write leaves either the old or the new index.

        Args:
            media: Complete mapping to persist

        Raises:
            MediaStoreError: If writing or replacing fails
        """
        payload = {
            "version": INDEX_FORMAT_VERSION,
            "media": [
                entry.to_dict()
                for entry in sorted(media.values(), key=lambda m: m.captured_at_epoch_ms)
            ],
        }

        try:
            self.index_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, allow_nan=False)
                f.flush()
                os.fsync(f.fileno())

            os.replace(self.tmp_path, self.index_path)

            self.logger.debug(f"Persisted index with {len(media)} entries")

        except (OSError, TypeError, ValueError) as e:
            # Leave the previous index in place
            try:
                self.tmp_path.unlink()
            except OSError:
                self.logger.debug(f"No temp index to remove: {self.tmp_path}")
            raise MediaStoreError(f"Failed to persist index: {e}") from e
