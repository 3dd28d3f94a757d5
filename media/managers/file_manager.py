"""
File Manager

Manages physical video payloads inside the store.
Single responsibility: File system operations only.
"""

import logging
import shutil
from pathlib import Path
from typing import List

from config.settings import (
    PARTIAL_FILE_SUFFIX,
    VIDEO_FILENAME_EXTENSION,
    VIDEO_FILENAME_PATTERN,
)
from core.constants import ShotType
from media.interfaces.media_store_interface import (
    CopyFailed,
    DeleteFailed,
    MediaStoreError,
)


class FileManager:
    """
    Manages physical video file operations.

    Responsibilities:
    - Create the videos directory
    - Copy payloads in (via a .partial file renamed into place)
    - Delete payloads, treating "already gone" as success
    - Generate deterministic file names from (shot type, media id)
    """

    def __init__(self, videos_dir: Path, extension: str = VIDEO_FILENAME_EXTENSION):
        """
        Initialize file manager.

        Args:
            videos_dir: Directory that holds every stored payload
            extension: File extension for stored videos
        """
        self.logger = logging.getLogger(__name__)
        self.videos_dir = Path(videos_dir)
        self.extension = extension

        self._create_directories()

        self.logger.info(f"File manager initialized (dir: {self.videos_dir})")

    def _create_directories(self) -> None:
        """Create the videos directory if it doesn't exist"""
        try:
            self.videos_dir.mkdir(parents=True, exist_ok=True)
            self.logger.debug("Videos directory created/verified")
        except OSError as e:
            raise MediaStoreError(f"Failed to create videos directory: {e}") from e

    def generate_filename(self, shot_type: ShotType, media_id: str) -> str:
        """
        Generate the stored file name for a video.

        Example:
            file_manager.generate_filename(ShotType.DERECHA, "1718000000000-a1b2c3d4")
            # Returns: derecha_1718000000000-a1b2c3d4.mp4
        """
        return VIDEO_FILENAME_PATTERN.format(
            shot_type=shot_type.value,
            media_id=media_id,
            extension=self.extension,
        )

    def destination_for(self, shot_type: ShotType, media_id: str) -> Path:
        """Full path a payload will be stored at"""
        return self.videos_dir / self.generate_filename(shot_type, media_id)

    def copy_in(self, source_path: Path, dest_path: Path) -> Path:
        """
        Copy a payload into the store.

        The copy lands in <dest>.partial first and is renamed only once
        complete, so an interrupted copy never occupies the final name.

        Args:
            source_path: File to copy
            dest_path: Final location inside the store

        Returns:
            dest_path

        Raises:
            CopyFailed: If the source is missing or the copy fails
        """
        source_path = Path(source_path)
        if not source_path.is_file():
            raise CopyFailed(f"Source file not found: {source_path}")

        if dest_path.exists():
            raise CopyFailed(f"File already exists: {dest_path.name}")

        partial_path = dest_path.with_name(dest_path.name + PARTIAL_FILE_SUFFIX)

        try:
            shutil.copy2(source_path, partial_path)
            partial_path.replace(dest_path)
        except (OSError, shutil.Error) as e:
            self._discard(partial_path)
            raise CopyFailed(f"Failed to copy {source_path.name}: {e}") from e
        except BaseException:
            # Interrupted mid-copy: leave nothing under the final name
            self._discard(partial_path)
            raise

        self.logger.info(f"Stored file: {dest_path.name}")
        return dest_path

    def delete_file(self, file_path: Path) -> bool:
        """
        Delete a payload.

        Args:
            file_path: Payload to delete

        Returns:
            True if a file was removed, False if it was already gone

        Raises:
            DeleteFailed: If the file exists but cannot be removed
        """
        try:
            file_path.unlink()
        except FileNotFoundError:
            self.logger.warning(f"File not found for deletion: {file_path}")
            return False
        except OSError as e:
            raise DeleteFailed(f"Failed to delete {file_path.name}: {e}") from e

        self.logger.info(f"Deleted file: {file_path.name}")
        return True

    def file_exists(self, file_path: Path) -> bool:
        """Check if a payload is present"""
        return Path(file_path).is_file()

    def get_file_size(self, file_path: Path) -> int:
        """
        Get file size in bytes.

        Raises:
            MediaStoreError: If file not accessible
        """
        try:
            return Path(file_path).stat().st_size
        except OSError as e:
            raise MediaStoreError(f"Failed to get file size: {e}") from e

    def list_payloads(self) -> List[Path]:
        """List stored payloads (ignores in-flight .partial files)"""
        try:
            return sorted(self.videos_dir.glob(f"*{self.extension}"))
        except OSError as e:
            raise MediaStoreError(f"Failed to list files: {e}") from e

    def list_partials(self) -> List[Path]:
        """List leftovers from interrupted copies"""
        try:
            return sorted(self.videos_dir.glob(f"*{PARTIAL_FILE_SUFFIX}"))
        except OSError as e:
            raise MediaStoreError(f"Failed to list partial files: {e}") from e

    def validate_storage_writable(self) -> bool:
        """
        Test if storage is writable.

        Returns:
            True if writable, False otherwise
        """
        try:
            test_file = self.videos_dir / ".write_test"
            test_file.touch()
            test_file.unlink()
            return True
        except OSError:
            return False

    def _discard(self, path: Path) -> None:
        """Best-effort removal of a temp file"""
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.warning(f"Could not remove temp file {path.name}: {e}")
