"""
Media Module

Local store for recorded padel practice videos and their persistent index.

Architecture mirrors the other modules:
- interfaces/: Abstract base classes (contracts) and the error taxonomy
- implementations/: Concrete implementations (filesystem and in-memory)
- controllers/: High-level coordination
- managers/: Specialized domain logic (files, index, retention)
- models/: Data structures
- utils/: Shared utilities
"""

from media.config import MediaConfig
from media.controllers.media_controller import MediaController
from media.factory import MediaStoreFactory, create_media_store
from media.interfaces.media_store_interface import (
    CopyFailed,
    DeleteFailed,
    IndexCorrupt,
    MediaMissing,
    MediaStoreError,
    MediaStoreInterface,
)
from media.managers.index_manager import StorageIndex
from media.managers.retention_manager import RetentionPolicy, SweepReport
from media.models.media_file import MediaFile, MediaMetadata, MediaStats

# Public API - what users import
__all__ = [
    "CopyFailed",
    "DeleteFailed",
    "IndexCorrupt",
    "MediaConfig",
    # Main controller (primary API)
    "MediaController",
    # Models
    "MediaFile",
    "MediaMetadata",
    "MediaMissing",
    "MediaStats",
    "MediaStoreError",
    # Factory for creating stores
    "MediaStoreFactory",
    # Interfaces
    "MediaStoreInterface",
    "RetentionPolicy",
    "StorageIndex",
    "SweepReport",
    "create_media_store",
]
