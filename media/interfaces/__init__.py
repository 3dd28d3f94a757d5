"""
Media Interfaces Package

Abstract base classes defining the media store contract.
"""

from media.interfaces.media_store_interface import (
    CopyFailed,
    DeleteFailed,
    IndexCorrupt,
    MediaMissing,
    MediaStoreError,
    MediaStoreInterface,
)

__all__ = [
    "CopyFailed",
    "DeleteFailed",
    "IndexCorrupt",
    "MediaMissing",
    "MediaStoreError",
    "MediaStoreInterface",
]
