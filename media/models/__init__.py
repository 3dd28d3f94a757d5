"""
Media Models Package
"""

from media.models.media_file import MediaFile, MediaMetadata, MediaStats

__all__ = [
    "MediaFile",
    "MediaMetadata",
    "MediaStats",
]
