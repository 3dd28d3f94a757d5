"""
Media Utilities Package
"""

from media.utils.path_utils import (
    format_duration,
    format_size,
    generate_media_id,
)

__all__ = [
    "format_duration",
    "format_size",
    "generate_media_id",
]
