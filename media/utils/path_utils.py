"""
Path Utilities

Helper functions for media ids, file names and display formatting.
"""

import logging
import time
from uuid import uuid4

from config.settings import MEDIA_ID_SUFFIX_LENGTH

logger = logging.getLogger(__name__)


def generate_media_id(now_ms: int = None) -> str:
    """
    Generate a unique media id.

    The epoch-millisecond prefix keeps ids sortable by recency; the random
    suffix keeps two saves within the same millisecond apart.

    Example:
        generate_media_id()  # "1718000000000-a1b2c3d4"
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms:013d}-{uuid4().hex[:MEDIA_ID_SUFFIX_LENGTH]}"


def format_size(size_bytes: int) -> str:
    """
    Format byte size as human-readable string.

    Example:
        format_size(0)          # "0 Bytes"
        format_size(3_355_443)  # "3.2 MB"
    """
    if size_bytes <= 0:
        return "0 Bytes"

    size = float(size_bytes)
    for unit in ['Bytes', 'KB', 'MB']:
        if size < 1024.0:
            return f"{round(size, 1):g} {unit}"
        size /= 1024.0
    return f"{round(size, 1):g} GB"


def format_duration(seconds: float) -> str:
    """
    Format duration as human-readable string.

    Example:
        format_duration(45)  # "45s"
        format_duration(95)  # "1m 35s"
    """
    seconds = int(round(seconds))
    if seconds < 60:
        return f"{seconds}s"

    minutes, remaining = divmod(seconds, 60)
    return f"{minutes}m {remaining}s"
