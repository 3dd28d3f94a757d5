"""
Media Implementations Package

Exposes concrete implementations of the media store interface.
"""

from media.implementations.local_media_store import LocalMediaStore
from media.implementations.memory_media_store import InMemoryMediaStore

# Public API
__all__ = [
    "InMemoryMediaStore",
    "LocalMediaStore",
]
