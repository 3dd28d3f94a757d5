"""
Media Store Factory

Factory pattern for creating media store implementations.
The implementation is chosen by the caller (dependency injection), never
by platform checks inside the store logic.
"""

import logging
from typing import Literal, Optional

from media.config import MediaConfig
from media.implementations.local_media_store import LocalMediaStore
from media.implementations.memory_media_store import InMemoryMediaStore
from media.interfaces.media_store_interface import MediaStoreInterface

# Type alias for better type hints
MediaStoreMode = Literal["auto", "local", "memory"]


class MediaStoreFactory:
    """
    Factory for creating media store implementations.

    Usage:
        # Filesystem-backed store
        store = MediaStoreFactory.create_store()

        # No persistent storage available (web preview, tests)
        store = MediaStoreFactory.create_store(mode="memory")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_store(
        cls,
        mode: MediaStoreMode = "auto",
        config: Optional[MediaConfig] = None,
    ) -> MediaStoreInterface:
        """
        Create a media store instance.

        Args:
            mode: "auto" (local, falling back to memory), "local" (force
                filesystem), "memory" (force in-memory)
            config: MediaConfig object (None = load default)

        Returns:
            MediaStoreInterface implementation

        Raises:
            RuntimeError: If mode="local" but the filesystem store cannot start
        """
        if mode == "memory":
            cls._logger.info("Creating In-Memory Media Store (forced)")
            return InMemoryMediaStore()

        if mode == "local":
            try:
                store = LocalMediaStore(config)
            except Exception as e:
                raise RuntimeError(
                    f"Local media store requested but not available: {e}"
                ) from e
            cls._logger.info("Creating Local Media Store (forced)")
            return store

        # mode == "auto" - try filesystem first, fall back to memory
        try:
            store = LocalMediaStore(config)
            if store.is_available():
                cls._logger.info("Creating Local Media Store (auto-detected)")
                return store
            cls._logger.warning("Local media store not writable, using memory")
        except Exception as e:
            cls._logger.warning(
                f"Local media store not available ({e}), using In-Memory Media Store"
            )

        return InMemoryMediaStore()


# Convenience functions for quick creation


def create_media_store(
    force_memory: bool = False,
    config: Optional[MediaConfig] = None,
) -> MediaStoreInterface:
    """
    Quick store creation with simple in-memory override.

    Example:
        store = create_media_store()
        store = create_media_store(force_memory=True)
    """
    mode = "memory" if force_memory else "auto"
    return MediaStoreFactory.create_store(mode=mode, config=config)
