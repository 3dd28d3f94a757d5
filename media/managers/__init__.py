"""
Media Managers Package
"""

from media.managers.file_manager import FileManager
from media.managers.index_manager import StorageIndex
from media.managers.retention_manager import RetentionPolicy, SweepReport

__all__ = [
    "FileManager",
    "RetentionPolicy",
    "StorageIndex",
    "SweepReport",
]
