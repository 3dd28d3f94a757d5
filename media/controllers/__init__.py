"""
Media Controllers Package
"""

from media.controllers.media_controller import MediaController

# Public API
__all__ = [
    "MediaController",
]
