"""
Core types shared across modules.

Public API:
    - ShotType: The seven padel stroke categories
    - Trend: improving / stable / declining classification

Usage:
    from core.constants import ShotType

    shot = ShotType.parse("Derecha")
"""

from core.constants import ShotType, Trend

__all__ = [
    "ShotType",
    "Trend",
]
