"""
Progress Managers Package
"""

from progress.managers.comparison_engine import ComparisonEngine

__all__ = ["ComparisonEngine"]
