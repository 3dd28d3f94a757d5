"""
Progress Controllers Package
"""

from progress.controllers.progress_analytics import ProgressAnalytics

__all__ = ["ProgressAnalytics"]
