"""
Progress Test Configuration and Fixtures

This file contains pytest fixtures shared across progress tests.

To use pytest:
    pip install pytest
    pytest tests/progress/
"""

import itertools
import tempfile
from pathlib import Path

import pytest

from core.constants import ShotType
from progress import ProgressAnalytics, ScoreRecord
from progress.implementations.memory_history import InMemoryScoreHistory
from progress.implementations.sqlite_history import SqliteScoreHistory

# =============================================================================
# HISTORY FIXTURES
# =============================================================================


@pytest.fixture
def memory_history():
    """
    Provide a fresh InMemoryScoreHistory for each test.
    """
    history = InMemoryScoreHistory()
    history.initialize()
    yield history
    history.cleanup()


@pytest.fixture
def temp_history_dir():
    """
    Provide a temporary directory for the history database.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sqlite_history(temp_history_dir):
    """
    Provide an initialized SqliteScoreHistory in a temp directory.
    """
    history = SqliteScoreHistory(temp_history_dir / "score_history.db")
    history.initialize()
    yield history
    history.cleanup()


# =============================================================================
# ANALYTICS FIXTURES
# =============================================================================


@pytest.fixture
def analytics(memory_history):
    """
    Provide ProgressAnalytics over the in-memory history.

    Usage:
        def test_record(analytics, make_record):
            analytics.record(make_record(80))
    """
    controller = ProgressAnalytics(memory_history)
    yield controller
    controller.cleanup()


# =============================================================================
# HELPER FIXTURES
# =============================================================================


@pytest.fixture
def make_record():
    """
    Factory for ScoreRecords with increasing timestamps.

    Usage:
        def test_something(make_record):
            record = make_record(85, shot_type=ShotType.VOLEA, posture=70)
    """
    clock = itertools.count(1_700_000_000_000, 60_000)

    def _make(
        overall_score: int,
        shot_type: ShotType = ShotType.DERECHA,
        user_id: str = "player-1",
        **sub_scores,
    ) -> ScoreRecord:
        return ScoreRecord(
            user_id=user_id,
            shot_type=shot_type,
            overall_score=overall_score,
            created_at_epoch_ms=next(clock),
            **sub_scores,
        )

    return _make


@pytest.fixture
def record_series(analytics, make_record):
    """
    Record a list of overall scores for one series and return the stored records.

    Usage:
        def test_trend(record_series):
            records = record_series([70, 80, 90])
    """
    def _record(scores, shot_type: ShotType = ShotType.DERECHA, user_id: str = "player-1"):
        return [
            analytics.record(make_record(score, shot_type=shot_type, user_id=user_id))
            for score in scores
        ]

    return _record


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """
    Configure pytest with custom markers.

    Same markers across all test packages for consistency.
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "unit_integration: Unit integration tests")
    config.addinivalue_line("markers", "integration: Full integration tests")
    config.addinivalue_line("markers", "slow: Slow tests (use sparingly)")
